"""
Scenario context and generator-output helpers.

Each test scenario owns one ScenarioContext: a working directory plus what
the generator reported. The directory is created by ``create`` and removed by
``cleanup``; nothing is shared between scenarios.
"""
from __future__ import annotations

import logging
import os
import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .process_runner import ProcessResult

logger = logging.getLogger(__name__)

_CREATE_RE = re.compile(r"create.*?: (.*)$")
_WARNINGS_RE = re.compile(r"\n(?:  warning: [^\n]+\n)+\n")
_COLOR_RE = re.compile(r"\x1b\[(\d+)m")


@dataclass
class ScenarioContext:
    dir: Path
    files: list[str] = field(default_factory=list)
    stdout: str = ""
    stderr: str = ""

    @classmethod
    def create(cls, root: str | Path, name: str) -> "ScenarioContext":
        """Create the scenario directory ``root/name`` (``<`` and ``>`` removed)."""
        path = Path(root) / re.sub(r"[<>]", "", name)
        path.mkdir(parents=True, exist_ok=True)
        return cls(dir=path)

    def record(self, result: "ProcessResult") -> list[str]:
        """Store a generator run's output and return the files it created."""
        self.stdout = result.stdout
        self.stderr = result.stderr
        self.files = parse_created_files(strip_colors(result.stdout), self.dir)
        return self.files

    def cleanup(self) -> None:
        """Remove the scenario directory; a missing directory is fine."""
        try:
            shutil.rmtree(self.dir)
        except FileNotFoundError:
            logger.debug("Scenario dir already gone: %s", self.dir)


def parse_created_files(output: str, base: str | Path | None = None) -> list[str]:
    """
    Extract the paths of ``create : <path>`` lines, relative to *base*.

    Directory entries lose their trailing slash; separators are ``/``.
    """
    files = []
    for line in re.split(r"[\r\n]+", output):
        match = _CREATE_RE.search(line)
        if not match:
            continue
        file = match.group(1)
        if base is not None:
            resolved = os.path.normpath(os.path.join(os.path.abspath(base), file))
            file = os.path.relpath(resolved, os.path.abspath(base))
        else:
            file = os.path.normpath(file)
        files.append(file.replace("\\", "/"))
    return files


def strip_warnings(text: str) -> str:
    """Drop ``  warning: ...`` advisory blocks from generator stderr."""
    return _WARNINGS_RE.sub("", text)


def strip_colors(text: str) -> str:
    """Make ANSI color codes visible as ``_color_N_`` markers."""
    return _COLOR_RE.sub(r"_color_\1_", text)


def child_environment() -> dict[str, str]:
    """Copy of the current environment without npm's ``npm_*`` variables."""
    return {k: v for k, v in os.environ.items() if not k.startswith("npm_")}
