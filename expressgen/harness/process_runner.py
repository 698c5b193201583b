"""
Process Runner — run a command to completion and capture its output.

A command that could not be started at all raises LaunchError; a command
that ran and failed is an ordinary ProcessResult with a non-zero returncode.
Callers that need a bound pass ``timeout`` and handle
``subprocess.TimeoutExpired`` themselves.
"""
from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .context import child_environment

logger = logging.getLogger(__name__)


class LaunchError(RuntimeError):
    """The executable could not be started (missing, not executable, ...)."""

    def __init__(self, executable: str, cause: OSError) -> None:
        super().__init__(f"could not launch {executable!r}: {cause.strerror or cause}")
        self.executable = executable
        self.cause = cause


class InstallError(RuntimeError):
    """``npm install`` ran but exited non-zero."""

    def __init__(self, result: "ProcessResult") -> None:
        super().__init__(
            f"npm install failed (exit {result.returncode}): {result.stderr.strip()[:500]}"
        )
        self.result = result


@dataclass(frozen=True)
class ProcessResult:
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_process(
    executable: str,
    args: Sequence[str] = (),
    cwd: Optional[str | Path] = None,
    env: Optional[Mapping[str, str]] = None,
    timeout: Optional[float] = None,
) -> ProcessResult:
    """
    Run ``executable *args`` in *cwd* and wait for it to exit.

    Raises
    ------
    LaunchError                — the process could not be spawned
    subprocess.TimeoutExpired  — *timeout* elapsed (the child is killed)
    """
    argv = [executable, *args]
    logger.debug("Running %s (cwd=%s)", argv, cwd)
    try:
        proc = subprocess.run(
            argv,
            cwd=None if cwd is None else str(cwd),
            env=None if env is None else dict(env),
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except OSError as exc:
        # Includes a missing cwd; either way nothing ran.
        logger.warning("Could not launch %s: %s", executable, exc)
        raise LaunchError(executable, exc) from exc

    logger.debug("%s exited with code %d", executable, proc.returncode)
    return ProcessResult(proc.returncode, proc.stdout or "", proc.stderr or "")


def npm_install(app_dir: str | Path, timeout: Optional[float] = None) -> ProcessResult:
    """
    Install a generated app's dependencies.

    Raises LaunchError when npm is not available and InstallError when it
    exits non-zero.
    """
    npm = "npm.cmd" if os.name == "nt" else "npm"
    result = run_process(npm, ["install"], cwd=app_dir, env=child_environment(), timeout=timeout)
    if not result.ok:
        raise InstallError(result)
    logger.info("npm install completed in %s", app_dir)
    return result
