"""
Shared fixtures: run the generator CLI as a subprocess inside per-scenario
directories.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Iterator, Sequence

import pytest

from expressgen.config import Settings
from expressgen.harness import (
    ProcessResult,
    ScenarioContext,
    run_process,
    strip_colors,
    strip_warnings,
)

REPO_ROOT = Path(__file__).resolve().parents[1]
MATRIX_PATH = Path(__file__).with_name("scenarios.yaml")


def generator_env() -> dict[str, str]:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(REPO_ROOT), env.get("PYTHONPATH", "")) if p
    )
    return env


def run_raw(cwd: Path, args: Sequence[str] = ()) -> ProcessResult:
    """Run ``express *args`` in *cwd*, capturing everything."""
    return run_process(
        sys.executable, ["-m", "expressgen", *args], cwd=cwd, env=generator_env(), timeout=60
    )


def run_clean(cwd: Path, args: Sequence[str] = ()) -> str:
    """
    Run the generator expecting success and no diagnostics beyond
    advisory warnings. Returns stdout.
    """
    result = run_raw(cwd, args)
    assert strip_warnings(result.stderr) == ""
    assert result.returncode == 0
    return strip_colors(result.stdout)


@pytest.fixture(scope="session")
def settings() -> Settings:
    return Settings.from_env()


@pytest.fixture(scope="class")
def make_scenario(tmp_path_factory) -> Iterator[Callable[[str], ScenarioContext]]:
    """Factory for ScenarioContexts that are removed when the class finishes."""
    root = tmp_path_factory.mktemp("expressgen")
    created: list[ScenarioContext] = []

    def _make(name: str) -> ScenarioContext:
        ctx = ScenarioContext.create(root, name)
        created.append(ctx)
        return ctx

    yield _make
    for ctx in created:
        ctx.cleanup()
