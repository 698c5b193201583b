"""Harness for driving the generator and the apps it produces."""

from .app_runner import (
    AppExitedError,
    AppRunner,
    AppStartError,
    PortInUseError,
    ReadinessTimeoutError,
    RunnerState,
    RunnerStateError,
)
from .context import (
    ScenarioContext,
    child_environment,
    parse_created_files,
    strip_colors,
    strip_warnings,
)
from .matrix import Scenario, load_matrix
from .process_runner import InstallError, LaunchError, ProcessResult, npm_install, run_process

__all__ = [
    "AppExitedError", "AppRunner", "AppStartError", "PortInUseError", "ReadinessTimeoutError",
    "RunnerState", "RunnerStateError",
    "ScenarioContext", "child_environment", "parse_created_files",
    "strip_colors", "strip_warnings",
    "Scenario", "load_matrix",
    "InstallError", "LaunchError", "ProcessResult", "npm_install", "run_process",
]
