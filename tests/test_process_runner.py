"""Tests for run_process and npm_install."""
from __future__ import annotations

import subprocess
import sys
from unittest.mock import patch

import pytest

from expressgen.harness import InstallError, LaunchError, ProcessResult, npm_install, run_process


# ─────────────────────────────────────────────────────────────────────────────
# run_process
# ─────────────────────────────────────────────────────────────────────────────

def test_captures_stdout_and_exit_code():
    """stdout and a zero exit code are captured."""
    result = run_process(sys.executable, ["-c", "print('hi')"])
    assert result.ok
    assert result.returncode == 0
    assert result.stdout.strip() == "hi"
    assert result.stderr == ""


def test_nonzero_exit_is_a_result_not_an_error():
    """A failing command is a result, not an exception."""
    result = run_process(
        sys.executable, ["-c", "import sys; sys.stderr.write('bad'); sys.exit(2)"]
    )
    assert not result.ok
    assert result.returncode == 2
    assert result.stderr == "bad"


def test_runs_in_cwd_with_env(tmp_path):
    """cwd and env are passed to the child."""
    result = run_process(
        sys.executable,
        ["-c", "import os; print(os.getcwd()); print(os.environ['EXPRESSGEN_X'])"],
        cwd=tmp_path,
        env={"EXPRESSGEN_X": "42"},
    )
    cwd, value = result.stdout.splitlines()
    assert cwd == str(tmp_path.resolve()) or cwd == str(tmp_path)
    assert value == "42"


def test_stdin_is_closed():
    """The child reads EOF from stdin immediately."""
    result = run_process(sys.executable, ["-c", "import sys; print(repr(sys.stdin.read()))"])
    assert result.stdout.strip() == "''"


def test_missing_executable_raises_launch_error():
    """A missing binary raises LaunchError carrying the OSError."""
    with pytest.raises(LaunchError) as exc_info:
        run_process("expressgen-no-such-binary", ["--help"])
    assert exc_info.value.executable == "expressgen-no-such-binary"
    assert isinstance(exc_info.value.cause, OSError)


def test_missing_cwd_raises_launch_error(tmp_path):
    """A missing working directory raises LaunchError."""
    with pytest.raises(LaunchError):
        run_process(sys.executable, ["-c", "pass"], cwd=tmp_path / "missing")


def test_timeout_propagates():
    """A caller timeout surfaces as TimeoutExpired."""
    with pytest.raises(subprocess.TimeoutExpired):
        run_process(sys.executable, ["-c", "import time; time.sleep(30)"], timeout=0.5)


# ─────────────────────────────────────────────────────────────────────────────
# npm_install
# ─────────────────────────────────────────────────────────────────────────────

def test_npm_install_success(tmp_path):
    """npm_install() runs "npm install" in the app dir without npm_* variables."""
    ok = ProcessResult(0, "added 50 packages", "")
    with patch("expressgen.harness.process_runner.run_process", return_value=ok) as run:
        assert npm_install(tmp_path, timeout=12) is ok
    args, kwargs = run.call_args
    assert args[1] == ["install"]
    assert kwargs["cwd"] == tmp_path
    assert kwargs["timeout"] == 12
    assert not any(k.startswith("npm_") for k in kwargs["env"])


def test_npm_install_failure_raises_install_error(tmp_path):
    """A failing install raises InstallError with the result attached."""
    failed = ProcessResult(1, "", "npm ERR! 404 Not Found")
    with patch("expressgen.harness.process_runner.run_process", return_value=failed):
        with pytest.raises(InstallError, match="404") as exc_info:
            npm_install(tmp_path)
    assert exc_info.value.result is failed
