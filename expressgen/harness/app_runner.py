"""
AppRunner — start and stop a generated application as a child process.

Lifecycle:

    idle -> starting -> running -> stopping -> idle
                 \\-> failed -> (stop) -> idle

start() returns only once the app accepts TCP connections on host:port (or
prints the optional readiness marker) and never spawns a second child while
one is alive. stop() returns only after the child has exited: SIGTERM to the
child's process group, a bounded grace period, then SIGKILL.

The port is configuration the caller already knows (the generated app reads
PORT); the runner passes it to the child and probes it, nothing more.
"""
from __future__ import annotations

import asyncio
import enum
import logging
import os
import re
import signal
from pathlib import Path
from typing import Mapping, Optional, Sequence

import httpx

from .context import child_environment
from .process_runner import LaunchError

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = ("npm", "start")
_READ_CHUNK = 4096


class RunnerState(str, enum.Enum):
    IDLE = "idle"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"
    FAILED = "failed"


class RunnerStateError(RuntimeError):
    """Operation not allowed in the runner's current state."""


class AppStartError(RuntimeError):
    """The app did not become ready; its process has already been cleaned up."""

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


class ReadinessTimeoutError(AppStartError):
    pass


class PortInUseError(AppStartError):
    """Something already accepts connections on host:port; nothing was spawned."""


class AppExitedError(AppStartError):
    def __init__(self, returncode: int, output: str = "") -> None:
        super().__init__(f"Unexpected app exit with code {returncode}", output)
        self.returncode = returncode


class AppRunner:
    """
    Owns at most one child server process.

    Usage:
        async with AppRunner(app_dir, port=3000) as app:
            response = await app.request("GET", "/")
    """

    def __init__(
        self,
        app_dir: str | Path,
        *,
        command: Sequence[str] = DEFAULT_COMMAND,
        host: str = "127.0.0.1",
        port: int = 3000,
        env: Optional[Mapping[str, str]] = None,
        ready_pattern: Optional[str] = None,
        start_timeout: float = 10.0,
        grace_period: float = 5.0,
        probe_interval: float = 0.05,
        max_probe_interval: float = 0.5,
    ) -> None:
        self.app_dir = Path(app_dir)
        self.command = list(command)
        self.host = host
        self.port = port
        self._env_overrides = dict(env or {})
        self._ready_re = re.compile(ready_pattern) if ready_pattern else None
        self.start_timeout = start_timeout
        self.grace_period = grace_period
        self.probe_interval = probe_interval
        self.max_probe_interval = max_probe_interval

        self._state = RunnerState.IDLE
        self._proc: Optional[asyncio.subprocess.Process] = None
        self._readers: list[asyncio.Task] = []
        self._chunks: list[str] = []
        self._marker_seen = asyncio.Event()
        self._stop_lock = asyncio.Lock()

    # ── Introspection ─────────────────────────────────────────────────────────

    @property
    def state(self) -> RunnerState:
        return self._state

    @property
    def pid(self) -> Optional[int]:
        return self._proc.pid if self._proc is not None else None

    @property
    def returncode(self) -> Optional[int]:
        return self._proc.returncode if self._proc is not None else None

    @property
    def output(self) -> str:
        """Everything the child wrote to stdout and stderr so far."""
        return "".join(self._chunks)

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def address(self) -> tuple[str, int]:
        return self.host, self.port

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    async def start(self, timeout: Optional[float] = None) -> None:
        """
        Spawn the app and wait until it is ready.

        Raises
        ------
        RunnerStateError       — not idle (nothing is spawned)
        PortInUseError         — host:port already accepts connections (nothing spawned)
        LaunchError            — the command could not be executed
        ReadinessTimeoutError  — not ready within *timeout*; child terminated
        AppExitedError         — child exited before becoming ready
        """
        if self._state is not RunnerState.IDLE:
            raise RunnerStateError(f"cannot start: runner is {self._state.value}")
        if await self._probe():
            # Readiness only counts a listener owned by our child.
            raise PortInUseError(f"port {self.port} on {self.host} is already in use")
        timeout = self.start_timeout if timeout is None else timeout

        self._state = RunnerState.STARTING
        self._chunks = []
        self._marker_seen.clear()

        env = child_environment()
        env["PORT"] = str(self.port)
        env.update(self._env_overrides)

        try:
            self._proc = await asyncio.create_subprocess_exec(
                *self.command,
                cwd=str(self.app_dir),
                env=env,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=(os.name == "posix"),
            )
        except OSError as exc:
            self._state = RunnerState.IDLE
            raise LaunchError(self.command[0], exc) from exc

        logger.info("Started %s (pid %d) in %s", self.command, self._proc.pid, self.app_dir)
        self._readers = [
            asyncio.create_task(self._read(self._proc.stdout)),
            asyncio.create_task(self._read(self._proc.stderr)),
        ]

        try:
            await asyncio.wait_for(self._wait_ready(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("App not ready after %.1fs; terminating", timeout)
            await self._fail()
            raise ReadinessTimeoutError(
                f"app did not accept connections on {self.host}:{self.port} "
                f"within {timeout:.1f}s",
                self.output,
            ) from None
        except AppStartError as exc:
            await self._fail()
            exc.output = self.output
            raise
        except BaseException:
            await self._fail()
            raise

        self._state = RunnerState.RUNNING
        logger.info("App ready on %s", self.base_url)

    async def stop(self) -> None:
        """
        Stop the app and wait for its process to exit. No-op when idle.

        Teardown problems are logged, never raised.
        """
        async with self._stop_lock:
            if self._state is RunnerState.IDLE:
                return
            if self._state is RunnerState.STARTING:
                raise RunnerStateError("cannot stop: start() is still in progress")
            self._state = RunnerState.STOPPING
            try:
                await self._terminate()
            finally:
                self._state = RunnerState.IDLE

    async def __aenter__(self) -> "AppRunner":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    # ── HTTP ──────────────────────────────────────────────────────────────────

    async def request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Issue an HTTP request against the running app."""
        if self._state is not RunnerState.RUNNING:
            raise RunnerStateError(f"cannot send request: runner is {self._state.value}")
        async with httpx.AsyncClient(base_url=self.base_url, timeout=5.0) as client:
            return await client.request(method, path, **kwargs)

    # ── Internal helpers ──────────────────────────────────────────────────────

    async def _read(self, stream: Optional[asyncio.StreamReader]) -> None:
        if stream is None:
            return
        while True:
            chunk = await stream.read(_READ_CHUNK)
            if not chunk:
                return
            self._chunks.append(chunk.decode("utf-8", errors="replace"))
            if self._ready_re is not None and self._ready_re.search(self.output):
                self._marker_seen.set()

    async def _wait_ready(self) -> None:
        """Probe host:port with backoff until it connects or the child exits."""
        delay = self.probe_interval
        while True:
            self._raise_if_exited()
            if self._marker_seen.is_set():
                return
            if await self._probe():
                # The port could belong to another process; only our live
                # child counts.
                self._raise_if_exited()
                return
            try:
                await asyncio.wait_for(self._marker_seen.wait(), timeout=delay)
            except asyncio.TimeoutError:
                pass
            delay = min(delay * 2, self.max_probe_interval)

    async def _probe(self) -> bool:
        try:
            _reader, writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port), timeout=1.0
            )
        except (OSError, asyncio.TimeoutError):
            return False
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass
        return True

    def _raise_if_exited(self) -> None:
        assert self._proc is not None
        if self._proc.returncode is not None:
            raise AppExitedError(self._proc.returncode, self.output)

    async def _fail(self) -> None:
        self._state = RunnerState.FAILED
        await self._terminate()

    async def _terminate(self) -> None:
        """Graceful signal, bounded wait, then SIGKILL; returns once exited."""
        proc = self._proc
        if proc is None:
            return
        if proc.returncode is None:
            self._signal(signal.SIGTERM)
            try:
                await asyncio.wait_for(proc.wait(), timeout=self.grace_period)
            except asyncio.TimeoutError:
                logger.warning(
                    "pid %d still running %.1fs after SIGTERM; killing",
                    proc.pid, self.grace_period,
                )
                self._signal(getattr(signal, "SIGKILL", signal.SIGTERM))
                await proc.wait()
        else:
            # The child is gone but its group may not be.
            self._signal(getattr(signal, "SIGKILL", signal.SIGTERM))

        await self._drain_readers()
        logger.info("pid %d exited with code %s", proc.pid, proc.returncode)

    def _signal(self, sig: int) -> None:
        proc = self._proc
        assert proc is not None
        try:
            if os.name == "posix":
                os.killpg(proc.pid, sig)
            elif proc.returncode is None:
                proc.send_signal(sig)
        except ProcessLookupError:
            pass
        except PermissionError as exc:
            logger.warning("Could not signal pid %d: %s", proc.pid, exc)

    async def _drain_readers(self) -> None:
        if not self._readers:
            return
        done, pending = await asyncio.wait(self._readers, timeout=1.0)
        for task in pending:
            task.cancel()
        for task in done:
            if not task.cancelled() and task.exception() is not None:
                logger.debug("Output reader failed: %s", task.exception())
        self._readers = []
