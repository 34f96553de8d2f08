"""Process lifecycles behind a single terminal-exec contract.

Three implementations share the ExecCommand interface so the Program can hand
any of them the terminal without knowing which lifecycle it runs:

- ImmediateProcess: pipes both streams, waits, keeps an ExecutionOutcome
- InteractiveProcess: child stdio attached directly to the terminal streams
- CapturingProcess: like InteractiveProcess, but stdout/stderr are tee'd into
  internal buffers while still being written to the terminal
"""

import io
import logging
import os
import subprocess
import threading
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from jjui.core.errors import CommandError, NonZeroExitError, SpawnError
from jjui.core.placeholders import replacements_as_env

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 4096


@dataclass(frozen=True)
class ExecutionOutcome:
    """Captured result of one finished process."""

    stdout: str
    stderr: str
    error: CommandError | None = None

    @property
    def combined(self) -> str:
        """Raw stdout followed by raw stderr, untrimmed."""
        return self.stdout + self.stderr


def format_command(cmd: Sequence[str]) -> str:
    return " ".join(str(arg) for arg in cmd)


def spawn_error(cmd: Sequence[str], cause: OSError) -> SpawnError:
    """Build the error for a process that could not be started.

    The cause only names the program when the program itself is missing or
    not executable; anything else (a missing working directory, say) is
    reported with its own reason.
    """
    if cause.filename is not None and str(cause.filename) != cmd[0]:
        message = f"Failed to start {cmd[0]}: {cause}"
        message += f"\nFull command: {format_command(cmd)}"
        return SpawnError(message, cmd)

    message = f"Command not found or not executable: {cmd[0]}"
    message += f"\nFull command: {format_command(cmd)}"
    if not isinstance(cause, FileNotFoundError):
        message += f"\nReason: {cause}"
    return SpawnError(message, cmd)


def exit_error(cmd: Sequence[str], returncode: int, stderr: str = "") -> NonZeroExitError:
    """Build the error for a process that exited with a failure status."""
    message = f"Command failed: {format_command(cmd)}"
    message += f"\nExit code: {returncode}"
    stderr_stripped = stderr.strip()
    if stderr_stripped:
        message += f"\nstderr: {stderr_stripped}"
    return NonZeroExitError(message, cmd, returncode)


def child_environment(replacements: Mapping[str, str] | None) -> dict[str, str] | None:
    """Inherited environment plus replacement entries as NAME=value pairs.

    Returns None when there is nothing to add, letting the child inherit as-is.
    """
    if not replacements:
        return None
    env = dict(os.environ)
    env.update(replacements_as_env(replacements))
    return env


class TeeWriter:
    """Writes every chunk to all of its sinks, in order."""

    def __init__(self, *writers: IO[bytes]) -> None:
        self._writers = writers

    def write(self, data: bytes) -> int:
        for writer in self._writers:
            writer.write(data)
            writer.flush()
        return len(data)


class ExecCommand(ABC):
    """A process the Program can hand the terminal to.

    The Program assigns the terminal streams through the setters before calling
    run(). run() blocks until the process exits and raises CommandError on
    spawn failure or non-zero exit.
    """

    def __init__(self) -> None:
        self._stdin: IO[bytes] | None = None
        self._stdout: IO[bytes] | None = None
        self._stderr: IO[bytes] | None = None

    def set_stdin(self, stream: IO[bytes] | None) -> None:
        self._stdin = stream

    def set_stdout(self, stream: IO[bytes] | None) -> None:
        self._stdout = stream

    def set_stderr(self, stream: IO[bytes] | None) -> None:
        self._stderr = stream

    @abstractmethod
    def run(self) -> None:
        """Run the process to completion.

        Raises:
            SpawnError: If the process could not be started
            NonZeroExitError: If the process exited with a failure status
        """
        ...


class ImmediateProcess(ExecCommand):
    """Spawns with piped output and waits for completion.

    Used by the non-interactive paths, which already run off the event loop.
    Captured bytes are forwarded to the stdout/stderr sinks after exit when
    sinks are assigned.
    """

    def __init__(
        self,
        program: str,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__()
        self.program = program
        self.args = list(args)
        self.cwd = cwd
        self.env = env
        self.outcome: ExecutionOutcome | None = None

    @property
    def cmd(self) -> list[str]:
        return [self.program, *self.args]

    def execute(self) -> ExecutionOutcome:
        """Run the process and return its outcome without raising."""
        logger.debug("running %s in %s", self.cmd, self.cwd)
        try:
            result = subprocess.run(
                self.cmd,
                cwd=self.cwd,
                env=child_environment(self.env),
                stdin=self._stdin if self._stdin is not None else subprocess.DEVNULL,
                capture_output=True,
                check=False,
            )
        except OSError as e:
            self.outcome = ExecutionOutcome(stdout="", stderr="", error=spawn_error(self.cmd, e))
            return self.outcome

        stdout = result.stdout.decode("utf-8", errors="replace")
        stderr = result.stderr.decode("utf-8", errors="replace")
        logger.debug("%s exited with %d", self.cmd, result.returncode)

        if self._stdout is not None and result.stdout:
            self._stdout.write(result.stdout)
            self._stdout.flush()
        if self._stderr is not None and result.stderr:
            self._stderr.write(result.stderr)
            self._stderr.flush()

        error: CommandError | None = None
        if result.returncode != 0:
            error = exit_error(self.cmd, result.returncode, stderr)
        self.outcome = ExecutionOutcome(stdout=stdout, stderr=stderr, error=error)
        return self.outcome

    def run(self) -> None:
        outcome = self.execute()
        if outcome.error is not None:
            raise outcome.error


class InteractiveProcess(ExecCommand):
    """Child owns the terminal for its whole lifetime; nothing is captured."""

    def __init__(
        self,
        program: str,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__()
        self.program = program
        self.args = list(args)
        self.cwd = cwd
        self.env = env

    @property
    def cmd(self) -> list[str]:
        return [self.program, *self.args]

    def run(self) -> None:
        logger.debug("handing terminal to %s in %s", self.cmd, self.cwd)
        try:
            result = subprocess.run(
                self.cmd,
                cwd=self.cwd,
                env=child_environment(self.env),
                stdin=self._stdin,
                stdout=self._stdout,
                stderr=self._stderr,
                check=False,
            )
        except OSError as e:
            raise spawn_error(self.cmd, e) from e

        logger.debug("%s exited with %d", self.cmd, result.returncode)
        if result.returncode != 0:
            raise exit_error(self.cmd, result.returncode)


class CapturingProcess(ExecCommand):
    """Interactive process whose output is also mirrored into buffers.

    The user sees live output on the terminal while the buffers keep a copy for
    the completion notification. The replacement mapping is exported to the
    child as environment variables.
    """

    def __init__(
        self,
        program: str,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__()
        self.program = program
        self.args = list(args)
        self.cwd = cwd
        self.env = env
        self._out_buf = io.BytesIO()
        self._err_buf = io.BytesIO()

    @property
    def cmd(self) -> list[str]:
        return [self.program, *self.args]

    @property
    def captured_stdout(self) -> str:
        return self._out_buf.getvalue().decode("utf-8", errors="replace")

    @property
    def captured_stderr(self) -> str:
        return self._err_buf.getvalue().decode("utf-8", errors="replace")

    def run(self) -> None:
        stdout_sink = self._tee(self._stdout, self._out_buf)
        stderr_sink = self._tee(self._stderr, self._err_buf)

        logger.debug("handing terminal to %s (capturing) in %s", self.cmd, self.cwd)
        try:
            process = subprocess.Popen(
                self.cmd,
                cwd=self.cwd,
                env=child_environment(self.env),
                stdin=self._stdin,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            raise spawn_error(self.cmd, e) from e

        pumps = [
            threading.Thread(target=_pump, args=(process.stdout, stdout_sink), daemon=True),
            threading.Thread(target=_pump, args=(process.stderr, stderr_sink), daemon=True),
        ]
        for pump in pumps:
            pump.start()

        returncode = process.wait()
        for pump in pumps:
            pump.join()

        logger.debug("%s exited with %d", self.cmd, returncode)
        if returncode != 0:
            raise exit_error(self.cmd, returncode, self.captured_stderr)

    def _tee(self, terminal: IO[bytes] | None, buffer: IO[bytes]) -> TeeWriter:
        if terminal is None:
            return TeeWriter(buffer)
        return TeeWriter(terminal, buffer)


def _pump(pipe: IO[bytes] | None, sink: TeeWriter) -> None:
    if pipe is None:
        return
    with pipe:
        for chunk in iter(lambda: pipe.read1(_CHUNK_SIZE), b""):  # type: ignore[attr-defined]
            sink.write(chunk)
