"""Abstract interface for running jj and shell commands.

Architecture:
- CommandRunner: Abstract base class defining the interface
- RealCommandRunner: Production implementation using subprocess
- FakeCommandRunner: Recording/replaying double for tests
"""

import subprocess
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import IO

from jjui.core.completion import completion_message
from jjui.core.process import ExecutionOutcome
from jjui.ui.commands import command_running, sequence
from jjui.ui.messages import Cmd, CommandCompletedMsg

JJ_BINARY = "jj"


def jj_display(args: Sequence[str]) -> str:
    """Display form of a jj invocation, e.g. ``jj log -r abc``."""
    return " ".join([JJ_BINARY, *args])


@dataclass
class StreamingCommand:
    """Output stream of a command that is still running.

    Attributes:
        reader: Stream of the command's stdout
        err_pipe: Stream of the command's stderr, if piped separately
        process: The underlying process, waited for on close()
    """

    reader: IO[bytes]
    err_pipe: IO[bytes] | None = None
    process: subprocess.Popen[bytes] | None = None

    def close(self) -> int | None:
        """Close the streams and wait for the process.

        Returns:
            Exit status of the process, or None when there is no process
        """
        self.reader.close()
        if self.err_pipe is not None:
            self.err_pipe.close()
        if self.process is None:
            return None
        return self.process.wait()

    def __enter__(self) -> "StreamingCommand":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class CommandRunner(ABC):
    """Abstract interface for executing commands on behalf of the UI.

    The immediate and streaming methods block and must only be called from a
    scheduled Cmd. The run_* methods return a Cmd and never block.
    """

    @abstractmethod
    def run_command_immediate(self, args: Sequence[str]) -> ExecutionOutcome:
        """Run ``jj <args>`` to completion and return its captured outcome."""
        ...

    @abstractmethod
    def run_command_streaming(self, args: Sequence[str]) -> StreamingCommand:
        """Start ``jj <args>`` and return its output stream.

        Raises:
            SpawnError: If the process could not be started
        """
        ...

    @abstractmethod
    def run_interactive_command(self, args: Sequence[str], continuation: Cmd | None) -> Cmd:
        """Hand the terminal to ``jj <args>``, then run continuation."""
        ...

    @abstractmethod
    def run_shell_command_immediate(self, shell_cmd: str) -> ExecutionOutcome:
        """Run a shell string to completion and return its captured outcome."""
        ...

    @abstractmethod
    def run_shell_command_streaming(self, shell_cmd: str) -> StreamingCommand:
        """Start a shell string and return its output stream."""
        ...

    @abstractmethod
    def run_interactive_shell_command(self, shell_cmd: str, continuation: Cmd | None) -> Cmd:
        """Hand the terminal to the interactive shell running shell_cmd."""
        ...

    def run_command(self, args: Sequence[str], *continuations: Cmd | None) -> Cmd:
        """Schedule ``jj <args>`` and report its completion.

        Posts CommandRunningMsg, then CommandCompletedMsg, then runs the
        continuations in order.
        """
        args = list(args)
        display = jj_display(args)

        def _run() -> CommandCompletedMsg:
            outcome = self.run_command_immediate(args)
            return completion_message(display, outcome.stdout, outcome.stderr, outcome.error)

        return _sequence(command_running(display), _run, *continuations)

    def run_shell_command(self, shell_cmd: str, *continuations: Cmd | None) -> Cmd:
        """Schedule a shell string and report its completion."""

        def _run() -> CommandCompletedMsg:
            outcome = self.run_shell_command_immediate(shell_cmd)
            return completion_message(shell_cmd, outcome.stdout, outcome.stderr, outcome.error)

        return _sequence(command_running(shell_cmd), _run, *continuations)


def _sequence(*cmds: Cmd | None) -> Cmd:
    cmd = sequence(*cmds)
    if cmd is None:
        raise ValueError("sequence requires at least one command")
    return cmd
