"""Production CommandRunner using subprocess."""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from jjui.core.command_runner.abc import JJ_BINARY, CommandRunner, StreamingCommand, jj_display
from jjui.core.completion import completion_message
from jjui.core.process import ExecutionOutcome, ImmediateProcess, InteractiveProcess, spawn_error
from jjui.core.shell import Shell
from jjui.ui.commands import exec_process, sequence
from jjui.ui.messages import Cmd

logger = logging.getLogger(__name__)

# Non-interactive shell strings always go through a POSIX shell.
NON_INTERACTIVE_SHELL = "sh"


class RealCommandRunner(CommandRunner):
    """Runs jj and shell commands in the repository at location."""

    def __init__(self, location: Path, shell: Shell, jj_binary: str = JJ_BINARY) -> None:
        self._location = location
        self._shell = shell
        self._jj_binary = jj_binary

    def run_command_immediate(self, args: Sequence[str]) -> ExecutionOutcome:
        process = ImmediateProcess(self._jj_binary, args, cwd=self._location)
        return process.execute()

    def run_command_streaming(self, args: Sequence[str]) -> StreamingCommand:
        return self._stream([self._jj_binary, *args])

    def run_interactive_command(self, args: Sequence[str], continuation: Cmd | None) -> Cmd:
        display = jj_display(args)
        process = InteractiveProcess(self._jj_binary, args, cwd=self._location)
        return self._interactive(process, display, continuation)

    def run_shell_command_immediate(self, shell_cmd: str) -> ExecutionOutcome:
        process = ImmediateProcess(NON_INTERACTIVE_SHELL, ["-c", shell_cmd], cwd=self._location)
        return process.execute()

    def run_shell_command_streaming(self, shell_cmd: str) -> StreamingCommand:
        return self._stream([NON_INTERACTIVE_SHELL, "-c", shell_cmd])

    def run_interactive_shell_command(self, shell_cmd: str, continuation: Cmd | None) -> Cmd:
        program = self._shell.get_interactive_shell()
        process = InteractiveProcess(program, ["-c", shell_cmd], cwd=self._location)
        return self._interactive(process, shell_cmd, continuation)

    def _interactive(
        self, process: InteractiveProcess, display: str, continuation: Cmd | None
    ) -> Cmd:
        handoff = exec_process(
            process, lambda error: completion_message(display, "", "", error)
        )
        cmd = sequence(handoff, continuation)
        return cmd if cmd is not None else handoff

    def _stream(self, cmd: list[str]) -> StreamingCommand:
        logger.debug("streaming %s in %s", cmd, self._location)
        try:
            process = subprocess.Popen(
                cmd,
                cwd=self._location,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            raise spawn_error(cmd, e) from e

        assert process.stdout is not None
        return StreamingCommand(reader=process.stdout, err_pipe=process.stderr, process=process)
