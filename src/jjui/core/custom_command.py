"""User-defined commands bound to keys.

A custom command is either a jj argument vector or a shell string, plus a
ShowMode deciding how its process runs. prepare() turns it into a single Cmd
for the UI's scheduler.
"""

from dataclasses import dataclass

from jjui.core.command_runner.abc import JJ_BINARY, jj_display
from jjui.core.completion import completion_message
from jjui.core.context import MainContext
from jjui.core.placeholders import (
    CHANGE_ID_PLACEHOLDER,
    COMMIT_ID_PLACEHOLDER,
    FILE_PLACEHOLDER,
    OPERATION_ID_PLACEHOLDER,
    contains_placeholder,
    templated_args,
    templated_shell,
)
from jjui.core.process import CapturingProcess, ExecutionOutcome
from jjui.core.selection import SelectedFile, SelectedItem, SelectedOperation, SelectedRevision
from jjui.core.show_mode import ShowMode
from jjui.ui.commands import command_running, exec_process, exec_program, refresh, sequence
from jjui.ui.messages import Cmd, CommandCompletedMsg, Msg, ShowDiffMsg


@dataclass(frozen=True)
class CustomRunCommand:
    """A custom command loaded from configuration.

    Exactly one of args and shell is populated; the configuration loader
    rejects anything else.
    """

    name: str
    key: tuple[str, ...] = ()
    args: tuple[str, ...] = ()
    shell: str = ""
    show: ShowMode = ShowMode.SILENT

    @property
    def is_shell(self) -> bool:
        return self.shell != ""

    def _templates(self) -> list[str]:
        if self.is_shell:
            return [self.shell]
        return list(self.args)

    def is_applicable_to(self, item: SelectedItem) -> bool:
        """Whether the command can run against the selected item.

        A command that references no placeholder runs anywhere. Otherwise the
        selection must be able to supply one of the tokens it uses.
        """
        templates = self._templates()
        has_change_id = contains_placeholder(templates, CHANGE_ID_PLACEHOLDER)
        has_commit_id = contains_placeholder(templates, COMMIT_ID_PLACEHOLDER)
        has_file = contains_placeholder(templates, FILE_PLACEHOLDER)
        has_operation_id = contains_placeholder(templates, OPERATION_ID_PLACEHOLDER)

        if not (has_change_id or has_commit_id or has_file or has_operation_id):
            return True

        match item:
            case SelectedRevision():
                return has_change_id or has_commit_id
            case SelectedFile():
                return has_file
            case SelectedOperation():
                return has_operation_id
            case None:
                return False

    def description(self, ctx: MainContext) -> str:
        """Display form of the command for the current selection."""
        replacements = ctx.create_replacements()
        if self.is_shell:
            return templated_shell(self.shell, replacements)
        return jj_display(templated_args(self.args, replacements))

    def prepare(self, ctx: MainContext) -> Cmd | None:
        """Build the scheduled work for the configured show mode."""
        if self.is_shell:
            return self._prepare_shell(ctx)
        return self._prepare_args(ctx)

    def _prepare_shell(self, ctx: MainContext) -> Cmd | None:
        replacements = ctx.create_replacements()
        shell_cmd = templated_shell(self.shell, replacements)
        runner = ctx.command_runner

        match self.show:
            case ShowMode.DIFF:
                return lambda: _diff_message(runner.run_shell_command_immediate(shell_cmd))
            case ShowMode.INTERACTIVE:
                program = ctx.shell.get_interactive_shell()
                return sequence(
                    exec_program(
                        program,
                        ["-c", shell_cmd],
                        cwd=ctx.location,
                        env=replacements,
                        display=shell_cmd,
                    ),
                    refresh,
                )
            case ShowMode.INTERACTIVE_NOTIFY:
                program = ctx.shell.get_interactive_shell()
                process = CapturingProcess(
                    program, ["-c", shell_cmd], cwd=ctx.location, env=replacements
                )
                return _capture_and_notify(process, shell_cmd)
            case ShowMode.NOTIFY:
                return runner.run_shell_command(shell_cmd)
            case ShowMode.SILENT:
                return runner.run_shell_command(shell_cmd, refresh)

    def _prepare_args(self, ctx: MainContext) -> Cmd | None:
        replacements = ctx.create_replacements()
        args = templated_args(self.args, replacements)
        runner = ctx.command_runner

        match self.show:
            case ShowMode.DIFF:
                return lambda: _diff_message(runner.run_command_immediate(args))
            case ShowMode.INTERACTIVE:
                return runner.run_interactive_command(args, refresh)
            case ShowMode.INTERACTIVE_NOTIFY:
                process = CapturingProcess(JJ_BINARY, args, cwd=ctx.location, env=replacements)
                return _capture_and_notify(process, jj_display(args))
            case ShowMode.NOTIFY:
                return runner.run_command(args)
            case ShowMode.SILENT:
                return runner.run_command(args, refresh)


def _diff_message(outcome: ExecutionOutcome) -> Msg:
    output = outcome.combined
    if outcome.error is not None and not output.strip():
        return CommandCompletedMsg(output="", error=outcome.error)
    return ShowDiffMsg(output)


def _capture_and_notify(process: CapturingProcess, display: str) -> Cmd | None:
    """Run process with the terminal, then report its buffered output."""

    def _on_exit(error: Exception | None) -> CommandCompletedMsg:
        return completion_message(
            display, process.captured_stdout, process.captured_stderr, error
        )

    return sequence(command_running(display), exec_process(process, _on_exit))
