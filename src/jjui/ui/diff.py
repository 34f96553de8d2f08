"""Diff view content and its copy-to-clipboard action."""

from jjui.core.context import MainContext
from jjui.core.errors import ClipboardError
from jjui.ui.messages import Cmd, CommandCompletedMsg

EMPTY_DIFF = "(empty)"


def diff_git_uncolored(revision: str) -> list[str]:
    """jj arguments printing revision's diff in plain git format."""
    return ["diff", "--git", "--color", "never", "-r", revision]


class DiffView:
    """Output of a diff-mode command, ready for display.

    Args:
        output: Raw output of the command
        ctx: Dispatch context, used to re-run jj for the git-format copy
        revision: Change id the diff belongs to, or "" when unknown
    """

    def __init__(self, output: str, ctx: MainContext, revision: str = "") -> None:
        self.output = output
        self.revision = revision
        self._ctx = ctx

    @property
    def content(self) -> str:
        content = self.output.replace("\r", "")
        if content == "":
            return EMPTY_DIFF
        return content

    def copy_to_clipboard(self) -> Cmd:
        """Copy the diff, in git format when the revision is known."""
        return self._copy

    def _copy(self) -> CommandCompletedMsg:
        if self.revision:
            outcome = self._ctx.command_runner.run_command_immediate(
                diff_git_uncolored(self.revision)
            )
            if outcome.error is not None:
                return CommandCompletedMsg(
                    output="Error running jj diff --git command", error=outcome.error
                )
            text = outcome.stdout
            done = "Copied 'jj diff --git' output to clipboard"
        else:
            text = self.output
            done = "Copied git diff to clipboard"

        try:
            self._ctx.clipboard.write(text)
        except ClipboardError as e:
            return CommandCompletedMsg(error=e)
        return CommandCompletedMsg(output=done)
