"""Model that runs one custom command and renders its messages."""

import logging

from rich.console import Console
from rich.syntax import Syntax

from jjui.core.context import MainContext
from jjui.core.custom_command import CustomRunCommand
from jjui.core.placeholders import CHANGE_ID_PLACEHOLDER
from jjui.ui.diff import DiffView
from jjui.ui.messages import (
    Cmd,
    CommandCompletedMsg,
    CommandRunningMsg,
    Msg,
    RefreshMsg,
    ShowDiffMsg,
)
from jjui.ui.program import Model

logger = logging.getLogger(__name__)


class CommandApp(Model):
    """Dispatches a single custom command and prints what comes back.

    Args:
        copy_diff: Copy diff output to the clipboard once it is shown

    Attributes:
        messages: Every message received, in arrival order
        failed: Whether any completion carried an error
    """

    def __init__(
        self,
        command: CustomRunCommand,
        ctx: MainContext,
        console: Console,
        *,
        copy_diff: bool = False,
    ) -> None:
        self._command = command
        self._ctx = ctx
        self._console = console
        self._copy_diff = copy_diff
        self.messages: list[Msg] = []
        self.failed = False

    def init(self) -> Cmd | None:
        return self._command.prepare(self._ctx)

    def update(self, msg: Msg) -> Cmd | None:
        self.messages.append(msg)
        match msg:
            case CommandRunningMsg(display=display):
                self._console.print(f"running: {display}", style="dim", highlight=False)
            case CommandCompletedMsg(output=output, error=None):
                self._console.print(output, highlight=False)
            case CommandCompletedMsg(output=output, error=error):
                self.failed = True
                if output:
                    self._console.print(output, highlight=False)
                self._console.print(str(error), style="red", highlight=False)
            case ShowDiffMsg(content=content):
                revision = self._selected_change_id()
                view = DiffView(content, self._ctx, revision)
                self._console.print(Syntax(view.content, "diff", background_color="default"))
                if self._copy_diff:
                    return view.copy_to_clipboard()
            case RefreshMsg():
                logger.debug("refresh requested after %s", self._command.name)
        return None

    def _selected_change_id(self) -> str:
        return self._ctx.create_replacements().get(CHANGE_ID_PLACEHOLDER, "")
