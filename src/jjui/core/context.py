"""Dispatch context with dependency injection."""

from dataclasses import dataclass, replace
from pathlib import Path

from jjui.core.clipboard import Clipboard, RealClipboard
from jjui.core.command_runner.abc import CommandRunner
from jjui.core.command_runner.real import RealCommandRunner
from jjui.core.selection import SelectedItem, create_replacements
from jjui.core.shell import RealShell, Shell


@dataclass(frozen=True)
class MainContext:
    """Immutable context holding the collaborators of command dispatch.

    Created by the UI and threaded into every command. The selection changes
    as the user moves around; use with_selection() to derive a new context.
    """

    command_runner: CommandRunner
    shell: Shell
    clipboard: Clipboard
    location: Path  # Repository the commands run in
    selected_item: SelectedItem = None

    def create_replacements(self) -> dict[str, str]:
        """Placeholder mapping for the current selection, built fresh per call."""
        return create_replacements(self.selected_item)

    def with_selection(self, item: SelectedItem) -> "MainContext":
        return replace(self, selected_item=item)

    @staticmethod
    def for_test(
        command_runner: CommandRunner | None = None,
        shell: Shell | None = None,
        clipboard: Clipboard | None = None,
        location: Path | None = None,
        selected_item: SelectedItem = None,
    ) -> "MainContext":
        """Create test context with fake collaborators for anything unspecified.

        Example:
            >>> runner = FakeCommandRunner()
            >>> ctx = MainContext.for_test(command_runner=runner)
        """
        from tests.fakes.clipboard import FakeClipboard
        from tests.fakes.shell import FakeShell

        from jjui.core.command_runner.fake import FakeCommandRunner

        return MainContext(
            command_runner=command_runner if command_runner is not None else FakeCommandRunner(),
            shell=shell if shell is not None else FakeShell(),
            clipboard=clipboard if clipboard is not None else FakeClipboard(),
            location=location if location is not None else Path("/test/repo"),
            selected_item=selected_item,
        )


def create_context(location: Path) -> MainContext:
    """Create production context with real implementations.

    Args:
        location: Repository directory the commands run in

    Returns:
        MainContext with nothing selected
    """
    shell = RealShell()
    return MainContext(
        command_runner=RealCommandRunner(location, shell),
        shell=shell,
        clipboard=RealClipboard(),
        location=location,
    )
