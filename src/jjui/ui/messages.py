"""Messages exchanged with the UI event loop.

A message is any object posted into the Program's queue. The scheduling
messages (BatchMsg, SequenceMsg, ExecMsg) are interpreted by the Program
itself and never reach the model.
"""

from collections.abc import Callable
from dataclasses import dataclass

from jjui.core.process import ExecCommand

Msg = object
Cmd = Callable[[], Msg | None]


@dataclass(frozen=True)
class CommandRunningMsg:
    """A command has started; carries its display form."""

    display: str


@dataclass(frozen=True)
class CommandCompletedMsg:
    """The single completion event of one invocation."""

    output: str = ""
    error: Exception | None = None


@dataclass(frozen=True)
class ShowDiffMsg:
    """Raw output to open in the diff view."""

    content: str


@dataclass(frozen=True)
class RefreshMsg:
    """Reload revisions and redraw."""


@dataclass(frozen=True)
class QuitMsg:
    """Stop the event loop."""


@dataclass(frozen=True)
class BatchMsg:
    """Run the commands concurrently, in no particular order."""

    cmds: tuple[Cmd, ...]


@dataclass(frozen=True)
class SequenceMsg:
    """Run the commands one after another, each finishing before the next starts."""

    cmds: tuple[Cmd, ...]


@dataclass(frozen=True)
class ExecMsg:
    """Hand the terminal to a process, then post callback(error)."""

    process: ExecCommand
    callback: Callable[[Exception | None], Msg | None]
