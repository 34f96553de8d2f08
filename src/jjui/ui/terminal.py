"""The real terminal device, owned by either the renderer or a child process."""

import sys
from abc import ABC, abstractmethod
from typing import IO

# DEC private modes for the alternate screen buffer and cursor visibility.
ENTER_ALT_SCREEN = b"\x1b[?1049h"
EXIT_ALT_SCREEN = b"\x1b[?1049l"
SHOW_CURSOR = b"\x1b[?25h"
HIDE_CURSOR = b"\x1b[?25l"


class Terminal(ABC):
    """Abstract interface for the terminal handed to interactive processes.

    suspend() releases the terminal before a hand-off and resume() takes it
    back afterwards. The Program guarantees the calls are paired and never
    nested.
    """

    @property
    @abstractmethod
    def stdin(self) -> IO[bytes] | None: ...

    @property
    @abstractmethod
    def stdout(self) -> IO[bytes] | None: ...

    @property
    @abstractmethod
    def stderr(self) -> IO[bytes] | None: ...

    @abstractmethod
    def suspend(self) -> None:
        """Stop rendering and restore the terminal for a child process."""
        ...

    @abstractmethod
    def resume(self) -> None:
        """Take the terminal back and resume rendering."""
        ...


class RealTerminal(Terminal):
    """Production implementation over the process's standard streams.

    Args:
        alt_screen: Whether the renderer draws on the alternate screen, which
            must be left while a child process owns the terminal
    """

    def __init__(self, *, alt_screen: bool = False) -> None:
        self._alt_screen = alt_screen

    @property
    def stdin(self) -> IO[bytes] | None:
        return sys.stdin.buffer

    @property
    def stdout(self) -> IO[bytes] | None:
        return sys.stdout.buffer

    @property
    def stderr(self) -> IO[bytes] | None:
        return sys.stderr.buffer

    def suspend(self) -> None:
        sys.stdout.flush()
        if self._alt_screen:
            sys.stdout.buffer.write(EXIT_ALT_SCREEN + SHOW_CURSOR)
        sys.stdout.buffer.flush()

    def resume(self) -> None:
        if self._alt_screen:
            sys.stdout.buffer.write(ENTER_ALT_SCREEN + HIDE_CURSOR)
        sys.stdout.buffer.flush()
