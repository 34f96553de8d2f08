"""Interactive shell lookup.

Reading $SHELL is process-wide ambient state; going through the Shell
abstraction lets tests supply a shell without touching os.environ.
"""

import os
from abc import ABC, abstractmethod

DEFAULT_SHELL = "sh"


class Shell(ABC):
    """Abstract interface for resolving the user's interactive shell."""

    @abstractmethod
    def get_interactive_shell(self) -> str:
        """Return the program used to run shell-form commands interactively."""
        ...


class RealShell(Shell):
    """Production implementation reading the SHELL environment variable."""

    def get_interactive_shell(self) -> str:
        """Return $SHELL, or DEFAULT_SHELL when unset or empty."""
        program = os.environ.get("SHELL", "")
        if not program:
            return DEFAULT_SHELL
        return program
