"""Exception hierarchy for jjui.

Process and clipboard failures never escape the UI loop: they are attached to a
CommandCompletedMsg and rendered for the user. Configuration errors propagate to
the CLI entry point.
"""

from collections.abc import Sequence


class JjuiError(Exception):
    """Base class for all jjui errors."""


class CommandError(JjuiError):
    """A child process could not be run to a successful exit."""

    def __init__(self, message: str, cmd: Sequence[str]) -> None:
        super().__init__(message)
        self.cmd = list(cmd)


class SpawnError(CommandError):
    """The child process could not be started."""


class NonZeroExitError(CommandError):
    """The child process ran and exited with a failure status."""

    def __init__(self, message: str, cmd: Sequence[str], returncode: int) -> None:
        super().__init__(message, cmd)
        self.returncode = returncode


class ClipboardError(JjuiError):
    """Writing to the system clipboard failed."""


class ConfigError(JjuiError):
    """The configuration file is malformed."""


class InvalidCommandError(ConfigError):
    """A custom command definition is invalid."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Invalid custom command '{name}': {reason}")
        self.name = name
        self.reason = reason
