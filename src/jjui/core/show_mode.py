"""Declared execution strategy of a custom command."""

from enum import StrEnum


class ShowMode(StrEnum):
    """How a custom command's process is run and its output surfaced.

    SILENT: run to completion, then refresh the UI.
    DIFF: capture combined output and open it in the diff view.
    INTERACTIVE: hand the terminal to the process, refresh afterwards.
    INTERACTIVE_NOTIFY: hand over the terminal while mirroring output into a
        buffer, then report the buffered output as a notification.
    NOTIFY: run to completion and report the output, no refresh.
    """

    SILENT = "silent"
    DIFF = "diff"
    INTERACTIVE = "interactive"
    INTERACTIVE_NOTIFY = "interactive_notify"
    NOTIFY = "notify"

    @staticmethod
    def parse(value: str | None) -> "ShowMode":
        """Parse a configured value; missing or empty means SILENT.

        Raises:
            ValueError: If value is not a known mode
        """
        if not value:
            return ShowMode.SILENT
        normalized = value.strip().lower().replace("-", "_")
        try:
            return ShowMode(normalized)
        except ValueError:
            valid = ", ".join(mode.value for mode in ShowMode)
            raise ValueError(f"Unknown show mode '{value}' (expected one of: {valid})") from None
