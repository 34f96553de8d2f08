"""System clipboard access through external copy tools."""

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod

from jjui.core.errors import ClipboardError

logger = logging.getLogger(__name__)

# Tried in order; the first one found on PATH wins.
COPY_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
)


class Clipboard(ABC):
    """Abstract interface for writing text to the clipboard."""

    @abstractmethod
    def write(self, text: str) -> None:
        """Replace the clipboard contents with text.

        Raises:
            ClipboardError: If no copy tool is available or the copy failed
        """
        ...


class RealClipboard(Clipboard):
    """Production implementation piping text into a platform copy tool."""

    def write(self, text: str) -> None:
        cmd = self._find_copy_command()
        if cmd is None:
            tools = ", ".join(command[0] for command in COPY_COMMANDS)
            raise ClipboardError(f"No clipboard tool found (tried: {tools})")

        logger.debug("copying %d bytes with %s", len(text), cmd[0])
        try:
            subprocess.run(cmd, input=text.encode("utf-8"), capture_output=True, check=True)
        except subprocess.CalledProcessError as e:
            message = f"Failed to copy to clipboard with {cmd[0]} (exit code {e.returncode})"
            stderr = e.stderr.decode("utf-8", errors="replace").strip() if e.stderr else ""
            if stderr:
                message += f"\nstderr: {stderr}"
            raise ClipboardError(message) from e
        except OSError as e:
            raise ClipboardError(f"Failed to run {cmd[0]}: {e}") from e

    def _find_copy_command(self) -> list[str] | None:
        for command in COPY_COMMANDS:
            if shutil.which(command[0]) is not None:
                return list(command)
        return None
