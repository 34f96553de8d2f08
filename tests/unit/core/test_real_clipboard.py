"""Tests for RealClipboard tool selection and failure reporting."""

import pytest

from jjui.core.clipboard import RealClipboard
from jjui.core.errors import ClipboardError


def test_missing_tools_raise_clipboard_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("jjui.core.clipboard.shutil.which", lambda name: None)

    with pytest.raises(ClipboardError, match="No clipboard tool found"):
        RealClipboard().write("text")


def test_failing_tool_raises_clipboard_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that a copy tool exiting non-zero is reported with its name."""
    monkeypatch.setattr(
        "jjui.core.clipboard.COPY_COMMANDS", (("sh", "-c", "cat >/dev/null; exit 1"),)
    )

    with pytest.raises(ClipboardError, match="Failed to copy to clipboard with sh"):
        RealClipboard().write("text")


def test_successful_copy_pipes_text(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("jjui.core.clipboard.COPY_COMMANDS", (("sh", "-c", "cat >/dev/null"),))

    RealClipboard().write("text")
