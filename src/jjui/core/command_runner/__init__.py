"""Command runner subpackage.

The CommandRunner interface is the only way dispatch code reaches the jj
binary, so tests can substitute FakeCommandRunner for RealCommandRunner.
"""

from jjui.core.command_runner.abc import CommandRunner, StreamingCommand, jj_display
from jjui.core.command_runner.fake import ExpectedCommand, FakeCommandRunner, UnexpectedCommandError
from jjui.core.command_runner.real import RealCommandRunner

__all__ = [
    "CommandRunner",
    "ExpectedCommand",
    "FakeCommandRunner",
    "RealCommandRunner",
    "StreamingCommand",
    "UnexpectedCommandError",
    "jj_display",
]
