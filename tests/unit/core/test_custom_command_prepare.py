"""Tests for turning a custom command into scheduled work."""

from pathlib import Path

import pytest
from tests.fakes.shell import FakeShell
from tests.test_utils.cmds import collect_messages

from jjui.core.command_runner.fake import FakeCommandRunner, UnexpectedCommandError
from jjui.core.context import MainContext
from jjui.core.custom_command import CustomRunCommand
from jjui.core.errors import NonZeroExitError
from jjui.core.process import CapturingProcess, InteractiveProcess
from jjui.core.selection import SelectedFile, SelectedRevision
from jjui.core.show_mode import ShowMode
from jjui.ui.messages import (
    CommandCompletedMsg,
    CommandRunningMsg,
    ExecMsg,
    RefreshMsg,
    ShowDiffMsg,
)

REVISION = SelectedRevision(change_id="abc123", commit_id="def456")


def test_notify_shell_command_reports_trimmed_output() -> None:
    """Test a Notify shell command run through the fake runner."""
    runner = FakeCommandRunner()
    runner.expect_shell("echo hi").set_output(b"hi\n")
    ctx = MainContext.for_test(command_runner=runner)
    command = CustomRunCommand(name="hi", shell="echo hi", show=ShowMode.NOTIFY)

    messages = collect_messages(command.prepare(ctx))

    assert messages == [
        CommandRunningMsg("echo hi"),
        CommandCompletedMsg(output="hi", error=None),
    ]
    runner.verify()


def test_diff_args_command_shows_raw_output() -> None:
    """Test a Diff command templated against the selected revision."""
    runner = FakeCommandRunner()
    runner.expect(["log", "-r", "abc123"]).set_output(b"diff text")
    ctx = MainContext.for_test(command_runner=runner, selected_item=REVISION)
    command = CustomRunCommand(name="log", args=("log", "-r", "$change_id"), show=ShowMode.DIFF)

    messages = collect_messages(command.prepare(ctx))

    assert messages == [ShowDiffMsg("diff text")]
    assert runner.executed_commands == [["log", "-r", "abc123"]]
    runner.verify()


def test_diff_shell_command_shows_raw_output() -> None:
    runner = FakeCommandRunner()
    runner.expect_shell("git show def456").set_output(b"commit def456\n")
    ctx = MainContext.for_test(command_runner=runner, selected_item=REVISION)
    command = CustomRunCommand(name="git", shell="git show $commit_id", show=ShowMode.DIFF)

    messages = collect_messages(command.prepare(ctx))

    assert messages == [ShowDiffMsg("commit def456\n")]


def test_diff_failure_without_output_reports_error() -> None:
    """Test that a failed diff with nothing to show becomes a completion error."""
    error = NonZeroExitError("failed", ["jj", "diff"], 1)
    runner = FakeCommandRunner()
    runner.expect(["diff"]).set_error(error)
    ctx = MainContext.for_test(command_runner=runner)
    command = CustomRunCommand(name="diff", args=("diff",), show=ShowMode.DIFF)

    messages = collect_messages(command.prepare(ctx))

    assert messages == [CommandCompletedMsg(output="", error=error)]


def test_silent_args_command_refreshes_after_completion() -> None:
    """Test that Silent runs, completes, then refreshes."""
    runner = FakeCommandRunner()
    runner.expect(["new", "abc123"])
    ctx = MainContext.for_test(command_runner=runner, selected_item=REVISION)
    command = CustomRunCommand(name="new", args=("new", "$change_id"))

    messages = collect_messages(command.prepare(ctx))

    assert messages == [
        CommandRunningMsg("jj new abc123"),
        CommandCompletedMsg(output="'jj new abc123' completed"),
        RefreshMsg(),
    ]


def test_silent_shell_command_refreshes_after_completion() -> None:
    runner = FakeCommandRunner()
    runner.expect_shell("make fmt")
    ctx = MainContext.for_test(command_runner=runner)
    command = CustomRunCommand(name="fmt", shell="make fmt", show=ShowMode.SILENT)

    messages = collect_messages(command.prepare(ctx))

    assert messages[-1] == RefreshMsg()
    assert messages[1] == CommandCompletedMsg(output="'make fmt' completed")


def test_notify_args_command_does_not_refresh() -> None:
    runner = FakeCommandRunner()
    runner.expect(["git", "fetch"]).set_output(b"Nothing changed.\n")
    ctx = MainContext.for_test(command_runner=runner)
    command = CustomRunCommand(name="fetch", args=("git", "fetch"), show=ShowMode.NOTIFY)

    messages = collect_messages(command.prepare(ctx))

    assert messages == [
        CommandRunningMsg("jj git fetch"),
        CommandCompletedMsg(output="Nothing changed."),
    ]


def test_notify_failure_is_carried_on_completion() -> None:
    """Test that a runner error surfaces on the completion event."""
    error = NonZeroExitError("failed", ["jj", "abandon"], 1)
    runner = FakeCommandRunner()
    runner.expect(["abandon", "abc123"]).set_output(b"Error: immutable\n").set_error(error)
    ctx = MainContext.for_test(command_runner=runner, selected_item=REVISION)
    command = CustomRunCommand(
        name="abandon", args=("abandon", "$change_id"), show=ShowMode.NOTIFY
    )

    messages = collect_messages(command.prepare(ctx))

    assert messages[-1] == CommandCompletedMsg(output="Error: immutable", error=error)


def test_interactive_args_command_goes_through_runner() -> None:
    """Test that interactive jj commands are delegated to the runner."""
    runner = FakeCommandRunner()
    runner.expect(["split", "-r", "abc123"])
    ctx = MainContext.for_test(command_runner=runner, selected_item=REVISION)
    command = CustomRunCommand(
        name="split", args=("split", "-r", "$change_id"), show=ShowMode.INTERACTIVE
    )

    messages = collect_messages(command.prepare(ctx))

    assert messages[-1] == RefreshMsg()
    runner.verify()


def test_interactive_shell_command_hands_terminal_to_interactive_shell() -> None:
    """Test that shell-form interactive commands use the resolved shell."""
    ctx = MainContext.for_test(
        shell=FakeShell(interactive_shell="/bin/zsh"),
        location=Path("/repo"),
        selected_item=REVISION,
    )
    command = CustomRunCommand(name="tig", shell="tig $commit_id", show=ShowMode.INTERACTIVE)

    messages = collect_messages(command.prepare(ctx))

    assert len(messages) == 2
    exec_msg = messages[0]
    assert isinstance(exec_msg, ExecMsg)
    process = exec_msg.process
    assert isinstance(process, InteractiveProcess)
    assert process.cmd == ["/bin/zsh", "-c", "tig def456"]
    assert process.cwd == Path("/repo")
    assert process.env == {"$change_id": "abc123", "$commit_id": "def456"}
    assert messages[1] == RefreshMsg()
    assert exec_msg.callback(None) == CommandCompletedMsg(output="'tig def456' completed")


def test_interactive_notify_args_command_captures_jj() -> None:
    """Test that InteractiveNotify announces the command before the hand-off."""
    file_item = SelectedFile(change_id="abc123", commit_id="def456", file="src/main.py")
    ctx = MainContext.for_test(selected_item=file_item)
    command = CustomRunCommand(
        name="restore",
        args=("restore", "--from", "$change_id", "$file"),
        show=ShowMode.INTERACTIVE_NOTIFY,
    )

    messages = collect_messages(command.prepare(ctx))

    assert messages[0] == CommandRunningMsg("jj restore --from abc123 src/main.py")
    exec_msg = messages[1]
    assert isinstance(exec_msg, ExecMsg)
    assert isinstance(exec_msg.process, CapturingProcess)
    assert exec_msg.process.cmd == ["jj", "restore", "--from", "abc123", "src/main.py"]
    assert exec_msg.callback(None) == CommandCompletedMsg(
        output="'jj restore --from abc123 src/main.py' completed"
    )


def test_interactive_notify_shell_command_reports_buffered_output() -> None:
    """Test that output mirrored during the hand-off becomes the notification."""
    ctx = MainContext.for_test(shell=FakeShell(interactive_shell="sh"), location=Path.cwd())
    command = CustomRunCommand(
        name="greet", shell="printf 'hello\\n'", show=ShowMode.INTERACTIVE_NOTIFY
    )

    messages = collect_messages(command.prepare(ctx))
    exec_msg = messages[1]
    assert isinstance(exec_msg, ExecMsg)
    exec_msg.process.run()

    assert messages[0] == CommandRunningMsg("printf 'hello\\n'")
    assert exec_msg.callback(None) == CommandCompletedMsg(output="hello")


def test_unexpected_command_fails_loudly() -> None:
    """Test that a command with no matching expectation raises immediately."""
    runner = FakeCommandRunner()
    ctx = MainContext.for_test(command_runner=runner)
    command = CustomRunCommand(name="status", args=("status",), show=ShowMode.NOTIFY)

    with pytest.raises(UnexpectedCommandError, match="jj status"):
        collect_messages(command.prepare(ctx))


def test_description_of_args_command() -> None:
    ctx = MainContext.for_test(selected_item=REVISION)
    command = CustomRunCommand(name="show", args=("show", "$change_id"))

    assert command.description(ctx) == "jj show abc123"


def test_description_of_shell_command() -> None:
    ctx = MainContext.for_test(selected_item=REVISION)
    command = CustomRunCommand(name="gitk", shell="gitk $commit_id")

    assert command.description(ctx) == "gitk def456"
