"""Tests for the Cmd builders."""

from tests.fakes.process import FakeExecCommand
from tests.test_utils.cmds import collect_messages

from jjui.core.errors import NonZeroExitError
from jjui.core.process import InteractiveProcess
from jjui.ui.commands import (
    batch,
    command_running,
    exec_process,
    exec_program,
    refresh,
    sequence,
)
from jjui.ui.messages import (
    BatchMsg,
    CommandCompletedMsg,
    CommandRunningMsg,
    ExecMsg,
    RefreshMsg,
    SequenceMsg,
)


def test_batch_and_sequence_of_nothing_is_none() -> None:
    assert batch() is None
    assert sequence(None, None) is None


def test_single_command_is_returned_unwrapped() -> None:
    assert batch(None, refresh) is refresh
    assert sequence(refresh, None) is refresh


def test_batch_drops_none_entries() -> None:
    running = command_running("a")
    msg = batch(refresh, None, running)()

    assert msg == BatchMsg((refresh, running))


def test_sequence_keeps_order() -> None:
    running = command_running("jj new")
    msg = sequence(running, None, refresh)()

    assert isinstance(msg, SequenceMsg)
    assert msg.cmds == (running, refresh)
    assert collect_messages(sequence(running, refresh)) == [
        CommandRunningMsg("jj new"),
        RefreshMsg(),
    ]


def test_refresh_message() -> None:
    assert refresh() == RefreshMsg()


def test_exec_process_wraps_process_and_callback() -> None:
    process = FakeExecCommand()

    def callback(error: Exception | None) -> CommandCompletedMsg:
        return CommandCompletedMsg(error=error)

    msg = exec_process(process, callback)()

    assert msg == ExecMsg(process=process, callback=callback)


def test_exec_program_reports_completion_by_display() -> None:
    msg = exec_program("lazygit", ["--path", "/repo"], display="lazygit")()

    assert isinstance(msg, ExecMsg)
    assert isinstance(msg.process, InteractiveProcess)
    assert msg.process.cmd == ["lazygit", "--path", "/repo"]
    assert msg.callback(None) == CommandCompletedMsg(output="'lazygit' completed")


def test_exec_program_failure_carries_error() -> None:
    error = NonZeroExitError("failed", ["vim"], 1)
    msg = exec_program("vim", [])()

    assert msg.callback(error) == CommandCompletedMsg(output="", error=error)
