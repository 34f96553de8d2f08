"""Builders for scheduled work.

A Cmd is a zero-argument callable that returns one message (or None). The
Program runs it off the event loop and posts the result back into the queue.
"""

from collections.abc import Callable, Mapping
from pathlib import Path

from jjui.core.completion import completion_message
from jjui.core.process import ExecCommand, InteractiveProcess
from jjui.ui.messages import (
    BatchMsg,
    Cmd,
    CommandRunningMsg,
    ExecMsg,
    Msg,
    RefreshMsg,
    SequenceMsg,
)


def _compact(cmds: tuple[Cmd | None, ...]) -> tuple[Cmd, ...]:
    return tuple(cmd for cmd in cmds if cmd is not None)


def batch(*cmds: Cmd | None) -> Cmd | None:
    """Combine commands to run concurrently. None entries are dropped."""
    valid = _compact(cmds)
    if not valid:
        return None
    if len(valid) == 1:
        return valid[0]
    return lambda: BatchMsg(valid)


def sequence(*cmds: Cmd | None) -> Cmd | None:
    """Combine commands to run strictly in order. None entries are dropped."""
    valid = _compact(cmds)
    if not valid:
        return None
    if len(valid) == 1:
        return valid[0]
    return lambda: SequenceMsg(valid)


def exec_process(
    process: ExecCommand, callback: Callable[[Exception | None], Msg | None]
) -> Cmd:
    """Schedule a terminal hand-off to process."""
    return lambda: ExecMsg(process=process, callback=callback)


def command_running(display: str) -> Cmd:
    """Announce that a command with the given display form has started."""
    return lambda: CommandRunningMsg(display)


def refresh() -> RefreshMsg:
    return RefreshMsg()


def exec_program(
    program: str,
    args: list[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    display: str | None = None,
) -> Cmd:
    """Hand the terminal to program and report its exit as a completion."""
    if display is None:
        display = " ".join([program, *args])
    process = InteractiveProcess(program, args, cwd=cwd, env=env)
    return exec_process(process, lambda error: completion_message(display, "", "", error))
