"""Helpers for running scheduled work synchronously in tests.

collect_messages() executes a Cmd the way the Program would, but inline:
batches and sequences are flattened in order and ExecMsg is returned as-is so
tests can inspect the process without handing over a terminal.
"""

from jjui.ui.messages import BatchMsg, Cmd, Msg, SequenceMsg


def collect_messages(cmd: Cmd | None) -> list[Msg]:
    """Run cmd and everything it schedules, returning the posted messages in order."""
    if cmd is None:
        return []
    msg = cmd()
    if msg is None:
        return []
    if isinstance(msg, BatchMsg | SequenceMsg):
        messages: list[Msg] = []
        for child in msg.cmds:
            messages.extend(collect_messages(child))
        return messages
    return [msg]
