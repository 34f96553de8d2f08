"""Completion reporting shared by every execution path."""

from jjui.ui.messages import CommandCompletedMsg


def combine_output(stdout: str, stderr: str) -> str:
    """Merge captured streams into one display string.

    Both streams are trimmed. stdout wins when stderr is empty and vice versa;
    when both have content, stderr follows stdout on a new line.
    """
    out = stdout.strip()
    err = stderr.strip()
    if not out:
        return err
    if err:
        return f"{out}\n{err}"
    return out


def completed_text(display: str) -> str:
    """Canned message for a command that succeeded without output."""
    return f"'{display}' completed"


def completion_message(
    display: str, stdout: str, stderr: str, error: Exception | None
) -> CommandCompletedMsg:
    """Build the single completion event for an invocation.

    Args:
        display: Display form of the command, used for the canned message
        stdout: Captured standard output
        stderr: Captured standard error
        error: Failure of the process, if any

    Returns:
        CommandCompletedMsg carrying the combined output and the error
    """
    output = combine_output(stdout, stderr)
    if error is not None:
        return CommandCompletedMsg(output=output, error=error)
    if not output:
        output = completed_text(display)
    return CommandCompletedMsg(output=output, error=None)
