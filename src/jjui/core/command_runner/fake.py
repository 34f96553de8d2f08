"""Recording/replaying CommandRunner for tests.

FakeCommandRunner never spawns a process. Each expected invocation is
registered up front with expect() or expect_shell(); an invocation that matches
no expectation fails immediately, and verify() fails for every expectation
that was never used.
"""

import io
import threading
from collections.abc import Sequence

from jjui.core.command_runner.abc import CommandRunner, StreamingCommand, jj_display
from jjui.core.errors import CommandError
from jjui.core.process import ExecutionOutcome
from jjui.ui.messages import Cmd

_SHELL_KEY = "_shell_"


class UnexpectedCommandError(AssertionError):
    """Raised when a command is run that no expectation matches."""


class ExpectedCommand:
    """One expected invocation and the result it replays."""

    def __init__(self, args: Sequence[str]) -> None:
        self.args = list(args)
        self.output = b""
        self.error: CommandError | None = None
        self.called = False

    def set_output(self, output: bytes) -> "ExpectedCommand":
        self.output = output
        return self

    def set_error(self, error: CommandError) -> "ExpectedCommand":
        self.error = error
        return self

    def outcome(self) -> ExecutionOutcome:
        return ExecutionOutcome(
            stdout=self.output.decode("utf-8", errors="replace"), stderr="", error=self.error
        )


class FakeCommandRunner(CommandRunner):
    """In-memory CommandRunner driven by expectations.

    Examples:
        >>> runner = FakeCommandRunner()
        >>> runner.expect(["log", "-r", "abc"]).set_output(b"diff text")
        >>> runner.run_command_immediate(["log", "-r", "abc"]).stdout
        'diff text'
        >>> runner.verify()

        >>> runner = FakeCommandRunner()
        >>> runner.expect_shell("echo hi").set_output(b"hi\\n")
        >>> runner.is_verified()
        False
    """

    def __init__(self) -> None:
        self._expectations: dict[str, list[ExpectedCommand]] = {}
        self._lock = threading.Lock()
        self._executed_commands: list[list[str]] = []
        self._executed_shell_commands: list[str] = []

    def expect(self, args: Sequence[str]) -> ExpectedCommand:
        """Register an expected ``jj <args>`` invocation.

        Raises:
            ValueError: If args is empty
        """
        if not args:
            raise ValueError("expect() requires at least one argument, e.g. expect([\"log\"])")
        expectation = ExpectedCommand(args)
        with self._lock:
            self._expectations.setdefault(expectation.args[0], []).append(expectation)
        return expectation

    def expect_shell(self, shell_cmd: str) -> ExpectedCommand:
        """Register an expected shell-string invocation."""
        expectation = ExpectedCommand([shell_cmd])
        with self._lock:
            self._expectations.setdefault(_SHELL_KEY, []).append(expectation)
        return expectation

    def run_command_immediate(self, args: Sequence[str]) -> ExecutionOutcome:
        args = list(args)
        with self._lock:
            self._executed_commands.append(args)
            candidates = self._expectations.get(args[0], []) if args else []
            expectation = _match(candidates, args)
            if expectation is None:
                raise UnexpectedCommandError(f"unexpected command: {jj_display(args)}")
            expectation.called = True
            return expectation.outcome()

    def run_command_streaming(self, args: Sequence[str]) -> StreamingCommand:
        outcome = self.run_command_immediate(args)
        if outcome.error is not None:
            raise outcome.error
        return StreamingCommand(reader=io.BytesIO(outcome.stdout.encode("utf-8")))

    def run_interactive_command(self, args: Sequence[str], continuation: Cmd | None) -> Cmd:
        return self.run_command(args, continuation)

    def run_shell_command_immediate(self, shell_cmd: str) -> ExecutionOutcome:
        with self._lock:
            self._executed_shell_commands.append(shell_cmd)
            candidates = self._expectations.get(_SHELL_KEY, [])
            expectation = _match(candidates, [shell_cmd])
            if expectation is None:
                raise UnexpectedCommandError(f"unexpected shell command: {shell_cmd}")
            expectation.called = True
            return expectation.outcome()

    def run_shell_command_streaming(self, shell_cmd: str) -> StreamingCommand:
        outcome = self.run_shell_command_immediate(shell_cmd)
        if outcome.error is not None:
            raise outcome.error
        return StreamingCommand(reader=io.BytesIO(outcome.stdout.encode("utf-8")))

    def run_interactive_shell_command(self, shell_cmd: str, continuation: Cmd | None) -> Cmd:
        return self.run_shell_command(shell_cmd, continuation)

    def unmet_expectations(self) -> list[str]:
        """Display forms of every expectation that was never called."""
        with self._lock:
            unmet: list[str] = []
            for key, expectations in self._expectations.items():
                for expectation in expectations:
                    if expectation.called:
                        continue
                    if key == _SHELL_KEY:
                        unmet.append(f"shell: {expectation.args[0]}")
                    else:
                        unmet.append(jj_display(expectation.args))
            return unmet

    def verify(self) -> None:
        """Fail if any expected command was never called.

        Raises:
            AssertionError: Naming every unmet command
        """
        unmet = self.unmet_expectations()
        if unmet:
            raise AssertionError("expected command not called: " + ", ".join(unmet))

    def is_verified(self) -> bool:
        return not self.unmet_expectations()

    @property
    def executed_commands(self) -> list[list[str]]:
        """Argument vectors passed to run_command_immediate(), in call order.

        This property is for test assertions only.
        """
        with self._lock:
            return [list(args) for args in self._executed_commands]

    @property
    def executed_shell_commands(self) -> list[str]:
        """Shell strings passed to run_shell_command_immediate(), in call order.

        This property is for test assertions only.
        """
        with self._lock:
            return self._executed_shell_commands.copy()


def _match(candidates: list[ExpectedCommand], args: list[str]) -> ExpectedCommand | None:
    """First uncalled expectation with equal args, else the first called one."""
    matching = [e for e in candidates if e.args == args]
    for expectation in matching:
        if not expectation.called:
            return expectation
    if matching:
        return matching[0]
    return None
