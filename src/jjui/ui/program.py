"""Single-threaded, message-driven UI event loop.

The model is only ever touched from the loop. Every Cmd runs in a worker
thread and posts its message back through the queue, so process I/O never
blocks message handling.
"""

import asyncio
import logging
from abc import ABC, abstractmethod

from jjui.ui.messages import BatchMsg, Cmd, ExecMsg, Msg, QuitMsg, SequenceMsg
from jjui.ui.terminal import Terminal

logger = logging.getLogger(__name__)


class Model(ABC):
    """State and message handling of the UI."""

    def init(self) -> Cmd | None:
        """Work to schedule when the program starts."""
        return None

    @abstractmethod
    def update(self, msg: Msg) -> Cmd | None:
        """Handle one message and return follow-up work, if any."""
        ...


class _WorkFinished:
    """Posted when a scheduled Cmd and everything it spawned is done."""


class Program:
    """Runs a Model against a Terminal.

    Args:
        model: The UI model receiving messages
        terminal: Terminal handed to interactive processes
        stop_when_idle: Stop once no work is in flight and the queue is
            empty, instead of waiting for QuitMsg
    """

    def __init__(self, model: Model, terminal: Terminal, *, stop_when_idle: bool = False) -> None:
        self._model = model
        self._terminal = terminal
        self._stop_when_idle = stop_when_idle
        self._queue: asyncio.Queue[Msg] = asyncio.Queue()
        self._terminal_lock = asyncio.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._in_flight = 0
        self._failures: list[Exception] = []

    def send(self, msg: Msg) -> None:
        """Post a message from any thread."""
        if self._loop is None:
            self._queue.put_nowait(msg)
            return
        self._loop.call_soon_threadsafe(self._queue.put_nowait, msg)

    async def run(self) -> Model:
        """Process messages until QuitMsg, or until idle when configured.

        In-flight work is awaited before returning; child processes are never
        cancelled.

        Raises:
            Exception: The first exception raised by scheduled work, once the
                loop has stopped and in-flight work has finished
        """
        self._loop = asyncio.get_running_loop()
        self._schedule(self._model.init())

        while True:
            if self._stop_when_idle and self._in_flight == 0 and self._queue.empty():
                break
            msg = await self._queue.get()
            if isinstance(msg, _WorkFinished):
                self._in_flight -= 1
                continue
            if isinstance(msg, QuitMsg):
                break
            self._schedule(self._model.update(msg))

        if self._tasks:
            await asyncio.gather(*self._tasks)
        if self._failures:
            raise self._failures[0]
        return self._model

    def _schedule(self, cmd: Cmd | None) -> None:
        if cmd is None:
            return
        self._in_flight += 1
        task = asyncio.create_task(self._run_and_report(cmd))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_and_report(self, cmd: Cmd) -> None:
        try:
            await self._run_cmd(cmd)
        except Exception as e:
            logger.debug("scheduled command failed: %r", e)
            self._failures.append(e)
        finally:
            self._queue.put_nowait(_WorkFinished())

    async def _run_cmd(self, cmd: Cmd) -> None:
        msg = await asyncio.to_thread(cmd)
        await self._dispatch(msg)

    async def _dispatch(self, msg: Msg | None) -> None:
        match msg:
            case None:
                return
            case BatchMsg(cmds=cmds):
                results = await asyncio.gather(
                    *(self._run_cmd(cmd) for cmd in cmds), return_exceptions=True
                )
                errors = [result for result in results if isinstance(result, Exception)]
                if errors:
                    self._failures.extend(errors[1:])
                    raise errors[0]
            case SequenceMsg(cmds=cmds):
                for cmd in cmds:
                    await self._run_cmd(cmd)
            case ExecMsg():
                await self._exec(msg)
            case _:
                await self._queue.put(msg)

    async def _exec(self, msg: ExecMsg) -> None:
        process = msg.process
        error: Exception | None = None
        async with self._terminal_lock:
            logger.debug("suspending terminal for %r", process)
            self._terminal.suspend()
            process.set_stdin(self._terminal.stdin)
            process.set_stdout(self._terminal.stdout)
            process.set_stderr(self._terminal.stderr)
            try:
                await asyncio.to_thread(process.run)
            except Exception as e:
                logger.debug("interactive process failed: %s", e)
                error = e
            finally:
                self._terminal.resume()
                logger.debug("terminal resumed")
        await self._dispatch(msg.callback(error))
