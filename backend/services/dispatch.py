"""
Execution contexts that search results are handed back on.

Background request threads never call completions directly; they post them to
a dispatcher owned by whoever consumes the results (an asyncio loop, a CLI
main loop, or the calling thread itself).
"""
from __future__ import annotations

import asyncio
import queue
import time
from typing import Any, Callable, Optional, Protocol


class Dispatcher(Protocol):
    def post(self, fn: Callable[..., Any], *args: Any) -> None:
        ...


class ImmediateDispatcher:
    """Runs callables inline on the posting thread."""

    def post(self, fn: Callable[..., Any], *args: Any) -> None:
        fn(*args)


class QueueDispatcher:
    """
    FIFO of pending callables drained by the owning thread.

    `post` is safe from any thread; `run_pending` and `run_until` must only be
    called from the thread that owns the results.
    """

    def __init__(self) -> None:
        self._queue: "queue.Queue[tuple[Callable[..., Any], tuple]]" = queue.Queue()

    def post(self, fn: Callable[..., Any], *args: Any) -> None:
        self._queue.put((fn, args))

    def run_pending(self) -> int:
        ran = 0
        while True:
            try:
                fn, args = self._queue.get_nowait()
            except queue.Empty:
                return ran
            fn(*args)
            ran += 1

    def run_until(
        self,
        predicate: Callable[[], bool],
        timeout: Optional[float] = None,
        poll_interval: float = 0.05,
    ) -> bool:
        """Pump the queue until predicate() holds; False if the timeout elapsed first."""
        deadline = None if timeout is None else time.monotonic() + timeout
        while not predicate():
            wait = poll_interval
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return False
                wait = min(wait, remaining)
            try:
                fn, args = self._queue.get(timeout=wait)
            except queue.Empty:
                continue
            fn(*args)
        return True


class EventLoopDispatcher:
    """Schedules callables on an asyncio event loop from any thread."""

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self.loop = loop

    def post(self, fn: Callable[..., Any], *args: Any) -> None:
        self.loop.call_soon_threadsafe(fn, *args)
