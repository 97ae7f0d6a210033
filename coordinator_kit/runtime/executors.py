"""UI-affinity executors used for action delivery."""

from __future__ import annotations

import asyncio
import queue
import threading

from coordinator_kit.api.actions import UiCallback


class UiThreadExecutor:
    """Run callbacks on the thread that created the executor.

    Submissions from the owner thread drain immediately. Submissions from any
    other thread wait in a FIFO queue until the owner calls `drain()`. Draining
    is not re-entrant: a callback submitted while draining runs after the
    current one returns.
    """

    def __init__(self, owner_thread_id: int | None = None) -> None:
        if owner_thread_id is None:
            owner_thread_id = int(threading.get_ident())
        self._owner_thread_id = owner_thread_id
        self._pending: queue.SimpleQueue[UiCallback] = queue.SimpleQueue()
        self._draining = False

    @property
    def owner_thread_id(self) -> int:
        return self._owner_thread_id

    @property
    def pending_count(self) -> int:
        """Return approximate count of queued callbacks."""
        return self._pending.qsize()

    def is_owner_thread(self) -> bool:
        return int(threading.get_ident()) == self._owner_thread_id

    def submit(self, callback: UiCallback) -> None:
        """Queue callback; drain right away when called on the owner thread."""
        self._pending.put(callback)
        if self.is_owner_thread():
            self.drain()

    def drain(self) -> int:
        """Run queued callbacks in submission order. Returns executed count."""
        self._assert_owner_thread()
        if self._draining:
            return 0
        self._draining = True
        executed = 0
        try:
            while True:
                try:
                    callback = self._pending.get_nowait()
                except queue.Empty:
                    break
                callback()
                executed += 1
        finally:
            self._draining = False
        return executed

    def _assert_owner_thread(self) -> None:
        if not self.is_owner_thread():
            raise RuntimeError("UiThreadExecutor must drain on its owner thread")


class AsyncioLoopExecutor:
    """Hop callbacks onto an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def submit(self, callback: UiCallback) -> None:
        """Schedule callback with `call_soon_threadsafe` (FIFO per loop)."""
        self._loop.call_soon_threadsafe(callback)
