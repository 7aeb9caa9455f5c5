from __future__ import annotations

from typing import Callable, Dict


class ManualFrameScheduler:
    """
    Frame scheduler that queues callbacks until `run_pending` is called.
    The web front-end calls it from its page timer; tests call it directly.
    """

    def __init__(self) -> None:
        self._next_handle = 0
        self._pending: Dict[int, Callable[[], None]] = {}

    def request_frame(self, callback: Callable[[], None]) -> int:
        self._next_handle += 1
        self._pending[self._next_handle] = callback
        return self._next_handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def run_pending(self) -> int:
        """Run the callbacks queued so far; ones queued while running wait for the next call."""
        callbacks = list(self._pending.values())
        self._pending.clear()
        for callback in callbacks:
            callback()
        return len(callbacks)
