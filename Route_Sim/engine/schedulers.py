"""Frame schedulers used to drive :class:`AnimationClock`."""

from __future__ import annotations

import time
from typing import Callable, Dict, Optional


class ManualScheduler:
    """Queue frame callbacks until :meth:`step` runs them.

    Each call to :meth:`step` plays one frame: it runs the callbacks that were
    pending when the frame started. Callbacks scheduled while a frame is
    running wait for the next one, mirroring a display refresh driver.
    """

    def __init__(self) -> None:
        self._pending: Dict[int, Callable[[], None]] = {}
        self._next_handle = 1
        self.frames = 0

    def schedule(self, callback: Callable[[], None]) -> int:
        """Queue ``callback`` for the next frame and return its handle."""

        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        """Drop the callback registered under ``handle`` if still queued."""

        self._pending.pop(handle, None)

    def step(self) -> int:
        """Run one frame and return the number of callbacks executed."""

        batch = list(self._pending.items())
        self._pending.clear()
        for _, callback in batch:
            callback()
        self.frames += 1
        return len(batch)

    def __len__(self) -> int:
        return len(self._pending)

    def clear(self) -> None:
        """Drop all queued callbacks."""

        self._pending.clear()


class BlockingScheduler(ManualScheduler):
    """Play frames in real time on the calling thread.

    Used by headless runs where no GUI event loop provides frame callbacks.
    """

    def __init__(
        self,
        interval_ms: float = 16.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        super().__init__()
        self.interval_ms = interval_ms
        self._sleep = sleep

    def run(self, max_frames: Optional[int] = None) -> int:
        """Step frames until nothing is queued or ``max_frames`` is reached.

        Returns the number of frames played.
        """

        played = 0
        while self._pending:
            if max_frames is not None and played >= max_frames:
                break
            self._sleep(self.interval_ms / 1000.0)
            self.step()
            played += 1
        return played
