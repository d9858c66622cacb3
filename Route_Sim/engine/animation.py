"""Time driven packet animation along a route."""

from __future__ import annotations

import logging
import math
import time
from enum import Enum
from typing import Any, Callable, List, Sequence

from ..config import Config
from ..view import PacketView
from .pathfinding import PathSegment

__all__ = ["ClockPhase", "interpolate", "AnimationClock"]

logger = logging.getLogger(__name__)


class ClockPhase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def interpolate(path: Sequence[PathSegment], progress: float) -> PacketView:
    """Return the packet position for ``progress`` in ``[0, 1]``.

    Every segment receives the same share of the timeline regardless of its
    drawn length.
    """

    if not path:
        raise ValueError("cannot interpolate along an empty path")
    progress = min(max(progress, 0.0), 1.0)
    count = len(path)
    segment_progress = progress * count
    index = min(max(math.floor(segment_progress), 0), count - 1)
    fraction = segment_progress - index
    seg = path[index]
    x0, y0 = seg.from_node["x"], seg.from_node["y"]
    x1, y1 = seg.to_node["x"], seg.to_node["y"]
    return PacketView(
        progress=progress,
        segment_index=index,
        fraction=fraction,
        x=x0 + (x1 - x0) * fraction,
        y=y0 + (y1 - y0) * fraction,
    )


class AnimationClock:
    """Drive a packet along a route one frame at a time.

    The clock moves through ``IDLE -> RUNNING -> COMPLETED``. Frames are
    requested from ``scheduler`` which must provide ``schedule(callback) ->
    handle`` and ``cancel(handle)``. Time is read from ``time_source`` in
    milliseconds so tests can substitute a fake clock.

    Parameters
    ----------
    scheduler:
        Frame scheduler, e.g. :class:`~Route_Sim.engine.schedulers.ManualScheduler`.
    duration:
        Total travel time in milliseconds. Defaults to
        ``Config.animation["duration_ms"]``.
    time_source:
        Callable returning the current time in milliseconds.
    on_progress:
        Called with a :class:`PacketView` on every frame of a run.
    on_complete:
        Called with the final :class:`PacketView` once per finished run.
    """

    def __init__(
        self,
        scheduler: Any,
        *,
        duration: float | None = None,
        time_source: Callable[[], float] | None = None,
        on_progress: Callable[[PacketView], None] | None = None,
        on_complete: Callable[[PacketView], None] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self.duration = (
            float(Config.animation["duration_ms"]) if duration is None else float(duration)
        )
        self._now = time_source or _monotonic_ms
        self.on_progress = on_progress
        self.on_complete = on_complete
        self._phase = ClockPhase.IDLE
        self._path: List[PathSegment] = []
        self._start = 0.0
        self._progress = 0.0
        self._handle: Any = None
        # bumped on every begin/cancel so frames from older runs are ignored
        self._generation = 0

    @property
    def phase(self) -> ClockPhase:
        return self._phase

    @property
    def progress(self) -> float:
        """Progress reported by the most recent frame."""

        return self._progress

    @property
    def path(self) -> List[PathSegment]:
        return list(self._path)

    @property
    def running(self) -> bool:
        return self._phase is ClockPhase.RUNNING

    def now(self) -> float:
        """Current reading of the clock's time source in milliseconds."""

        return self._now()

    def progress_at(self, now: float) -> float:
        """Return the progress of the current run at time ``now``."""

        if now < self._start:
            return 0.0
        if self.duration <= 0:
            return 1.0
        return min(max((now - self._start) / self.duration, 0.0), 1.0)

    def begin(self, path: Sequence[PathSegment], start_time: float | None = None) -> None:
        """Start animating ``path``, superseding any run in progress.

        ``start_time`` defaults to now; a later value holds the packet at the
        source until that moment.
        """

        if not path:
            raise ValueError("cannot animate an empty path")
        self._cancel_pending()
        self._generation += 1
        self._path = list(path)
        self._start = self._now() if start_time is None else float(start_time)
        self._progress = 0.0
        self._phase = ClockPhase.RUNNING
        logger.debug(
            "animation started: %d segments over %.0f ms", len(self._path), self.duration
        )
        self._request_frame()

    def cancel(self) -> None:
        """Stop a running animation without firing completion."""

        if self._phase is not ClockPhase.RUNNING:
            return
        self._cancel_pending()
        self._generation += 1
        self._phase = ClockPhase.IDLE
        logger.debug("animation cancelled at progress %.3f", self._progress)

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel(self._handle)
            self._handle = None

    def _request_frame(self) -> None:
        generation = self._generation
        self._handle = self._scheduler.schedule(lambda: self._frame(generation))

    def _frame(self, generation: int) -> None:
        if generation != self._generation or self._phase is not ClockPhase.RUNNING:
            return
        self._handle = None
        now = self._now()
        self._progress = self.progress_at(now)
        view = interpolate(self._path, self._progress)
        if self.on_progress is not None:
            self.on_progress(view)
        # on_progress may have restarted or cancelled the clock
        if generation != self._generation:
            return
        if self._progress >= 1.0:
            self._phase = ClockPhase.COMPLETED
            logger.debug("animation completed")
            if self.on_complete is not None:
                self.on_complete(view)
            return
        self._request_frame()
