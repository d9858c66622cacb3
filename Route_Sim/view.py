"""UI-facing snapshot dataclasses."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PacketView:
    """Position of the animated packet for a given animation progress.

    ``segment_index`` and ``fraction`` locate the packet on the route while
    ``x``/``y`` give the interpolated canvas position.
    """

    progress: float
    segment_index: int
    fraction: float
    x: float
    y: float
