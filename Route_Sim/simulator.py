"""Headless front-end core tying a topology, session state and animation."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import numpy as np

from .config import Config
from .engine.animation import AnimationClock
from .engine.pathfinding import path_node_ids
from .graph.generator import generate_topology
from .graph.model import GraphModel
from .session import (
    SimulationState,
    mark_delivered,
    plan_route,
    reset_state,
    select_destination,
    select_source,
)
from .view import PacketView

logger = logging.getLogger(__name__)


class RoutingSimulator:
    """Own the active graph, the session state and the packet animation.

    A front end forwards user intents (``select_source``,
    ``select_destination``, ``send_packet``, ``regenerate``) and renders
    whatever arrives through ``on_state_change`` and ``on_progress``. All
    mutation happens here, on the caller's thread.

    Parameters
    ----------
    scheduler:
        Frame scheduler handed to the :class:`AnimationClock`.
    graph:
        Initial topology; defaults to :meth:`GraphModel.default`.
    time_source:
        Millisecond clock used by the animation.
    duration:
        Animation length in milliseconds.
    start_delay:
        Pause in milliseconds before the packet leaves the source.
    rng:
        Random generator used by :meth:`regenerate`. Seeded from
        ``Config.run_seed`` when omitted.
    """

    def __init__(
        self,
        scheduler: Any,
        *,
        graph: GraphModel | None = None,
        time_source: Callable[[], float] | None = None,
        duration: float | None = None,
        start_delay: float | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.graph = graph if graph is not None else GraphModel.default()
        self.state = SimulationState()
        self.start_delay = (
            float(Config.animation["start_delay_ms"])
            if start_delay is None
            else float(start_delay)
        )
        self.on_state_change: Optional[Callable[[SimulationState], None]] = None
        self.on_progress: Optional[Callable[[PacketView], None]] = None
        self._rng = rng if rng is not None else np.random.default_rng(Config.run_seed)
        self.clock = AnimationClock(
            scheduler,
            duration=duration,
            time_source=time_source,
            on_progress=self._handle_progress,
            on_complete=self._handle_complete,
        )

    def _set_state(self, state: SimulationState) -> None:
        if state == self.state:
            return
        self.state = state
        if self.on_state_change is not None:
            self.on_state_change(state)

    def select_source(self, node_id: str | None) -> None:
        self._set_state(select_source(self.state, node_id))

    def select_destination(self, node_id: str | None) -> None:
        self._set_state(select_destination(self.state, node_id))

    def send_packet(self) -> bool:
        """Route a packet between the selected nodes and start the animation.

        Returns ``False`` when nothing was sent; the reason is in
        ``state.message``.
        """

        state = plan_route(self.state, self.graph)
        self._set_state(state)
        if not state.is_animating:
            if state.message:
                logger.info("packet not sent: %s", state.message)
            return False
        logger.info(
            "sending packet along %s (%s)",
            "-".join(path_node_ids(state.path)),
            state.message,
        )
        self.clock.begin(state.path, start_time=self.clock.now() + self.start_delay)
        return True

    def regenerate(self, node_count: int | None = None) -> GraphModel:
        """Replace the topology with a random one and clear the session."""

        self.clock.cancel()
        self.graph = generate_topology(node_count, rng=self._rng)
        logger.info(
            "generated network with %d nodes and %d edges",
            len(self.graph.nodes),
            len(self.graph.edges),
        )
        self._set_state(reset_state())
        return self.graph

    def _handle_progress(self, view: PacketView) -> None:
        if self.on_progress is not None:
            self.on_progress(view)

    def _handle_complete(self, view: PacketView) -> None:
        logger.info("packet delivered to %s", self.state.destination_id)
        self._set_state(mark_delivered(self.state))
