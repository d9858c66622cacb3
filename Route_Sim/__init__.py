"""Route_Sim package initialization."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from .simulator import RoutingSimulator

__all__ = ["RoutingSimulator"]


def __getattr__(name: str) -> Any:  # pragma: no cover - attribute access
    """Lazily expose RoutingSimulator."""

    if name == "RoutingSimulator":
        from .simulator import RoutingSimulator as _RoutingSimulator

        return _RoutingSimulator
    raise AttributeError(name)
