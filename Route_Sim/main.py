# main.py

"""Entry point for headless packet routing runs."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from typing import Any, TextIO

from Route_Sim.config import Config, load_config
from Route_Sim.engine.pathfinding import path_cost, path_node_ids, shortest_path
from Route_Sim.engine.schedulers import BlockingScheduler
from Route_Sim.graph.generator import generate_topology
from Route_Sim.graph.model import GraphModel
from Route_Sim.view import PacketView

# Config attributes that should not be exposed as CLI flags
_PRIVATE_KEYS = {"base_dir", "config_file"}

# Flag types for attributes whose default does not reveal one
_FLAG_TYPES = {"run_seed": int}


def _configure_logging(level: str = "INFO", filename: str | None = None) -> None:
    """Configure application logging and capture uncaught exceptions."""

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=filename,
        filemode="a",
        force=True,
    )

    def _log_excepthook(exc_type, exc, tb) -> None:
        logging.getLogger(__name__).exception(
            "Uncaught exception", exc_info=(exc_type, exc, tb)
        )

    sys.excepthook = _log_excepthook


def _config_defaults() -> dict[str, Any]:
    """Return a dictionary of all public settings defined on :class:`Config`."""
    defaults: dict[str, Any] = {}
    for key, value in Config.__dict__.items():
        if key.startswith("_") or key in _PRIVATE_KEYS:
            continue
        if callable(value) or isinstance(value, (classmethod, staticmethod)):
            continue
        defaults[key] = value
    return defaults


def _add_config_args(
    parser: argparse.ArgumentParser, data: dict[str, Any], prefix: str = ""
) -> None:
    """Recursively add CLI flags based on ``data`` keys."""
    for key, value in data.items():
        full = f"{prefix}{key}"
        if isinstance(value, dict):
            _add_config_args(parser, value, prefix=f"{full}.")
            continue
        arg_type = _FLAG_TYPES.get(full, type(value))
        dest = full.replace(".", "_")
        if isinstance(value, bool):
            parser.add_argument(
                f"--{full}", type=lambda x: x.lower() == "true", dest=dest
            )
        else:
            parser.add_argument(f"--{full}", type=arg_type, dest=dest)


def _apply_overrides(
    args: argparse.Namespace, data: dict[str, Any], prefix: str = ""
) -> None:
    """Apply CLI overrides back onto :class:`Config`."""
    for key, value in data.items():
        full = f"{prefix}{key}"
        if isinstance(value, dict):
            _apply_overrides(args, value, prefix=f"{full}.")
            continue
        override = getattr(args, full.replace(".", "_"), None)
        if override is None:
            continue
        parts = full.split(".")
        target: Any = Config
        for part in parts[:-1]:
            target = getattr(target, part)
        if isinstance(target, dict):
            target[parts[-1]] = override
        else:
            setattr(target, parts[-1], override)


@dataclass
class MainService:
    """Parse ``route`` arguments and run one routing request."""

    argv: list[str] | None = None
    out: TextIO | None = None

    def run(self) -> int:
        args = self._parse_args()
        if args.nodes is not None:
            Config.node_count = args.nodes
        if args.seed is not None:
            Config.run_seed = args.seed
        if args.duration is not None:
            Config.animation["duration_ms"] = args.duration
        _apply_overrides(args, _config_defaults())
        _configure_logging(Config.log_level, args.log_file)
        out = self.out or sys.stdout

        graph = generate_topology() if args.random else GraphModel.default()
        if graph.find_node(args.source) is None or graph.find_node(args.dest) is None:
            print(f"unknown node; available: {', '.join(graph.node_ids())}", file=out)
            return 2
        if args.source == args.dest:
            print("Source and destination must be different nodes", file=out)
            return 2
        if args.animate:
            return self._run_animated(graph, args.source, args.dest, out)

        path = shortest_path(graph, args.source, args.dest)
        if not path:
            print("No path found between selected nodes", file=out)
            return 1
        print(
            f"{' -> '.join(path_node_ids(path))} (total cost {path_cost(path)})",
            file=out,
        )
        return 0

    # ------------------------------------------------------------------
    def _run_animated(
        self, graph: GraphModel, source: str, dest: str, out: TextIO
    ) -> int:
        from Route_Sim.simulator import RoutingSimulator

        scheduler = BlockingScheduler(Config.animation["frame_interval_ms"])
        sim = RoutingSimulator(scheduler, graph=graph)

        def _print_frame(view: PacketView) -> None:
            seg = sim.state.path[view.segment_index]
            print(
                f"{view.progress:6.1%} {seg.from_node['id']}->{seg.to_node['id']} "
                f"({view.x:.1f}, {view.y:.1f})",
                file=out,
            )

        sim.on_progress = _print_frame
        sim.select_source(source)
        sim.select_destination(dest)
        sent = sim.send_packet()
        print(sim.state.message, file=out)
        if not sent:
            return 1
        scheduler.run()
        print(sim.state.message, file=out)
        return 0

    # ------------------------------------------------------------------
    def _parse_args(self) -> argparse.Namespace:
        initial = argparse.ArgumentParser(add_help=False)
        initial.add_argument(
            "--config", default=None, help="Path to a JSON or YAML configuration file"
        )
        known, _ = initial.parse_known_args(self.argv)
        if known.config:
            load_config(known.config)

        parser = argparse.ArgumentParser(
            prog="rs route",
            parents=[initial],
            description="Route a packet along the cheapest path",
        )
        parser.add_argument("--source", required=True, help="Source node id")
        parser.add_argument("--dest", required=True, help="Destination node id")
        parser.add_argument(
            "--random",
            action="store_true",
            help="Route over a generated topology instead of the demo network",
        )
        parser.add_argument(
            "--animate", action="store_true", help="Print animation frames"
        )
        parser.add_argument("--nodes", type=int, default=None, help="Number of nodes")
        parser.add_argument("--seed", type=int, default=None, help="Random seed")
        parser.add_argument(
            "--duration", type=float, default=None, help="Animation length in ms"
        )
        parser.add_argument("--log-file", default=None, help="Append logs to this file")
        _add_config_args(parser, _config_defaults())
        return parser.parse_args(self.argv)
