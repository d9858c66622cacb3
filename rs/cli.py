"""Console entrypoint for the ``rs`` command."""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from Route_Sim.config import Config, load_config
from Route_Sim.graph.generator import generate_topology


def main(argv: Optional[List[str]] = None) -> int:
    """Parse ``rs`` CLI arguments and dispatch to the runner."""

    parser = argparse.ArgumentParser(prog="rs")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("route", help="Route a packet between two nodes", add_help=False)
    gen_p = sub.add_parser("generate", help="Print a random topology as JSON")
    gen_p.add_argument("--nodes", type=int, default=None, help="Number of nodes")
    gen_p.add_argument("--seed", type=int, default=None, help="Random seed")
    gen_p.add_argument("--config", help="JSON or YAML configuration file")

    args, rest = parser.parse_known_args(argv)
    if args.command == "route":
        from Route_Sim.main import MainService

        return MainService(argv=rest).run()

    if rest:
        parser.error(f"unrecognized arguments: {' '.join(rest)}")
    if args.config:
        load_config(args.config)
    seed = args.seed if args.seed is not None else Config.run_seed
    graph = generate_topology(args.nodes, seed=seed)
    json.dump(graph.to_dict(), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
