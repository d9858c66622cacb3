# config.py

import os


class Config:
    """Global configuration for topology generation and packet animation.

    Attributes
    ----------
    node_count:
        Number of routers placed by the topology generator. Clamped to the
        number of available ``node_labels``.
    node_labels:
        Labels handed out to generated nodes in order. Labels double as the
        node ids.
    canvas:
        Drawing surface used for node placement. ``margin_x`` and
        ``margin_y`` keep nodes away from the border so positions are drawn
        from ``[margin_x, width - margin_x)`` and ``[margin_y, height -
        margin_y)``.
    min_separation:
        Minimum Euclidean distance between two generated nodes.
    placement_attempts:
        Rejection sampling budget per node. Once exhausted the last drawn
        position is kept even if it violates ``min_separation``.
    extra_edges:
        Inclusive ``min``/``max`` range for the number of additional edges
        drawn on top of the spanning tree.
    edge_cost:
        Inclusive ``min``/``max`` range for random edge costs.
    animation:
        ``duration_ms`` is the total travel time of a packet,
        ``start_delay_ms`` the pause before it leaves the source and
        ``frame_interval_ms`` the frame period used by headless runs.
    node_radius:
        Hit-test radius used when locating a node under a pointer.
    run_seed:
        Seed for reproducible topologies. ``None`` draws fresh entropy.
    log_level:
        Level name passed to :func:`logging.basicConfig`.
    """

    base_dir = os.path.abspath(os.path.dirname(__file__))
    config_file: str | None = None

    node_count = 7
    node_labels = "ABCDEFGHIJ"
    canvas = {"width": 900.0, "height": 560.0, "margin_x": 100.0, "margin_y": 80.0}
    min_separation = 100.0
    placement_attempts = 100
    extra_edges = {"min": 2, "max": 4}
    edge_cost = {"min": 5, "max": 19}
    animation = {
        "duration_ms": 2500.0,
        "start_delay_ms": 500.0,
        "frame_interval_ms": 16.0,
    }
    node_radius = 24.0
    run_seed: int | None = None
    log_level = "INFO"

    @classmethod
    def load_from_file(cls, path: str) -> dict:
        """Load configuration values from a JSON or YAML file.

        Only keys that already exist as attributes on ``Config`` will be
        assigned. Nested dictionaries are merged when the existing attribute
        is also a ``dict``. Files ending in ``.yaml`` or ``.yml`` are parsed
        with PyYAML, anything else as JSON.

        Parameters
        ----------
        path:
            Path to the configuration file.

        Returns
        -------
        dict
            The mapping read from ``path``.
        """

        if not os.path.exists(path):
            raise FileNotFoundError(path)
        data = _read_mapping(path)
        cls.config_file = os.path.abspath(path)

        for key, value in data.items():
            if key.startswith("_") or not hasattr(cls, key):
                continue
            current = getattr(cls, key)
            if callable(current):
                continue
            if isinstance(current, dict) and isinstance(value, dict):
                current.update(value)
            else:
                setattr(cls, key, value)
        return data


def _read_mapping(path: str) -> dict:
    with open(path) as f:
        if path.endswith((".yaml", ".yml")):
            import yaml

            data = yaml.safe_load(f) or {}
        else:
            import json

            data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping at the top level")
    return data


def load_config(path: str) -> dict:
    """Load configuration from ``path`` and return the data."""
    return Config.load_from_file(path)
