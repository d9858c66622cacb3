import sys
from copy import deepcopy
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from Route_Sim.config import Config


class FakeTime:
    """Millisecond clock advanced by hand."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture(autouse=True)
def _restore_config():
    """Undo any Config mutation made by a test."""

    saved = {
        key: deepcopy(value)
        for key, value in vars(Config).items()
        if not key.startswith("_") and not isinstance(value, (classmethod, staticmethod))
    }
    yield
    for key, value in saved.items():
        setattr(Config, key, value)


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()
