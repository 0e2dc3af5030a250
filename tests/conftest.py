"""
Pytest configuration and shared fixtures for VoxelClash tests.

This module provides:
- Grid factories for hand-built positions
- A TurnController wired to a ManualScheduler and a seeded random source
- An event recorder subscribed to every event type
"""

import random
from typing import Dict, Iterable

import pytest

from voxelclash.common.typed_config import GameConfig
from voxelclash.core.constants import Owner
from voxelclash.core.game import TurnController
from voxelclash.core.grid import GridModel
from voxelclash.core.scheduler import ManualScheduler
from voxelclash.core.state import StateNotifier

from tests.fakes import EventRecorder

SEED = 1234


# ---------------------------------------------------------------------------
# Grid factories
# ---------------------------------------------------------------------------


def make_grid(cells: Dict[Owner, Iterable[int]]) -> GridModel:
    """Build a grid with the given cells claimed per side."""
    grid = GridModel()
    for side, indices in cells.items():
        for index in indices:
            grid.claim(index, side)
    return grid


@pytest.fixture
def grid():
    """Empty grid."""
    return GridModel()


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(SEED)


# ---------------------------------------------------------------------------
# Game fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def notifier():
    return StateNotifier()


@pytest.fixture
def recorder(notifier):
    rec = EventRecorder()
    notifier.subscribe_all(rec)
    return rec


@pytest.fixture
def make_game(notifier, scheduler):
    """Factory fixture for TurnController instances sharing the fixtures' notifier and scheduler."""

    def _make_game(strategy: str = "blocking", delay: float = 0.5, seed: int = SEED) -> TurnController:
        config = GameConfig(ai_move_delay=delay, ai_strategy=strategy, seed=seed)
        return TurnController(notifier=notifier, scheduler=scheduler, rng=random.Random(seed), config=config)

    return _make_game


@pytest.fixture
def game(make_game):
    """Default controller (blocking opponent), not started."""
    return make_game()


@pytest.fixture
def started_game(game, recorder):
    """Started controller with an attached recorder (cleared after start)."""
    game.start()
    recorder.clear()
    return game
