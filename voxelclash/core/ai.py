"""Opponent strategies.

The default strategy is purely defensive: it looks for cells that would let
the opponent complete or extend a scoring cluster and takes the last such cell
in ascending index order. Otherwise it plays a random free cell.
"""

import logging
import random
from typing import Optional, Tuple

from voxelclash.core.ai_strategies_base import (
    STRATEGY_REGISTRY,
    AIStrategy,
    random_unclaimed,
    register_strategy,
)
from voxelclash.core.connectivity import connected_group
from voxelclash.core.constants import AI_BLOCKING, AI_DEFAULT, AI_RANDOM, MIN_CLUSTER_SIZE, Owner
from voxelclash.core.errors import ConfigError
from voxelclash.core.grid import GridModel

logger = logging.getLogger(__name__)


@register_strategy(AI_BLOCKING)
class BlockingStrategy(AIStrategy):
    """Preempt the cell that would give the opponent a cluster of 3 or more."""

    def find_blocking_move(self) -> Optional[int]:
        opponent_owned = self.grid.owned_by(self.side.opponent)
        block = None
        for i in self.free_cells():
            if len(connected_group(i, opponent_owned | {i})) >= MIN_CLUSTER_SIZE:
                block = i  # last candidate wins
        return block

    def generate_move(self) -> Tuple[int, str]:
        block = self.find_blocking_move()
        if block is not None:
            return block, f"Blocking cell {block} to stop a {self.side.opponent.value} cluster."
        return random_unclaimed(self.free_cells(), self.rng)


@register_strategy(AI_RANDOM)
class RandomStrategy(AIStrategy):
    def generate_move(self) -> Tuple[int, str]:
        return random_unclaimed(self.free_cells(), self.rng)


def create_strategy(
    strategy: str,
    grid: GridModel,
    side: Owner = Owner.COMPUTER,
    rng: Optional[random.Random] = None,
) -> AIStrategy:
    try:
        strategy_class = STRATEGY_REGISTRY[strategy]
    except KeyError:
        raise ConfigError(
            f"Unknown AI strategy: {strategy!r}",
            user_message=f"Unknown opponent strategy '{strategy}'. Available: {', '.join(sorted(STRATEGY_REGISTRY))}",
            context={"strategy": strategy},
        ) from None
    return strategy_class(grid, side, rng)


def generate_ai_move(
    grid: GridModel,
    strategy: str = AI_DEFAULT,
    rng: Optional[random.Random] = None,
    side: Owner = Owner.COMPUTER,
) -> Tuple[int, str]:
    """Choose the opponent move with the named strategy.

    Raises:
        NoFreeCellError: the grid is full
        ConfigError: unknown strategy name
    """
    move, ai_thoughts = create_strategy(strategy, grid, side, rng).generate_move()
    logger.debug("[%s] %s", strategy, ai_thoughts)
    return move, ai_thoughts


def choose_move(grid: GridModel, rng: Optional[random.Random] = None, strategy: str = AI_DEFAULT) -> int:
    return generate_ai_move(grid, strategy, rng)[0]
