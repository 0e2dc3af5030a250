"""AI strategy base classes and utilities.

- AIStrategy: base class for all opponent strategies
- STRATEGY_REGISTRY: strategy name -> class
- register_strategy: registration decorator
- random_unclaimed: uniform fallback move
"""

from abc import ABC, abstractmethod
import logging
import random
from typing import Callable, Dict, List, Optional, Tuple, Type

from voxelclash.core.constants import Owner
from voxelclash.core.errors import NoFreeCellError
from voxelclash.core.grid import GridModel

logger = logging.getLogger(__name__)


# =============================================================================
# Strategy Registry
# =============================================================================

STRATEGY_REGISTRY: Dict[str, type] = {}


def register_strategy(strategy_name: str) -> Callable[[Type["AIStrategy"]], Type["AIStrategy"]]:
    """Decorator to register a strategy class in the registry."""
    def decorator(strategy_class: Type["AIStrategy"]) -> Type["AIStrategy"]:
        STRATEGY_REGISTRY[strategy_name] = strategy_class
        return strategy_class
    return decorator


# =============================================================================
# Move Generation Utilities
# =============================================================================

def random_unclaimed(free: List[int], rng: random.Random) -> Tuple[int, str]:
    """Pick a uniformly random cell from ``free``."""
    move = free[rng.randrange(len(free))]
    return move, f"Playing random move {move} from {len(free)} free cells."


# =============================================================================
# AIStrategy Base Class
# =============================================================================

class AIStrategy(ABC):
    """Base strategy class for opponent move generation.

    All strategies inherit from this class and implement generate_move().
    """

    def __init__(self, grid: GridModel, side: Owner = Owner.COMPUTER, rng: Optional[random.Random] = None) -> None:
        """Initialize the strategy.

        Args:
            grid: Current grid (read only)
            side: The side the strategy plays for
            rng: Random source for fallback moves
        """
        self.grid = grid
        self.side = side
        self.rng = rng or random.Random()
        self.strategy_name = self.__class__.__name__

    def free_cells(self) -> List[int]:
        """Unclaimed cells in ascending order.

        Raises:
            NoFreeCellError: the grid is full
        """
        free = self.grid.unclaimed()
        if not free:
            raise NoFreeCellError(
                f"[{self.strategy_name}] No free cell available",
                context={"claimed": self.grid.claimed_count()},
            )
        return free

    @abstractmethod
    def generate_move(self) -> Tuple[int, str]:
        """Generate a move and explanation.

        Returns:
            Tuple of (cell index, ai_thoughts string)
        """
        pass
