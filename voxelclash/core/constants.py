from enum import Enum

GRID_SIZE = 3
CELL_COUNT = GRID_SIZE**3

# 6-connectivity: +-1 on exactly one axis
NEIGHBOR_OFFSETS = ((-1, 0, 0), (1, 0, 0), (0, -1, 0), (0, 1, 0), (0, 0, -1), (0, 0, 1))

MIN_CLUSTER_SIZE = 3
CLUSTER_BASE_POINTS = 10
CLUSTER_STEP_POINTS = 5

DEFAULT_AI_MOVE_DELAY = 0.5  # seconds

AI_BLOCKING = "blocking"
AI_RANDOM = "random"
AI_DEFAULT = AI_BLOCKING


class Owner(Enum):
    UNCLAIMED = "unclaimed"
    PLAYER = "player"
    COMPUTER = "computer"

    @property
    def opponent(self) -> "Owner":
        if self is Owner.PLAYER:
            return Owner.COMPUTER
        if self is Owner.COMPUTER:
            return Owner.PLAYER
        raise ValueError("UNCLAIMED has no opponent")


SIDES = (Owner.PLAYER, Owner.COMPUTER)


class TurnPhase(Enum):
    AWAITING_START = "awaiting_start"
    PLAYER_TURN = "player_turn"
    COMPUTER_TURN = "computer_turn"
    GAME_OVER = "game_over"


class Winner(Enum):
    PLAYER = "player"
    COMPUTER = "computer"
    TIE = "tie"
