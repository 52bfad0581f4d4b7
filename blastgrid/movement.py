"""Movement directions, axes and powerup kinds."""

from enum import Enum, auto

from blastgrid.constants import TILE_SIZE


class DirectionAxis(Enum):
    """The axis a direction moves along."""

    HORIZONTAL = auto()
    VERTICAL = auto()


class Direction(Enum):
    """One of the four grid directions."""

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()

    def to_delta(self) -> tuple[float, float]:
        """Return the offset of one tile in this direction."""
        return _DELTAS[self]

    def axis(self) -> DirectionAxis:
        """Return the axis this direction lies on."""
        if self in (Direction.UP, Direction.DOWN):
            return DirectionAxis.VERTICAL
        return DirectionAxis.HORIZONTAL


_DELTAS = {
    Direction.UP: (0.0, TILE_SIZE),
    Direction.DOWN: (0.0, -TILE_SIZE),
    Direction.LEFT: (-TILE_SIZE, 0.0),
    Direction.RIGHT: (TILE_SIZE, 0.0),
}


class PowerupType(Enum):
    """The kinds of powerup a crate can drop."""

    MAX_BOMBS = auto()
    BOMB_POWER = auto()
    PLAYER_SPEED = auto()