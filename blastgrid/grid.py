"""Tile grid helpers and the wall position index."""

from __future__ import annotations

import math
from typing import Optional

from blastgrid.components import Transform
from blastgrid.constants import TILE_SIZE
from blastgrid.world import World


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _key(x: float, y: float) -> tuple[float, float]:
    # Fold -0.0 into 0.0 so both name the same tile.
    return (x + 0.0, y + 0.0)


class WallLookup:
    """Maps tile positions to the wall entity standing there."""

    def __init__(self) -> None:
        self._walls: dict[tuple[float, float], int] = {}

    def __len__(self) -> int:
        return len(self._walls)

    def __contains__(self, position: tuple[float, float]) -> bool:
        return _key(*position) in self._walls

    def get(self, x: float, y: float) -> Optional[int]:
        """Return the wall at ``(x, y)``, or None."""
        return self._walls.get(_key(x, y))

    def set(self, x: float, y: float, entity: int) -> None:
        """Record ``entity`` as the wall at ``(x, y)``."""
        self._walls[_key(x, y)] = entity

    def remove(self, x: float, y: float) -> None:
        """Forget the wall at ``(x, y)`` if there is one."""
        self._walls.pop(_key(x, y), None)


def destroy_wall(world: World, wall_lookup: WallLookup, x: float, y: float, entity: int) -> None:
    """Despawn a wall entity and drop it from the lookup."""
    world.despawn(entity)
    wall_lookup.remove(x, y)


def make_transform(x: float, y: float, z: float, scale: float) -> Transform:
    """Return a square transform of side ``scale`` centred at ``(x, y)``."""
    return Transform(x=x, y=y, z=z, scale_x=scale, scale_y=scale, scale_z=1.0)


def tile_pos(x: float, y: float) -> tuple[float, float]:
    """Convert tile coordinates to world coordinates."""
    return (x * TILE_SIZE, y * TILE_SIZE)


def closest_tile_pos(x: float, y: float) -> tuple[float, float]:
    """Snap a world position to the centre of the nearest tile."""
    return (
        _round_half_away(x / TILE_SIZE) * TILE_SIZE,
        _round_half_away(y / TILE_SIZE) * TILE_SIZE,
    )


def direction_deltas() -> list[tuple[float, float]]:
    """Return the one-tile offsets right, left, up and down."""
    return [
        (TILE_SIZE, 0.0),
        (-TILE_SIZE, 0.0),
        (0.0, TILE_SIZE),
        (0.0, -TILE_SIZE),
    ]