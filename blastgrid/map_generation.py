"""Builds the arena of walls and wooden crates."""

from __future__ import annotations

import random
from enum import Enum, auto
from typing import Optional

from blastgrid import entities
from blastgrid.constants import MAP_SIZE, TILE_SIZE, WOOD_CRATE_SPAWN_RATE
from blastgrid.grid import WallLookup, tile_pos
from blastgrid.world import World


class _WallType(Enum):
    WALL = auto()
    CRATE = auto()


def _place(world: World, wall_lookup: WallLookup, x: int, y: int, wall_type: _WallType) -> None:
    wx = x * TILE_SIZE
    wy = y * TILE_SIZE
    if wall_type is _WallType.WALL:
        entity = entities.create_wall(world, wx, wy)
    else:
        entity = entities.create_wood_crate(world, wx, wy)
    wall_lookup.set(wx, wy, entity)


def _generate_walls(world: World, wall_lookup: WallLookup) -> None:
    last = MAP_SIZE - 1
    for y in range(MAP_SIZE):
        _place(world, wall_lookup, 0, y, _WallType.WALL)
    for x in range(1, last):
        _place(world, wall_lookup, x, 0, _WallType.WALL)
    for y in range(MAP_SIZE):
        _place(world, wall_lookup, last, y, _WallType.WALL)
    for x in range(1, last):
        _place(world, wall_lookup, x, last, _WallType.WALL)
    for y in range(1, last):
        for x in range(1, last):
            if x % 2 == 0 and y % 2 == 0:
                _place(world, wall_lookup, x, y, _WallType.WALL)


def _generate_wood_crates(world: World, wall_lookup: WallLookup, rng) -> None:
    for y in range(1, MAP_SIZE - 1):
        for x in range(1, MAP_SIZE - 1):
            roll = rng.random()
            if roll <= WOOD_CRATE_SPAWN_RATE and wall_lookup.get(*tile_pos(x, y)) is None:
                _place(world, wall_lookup, x, y, _WallType.CRATE)


def generate_map(world: World, wall_lookup: WallLookup, rng: Optional[random.Random] = None) -> None:
    """Fill the arena: a solid border, a pillar on every even tile, then random crates."""
    if rng is None:
        rng = random.Random()
    _generate_walls(world, wall_lookup)
    _generate_wood_crates(world, wall_lookup, rng)