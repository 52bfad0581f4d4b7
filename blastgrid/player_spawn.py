"""Places the user's player on a free tile of the arena."""

from __future__ import annotations

import random
from typing import Optional

from blastgrid import entities
from blastgrid.components import Destroyable, Wall
from blastgrid.constants import MAP_SIZE
from blastgrid.grid import WallLookup, destroy_wall, direction_deltas, tile_pos
from blastgrid.world import World


class NoSpawnPointError(RuntimeError):
    """Raised when every tile of the arena is blocked by a solid wall."""


def _is_destroyable_wall(world: World, entity: int) -> bool:
    return world.has(entity, Wall) and world.has(entity, Destroyable)


def _spawn_candidates(world: World, wall_lookup: WallLookup) -> list[tuple[float, float]]:
    candidates = []
    for y in range(MAP_SIZE):
        for x in range(MAP_SIZE):
            position = tile_pos(x, y)
            wall = wall_lookup.get(*position)
            if wall is None or _is_destroyable_wall(world, wall):
                candidates.append(position)
    return candidates


def _clear_surroundings(world: World, wall_lookup: WallLookup, x: float, y: float) -> None:
    positions = [(x, y)] + [(x + dx, y + dy) for dx, dy in direction_deltas()]
    for px, py in positions:
        wall = wall_lookup.get(px, py)
        if wall is not None and _is_destroyable_wall(world, wall):
            destroy_wall(world, wall_lookup, px, py, wall)


def spawn_player(
    world: World, wall_lookup: WallLookup, rng: Optional[random.Random] = None
) -> int:
    """Spawn the user's player on a random free tile, clearing crates around it.

    Raises NoSpawnPointError when no tile is free of solid walls.
    """
    if rng is None:
        rng = random.Random()
    candidates = _spawn_candidates(world, wall_lookup)
    if not candidates:
        raise NoSpawnPointError("No spawn point found")
    x, y = rng.choice(candidates)
    _clear_surroundings(world, wall_lookup, x, y)
    return entities.create_user_player(world, x, y)