"""Per-tick movement systems: walking, velocity, wall collision and snapping."""

from __future__ import annotations

import math

from blastgrid.collision import (
    are_collision_points_colliding,
    walls_colliding_with_collision_points,
)
from blastgrid.components import (
    Collider,
    Hitbox,
    PowerupStats,
    Transform,
    Velocity,
    Walker,
    WalkerAssist,
    WalkerConstrainer,
    Wall,
)
from blastgrid.constants import BASE_MOVE_SPEED, MOVE_SPEED_LEVEL_INCREASE, TILE_SIZE
from blastgrid.grid import WallLookup, closest_tile_pos
from blastgrid.movement import Direction, DirectionAxis
from blastgrid.world import World

_SLIP_FACTOR = 3.0

_HORIZONTAL_SIGN = {Direction.LEFT: -1.0, Direction.RIGHT: 1.0}
_VERTICAL_SIGN = {Direction.UP: 1.0, Direction.DOWN: -1.0}


def _rounded_magnitude(value: float) -> float:
    """Return ``abs(value)`` rounded to the nearest integer, halves away from zero."""
    return float(math.floor(abs(value) + 0.5))


def apply_air_resistance(world: World) -> None:
    """Stop every moving entity; velocity only lasts a single tick."""
    for _, velocity in world.query(Velocity):
        velocity.x = 0.0
        velocity.y = 0.0


def apply_velocity(world: World) -> None:
    """Move every entity by its velocity."""
    for _, transform, velocity in world.query(Transform, Velocity):
        transform.x += velocity.x
        transform.y += velocity.y


def apply_walkers(world: World) -> None:
    """Add each walker's requested movement, scaled by its speed level, to its velocity."""
    for _, velocity, walker, stats in world.query(Velocity, Walker, PowerupStats):
        move_speed = BASE_MOVE_SPEED + MOVE_SPEED_LEVEL_INCREASE * stats.player_speed
        velocity.x += _HORIZONTAL_SIGN.get(walker.horizontal_direction, 0.0) * move_speed
        velocity.y += _VERTICAL_SIGN.get(walker.vertical_direction, 0.0) * move_speed


def resolve_collisions(world: World) -> None:
    """Push colliders back out of the walls they moved into, one axis at a time."""
    walls = [(transform, wall) for _, transform, wall in world.query(Transform, Wall, without=(Collider,))]
    for entity, transform, velocity, _ in world.query(Transform, Velocity, Collider):
        for wall_transform, wall in walls:
            if entity in wall.ignore:
                continue
            if not are_collision_points_colliding(transform, wall_transform):
                continue

            new_x, new_y = transform.x, transform.y
            prev_x = new_x - velocity.x
            prev_y = new_y - velocity.y

            transform.x, transform.y = new_x, prev_y
            if are_collision_points_colliding(transform, wall_transform):
                if new_x >= prev_x:
                    transform.x = wall_transform.x - TILE_SIZE
                else:
                    transform.x = wall_transform.x + TILE_SIZE
                velocity.x = 0.0
            amended_x = transform.x

            transform.x, transform.y = prev_x, new_y
            if are_collision_points_colliding(transform, wall_transform):
                if new_y >= prev_y:
                    transform.y = wall_transform.y - TILE_SIZE
                else:
                    transform.y = wall_transform.y + TILE_SIZE
                velocity.y = 0.0
            amended_y = transform.y

            transform.x, transform.y = amended_x, amended_y


def _exclusive_direction(walker: Walker) -> Direction | None:
    horizontal, vertical = walker.horizontal_direction, walker.vertical_direction
    if horizontal is not None and vertical is None:
        return horizontal
    if vertical is not None and horizontal is None:
        return vertical
    return None


def assist_walkers(world: World, wall_lookup: WallLookup) -> None:
    """Nudge walkers sideways so they slide around the corner of a wall they clip."""
    for _, transform, walker, *_ in world.query(Transform, Walker, Velocity, Collider, WalkerAssist):
        if closest_tile_pos(transform.x, transform.y) == (transform.x, transform.y):
            continue

        direction = _exclusive_direction(walker)
        if direction is None:
            continue

        dx, dy = direction.to_delta()
        ghost = transform.copy()
        ghost.x += dx / 2.0
        ghost.y += dy / 2.0

        wall_entities = walls_colliding_with_collision_points(ghost, wall_lookup)
        if len(wall_entities) != 1:
            continue
        wall_entity = wall_entities[0]
        if not world.has(wall_entity, Wall) or world.has(wall_entity, Collider):
            continue
        wall_transform = world.get(wall_entity, Transform)
        if wall_transform is None:
            continue

        if direction.axis() is DirectionAxis.HORIZONTAL:
            offset = transform.y - wall_transform.y
            if _rounded_magnitude(offset) == TILE_SIZE or abs(offset) < TILE_SIZE / _SLIP_FACTOR:
                continue
            walker.vertical_direction = Direction.DOWN if offset <= 0.0 else Direction.UP
        else:
            offset = transform.x - wall_transform.x
            if _rounded_magnitude(offset) == TILE_SIZE or abs(offset) < TILE_SIZE / _SLIP_FACTOR:
                continue
            walker.horizontal_direction = Direction.LEFT if offset <= 0.0 else Direction.RIGHT


def constrain_walker_directions(world: World, wall_lookup: WallLookup) -> None:
    """On a tile centre, drop the non-priority direction when the priority way is open."""
    for _, walker, transform, _ in world.query(Walker, Transform, WalkerConstrainer):
        if closest_tile_pos(transform.x, transform.y) != (transform.x, transform.y):
            continue
        horizontal, vertical = walker.horizontal_direction, walker.vertical_direction
        if horizontal is None or vertical is None:
            continue

        prioritise_horizontal = walker.priority_direction_axis is DirectionAxis.HORIZONTAL
        dx, dy = (horizontal if prioritise_horizontal else vertical).to_delta()
        if wall_lookup.get(transform.x + dx, transform.y + dy) is not None:
            continue

        if prioritise_horizontal:
            walker.vertical_direction = None
        else:
            walker.horizontal_direction = None


def constrain_walker_positions(world: World) -> None:
    """Snap walkers onto a tile centre they passed over during this tick."""
    for _, transform, constrainer, _ in world.query(Transform, WalkerConstrainer, Walker):
        tile_x, tile_y = closest_tile_pos(transform.x, transform.y)

        if constrainer.prev_x < tile_x < transform.x or transform.x < tile_x < constrainer.prev_x:
            transform.x = tile_x
        if constrainer.prev_y < tile_y < transform.y or transform.y < tile_y < constrainer.prev_y:
            transform.y = tile_y

        constrainer.prev_x = transform.x
        constrainer.prev_y = transform.y


def follow_hitboxes(world: World) -> None:
    """Move each hitbox to the position of its parent."""
    for entity, transform, _ in world.query(Transform, Hitbox):
        parent = world.parent_of(entity)
        if parent is None or world.has(parent, Hitbox):
            continue
        parent_transform = world.get(parent, Transform)
        if parent_transform is None:
            continue
        transform.x = parent_transform.x
        transform.y = parent_transform.y