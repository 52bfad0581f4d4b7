"""Point-in-box collision checks between transforms."""

from __future__ import annotations

from enum import Enum, auto

from blastgrid.components import Transform
from blastgrid.grid import WallLookup, closest_tile_pos


class CollisionPoint(Enum):
    """The corners, edge midpoints and centre of a box."""

    TOP_LEFT = auto()
    TOP_RIGHT = auto()
    BOTTOM_LEFT = auto()
    BOTTOM_RIGHT = auto()
    LEFT = auto()
    TOP = auto()
    RIGHT = auto()
    BOTTOM = auto()
    CENTER = auto()


_OFFSETS = {
    CollisionPoint.TOP_LEFT: (-1, 1),
    CollisionPoint.TOP_RIGHT: (1, 1),
    CollisionPoint.BOTTOM_LEFT: (-1, -1),
    CollisionPoint.BOTTOM_RIGHT: (1, -1),
    CollisionPoint.LEFT: (-1, 0),
    CollisionPoint.TOP: (0, 1),
    CollisionPoint.RIGHT: (1, 0),
    CollisionPoint.BOTTOM: (0, -1),
    CollisionPoint.CENTER: (0, 0),
}


def collision_point_position(transform: Transform, point: CollisionPoint) -> tuple[float, float]:
    """Return the world position of ``point`` on the box of ``transform``."""
    sx, sy = _OFFSETS[point]
    half_width = transform.scale_x / 2.0
    half_height = transform.scale_y / 2.0
    x = transform.x + sx * half_width if sx else transform.x
    y = transform.y + sy * half_height if sy else transform.y
    return (x, y)


def walls_colliding_with_collision_points(
    transform: Transform, wall_lookup: WallLookup
) -> list[int]:
    """Return the distinct walls on the tiles under any collision point of ``transform``."""
    walls: dict[int, None] = {}
    for point in CollisionPoint:
        tile = closest_tile_pos(*collision_point_position(transform, point))
        entity = wall_lookup.get(*tile)
        if entity is not None:
            walls.setdefault(entity)
    return list(walls)


def _is_point_inside(point: CollisionPoint, colliding: Transform, collided: Transform) -> bool:
    half_width = collided.scale_x / 2.0
    half_height = collided.scale_y / 2.0
    x, y = collision_point_position(colliding, point)
    return (
        collided.x - half_width < x < collided.x + half_width
        and collided.y - half_height < y < collided.y + half_height
    )


def are_collision_points_colliding(colliding: Transform, collided: Transform) -> bool:
    """Return whether any collision point of ``colliding`` lies strictly inside ``collided``."""
    return any(_is_point_inside(point, colliding, collided) for point in CollisionPoint)