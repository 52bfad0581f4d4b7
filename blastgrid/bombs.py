"""Bomb placement, detonation, explosions and what they leave behind."""

from __future__ import annotations

import math
import random
from typing import Optional

from blastgrid import entities
from blastgrid.collision import are_collision_points_colliding
from blastgrid.components import (
    Bomb,
    BombPlacer,
    Collider,
    Destroyable,
    DropsPowerup,
    Explosion,
    Hitbox,
    Player,
    PowerupPickup,
    PowerupStats,
    Shake,
    Transform,
    Wall,
)
from blastgrid.constants import ITEM_Z, MAX_CAMERA_TRAUMA, POWERUP_DROP_RATE, TILE_SIZE
from blastgrid.grid import WallLookup, closest_tile_pos, destroy_wall, direction_deltas, make_transform
from blastgrid.movement import PowerupType
from blastgrid.world import World

_DROP_ORDER = (PowerupType.BOMB_POWER, PowerupType.PLAYER_SPEED, PowerupType.MAX_BOMBS)


def place_bombs(world: World) -> None:
    """Drop a bomb on the nearest tile for every placer that asked for one and has one left.

    A placer standing on a tile that already holds a bomb keeps its request.
    """
    existing = {(transform.x, transform.y) for _, transform, _ in world.query(Transform, Bomb)}
    colliders = [(entity, transform) for entity, transform, _ in world.query(Transform, Collider)]

    for entity, transform, placer, stats in world.query(Transform, BombPlacer, PowerupStats):
        if placer.wants_to_place and stats.current_bombs > 0:
            x, y = closest_tile_pos(transform.x, transform.y)
            if (x, y) in existing:
                continue
            bomb_transform = make_transform(x, y, ITEM_Z, TILE_SIZE)
            ignore = [
                collider
                for collider, collider_transform in colliders
                if are_collision_points_colliding(collider_transform, bomb_transform)
            ]
            stats.current_bombs -= 1
            entities.create_bomb(world, x, y, ignore, stats.bomb_power, entity)
        placer.wants_to_place = False


def release_bomb_ignores(world: World) -> None:
    """Stop letting colliders pass through a bomb once they have stepped off it."""
    colliders = {entity: transform for entity, transform, _ in world.query(Transform, Collider)}
    for _, bomb_transform, wall, _ in world.query(Transform, Wall, Bomb):
        released = {
            entity
            for entity in wall.ignore
            if entity in colliders
            and not are_collision_points_colliding(colliders[entity], bomb_transform)
        }
        wall.ignore = [entity for entity in wall.ignore if entity not in released]


def cleanup_explosions(world: World) -> None:
    """Age explosion tiles and remove those that have burnt out."""
    for entity, explosion in world.query(Explosion):
        explosion.lifetime -= 1
        if explosion.lifetime <= 0:
            world.despawn(entity)


def apply_explosions(world: World) -> None:
    """Detonate bombs and damage destroyables under explosions; kill players they touch."""
    explosions = [transform for _, transform, _ in world.query(Transform, Explosion)]
    targets = world.query(Transform)

    for explosion_transform in explosions:
        for entity, transform in targets:
            if explosion_transform.x == transform.x and explosion_transform.y == transform.y:
                bomb = world.get(entity, Bomb)
                if bomb is not None:
                    bomb.lifetime = 0
                destroyable = world.get(entity, Destroyable)
                if destroyable is not None and destroyable.invulnerability_lifetime <= 0:
                    destroyable.hitpoints -= 1

            if not world.has(entity, Hitbox):
                continue
            parent = world.parent_of(entity)
            if parent is None or not world.has(parent, Player):
                continue
            if are_collision_points_colliding(explosion_transform, transform):
                world.despawn(parent)


def destroy_destroyables(
    world: World, wall_lookup: WallLookup, rng: Optional[random.Random] = None
) -> None:
    """Tick invulnerability and remove destroyables with no hitpoints, maybe dropping a powerup."""
    if rng is None:
        rng = random.Random()
    for entity, destroyable, transform in world.query(Destroyable, Transform):
        destroyable.invulnerability_lifetime = max(destroyable.invulnerability_lifetime - 1, 0)
        if destroyable.hitpoints > 0:
            continue
        if world.has(entity, Wall):
            destroy_wall(world, wall_lookup, transform.x, transform.y, entity)
        else:
            world.despawn(entity)
        if world.has(entity, DropsPowerup):
            _drop_powerup(world, transform, rng)


def _drop_powerup(world: World, transform: Transform, rng) -> None:
    if rng.random() <= POWERUP_DROP_RATE:
        powerup_type = _DROP_ORDER[rng.randrange(len(_DROP_ORDER))]
        entities.create_powerup(world, transform.x, transform.y, powerup_type)


def pick_up_powerups(world: World) -> None:
    """Apply powerups touched by a hitbox to the hitbox owner's stats."""
    hitboxes = [
        (world.parent_of(entity), transform)
        for entity, transform, _ in world.query(Transform, Hitbox)
        if world.parent_of(entity) is not None
    ]
    for powerup, pickup, powerup_transform in world.query(PowerupPickup, Transform):
        for parent, hitbox_transform in hitboxes:
            if not are_collision_points_colliding(hitbox_transform, powerup_transform):
                continue
            stats = world.get(parent, PowerupStats)
            if stats is None:
                continue
            if pickup.powerup_type is PowerupType.MAX_BOMBS:
                stats.max_bombs += 1
                stats.current_bombs += 1
            elif pickup.powerup_type is PowerupType.BOMB_POWER:
                stats.bomb_power += 1
            else:
                stats.player_speed += 1
            world.despawn(powerup)


def explosion_trauma(distance: float, bomb_power: int) -> float:
    """Return the camera trauma caused by a bomb of ``bomb_power`` at ``distance``."""
    tiles_beyond_reach = max(distance / TILE_SIZE - bomb_power, 0.01)
    divisor = 1.0 + math.log(tiles_beyond_reach) / math.log(4.0)
    factor = math.inf if divisor == 0 else 1.0 / divisor
    return min(max(MAX_CAMERA_TRAUMA * factor - 0.05, 0.0), 0.3)


def explode_bombs(world: World, wall_lookup: WallLookup) -> None:
    """Count bomb fuses down and detonate the bombs whose fuse has run out.

    Raises RuntimeError unless exactly one shaking camera exists.
    """
    cameras = world.query(Transform, Shake)
    if len(cameras) != 1:
        raise RuntimeError("User camera should exist")
    _, camera_transform, shake = cameras[0]

    bombs = world.query(Bomb, Transform)
    by_entity = {entity: (bomb, transform) for entity, bomb, transform in bombs}

    to_explode = []
    for entity, bomb, _ in bombs:
        bomb.lifetime -= 1
        if bomb.lifetime <= 0:
            to_explode.append(entity)

    exploded: set[int] = set()
    while to_explode:
        entity = to_explode.pop()
        if entity in exploded or entity not in by_entity:
            continue
        exploded.add(entity)
        bomb, transform = by_entity[entity]
        chained = _explode(world, wall_lookup, bombs, entity, bomb, transform)
        distance = math.hypot(camera_transform.x - transform.x, camera_transform.y - transform.y)
        shake.add_trauma(explosion_trauma(distance, bomb.power))
        to_explode.extend(chained)


def _explode(
    world: World,
    wall_lookup: WallLookup,
    bombs: list[tuple],
    entity: int,
    bomb: Bomb,
    transform: Transform,
) -> list[int]:
    world.despawn(entity)
    stats = world.get(bomb.placer, PowerupStats)
    if stats is not None:
        stats.current_bombs += 1

    entities.create_explosion(world, transform.x, transform.y)

    chained = []
    for dx, dy in direction_deltas():
        for step in range(1, bomb.power + 1):
            fx = transform.x + dx * step
            fy = transform.y + dy * step
            entities.create_explosion(world, fx, fy)
            chained.extend(
                other
                for other, _, other_transform in bombs
                if transform.x == other_transform.x and transform.y == other_transform.y
            )
            if wall_lookup.get(fx, fy) is not None:
                break
    return chained