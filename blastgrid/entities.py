"""Factories that spawn the game's entities into a world."""

from __future__ import annotations

from typing import Iterable

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
    Sprite,
    Targeter,
    Transform,
    UserPlayer,
    Velocity,
    Walker,
    WalkerAssist,
    WalkerConstrainer,
    Wall,
)
from blastgrid.constants import (
    BOMB_EXPLOSION_INITIAL_LIFETIME,
    COLOR_BOMB,
    COLOR_BOMB_POWER_POWERUP,
    COLOR_EXPLOSION,
    COLOR_MAX_BOMBS_POWERUP,
    COLOR_PLAYER,
    COLOR_PLAYER_SPEED_POWERUP,
    COLOR_WALL,
    COLOR_WOOD_CRATE,
    EXPLOSION_CLEANUP_INITIAL_LIFETIME,
    EXPLOSION_Z,
    HITBOX_TO_TILE_SCALE,
    ITEM_Z,
    PLAYER_Z,
    TILE_SIZE,
    WALL_Z,
    seconds_to_ticks,
)
from blastgrid.grid import make_transform
from blastgrid.movement import PowerupType
from blastgrid.world import World

_POWERUP_COLORS = {
    PowerupType.MAX_BOMBS: COLOR_MAX_BOMBS_POWERUP,
    PowerupType.BOMB_POWER: COLOR_BOMB_POWER_POWERUP,
    PowerupType.PLAYER_SPEED: COLOR_PLAYER_SPEED_POWERUP,
}


def create_bomb(
    world: World,
    x: float,
    y: float,
    ignore_colliders: Iterable[int],
    power: int,
    placer: int,
) -> int:
    """Spawn a ticking bomb that blocks everyone except ``ignore_colliders``."""
    return world.spawn(
        make_transform(x, y, ITEM_Z, TILE_SIZE),
        Sprite(COLOR_BOMB),
        Bomb(
            lifetime=seconds_to_ticks(BOMB_EXPLOSION_INITIAL_LIFETIME),
            power=power,
            placer=placer,
        ),
        Wall(ignore=list(ignore_colliders)),
    )


def create_powerup(world: World, x: float, y: float, powerup_type: PowerupType) -> int:
    """Spawn a powerup of the given kind lying on the floor."""
    return world.spawn(
        make_transform(x, y, ITEM_Z, TILE_SIZE),
        Sprite(_POWERUP_COLORS[powerup_type]),
        Destroyable.for_powerup_pickup(),
        PowerupPickup(powerup_type=powerup_type),
    )


def create_camera(world: World, target: int, initial_transform: Transform) -> int:
    """Spawn a shaking camera that follows ``target``."""
    return world.spawn(
        initial_transform.copy(),
        Targeter(target=target),
        Shake(),
    )


def create_explosion(world: World, x: float, y: float) -> int:
    """Spawn a short-lived explosion tile."""
    return world.spawn(
        make_transform(x, y, EXPLOSION_Z, TILE_SIZE),
        Sprite(COLOR_EXPLOSION),
        Explosion(lifetime=seconds_to_ticks(EXPLOSION_CLEANUP_INITIAL_LIFETIME)),
    )


def create_hitbox(world: World, parent: int) -> int:
    """Spawn a damage hitbox as a child of ``parent``."""
    return world.spawn(
        make_transform(0.0, 0.0, ITEM_Z, TILE_SIZE * HITBOX_TO_TILE_SCALE),
        Hitbox(),
        parent=parent,
    )


def create_user_player(world: World, x: float, y: float) -> int:
    """Spawn the user's player together with its hitbox."""
    player = world.spawn(
        make_transform(x, y, PLAYER_Z, TILE_SIZE),
        Sprite(COLOR_PLAYER),
        Velocity(),
        Player(),
        UserPlayer(),
        Walker(),
        WalkerConstrainer(),
        WalkerAssist(),
        Collider(),
        BombPlacer(),
        PowerupStats(),
    )
    create_hitbox(world, player)
    return player


def create_wall(world: World, x: float, y: float) -> int:
    """Spawn an indestructible wall."""
    return world.spawn(
        make_transform(x, y, WALL_Z, TILE_SIZE),
        Sprite(COLOR_WALL),
        Wall(),
    )


def create_wood_crate(world: World, x: float, y: float) -> int:
    """Spawn a crate that explosions destroy and that may drop a powerup."""
    return world.spawn(
        make_transform(x, y, WALL_Z, TILE_SIZE),
        Sprite(COLOR_WOOD_CRATE),
        Wall(),
        Destroyable(hitpoints=1, invulnerability_lifetime=0),
        DropsPowerup(),
    )