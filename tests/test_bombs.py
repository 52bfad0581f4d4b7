import math

import pytest

from blastgrid import bombs, entities
from blastgrid.components import (
    Bomb,
    BombPlacer,
    Destroyable,
    Explosion,
    PowerupPickup,
    PowerupStats,
    Shake,
    Transform,
    Wall,
)
from blastgrid.grid import WallLookup
from blastgrid.constants import TILE_SIZE
from blastgrid.motion import follow_hitboxes
from blastgrid.movement import PowerupType
from blastgrid.world import World

T = TILE_SIZE


class FixedRng:
    def __init__(self, roll, choice):
        self.roll = roll
        self.choice = choice

    def random(self):
        return self.roll

    def randrange(self, stop):
        return self.choice


def add_camera(world):
    target = world.spawn(Transform())
    return entities.create_camera(world, target, Transform())


def explosion_positions(world):
    return {(t.x, t.y) for _, _, t in world.query(Explosion, Transform)}


def test_place_bomb_on_nearest_tile():
    world = World()
    player = entities.create_user_player(world, T + 2.0, 10.0)
    world.get(player, BombPlacer).wants_to_place = True
    bombs.place_bombs(world)
    placed = world.query(Bomb, Transform, Wall)
    assert len(placed) == 1
    _, bomb, transform, wall = placed[0]
    assert (transform.x, transform.y) == (T, 0.0)
    assert bomb.placer == player
    assert bomb.power == world.get(player, PowerupStats).bomb_power
    assert wall.ignore == [player]
    assert world.get(player, PowerupStats).current_bombs == PowerupStats().current_bombs - 1
    assert world.get(player, BombPlacer).wants_to_place is False


def test_place_bomb_without_bombs_left():
    world = World()
    player = entities.create_user_player(world, 0.0, 0.0)
    world.get(player, PowerupStats).current_bombs = 0
    world.get(player, BombPlacer).wants_to_place = True
    bombs.place_bombs(world)
    assert world.query(Bomb) == []
    assert world.get(player, BombPlacer).wants_to_place is False


def test_place_bomb_on_occupied_tile_keeps_request():
    world = World()
    player = entities.create_user_player(world, 0.0, 0.0)
    entities.create_bomb(world, 0.0, 0.0, [], 1, player)
    world.get(player, BombPlacer).wants_to_place = True
    bombs.place_bombs(world)
    assert len(world.query(Bomb)) == 1
    assert world.get(player, BombPlacer).wants_to_place is True
    assert world.get(player, PowerupStats).current_bombs == PowerupStats().current_bombs


def test_release_ignore_after_stepping_off():
    world = World()
    player = entities.create_user_player(world, 0.0, 0.0)
    bomb = entities.create_bomb(world, 0.0, 0.0, [player], 1, player)
    bombs.release_bomb_ignores(world)
    assert world.get(bomb, Wall).ignore == [player]
    world.get(player, Transform).x = 3 * T
    bombs.release_bomb_ignores(world)
    assert world.get(bomb, Wall).ignore == []


def test_cleanup_explosions_after_lifetime():
    world = World()
    explosion = entities.create_explosion(world, 0.0, 0.0)
    lifetime = world.get(explosion, Explosion).lifetime
    for _ in range(lifetime - 1):
        bombs.cleanup_explosions(world)
    world.flush()
    assert world.contains(explosion)
    bombs.cleanup_explosions(world)
    world.flush()
    assert not world.contains(explosion)


def test_explosion_damages_crate_and_triggers_bomb():
    world = World()
    crate = entities.create_wood_crate(world, T, T)
    bomb = entities.create_bomb(world, 2 * T, T, [], 1, crate)
    entities.create_explosion(world, T, T)
    entities.create_explosion(world, 2 * T, T)
    bombs.apply_explosions(world)
    assert world.get(crate, Destroyable).hitpoints == 0
    assert world.get(bomb, Bomb).lifetime == 0


def test_explosion_spares_invulnerable_powerup():
    world = World()
    powerup = entities.create_powerup(world, 0.0, 0.0, PowerupType.MAX_BOMBS)
    entities.create_explosion(world, 0.0, 0.0)
    bombs.apply_explosions(world)
    assert world.get(powerup, Destroyable).hitpoints == Destroyable.for_powerup_pickup().hitpoints


def test_explosion_kills_player_with_hitbox_inside():
    world = World()
    player = entities.create_user_player(world, T, T)
    follow_hitboxes(world)
    entities.create_explosion(world, T, T)
    bombs.apply_explosions(world)
    world.flush()
    assert not world.contains(player)
    assert world.query(Transform, PowerupStats) == []


def test_explosion_far_from_player_spares_it():
    world = World()
    player = entities.create_user_player(world, 10 * T, 10 * T)
    follow_hitboxes(world)
    entities.create_explosion(world, 0.0, 0.0)
    bombs.apply_explosions(world)
    world.flush()
    assert world.contains(player)


@pytest.mark.parametrize(
    "choice, expected",
    [(0, PowerupType.BOMB_POWER), (1, PowerupType.PLAYER_SPEED), (2, PowerupType.MAX_BOMBS)],
)
def test_destroyed_crate_drops_powerup(choice, expected):
    world = World()
    lookup = WallLookup()
    crate = entities.create_wood_crate(world, T, T)
    lookup.set(T, T, crate)
    world.get(crate, Destroyable).hitpoints = 0
    bombs.destroy_destroyables(world, lookup, FixedRng(0.5, choice))
    world.flush()
    assert not world.contains(crate)
    assert lookup.get(T, T) is None
    drops = world.query(PowerupPickup, Transform)
    assert len(drops) == 1
    _, pickup, transform = drops[0]
    assert pickup.powerup_type is expected
    assert (transform.x, transform.y) == (T, T)


def test_failed_drop_roll_leaves_nothing():
    world = World()
    lookup = WallLookup()
    crate = entities.create_wood_crate(world, 0.0, 0.0)
    lookup.set(0.0, 0.0, crate)
    world.get(crate, Destroyable).hitpoints = 0
    bombs.destroy_destroyables(world, lookup, FixedRng(1.5, 0))
    world.flush()
    assert world.query(PowerupPickup) == []
    assert not world.contains(crate)


def test_invulnerability_ticks_down_to_zero():
    world = World()
    powerup = entities.create_powerup(world, 0.0, 0.0, PowerupType.BOMB_POWER)
    start = world.get(powerup, Destroyable).invulnerability_lifetime
    bombs.destroy_destroyables(world, WallLookup(), FixedRng(0.0, 0))
    assert world.get(powerup, Destroyable).invulnerability_lifetime == start - 1
    for _ in range(start + 5):
        bombs.destroy_destroyables(world, WallLookup(), FixedRng(0.0, 0))
    assert world.get(powerup, Destroyable).invulnerability_lifetime == 0
    assert world.contains(powerup)


def test_destroyed_powerup_drops_nothing():
    world = World()
    powerup = entities.create_powerup(world, 0.0, 0.0, PowerupType.BOMB_POWER)
    world.get(powerup, Destroyable).hitpoints = 0
    bombs.destroy_destroyables(world, WallLookup(), FixedRng(0.0, 0))
    world.flush()
    assert not world.contains(powerup)
    assert world.query(PowerupPickup) == []


def test_pick_up_max_bombs():
    world = World()
    player = entities.create_user_player(world, 0.0, 0.0)
    follow_hitboxes(world)
    powerup = entities.create_powerup(world, 0.0, 0.0, PowerupType.MAX_BOMBS)
    bombs.pick_up_powerups(world)
    world.flush()
    stats = world.get(player, PowerupStats)
    assert stats.max_bombs == PowerupStats().max_bombs + 1
    assert stats.current_bombs == PowerupStats().current_bombs + 1
    assert not world.contains(powerup)


@pytest.mark.parametrize("powerup_type, field", [
    (PowerupType.BOMB_POWER, "bomb_power"),
    (PowerupType.PLAYER_SPEED, "player_speed"),
])
def test_pick_up_other_powerups(powerup_type, field):
    world = World()
    player = entities.create_user_player(world, 0.0, 0.0)
    follow_hitboxes(world)
    entities.create_powerup(world, 0.0, 0.0, powerup_type)
    bombs.pick_up_powerups(world)
    assert getattr(world.get(player, PowerupStats), field) == getattr(PowerupStats(), field) + 1


def test_far_powerup_is_not_picked_up():
    world = World()
    player = entities.create_user_player(world, 0.0, 0.0)
    follow_hitboxes(world)
    powerup = entities.create_powerup(world, 10 * T, 0.0, PowerupType.BOMB_POWER)
    bombs.pick_up_powerups(world)
    world.flush()
    assert world.contains(powerup)
    assert world.get(player, PowerupStats) == PowerupStats()


def test_trauma_is_capped_just_beyond_reach():
    assert bombs.explosion_trauma(2 * T, 1) == pytest.approx(0.3)


def test_trauma_vanishes_within_reach():
    assert bombs.explosion_trauma(0.0, 1) == 0.0


def test_trauma_bounded_and_falls_with_distance():
    values = [bombs.explosion_trauma(d * T, 2) for d in range(3, 40)]
    assert all(0.0 <= v <= 0.3 for v in values)
    assert all(a >= b for a, b in zip(values, values[1:]))


def test_explode_bombs_requires_camera():
    world = World()
    with pytest.raises(RuntimeError):
        bombs.explode_bombs(world, WallLookup())


def test_bomb_fuse_counts_down():
    world = World()
    add_camera(world)
    bomb = entities.create_bomb(world, 0.0, 0.0, [], 1, 0)
    start = world.get(bomb, Bomb).lifetime
    bombs.explode_bombs(world, WallLookup())
    world.flush()
    assert world.get(bomb, Bomb).lifetime == start - 1
    assert world.query(Explosion) == []


def test_bomb_explodes_in_cross_and_shakes_camera():
    world = World()
    camera = add_camera(world)
    player = entities.create_user_player(world, 5 * T, 5 * T)
    world.get(player, PowerupStats).current_bombs = 0
    c = 2 * T
    bomb = entities.create_bomb(world, c, c, [], 1, player)
    world.get(bomb, Bomb).lifetime = 1
    bombs.explode_bombs(world, WallLookup())
    world.flush()
    assert not world.contains(bomb)
    assert explosion_positions(world) == {(c, c), (c + T, c), (c - T, c), (c, c + T), (c, c - T)}
    assert world.get(player, PowerupStats).current_bombs == 1
    expected = bombs.explosion_trauma(math.hypot(c, c), 1)
    assert world.get(camera, Shake).trauma == pytest.approx(expected)


def test_wall_stops_explosion_ray():
    world = World()
    add_camera(world)
    lookup = WallLookup()
    c = 4 * T
    lookup.set(c + T, c, entities.create_wall(world, c + T, c))
    bomb = entities.create_bomb(world, c, c, [], 3, 0)
    world.get(bomb, Bomb).lifetime = 1
    bombs.explode_bombs(world, lookup)
    positions = explosion_positions(world)
    assert (c + T, c) in positions
    assert (c + 2 * T, c) not in positions
    assert (c - 3 * T, c) in positions
    assert len(positions) == 1 + 1 + 3 + 3 + 3


def test_explosion_chains_to_neighbouring_bomb():
    world = World()
    add_camera(world)
    lookup = WallLookup()
    first = entities.create_bomb(world, 0.0, 0.0, [], 1, 0)
    second = entities.create_bomb(world, T, 0.0, [], 1, 0)
    world.get(first, Bomb).lifetime = 1
    bombs.explode_bombs(world, lookup)
    world.flush()
    assert world.contains(second)
    bombs.apply_explosions(world)
    assert world.get(second, Bomb).lifetime == 0
    bombs.explode_bombs(world, lookup)
    world.flush()
    assert not world.contains(second)