"""The game loop: startup, fixed-rate simulation, per-frame update and drawing."""

from __future__ import annotations

import argparse
import random
from typing import Callable, Optional

from blastgrid import bombs, camera, controls, entities, motion
from blastgrid.components import Shake, Sprite, Transform, UserPlayer
from blastgrid.constants import (
    COLOR_BACKGROUND,
    FIXED_UPDATE_FREQUENCY,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from blastgrid.controls import Key, KeyState
from blastgrid.grid import WallLookup
from blastgrid.map_generation import generate_map
from blastgrid.player_spawn import spawn_player
from blastgrid.world import World

WINDOW_TITLE = "Blastgrid"
_FRAME_RATE = 120
_MAX_FRAME_TIME = 0.25
_MAX_SHAKE_OFFSET = 100.0


class Game:
    """A running match: the world, the wall index and the systems that drive them."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.world = World()
        self.wall_lookup = WallLookup()

        generate_map(self.world, self.wall_lookup, self.rng)
        self.world.flush()
        self.player = spawn_player(self.world, self.wall_lookup, self.rng)
        self.world.flush()
        self.camera = self._spawn_user_camera()
        self.world.flush()

        self._fixed_systems: list[Callable[[], None]] = [
            lambda: bombs.place_bombs(self.world),
            lambda: bombs.release_bomb_ignores(self.world),
            lambda: bombs.cleanup_explosions(self.world),
            lambda: bombs.apply_explosions(self.world),
            lambda: motion.constrain_walker_directions(self.world, self.wall_lookup),
            lambda: motion.assist_walkers(self.world, self.wall_lookup),
            lambda: motion.apply_walkers(self.world),
            lambda: motion.apply_velocity(self.world),
            lambda: motion.resolve_collisions(self.world),
            lambda: motion.apply_air_resistance(self.world),
            lambda: motion.constrain_walker_positions(self.world),
            lambda: motion.follow_hitboxes(self.world),
            lambda: bombs.destroy_destroyables(self.world, self.wall_lookup, self.rng),
            lambda: bombs.pick_up_powerups(self.world),
            lambda: bombs.explode_bombs(self.world, self.wall_lookup),
        ]

    def _spawn_user_camera(self) -> int:
        players = self.world.query(UserPlayer, Transform)
        if len(players) != 1:
            raise RuntimeError("Expected user player to exist")
        player, _, player_transform = players[0]
        initial = player_transform.copy()
        initial.scale_x = initial.scale_y = initial.scale_z = 2.0
        return entities.create_camera(self.world, player, initial)

    def fixed_update(self) -> None:
        """Advance the simulation by one fixed tick."""
        for system in self._fixed_systems:
            system()
            self.world.flush()

    def update(self, keys: KeyState, dt: float) -> None:
        """Read the keyboard, move the camera and let camera shake wear off."""
        controls.apply_player_input(self.world, keys)
        camera.follow_target(self.world, dt)
        for _, shake in self.world.query(Shake):
            shake.decay(dt)
        self.world.flush()


def _to_rgb(color: tuple[float, float, float]) -> tuple[int, int, int]:
    return tuple(round(min(max(channel, 0.0), 1.0) * 255) for channel in color)


def _draw(screen, game: Game, rng: random.Random) -> None:
    import pygame

    screen.fill(_to_rgb(COLOR_BACKGROUND))
    view = game.world.get(game.camera, Transform)
    if view is None:
        return
    shake = game.world.get(game.camera, Shake)
    strength = (shake.trauma ** 2) * _MAX_SHAKE_OFFSET if shake is not None else 0.0
    cam_x = view.x + rng.uniform(-1.0, 1.0) * strength
    cam_y = view.y + rng.uniform(-1.0, 1.0) * strength
    zoom = view.scale_x if view.scale_x > 0 else 1.0

    drawables = sorted(game.world.query(Sprite, Transform), key=lambda item: item[2].z)
    for _, sprite, transform in drawables:
        width = transform.scale_x / zoom
        height = transform.scale_y / zoom
        centre_x = (transform.x - cam_x) / zoom + WINDOW_WIDTH / 2
        centre_y = WINDOW_HEIGHT / 2 - (transform.y - cam_y) / zoom
        rect = pygame.Rect(
            round(centre_x - width / 2),
            round(centre_y - height / 2),
            max(round(width), 1),
            max(round(height), 1),
        )
        pygame.draw.rect(screen, _to_rgb(sprite.color), rect)


def run() -> None:
    """Open the game window and play until it is closed."""
    import pygame

    bindings = {
        Key.W: pygame.K_w,
        Key.A: pygame.K_a,
        Key.S: pygame.K_s,
        Key.D: pygame.K_d,
        Key.SPACE: pygame.K_SPACE,
    }

    pygame.init()
    try:
        screen = pygame.display.set_mode((int(WINDOW_WIDTH), int(WINDOW_HEIGHT)))
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()
        render_rng = random.Random()
        game = Game()
        keys = KeyState()
        step = 1.0 / FIXED_UPDATE_FREQUENCY
        accumulated = 0.0

        running = True
        while running:
            dt = clock.tick(_FRAME_RATE) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False

            accumulated = min(accumulated + dt, _MAX_FRAME_TIME)
            while accumulated >= step:
                game.fixed_update()
                accumulated -= step

            pressed = pygame.key.get_pressed()
            keys = keys.advance(key for key, code in bindings.items() if pressed[code])
            game.update(keys, dt)

            _draw(screen, game, render_rng)
            pygame.display.flip()
    finally:
        pygame.quit()


def main(argv: Optional[list[str]] = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        prog="blastgrid",
        description="Grid arena game: walk with W/A/S/D, drop bombs with Space.",
    )
    parser.parse_args(argv)
    run()
    return 0