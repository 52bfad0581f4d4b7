"""Keyboard state and the system that turns it into player intentions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable

from blastgrid.components import BombPlacer, Player, Walker
from blastgrid.movement import Direction, DirectionAxis
from blastgrid.world import World


class Key(Enum):
    """The keys the game listens to."""

    W = auto()
    A = auto()
    S = auto()
    D = auto()
    SPACE = auto()


@dataclass(frozen=True)
class KeyState:
    """Keys held this frame and keys that went down this frame."""

    pressed: frozenset[Key] = field(default_factory=frozenset)
    just_pressed: frozenset[Key] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pressed", frozenset(self.pressed))
        object.__setattr__(self, "just_pressed", frozenset(self.just_pressed))

    def advance(self, held: Iterable[Key]) -> KeyState:
        """Return the state of the next frame given the keys held in it."""
        held = frozenset(held)
        return KeyState(pressed=held, just_pressed=held - self.pressed)


def _axis_direction(keys: KeyState, negative: Key, positive: Key,
                    negative_dir: Direction, positive_dir: Direction) -> Direction | None:
    neg = negative in keys.pressed
    pos = positive in keys.pressed
    if neg and not pos:
        return negative_dir
    if pos and not neg:
        return positive_dir
    return None


def apply_player_input(world: World, keys: KeyState) -> None:
    """Set walking directions and bomb requests of players from the keyboard."""
    for _, walker, _ in world.query(Walker, Player):
        walker.horizontal_direction = _axis_direction(keys, Key.A, Key.D, Direction.LEFT, Direction.RIGHT)
        walker.vertical_direction = _axis_direction(keys, Key.W, Key.S, Direction.UP, Direction.DOWN)

        if {Key.A, Key.D} & keys.just_pressed:
            walker.priority_direction_axis = DirectionAxis.HORIZONTAL
        if {Key.W, Key.S} & keys.just_pressed:
            walker.priority_direction_axis = DirectionAxis.VERTICAL

    for _, bomb_placer, _ in world.query(BombPlacer, Player):
        if not bomb_placer.wants_to_place:
            bomb_placer.wants_to_place = Key.SPACE in keys.just_pressed