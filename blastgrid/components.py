"""Component data attached to game entities."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Optional

from blastgrid.constants import POWERUP_PICKUP_INVULNERABILITY_TIME, seconds_to_ticks
from blastgrid.movement import Direction, DirectionAxis, PowerupType


@dataclass
class Transform:
    """Position and scale of an entity."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    scale_z: float = 1.0

    def copy(self) -> Transform:
        """Return an independent copy."""
        return dataclasses.replace(self)


@dataclass
class Sprite:
    """A flat coloured rectangle drawn at the entity's transform."""

    color: tuple[float, float, float]


@dataclass
class Wall:
    """Blocks movement of colliders, except the entities in ``ignore``."""

    ignore: list[int] = field(default_factory=list)


@dataclass
class Player:
    """Marks a player entity."""


@dataclass
class UserPlayer:
    """Marks the player controlled by the local user."""


@dataclass
class Walker:
    """Requested walking directions of an entity."""

    horizontal_direction: Optional[Direction] = None
    vertical_direction: Optional[Direction] = None
    priority_direction_axis: DirectionAxis = DirectionAxis.HORIZONTAL


@dataclass
class Velocity:
    """Per-tick displacement."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class Targeter:
    """Entity that another entity (such as the camera) follows."""

    target: Optional[int] = None


@dataclass
class Collider:
    """Marks an entity that is stopped by walls."""


@dataclass
class BombPlacer:
    """Whether the entity wants to drop a bomb this tick."""

    wants_to_place: bool = False


@dataclass
class Bomb:
    """A ticking bomb."""

    lifetime: int
    power: int
    placer: int


@dataclass
class Explosion:
    """A short-lived explosion tile."""

    lifetime: int


@dataclass
class Destroyable:
    """Something explosions can destroy."""

    hitpoints: int
    invulnerability_lifetime: int = 0

    @classmethod
    def for_powerup_pickup(cls) -> Destroyable:
        """Return the settings used by dropped powerups."""
        return cls(
            hitpoints=1,
            invulnerability_lifetime=seconds_to_ticks(POWERUP_PICKUP_INVULNERABILITY_TIME),
        )


@dataclass
class DropsPowerup:
    """Marks a destroyable that may leave a powerup behind."""


@dataclass
class PowerupPickup:
    """A powerup lying on the floor."""

    powerup_type: PowerupType


@dataclass
class PowerupStats:
    """Bomb and speed levels of a player."""

    max_bombs: int = 1
    current_bombs: int = 1
    bomb_power: int = 1
    player_speed: int = 9


@dataclass
class Hitbox:
    """Marks the damage hitbox child of a player."""


@dataclass
class WalkerConstrainer:
    """Position of a walker at the end of the previous tick."""

    prev_x: float = 0.0
    prev_y: float = 0.0


@dataclass
class WalkerAssist:
    """Marks a walker that is nudged around wall corners."""


@dataclass
class Shake:
    """Trauma-based camera shake; trauma stays within 0 and 1."""

    trauma: float = 0.0
    decay_rate: float = 0.8

    def add_trauma(self, amount: float) -> None:
        """Add trauma, capped at 1."""
        self.trauma = min(max(self.trauma + amount, 0.0), 1.0)

    def decay(self, dt: float) -> None:
        """Let trauma wear off over ``dt`` seconds."""
        self.trauma = max(self.trauma - self.decay_rate * dt, 0.0)