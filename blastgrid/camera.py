"""Camera that glides towards the entity it follows."""

from __future__ import annotations

from blastgrid.components import Targeter, Transform
from blastgrid.constants import MAP_SIZE
from blastgrid.grid import tile_pos
from blastgrid.world import World

_FOLLOW_RATE = 5.0


def _lerp(start: float, end: float, t: float) -> float:
    return start + (end - start) * t


def follow_target(world: World, dt: float) -> None:
    """Move the single camera towards its target over ``dt`` seconds.

    Without a living target the camera drifts to the arena centre and zooms out.
    """
    cameras = world.query(Transform, Targeter)
    if len(cameras) != 1:
        return
    _, camera, targeter = cameras[0]

    target_transform = None
    if targeter.target is not None and not world.has(targeter.target, Targeter):
        target_transform = world.get(targeter.target, Transform)

    if target_transform is not None:
        target = (target_transform.x, target_transform.y, target_transform.z)
        scale = (1.0, 1.0, 1.0)
    else:
        center = MAP_SIZE // 2
        x, y = tile_pos(center, center)
        target = (x, y, 0.0)
        scale = (2.0, 2.0, 1.0)

    t = _FOLLOW_RATE * dt
    camera.x = _lerp(camera.x, target[0], t)
    camera.y = _lerp(camera.y, target[1], t)
    camera.z = _lerp(camera.z, target[2], t)
    camera.scale_x = _lerp(camera.scale_x, scale[0], t)
    camera.scale_y = _lerp(camera.scale_y, scale[1], t)
    camera.scale_z = _lerp(camera.scale_z, scale[2], t)