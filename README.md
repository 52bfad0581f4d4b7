# blastgrid

A grid-based arcade game: walk a walled arena, drop bombs and pick up
power-ups. Bombs explode in a cross, set off other bombs caught in the blast
and shake the camera depending on how close the blast is.

## Installing

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Playing

```
blastgrid
```

This opens a 640×640 window. The arena is 25×25 tiles with a solid border and
a pillar on every tile whose coordinates are both even. The player starts on a
random free tile and the camera glides after it.

Controls:

| Key   | Action       |
|-------|--------------|
| W     | move up      |
| S     | move down    |
| A     | move left    |
| D     | move right   |
| Space | place a bomb |

When both a horizontal and a vertical key are held, the axis pressed most
recently takes priority at tile centres. Walking into the edge of a pillar
nudges the player around its corner.

A bomb goes off four seconds after it is placed, or at once when another
explosion reaches it. Its blast reaches `bomb_power` tiles in each direction
and stops at the first wall. A player touched by an explosion is removed; the
camera then drifts to the arena centre and zooms out.

Power-ups, dropped by destroyed wooden crates:

- green: one more bomb at a time
- light red: longer blast reach
- light blue: faster walking

## Using the simulation without a window

The game logic runs on its own; pygame is only imported by `run()`. A `Game`
holds the world and wall lookup. `fixed_update()` advances one tick (the window
runs 60 per second), and `update(keys, dt)` applies keyboard state, moves the
camera and lets camera shake wear off:

```python
import random

from blastgrid.app import Game
from blastgrid.controls import Key, KeyState

game = Game(random.Random(1))
keys = KeyState(pressed={Key.D}, just_pressed={Key.D})
game.update(keys, 1 / 60)
game.fixed_update()
```

`KeyState.advance(held)` builds the next frame's state from the keys held in
it, working out which were just pressed.

The building blocks are importable on their own: `blastgrid.world` for the
entity store, `blastgrid.grid` for tile coordinates and the `WallLookup`,
`blastgrid.collision` for box tests, `blastgrid.entities` for spawning walls,
crates, bombs, power-ups and players, `blastgrid.map_generation` and
`blastgrid.player_spawn` for setting up the arena, and `blastgrid.motion`,
`blastgrid.bombs` and `blastgrid.camera` for the per-tick steps.

## What it does not do

- The crate spawn rate (`WOOD_CRATE_SPAWN_RATE` in `blastgrid.constants`) is
  `0.0`, so generated arenas contain no crates and no power-ups appear in play
  unless that value is raised.
- There is one player only: no opponents, no score, no rounds and no game-over
  screen. After the player dies the window stays open until it is closed.
- There is no sound, no menu and no saved state.