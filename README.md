# quadsim

Rendering-free game logic for small 2D (and a little 3D) games: pixel-exact
platformer physics, a particle emitter simulation, and models of a few classic
arcade games. Everything is plain Python with no dependencies, so it can be
driven by any renderer or run in tests.

## Installation

```
pip install quadsim
```

## What is inside

- `quadsim.geometry`: immutable `Vec2` and `Vec3` (arithmetic, `length`,
  `normalize`, `Vec2.rotate`, `Vec3.cross`), `Rect` (`overlaps`, `contains`)
  and `polar_to_cartesian`.
- `quadsim.platformer`: a tile and solid collision `World` with `Actor` and
  `Solid` handles, `Tile` values (`EMPTY`, `SOLID`, `JUMP_THROUGH`,
  `COLLIDER`), jump-through tiles, actors riding and being pushed or squished
  by moving solids.
- `quadsim.curves`: `Color`, `Interpolation`, `Curve` (linear only; `batch()`
  raises `ValueError` for `BEZIER`), `BatchedCurve` and `ColorCurve`.
- `quadsim.config`: emission shapes (`EmissionPoint`, `EmissionRect`,
  `EmissionSphere`), particle shapes (`RectangleShape`, `CircleShape`,
  `CustomMeshShape`, each with a `mesh()` of vertices and indices),
  `BlendMode`, `AtlasConfig`, `ParticleMaterial`, `PostProcessing` and
  `EmitterConfig`.
- `quadsim.emitter`: `Emitter` and `EmittersCache`, which spawn, age and
  animate `Particle` objects (position, rotation, size, colour, atlas `uv`).
- `quadsim.life`: `CellState`, `next_state` and a bounded `Life` grid.
- `quadsim.snake`: `SnakeGame` with `steer`, `update` and `restart`.
- `quadsim.arkanoid`: `Arkanoid` with `update` and `blocks_left`.
- `quadsim.asteroids`: `AsteroidsGame`, `Ship`, `Bullet`, `Asteroid` and
  `wrap_around`.
- `quadsim.camera`: `short_angle_dist`, `angle_lerp`, `wrap_rotation` and a
  yaw/pitch `FirstPersonCamera`.
- `quadsim.inventory`: `Inventory`, `Slot` and the fitting commands `Fit`,
  `Unfit` and `Refit`.

Classes that use randomness take an optional `random.Random`, so runs can be
made reproducible by passing a seeded one.

## Platformer physics

```python
from quadsim.geometry import Vec2
from quadsim.platformer import Tile, World

world = World()
tiles = [Tile.EMPTY] * 80 + [Tile.SOLID] * 40   # three rows of 40, floor at the bottom
world.add_static_tiled_layer(tiles, 8.0, 8.0, 40, 1)

player = world.add_actor(Vec2(16.0, 0.0), 8, 8)
world.move_v(player, 20.0)          # False: stopped by the floor
print(world.actor_pos(player))      # Vec2(x=16.0, y=8.0)
print(world.collide_check(player, world.actor_pos(player) + Vec2(0.0, 1.0)))  # True
```

Moving solids carry actors standing on them and push actors they run into:

```python
platform = world.add_solid(Vec2(100.0, 12.0), 32, 4)
world.solid_move(platform, 2.0, 0.0)
print(world.solid_pos(platform))    # Vec2(x=102.0, y=12.0)
```

## Particles

```python
import random

from quadsim.config import AtlasConfig, BlendMode, EmitterConfig
from quadsim.emitter import Emitter
from quadsim.geometry import Vec2

config = EmitterConfig(
    amount=20,
    lifetime=0.8,
    blend_mode=BlendMode.ADDITIVE,
    atlas=AtlasConfig.from_range(4, 4, range(0, 8)),
)
emitter = Emitter(config, random.Random(1))
for _ in range(60):
    emitter.update(Vec2(100.0, 100.0), 1 / 60)
for particle in emitter.particles():
    print(particle.position, particle.size, particle.color, particle.uv)
```

`EmittersCache` keeps a pool of emitters with one configuration: `spawn(pos)`
starts one and `update(dt)` advances them all, returning those that stopped
emitting to the pool.

## Games

```python
from quadsim.snake import RIGHT, DOWN, SnakeGame

game = SnakeGame(now=0.0)
game.steer(DOWN)
game.update(0.5)        # True: the snake moved one square
print(game.head, game.score, game.game_over)
```

`Arkanoid.update(dt, left, right, launch)` and
`AsteroidsGame.update(now, thrust, left, right, shoot)` take the held controls
as flags; `Life.step()` advances the grid one generation.

## What it does not do

quadsim holds game state and rules only. It opens no window, draws nothing,
reads no keyboard, mouse or touch input, plays no sound and loads no images,
fonts or maps. Particle meshes and atlas coordinates are computed but not sent
to any graphics device, and `ParticleMaterial`, `PostProcessing` and
`EmitterConfig.texture` are only carried along for a renderer to use. There is
no command-line program.

## Running the tests

```
pip install "quadsim[test]"
pytest
```