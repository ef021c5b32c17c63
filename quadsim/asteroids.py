"""Asteroids rules: a drifting ship, timed bullets and splitting rocks."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from quadsim.geometry import Vec2

SHIP_HEIGHT = 25.0
SHIP_BASE = 22.0
MAX_SPEED = 5.0
FRICTION = 100.0
THRUST = 3.0
STEER_DEGREES = 5.0
SHOT_INTERVAL = 0.5
BULLET_SPEED = 7.0
BULLET_LIFETIME = 1.5
ASTEROID_COUNT = 10
SPLIT_SCALE = 0.8


def wrap_around(pos: Vec2, width: float, height: float) -> Vec2:
    """Move a point that left the screen to the opposite edge."""
    x, y = pos.x, pos.y
    if x > width:
        x = 0.0
    if x < 0.0:
        x = width
    if y > height:
        y = 0.0
    if y < 0.0:
        y = height
    return Vec2(x, y)


@dataclass
class Ship:
    """The player's ship; ``rot`` is in degrees, zero pointing up."""

    pos: Vec2
    rot: float = 0.0
    vel: Vec2 = Vec2(0.0, 0.0)

    @property
    def heading(self) -> Vec2:
        """Unit vector the ship points along."""
        rotation = math.radians(self.rot)
        return Vec2(math.sin(rotation), -math.cos(rotation))


@dataclass
class Bullet:
    """A shot fired at time ``shot_at``."""

    pos: Vec2
    vel: Vec2
    shot_at: float
    collided: bool = False


@dataclass
class Asteroid:
    """A rock drawn as a polygon with ``sides`` sides."""

    pos: Vec2
    vel: Vec2
    rot: float
    rot_speed: float
    size: float
    sides: int
    collided: bool = False


class AsteroidsGame:
    """Game state on a ``width`` x ``height`` screen with the origin at the top left."""

    def __init__(
        self,
        width: float = 800.0,
        height: float = 600.0,
        rng: random.Random | None = None,
        now: float = 0.0,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("screen dimensions must be positive")
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.last_shot = now
        self.restart()

    @property
    def center(self) -> Vec2:
        return Vec2(self.width / 2.0, self.height / 2.0)

    @property
    def won(self) -> bool:
        """True once the game is over because every asteroid was destroyed."""
        return self.game_over and not self.asteroids

    def _random_direction(self) -> Vec2:
        while True:
            v = Vec2(self.rng.uniform(-1.0, 1.0), self.rng.uniform(-1.0, 1.0))
            if v.length() > 0.0:
                return v.normalize()

    def restart(self) -> None:
        """Reset the ship and scatter a fresh ring of asteroids."""
        self.ship = Ship(pos=self.center)
        self.bullets: list[Bullet] = []
        self.game_over = False
        short_side = min(self.width, self.height)
        self.asteroids: list[Asteroid] = [
            Asteroid(
                pos=self.center + self._random_direction() * short_side / 2.0,
                vel=Vec2(self.rng.uniform(-1.0, 1.0), self.rng.uniform(-1.0, 1.0)),
                rot=0.0,
                rot_speed=self.rng.uniform(-2.0, 2.0),
                size=short_side / 10.0,
                sides=self.rng.randrange(3, 8),
            )
            for _ in range(ASTEROID_COUNT)
        ]

    def _split(self, asteroid: Asteroid, bullet: Bullet) -> list[Asteroid]:
        directions = (
            Vec2(bullet.vel.y, -bullet.vel.x),
            Vec2(-bullet.vel.y, bullet.vel.x),
        )
        return [
            Asteroid(
                pos=asteroid.pos,
                vel=direction.normalize() * self.rng.uniform(1.0, 3.0),
                rot=self.rng.uniform(0.0, 360.0),
                rot_speed=self.rng.uniform(-2.0, 2.0),
                size=asteroid.size * SPLIT_SCALE,
                sides=asteroid.sides - 1,
            )
            for direction in directions
        ]

    def update(self, now: float, thrust: bool, left: bool, right: bool, shoot: bool) -> None:
        """Advance one frame at time ``now`` with the given controls held."""
        if self.game_over:
            return
        ship = self.ship
        heading = ship.heading

        acc = -ship.vel / FRICTION
        if thrust:
            acc = heading / THRUST

        if shoot and now - self.last_shot > SHOT_INTERVAL:
            self.bullets.append(
                Bullet(
                    pos=ship.pos + heading * SHIP_HEIGHT / 2.0,
                    vel=heading * BULLET_SPEED,
                    shot_at=now,
                )
            )
            self.last_shot = now

        if right:
            ship.rot += STEER_DEGREES
        elif left:
            ship.rot -= STEER_DEGREES

        ship.vel = ship.vel + acc
        if ship.vel.length() > MAX_SPEED:
            ship.vel = ship.vel.normalize() * MAX_SPEED
        ship.pos = wrap_around(ship.pos + ship.vel, self.width, self.height)

        for bullet in self.bullets:
            bullet.pos = bullet.pos + bullet.vel
        for asteroid in self.asteroids:
            asteroid.pos = wrap_around(asteroid.pos + asteroid.vel, self.width, self.height)
            asteroid.rot += asteroid.rot_speed

        self.bullets = [b for b in self.bullets if b.shot_at + BULLET_LIFETIME > now]

        fragments: list[Asteroid] = []
        for asteroid in self.asteroids:
            if (asteroid.pos - ship.pos).length() < asteroid.size + SHIP_HEIGHT / 3.0:
                self.game_over = True
                break
            for bullet in self.bullets:
                if (asteroid.pos - bullet.pos).length() < asteroid.size:
                    asteroid.collided = True
                    bullet.collided = True
                    if asteroid.sides > 3:
                        fragments.extend(self._split(asteroid, bullet))
                    break

        self.bullets = [
            b for b in self.bullets
            if b.shot_at + BULLET_LIFETIME > now and not b.collided
        ]
        self.asteroids = [a for a in self.asteroids if not a.collided]
        self.asteroids.extend(fragments)

        if not self.asteroids:
            self.game_over = True