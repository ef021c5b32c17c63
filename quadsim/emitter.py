"""Particle emitters: spawning, ageing and animating particles on the CPU."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from quadsim.config import EmitterConfig, Mesh
from quadsim.curves import BatchedCurve, Color
from quadsim.geometry import Vec2

_MAX_FRAME = 0xFFFF
_FULL_UV = (0.0, 0.0, 1.0, 1.0)


@dataclass
class Particle:
    """One live particle.

    ``position`` is in world space, or relative to the emitter when the
    emitter uses local coordinates. ``uv`` is the atlas cell as
    ``(u, v, width, height)``; ``index`` is the spawn counter value the
    particle was created with and ``life`` the fraction of its lifetime
    already lived.
    """

    position: Vec2
    rotation: float
    size: float
    color: Color
    velocity: Vec2
    angular_velocity: float
    lifetime: float
    initial_size: float
    index: float
    life: float = 0.0
    lived: float = 0.0
    frame: int = 0
    uv: tuple[float, float, float, float] = (1.0, 1.0, 0.0, 0.0)


def _fraction(lived: float, lifetime: float) -> float:
    """``lived / lifetime`` with IEEE semantics for a zero lifetime."""
    if lifetime != 0.0:
        return lived / lifetime
    if lived == 0.0 or math.isnan(lived):
        return math.nan
    return math.copysign(math.inf, lived)


def _randomized(value: float, randomness: float, rng: random.Random) -> float:
    return value - value * rng.uniform(0.0, randomness)


class Emitter:
    """Emits particles according to an :class:`EmitterConfig` and simulates them."""

    MAX_PARTICLES = 10000

    def __init__(self, config: EmitterConfig, rng: random.Random | None = None) -> None:
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.position = Vec2(0.0, 0.0)
        self.mesh: Mesh = config.shape.mesh()
        self.blend_mode = config.blend_mode
        self.batched_size_curve: BatchedCurve | None = (
            config.size_curve.batch() if config.size_curve is not None else None
        )
        self._particles: list[Particle] = []
        self._last_emit_time = 0.0
        self._time_passed = 0.0
        self._particles_current_cycle = 0
        self._particles_spawned = 0
        self._mesh_dirty = False

    def reset(self) -> None:
        """Drop every particle and restart the emission cycle."""
        self._particles.clear()
        self._last_emit_time = 0.0
        self._time_passed = 0.0
        self._particles_spawned = 0
        self._particles_current_cycle = 0

    def rebuild_size_curve(self) -> None:
        """Resample ``config.size_curve`` after it has been changed."""
        curve = self.config.size_curve
        self.batched_size_curve = curve.batch() if curve is not None else None

    def update_particle_mesh(self) -> None:
        """Rebuild the particle mesh from ``config.shape`` on the next update."""
        self._mesh_dirty = True

    def particles(self) -> list[Particle]:
        """The live particles, oldest first."""
        return list(self._particles)

    def _emit_particle(self, offset: Vec2) -> None:
        cfg = self.config
        rng = self.rng
        offset = offset + cfg.emission_shape.random_point(rng)

        size = _randomized(cfg.size, cfg.size_randomness, rng)
        rotation = _randomized(cfg.initial_rotation, cfg.initial_rotation_randomness, rng)
        position = offset if cfg.local_coords else self.position + offset

        spread = cfg.initial_direction_spread
        angle = rng.uniform(-spread / 2.0, spread / 2.0)
        speed = _randomized(cfg.initial_velocity, cfg.initial_velocity_randomness, rng)
        velocity = cfg.initial_direction.rotate(angle) * speed
        angular_velocity = _randomized(
            cfg.initial_angular_velocity, cfg.initial_angular_velocity_randomness, rng
        )
        lifetime = _randomized(cfg.lifetime, cfg.lifetime_randomness, rng)

        particle = Particle(
            position=position,
            rotation=rotation,
            size=size,
            color=cfg.colors_curve.start,
            velocity=velocity,
            angular_velocity=angular_velocity,
            lifetime=lifetime,
            initial_size=size,
            index=float(self._particles_spawned),
        )
        self._particles_spawned += 1
        self._particles_current_cycle += 1
        self._particles.append(particle)

    def emit(self, pos: Vec2, n: int) -> None:
        """Emit ``n`` particles at once, ignoring ``emitting`` and ``amount``."""
        for _ in range(n):
            self._emit_particle(pos)
            self._particles_spawned += 1

    def _spawn(self, dt: float) -> None:
        cfg = self.config
        self._time_passed += dt
        gap = (
            (cfg.lifetime / cfg.amount) * (1.0 - cfg.explosiveness)
            if cfg.amount
            else math.inf
        )
        if gap < 0.001:
            spawn_amount = cfg.amount
        else:
            ratio = (self._time_passed - self._last_emit_time) / gap
            spawn_amount = int(ratio) if math.isfinite(ratio) and ratio > 0 else 0
        if spawn_amount <= 0:
            return
        self._last_emit_time = self._time_passed
        for _ in range(spawn_amount):
            if self._particles_spawned >= cfg.amount:
                break
            self._emit_particle(Vec2(0.0, 0.0))
            if len(self._particles) >= cfg.amount:
                break

    def _advance(self, particle: Particle, dt: float) -> None:
        cfg = self.config
        particle.velocity = particle.velocity + particle.velocity * (cfg.linear_accel * dt)
        particle.angular_velocity += particle.angular_velocity * cfg.angular_accel * dt
        particle.angular_velocity *= 1.0 - cfg.angular_damping

        fraction = _fraction(particle.lived, particle.lifetime)
        particle.color = cfg.colors_curve.at(fraction)
        particle.position = particle.position + particle.velocity * dt
        particle.rotation += particle.angular_velocity * dt

        if self.batched_size_curve is None:
            scale = 1.0
        elif particle.lifetime != 0.0:
            scale = self.batched_size_curve.get(fraction)
        else:
            scale = math.nan
        particle.size = particle.initial_size * scale

        if particle.lifetime != 0.0:
            particle.life = fraction

        particle.lived += dt
        particle.velocity = particle.velocity + cfg.gravity * dt

        atlas = cfg.atlas
        if atlas is None:
            particle.uv = _FULL_UV
            return
        if particle.lifetime != 0.0:
            span = particle.lived / particle.lifetime * (atlas.end_index - atlas.start_index)
            particle.frame = min(max(int(span), 0), _MAX_FRAME) + atlas.start_index
        column = particle.frame % atlas.n
        row = particle.frame // atlas.n
        particle.uv = (column / atlas.n, row / atlas.m, 1.0 / atlas.n, 1.0 / atlas.m)

    def _expired(self, particle: Particle) -> bool:
        return particle.lived >= particle.lifetime or particle.lived > self.config.lifetime

    def update(self, position: Vec2, dt: float) -> None:
        """Move the emitter to ``position`` and advance the simulation by ``dt`` seconds."""
        cfg = self.config
        self.position = position
        self.blend_mode = cfg.blend_mode

        if self._mesh_dirty:
            self.mesh = cfg.shape.mesh()
            self._mesh_dirty = False

        if cfg.emitting:
            self._spawn(dt)

        if cfg.one_shot and self._particles_current_cycle >= cfg.amount:
            self._time_passed = 0.0
            self._last_emit_time = 0.0
            self._particles_current_cycle = 0
            cfg.emitting = False

        for particle in self._particles:
            self._advance(particle, dt)

        survivors: list[Particle] = []
        for particle in self._particles:
            if self._expired(particle):
                if particle.lived != particle.lifetime:
                    self._particles_spawned -= 1
            else:
                survivors.append(particle)
        self._particles = survivors


class EmittersCache:
    """A pool of emitters sharing one configuration, spawned at many places."""

    CACHE_DEFAULT_SIZE = 10

    def __init__(self, config: EmitterConfig, rng: random.Random | None = None) -> None:
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self._cache: list[Emitter] = [
            Emitter(config.replace(emitting=False), self.rng)
            for _ in range(self.CACHE_DEFAULT_SIZE)
        ]
        self._active: list[tuple[Emitter, Vec2]] = []

    @property
    def active_emitters(self) -> list[tuple[Emitter, Vec2]]:
        """The running emitters with the positions they were spawned at."""
        return list(self._active)

    def spawn(self, pos: Vec2) -> None:
        """Start an emitter at ``pos``, reusing a cached one when available."""
        emitter = self._cache.pop() if self._cache else Emitter(self.config.replace(), self.rng)
        emitter.update_particle_mesh()
        emitter.config.emitting = True
        emitter.reset()
        self._active.append((emitter, pos))

    def update(self, dt: float) -> None:
        """Advance every active emitter; those that stopped emitting go back to the pool."""
        still_active: list[tuple[Emitter, Vec2]] = []
        for emitter, pos in self._active:
            emitter.update(pos, dt)
            if emitter.config.emitting:
                still_active.append((emitter, pos))
            else:
                self._cache.append(emitter)
        self._active = still_active