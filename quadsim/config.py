"""Particle emitter configuration: emission shapes, particle meshes and settings."""

from __future__ import annotations

import dataclasses
import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from quadsim.curves import ColorCurve, Curve
from quadsim.geometry import Vec2, polar_to_cartesian

Mesh = tuple[list[float], list[int]]

_VERTEX_TAIL = (1.0, 1.0, 1.0, 1.0)


@dataclass(frozen=True)
class EmissionPoint:
    """Particles spawn exactly at the emitter position."""

    def random_point(self, rng: random.Random) -> Vec2:
        return Vec2(0.0, 0.0)


@dataclass(frozen=True)
class EmissionRect:
    """Particles spawn anywhere in a rectangle centred on the emitter."""

    width: float
    height: float

    def random_point(self, rng: random.Random) -> Vec2:
        return Vec2(
            rng.uniform(-self.width / 2.0, self.width / 2.0),
            rng.uniform(-self.height / 2.0, self.height / 2.0),
        )


@dataclass(frozen=True)
class EmissionSphere:
    """Particles spawn uniformly inside a disc centred on the emitter."""

    radius: float

    def random_point(self, rng: random.Random) -> Vec2:
        rho = math.sqrt(rng.uniform(0.0, self.radius * self.radius))
        phi = rng.uniform(0.0, math.pi * 2.0)
        return polar_to_cartesian(rho, phi)


EmissionShape = Union[EmissionPoint, EmissionRect, EmissionSphere]


@dataclass(frozen=True)
class RectangleShape:
    """A quad particle, ``aspect_ratio`` wide per unit of height."""

    aspect_ratio: float = 1.0

    def mesh(self) -> Mesh:
        """Vertices as position(3), uv(2), colour(4) rows, and triangle indices."""
        a = self.aspect_ratio
        corners = [(-a, -1.0, 0.0, 0.0), (a, -1.0, 1.0, 0.0), (a, 1.0, 1.0, 1.0), (-a, 1.0, 0.0, 1.0)]
        vertices: list[float] = []
        for x, y, u, v in corners:
            vertices.extend((x, y, 0.0, u, v, *_VERTEX_TAIL))
        return vertices, [0, 1, 2, 0, 2, 3]


@dataclass(frozen=True)
class CircleShape:
    """A disc particle built as a fan of ``subdivisions`` triangles."""

    subdivisions: int

    def __post_init__(self) -> None:
        if self.subdivisions < 1:
            raise ValueError("a circle needs at least one subdivision")

    def mesh(self) -> Mesh:
        """Centre vertex followed by the rim, with fan indices."""
        vertices: list[float] = [0.0, 0.0, 0.0, 0.0, 0.0, *_VERTEX_TAIL]
        indices: list[int] = []
        for i in range(self.subdivisions + 1):
            angle = i / self.subdivisions * math.pi * 2.0
            rx, ry = math.cos(angle), math.sin(angle)
            vertices.extend((rx, ry, 0.0, rx, ry, *_VERTEX_TAIL))
            if i != self.subdivisions:
                indices.extend((0, i + 1, i + 2))
        return vertices, indices


@dataclass(frozen=True)
class CustomMeshShape:
    """A particle mesh given directly."""

    vertices: tuple[float, ...]
    indices: tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertices", tuple(self.vertices))
        object.__setattr__(self, "indices", tuple(self.indices))

    def mesh(self) -> Mesh:
        return list(self.vertices), list(self.indices)


ParticleShape = Union[RectangleShape, CircleShape, CustomMeshShape]


class BlendMode(Enum):
    """How overlapping particles combine."""

    ALPHA = "alpha"
    ADDITIVE = "additive"


@dataclass(frozen=True)
class AtlasConfig:
    """A sprite sheet of ``n`` columns and ``m`` rows, animated over a frame range."""

    n: int
    m: int
    start_index: int
    end_index: int

    @classmethod
    def from_range(cls, n: int, m: int, indices: range | slice) -> AtlasConfig:
        """Build from a frame range; a slice with no stop runs to the last frame."""
        step = indices.step
        if step not in (None, 1):
            raise ValueError("atlas frame range must have a step of 1")
        start = indices.start if indices.start is not None else 0
        end = indices.stop if indices.stop is not None else n * m
        return cls(n, m, start, end)


@dataclass(frozen=True)
class ParticleMaterial:
    """Shader sources used to shade particles."""

    vertex: str
    fragment: str


@dataclass(frozen=True)
class PostProcessing:
    """Render particles off-screen first, then composite them."""


@dataclass
class EmitterConfig:
    """Every setting of a particle emitter."""

    local_coords: bool = False
    emission_shape: EmissionShape = field(default_factory=EmissionPoint)
    one_shot: bool = False
    lifetime: float = 1.0
    lifetime_randomness: float = 0.0
    explosiveness: float = 0.0
    amount: int = 8
    shape: ParticleShape = field(default_factory=RectangleShape)
    emitting: bool = True
    initial_direction: Vec2 = field(default_factory=lambda: Vec2(0.0, -1.0))
    initial_direction_spread: float = 0.0
    initial_velocity: float = 50.0
    initial_velocity_randomness: float = 0.0
    linear_accel: float = 0.0
    initial_rotation: float = 0.0
    initial_rotation_randomness: float = 0.0
    initial_angular_velocity: float = 0.0
    initial_angular_velocity_randomness: float = 0.0
    angular_accel: float = 0.0
    angular_damping: float = 0.0
    size: float = 10.0
    size_randomness: float = 0.0
    size_curve: Curve | None = None
    blend_mode: BlendMode = BlendMode.ALPHA
    colors_curve: ColorCurve = field(default_factory=ColorCurve)
    gravity: Vec2 = field(default_factory=lambda: Vec2(0.0, 0.0))
    texture: Any = None
    atlas: AtlasConfig | None = None
    material: ParticleMaterial | None = None
    post_processing: PostProcessing | None = None

    def replace(self, **kwargs: Any) -> EmitterConfig:
        """A copy with the given fields changed."""
        return dataclasses.replace(self, **kwargs)