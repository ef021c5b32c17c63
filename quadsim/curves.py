"""Colours and piecewise-linear curves that particles follow over their lifetime."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from itertools import pairwise
from typing import Iterator


@dataclass(frozen=True)
class Color:
    """An RGBA colour with float components, normally in 0..1."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def __iter__(self) -> Iterator[float]:
        yield self.r
        yield self.g
        yield self.b
        yield self.a

    def lerp(self, other: Color, t: float) -> Color:
        """Blend component-wise: ``self * (1 - t) + other * t``."""
        s = 1.0 - t
        return Color(
            self.r * s + other.r * t,
            self.g * s + other.g * t,
            self.b * s + other.b * t,
            self.a * s + other.a * t,
        )


WHITE = Color(1.0, 1.0, 1.0, 1.0)


class Interpolation(Enum):
    """How the points between a curve's key points are built."""

    LINEAR = "linear"
    BEZIER = "bezier"


@dataclass(frozen=True)
class BatchedCurve:
    """A curve sampled at even steps, looked up by a 0..1 parameter."""

    points: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))

    def get(self, t: float) -> float:
        """Value at ``t``, interpolated between neighbouring samples."""
        if not self.points:
            raise ValueError("batched curve has no points")
        last = len(self.points) - 1
        t_scaled = t * len(self.points)
        previous_ix = min(max(0, int(t_scaled)), last)
        next_ix = min(previous_ix + 1, last)
        previous = self.points[previous_ix]
        following = self.points[next_ix]
        return previous + (following - previous) * (t_scaled - previous_ix)


@dataclass(frozen=True)
class Curve:
    """Key points ``(x, y)`` with x ascending from 0 to 1."""

    points: tuple[tuple[float, float], ...] = ()
    interpolation: Interpolation = Interpolation.LINEAR
    resolution: int = 20

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "points", tuple((float(x), float(y)) for x, y in self.points)
        )
        if self.resolution <= 0:
            raise ValueError("curve resolution must be positive")

    def batch(self) -> BatchedCurve:
        """Sample the curve every ``1 / resolution`` along x."""
        if self.interpolation is Interpolation.BEZIER:
            raise ValueError("only linear interpolation is supported")
        step = 1.0 / self.resolution
        x = 0.0
        samples: list[float] = []
        for (start_x, start_y), (end_x, end_y) in pairwise(self.points):
            while x <= end_x:
                t = (x - start_x) / (end_x - start_x)
                samples.append(start_y + (end_y - start_y) * t)
                x += step
        return BatchedCurve(tuple(samples))


@dataclass(frozen=True)
class ColorCurve:
    """Colour at the start, middle and end of a particle's life."""

    start: Color = field(default=WHITE)
    mid: Color = field(default=WHITE)
    end: Color = field(default=WHITE)

    def at(self, t: float) -> Color:
        """Colour at life fraction ``t``: start to mid over the first half, mid to end after."""
        if t < 0.5:
            return self.start.lerp(self.mid, t * 2.0)
        return self.mid.lerp(self.end, (t - 0.5) * 2.0)