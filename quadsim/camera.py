"""Camera helpers: angle smoothing and a first-person fly camera."""

from __future__ import annotations

import math

from quadsim.geometry import Vec3

MOVE_SPEED = 0.1
LOOK_SPEED = 0.1
PITCH_LIMIT = 1.5


def short_angle_dist(a0: float, a1: float) -> float:
    """Signed shortest distance in degrees from ``a0`` to ``a1``."""
    da = math.fmod(a1 - a0, 360.0)
    return math.fmod(2.0 * da, 360.0) - da


def angle_lerp(a0: float, a1: float, t: float) -> float:
    """Interpolate between two angles in degrees along the shorter arc."""
    return a0 + short_angle_dist(a0, a1) * t


def wrap_rotation(angle: float) -> float:
    """Bring an angle that stepped just outside 0..360 back into range."""
    if angle >= 360.0:
        return angle - 360.0
    if angle < 0.0:
        return angle + 360.0
    return angle


class FirstPersonCamera:
    """A yaw/pitch camera that walks along its view direction."""

    def __init__(
        self,
        position: Vec3 = Vec3(0.0, 1.0, 0.0),
        yaw: float = 1.18,
        pitch: float = 0.0,
        world_up: Vec3 = Vec3(0.0, 1.0, 0.0),
    ) -> None:
        self.position = position
        self.yaw = yaw
        self.pitch = pitch
        self.world_up = world_up
        self._update_vectors()

    def _update_vectors(self) -> None:
        self.front = Vec3(
            math.cos(self.yaw) * math.cos(self.pitch),
            math.sin(self.pitch),
            math.sin(self.yaw) * math.cos(self.pitch),
        ).normalize()
        self.right = self.front.cross(self.world_up).normalize()
        self.up = self.right.cross(self.front).normalize()

    @property
    def target(self) -> Vec3:
        """The point the camera looks at."""
        return self.position + self.front

    def look(self, dx: float, dy: float, delta: float) -> None:
        """Turn by a mouse movement of ``(dx, dy)`` over a frame of ``delta`` seconds."""
        self.yaw += dx * delta * LOOK_SPEED
        self.pitch += dy * delta * -LOOK_SPEED
        self.pitch = max(-PITCH_LIMIT, min(PITCH_LIMIT, self.pitch))
        self._update_vectors()

    def move(self, forward: bool, back: bool, left: bool, right: bool) -> None:
        """Step according to the held movement keys."""
        if forward:
            self.position = self.position + self.front * MOVE_SPEED
        if back:
            self.position = self.position - self.front * MOVE_SPEED
        if left:
            self.position = self.position - self.right * MOVE_SPEED
        if right:
            self.position = self.position + self.right * MOVE_SPEED