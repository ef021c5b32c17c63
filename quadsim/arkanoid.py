"""Breakout rules: a paddle, a bouncing ball and a wall of blocks."""

from __future__ import annotations

from quadsim.geometry import Rect, Vec2

SCREEN_WIDTH = 20.0
SCREEN_HEIGHT = 20.0
BLOCKS_W = 10
BLOCKS_H = 10
BLOCK_AREA_HEIGHT = 7.0
PLATFORM_WIDTH = 5.0
PLATFORM_HEIGHT = 0.2
PLATFORM_SPEED = 3.0


class Arkanoid:
    """Game state in a 20 x 20 world with the origin at the top left."""

    def __init__(self) -> None:
        self.blocks = [[True] * BLOCKS_W for _ in range(BLOCKS_H)]
        self.ball_x = 12.0
        self.ball_y = 7.0
        self.dx = 3.5
        self.dy = -3.5
        self.platform_x = 10.0
        self.stick = True

    @staticmethod
    def _block_rect(i: int, j: int) -> Rect:
        block_w = SCREEN_WIDTH / BLOCKS_W
        block_h = BLOCK_AREA_HEIGHT / BLOCKS_H
        return Rect(i * block_w + 0.05, j * block_h + 0.05, block_w, block_h)

    def update(self, dt: float, left: bool, right: bool, launch: bool) -> None:
        """Advance one frame of ``dt`` seconds with the given controls held."""
        half = PLATFORM_WIDTH / 2.0
        if right and self.platform_x < SCREEN_WIDTH - half:
            self.platform_x += PLATFORM_SPEED * dt
        if left and self.platform_x > half:
            self.platform_x -= PLATFORM_SPEED * dt

        if not self.stick:
            self.ball_x += self.dx * dt
            self.ball_y += self.dy * dt
        else:
            self.ball_x = self.platform_x
            self.ball_y = SCREEN_HEIGHT - 0.5
            self.stick = not launch

        if self.ball_x <= 0.0 or self.ball_x > SCREEN_WIDTH:
            self.dx = -self.dx
        on_platform = (
            self.ball_y > SCREEN_HEIGHT - PLATFORM_HEIGHT - 0.15 / 2.0
            and self.platform_x - half <= self.ball_x <= self.platform_x + half
        )
        if self.ball_y <= 0.0 or on_platform:
            self.dy = -self.dy
        if self.ball_y >= SCREEN_HEIGHT:
            self.ball_y = 10.0
            self.dy = -abs(self.dy)
            self.stick = True

        for j, row in enumerate(self.blocks):
            for i, present in enumerate(row):
                if present and self._block_rect(i, j).contains(Vec2(self.ball_x, self.ball_y)):
                    self.dy = -self.dy
                    row[i] = False

    def blocks_left(self) -> int:
        """Number of blocks still standing."""
        return sum(sum(row) for row in self.blocks)