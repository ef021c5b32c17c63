"""The snake game's rules on a square board."""

from __future__ import annotations

import random
from collections import deque

Point = tuple[int, int]

UP: Point = (0, -1)
DOWN: Point = (0, 1)
RIGHT: Point = (1, 0)
LEFT: Point = (-1, 0)
DIRECTIONS = (UP, DOWN, RIGHT, LEFT)

SQUARES = 16
START_SPEED = 0.3
FRUIT_SCORE = 100
SPEEDUP = 0.9


class SnakeGame:
    """A snake moving one square every ``speed`` seconds, eating fruit to grow."""

    def __init__(
        self,
        squares: int = SQUARES,
        rng: random.Random | None = None,
        now: float = 0.0,
    ) -> None:
        if squares < 1:
            raise ValueError("the board needs at least one square")
        self.squares = squares
        self.rng = rng if rng is not None else random.Random()
        self.restart(now)

    def _random_cell(self) -> Point:
        return (self.rng.randrange(self.squares), self.rng.randrange(self.squares))

    def restart(self, now: float) -> None:
        """Start a new game at time ``now``."""
        self.head: Point = (0, 0)
        self.direction: Point = RIGHT
        self.body: deque[Point] = deque()
        self.fruit: Point = self._random_cell()
        self.score = 0
        self.speed = START_SPEED
        self.last_update = now
        self.navigation_lock = False
        self.game_over = False

    def steer(self, direction: Point) -> bool:
        """Turn the snake; at most once per move and never straight back."""
        if direction not in DIRECTIONS:
            raise ValueError(f"not a direction: {direction!r}")
        opposite = (-self.direction[0], -self.direction[1])
        if self.game_over or self.navigation_lock or direction == opposite:
            return False
        self.direction = direction
        self.navigation_lock = True
        return True

    def update(self, now: float) -> bool:
        """Move the snake if its step time has passed; True if it moved."""
        if self.game_over or now - self.last_update <= self.speed:
            return False
        self.last_update = now
        self.body.appendleft(self.head)
        self.head = (self.head[0] + self.direction[0], self.head[1] + self.direction[1])
        if self.head == self.fruit:
            self.fruit = self._random_cell()
            self.score += FRUIT_SCORE
            self.speed *= SPEEDUP
        else:
            self.body.pop()
        x, y = self.head
        if not (0 <= x < self.squares and 0 <= y < self.squares) or self.head in self.body:
            self.game_over = True
        self.navigation_lock = False
        return True