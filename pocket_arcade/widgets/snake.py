from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pocket_arcade.config import get_config

Cell = Tuple[int, int]

STEER_KEYS = {
    "ArrowUp": (0, -1),
    "ArrowDown": (0, 1),
    "ArrowLeft": (-1, 0),
    "ArrowRight": (1, 0),
}


@dataclass
class SnakeStepResult:
    head: Cell
    ate_food: bool = False
    game_over: bool = False
    score: int = 0


@dataclass
class SnakeGame:
    """Grid snake. ``step()`` is called every ``step_ms``; losing resets the board."""

    grid_size: int = get_config("snake.grid_size", default=20)
    start: Cell = tuple(get_config("snake.start", default=(10, 10)))
    initial_food: Cell = tuple(get_config("snake.food", default=(15, 15)))
    food_points: int = get_config("snake.food_points", default=10)
    rng: random.Random = field(default_factory=random.Random)

    body: List[Cell] = field(init=False)
    food: Cell = field(init=False)
    direction: Cell = field(init=False)
    score: int = field(init=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.body = [self.start]
        self.food = self.initial_food
        self.direction = (0, 0)
        self.score = 0

    @property
    def head(self) -> Cell:
        return self.body[0]

    def steer(self, key: str) -> bool:
        """Turns the snake unless that would reverse it onto its own neck."""
        wanted: Optional[Cell] = STEER_KEYS.get(key)
        if wanted is None:
            return False
        dx, dy = self.direction
        if wanted[0] == -dx and wanted[0] != 0:
            return False
        if wanted[1] == -dy and wanted[1] != 0:
            return False
        self.direction = wanted
        return True

    def step(self) -> SnakeStepResult:
        hx, hy = self.head
        dx, dy = self.direction
        head = (hx + dx, hy + dy)
        self.body.insert(0, head)

        ate = head == self.food
        if ate:
            self.score += self.food_points
            self.food = (self.rng.randrange(self.grid_size), self.rng.randrange(self.grid_size))
        else:
            self.body.pop()

        out_of_bounds = not (0 <= head[0] < self.grid_size and 0 <= head[1] < self.grid_size)
        if out_of_bounds or head in self.body[1:]:
            result = SnakeStepResult(head=head, ate_food=ate, game_over=True, score=self.score)
            self.reset()
            return result
        return SnakeStepResult(head=head, ate_food=ate, score=self.score)
