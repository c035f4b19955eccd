from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, Tuple

import numpy as np


class Box(Protocol):
    x: float
    y: float
    width: float
    height: float


def boxes_overlap(a: Box, b: Box) -> bool:
    """Axis-aligned overlap test; boxes that only touch on an edge still count."""
    return not (
        a.x + a.width < b.x
        or a.x > b.x + b.width
        or a.y + a.height < b.y
        or a.y > b.y + b.height
    )


def clamp_lane(lane: int, lane_count: int = 3) -> int:
    return int(np.clip(lane, 0, lane_count - 1))


@dataclass(frozen=True)
class LaneSet:
    """Horizontal lane coordinates derived from the viewport width."""

    xs: Tuple[float, ...]

    @classmethod
    def from_width(
        cls,
        width: float,
        fractions: Sequence[float] = (0.25, 0.5, 0.75),
        offsets: Sequence[float] = (-50.0, -25.0, 0.0),
    ) -> "LaneSet":
        if width <= 0:
            raise ValueError("Viewport width must be positive.")
        if len(fractions) != len(offsets):
            raise ValueError("Lane fractions and offsets must have the same length.")
        return cls(xs=tuple(width * frac + off for frac, off in zip(fractions, offsets)))

    def __len__(self) -> int:
        return len(self.xs)

    @property
    def last(self) -> int:
        return len(self.xs) - 1

    def x_for(self, lane: int) -> float:
        return self.xs[clamp_lane(lane, len(self.xs))]
