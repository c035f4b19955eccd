from __future__ import annotations

from typing import Optional

from pocket_arcade.config import get_config

from .data_models import RenderSnapshot

KEY_BINDINGS = {
    "ArrowLeft": -1,
    "ArrowRight": 1,
}

SWIPE_THRESHOLD = get_config("controls.swipe_threshold", default=30)


def direction_for_key(key: str) -> Optional[int]:
    return KEY_BINDINGS.get(key)


def classify_swipe(start_x: Optional[float], end_x: float, threshold: float = SWIPE_THRESHOLD) -> Optional[int]:
    """
    Maps a horizontal swipe to a lane move.

    Displacements of ``threshold`` or less are ignored, as are swipes with
    no recorded start.
    """
    if start_x is None:
        return None
    dx = end_x - start_x
    if dx < -threshold:
        return -1
    if dx > threshold:
        return 1
    return None


def autopilot(snapshot: RenderSnapshot, lookahead: float = 250.0) -> int:
    """
    Simple player policy for headless runs: leave the current lane when an
    obstacle is closing in on it, preferring a free neighbouring lane.
    """
    player = snapshot.player
    threatened = set()
    for obstacle in snapshot.obstacles:
        gap = player.y - (obstacle.y + obstacle.height)
        if -player.height <= gap <= lookahead:
            threatened.add(obstacle.lane)

    if player.lane not in threatened:
        return 0
    for direction in (-1, 1):
        lane = player.lane + direction
        if 0 <= lane <= 2 and lane not in threatened:
            return direction
    return 0
