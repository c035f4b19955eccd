from __future__ import annotations

from dataclasses import dataclass

from pocket_arcade.config import get_config

DEFAULT_SECONDS = get_config("countdown.default_seconds", default=60)


def format_clock(seconds: int) -> str:
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


@dataclass
class CountdownTimer:
    """
    Second-resolution countdown. The caller fires ``tick()`` once a second
    while ``running`` is set.

    Reaching 00:00 does not expire the timer by itself; the next tick does,
    so the display holds 00:00 for one full second first.
    """

    time_left: int = DEFAULT_SECONDS
    running: bool = False
    expired: bool = False

    @property
    def display(self) -> str:
        return format_clock(self.time_left)

    def start(self, seconds: int) -> bool:
        if self.running:
            return False
        seconds = int(seconds)
        if seconds <= 0:
            raise ValueError("Please enter a valid time.")
        self.time_left = seconds
        self.running = True
        self.expired = False
        return True

    def tick(self) -> bool:
        """Advances one second; returns True on the tick the timer expires."""
        if not self.running:
            return False
        if self.time_left <= 0:
            self.running = False
            self.expired = True
            return True
        self.time_left -= 1
        return False

    def pause(self) -> None:
        self.running = False

    def reset(self, seconds: int = DEFAULT_SECONDS) -> None:
        self.running = False
        self.expired = False
        self.time_left = int(seconds)
