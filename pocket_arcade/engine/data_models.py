from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import random
from typing import Any, Dict, Optional, Sequence, Tuple

from pocket_arcade.config import get_config


class SessionState(Enum):
    """Lifecycle of one play session."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    ENDED = "ended"


class PowerUpType(Enum):
    SHIELD = "shield"
    BOOST = "boost"

    @classmethod
    def from_str(cls, value: str) -> "PowerUpType":
        try:
            return cls(value.lower())
        except ValueError as exc:
            raise ValueError(f"Unknown power-up type: {value}") from exc

    @property
    def color(self) -> str:
        return "cyan" if self is PowerUpType.SHIELD else "yellow"


class EndReason(Enum):
    COLLISION = "collision"
    PLAYER_FINISHED = "player_finished"
    COMPUTER_FINISHED = "computer_finished"


END_MESSAGES = {
    EndReason.COLLISION: "Game Over!",
    EndReason.PLAYER_FINISHED: "You win!",
    EndReason.COMPUTER_FINISHED: "Computer wins!",
}


class SessionStateError(RuntimeError):
    """Raised when a lifecycle operation is called in the wrong state."""


@dataclass(frozen=True)
class Outcome:
    reason: EndReason
    tick: int
    distance: int

    @property
    def won(self) -> bool:
        return self.reason is EndReason.PLAYER_FINISHED

    @property
    def message(self) -> str:
        return END_MESSAGES[self.reason]


@dataclass(frozen=True)
class RunnerConfig:
    """Balance constants for the runner; defaults match configs/game_balance.json."""

    lane_fractions: Tuple[float, float, float] = (0.25, 0.5, 0.75)
    lane_offsets: Tuple[float, float, float] = (-50.0, -25.0, 0.0)
    finish_line_y: float = 50.0
    background_speed: float = 4.0
    obstacle_speed: float = 6.0
    power_up_speed: float = 4.0
    forward_step: float = 2.0
    boost_distance: float = 100.0
    dodge_band: float = 100.0
    spawn_y: float = -100.0
    obstacle_frequency_ms: float = 1200.0
    power_up_frequency_ms: float = 8000.0
    clock_interval_ms: float = 1000.0
    frame_ms: float = 1000.0 / 60.0
    actor_width: float = 50.0
    actor_height: float = 80.0
    player_start_offset: float = 150.0
    computer_start_offset: float = 300.0
    player_speed: float = 8.0
    computer_speed: float = 5.0
    obstacle_width: float = 50.0
    obstacle_height: float = 50.0
    obstacle_color: str = "black"
    power_up_width: float = 40.0
    power_up_height: float = 40.0
    shield_threshold: float = 0.5

    @classmethod
    def from_balance_config(cls, config: Optional[Dict[str, Any]] = None) -> "RunnerConfig":
        """Builds a config from the 'runner' section, keeping defaults for missing keys."""
        section = get_config("runner", default={}, config=config) or {}
        actor = section.get("actor", {})
        obstacle = section.get("obstacle", {})
        power_up = section.get("power_up", {})
        defaults = cls()

        def pick(source: Dict[str, Any], key: str, attr: str) -> Any:
            return source.get(key, getattr(defaults, attr))

        return cls(
            lane_fractions=tuple(section.get("lane_fractions", defaults.lane_fractions)),
            lane_offsets=tuple(section.get("lane_offsets", defaults.lane_offsets)),
            finish_line_y=pick(section, "finish_line_y", "finish_line_y"),
            background_speed=pick(section, "background_speed", "background_speed"),
            obstacle_speed=pick(section, "obstacle_speed", "obstacle_speed"),
            power_up_speed=pick(section, "power_up_speed", "power_up_speed"),
            forward_step=pick(section, "forward_step", "forward_step"),
            boost_distance=pick(section, "boost_distance", "boost_distance"),
            dodge_band=pick(section, "dodge_band", "dodge_band"),
            spawn_y=pick(section, "spawn_y", "spawn_y"),
            obstacle_frequency_ms=pick(section, "obstacle_frequency_ms", "obstacle_frequency_ms"),
            power_up_frequency_ms=pick(section, "power_up_frequency_ms", "power_up_frequency_ms"),
            clock_interval_ms=pick(section, "clock_interval_ms", "clock_interval_ms"),
            frame_ms=pick(section, "frame_ms", "frame_ms"),
            actor_width=pick(actor, "width", "actor_width"),
            actor_height=pick(actor, "height", "actor_height"),
            player_start_offset=pick(actor, "player_start_offset", "player_start_offset"),
            computer_start_offset=pick(actor, "computer_start_offset", "computer_start_offset"),
            player_speed=pick(actor, "player_speed", "player_speed"),
            computer_speed=pick(actor, "computer_speed", "computer_speed"),
            obstacle_width=pick(obstacle, "width", "obstacle_width"),
            obstacle_height=pick(obstacle, "height", "obstacle_height"),
            obstacle_color=pick(obstacle, "color", "obstacle_color"),
            power_up_width=pick(power_up, "width", "power_up_width"),
            power_up_height=pick(power_up, "height", "power_up_height"),
            shield_threshold=pick(power_up, "shield_threshold", "shield_threshold"),
        )


@dataclass
class Actor:
    """
    Player or computer racer. ``x`` is always the x of ``lane``.

    ``speed`` is shown to the render and scoreboard collaborators only;
    forward motion always uses ``RunnerConfig.forward_step``.
    """

    name: str
    lane: int
    x: float
    y: float
    width: float
    height: float
    speed: float
    shield: bool = False


@dataclass
class Obstacle:
    lane: int
    x: float
    y: float
    width: float
    height: float
    color: str = "black"


@dataclass
class PowerUp:
    lane: int
    x: float
    y: float
    width: float
    height: float
    kind: PowerUpType = PowerUpType.SHIELD

    @property
    def color(self) -> str:
        return self.kind.color


@dataclass
class SessionCounters:
    distance: int = 0
    time: int = 0
    background_y: float = 0.0


@dataclass
class RNGContainer:
    """Separate seeded streams so spawn lanes and power-up types replay independently."""

    lane_seed: int
    kind_seed: int

    lane_rng: Optional[random.Random] = field(init=False, default=None)
    kind_rng: Optional[random.Random] = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.lane_rng = random.Random(self.lane_seed)
        self.kind_rng = random.Random(self.kind_seed)

    @classmethod
    def from_seed(cls, seed: Optional[int]) -> "RNGContainer":
        if seed is None:
            seed = random.randrange(2 ** 32)
        return cls(lane_seed=seed * 2 + 1, kind_seed=seed * 2 + 2)


@dataclass(frozen=True)
class ActorView:
    name: str
    lane: int
    x: float
    y: float
    width: float
    height: float
    shield: bool
    speed: float = 0.0


@dataclass(frozen=True)
class EntityView:
    lane: int
    x: float
    y: float
    width: float
    height: float
    color: str
    kind: str


@dataclass(frozen=True)
class RenderSnapshot:
    """Read-only frame state handed to the render collaborator."""

    tick: int
    state: SessionState
    background_y: float
    finish_line_y: float
    player: ActorView
    computer: ActorView
    obstacles: Sequence[EntityView] = field(default_factory=tuple)
    power_ups: Sequence[EntityView] = field(default_factory=tuple)
    distance: int = 0
    time: int = 0
