from __future__ import annotations

from typing import Callable, Dict, List, Optional

from .data_models import (
    Actor,
    ActorView,
    EndReason,
    EntityView,
    Obstacle,
    Outcome,
    PowerUp,
    PowerUpType,
    RenderSnapshot,
    RNGContainer,
    RunnerConfig,
    SessionCounters,
    SessionState,
    SessionStateError,
)
from .geometry import LaneSet, boxes_overlap, clamp_lane
from .telemetry import TelemetryActorFrame, TelemetryCollector, TelemetryFrame

EndListener = Callable[[Outcome], None]
ScoreboardListener = Callable[[int, int], None]
PlayerPolicy = Callable[[RenderSnapshot], int]


class RunnerSession:
    """
    Authoritative state for one lane-runner play session.

    The session is advanced once per animation frame with ``tick()``. Spawning
    and the one-second clock are driven from outside, either by
    ``RunnerScheduler`` in real time or by ``run_until_finished`` on simulated
    time.
    """

    def __init__(
        self,
        width: float,
        height: float,
        config: Optional[RunnerConfig] = None,
        rng_seed: Optional[int] = None,
        telemetry: Optional[TelemetryCollector] = None,
        verbose: bool = False,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Viewport width and height must be positive.")

        self.config = config or RunnerConfig.from_balance_config()
        self.width = width
        self.height = height
        self.lanes = LaneSet.from_width(width, self.config.lane_fractions, self.config.lane_offsets)
        self.rng = RNGContainer.from_seed(rng_seed)
        self.telemetry = telemetry
        self.verbose = verbose

        middle = len(self.lanes) // 2
        self.player = self._build_actor("player", middle, self.config.player_start_offset, self.config.player_speed)
        self.computer = self._build_actor(
            "computer", middle, self.config.computer_start_offset, self.config.computer_speed
        )
        self.obstacles: List[Obstacle] = []
        self.power_ups: List[PowerUp] = []
        self.counters = SessionCounters()
        self.state = SessionState.NOT_STARTED
        self.outcome: Optional[Outcome] = None
        self.tick_index = 0

        self._end_listeners: List[EndListener] = []
        self._scoreboard_listeners: List[ScoreboardListener] = []
        self._events: List[str] = []

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #
    @property
    def is_running(self) -> bool:
        return self.state is SessionState.RUNNING

    @property
    def distance(self) -> int:
        return self.counters.distance

    @property
    def time(self) -> int:
        return self.counters.time

    def start(self) -> None:
        if self.state is not SessionState.NOT_STARTED:
            raise SessionStateError(f"Cannot start a session that is {self.state.value}.")
        self.state = SessionState.RUNNING
        self._log(f"Session started ({self.width:.0f}x{self.height:.0f}).")

    def add_end_listener(self, listener: EndListener) -> None:
        self._end_listeners.append(listener)

    def add_scoreboard_listener(self, listener: ScoreboardListener) -> None:
        self._scoreboard_listeners.append(listener)

    def resize(self, width: float, height: float) -> None:
        """Rebuilds the lane layout for a new viewport and re-pins everything to it."""
        if width <= 0 or height <= 0:
            raise ValueError("Viewport width and height must be positive.")
        self.width = width
        self.height = height
        self.lanes = LaneSet.from_width(width, self.config.lane_fractions, self.config.lane_offsets)
        for body in [self.player, self.computer, *self.obstacles, *self.power_ups]:
            body.x = self.lanes.x_for(body.lane)
        self._log(f"Viewport resized to {width:.0f}x{height:.0f}; lanes at {self.lanes.xs}.")

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #
    def move_player(self, direction: int) -> int:
        """Shifts the player by ``direction`` lanes, clamped to the lane set."""
        if self.state is SessionState.ENDED:
            return self.player.lane
        self.player.lane = clamp_lane(self.player.lane + direction, len(self.lanes))
        self.player.x = self.lanes.x_for(self.player.lane)
        return self.player.lane

    def spawn_obstacle(self, lane: Optional[int] = None) -> Optional[Obstacle]:
        if not self.is_running:
            return None
        if lane is None:
            lane = self.rng.lane_rng.randrange(len(self.lanes))
        lane = clamp_lane(lane, len(self.lanes))
        obstacle = Obstacle(
            lane=lane,
            x=self.lanes.x_for(lane),
            y=self.config.spawn_y,
            width=self.config.obstacle_width,
            height=self.config.obstacle_height,
            color=self.config.obstacle_color,
        )
        self.obstacles.append(obstacle)
        return obstacle

    def spawn_power_up(self, lane: Optional[int] = None, kind: Optional[PowerUpType] = None) -> Optional[PowerUp]:
        if not self.is_running:
            return None
        if lane is None:
            lane = self.rng.lane_rng.randrange(len(self.lanes))
        if kind is None:
            roll = self.rng.kind_rng.random()
            kind = PowerUpType.SHIELD if roll > self.config.shield_threshold else PowerUpType.BOOST
        lane = clamp_lane(lane, len(self.lanes))
        power_up = PowerUp(
            lane=lane,
            x=self.lanes.x_for(lane),
            y=self.config.spawn_y,
            width=self.config.power_up_width,
            height=self.config.power_up_height,
            kind=kind,
        )
        self.power_ups.append(power_up)
        return power_up

    def tick_clock(self) -> int:
        """One-second scorekeeping tick."""
        if not self.is_running:
            return self.counters.time
        self.counters.time += 1
        for listener in self._scoreboard_listeners:
            listener(self.counters.distance, self.counters.time)
        return self.counters.time

    def scoreboard_text(self) -> str:
        return f"Distance: {self.counters.distance} | Time: {self.counters.time}s"

    # ------------------------------------------------------------------ #
    # Frame update
    # ------------------------------------------------------------------ #
    def tick(self) -> RenderSnapshot:
        if not self.is_running:
            return self.snapshot()

        self.tick_index += 1
        self._events = []
        previous_y = {self.player.name: self.player.y, self.computer.name: self.computer.y}

        self._step()

        if self.telemetry is not None:
            self._record_telemetry(previous_y)
        return self.snapshot()

    def _step(self) -> None:
        cfg = self.config

        self.counters.background_y += cfg.background_speed
        if self.counters.background_y >= self.height:
            self.counters.background_y = 0.0

        for obstacle in self.obstacles:
            obstacle.y += cfg.obstacle_speed
        for power_up in self.power_ups:
            power_up.y += cfg.power_up_speed

        for obstacle in self.obstacles:
            if not boxes_overlap(self.player, obstacle):
                continue
            if self.player.shield:
                self.player.shield = False
                self._events.append("shield_consumed")
            else:
                self._end(EndReason.COLLISION)
                return

        for obstacle in self.obstacles:
            self._computer_evade(obstacle)

        kept_obstacles = [obstacle for obstacle in self.obstacles if obstacle.y <= self.height]
        self._events.extend(["obstacle_passed"] * (len(self.obstacles) - len(kept_obstacles)))
        self.obstacles = kept_obstacles

        kept_power_ups: List[PowerUp] = []
        for power_up in self.power_ups:
            if boxes_overlap(self.player, power_up):
                self._apply_power_up(power_up)
            elif power_up.y > self.height:
                self._events.append("power_up_passed")
            else:
                kept_power_ups.append(power_up)
        self.power_ups = kept_power_ups

        self.player.y -= cfg.forward_step
        self.computer.y -= cfg.forward_step
        self.counters.distance += 1

        # Player is checked first, so a simultaneous finish goes to the player.
        if self.player.y <= cfg.finish_line_y:
            self._end(EndReason.PLAYER_FINISHED)
        elif self.computer.y <= cfg.finish_line_y:
            self._end(EndReason.COMPUTER_FINISHED)

    def _computer_evade(self, obstacle: Obstacle) -> None:
        computer = self.computer
        in_band = computer.y < obstacle.y < computer.y + self.config.dodge_band
        if not in_band or obstacle.lane != computer.lane:
            return
        computer.lane = computer.lane - 1 if computer.lane > 0 else computer.lane + 1
        computer.x = self.lanes.x_for(computer.lane)
        self._events.append(f"computer_dodge:{computer.lane}")

    def _apply_power_up(self, power_up: PowerUp) -> None:
        if power_up.kind is PowerUpType.SHIELD:
            self.player.shield = True
        elif power_up.kind is PowerUpType.BOOST:
            self.player.y -= self.config.boost_distance
        self._events.append(f"pickup:{power_up.kind.value}")

    def _end(self, reason: EndReason) -> None:
        self.state = SessionState.ENDED
        self.outcome = Outcome(reason=reason, tick=self.tick_index, distance=self.counters.distance)
        self._events.append(f"ended:{reason.value}")
        self._log(f"{self.outcome.message} (tick {self.tick_index}, distance {self.counters.distance})")
        for listener in self._end_listeners:
            listener(self.outcome)

    # ------------------------------------------------------------------ #
    # Drivers
    # ------------------------------------------------------------------ #
    def run_until_finished(
        self,
        frame_ms: Optional[float] = None,
        max_ticks: int = 100_000,
        on_tick: Optional[Callable[[RenderSnapshot], None]] = None,
        player_policy: Optional[PlayerPolicy] = None,
        spawn: bool = True,
    ) -> List[RenderSnapshot]:
        """
        Runs the session headless on simulated time.

        Spawners and the clock fire from accumulated frame time, with the
        first obstacle and power-up spawned before the first tick, so a seeded
        session always replays the same way.
        """
        if self.state is SessionState.NOT_STARTED:
            self.start()

        cfg = self.config
        frame_ms = cfg.frame_ms if frame_ms is None else frame_ms
        if frame_ms <= 0:
            raise ValueError("frame_ms must be positive.")

        snapshots: List[RenderSnapshot] = []
        elapsed = 0.0
        obstacle_due = 0.0
        power_up_due = 0.0
        clock_due = cfg.clock_interval_ms

        for _ in range(max_ticks):
            if not self.is_running:
                break
            if spawn:
                while elapsed >= obstacle_due:
                    self.spawn_obstacle()
                    obstacle_due += cfg.obstacle_frequency_ms
                while elapsed >= power_up_due:
                    self.spawn_power_up()
                    power_up_due += cfg.power_up_frequency_ms
            if player_policy is not None:
                direction = player_policy(self.snapshot())
                if direction:
                    self.move_player(direction)

            snapshot = self.tick()
            snapshots.append(snapshot)
            if on_tick:
                on_tick(snapshot)

            elapsed += frame_ms
            while elapsed >= clock_due:
                self.tick_clock()
                clock_due += cfg.clock_interval_ms

        return snapshots

    # ------------------------------------------------------------------ #
    # Views
    # ------------------------------------------------------------------ #
    def snapshot(self) -> RenderSnapshot:
        return RenderSnapshot(
            tick=self.tick_index,
            state=self.state,
            background_y=self.counters.background_y,
            finish_line_y=self.config.finish_line_y,
            player=self._actor_view(self.player),
            computer=self._actor_view(self.computer),
            obstacles=tuple(
                EntityView(o.lane, o.x, o.y, o.width, o.height, o.color, "obstacle") for o in self.obstacles
            ),
            power_ups=tuple(
                EntityView(p.lane, p.x, p.y, p.width, p.height, p.color, p.kind.value) for p in self.power_ups
            ),
            distance=self.counters.distance,
            time=self.counters.time,
        )

    def _build_actor(self, name: str, lane: int, start_offset: float, speed: float) -> Actor:
        return Actor(
            name=name,
            lane=lane,
            x=self.lanes.x_for(lane),
            y=self.height - start_offset,
            width=self.config.actor_width,
            height=self.config.actor_height,
            speed=speed,
        )

    @staticmethod
    def _actor_view(actor: Actor) -> ActorView:
        return ActorView(actor.name, actor.lane, actor.x, actor.y, actor.width, actor.height, actor.shield, actor.speed)

    def _record_telemetry(self, previous_y: Dict[str, float]) -> None:
        actors = [
            TelemetryActorFrame(
                name=actor.name,
                lane=actor.lane,
                x=actor.x,
                y=actor.y,
                y_delta=actor.y - previous_y.get(actor.name, actor.y),
                shield=actor.shield,
            )
            for actor in (self.player, self.computer)
        ]
        self.telemetry.record_frame(
            TelemetryFrame(
                tick=self.tick_index,
                distance=self.counters.distance,
                time=self.counters.time,
                state=self.state.value,
                obstacle_count=len(self.obstacles),
                power_up_count=len(self.power_ups),
                actors=actors,
                events=list(self._events),
            )
        )

    def _log(self, message: str) -> None:
        if self.verbose:
            print(f"[Runner] {message}")
