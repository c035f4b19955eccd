from unittest.mock import MagicMock

from pocket_arcade.engine import (
    EndReason,
    PowerUpType,
    RunnerConfig,
    RunnerSession,
    SessionState,
    TelemetryCollector,
)


def _session(width: float = 800, height: float = 800, **kwargs) -> RunnerSession:
    session = RunnerSession(width, height, config=RunnerConfig(), rng_seed=1, **kwargs)
    session.start()
    return session


def test_shield_absorbs_one_obstacle_and_keeps_running():
    session = _session()
    session.player.shield = True
    session.spawn_obstacle(lane=1).y = 640

    session.tick()

    assert session.player.shield is False
    assert session.state is SessionState.RUNNING


def test_second_obstacle_in_same_tick_ends_session_after_shield_is_spent():
    session = _session()
    session.player.shield = True
    session.spawn_obstacle(lane=1).y = 640
    session.spawn_obstacle(lane=1).y = 645
    listener = MagicMock()
    session.add_end_listener(listener)

    session.tick()

    assert session.state is SessionState.ENDED
    assert session.outcome.reason is EndReason.COLLISION
    assert session.outcome.won is False
    assert session.outcome.message == "Game Over!"
    listener.assert_called_once_with(session.outcome)


def test_collision_skips_the_rest_of_the_tick():
    session = _session()
    session.spawn_obstacle(lane=1).y = 640
    player_y = session.player.y

    session.tick()

    assert session.outcome.reason is EndReason.COLLISION
    assert session.player.y == player_y
    assert session.distance == 0


def test_touching_edges_count_as_collision():
    session = _session()
    # Obstacle bottom lands exactly on the player's top edge after moving 6.
    session.spawn_obstacle(lane=1).y = session.player.y - 50 - 6

    session.tick()

    assert session.outcome.reason is EndReason.COLLISION


def test_boost_moves_player_up_by_exactly_100_and_is_removed():
    session = _session()
    start_y = session.player.y
    session.spawn_power_up(lane=1, kind=PowerUpType.BOOST).y = 620

    session.tick()

    assert session.player.y == start_y - 100 - 2
    assert session.power_ups == []


def test_shield_power_up_sets_flag():
    session = _session()
    session.spawn_power_up(lane=1, kind=PowerUpType.SHIELD).y = 620

    session.tick()

    assert session.player.shield is True
    assert session.power_ups == []


def test_every_overlapping_power_up_is_collected_in_one_tick():
    session = _session()
    session.spawn_power_up(lane=1, kind=PowerUpType.SHIELD).y = 620
    session.spawn_power_up(lane=1, kind=PowerUpType.BOOST).y = 625
    start_y = session.player.y

    session.tick()

    assert session.player.shield is True
    assert session.player.y == start_y - 102
    assert session.power_ups == []


def test_entities_past_viewport_are_removed_exactly_once():
    telemetry = TelemetryCollector()
    session = _session(telemetry=telemetry)
    session.spawn_obstacle(lane=0).y = 796
    session.spawn_power_up(lane=2, kind=PowerUpType.BOOST).y = 797
    session.spawn_obstacle(lane=2).y = 100

    session.tick()
    session.tick()

    assert len(session.obstacles) == 1
    assert session.power_ups == []
    events = [event for frame in telemetry.export() for event in frame.events]
    assert events.count("obstacle_passed") == 1
    assert events.count("power_up_passed") == 1


def test_power_up_collected_below_viewport_is_not_counted_as_passed():
    telemetry = TelemetryCollector()
    session = _session(telemetry=telemetry)
    session.player.y = 790
    session.spawn_power_up(lane=1, kind=PowerUpType.SHIELD).y = 797

    session.tick()

    events = telemetry.export()[0].events
    assert events.count("pickup:shield") == 1
    assert "power_up_passed" not in events
    assert session.power_ups == []


def test_computer_dodges_toward_lane_zero():
    session = _session()
    session.spawn_obstacle(lane=1).y = 520

    session.tick()

    assert session.computer.lane == 0
    assert session.computer.x == session.lanes.xs[0]


def test_computer_in_lane_zero_dodges_right():
    session = _session()
    session.computer.lane = 0
    session.computer.x = session.lanes.xs[0]
    session.spawn_obstacle(lane=0).y = 520

    session.tick()

    assert session.computer.lane == 1
    assert session.computer.x == session.lanes.xs[1]


def test_dodged_obstacle_stays_and_can_trigger_again():
    session = _session()
    obstacle = session.spawn_obstacle(lane=1)
    obstacle.y = 520

    session.tick()
    assert session.computer.lane == 0
    assert obstacle in session.obstacles

    session.computer.lane = 1
    session.computer.x = session.lanes.xs[1]
    session.tick()

    assert session.computer.lane == 0


def test_obstacle_outside_band_is_ignored():
    session = _session()
    session.spawn_obstacle(lane=1).y = 100

    session.tick()

    assert session.computer.lane == 1


def test_background_wraps_at_viewport_height():
    session = _session(height=800)
    session.counters.background_y = 796

    session.tick()

    assert session.counters.background_y == 0.0


def test_ticks_are_ignored_outside_running_state():
    session = RunnerSession(800, 800, config=RunnerConfig())
    before = session.snapshot()

    after = session.tick()

    assert after == before
    assert session.tick_index == 0
