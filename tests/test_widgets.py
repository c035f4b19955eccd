import random
import string
from unittest.mock import MagicMock

import pytest

from pocket_arcade.widgets import (
    Calculator,
    Choice,
    CountdownTimer,
    RockPaperScissors,
    SnakeGame,
    evaluate_expression,
    format_clock,
    generate_password,
)


# --- Snake -----------------------------------------------------------------


def test_snake_waits_until_steered():
    game = SnakeGame(rng=random.Random(1))
    result = game.step()
    assert result.head == (10, 10)
    assert result.game_over is False
    assert game.body == [(10, 10)]


def test_snake_moves_and_refuses_to_reverse():
    game = SnakeGame(rng=random.Random(1))
    assert game.steer("ArrowRight") is True
    game.step()
    assert game.head == (11, 10)

    assert game.steer("ArrowLeft") is False
    assert game.direction == (1, 0)
    assert game.steer("ArrowUp") is True
    assert game.steer("Space") is False


def test_snake_grows_and_scores_on_food():
    game = SnakeGame(rng=random.Random(1))
    game.food = (11, 10)
    game.steer("ArrowRight")

    result = game.step()

    assert result.ate_food is True
    assert game.score == 10
    assert game.body == [(11, 10), (10, 10)]
    assert 0 <= game.food[0] < 20 and 0 <= game.food[1] < 20


def test_snake_hitting_wall_ends_and_resets():
    game = SnakeGame(rng=random.Random(1))
    game.body = [(19, 10)]
    game.score = 30
    game.steer("ArrowRight")

    result = game.step()

    assert result.game_over is True
    assert result.score == 30
    assert game.body == [(10, 10)]
    assert game.score == 0
    assert game.direction == (0, 0)


def test_snake_biting_itself_ends_game():
    game = SnakeGame(rng=random.Random(1))
    game.body = [(5, 5), (4, 5), (4, 6), (5, 6), (6, 6), (6, 5)]
    game.direction = (0, 1)

    assert game.step().game_over is True


# --- Countdown -------------------------------------------------------------


def test_countdown_holds_zero_for_one_tick_before_expiring():
    timer = CountdownTimer()
    timer.start(2)

    assert timer.tick() is False
    assert timer.tick() is False
    assert timer.display == "00:00"
    assert timer.expired is False

    assert timer.tick() is True
    assert timer.expired is True
    assert timer.running is False


def test_countdown_rejects_non_positive_start():
    with pytest.raises(ValueError):
        CountdownTimer().start(0)


def test_countdown_start_is_ignored_while_running_and_pause_stops_ticks():
    timer = CountdownTimer()
    timer.start(90)
    assert timer.start(5) is False
    timer.tick()
    timer.pause()
    timer.tick()
    assert timer.display == "01:29"

    timer.reset(30)
    assert timer.display == "00:30"
    assert timer.running is False


def test_format_clock():
    assert format_clock(125) == "02:05"
    assert format_clock(0) == "00:00"


# --- Calculator ------------------------------------------------------------


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("2+3*4", "14"),
        ("7/2", "3.5"),
        ("4/2", "2"),
        ("-7%3", "-1"),
        ("(1+2)**2", "9"),
        ("0.1+0.2", "0.30000000000000004"),
        ("05+3", "8"),
        ("10+07", "17"),
        ("1.05*2", "2.1"),
        ("2**0.5*0", "0"),
    ],
)
def test_calculator_evaluates_arithmetic(expression, expected):
    calc = Calculator()
    calc.append(expression)
    assert calc.calculate() == expected


@pytest.mark.parametrize("expression", ["2+", "1/0", "9**9**9", "(-8)**0.5", "__import__('os')", "abc", ""])
def test_calculator_shows_error_and_clears(expression):
    calc = Calculator()
    calc.append(expression)
    assert calc.calculate() == "Error"
    assert calc.expression == ""


def test_calculator_continues_from_result_and_clears():
    calc = Calculator()
    for token in ("2", "+", "2"):
        calc.append(token)
    calc.calculate()
    calc.append("*3")
    assert calc.calculate() == "12"

    calc.clear()
    assert calc.display == "0"


def test_evaluate_expression_rejects_names():
    with pytest.raises(ValueError):
        evaluate_expression("x + 1")


# --- Rock paper scissors ---------------------------------------------------


def _rps(ai_choice: Choice) -> RockPaperScissors:
    rng = MagicMock()
    rng.choice.return_value = ai_choice
    return RockPaperScissors(rng=rng)


def test_rps_scores_wins_losses_and_ties():
    game = _rps(Choice.SCISSORS)
    assert game.play("rock").result == "win"
    assert game.play("paper").result == "loss"
    assert game.play("scissors").message == "It's a tie!"
    assert (game.player_score, game.ai_score) == (1, 1)

    game.reset()
    assert (game.player_score, game.ai_score, game.last_round) == (0, 0, None)


def test_rps_rejects_unknown_choice():
    with pytest.raises(ValueError):
        _rps(Choice.ROCK).play("lizard")


# --- Password generator ----------------------------------------------------


def test_password_uses_only_selected_sets():
    password = generate_password(32, upper=False, lower=False, numbers=True, rng=random.Random(4))
    assert len(password) == 32
    assert set(password) <= set(string.digits)


def test_password_is_repeatable_with_seed():
    assert generate_password(16, symbols=True, rng=random.Random(8)) == generate_password(
        16, symbols=True, rng=random.Random(8)
    )


def test_password_requires_a_character_set():
    with pytest.raises(ValueError):
        generate_password(8, upper=False, lower=False, numbers=False, symbols=False)
