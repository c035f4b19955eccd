from .calculator import Calculator, evaluate_expression  # noqa: F401
from .countdown import CountdownTimer, format_clock  # noqa: F401
from .password import generate_password  # noqa: F401
from .rps import Choice, RockPaperScissors, RoundResult  # noqa: F401
from .snake import SnakeGame, SnakeStepResult  # noqa: F401

__all__ = [
    "Calculator",
    "evaluate_expression",
    "CountdownTimer",
    "format_clock",
    "generate_password",
    "Choice",
    "RockPaperScissors",
    "RoundResult",
    "SnakeGame",
    "SnakeStepResult",
]
