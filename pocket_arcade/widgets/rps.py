from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Choice(Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"

    @classmethod
    def from_str(cls, value: str) -> "Choice":
        try:
            return cls(value.lower())
        except ValueError as exc:
            raise ValueError(f"Unknown choice: {value}") from exc

    def beats(self, other: "Choice") -> bool:
        return BEATS[self] is other


BEATS = {
    Choice.ROCK: Choice.SCISSORS,
    Choice.PAPER: Choice.ROCK,
    Choice.SCISSORS: Choice.PAPER,
}

RESULT_TEXT = {
    "tie": "It's a tie!",
    "win": "You win!",
    "loss": "AI wins!",
}


@dataclass(frozen=True)
class RoundResult:
    player_choice: Choice
    ai_choice: Choice
    result: str

    @property
    def message(self) -> str:
        return RESULT_TEXT[self.result]


@dataclass
class RockPaperScissors:
    rng: random.Random = field(default_factory=random.Random)
    player_score: int = 0
    ai_score: int = 0
    last_round: Optional[RoundResult] = None

    def play(self, choice: str) -> RoundResult:
        player_choice = choice if isinstance(choice, Choice) else Choice.from_str(choice)
        ai_choice = self.rng.choice(list(Choice))

        if player_choice is ai_choice:
            result = "tie"
        elif player_choice.beats(ai_choice):
            result = "win"
            self.player_score += 1
        else:
            result = "loss"
            self.ai_score += 1

        self.last_round = RoundResult(player_choice, ai_choice, result)
        return self.last_round

    def reset(self) -> None:
        self.player_score = 0
        self.ai_score = 0
        self.last_round = None
