from __future__ import annotations

import random
from typing import Optional

UPPER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWER = "abcdefghijklmnopqrstuvwxyz"
NUMBERS = "0123456789"
SYMBOLS = "!@#$%^&*()_+[]{}|;:,.<>?"


def generate_password(
    length: int,
    upper: bool = True,
    lower: bool = True,
    numbers: bool = True,
    symbols: bool = False,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Draws ``length`` characters uniformly from the union of the selected
    character sets. Pass a seeded ``random.Random`` for repeatable output.
    """
    chars = ""
    if upper:
        chars += UPPER
    if lower:
        chars += LOWER
    if numbers:
        chars += NUMBERS
    if symbols:
        chars += SYMBOLS

    if not chars:
        raise ValueError("Please select at least one character type.")
    if length < 0:
        raise ValueError("Password length cannot be negative.")

    rng = rng or random.SystemRandom()
    return "".join(rng.choice(chars) for _ in range(length))
