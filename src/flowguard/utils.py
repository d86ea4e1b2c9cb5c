"""Small numeric helpers shared by the scoring modules."""

import math
from typing import Union

Number = Union[int, float]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up.

    Python's built-in ``round`` uses banker's rounding, which would move
    scores like 62.5 down to 62.
    """
    return int(math.floor(value + 0.5))


def clamp(value: Number, low: Number = 0, high: Number = 100) -> Number:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(high, value))


def clamp_score(value: float) -> int:
    """Round half-up and clamp into the 0-100 score range."""
    return int(clamp(round_half_up(value), 0, 100))
