"""Numeric helpers shared by the scorers."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (42.5 -> 43).

    Python's round() uses banker's rounding, which would turn a 50% archetype
    match (85 * 0.5 = 42.5) into 42.
    """
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return max(lower, min(upper, value))
