"""
Rounding and ratio helpers shared by the calculators.

Python's round() uses banker's rounding; percentages here round half up
so that 62.5 reports as 63.
"""

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round ``value`` to ``digits`` decimals, ties away from negative infinity."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    return int(round_half_up(value))


def percent(part: float, whole: float) -> int:
    """Integer percentage of ``part`` in ``whole``; 0 when ``whole`` is 0."""
    if whole <= 0:
        return 0
    return round_int(part / whole * 100)


def mean(values: list[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)
