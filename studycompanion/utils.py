"""Utility functions shared by the API and the client controllers."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounding up (2.5 -> 3).

    Python's ``round`` rounds halves to even, which would report 62.5% as 62.
    """
    return math.floor(value + 0.5)


def percentage(part: float, whole: float) -> int:
    """Whole-number percentage of ``part`` in ``whole``, 0 when ``whole`` is 0."""
    if not whole:
        return 0
    return round_half_up(part / whole * 100)
