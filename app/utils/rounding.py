"""Rounding helpers"""
import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero for positives.

    Python's round() uses banker's rounding (round(2.5) == 2); durations
    are rounded the conventional way (2.5 -> 3).
    """
    return int(math.floor(value + 0.5))
