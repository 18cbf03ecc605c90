"""Shared helpers for production progress figures."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (12.5 -> 13)."""
    return int(math.floor(value + 0.5))


def percentage(part: int, total: int) -> int:
    """``part`` as a rounded percentage of ``total``; 0 when total is 0."""
    if total == 0:
        return 0
    return round_half_up(part / total * 100)
