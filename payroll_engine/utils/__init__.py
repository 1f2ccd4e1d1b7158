"""Utility helpers for the payroll engine."""

from decimal import Decimal, ROUND_HALF_UP

__all__ = ["round_half_up", "clamp"]


def round_half_up(value: float) -> int:
    """Round value to nearest integer using the HALF_UP rule."""
    return int(Decimal(str(value)).quantize(0, rounding=ROUND_HALF_UP))


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    return max(lower, min(upper, value))
