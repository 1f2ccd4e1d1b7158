# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Payroll period helpers - period token parsing and day counting.

A payroll period ``YYYY-MM`` runs from the day after the cutoff in the
previous month up to the cutoff day of the named month, e.g. with cutoff 20
period ``2026-03`` covers 21 Feb 2026 .. 20 Mar 2026.
"""

import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional, Union

from payroll_engine.constants import (
    DEFAULT_CUTOFF_DAY,
    LEGACY_CUTOFF_DAY,
    LEGACY_CUTOFF_LAST_YEAR,
    MAX_CUTOFF_DAY,
)
from payroll_engine.exceptions import InvalidInputError

__all__ = [
    "PayrollPeriod",
    "parse_period",
    "default_cutoff_day",
    "count_calendar_days",
    "count_working_days",
    "to_date",
]

PERIOD_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})$")


@dataclass(frozen=True)
class PayrollPeriod:
    token: str
    start: date
    end: date
    cutoff_day: int

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def default_cutoff_day(year: int) -> int:
    """Cutoff used when the company has none configured (25 up to 2025, 20 after)."""
    return LEGACY_CUTOFF_DAY if year <= LEGACY_CUTOFF_LAST_YEAR else DEFAULT_CUTOFF_DAY


def parse_period(token: str, cutoff_day: Optional[int] = None) -> PayrollPeriod:
    """
    Resolve a ``YYYY-MM`` token into concrete period bounds.

    Args:
        token: Period identifier, e.g. "2026-03"
        cutoff_day: Company cutoff day (1-27); historical default when None

    Returns:
        PayrollPeriod: Inclusive start and end dates

    Raises:
        InvalidInputError: Malformed token or cutoff out of range
    """
    match = PERIOD_PATTERN.match(str(token).strip())
    if not match:
        raise InvalidInputError(f"Invalid payroll period '{token}', expected YYYY-MM")

    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidInputError(f"Invalid month in payroll period '{token}'")

    if cutoff_day is None:
        cutoff_day = default_cutoff_day(year)
    if not 1 <= cutoff_day <= MAX_CUTOFF_DAY:
        raise InvalidInputError(
            f"Payroll cutoff day must be between 1 and {MAX_CUTOFF_DAY}, got {cutoff_day}"
        )

    prev_year, prev_month = (year - 1, 12) if month == 1 else (year, month - 1)
    start = date(prev_year, prev_month, cutoff_day + 1)
    end = date(year, month, cutoff_day)

    return PayrollPeriod(token=f"{year:04d}-{month:02d}", start=start, end=end, cutoff_day=cutoff_day)


def to_date(value: Union[date, str, None]) -> Optional[date]:
    """Accept a date, an ISO date string or None."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as e:
        raise InvalidInputError(f"Invalid date '{value}'") from e


def count_calendar_days(start: date, end: date) -> int:
    """Inclusive day count, 0 for an empty window."""
    if end < start:
        return 0
    return (end - start).days + 1


def count_working_days(start: date, end: date, holidays: Iterable[date] = ()) -> int:
    """Count Monday-Friday dates in [start, end] that are not holidays."""
    if end < start:
        return 0

    holiday_set = set(holidays)
    working_days = 0
    current = start
    while current <= end:
        if current.weekday() < 5 and current not in holiday_set:
            working_days += 1
        current += timedelta(days=1)

    return working_days
