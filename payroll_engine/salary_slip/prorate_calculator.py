# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Prorate calculator module.

Computes the share of a payroll period an employee is paid for, from the
employment window (join / resign date), unpaid leave and the company
prorate method.
"""

import math
from datetime import date
from typing import Iterable, List, Optional

from payroll_engine.constants import (
    PRORATE_CALENDAR_DAYS,
    PRORATE_CUSTOM,
    PRORATE_METHODS,
    PRORATE_REASON_JOIN,
    PRORATE_REASON_MANUAL,
    PRORATE_REASON_RESIGN,
    PRORATE_REASON_UNPAID_LEAVE,
    PRORATE_WORKING_DAYS,
)
from payroll_engine.exceptions import InvalidInputError
from payroll_engine.helpers import get_logger
from payroll_engine.models import ProrationResult
from payroll_engine.utils import clamp, round_half_up
from payroll_engine.utils.period import PayrollPeriod, count_calendar_days, count_working_days

__all__ = ["compute_proration", "apply_proration"]

logger = get_logger(__name__)


def _count_days(method: str, start: date, end: date, holidays: Iterable[date]) -> int:
    if method == PRORATE_CALENDAR_DAYS:
        return count_calendar_days(start, end)
    return count_working_days(start, end, holidays)


def compute_proration(
    period: PayrollPeriod,
    join_date: Optional[date] = None,
    resign_date: Optional[date] = None,
    unpaid_leave_days: float = 0,
    method: str = PRORATE_WORKING_DAYS,
    custom_factor: Optional[float] = None,
    holidays: Iterable[date] = (),
) -> ProrationResult:
    """
    Calculate the prorate factor for one employee and period.

    Args:
        period: Resolved payroll period
        join_date: First employment day, None when employed before the period
        resign_date: Last employment day, None when still employed
        unpaid_leave_days: Unpaid leave days taken inside the period
        method: working_days, calendar_days or custom
        custom_factor: Factor used by the custom method
        holidays: Public holidays excluded from working days

    Returns:
        ProrationResult: Factor in [0, 1] with the day counts behind it

    Raises:
        InvalidInputError: Unknown method, bad leave days or missing custom factor
    """
    if method not in PRORATE_METHODS:
        raise InvalidInputError(f"Unknown prorate method '{method}'")

    unpaid_leave_days = float(unpaid_leave_days or 0)
    if math.isnan(unpaid_leave_days) or math.isinf(unpaid_leave_days) or unpaid_leave_days < 0:
        raise InvalidInputError(f"Invalid unpaid leave days: {unpaid_leave_days}")

    if method == PRORATE_CUSTOM:
        if custom_factor is None:
            raise InvalidInputError("Custom prorate method requires a custom factor")
        custom_factor = float(custom_factor)
        if math.isnan(custom_factor):
            raise InvalidInputError("Custom prorate factor is not a number")
        factor = clamp(custom_factor)
        return ProrationResult(
            factor=factor,
            is_prorated=factor < 1,
            actual_days=0,
            total_days=0,
            method=method,
            reason=PRORATE_REASON_MANUAL,
            unpaid_leave_days=unpaid_leave_days,
            employee_start=period.start,
            employee_end=period.end,
        )

    holidays = tuple(holidays or ())
    reasons: List[str] = []

    employee_start = period.start
    if join_date and join_date > period.start:
        employee_start = join_date
        reasons.append(PRORATE_REASON_JOIN)

    employee_end = period.end
    if resign_date and resign_date < period.end:
        employee_end = resign_date
        reasons.append(PRORATE_REASON_RESIGN)

    if unpaid_leave_days > 0:
        reasons.append(PRORATE_REASON_UNPAID_LEAVE)

    total_days = _count_days(method, period.start, period.end, holidays)
    counted = _count_days(method, employee_start, employee_end, holidays)
    actual_days = max(0.0, counted - unpaid_leave_days)

    if total_days > 0:
        factor = clamp(actual_days / total_days)
    elif employee_start == period.start and employee_end == period.end and not unpaid_leave_days:
        # No countable day in the period, a full employment window is still paid in full
        factor = 1.0
    else:
        factor = 0.0

    result = ProrationResult(
        factor=factor,
        is_prorated=factor < 1,
        actual_days=actual_days,
        total_days=total_days,
        method=method,
        reason=", ".join(reasons) if reasons else None,
        unpaid_leave_days=unpaid_leave_days,
        employee_start=employee_start,
        employee_end=employee_end,
    )

    if result.is_prorated:
        logger.debug(
            f"Prorate {period.token}: {actual_days}/{total_days} {method} "
            f"= {factor:.4f} ({result.reason})"
        )
    return result


def apply_proration(amount: float, result: ProrationResult) -> int:
    """Apply the prorate factor to an amount, rounding half-up."""
    if not result.is_prorated:
        return round_half_up(amount)
    return round_half_up(amount * result.factor)
