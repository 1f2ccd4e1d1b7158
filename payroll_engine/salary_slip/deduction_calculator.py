# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Deduction calculator module.

Attendance-based deductions are derived from the daily rate of the basic
salary; loan, advance (kasbon), penalty and other deductions are passed
through from approved payroll adjustments.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from payroll_engine.config.config import DeductionRates
from payroll_engine.constants import (
    ADJUSTMENT_DEDUCTION_TYPES,
    ADJUSTMENT_STATUS_APPROVED,
    DEDUCTION_ABSENCE,
    DEDUCTION_ADVANCE,
    DEDUCTION_LATE,
    DEDUCTION_LOAN,
    DEDUCTION_OTHER,
    DEDUCTION_PENALTY,
    DEDUCTION_UNPAID_LEAVE,
)
from payroll_engine.helpers import get_logger
from payroll_engine.models import (
    AdjustmentRecord,
    AttendanceSummary,
    DeductionItem,
    DeductionResult,
    RecordId,
)
from payroll_engine.utils import round_half_up
from payroll_engine.utils.period import PayrollPeriod

__all__ = [
    "DailyRateInputs",
    "daily_rate",
    "matches_period",
    "compute_deductions",
]

logger = get_logger(__name__)

# Fallback descriptions for adjustments without one
ADJUSTMENT_DESCRIPTIONS = {
    DEDUCTION_LOAN: "Potongan pinjaman",
    DEDUCTION_ADVANCE: "Potongan kasbon",
    DEDUCTION_PENALTY: "Potongan denda",
    DEDUCTION_OTHER: "Potongan lainnya",
}


@dataclass(frozen=True)
class DailyRateInputs:
    basic_salary: float
    working_days: float


def daily_rate(basic_salary: float, working_days: float) -> float:
    return basic_salary / working_days if working_days > 0 else 0.0


def _fmt(value: float) -> str:
    return f"{value:g}"


def matches_period(
    record: AdjustmentRecord,
    period: Optional[PayrollPeriod],
    employee_id: Optional[RecordId] = None,
) -> bool:
    """
    Check whether an adjustment applies to the employee and period.

    A record applies when it is approved and either names the period token,
    has its effective date inside the period, or is recurring with an
    effective window covering the period. Without a period every approved
    record applies.
    """
    if record.status != ADJUSTMENT_STATUS_APPROVED:
        return False
    if employee_id is not None and record.employee_id is not None:
        if str(record.employee_id) != str(employee_id):
            return False
    if period is None:
        return True

    if record.pay_period and record.pay_period.strip() == period.token:
        return True
    if record.effective_date and period.contains(record.effective_date):
        return True
    if record.is_recurring and record.effective_date and record.effective_date <= period.end:
        return record.recurring_end_date is None or record.recurring_end_date >= period.start
    return False


def _late_deduction(attendance: AttendanceSummary, rates: DeductionRates, rate: float) -> Optional[DeductionItem]:
    amount = 0
    if attendance.late_minutes > rates.late_tolerance_minutes and rates.late_rate_per_minute > 0:
        minute_rate = rate / rates.work_hours_per_day / 60
        chargeable = attendance.late_minutes - rates.late_tolerance_minutes
        amount = round_half_up(minute_rate * chargeable * rates.late_rate_per_minute)
    elif attendance.late_days > 0 and rates.late_rate_per_day > 0:
        amount = round_half_up(rate * attendance.late_days * rates.late_rate_per_day)

    if amount <= 0:
        return None

    if attendance.late_minutes > 0:
        description = f"Potongan keterlambatan ({_fmt(attendance.late_minutes)} menit)"
    else:
        description = f"Potongan keterlambatan ({_fmt(attendance.late_days)} hari)"
    return DeductionItem(type=DEDUCTION_LATE, amount=amount, description=description)


def _adjustment_items(
    records: Iterable[AdjustmentRecord],
    deduction_type: str,
) -> List[DeductionItem]:
    items = []
    for record in records:
        if ADJUSTMENT_DEDUCTION_TYPES.get(record.type) != deduction_type:
            continue
        amount = round_half_up(record.amount)
        if amount <= 0:
            continue
        items.append(
            DeductionItem(
                type=deduction_type,
                amount=amount,
                description=record.description or ADJUSTMENT_DESCRIPTIONS[deduction_type],
                reference_id=record.id,
            )
        )
    return items


def compute_deductions(
    daily_rate_inputs: DailyRateInputs,
    attendance: Optional[AttendanceSummary] = None,
    adjustments: Iterable[AdjustmentRecord] = (),
    rates: Optional[DeductionRates] = None,
    period: Optional[PayrollPeriod] = None,
    employee_id: Optional[RecordId] = None,
) -> DeductionResult:
    """
    Calculate all deductions for one employee and period.

    Args:
        daily_rate_inputs: Basic salary and working days behind the daily rate
        attendance: Aggregated absence, lateness and unpaid leave
        adjustments: Payroll adjustment records; non-matching ones are skipped
        rates: Deduction rates from company settings
        period: Payroll period used to select adjustments
        employee_id: Employee used to select adjustments

    Returns:
        DeductionResult: Non-zero items in a fixed order and their total
    """
    attendance = attendance or AttendanceSummary()
    rates = rates or DeductionRates()
    rate = daily_rate(daily_rate_inputs.basic_salary, daily_rate_inputs.working_days)
    applicable = [record for record in adjustments if matches_period(record, period, employee_id)]

    items: List[DeductionItem] = []

    # 1. Absence (alpha)
    if attendance.absent_days > 0:
        amount = round_half_up(rate * attendance.absent_days * rates.absence_rate)
        if amount > 0:
            items.append(
                DeductionItem(
                    type=DEDUCTION_ABSENCE,
                    amount=amount,
                    description=f"Potongan tidak hadir ({_fmt(attendance.absent_days)} hari)",
                )
            )

    # 2. Lateness, minute-based before day-based
    late_item = _late_deduction(attendance, rates, rate)
    if late_item:
        items.append(late_item)

    # 3-4. Loan and kasbon
    items.extend(_adjustment_items(applicable, DEDUCTION_LOAN))
    items.extend(_adjustment_items(applicable, DEDUCTION_ADVANCE))

    # 5. Unpaid leave
    if attendance.unpaid_leave_days > 0:
        amount = round_half_up(rate * attendance.unpaid_leave_days * rates.leave_rate)
        if amount > 0:
            items.append(
                DeductionItem(
                    type=DEDUCTION_UNPAID_LEAVE,
                    amount=amount,
                    description=f"Potongan cuti tidak dibayar ({_fmt(attendance.unpaid_leave_days)} hari)",
                )
            )

    # 6-7. Penalty and other
    items.extend(_adjustment_items(applicable, DEDUCTION_PENALTY))
    items.extend(_adjustment_items(applicable, DEDUCTION_OTHER))

    result = DeductionResult(
        items=tuple(items),
        total=sum(item.amount for item in items),
        daily_rate=rate,
    )
    logger.debug(f"Deductions for employee {employee_id}: {result.total} in {len(items)} item(s)")
    return result
