from datetime import date

import pytest

from payroll_engine.config.config import DeductionRates
from payroll_engine.models import AdjustmentRecord, AttendanceSummary
from payroll_engine.salary_slip.deduction_calculator import (
    DailyRateInputs,
    compute_deductions,
    daily_rate,
    matches_period,
)

# 6,600,000 / 22 working days = 300,000 per day
DAILY = DailyRateInputs(basic_salary=6_600_000, working_days=22)


def _adjustment(**kwargs):
    values = {"id": 1, "employee_id": 7, "type": "loan", "amount": 500_000, "status": "approved"}
    values.update(kwargs)
    return AdjustmentRecord(**values)


def test_daily_rate():
    assert daily_rate(6_600_000, 22) == 300_000
    assert daily_rate(6_600_000, 0) == 0.0


def test_no_exceptions_no_deductions():
    result = compute_deductions(DAILY)

    assert result.items == ()
    assert result.total == 0
    assert result.daily_rate == 300_000
    assert all(amount == 0 for amount in result.subtotals.values())


def test_absence_deduction():
    result = compute_deductions(DAILY, AttendanceSummary(absent_days=2))

    assert result.total == 600_000
    assert result.items[0].type == "absence"
    assert result.items[0].description == "Potongan tidak hadir (2 hari)"


def test_absence_rate_is_configurable():
    result = compute_deductions(DAILY, AttendanceSummary(absent_days=2), rates=DeductionRates(absence_rate=0.5))
    assert result.total == 300_000


def test_late_day_based_default_half_day():
    result = compute_deductions(DAILY, AttendanceSummary(late_days=3))

    assert result.subtotals["late"] == 450_000
    assert result.items[0].description == "Potongan keterlambatan (3 hari)"


def test_late_minute_based_takes_precedence():
    rates = DeductionRates(late_rate_per_minute=1.0)
    attendance = AttendanceSummary(late_days=3, late_minutes=75)
    result = compute_deductions(DAILY, attendance, rates=rates)

    # 300,000 / 8 / 60 = 625 per minute, 60 chargeable minutes
    assert result.subtotals["late"] == 37_500
    assert result.items[0].description == "Potongan keterlambatan (75 menit)"


def test_late_minutes_within_tolerance_fall_back_to_days():
    rates = DeductionRates(late_rate_per_minute=1.0)
    result = compute_deductions(DAILY, AttendanceSummary(late_days=1, late_minutes=10), rates=rates)
    assert result.subtotals["late"] == 150_000


def test_late_without_rates_is_zero():
    rates = DeductionRates(late_rate_per_minute=0, late_rate_per_day=0)
    result = compute_deductions(DAILY, AttendanceSummary(late_days=3, late_minutes=90), rates=rates)
    assert result.total == 0
    assert result.items == ()


def test_unpaid_leave_deduction():
    result = compute_deductions(DAILY, AttendanceSummary(unpaid_leave_days=1))

    assert result.subtotals["unpaid_leave"] == 300_000
    assert result.items[0].description == "Potongan cuti tidak dibayar (1 hari)"


def test_zero_working_days_yields_zero():
    result = compute_deductions(DailyRateInputs(6_600_000, 0), AttendanceSummary(absent_days=3))
    assert result.total == 0


def test_adjustments_filtered_by_employee_period_and_status(march_period):
    adjustments = [
        _adjustment(id=1, type="loan", amount=500_000, pay_period="2026-03"),
        _adjustment(id=2, type="advance", amount=250_000, effective_date=date(2026, 3, 1)),
        _adjustment(id=3, type="penalty", amount=100_000, pay_period="2026-03", status="pending"),
        _adjustment(id=4, type="deduction", amount=50_000, is_recurring=True, effective_date=date(2025, 12, 1)),
        _adjustment(id=5, type="bonus", amount=1_000_000, pay_period="2026-03"),
        _adjustment(id=6, type="loan", amount=400_000, pay_period="2026-03", employee_id=8),
        _adjustment(
            id=7,
            type="other",
            amount=75_000,
            is_recurring=True,
            effective_date=date(2025, 6, 1),
            recurring_end_date=date(2026, 1, 31),
        ),
        _adjustment(id=8, type="penalty", amount=20_000, pay_period="2026-02"),
        _adjustment(id=9, type="penalty", amount=30_000, pay_period="2026-03", description="Denda seragam"),
    ]
    result = compute_deductions(DAILY, adjustments=adjustments, period=march_period, employee_id=7)

    assert [item.reference_id for item in result.items] == [1, 2, 9, 4]
    assert result.subtotals["loan"] == 500_000
    assert result.subtotals["advance"] == 250_000
    assert result.subtotals["penalty"] == 30_000
    assert result.subtotals["other"] == 50_000
    assert result.total == 830_000
    assert result.items[1].description == "Potongan kasbon"
    assert result.items[2].description == "Denda seragam"


def test_fixed_item_order():
    attendance = AttendanceSummary(absent_days=1, late_days=1, unpaid_leave_days=1)
    adjustments = [_adjustment(type="other", amount=10_000), _adjustment(type="loan", amount=20_000)]
    result = compute_deductions(DAILY, attendance, adjustments)

    assert [item.type for item in result.items] == ["absence", "late", "loan", "unpaid_leave", "other"]
    assert result.total == sum(item.amount for item in result.items)


@pytest.mark.parametrize(
    "kwargs,expected",
    [
        ({"pay_period": "2026-03"}, True),
        ({"effective_date": date(2026, 2, 21)}, True),
        ({"effective_date": date(2026, 3, 21)}, False),
        ({"is_recurring": True, "effective_date": date(2026, 3, 20)}, True),
        ({"is_recurring": True, "effective_date": date(2026, 3, 21)}, False),
        ({"is_recurring": True, "effective_date": date(2026, 1, 1), "recurring_end_date": date(2026, 2, 21)}, True),
        ({"is_recurring": True}, False),
        ({"status": "Approved", "pay_period": "2026-03"}, True),
        ({"status": "rejected", "pay_period": "2026-03"}, False),
    ],
)
def test_matches_period(march_period, kwargs, expected):
    assert matches_period(_adjustment(**kwargs), march_period, employee_id=7) is expected


def test_matches_without_period():
    assert matches_period(_adjustment(), None)


@pytest.mark.parametrize("record_id,employee_id", [(7, "7"), ("7", 7), ("7", "7")])
def test_employee_id_compared_as_text(march_period, record_id, employee_id):
    loan = _adjustment(employee_id=record_id, pay_period="2026-03")

    assert matches_period(loan, march_period, employee_id=employee_id)
    assert not matches_period(loan, march_period, employee_id="8")
