# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Payroll Controller module - one employee, one period.

Runs the calculation in a fixed order: proration, prorated salary
components, BPJS, PPh 21, deductions and final take-home figures.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from payroll_engine.config.config import CompanySettings, get_bpjs_cap, get_deduction_rates, get_settings
from payroll_engine.constants import (
    EMPLOYER_ABSORBED_PAY_TYPES,
    OVERTIME_HOURS_DIVISOR,
    PARTY_EMPLOYEE,
    PARTY_EMPLOYER,
    PRORATE_CUSTOM,
    UNPAID_LEAVE_AS_PRORATE,
    WARNING_CAP_DISABLED,
    WARNING_NEGATIVE_TAKE_HOME,
    WARNING_TAX_METHOD_IGNORED,
    WARNING_UNKNOWN_TAX_STATUS,
)
from payroll_engine.exceptions import UnknownCategoryError
from payroll_engine.helpers import get_logger
from payroll_engine.models import (
    AdjustmentRecord,
    AttendanceSummary,
    CalculationWarning,
    PayrollCalculationResult,
    ProrationResult,
    RecordId,
    SalaryInput,
)
from payroll_engine.salary_slip.bpjs_calculator import compute_contributions
from payroll_engine.salary_slip.deduction_calculator import DailyRateInputs, compute_deductions
from payroll_engine.salary_slip.prorate_calculator import apply_proration, compute_proration
from payroll_engine.salary_slip.tax_calculator import calculate_tax
from payroll_engine.salary_slip.ter_calculator import is_known_tax_status, normalize_tax_status
from payroll_engine.utils import round_half_up
from payroll_engine.utils.period import PayrollPeriod, count_working_days

__all__ = ["PayrollContext", "PayrollController"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class PayrollContext:
    """Everything about the period that is not part of the salary itself."""

    period: Optional[PayrollPeriod] = None
    employee_id: Optional[RecordId] = None
    join_date: Optional[date] = None
    resign_date: Optional[date] = None
    attendance: AttendanceSummary = field(default_factory=AttendanceSummary)
    adjustments: Tuple[AdjustmentRecord, ...] = ()
    holidays: Tuple[date, ...] = ()
    custom_prorate_factor: Optional[float] = None
    prorate_method: Optional[str] = None


class PayrollController:
    """Payroll calculator bound to one company's settings."""

    def __init__(self, settings: Optional[CompanySettings] = None):
        self.settings = get_settings(settings)

    # ------------------------------------------------------------------ #
    def _resolve_tax_status(self, tax_status: str, warnings: List[CalculationWarning]) -> str:
        if is_known_tax_status(tax_status):
            return normalize_tax_status(tax_status)

        if self.settings.strict_tax_status:
            raise UnknownCategoryError(tax_status)

        warnings.append(
            CalculationWarning(
                WARNING_UNKNOWN_TAX_STATUS,
                f"Unknown PTKP status '{tax_status}', TER A and TK/0 PTKP used",
            )
        )
        return tax_status

    def _proration(self, context: PayrollContext) -> ProrationResult:
        method = context.prorate_method or self.settings.prorate_method
        if context.custom_prorate_factor is not None:
            method = PRORATE_CUSTOM

        unpaid_leave_days = 0
        if self.settings.unpaid_leave_mode == UNPAID_LEAVE_AS_PRORATE:
            unpaid_leave_days = context.attendance.unpaid_leave_days

        if context.period is None:
            return ProrationResult(
                factor=1.0, is_prorated=False, actual_days=0, total_days=0, method=method
            )

        return compute_proration(
            context.period,
            join_date=context.join_date,
            resign_date=context.resign_date,
            unpaid_leave_days=unpaid_leave_days,
            method=method,
            custom_factor=context.custom_prorate_factor,
            holidays=context.holidays,
        )

    def _working_days(self, context: PayrollContext) -> float:
        """Working days behind the daily rate: attendance, then the period, then the default."""
        if context.attendance.working_days:
            return context.attendance.working_days
        if context.period is not None:
            working_days = count_working_days(context.period.start, context.period.end, context.holidays)
            if working_days > 0:
                return working_days
        return self.settings.default_working_days

    def _overtime_pay(self, salary_input: SalaryInput, basic_salary: int) -> int:
        if salary_input.overtime_pay > 0:
            return round_half_up(salary_input.overtime_pay)
        if salary_input.overtime_hours <= 0:
            return 0
        hourly_rate = basic_salary / OVERTIME_HOURS_DIVISOR
        return round_half_up(salary_input.overtime_hours * hourly_rate * self.settings.overtime_rate_multiplier)

    def _settings_warnings(self, pay_type: str, warnings: List[CalculationWarning]) -> None:
        for fieldname, scheme in (("bpjs_kes_max_salary", "Kesehatan"), ("bpjs_jp_max_salary", "JP")):
            if get_bpjs_cap(self.settings, fieldname) is None:
                warnings.append(
                    CalculationWarning(
                        WARNING_CAP_DISABLED, f"BPJS {scheme} salary cap disabled, full basic used"
                    )
                )

        if pay_type in EMPLOYER_ABSORBED_PAY_TYPES and self.settings.tax_method == "progressive":
            warnings.append(
                CalculationWarning(
                    WARNING_TAX_METHOD_IGNORED,
                    f"Progressive tax method applies to gross pay only, TER gross-up used for {pay_type}",
                )
            )

    # ------------------------------------------------------------------ #
    def calculate(
        self, salary_input: SalaryInput, context: Optional[PayrollContext] = None
    ) -> PayrollCalculationResult:
        """
        Calculate payroll for one employee and period.

        Args:
            salary_input: Full-month salary, tax status, pay type and enrolment
            context: Period, employment window, attendance and adjustments

        Returns:
            PayrollCalculationResult: Complete breakdown with warnings

        Raises:
            UnknownCategoryError: Unknown PTKP status with strict tax status enabled
        """
        context = context or PayrollContext()
        warnings: List[CalculationWarning] = []
        pay_type = salary_input.pay_type
        employer_absorbed = pay_type in EMPLOYER_ABSORBED_PAY_TYPES

        tax_status = self._resolve_tax_status(salary_input.tax_status, warnings)
        self._settings_warnings(pay_type, warnings)

        # 1. Proration
        proration = self._proration(context)

        # 2. Prorated components, overtime untouched
        basic_salary = apply_proration(salary_input.basic_salary, proration)
        allowances = {
            name: apply_proration(amount, proration)
            for name, amount in salary_input.allowances.as_items().items()
        }
        total_allowances = sum(allowances.values())
        overtime_pay = self._overtime_pay(salary_input, basic_salary)
        total_gross = basic_salary + total_allowances + overtime_pay

        # 3. BPJS on prorated basic
        contributions = compute_contributions(
            basic_salary, salary_input.registration, pay_type, self.settings
        )

        # 4. PPh 21
        tax = calculate_tax(total_gross, contributions, tax_status, pay_type, self.settings)
        pph21 = tax.monthly_tax

        # 5. Deductions
        attendance = context.attendance
        if self.settings.unpaid_leave_mode == UNPAID_LEAVE_AS_PRORATE:
            attendance = attendance.model_copy(update={"unpaid_leave_days": 0})
        deductions = compute_deductions(
            DailyRateInputs(basic_salary=basic_salary, working_days=self._working_days(context)),
            attendance,
            context.adjustments,
            get_deduction_rates(self.settings),
            period=context.period,
            employee_id=context.employee_id,
        )

        # 6. Final figures
        if employer_absorbed:
            take_home_before_deductions = total_gross
            cost_base = tax.gross_up_final
            company_pays_tax = pph21
            company_pays_bpjs = contributions.employer_total + contributions.employee_total
            employee_pays_tax = 0
            employee_pays_bpjs = 0
        else:
            take_home_before_deductions = total_gross - pph21 - contributions.employee_total
            cost_base = total_gross
            company_pays_tax = 0
            company_pays_bpjs = contributions.employer_total
            employee_pays_tax = pph21
            employee_pays_bpjs = contributions.employee_total

        take_home_pay = take_home_before_deductions - deductions.total
        if take_home_pay < 0:
            warnings.append(
                CalculationWarning(
                    WARNING_NEGATIVE_TAKE_HOME,
                    f"Deductions {deductions.total} exceed take-home pay {take_home_before_deductions}",
                )
            )

        result = PayrollCalculationResult(
            employee_id=context.employee_id,
            period=context.period.token if context.period else None,
            pay_type=pay_type,
            full_basic_salary=salary_input.basic_salary,
            basic_salary=basic_salary,
            allowances=allowances,
            total_allowances=total_allowances,
            overtime_pay=overtime_pay,
            total_gross=total_gross,
            gross_up_initial=tax.gross_up_initial,
            final_gross_up=tax.gross_up_final,
            taxable_object=contributions.taxable_object,
            pph21=pph21,
            contributions=contributions,
            tax=tax,
            proration=proration,
            deductions=deductions,
            take_home_before_deductions=take_home_before_deductions,
            net_salary=total_gross - deductions.total,
            take_home_pay=take_home_pay,
            total_cost_to_company=cost_base + contributions.employer_total,
            tax_borne_by=PARTY_EMPLOYER if employer_absorbed else PARTY_EMPLOYEE,
            insurance_borne_by=PARTY_EMPLOYER if employer_absorbed else PARTY_EMPLOYEE,
            company_pays_tax=company_pays_tax,
            company_pays_bpjs=company_pays_bpjs,
            employee_pays_tax=employee_pays_tax,
            employee_pays_bpjs=employee_pays_bpjs,
            warnings=tuple(warnings),
        )

        for warning in warnings:
            logger.warning(f"Employee {context.employee_id} {result.period}: {warning.message}")
        logger.debug(
            f"Payroll {result.period} for employee {context.employee_id} ({pay_type}): "
            f"gross {total_gross}, PPh 21 {pph21}, take-home {take_home_pay}"
        )
        return result
