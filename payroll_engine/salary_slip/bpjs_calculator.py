# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
BPJS calculator module - the one BPJS calculator.

Provides standardized calculation functions for BPJS contributions in
Indonesian payroll: JHT, JKM, JKK, Kesehatan (JKS) and JP.
"""

import math
from typing import Dict, Optional

from payroll_engine.config.config import CompanySettings, get_bpjs_cap, get_bpjs_rate
from payroll_engine.constants import EMPLOYER_ABSORBED_PAY_TYPES
from payroll_engine.exceptions import InvalidInputError
from payroll_engine.helpers import get_logger
from payroll_engine.models import ContributionResult, RegistrationFlags
from payroll_engine.utils import round_half_up

# Define public API
__all__ = [
    "calculate_bpjs",
    "compute_contributions",
    "calculate_taxable_object",
    "employee_rate_total",
]

logger = get_logger(__name__)


def _validate_salary(base_salary: float) -> float:
    base_salary = float(base_salary)
    if math.isnan(base_salary) or math.isinf(base_salary) or base_salary < 0:
        raise InvalidInputError(f"Invalid base salary for BPJS: {base_salary}")
    return base_salary


def calculate_bpjs(base_salary: float, rate: float, *, max_salary: Optional[float] = None) -> float:
    """
    Calculate an unrounded BPJS amount from salary and rate.

    Args:
        base_salary: The base salary amount for calculation
        rate: The BPJS rate as a fraction (e.g., 0.01 for 1%)
        max_salary: Optional maximum salary cap; None or <= 0 means uncapped

    Returns:
        float: The contribution before rounding
    """
    base_salary = _validate_salary(base_salary)

    if max_salary is not None and max_salary > 0 and base_salary > max_salary:
        base_salary = max_salary

    return base_salary * rate


def calculate_taxable_object(raw: Dict[str, float], pay_type: str) -> int:
    """
    Sum the BPJS components that count as PPh 21 taxable income.

    For GROSS: JKM + JKK + Kesehatan (company only).
    For NETT/GROSS_UP: additionally JHT + JP + Kesehatan employee, which the
    company pays on the employee's behalf.
    """
    taxable = raw["jkm_employer"] + raw["jkk_employer"] + raw["kesehatan_employer"]
    if pay_type in EMPLOYER_ABSORBED_PAY_TYPES:
        taxable += raw["jht_employee"] + raw["jp_employee"] + raw["kesehatan_employee"]
    return round_half_up(taxable)


def employee_rate_total(
    registration: Optional[RegistrationFlags] = None, settings: Optional[CompanySettings] = None
) -> float:
    """Sum of employee-side rates for the schemes the employee is enrolled in."""
    registration = registration or RegistrationFlags()
    total = 0.0
    if registration.health:
        total += get_bpjs_rate(settings, "bpjs_kes_employee_rate")
    if registration.old_age:
        total += get_bpjs_rate(settings, "bpjs_jht_employee_rate")
    if registration.pension:
        total += get_bpjs_rate(settings, "bpjs_jp_employee_rate")
    return total


def compute_contributions(
    basic_salary: float,
    registration: Optional[RegistrationFlags] = None,
    pay_type: str = "gross",
    settings: Optional[CompanySettings] = None,
) -> ContributionResult:
    """
    Calculate BPJS (employee & employer) contributions for a basic salary.

    Args:
        basic_salary: Basic salary for the period (already prorated)
        registration: Scheme enrolment flags; all enrolled when None
        pay_type: gross, nett or gross_up; selects the taxable object
        settings: Company settings carrying rates and caps

    Returns:
        ContributionResult: Rounded line items, totals and taxable object

    Raises:
        InvalidInputError: Negative or non-finite basic salary
    """
    basic_salary = _validate_salary(basic_salary)
    registration = registration or RegistrationFlags()

    kesehatan_cap = get_bpjs_cap(settings, "bpjs_kes_max_salary")
    jp_cap = get_bpjs_cap(settings, "bpjs_jp_max_salary")

    raw = {
        "jht_employer": 0.0,
        "jkm_employer": 0.0,
        "jkk_employer": 0.0,
        "kesehatan_employer": 0.0,
        "jp_employer": 0.0,
        "jht_employee": 0.0,
        "kesehatan_employee": 0.0,
        "jp_employee": 0.0,
    }

    if registration.health:
        raw["kesehatan_employer"] = calculate_bpjs(
            basic_salary, get_bpjs_rate(settings, "bpjs_kes_company_rate"), max_salary=kesehatan_cap
        )
        raw["kesehatan_employee"] = calculate_bpjs(
            basic_salary, get_bpjs_rate(settings, "bpjs_kes_employee_rate"), max_salary=kesehatan_cap
        )

    if registration.old_age:
        raw["jht_employer"] = calculate_bpjs(basic_salary, get_bpjs_rate(settings, "bpjs_jht_company_rate"))
        raw["jht_employee"] = calculate_bpjs(basic_salary, get_bpjs_rate(settings, "bpjs_jht_employee_rate"))

    if registration.pension:
        raw["jp_employer"] = calculate_bpjs(
            basic_salary, get_bpjs_rate(settings, "bpjs_jp_company_rate"), max_salary=jp_cap
        )
        raw["jp_employee"] = calculate_bpjs(
            basic_salary, get_bpjs_rate(settings, "bpjs_jp_employee_rate"), max_salary=jp_cap
        )

    if registration.employment:
        raw["jkk_employer"] = calculate_bpjs(basic_salary, get_bpjs_rate(settings, "bpjs_jkk_rate"))
        raw["jkm_employer"] = calculate_bpjs(basic_salary, get_bpjs_rate(settings, "bpjs_jkm_rate"))

    rounded = {key: round_half_up(value) for key, value in raw.items()}

    employer_total = (
        rounded["jht_employer"]
        + rounded["jkm_employer"]
        + rounded["jkk_employer"]
        + rounded["kesehatan_employer"]
        + rounded["jp_employer"]
    )
    employee_total = rounded["jht_employee"] + rounded["kesehatan_employee"] + rounded["jp_employee"]

    result = ContributionResult(
        **rounded,
        employer_total=employer_total,
        employee_total=employee_total,
        taxable_object=calculate_taxable_object(raw, pay_type),
        kesehatan_base=min(basic_salary, kesehatan_cap) if kesehatan_cap else basic_salary,
        jp_base=min(basic_salary, jp_cap) if jp_cap else basic_salary,
        kesehatan_cap=kesehatan_cap,
        jp_cap=jp_cap,
        kesehatan_capped=bool(kesehatan_cap and basic_salary > kesehatan_cap),
        jp_capped=bool(jp_cap and basic_salary > jp_cap),
    )

    logger.debug(f"BPJS calculation for basic salary {basic_salary}: {result}")
    return result
