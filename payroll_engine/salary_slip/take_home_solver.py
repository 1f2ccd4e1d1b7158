# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Reverse solver: find the basic salary that yields a desired take-home pay
when the company absorbs PPh 21.
"""

import math
from typing import Optional, Tuple

from payroll_engine.config.config import CompanySettings
from payroll_engine.constants import (
    DEFAULT_TAX_STATUS,
    PAY_TYPE_GROSS_UP,
    TAKE_HOME_MAX_ITERATIONS,
    TAKE_HOME_TOLERANCE,
)
from payroll_engine.exceptions import InvalidInputError
from payroll_engine.helpers import get_logger
from payroll_engine.models import BasicSalarySolution, ContributionResult, RegistrationFlags
from payroll_engine.salary_slip.bpjs_calculator import compute_contributions, employee_rate_total
from payroll_engine.salary_slip.tax_calculator import calculate_tax
from payroll_engine.utils import round_half_up

__all__ = ["solve_basic_salary_for_take_home"]

logger = get_logger(__name__)


def _check_amount(name: str, value: float) -> float:
    value = float(value)
    if math.isnan(value) or math.isinf(value) or value < 0:
        raise InvalidInputError(f"Invalid {name}: {value}")
    return value


def _take_home(
    basic_salary: float,
    allowances_total: float,
    overtime_pay: float,
    prorate_factor: float,
    registration: RegistrationFlags,
    settings: Optional[CompanySettings],
) -> Tuple[float, float, ContributionResult]:
    prorated_basic = round_half_up(basic_salary * prorate_factor)
    contributions = compute_contributions(prorated_basic, registration, PAY_TYPE_GROSS_UP, settings)
    gross = prorated_basic + allowances_total + overtime_pay
    return gross, gross - contributions.employee_total, contributions


def solve_basic_salary_for_take_home(
    desired_take_home: float,
    allowances_total: float = 0.0,
    overtime_pay: float = 0.0,
    tax_status: str = DEFAULT_TAX_STATUS,
    registration: Optional[RegistrationFlags] = None,
    settings: Optional[CompanySettings] = None,
    prorate_factor: float = 1.0,
) -> BasicSalarySolution:
    """
    Solve the full-month basic salary for a desired take-home pay.

    Take-home here is gross minus employee BPJS, the tax being paid by the
    company. BPJS caps make the relation non-linear, so the estimate is
    corrected for at most ``TAKE_HOME_MAX_ITERATIONS`` passes. When the
    tolerance is not reached the closest estimate is returned with
    ``converged=False``.

    Args:
        desired_take_home: Target take-home pay
        allowances_total: Allowances paid on top of basic (already prorated)
        overtime_pay: Overtime pay for the period
        tax_status: PTKP status code
        registration: Scheme enrolment flags; all enrolled when None
        settings: Company settings
        prorate_factor: Proration factor applied to basic, in (0, 1]

    Returns:
        BasicSalarySolution: Solved basic salary and its breakdown

    Raises:
        InvalidInputError: Negative or non-finite amounts, factor out of range
    """
    desired_take_home = _check_amount("desired take-home", desired_take_home)
    allowances_total = _check_amount("allowances total", allowances_total)
    overtime_pay = _check_amount("overtime pay", overtime_pay)
    prorate_factor = float(prorate_factor)
    if not 0 < prorate_factor <= 1:
        raise InvalidInputError(f"Prorate factor must be in (0, 1], got {prorate_factor}")

    registration = registration or RegistrationFlags()
    keep_ratio = 1 - employee_rate_total(registration, settings)

    basic = max(0.0, desired_take_home - allowances_total - overtime_pay) / keep_ratio / prorate_factor
    best = None
    converged = False
    iterations = 0

    for iterations in range(1, TAKE_HOME_MAX_ITERATIONS + 1):
        gross, take_home, contributions = _take_home(
            basic, allowances_total, overtime_pay, prorate_factor, registration, settings
        )
        diff = desired_take_home - take_home
        if best is None or abs(diff) < abs(best[0]):
            best = (diff, basic, gross, take_home, contributions)

        if abs(diff) < TAKE_HOME_TOLERANCE:
            converged = True
            break

        basic = max(0.0, basic + diff / keep_ratio / prorate_factor)

    _, basic, gross, take_home, contributions = best
    if not converged:
        logger.warning(
            f"Take-home solver did not converge after {iterations} iterations "
            f"(desired {desired_take_home}, closest {take_home})"
        )

    tax = calculate_tax(gross, contributions, tax_status, PAY_TYPE_GROSS_UP, settings)

    return BasicSalarySolution(
        basic_salary=round_half_up(basic),
        gross_salary=round_half_up(gross),
        take_home=round_half_up(take_home),
        iterations=iterations,
        converged=converged,
        contributions=contributions,
        tax=tax,
    )
