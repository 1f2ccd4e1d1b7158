# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Tax calculator module - monthly PPh 21 per pay type.

- NETT / GROSS_UP: company pays the tax, the income is grossed up with the
  2-step TER solver.
- GROSS: employee pays the tax, the TER rate is looked up directly on
  gross income plus taxable BPJS (or the progressive method when the
  company is configured for it).
"""

from typing import Optional

from payroll_engine.config.config import CompanySettings
from payroll_engine.config.pph21_progressive import calculate_monthly_pph21_progressive
from payroll_engine.constants import EMPLOYER_ABSORBED_PAY_TYPES
from payroll_engine.helpers import get_logger
from payroll_engine.models import ContributionResult, TaxResult
from payroll_engine.salary_slip.gross_up import solve_gross_up
from payroll_engine.salary_slip.ter_calculator import (
    get_ptkp_amount,
    get_ptkp_monthly,
    lookup_rate,
    resolve_rate_category,
)
from payroll_engine.utils import round_half_up

__all__ = ["calculate_tax", "calculate_gross_up_tax", "calculate_regular_tax"]

logger = get_logger(__name__)


def _effective_rate(monthly_tax: int, base: float) -> float:
    return monthly_tax / base if base > 0 else 0.0


def calculate_gross_up_tax(total_gross: float, taxable_object: float, tax_status: str) -> TaxResult:
    """
    Calculate PPh 21 for NETT / GROSS_UP: company pays tax, employee
    receives the target net.

    Args:
        total_gross: Basic + allowances + overtime (the net the employee gets)
        taxable_object: Taxable BPJS for the employer-absorbed policy
        tax_status: PTKP status code

    Returns:
        TaxResult: Tax on the final grossed-up income
    """
    category = resolve_rate_category(tax_status)
    ptkp_monthly = get_ptkp_monthly(tax_status)

    target = total_gross + taxable_object
    solved = solve_gross_up(target, category)

    monthly_tax = round_half_up(solved.gross_up_final * solved.rate_final)

    return TaxResult(
        tax_status=tax_status,
        category=category,
        rate_initial=solved.rate_initial,
        rate_final=solved.rate_final,
        gross_up_base=target,
        gross_up_initial=round_half_up(solved.gross_up_initial),
        gross_up_final=round_half_up(solved.gross_up_final),
        monthly_tax=monthly_tax,
        ptkp_amount=get_ptkp_amount(tax_status),
        ptkp_monthly=ptkp_monthly,
        taxable_income=round_half_up(max(0.0, solved.gross_up_final - ptkp_monthly)),
        effective_rate=_effective_rate(monthly_tax, solved.gross_up_final),
        calculation_type="gross_up",
        paid_by_employer=True,
    )


def calculate_regular_tax(
    total_gross: float,
    contributions: ContributionResult,
    tax_status: str,
    settings: Optional[CompanySettings] = None,
) -> TaxResult:
    """
    Calculate PPh 21 for GROSS: employee pays the tax.

    Args:
        total_gross: Basic + allowances + overtime
        contributions: BPJS result for the GROSS policy
        tax_status: PTKP status code
        settings: Company settings (tax method, biaya jabatan)

    Returns:
        TaxResult: Tax withheld from the employee
    """
    category = resolve_rate_category(tax_status)
    ptkp_amount = get_ptkp_amount(tax_status)
    ptkp_monthly = ptkp_amount / 12
    income = total_gross + contributions.taxable_object

    if settings is not None and settings.tax_method == "progressive":
        pension_contributions = contributions.jht_employee + contributions.jp_employee
        progressive = calculate_monthly_pph21_progressive(
            income, pension_contributions, ptkp_amount, settings
        )
        monthly_tax = progressive["pph21"]
        effective = _effective_rate(monthly_tax, income)
        return TaxResult(
            tax_status=tax_status,
            category=category,
            rate_initial=effective,
            rate_final=effective,
            gross_up_base=income,
            gross_up_initial=round_half_up(income),
            gross_up_final=round_half_up(income),
            monthly_tax=monthly_tax,
            ptkp_amount=ptkp_amount,
            ptkp_monthly=ptkp_monthly,
            taxable_income=round_half_up(progressive["pkp"] / 12),
            effective_rate=effective,
            calculation_type="progressive",
            paid_by_employer=False,
        )

    rate = lookup_rate(income, category)
    monthly_tax = round_half_up(income * rate)

    return TaxResult(
        tax_status=tax_status,
        category=category,
        rate_initial=rate,
        rate_final=rate,
        gross_up_base=income,
        gross_up_initial=round_half_up(income),
        gross_up_final=round_half_up(income),
        monthly_tax=monthly_tax,
        ptkp_amount=ptkp_amount,
        ptkp_monthly=ptkp_monthly,
        taxable_income=round_half_up(max(0.0, income - ptkp_monthly)),
        effective_rate=_effective_rate(monthly_tax, income),
        calculation_type="regular",
        paid_by_employer=False,
    )


def calculate_tax(
    total_gross: float,
    contributions: ContributionResult,
    tax_status: str,
    pay_type: str,
    settings: Optional[CompanySettings] = None,
) -> TaxResult:
    """Dispatch to the tax path of the pay type."""
    if pay_type in EMPLOYER_ABSORBED_PAY_TYPES:
        result = calculate_gross_up_tax(total_gross, contributions.taxable_object, tax_status)
    else:
        result = calculate_regular_tax(total_gross, contributions, tax_status, settings)

    logger.debug(
        f"PPh 21 ({result.calculation_type}) for status {tax_status}: "
        f"TER {result.category} {result.rate_final * 100}% -> {result.monthly_tax}"
    )
    return result
