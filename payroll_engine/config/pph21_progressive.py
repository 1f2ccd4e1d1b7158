# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
PPh 21 progressive (Pasal 17) calculation.

Alternative to the TER method for the employee-withheld policy: the monthly
gross is annualised, reduced by biaya jabatan, employee BPJS and PTKP, and
taxed through the progressive slabs.
"""

from typing import Dict, Optional, Sequence, Tuple

from payroll_engine.config.config import CompanySettings, get_value
from payroll_engine.constants import MONTHS_PER_YEAR
from payroll_engine.config.ter_tables import PROGRESSIVE_TAX_SLABS
from payroll_engine.utils import round_half_up

__all__ = ["calculate_progressive_tax", "calculate_monthly_pph21_progressive"]


def calculate_progressive_tax(
    annual_pkp: float, slabs: Sequence[Tuple[float, float]] = PROGRESSIVE_TAX_SLABS
) -> float:
    """Apply progressive slabs to annual taxable income (PKP)."""
    tax = 0.0
    remaining = max(annual_pkp, 0.0)
    previous_limit = 0.0

    for limit, rate in slabs:
        if remaining <= 0:
            break
        taxable_in_slab = min(remaining, limit - previous_limit)
        tax += taxable_in_slab * rate
        remaining -= taxable_in_slab
        previous_limit = limit

    return tax


def calculate_monthly_pph21_progressive(
    monthly_gross: float,
    employee_bpjs: float,
    ptkp_annual: float,
    settings: Optional[CompanySettings] = None,
) -> Dict[str, float]:
    """
    Calculate monthly PPh 21 with the progressive method.

    Args:
        monthly_gross: Gross income for the month including taxable BPJS
        employee_bpjs: Employee JHT + JP contributions (pengurang netto)
        ptkp_annual: Annual PTKP for the employee's status
        settings: Company settings for biaya jabatan rate/cap

    Returns:
        dict: biaya_jabatan, netto, pkp (annual) and monthly pph21
    """
    bj_rate = float(get_value(settings, "position_cost_rate"))
    bj_cap = float(get_value(settings, "position_cost_max"))
    biaya_jabatan = min(monthly_gross * bj_rate, bj_cap)

    netto_monthly = monthly_gross - employee_bpjs - biaya_jabatan
    pkp_annual = max(0.0, netto_monthly * MONTHS_PER_YEAR - ptkp_annual)
    # PKP is rounded down to the thousand rupiah
    pkp_annual = float(int(pkp_annual // 1000) * 1000)

    annual_tax = calculate_progressive_tax(pkp_annual)

    return {
        "biaya_jabatan": biaya_jabatan,
        "netto": netto_monthly,
        "pkp": pkp_annual,
        "pph21": round_half_up(annual_tax / MONTHS_PER_YEAR),
    }
