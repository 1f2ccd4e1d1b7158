# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Gross-up solver for employer-absorbed PPh 21.

The TER rate depends on gross income while the grossed-up income depends on
the rate. The legally specified method resolves this with exactly two
bracket lookups (the spreadsheet formulas ``=AP/(100-AT*100)*100`` and
``=AP/(100-AU*100)*100``); it is not a convergence loop.
"""

import math

from payroll_engine.exceptions import InvalidInputError
from payroll_engine.helpers import get_logger
from payroll_engine.models import GrossUpResult
from payroll_engine.salary_slip.ter_calculator import lookup_rate

__all__ = ["solve_gross_up", "gross_up"]

logger = get_logger(__name__)


def gross_up(amount: float, rate: float) -> float:
    """Pre-tax figure whose withholding at ``rate`` leaves ``amount``."""
    return amount / (1 - rate)


def solve_gross_up(target: float, category: str) -> GrossUpResult:
    """
    Gross up a target post-tax income with the 2-step TER rate.

    Pass 1 looks up the rate for the target itself; pass 2 looks up the rate
    for the first grossed-up figure and grosses the target up again.

    Args:
        target: Total income the employee must receive before gross-up
        category: TER category (A, B or C)

    Returns:
        GrossUpResult: Both passes, unrounded
    """
    target = float(target)
    if math.isnan(target) or math.isinf(target) or target < 0:
        raise InvalidInputError(f"Invalid gross-up target: {target}")

    rate_initial = lookup_rate(target, category)
    gross_up_initial = gross_up(target, rate_initial)

    rate_final = lookup_rate(gross_up_initial, category)
    gross_up_final = gross_up(target, rate_final)

    logger.debug(
        f"Gross-up TER {category}: target {target}, "
        f"pass 1 {rate_initial * 100}% -> {gross_up_initial}, "
        f"pass 2 {rate_final * 100}% -> {gross_up_final}"
    )

    return GrossUpResult(
        gross_up_initial=gross_up_initial,
        rate_initial=rate_initial,
        gross_up_final=gross_up_final,
        rate_final=rate_final,
        iterations=2,
    )
