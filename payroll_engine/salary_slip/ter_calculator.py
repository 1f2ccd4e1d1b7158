# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
TER calculator module - withholding rate resolver.

Maps a PTKP status to its TER category and a monthly gross income to the
TER rate of that category, as per PMK 168/2023.
"""

import re
from bisect import bisect_left
from functools import lru_cache
from typing import Optional, Tuple

from payroll_engine.config.ter_tables import PTKP_AMOUNTS, TER_CATEGORY_BY_STATUS, TER_TABLES
from payroll_engine.constants import DEFAULT_TAX_STATUS, MONTHS_PER_YEAR, TER_CATEGORY_A
from payroll_engine.helpers import get_logger

__all__ = [
    "normalize_tax_status",
    "is_known_tax_status",
    "resolve_rate_category",
    "lookup_rate",
    "get_ptkp_amount",
    "get_ptkp_monthly",
]

logger = get_logger(__name__)

TAX_STATUS_PATTERN = re.compile(r"^(TK|K)\s*/?\s*([0-3])$")


def _bounds(category: str) -> Tuple[int, ...]:
    return tuple(bound for bound, _ in TER_TABLES[category])


# Precomputed ascending bounds per category for bisection
BRACKET_BOUNDS = {category: _bounds(category) for category in TER_TABLES}


def normalize_tax_status(tax_status: Optional[str]) -> Optional[str]:
    """
    Normalize a PTKP status code to the canonical ``TK/0`` form.

    Accepts ``TK/0``, ``TK0``, ``tk / 0`` and similar spellings.

    Returns:
        str: Canonical status, or None when the code is not a known status
    """
    if not tax_status:
        return None
    match = TAX_STATUS_PATTERN.match(str(tax_status).strip().upper())
    if not match:
        return None
    return f"{match.group(1)}/{match.group(2)}"


def is_known_tax_status(tax_status: Optional[str]) -> bool:
    return normalize_tax_status(tax_status) in TER_CATEGORY_BY_STATUS


@lru_cache(maxsize=128)
def resolve_rate_category(tax_status: str) -> str:
    """
    Map PTKP status to TER category based on PMK 168/2023.

    Args:
        tax_status: Tax status code (TK/0, K/1, etc.)

    Returns:
        str: TER category (A, B or C). Unknown codes fall back to A, the
        category with the lowest exemption.
    """
    normalized = normalize_tax_status(tax_status)
    if normalized in TER_CATEGORY_BY_STATUS:
        return TER_CATEGORY_BY_STATUS[normalized]

    logger.warning(f"Unknown PTKP code '{tax_status}', defaulting to TER {TER_CATEGORY_A}")
    return TER_CATEGORY_A


def lookup_rate(monthly_income: float, category: str) -> float:
    """
    Get TER rate for a monthly gross income within a category.

    The rate of the highest lower bound strictly below the income applies;
    income at or below the lowest bound resolves to 0.

    Args:
        monthly_income: Monthly gross income
        category: TER category (A, B or C)

    Returns:
        float: TER rate as decimal (e.g., 0.05 for 5%)
    """
    if category not in TER_TABLES:
        logger.warning(f"Unknown TER category '{category}', defaulting to TER {TER_CATEGORY_A}")
        category = TER_CATEGORY_A

    bounds = BRACKET_BOUNDS[category]
    # Number of bounds strictly below the income
    index = bisect_left(bounds, monthly_income)
    if index == 0:
        return 0.0

    return TER_TABLES[category][index - 1][1]


def get_ptkp_amount(tax_status: Optional[str]) -> float:
    """Return annual PTKP for the tax status; unknown codes use TK/0."""
    normalized = normalize_tax_status(tax_status)
    if normalized in PTKP_AMOUNTS:
        return float(PTKP_AMOUNTS[normalized])

    logger.warning(f"PTKP not found for tax status '{tax_status}'. Using {DEFAULT_TAX_STATUS}.")
    return float(PTKP_AMOUNTS[DEFAULT_TAX_STATUS])


def get_ptkp_monthly(tax_status: Optional[str]) -> float:
    return get_ptkp_amount(tax_status) / MONTHS_PER_YEAR
