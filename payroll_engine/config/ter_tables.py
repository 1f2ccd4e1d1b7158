# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Static rate tables for PPh 21 TER (PMK 168/2023).

Each TER table is an ascending tuple of ``(lower_bound, rate)`` pairs. A
rate applies when the monthly gross income is strictly greater than its
lower bound; income at or below the first bound is taxed at 0%.
These tables encode legal thresholds and must not be edited by hand
without the regulation at hand.
"""

from types import MappingProxyType
from typing import Sequence, Tuple

from payroll_engine.constants import TER_CATEGORY_A, TER_CATEGORY_B, TER_CATEGORY_C

__all__ = [
    "TER_TABLES",
    "PTKP_AMOUNTS",
    "TER_CATEGORY_BY_STATUS",
    "PROGRESSIVE_TAX_SLABS",
    "validate_bracket_table",
]

Bracket = Tuple[int, float]

TER_A: Tuple[Bracket, ...] = (
    (5_400_000, 0.0025),
    (5_650_000, 0.005),
    (5_950_000, 0.0075),
    (6_300_000, 0.01),
    (6_750_000, 0.0125),
    (7_500_000, 0.015),
    (8_550_000, 0.0175),
    (9_650_000, 0.02),
    (10_050_000, 0.0225),
    (10_350_000, 0.025),
    (10_700_000, 0.03),
    (11_050_000, 0.035),
    (11_600_000, 0.04),
    (12_500_000, 0.05),
    (13_750_000, 0.06),
    (15_100_000, 0.07),
    (16_950_000, 0.08),
    (19_750_000, 0.09),
    (24_150_000, 0.10),
    (26_450_000, 0.11),
    (28_000_000, 0.12),
    (30_050_000, 0.13),
    (32_400_000, 0.14),
    (35_400_000, 0.15),
    (39_100_000, 0.16),
    (43_850_000, 0.17),
    (47_800_000, 0.18),
    (51_400_000, 0.19),
    (56_300_000, 0.20),
    (62_200_000, 0.21),
    (68_600_000, 0.22),
    (77_500_000, 0.23),
    (89_000_000, 0.24),
    (103_000_000, 0.25),
    (125_000_000, 0.26),
    (157_000_000, 0.27),
    (206_000_000, 0.28),
    (337_000_000, 0.29),
    (454_000_000, 0.30),
    (550_000_000, 0.31),
    (695_000_000, 0.32),
    (910_000_000, 0.33),
    (1_140_000_000, 0.34),
)

TER_B: Tuple[Bracket, ...] = (
    (6_200_000, 0.0025),
    (6_500_000, 0.005),
    (6_850_000, 0.0075),
    (7_300_000, 0.01),
    (9_200_000, 0.015),
    (10_750_000, 0.02),
    (11_250_000, 0.025),
    (11_600_000, 0.03),
    (12_600_000, 0.04),
    (13_600_000, 0.05),
    (14_950_000, 0.06),
    (16_400_000, 0.07),
    (18_450_000, 0.08),
    (21_850_000, 0.09),
    (26_000_000, 0.10),
    (27_700_000, 0.11),
    (29_350_000, 0.12),
    (31_450_000, 0.13),
    (33_950_000, 0.14),
    (37_100_000, 0.15),
    (41_100_000, 0.16),
    (45_800_000, 0.17),
    (49_500_000, 0.18),
    (53_800_000, 0.19),
    (58_500_000, 0.20),
    (64_000_000, 0.21),
    (71_000_000, 0.22),
    (80_000_000, 0.23),
    (93_000_000, 0.24),
    (109_000_000, 0.25),
    (129_000_000, 0.26),
    (163_000_000, 0.27),
    (211_000_000, 0.28),
    (374_000_000, 0.29),
    (459_000_000, 0.30),
    (555_000_000, 0.31),
    (704_000_000, 0.32),
    (957_000_000, 0.33),
    (1_405_000_000, 0.34),
)

TER_C: Tuple[Bracket, ...] = (
    (6_600_000, 0.0025),
    (6_950_000, 0.005),
    (7_350_000, 0.0075),
    (7_800_000, 0.01),
    (8_850_000, 0.0125),
    (9_800_000, 0.015),
    (10_950_000, 0.0175),
    (11_200_000, 0.02),
    (12_050_000, 0.03),
    (12_950_000, 0.04),
    (14_150_000, 0.05),
    (15_550_000, 0.06),
    (17_050_000, 0.07),
    (19_500_000, 0.08),
    (22_700_000, 0.09),
    (26_600_000, 0.10),
    (28_100_000, 0.11),
    (30_100_000, 0.12),
    (32_600_000, 0.13),
    (35_400_000, 0.14),
    (38_900_000, 0.15),
    (43_000_000, 0.16),
    (47_400_000, 0.17),
    (51_200_000, 0.18),
    (55_800_000, 0.19),
    (60_400_000, 0.20),
    (66_700_000, 0.21),
    (74_500_000, 0.22),
    (83_200_000, 0.23),
    (95_600_000, 0.24),
    (110_000_000, 0.25),
    (134_000_000, 0.26),
    (169_000_000, 0.27),
    (221_000_000, 0.28),
    (390_000_000, 0.29),
    (463_000_000, 0.30),
    (561_000_000, 0.31),
    (709_000_000, 0.32),
    (965_000_000, 0.33),
    (1_419_000_000, 0.34),
)

TER_TABLES = MappingProxyType(
    {
        TER_CATEGORY_A: TER_A,
        TER_CATEGORY_B: TER_B,
        TER_CATEGORY_C: TER_C,
    }
)

# Annual PTKP (penghasilan tidak kena pajak) by marital/dependent status
PTKP_AMOUNTS = MappingProxyType(
    {
        "TK/0": 54_000_000,
        "TK/1": 58_500_000,
        "TK/2": 63_000_000,
        "TK/3": 67_500_000,
        "K/0": 58_500_000,
        "K/1": 63_000_000,
        "K/2": 67_500_000,
        "K/3": 72_000_000,
    }
)

TER_CATEGORY_BY_STATUS = MappingProxyType(
    {
        "TK/0": TER_CATEGORY_A,
        "TK/1": TER_CATEGORY_A,
        "K/0": TER_CATEGORY_A,
        "TK/2": TER_CATEGORY_B,
        "TK/3": TER_CATEGORY_B,
        "K/1": TER_CATEGORY_B,
        "K/2": TER_CATEGORY_B,
        "K/3": TER_CATEGORY_C,
    }
)

# Annual progressive slabs (UU HPP), upper bound and rate
PROGRESSIVE_TAX_SLABS: Tuple[Tuple[float, float], ...] = (
    (60_000_000, 0.05),
    (250_000_000, 0.15),
    (500_000_000, 0.25),
    (5_000_000_000, 0.30),
    (float("inf"), 0.35),
)


def validate_bracket_table(table: Sequence[Bracket]) -> bool:
    """
    Check a bracket table is usable for lookup.

    Args:
        table: Sequence of (lower_bound, rate) pairs

    Returns:
        bool: True when bounds strictly ascend, rates never decrease and
        every rate lies in [0, 1)
    """
    if not table:
        return False

    previous_bound, previous_rate = None, 0.0
    for bound, rate in table:
        if bound < 0 or not 0 <= rate < 1:
            return False
        if previous_bound is not None and bound <= previous_bound:
            return False
        if rate < previous_rate:
            return False
        previous_bound, previous_rate = bound, rate

    return True
