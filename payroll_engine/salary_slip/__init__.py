# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""Payroll engine calculators, one module per concern."""

from .payroll_controller import PayrollContext, PayrollController
from . import bpjs_calculator as bpjs_calc
from . import deduction_calculator as deduction_calc
from . import prorate_calculator as prorate_calc
from . import tax_calculator as tax_calc
from . import ter_calculator as ter_calc

__all__ = [
    "PayrollContext",
    "PayrollController",
    "bpjs_calc",
    "deduction_calc",
    "prorate_calc",
    "tax_calc",
    "ter_calc",
]
