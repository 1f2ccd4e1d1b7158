# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""Exceptions raised by the payroll engine."""

__all__ = ["PayrollError", "InvalidInputError", "UnknownCategoryError"]


class PayrollError(Exception):
    """Base class for every error raised by the engine."""


class InvalidInputError(PayrollError, ValueError):
    """Negative, non-finite or malformed input rejected before calculation."""


class UnknownCategoryError(PayrollError, LookupError):
    """Tax status without a table entry, raised only in strict mode."""

    def __init__(self, tax_status: str):
        super().__init__(f"Unknown PTKP status '{tax_status}'")
        self.tax_status = tax_status
