# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Statutory constants for Indonesian payroll.

BPJS rates are stored as fractions (0.037 == 3.70%).
"""

MONTHS_PER_YEAR = 12

# Pay types
PAY_TYPE_GROSS = "gross"
PAY_TYPE_NETT = "nett"
PAY_TYPE_GROSS_UP = "gross_up"
PAY_TYPES = (PAY_TYPE_GROSS, PAY_TYPE_NETT, PAY_TYPE_GROSS_UP)
EMPLOYER_ABSORBED_PAY_TYPES = (PAY_TYPE_NETT, PAY_TYPE_GROSS_UP)

# Who bears tax / BPJS
PARTY_EMPLOYEE = "employee"
PARTY_EMPLOYER = "employer"

# TER categories (PMK 168/2023)
TER_CATEGORY_A = "A"
TER_CATEGORY_B = "B"
TER_CATEGORY_C = "C"
TER_CATEGORIES = (TER_CATEGORY_A, TER_CATEGORY_B, TER_CATEGORY_C)

DEFAULT_TAX_STATUS = "TK/0"

# BPJS Kesehatan
BPJS_KESEHATAN_EMPLOYER_RATE = 0.04
BPJS_KESEHATAN_EMPLOYEE_RATE = 0.01
BPJS_KESEHATAN_MAX_SALARY = 12_000_000

# BPJS Ketenagakerjaan - JHT
BPJS_JHT_EMPLOYER_RATE = 0.037
BPJS_JHT_EMPLOYEE_RATE = 0.02

# BPJS Ketenagakerjaan - JP
BPJS_JP_EMPLOYER_RATE = 0.02
BPJS_JP_EMPLOYEE_RATE = 0.01
BPJS_JP_MAX_SALARY = 10_547_400

# BPJS Ketenagakerjaan - JKK (risk level I) & JKM, employer only
BPJS_JKK_RATE = 0.0024
BPJS_JKM_RATE = 0.003

# Biaya jabatan (position cost) for the progressive method
BIAYA_JABATAN_RATE = 0.05
BIAYA_JABATAN_CAP_MONTHLY = 500_000

# Overtime (Kepmenakertrans 102/2004)
OVERTIME_HOURS_DIVISOR = 173
OVERTIME_RATE_MULTIPLIER = 1.5

# Payroll period cutoff
DEFAULT_CUTOFF_DAY = 20
LEGACY_CUTOFF_DAY = 25
LEGACY_CUTOFF_LAST_YEAR = 2025
MAX_CUTOFF_DAY = 27

# Proration methods
PRORATE_WORKING_DAYS = "working_days"
PRORATE_CALENDAR_DAYS = "calendar_days"
PRORATE_CUSTOM = "custom"
PRORATE_METHODS = (PRORATE_WORKING_DAYS, PRORATE_CALENDAR_DAYS, PRORATE_CUSTOM)

PRORATE_REASON_JOIN = "join mid-period"
PRORATE_REASON_RESIGN = "resign mid-period"
PRORATE_REASON_UNPAID_LEAVE = "unpaid leave"
PRORATE_REASON_MANUAL = "manual prorate"

# Unpaid leave handling
UNPAID_LEAVE_AS_DEDUCTION = "deduction"
UNPAID_LEAVE_AS_PRORATE = "prorate"

# Deduction types
DEDUCTION_ABSENCE = "absence"
DEDUCTION_LATE = "late"
DEDUCTION_LOAN = "loan"
DEDUCTION_ADVANCE = "advance"
DEDUCTION_UNPAID_LEAVE = "unpaid_leave"
DEDUCTION_PENALTY = "penalty"
DEDUCTION_OTHER = "other"
DEDUCTION_TYPES = (
    DEDUCTION_ABSENCE,
    DEDUCTION_LATE,
    DEDUCTION_LOAN,
    DEDUCTION_ADVANCE,
    DEDUCTION_UNPAID_LEAVE,
    DEDUCTION_PENALTY,
    DEDUCTION_OTHER,
)

# Adjustment record types passed straight through as deductions
ADJUSTMENT_DEDUCTION_TYPES = {
    "loan": DEDUCTION_LOAN,
    "advance": DEDUCTION_ADVANCE,
    "penalty": DEDUCTION_PENALTY,
    "other": DEDUCTION_OTHER,
    "deduction": DEDUCTION_OTHER,
}
ADJUSTMENT_STATUS_APPROVED = "approved"

# Default deduction settings
DEFAULT_WORKING_DAYS = 22
DEFAULT_WORK_HOURS_PER_DAY = 8
DEFAULT_ABSENCE_RATE = 1.0
DEFAULT_LATE_RATE_PER_MINUTE = 0.0
DEFAULT_LATE_RATE_PER_DAY = 0.5
DEFAULT_LATE_TOLERANCE_MINUTES = 15
DEFAULT_LEAVE_RATE = 1.0

# Take-home solver
TAKE_HOME_MAX_ITERATIONS = 10
TAKE_HOME_TOLERANCE = 1_000

# Warning codes
WARNING_UNKNOWN_TAX_STATUS = "unknown_tax_status"
WARNING_CAP_DISABLED = "cap_disabled"
WARNING_TAX_METHOD_IGNORED = "tax_method_ignored"
WARNING_NEGATIVE_TAKE_HOME = "negative_take_home"
