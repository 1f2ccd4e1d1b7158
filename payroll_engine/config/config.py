# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Company payroll settings.

Every company-level preference has a well-defined default so a payroll run
never halts for a single missing setting. Missing keys are logged and
replaced by the value in ``DEFAULTS``.
"""

from typing import Any, Dict, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from payroll_engine import constants as c
from payroll_engine.exceptions import InvalidInputError
from payroll_engine.helpers import get_logger

__all__ = [
    "DEFAULTS",
    "CompanySettings",
    "DeductionRates",
    "get_settings",
    "get_value",
    "get_bpjs_rate",
    "get_bpjs_cap",
    "get_deduction_rates",
]

logger = get_logger(__name__)

# Define all defaults in one place for better maintenance
DEFAULTS: Dict[str, Any] = {
    "bpjs_kes_employee_rate": c.BPJS_KESEHATAN_EMPLOYEE_RATE,
    "bpjs_kes_company_rate": c.BPJS_KESEHATAN_EMPLOYER_RATE,
    "bpjs_kes_max_salary": c.BPJS_KESEHATAN_MAX_SALARY,
    "bpjs_jht_employee_rate": c.BPJS_JHT_EMPLOYEE_RATE,
    "bpjs_jht_company_rate": c.BPJS_JHT_EMPLOYER_RATE,
    "bpjs_jp_employee_rate": c.BPJS_JP_EMPLOYEE_RATE,
    "bpjs_jp_company_rate": c.BPJS_JP_EMPLOYER_RATE,
    "bpjs_jp_max_salary": c.BPJS_JP_MAX_SALARY,
    "bpjs_jkk_rate": c.BPJS_JKK_RATE,
    "bpjs_jkm_rate": c.BPJS_JKM_RATE,
    "payroll_cutoff_day": None,  # historical default per period year
    "prorate_method": c.PRORATE_WORKING_DAYS,
    "unpaid_leave_mode": c.UNPAID_LEAVE_AS_DEDUCTION,
    "default_working_days": c.DEFAULT_WORKING_DAYS,
    "work_hours_per_day": c.DEFAULT_WORK_HOURS_PER_DAY,
    "absence_deduction_rate": c.DEFAULT_ABSENCE_RATE,
    "late_rate_per_minute": c.DEFAULT_LATE_RATE_PER_MINUTE,
    "late_rate_per_day": c.DEFAULT_LATE_RATE_PER_DAY,
    "late_tolerance_minutes": c.DEFAULT_LATE_TOLERANCE_MINUTES,
    "leave_deduction_rate": c.DEFAULT_LEAVE_RATE,
    "overtime_rate_multiplier": c.OVERTIME_RATE_MULTIPLIER,
    "tax_method": "ter",
    "position_cost_rate": c.BIAYA_JABATAN_RATE,
    "position_cost_max": c.BIAYA_JABATAN_CAP_MONTHLY,
    "strict_tax_status": False,
}

Rate = float


class CompanySettings(BaseModel):
    """Validated company payroll settings. Rates are fractions (0.01 == 1%)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    bpjs_kes_employee_rate: Rate = Field(DEFAULTS["bpjs_kes_employee_rate"], ge=0, le=1, allow_inf_nan=False)
    bpjs_kes_company_rate: Rate = Field(DEFAULTS["bpjs_kes_company_rate"], ge=0, le=1, allow_inf_nan=False)
    # A cap of None or <= 0 disables capping for the scheme
    bpjs_kes_max_salary: Optional[float] = Field(DEFAULTS["bpjs_kes_max_salary"], allow_inf_nan=False)
    bpjs_jht_employee_rate: Rate = Field(DEFAULTS["bpjs_jht_employee_rate"], ge=0, le=1, allow_inf_nan=False)
    bpjs_jht_company_rate: Rate = Field(DEFAULTS["bpjs_jht_company_rate"], ge=0, le=1, allow_inf_nan=False)
    bpjs_jp_employee_rate: Rate = Field(DEFAULTS["bpjs_jp_employee_rate"], ge=0, le=1, allow_inf_nan=False)
    bpjs_jp_company_rate: Rate = Field(DEFAULTS["bpjs_jp_company_rate"], ge=0, le=1, allow_inf_nan=False)
    bpjs_jp_max_salary: Optional[float] = Field(DEFAULTS["bpjs_jp_max_salary"], allow_inf_nan=False)
    bpjs_jkk_rate: Rate = Field(DEFAULTS["bpjs_jkk_rate"], ge=0, le=1, allow_inf_nan=False)
    bpjs_jkm_rate: Rate = Field(DEFAULTS["bpjs_jkm_rate"], ge=0, le=1, allow_inf_nan=False)

    payroll_cutoff_day: Optional[int] = Field(DEFAULTS["payroll_cutoff_day"], ge=1, le=c.MAX_CUTOFF_DAY)
    prorate_method: Literal["working_days", "calendar_days", "custom"] = DEFAULTS["prorate_method"]
    unpaid_leave_mode: Literal["deduction", "prorate"] = DEFAULTS["unpaid_leave_mode"]
    default_working_days: float = Field(DEFAULTS["default_working_days"], gt=0, allow_inf_nan=False)
    work_hours_per_day: float = Field(DEFAULTS["work_hours_per_day"], gt=0, allow_inf_nan=False)

    absence_deduction_rate: Rate = Field(DEFAULTS["absence_deduction_rate"], ge=0, allow_inf_nan=False)
    late_rate_per_minute: Rate = Field(DEFAULTS["late_rate_per_minute"], ge=0, allow_inf_nan=False)
    late_rate_per_day: Rate = Field(DEFAULTS["late_rate_per_day"], ge=0, allow_inf_nan=False)
    late_tolerance_minutes: float = Field(DEFAULTS["late_tolerance_minutes"], ge=0, allow_inf_nan=False)
    leave_deduction_rate: Rate = Field(DEFAULTS["leave_deduction_rate"], ge=0, allow_inf_nan=False)

    overtime_rate_multiplier: float = Field(DEFAULTS["overtime_rate_multiplier"], ge=0, allow_inf_nan=False)
    tax_method: Literal["ter", "progressive"] = DEFAULTS["tax_method"]
    position_cost_rate: Rate = Field(DEFAULTS["position_cost_rate"], ge=0, le=1, allow_inf_nan=False)
    position_cost_max: float = Field(DEFAULTS["position_cost_max"], ge=0, allow_inf_nan=False)
    strict_tax_status: bool = DEFAULTS["strict_tax_status"]

    @model_validator(mode="after")
    def _check_employee_share(self) -> "CompanySettings":
        # Employee BPJS shares must leave part of the salary
        total = self.bpjs_kes_employee_rate + self.bpjs_jht_employee_rate + self.bpjs_jp_employee_rate
        if total >= 1:
            raise ValueError(f"Employee BPJS rates add up to {total}, must be below 1")
        return self


class DeductionRates(BaseModel):
    """Rates used by the deduction aggregator, a view over CompanySettings."""

    model_config = ConfigDict(frozen=True)

    absence_rate: float = Field(DEFAULTS["absence_deduction_rate"], ge=0, allow_inf_nan=False)
    late_rate_per_minute: float = Field(DEFAULTS["late_rate_per_minute"], ge=0, allow_inf_nan=False)
    late_rate_per_day: float = Field(DEFAULTS["late_rate_per_day"], ge=0, allow_inf_nan=False)
    late_tolerance_minutes: float = Field(DEFAULTS["late_tolerance_minutes"], ge=0, allow_inf_nan=False)
    leave_rate: float = Field(DEFAULTS["leave_deduction_rate"], ge=0, allow_inf_nan=False)
    work_hours_per_day: float = Field(DEFAULTS["work_hours_per_day"], gt=0, allow_inf_nan=False)


def get_settings(
    values: Union[CompanySettings, Mapping[str, Any], None] = None
) -> CompanySettings:
    """
    Build CompanySettings from a plain mapping.

    Keys that are absent or None fall back to ``DEFAULTS`` and are logged at
    info level; an absent mapping yields the full defaults.

    Args:
        values: Company settings mapping, an existing CompanySettings, or None

    Returns:
        CompanySettings: Validated settings

    Raises:
        InvalidInputError: A provided value is out of range
    """
    if isinstance(values, CompanySettings):
        return values

    if not values:
        logger.info("Company payroll settings not found. Using default values.")
        return CompanySettings()

    provided = {}
    for key in DEFAULTS:
        value = values.get(key)
        if value is None or value == "":
            if DEFAULTS[key] is not None:
                logger.info(f"Setting '{key}' not found. Using default: {DEFAULTS[key]}")
            continue
        provided[key] = value

    try:
        return CompanySettings(**provided)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid company payroll settings: {e}") from e


def get_value(settings: Optional[CompanySettings], fieldname: str, default=None):
    """Helper to fetch a field value from settings, falling back to DEFAULTS."""
    if settings is None:
        return DEFAULTS.get(fieldname, default)
    return getattr(settings, fieldname, DEFAULTS.get(fieldname, default))


def get_bpjs_rate(settings: Optional[CompanySettings], fieldname: str) -> float:
    """Return BPJS rate (fraction) for the given fieldname."""
    return float(get_value(settings, fieldname))


def get_bpjs_cap(settings: Optional[CompanySettings], fieldname: str) -> Optional[float]:
    """
    Return BPJS salary cap for the given fieldname.

    Returns None when capping is disabled (cap missing or not positive).
    """
    cap = get_value(settings, fieldname)
    if cap is None or float(cap) <= 0:
        return None
    return float(cap)


def get_deduction_rates(settings: Optional[CompanySettings]) -> DeductionRates:
    """Extract the deduction rates from company settings."""
    settings = settings or CompanySettings()
    return DeductionRates(
        absence_rate=settings.absence_deduction_rate,
        late_rate_per_minute=settings.late_rate_per_minute,
        late_rate_per_day=settings.late_rate_per_day,
        late_tolerance_minutes=settings.late_tolerance_minutes,
        leave_rate=settings.leave_deduction_rate,
        work_hours_per_day=settings.work_hours_per_day,
    )
