# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Input records and calculation results.

Inputs are validated pydantic models: every money amount and day count must
be finite and non-negative. Results are frozen dataclasses, created once per
calculation and never mutated.
"""

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Annotated, Any, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from payroll_engine.constants import (
    DEDUCTION_TYPES,
    DEFAULT_TAX_STATUS,
    PAY_TYPE_GROSS,
    PAY_TYPE_NETT,
    PAY_TYPES,
)

__all__ = [
    "Money",
    "Allowances",
    "RegistrationFlags",
    "SalaryInput",
    "EmployeeContext",
    "AttendanceSummary",
    "AdjustmentRecord",
    "ContributionResult",
    "TaxResult",
    "GrossUpResult",
    "BasicSalarySolution",
    "ProrationResult",
    "DeductionItem",
    "DeductionResult",
    "CalculationWarning",
    "PayrollCalculationResult",
]

Money = Annotated[float, Field(ge=0, allow_inf_nan=False)]
RecordId = Union[int, str]

PAY_TYPE_ALIASES = {"net": PAY_TYPE_NETT, "nett": PAY_TYPE_NETT, "gross-up": "gross_up"}


# ------------------------------- Inputs ----------------------------------- #
class Allowances(BaseModel):
    """Itemized monthly allowances (tunjangan), each prorated independently."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    transport: Money = 0
    meal: Money = 0
    position: Money = 0
    housing: Money = 0
    communication: Money = 0
    other: Money = 0

    @property
    def total(self) -> float:
        return sum(self.as_items().values())

    def as_items(self) -> Dict[str, float]:
        return self.model_dump()


class RegistrationFlags(BaseModel):
    """BPJS scheme enrolment for the employee."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    health: bool = True  # BPJS Kesehatan
    old_age: bool = True  # JHT
    pension: bool = True  # JP
    employment: bool = True  # JKK + JKM


class SalaryInput(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    basic_salary: Money
    allowances: Allowances = Field(default_factory=Allowances)
    overtime_pay: Money = 0
    overtime_hours: Money = 0
    tax_status: str = DEFAULT_TAX_STATUS
    pay_type: str = PAY_TYPE_GROSS
    registration: RegistrationFlags = Field(default_factory=RegistrationFlags)

    @field_validator("pay_type", mode="before")
    @classmethod
    def _normalize_pay_type(cls, value: Any) -> str:
        value = str(value or PAY_TYPE_GROSS).strip().lower()
        value = PAY_TYPE_ALIASES.get(value, value)
        if value not in PAY_TYPES:
            raise ValueError(f"Unknown pay type '{value}'")
        return value

    @field_validator("tax_status", mode="before")
    @classmethod
    def _default_tax_status(cls, value: Any) -> str:
        return str(value).strip() if value else DEFAULT_TAX_STATUS


class EmployeeContext(SalaryInput):
    """Salary input plus the employment window used for proration."""

    employee_id: Optional[RecordId] = None
    join_date: Optional[date] = None
    resign_date: Optional[date] = None

    @model_validator(mode="after")
    def _check_employment_window(self) -> "EmployeeContext":
        if self.join_date and self.resign_date and self.resign_date < self.join_date:
            raise ValueError("resign_date is before join_date")
        return self


class AttendanceSummary(BaseModel):
    """Attendance exceptions for one employee and period, already aggregated."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    absent_days: Money = 0
    late_days: Money = 0
    late_minutes: Money = 0
    unpaid_leave_days: Money = 0
    # Working days used for the daily rate, derived from the period when None
    working_days: Optional[Annotated[float, Field(gt=0, allow_inf_nan=False)]] = None


class AdjustmentRecord(BaseModel):
    """Approved payroll adjustment (loan, kasbon, penalty, ...)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[RecordId] = None
    employee_id: Optional[RecordId] = None
    type: str
    amount: Money
    status: str = "approved"
    pay_period: Optional[str] = None
    effective_date: Optional[date] = None
    is_recurring: bool = False
    recurring_end_date: Optional[date] = None
    description: Optional[str] = None

    @field_validator("type", "status", mode="before")
    @classmethod
    def _lower(cls, value: Any) -> str:
        return str(value).strip().lower()


# ------------------------------- Results ---------------------------------- #
@dataclass(frozen=True)
class ContributionResult:
    jht_employer: int = 0
    jkm_employer: int = 0
    jkk_employer: int = 0
    kesehatan_employer: int = 0
    jp_employer: int = 0
    jht_employee: int = 0
    kesehatan_employee: int = 0
    jp_employee: int = 0
    employer_total: int = 0
    employee_total: int = 0
    # BPJS amount added back into PPh 21 taxable income
    taxable_object: int = 0
    kesehatan_base: float = 0.0
    jp_base: float = 0.0
    kesehatan_cap: Optional[float] = None
    jp_cap: Optional[float] = None
    kesehatan_capped: bool = False
    jp_capped: bool = False

    def employer_items(self) -> Dict[str, int]:
        return {
            "jht": self.jht_employer,
            "jkm": self.jkm_employer,
            "jkk": self.jkk_employer,
            "kesehatan": self.kesehatan_employer,
            "jp": self.jp_employer,
        }

    def employee_items(self) -> Dict[str, int]:
        return {
            "jht": self.jht_employee,
            "kesehatan": self.kesehatan_employee,
            "jp": self.jp_employee,
        }


@dataclass(frozen=True)
class GrossUpResult:
    gross_up_initial: float
    rate_initial: float
    gross_up_final: float
    rate_final: float
    iterations: int = 2


@dataclass(frozen=True)
class TaxResult:
    tax_status: str
    category: str
    rate_initial: float
    rate_final: float
    gross_up_base: float
    gross_up_initial: int
    gross_up_final: int
    monthly_tax: int
    ptkp_amount: float
    ptkp_monthly: float
    taxable_income: int
    effective_rate: float
    calculation_type: str
    paid_by_employer: bool = False


@dataclass(frozen=True)
class BasicSalarySolution:
    basic_salary: int
    gross_salary: int
    take_home: int
    iterations: int
    converged: bool
    contributions: ContributionResult
    tax: TaxResult


@dataclass(frozen=True)
class ProrationResult:
    factor: float
    is_prorated: bool
    actual_days: float
    total_days: float
    method: str
    reason: Optional[str] = None
    unpaid_leave_days: float = 0
    employee_start: Optional[date] = None
    employee_end: Optional[date] = None


@dataclass(frozen=True)
class DeductionItem:
    type: str
    amount: int
    description: str = ""
    reference_id: Optional[RecordId] = None


@dataclass(frozen=True)
class DeductionResult:
    items: Tuple[DeductionItem, ...] = ()
    total: int = 0
    daily_rate: float = 0.0

    @property
    def subtotals(self) -> Dict[str, int]:
        totals = {deduction_type: 0 for deduction_type in DEDUCTION_TYPES}
        for item in self.items:
            totals[item.type] = totals.get(item.type, 0) + item.amount
        return totals


@dataclass(frozen=True)
class CalculationWarning:
    code: str
    message: str


@dataclass(frozen=True)
class PayrollCalculationResult:
    employee_id: Optional[RecordId]
    period: Optional[str]
    pay_type: str

    # Salary components after proration
    full_basic_salary: float
    basic_salary: int
    allowances: Dict[str, int]
    total_allowances: int
    overtime_pay: int

    # Gross calculations
    total_gross: int
    gross_up_initial: int
    final_gross_up: int
    taxable_object: int
    pph21: int

    contributions: ContributionResult
    tax: TaxResult
    proration: ProrationResult
    deductions: DeductionResult

    # Final amounts
    take_home_before_deductions: int
    net_salary: int
    take_home_pay: int
    total_cost_to_company: int

    # Who bears what
    tax_borne_by: str
    insurance_borne_by: str
    company_pays_tax: int
    company_pays_bpjs: int
    employee_pays_tax: int
    employee_pays_bpjs: int

    warnings: Tuple[CalculationWarning, ...] = field(default_factory=tuple)

    def as_dict(self) -> Dict[str, Any]:
        """Flat-ish record for persistence or serialization."""
        return asdict(self)
