# -*- coding: utf-8 -*-
# Copyright (c) 2025, PT. Innovasi Terbaik Bangsa and contributors
# For license information, please see license.txt

"""
Payroll engine API.

Entry points accepting plain mappings (as loaded from a database row or a
request body) and returning calculation results:
- Payroll calculation for one employee and period
- Basic salary solving for a desired take-home pay
"""

# Standard library imports
from typing import Any, Iterable, Mapping, Optional, Type, TypeVar, Union

# Third party imports
from pydantic import BaseModel, ValidationError

# Payroll engine imports
from payroll_engine.config.config import CompanySettings, get_settings
from payroll_engine.constants import DEFAULT_TAX_STATUS
from payroll_engine.exceptions import InvalidInputError
from payroll_engine.helpers import get_logger
from payroll_engine.models import (
    AdjustmentRecord,
    AttendanceSummary,
    BasicSalarySolution,
    EmployeeContext,
    PayrollCalculationResult,
    RegistrationFlags,
)
from payroll_engine.salary_slip.payroll_controller import PayrollContext, PayrollController
from payroll_engine.salary_slip.take_home_solver import solve_basic_salary_for_take_home
from payroll_engine.utils.period import PayrollPeriod, parse_period, to_date

__all__ = ["calculate_payroll_for_employee", "solve_take_home"]

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
SettingsLike = Union[CompanySettings, Mapping[str, Any], None]


def _coerce(model: Type[ModelT], value: Union[ModelT, Mapping[str, Any], None]) -> ModelT:
    """Validate a mapping into ``model``, raising InvalidInputError on failure."""
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value or {})
    except ValidationError as e:
        raise InvalidInputError(f"Invalid {model.__name__}: {e}") from e


def calculate_payroll_for_employee(
    employee_context: Union[EmployeeContext, Mapping[str, Any]],
    period: Union[PayrollPeriod, str],
    attendance_summary: Union[AttendanceSummary, Mapping[str, Any], None] = None,
    approved_adjustments: Optional[Iterable[Union[AdjustmentRecord, Mapping[str, Any]]]] = None,
    company_settings: SettingsLike = None,
    holidays: Optional[Iterable[Any]] = None,
    custom_prorate_factor: Optional[float] = None,
) -> PayrollCalculationResult:
    """
    Calculate payroll for one employee and period.

    Args:
        employee_context: Salary, tax status, pay type and employment window
        period: Period token ``YYYY-MM`` or a resolved PayrollPeriod
        attendance_summary: Aggregated attendance for the period
        approved_adjustments: Payroll adjustment records of the employee
        company_settings: Company payroll settings; defaults when None
        holidays: Public holidays (dates or ISO strings) inside the period
        custom_prorate_factor: Manual prorate factor overriding the day count

    Returns:
        PayrollCalculationResult: Complete payroll breakdown

    Raises:
        InvalidInputError: Invalid input record, period or settings
        UnknownCategoryError: Unknown PTKP status with strict tax status enabled
    """
    settings = get_settings(company_settings)
    employee = _coerce(EmployeeContext, employee_context)
    attendance = _coerce(AttendanceSummary, attendance_summary)
    adjustments = tuple(_coerce(AdjustmentRecord, record) for record in approved_adjustments or ())

    if not isinstance(period, PayrollPeriod):
        period = parse_period(period, settings.payroll_cutoff_day)

    context = PayrollContext(
        period=period,
        employee_id=employee.employee_id,
        join_date=employee.join_date,
        resign_date=employee.resign_date,
        attendance=attendance,
        adjustments=adjustments,
        holidays=tuple(to_date(day) for day in holidays or ()),
        custom_prorate_factor=custom_prorate_factor,
    )

    logger.debug(f"Calculating payroll {period.token} for employee {employee.employee_id}")
    return PayrollController(settings).calculate(employee, context)


def solve_take_home(
    desired_take_home: float,
    allowances_total: float = 0.0,
    overtime_pay: float = 0.0,
    tax_status: str = DEFAULT_TAX_STATUS,
    registration: Union[RegistrationFlags, Mapping[str, Any], None] = None,
    company_settings: SettingsLike = None,
    prorate_factor: float = 1.0,
) -> BasicSalarySolution:
    """Solve the basic salary for a desired take-home pay, tax paid by the company."""
    return solve_basic_salary_for_take_home(
        desired_take_home,
        allowances_total=allowances_total,
        overtime_pay=overtime_pay,
        tax_status=tax_status,
        registration=_coerce(RegistrationFlags, registration),
        settings=get_settings(company_settings),
        prorate_factor=prorate_factor,
    )
