import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from payroll_engine.config.config import CompanySettings
from payroll_engine.models import SalaryInput
from payroll_engine.salary_slip.payroll_controller import PayrollController
from payroll_engine.salary_slip.ter_calculator import resolve_rate_category
from payroll_engine.utils.period import parse_period


@pytest.fixture(autouse=True)
def clear_category_cache():
    # resolve_rate_category only logs a fallback the first time a status is seen
    resolve_rate_category.cache_clear()
    yield
    resolve_rate_category.cache_clear()


@pytest.fixture
def settings():
    return CompanySettings()


@pytest.fixture
def controller(settings):
    return PayrollController(settings)


@pytest.fixture
def march_period():
    """2026-03 with cutoff 20: 21 Feb 2026 .. 20 Mar 2026, 20 working days."""
    return parse_period("2026-03", 20)


@pytest.fixture
def basic_10m():
    return SalaryInput(basic_salary=10_000_000, tax_status="TK/0", pay_type="gross")
