import math

import pytest

from payroll_engine.config.config import CompanySettings
from payroll_engine.exceptions import InvalidInputError
from payroll_engine.models import RegistrationFlags
from payroll_engine.salary_slip.gross_up import gross_up, solve_gross_up
from payroll_engine.salary_slip.take_home_solver import solve_basic_salary_for_take_home


def test_solve_gross_up_two_passes():
    result = solve_gross_up(10_854_000, "A")

    assert result.rate_initial == 0.03
    assert result.gross_up_initial == pytest.approx(10_854_000 / 0.97)
    assert result.rate_final == 0.035
    assert result.gross_up_final == pytest.approx(10_854_000 / 0.965)
    assert result.iterations == 2


@pytest.mark.parametrize("target", [0, 4_000_000, 8_123_456, 10_854_000, 35_000_000, 250_000_000])
@pytest.mark.parametrize("category", ["A", "B", "C"])
def test_gross_up_recovers_target(target, category):
    result = solve_gross_up(target, category)
    assert abs(result.gross_up_final * (1 - result.rate_final) - target) <= 1


def test_gross_up_below_first_bracket_is_identity():
    result = solve_gross_up(5_000_000, "A")
    assert result.rate_initial == result.rate_final == 0.0
    assert result.gross_up_final == 5_000_000


@pytest.mark.parametrize("target", [-1, math.nan, math.inf])
def test_solve_gross_up_rejects_invalid_target(target):
    with pytest.raises(InvalidInputError):
        solve_gross_up(target, "A")


def test_gross_up_formula():
    assert gross_up(9_650_000, 0.035) == pytest.approx(10_000_000)


def test_take_home_solver_exact_start():
    solution = solve_basic_salary_for_take_home(9_600_000)

    assert solution.converged
    assert solution.iterations == 1
    assert solution.basic_salary == 10_000_000
    assert solution.take_home == 9_600_000
    assert solution.tax.paid_by_employer


def test_take_home_solver_with_caps_converges():
    solution = solve_basic_salary_for_take_home(19_000_000, allowances_total=1_000_000, tax_status="K/1")

    assert solution.converged
    assert 1 < solution.iterations <= 10
    assert abs(solution.take_home - 19_000_000) < 1_000
    assert solution.contributions.kesehatan_capped
    assert solution.tax.category == "B"


def test_take_home_solver_returns_best_effort_without_raising():
    # allowances alone exceed the desired take-home
    solution = solve_basic_salary_for_take_home(1_000_000, allowances_total=5_000_000)

    assert not solution.converged
    assert solution.iterations == 10
    assert solution.basic_salary == 0
    assert solution.take_home == 5_000_000


def test_take_home_solver_without_registration():
    flags = RegistrationFlags(health=False, old_age=False, pension=False, employment=False)
    solution = solve_basic_salary_for_take_home(8_000_000, registration=flags, prorate_factor=0.5)

    assert solution.converged
    assert solution.basic_salary == 16_000_000
    assert solution.gross_salary == 8_000_000


@pytest.mark.parametrize("factor", [0, -0.5, 1.5])
def test_take_home_solver_rejects_bad_factor(factor):
    with pytest.raises(InvalidInputError):
        solve_basic_salary_for_take_home(8_000_000, prorate_factor=factor)


def test_take_home_solver_with_heavy_employee_rates():
    settings = CompanySettings(bpjs_kes_employee_rate=0.5, bpjs_jht_employee_rate=0.4, bpjs_jp_employee_rate=0.09)
    solution = solve_basic_salary_for_take_home(5_000_000, settings=settings)

    assert solution.basic_salary >= 0
    assert 1 <= solution.iterations <= 10
