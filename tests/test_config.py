import logging

import pytest
from pydantic import ValidationError

from payroll_engine.config.config import (
    DEFAULTS,
    CompanySettings,
    get_bpjs_cap,
    get_bpjs_rate,
    get_deduction_rates,
    get_settings,
    get_value,
)
from payroll_engine.exceptions import InvalidInputError


def test_defaults_match_statutory_rates():
    settings = get_settings(None)

    assert settings.bpjs_jht_company_rate == 0.037
    assert settings.bpjs_jht_employee_rate == 0.02
    assert settings.bpjs_kes_max_salary == 12_000_000
    assert settings.bpjs_jp_max_salary == 10_547_400
    assert settings.prorate_method == "working_days"
    assert settings.unpaid_leave_mode == "deduction"
    assert settings.tax_method == "ter"
    assert settings.payroll_cutoff_day is None


def test_missing_settings_are_logged(caplog):
    with caplog.at_level(logging.INFO, logger="payroll_engine"):
        settings = get_settings({"bpjs_jkk_rate": 0.0054, "late_rate_per_day": None})

    assert settings.bpjs_jkk_rate == 0.0054
    assert settings.late_rate_per_day == DEFAULTS["late_rate_per_day"]
    assert "Setting 'late_rate_per_day' not found" in caplog.text
    assert "Setting 'bpjs_jkk_rate' not found" not in caplog.text


def test_unknown_keys_are_ignored():
    settings = get_settings({"company": "PT Contoh", "payroll_cutoff_day": 25})
    assert settings.payroll_cutoff_day == 25


@pytest.mark.parametrize(
    "values",
    [
        {"bpjs_jht_employee_rate": 2},
        {"bpjs_kes_company_rate": -0.01},
        {"payroll_cutoff_day": 28},
        {"prorate_method": "hours"},
        {"tax_method": "flat"},
        {"default_working_days": 0},
    ],
)
def test_invalid_settings_rejected(values):
    with pytest.raises(InvalidInputError):
        get_settings(values)


def test_settings_instance_passes_through():
    settings = CompanySettings(bpjs_jkk_rate=0.0089)
    assert get_settings(settings) is settings


def test_settings_are_frozen():
    settings = CompanySettings()
    with pytest.raises(ValidationError):
        settings.bpjs_jkk_rate = 0.01


def test_get_value_without_settings():
    assert get_value(None, "bpjs_jkm_rate") == 0.003
    assert get_value(None, "missing", 5) == 5
    assert get_bpjs_rate(None, "bpjs_jp_company_rate") == 0.02


@pytest.mark.parametrize("cap,expected", [(12_000_000, 12_000_000), (0, None), (-5, None), (None, None)])
def test_get_bpjs_cap(cap, expected):
    settings = CompanySettings(bpjs_kes_max_salary=cap)
    assert get_bpjs_cap(settings, "bpjs_kes_max_salary") == expected


def test_get_deduction_rates():
    rates = get_deduction_rates(CompanySettings(late_rate_per_minute=2, work_hours_per_day=7))

    assert rates.late_rate_per_minute == 2
    assert rates.work_hours_per_day == 7
    assert rates.absence_rate == 1.0
    assert rates.late_tolerance_minutes == 15


@pytest.mark.parametrize(
    "values",
    [
        {"bpjs_kes_employee_rate": 0.5, "bpjs_jht_employee_rate": 0.4, "bpjs_jp_employee_rate": 0.1},
        {"bpjs_kes_employee_rate": 0.6, "bpjs_jht_employee_rate": 0.6},
    ],
)
def test_employee_rates_must_leave_part_of_salary(values):
    with pytest.raises(InvalidInputError):
        get_settings(values)
    with pytest.raises(ValidationError):
        CompanySettings(**values)
