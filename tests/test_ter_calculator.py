import logging

import pytest

from payroll_engine.config.ter_tables import (
    PTKP_AMOUNTS,
    TER_CATEGORY_BY_STATUS,
    TER_TABLES,
    validate_bracket_table,
)
from payroll_engine.salary_slip.ter_calculator import (
    get_ptkp_amount,
    get_ptkp_monthly,
    is_known_tax_status,
    lookup_rate,
    normalize_tax_status,
    resolve_rate_category,
)


@pytest.mark.parametrize("category", ["A", "B", "C"])
def test_ter_tables_are_valid(category):
    assert validate_bracket_table(TER_TABLES[category])


@pytest.mark.parametrize("category,size", [("A", 43), ("B", 39), ("C", 40)])
def test_ter_table_sizes(category, size):
    table = TER_TABLES[category]
    assert len(table) == size
    assert table[-1][1] == 0.34


@pytest.mark.parametrize(
    "table",
    [
        (),
        ((5_000_000, 0.01), (4_000_000, 0.02)),
        ((5_000_000, 0.02), (6_000_000, 0.01)),
        ((5_000_000, 1.0),),
    ],
)
def test_validate_bracket_table_rejects_bad_tables(table):
    assert not validate_bracket_table(table)


@pytest.mark.parametrize(
    "status,category",
    [
        ("TK/0", "A"),
        ("TK/1", "A"),
        ("K/0", "A"),
        ("TK/2", "B"),
        ("TK/3", "B"),
        ("K/1", "B"),
        ("K/2", "B"),
        ("K/3", "C"),
    ],
)
def test_resolve_rate_category(status, category):
    assert resolve_rate_category(status) == category
    assert TER_CATEGORY_BY_STATUS[status] == category


@pytest.mark.parametrize(
    "raw,expected",
    [("TK/0", "TK/0"), ("tk0", "TK/0"), (" K / 3 ", "K/3"), ("K2", "K/2"), ("TK/4", None), ("", None), (None, None)],
)
def test_normalize_tax_status(raw, expected):
    assert normalize_tax_status(raw) == expected


def test_unknown_status_falls_back_to_category_a(caplog):
    with caplog.at_level(logging.WARNING, logger="payroll_engine"):
        assert resolve_rate_category("XYZ") == "A"
    assert "Unknown PTKP code 'XYZ'" in caplog.text
    assert not is_known_tax_status("XYZ")


@pytest.mark.parametrize(
    "income,category,rate",
    [
        (0, "A", 0.0),
        (5_400_000, "A", 0.0),
        (5_400_001, "A", 0.0025),
        (10_454_000, "A", 0.025),
        (10_350_000, "A", 0.0225),
        (11_189_690, "A", 0.035),
        (2_000_000_000, "A", 0.34),
        (6_200_000, "B", 0.0),
        (6_200_001, "B", 0.0025),
        (15_000_000, "B", 0.06),
        (6_600_000, "C", 0.0),
        (12_000_000, "C", 0.02),
        (12_050_001, "C", 0.03),
        (1_419_000_001, "C", 0.34),
    ],
)
def test_lookup_rate_boundaries(income, category, rate):
    assert lookup_rate(income, category) == rate


@pytest.mark.parametrize("category", ["A", "B", "C"])
def test_lookup_rate_is_monotonic(category):
    incomes = range(0, 1_500_000_000, 7_500_000)
    rates = [lookup_rate(income, category) for income in incomes]
    assert rates == sorted(rates)


def test_lookup_rate_unknown_category_uses_a(caplog):
    with caplog.at_level(logging.WARNING, logger="payroll_engine"):
        assert lookup_rate(10_454_000, "Z") == 0.025
    assert "Unknown TER category 'Z'" in caplog.text


@pytest.mark.parametrize("status", sorted(PTKP_AMOUNTS))
def test_ptkp_amounts(status):
    assert get_ptkp_amount(status) == PTKP_AMOUNTS[status]
    assert get_ptkp_monthly(status) == PTKP_AMOUNTS[status] / 12


def test_ptkp_unknown_status_uses_tk0():
    assert get_ptkp_amount("K/9") == 54_000_000
