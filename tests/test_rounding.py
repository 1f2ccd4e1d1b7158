import pytest

from payroll_engine.utils import clamp, round_half_up


def test_round_half_up_basic():
    assert round_half_up(0.5) == 1
    assert round_half_up(1.5) == 2
    assert round_half_up(2.5) == 3


@pytest.mark.parametrize(
    "value,expected",
    [(0, 0), (1234.4999, 1234), (1234.5, 1235), (392_500.5, 392_501), (-0.4, 0), (10_000_000 * 0.037, 370_000)],
)
def test_round_half_up_amounts(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize("value,expected", [(-0.2, 0.0), (0.4, 0.4), (1.7, 1.0)])
def test_clamp(value, expected):
    assert clamp(value) == expected
