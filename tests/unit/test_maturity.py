"""Unit tests for fixed deposit maturity projection"""

import pytest
from datetime import date
from moneydesk.domain.exceptions import InvalidInputError
from moneydesk.domain.maturity import (
    MAX_ANNUAL_RATE,
    MAX_PRINCIPAL,
    MAX_TERM_MONTHS,
    calculate_maturity_amount,
    calculate_maturity_date,
    project_maturity,
)
from moneydesk.domain.money import format_currency


def test_maturity_worked_example():
    """100000 at 7.5% for 12 months, compounded monthly"""
    amount = calculate_maturity_amount(100000, 7.5, 12)

    assert amount == 100000 * (1 + 7.5 / 100 / 12) ** 12
    assert abs(7.5 / 100 / 12 - 0.00625) < 1e-15
    assert round(amount) == 107763
    assert format_currency(amount) == "₹1,07,763"


def test_maturity_zero_rate_returns_principal():
    assert calculate_maturity_amount(50000, 0, 24) == 50000


def test_maturity_never_below_principal():
    for principal in (1, 999.99, 250000):
        for rate in (0, 0.5, 7.5, 18):
            for term in (1, 6, 60):
                assert calculate_maturity_amount(principal, rate, term) >= principal


def test_maturity_strictly_increasing_in_rate():
    amounts = [calculate_maturity_amount(100000, rate, 12) for rate in (0.5, 1, 5, 7.5, 12)]
    assert amounts == sorted(amounts)
    assert len(set(amounts)) == len(amounts)


def test_maturity_strictly_increasing_in_term():
    amounts = [calculate_maturity_amount(100000, 6.5, term) for term in (1, 3, 12, 36, 120)]
    assert amounts == sorted(amounts)
    assert len(set(amounts)) == len(amounts)


def test_maturity_is_deterministic():
    first = calculate_maturity_amount(123456.78, 6.85, 37)
    second = calculate_maturity_amount(123456.78, 6.85, 37)
    assert first == second


@pytest.mark.parametrize(
    "principal, rate, term",
    [
        (0, 7.5, 12),
        (-100, 7.5, 12),
        (1000, -0.1, 12),
        (1000, 7.5, 0),
        (1000, 7.5, -3),
        (1000, 7.5, 1.5),
        (1000, 7.5, True),
    ],
)
def test_maturity_rejects_out_of_domain_input(principal, rate, term):
    with pytest.raises(InvalidInputError):
        calculate_maturity_amount(principal, rate, term)


def test_maturity_date_same_day_of_month():
    assert calculate_maturity_date(date(2024, 1, 15), 12) == date(2025, 1, 15)
    assert calculate_maturity_date(date(2024, 11, 3), 3) == date(2025, 2, 3)


def test_maturity_date_clamps_to_month_end():
    """Jan 31 + 1 month lands on the last day of February"""
    assert calculate_maturity_date(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert calculate_maturity_date(date(2023, 1, 31), 1) == date(2023, 2, 28)
    assert calculate_maturity_date(date(2024, 3, 31), 6) == date(2024, 9, 30)


def test_project_maturity_interest():
    projection = project_maturity(100000, 7.5, 12, date(2024, 1, 1))

    assert projection.maturity_date == date(2025, 1, 1)
    assert projection.maturity_amount == calculate_maturity_amount(100000, 7.5, 12)
    assert projection.interest_earned == projection.maturity_amount - 100000


@pytest.mark.parametrize(
    "principal, rate, term",
    [
        (100000, 1e6, 120),
        (1e308, 7.5, 12),
        (float("inf"), 7.5, 12),
        (1000, float("nan"), 12),
    ],
)
def test_maturity_rejects_unrepresentable_projection(principal, rate, term):
    """Overflowing or non-finite results are invalid input, not crashes"""
    with pytest.raises(InvalidInputError):
        calculate_maturity_amount(principal, rate, term)


def test_maturity_date_rejects_term_past_calendar_range():
    with pytest.raises(InvalidInputError):
        calculate_maturity_date(date(2024, 1, 1), 200000)
    with pytest.raises(InvalidInputError):
        calculate_maturity_date(date(9990, 1, 1), 600)


def test_maturity_at_form_limits_is_displayable():
    projection = project_maturity(MAX_PRINCIPAL, MAX_ANNUAL_RATE, MAX_TERM_MONTHS, date(2024, 1, 1))

    assert projection.maturity_date == date(2074, 1, 1)
    assert format_currency(projection.maturity_amount).startswith("₹")
