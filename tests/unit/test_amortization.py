"""Unit tests for EMI, interest, fee and schedule calculations"""

import logging
import pytest
from fincalc_gateway.domain.amortization import (
    amortize,
    calculate_emi,
    calculate_processing_fee,
    calculate_total_cost,
    calculate_total_interest,
    generate_amortization_schedule,
)
from fincalc_gateway.domain.exceptions import InvalidInputError
from fincalc_gateway.domain.models import LoanTerms


def test_calculate_emi_reference_home_loan():
    """10 lakh at 8.5% for 20 years"""
    emi = calculate_emi(1000000, 8.5, 20)

    r = 8.5 / 12 / 100
    factor = (1 + r) ** 240
    assert emi == pytest.approx(1000000 * r * factor / (factor - 1))
    assert emi == pytest.approx(8678.23, abs=0.05)


def test_calculate_emi_manual_verification_15_percent():
    """P=500000, r=15%/12, n=24"""
    assert calculate_emi(500000, 15, 2) == pytest.approx(24243.32, abs=0.01)


@pytest.mark.parametrize("principal, years", [(120000, 1), (1000000, 20), (333333, 7), (50000, 3)])
def test_calculate_emi_zero_interest(principal, years):
    """0% interest is a simple division, never NaN"""
    assert calculate_emi(principal, 0, years) == principal / (years * 12)


def test_calculate_emi_is_unrounded():
    emi = calculate_emi(333333, 7.77, 3)
    assert emi != round(emi, 2)


def test_calculate_emi_accepts_numeric_strings():
    assert calculate_emi("10,00,000", "8.5%", "20") == calculate_emi(1000000, 8.5, 20)


@pytest.mark.parametrize(
    "principal, rate, years, field",
    [
        (0, 10, 5, "principal"),
        (-1, 10, 5, "principal"),
        (100000, -1, 5, "interest_rate"),
        (100000, 100.5, 5, "interest_rate"),
        (100000, 10, 0, "tenure_years"),
        (100000, 10, -2, "tenure_years"),
        ("abc", 10, 5, "principal"),
        (float("nan"), 10, 5, "principal"),
        (100000, None, 5, "interest_rate"),
    ],
)
def test_calculate_emi_invalid_input(principal, rate, years, field):
    with pytest.raises(InvalidInputError) as exc_info:
        calculate_emi(principal, rate, years)
    assert exc_info.value.field == field


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        calculate_emi(100000, 10, 0)


def test_calculate_total_interest():
    emi = calculate_emi(1000000, 8.5, 20)
    assert calculate_total_interest(1000000, emi, 20) == emi * 240 - 1000000


def test_calculate_total_interest_clamps_negative(caplog):
    """An EMI that does not cover principal would report negative interest"""
    with caplog.at_level(logging.WARNING):
        interest = calculate_total_interest(100000, 1000, 1)

    assert interest == 0.0
    assert "clamped" in caplog.text


def test_calculate_processing_fee():
    assert calculate_processing_fee(1000000, 0.5) == 5000.0
    assert calculate_processing_fee(1000000, None) == 0.0
    assert calculate_processing_fee(1000000) == 0.0


def test_calculate_processing_fee_rejects_negative_rate():
    with pytest.raises(InvalidInputError):
        calculate_processing_fee(1000000, -1)


def test_calculate_total_cost_identity():
    assert calculate_total_cost(1000000, 1082776.2, 5000) == 1000000 + 1082776.2 + 5000


def test_calculate_total_cost_rejects_negative_interest():
    with pytest.raises(InvalidInputError):
        calculate_total_cost(1000000, -1, 0)


def test_amortize_invariant():
    terms = LoanTerms(principal=2500000, interest_rate=9.15, tenure_years=15, processing_fee_rate=0.35)
    result = amortize(terms)

    assert result.total_cost == result.principal + result.total_interest + result.processing_fee
    assert result.processing_fee == pytest.approx(8750.0)
    assert result.emi == calculate_emi(2500000, 9.15, 15)
    assert result.interest_clamped is False


def test_amortize_zero_rate_has_no_interest():
    result = amortize(LoanTerms(principal=120000, interest_rate=0, tenure_years=1))

    assert result.emi == 10000.0
    assert result.total_interest == 0.0
    assert result.total_cost == 120000.0


def test_amortize_is_idempotent():
    terms = LoanTerms(principal=750000, interest_rate=11.25, tenure_years=7)
    assert amortize(terms) == amortize(terms)


def test_schedule_zero_rate_single_year():
    rows = generate_amortization_schedule(120000, 0, 1)

    assert len(rows) == 1
    assert rows[0].year == 1
    assert rows[0].month == 12
    assert rows[0].principal_paid == pytest.approx(120000)
    assert rows[0].interest_paid == 0.0
    assert rows[0].closing_balance == pytest.approx(0.0, abs=1e-6)


def test_schedule_matches_closed_form_interest():
    rows = generate_amortization_schedule(1000000, 8.5, 20)
    emi = calculate_emi(1000000, 8.5, 20)

    assert len(rows) == 20
    assert [row.month for row in rows] == [12 * year for year in range(1, 21)]
    assert sum(row.interest_paid for row in rows) == pytest.approx(
        calculate_total_interest(1000000, emi, 20), abs=0.01
    )
    assert sum(row.principal_paid for row in rows) == pytest.approx(1000000, abs=0.01)
    assert rows[-1].closing_balance == pytest.approx(0.0, abs=0.01)


def test_schedule_interest_share_declines():
    """Reducing balance: each year pays less interest than the last"""
    rows = generate_amortization_schedule(500000, 12, 5)
    interest = [row.interest_paid for row in rows]
    assert interest == sorted(interest, reverse=True)


def test_schedule_partial_final_year():
    rows = generate_amortization_schedule(300000, 10, 1.5)

    assert [(row.year, row.month) for row in rows] == [(1, 12), (2, 18)]
    assert rows[-1].closing_balance == pytest.approx(0.0, abs=0.01)
