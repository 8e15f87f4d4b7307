"""Unit tests for loan comparison ranking and recommendations"""

import pytest
from dataclasses import replace
from fincalc_gateway.domain.comparison import compare_loans, evaluate_offer, rank_offers
from fincalc_gateway.domain.models import LoanOffer, LoanTerms
from fincalc_gateway.domain.offers import offer_from_listing


def _ids(evaluations):
    return [e.offer.offer_id for e in evaluations]


def test_compare_by_emi_is_ascending(sample_offers):
    comparison = compare_loans(sample_offers, "emi")

    emis = [e.emi for e in comparison.ranked]
    assert all(a <= b for a, b in zip(emis, emis[1:]))
    assert _ids(comparison.ranked) == ["delta", "beta", "alpha", "gamma"]


def test_compare_by_rate_is_stable(sample_offers):
    """beta and delta share 8.5%; beta was submitted first"""
    comparison = compare_loans(sample_offers, "interestRate")
    assert _ids(comparison.ranked) == ["beta", "delta", "alpha", "gamma"]


def test_compare_accepts_snake_case_keys(sample_offers):
    camel = compare_loans(sample_offers, "totalCost")
    snake = compare_loans(sample_offers, "total_cost")
    assert _ids(camel.ranked) == _ids(snake.ranked)


def test_compare_by_processing_fee(sample_offers):
    comparison = compare_loans(sample_offers, "processingFee")
    # only beta charges a fee
    assert _ids(comparison.ranked)[-1] == "beta"
    assert _ids(comparison.ranked)[:3] == ["alpha", "gamma", "delta"]


def test_compare_unknown_key_keeps_input_order(sample_offers):
    comparison = compare_loans(sample_offers, "approvalTime")
    assert _ids(comparison.ranked) == ["alpha", "beta", "gamma", "delta"]


def test_recommendations_ignore_display_sort(sample_offers):
    for sort_key in ("emi", "interestRate", "totalCost", "bogus"):
        comparison = compare_loans(sample_offers, sort_key)
        assert comparison.best_emi.offer.offer_id == "delta"
        assert comparison.lowest_rate.offer.offer_id == "beta"
        # beta and gamma share the highest max amount; delta has none
        assert comparison.highest_loan.offer.offer_id == "beta"


def test_equal_emi_offers_keep_relative_order():
    terms = LoanTerms(principal=500000, interest_rate=10, tenure_years=5)
    offers = [
        LoanOffer(offer_id="second", lender_name="B", terms=terms),
        LoanOffer(offer_id="first", lender_name="A", terms=terms),
        LoanOffer(offer_id="cheap", lender_name="C", terms=replace(terms, interest_rate=9)),
    ]

    comparison = compare_loans(offers, "emi")

    assert _ids(comparison.ranked) == ["cheap", "second", "first"]


def test_compare_does_not_mutate_input(sample_offers):
    snapshot = list(sample_offers)
    compare_loans(sample_offers, "emi")
    assert sample_offers == snapshot


def test_invalid_offer_is_rejected_not_fatal(sample_offers):
    broken = LoanOffer(
        offer_id="broken",
        lender_name="Broken Bank",
        terms=LoanTerms(principal=0, interest_rate=9, tenure_years=10),
    )

    comparison = compare_loans([broken] + sample_offers, "emi")

    assert "broken" not in _ids(comparison.ranked)
    assert len(comparison.ranked) == 4
    assert comparison.rejected[0][0] == "broken"
    assert "principal" in comparison.rejected[0][1]


def test_compare_empty():
    comparison = compare_loans([], "emi")

    assert comparison.ranked == []
    assert comparison.best_emi is None
    assert comparison.lowest_rate is None
    assert comparison.highest_loan is None


def test_evaluate_offer_with_string_terms():
    offer = LoanOffer(
        offer_id="listing-0",
        lender_name="Listing Bank",
        terms=LoanTerms(principal="10,00,000", interest_rate="8.5", tenure_years="20"),
    )

    evaluation = evaluate_offer(offer)

    assert evaluation.interest_rate == 8.5
    assert evaluation.emi == pytest.approx(8678.23, abs=0.05)


def test_rank_offers_is_repeatable(sample_offers):
    evaluations = [evaluate_offer(offer) for offer in sample_offers]
    assert rank_offers(evaluations, "emi") == rank_offers(evaluations, "emi")


def test_listing_without_rate_is_rejected_not_free():
    """A listing with no interest rate must not rank as a 0% loan"""
    offers = [
        offer_from_listing({"bankName": "Priced", "minLoanAmount": 500000, "interestRate": 8.5, "maxTenure": 20}, 0),
        offer_from_listing({"bankName": "Unpriced", "minLoanAmount": 500000, "maxTenure": 20}, 1),
    ]

    comparison = compare_loans(offers, "emi")

    assert _ids(comparison.ranked) == ["Priced-0"]
    assert comparison.best_emi.offer.offer_id == "Priced-0"
    assert comparison.lowest_rate.offer.offer_id == "Priced-0"
    assert comparison.rejected[0][0] == "Unpriced-1"
    assert "interest_rate" in comparison.rejected[0][1]
