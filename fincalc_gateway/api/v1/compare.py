"""Loan comparison endpoints and the loan category catalogue"""

import time
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Request

from fincalc_gateway.api.v1.schemas import (
    CompareRequest,
    CompareResponse,
    ComparedOfferSchema,
    LoanCategorySchema,
    OfferCardSchema,
    OfferSchema,
    RejectedOfferSchema,
)
from fincalc_gateway.api.dependencies import get_loans_client, get_request_id
from fincalc_gateway.api.errors import invalid_input
from fincalc_gateway.config import settings
from fincalc_gateway.domain.comparison import compare_loans
from fincalc_gateway.domain.exceptions import InvalidInputError, LoansAPIError
from fincalc_gateway.domain.formatting import format_currency
from fincalc_gateway.domain.models import LoanComparison, LoanOffer, LoanTerms, OfferEvaluation
from fincalc_gateway.domain.offers import LOAN_CATEGORIES, build_offer_card, get_category
from fincalc_gateway.domain.parsing import parse_int, parse_number
from fincalc_gateway.infrastructure.clients.loans import LoansClient
from fincalc_gateway.infrastructure.observability.metrics import (
    compared_offers_histogram,
    loans_fetch_failures_counter,
    record_calculation,
    record_data_quality,
)
from fincalc_gateway.infrastructure.observability.logging import log_calculation

router = APIRouter()


def _to_offer(schema: OfferSchema, index: int) -> LoanOffer:
    return LoanOffer(
        offer_id=schema.offer_id or f"{schema.lender_name}-{index}",
        lender_name=schema.lender_name,
        terms=LoanTerms(
            principal=schema.principal,
            interest_rate=schema.interest_rate,
            tenure_years=schema.tenure_years,
            processing_fee_rate=schema.processing_fee_rate,
        ),
        bank_type=schema.bank_type,
        min_credit_score=parse_int(schema.min_credit_score, "min_credit_score", required=False),
        max_loan_amount=parse_number(schema.max_loan_amount, "max_loan_amount", required=False),
        min_loan_amount=parse_number(schema.min_loan_amount, "min_loan_amount", required=False),
        max_interest_rate=parse_number(schema.max_interest_rate, "max_interest_rate", required=False),
        min_age=parse_number(schema.min_age, "min_age", required=False),
        max_age=parse_number(schema.max_age, "max_age", required=False),
    )


def _to_row(evaluation: OfferEvaluation) -> ComparedOfferSchema:
    offer = evaluation.offer
    result = evaluation.result
    card = build_offer_card(offer)
    return ComparedOfferSchema(
        offer_id=offer.offer_id,
        lender_name=offer.lender_name,
        bank_type=offer.bank_type,
        principal=result.principal,
        interest_rate=evaluation.interest_rate,
        tenure_years=parse_number(offer.terms.tenure_years, "tenure_years"),
        emi=result.emi,
        total_interest=result.total_interest,
        processing_fee=result.processing_fee,
        total_cost=result.total_cost,
        emi_display=format_currency(result.emi),
        total_cost_display=format_currency(result.total_cost),
        card=OfferCardSchema(
            interest_rate=card.interest_rate,
            loan_amount=card.loan_amount,
            age=card.age,
            tenure=card.tenure,
            credit_score=card.credit_score,
        ),
    )


def _offer_id(evaluation: Optional[OfferEvaluation]) -> Optional[str]:
    return evaluation.offer.offer_id if evaluation else None


def _to_response(comparison: LoanComparison) -> CompareResponse:
    for evaluation in comparison.ranked:
        if evaluation.result.interest_clamped:
            record_data_quality("interest_clamp")

    return CompareResponse(
        sort_by=comparison.sort_key,
        offers=[_to_row(evaluation) for evaluation in comparison.ranked],
        best_emi=_offer_id(comparison.best_emi),
        lowest_rate=_offer_id(comparison.lowest_rate),
        highest_loan=_offer_id(comparison.highest_loan),
        rejected=[
            RejectedOfferSchema(offer_id=offer_id, reason=reason)
            for offer_id, reason in comparison.rejected
        ],
    )


@router.get("/loan-categories", response_model=List[LoanCategorySchema])
def list_loan_categories():
    """Loan product families available for comparison"""
    return [
        LoanCategorySchema(key=c.key, name=c.name, description=c.description)
        for c in LOAN_CATEGORIES
    ]


@router.post("/compare", response_model=CompareResponse)
def compare_offers(request_body: CompareRequest, request: Request):
    """
    Rank the submitted offers and pick recommendations.

    Between min_compare_offers and max_compare_offers offers are accepted.
    Offers with invalid terms come back under ``rejected``.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    sort_by = request_body.sort_by or settings.default_sort_key

    try:
        count = len(request_body.offers)
        if count < settings.min_compare_offers or count > settings.max_compare_offers:
            raise InvalidInputError(
                f"between {settings.min_compare_offers} and {settings.max_compare_offers} "
                f"offers can be compared, got {count}",
                field="offers",
            )
        offers = [_to_offer(schema, index) for index, schema in enumerate(request_body.offers)]
    except InvalidInputError as e:
        raise invalid_input("compare", e, request_id)

    comparison = compare_loans(offers, sort_by)

    compared_offers_histogram.observe(len(offers))
    record_calculation("compare")
    log_calculation(
        request_id,
        "compare",
        (time.time() - start_time) * 1000,
        offers=len(offers),
        rejected=len(comparison.rejected),
        sort_by=sort_by,
    )

    return _to_response(comparison)


@router.get("/loans/{loan_type}/compare", response_model=CompareResponse)
async def compare_listed_loans(
    loan_type: str,
    request: Request,
    principal: Optional[str] = None,
    tenure_years: Optional[str] = None,
    sort_by: Optional[str] = None,
    loans_client: LoansClient = Depends(get_loans_client),
):
    """
    Fetch every lender offer for a category and compare them.

    Flow:
    1. Validate the category and the optional principal / tenure overrides
    2. Fetch and normalize listing records from the loans API
    3. Rank and recommend

    The min/max offer counts of POST /v1/compare do not apply: every
    fetched offer is compared, and an empty or single-offer category
    still gets a (trivial) ranking.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    sort_by = sort_by or settings.default_sort_key

    if get_category(loan_type) is None:
        raise HTTPException(status_code=404, detail=f"Unknown loan category: {loan_type}")

    try:
        requested_principal = parse_number(principal, "principal", required=False)
        requested_tenure = parse_number(tenure_years, "tenure_years", required=False)
    except InvalidInputError as e:
        raise invalid_input("compare", e, request_id)

    try:
        offers = await loans_client.get_offers(
            loan_type, principal=requested_principal, tenure_years=requested_tenure
        )
        comparison = compare_loans(offers, sort_by)

    except LoansAPIError as e:
        loans_fetch_failures_counter.inc()
        logging.error(f"Loans API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Loans listing service unavailable")

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    compared_offers_histogram.observe(len(offers))
    record_calculation("compare")
    log_calculation(
        request_id,
        "compare",
        (time.time() - start_time) * 1000,
        loan_type=loan_type,
        offers=len(offers),
        rejected=len(comparison.rejected),
        sort_by=sort_by,
    )

    return _to_response(comparison)
