"""Loan comparator - rank lender offers and pick recommendations"""

import logging
from typing import Iterable, List, Optional

from fincalc_gateway.domain.amortization import amortize
from fincalc_gateway.domain.exceptions import InvalidInputError
from fincalc_gateway.domain.models import LoanComparison, LoanOffer, OfferEvaluation

logger = logging.getLogger(__name__)

# display key -> OfferEvaluation attribute
SORT_KEYS = {
    "emi": "emi",
    "interestRate": "interest_rate",
    "interest_rate": "interest_rate",
    "totalCost": "total_cost",
    "total_cost": "total_cost",
    "processingFee": "processing_fee",
    "processing_fee": "processing_fee",
}


def evaluate_offer(offer: LoanOffer) -> OfferEvaluation:
    """Attach EMI, interest, fee and total cost to an offer"""
    return OfferEvaluation(offer=offer, result=amortize(offer.terms))


def rank_offers(evaluations: Iterable[OfferEvaluation], sort_key: str) -> List[OfferEvaluation]:
    """
    Stable ascending sort by the named field.

    Unknown keys keep the input order; ranking is a display convenience.
    """
    attribute = SORT_KEYS.get(sort_key)
    if attribute is None:
        return list(evaluations)
    return sorted(evaluations, key=lambda e: getattr(e, attribute))


def _max_amount(evaluation: OfferEvaluation) -> float:
    return evaluation.offer.max_loan_amount or 0.0


def compare_loans(offers: Iterable[LoanOffer], sort_key: str = "emi") -> LoanComparison:
    """
    Main entry point: evaluate, rank and recommend.

    Recommendations are computed from the full evaluated set, independently
    of ``sort_key``. min()/max() return the first extreme element, so ties
    go to the earlier offer. Offers with invalid terms are left out of the
    ranking and listed in ``rejected``; caller objects are never mutated.
    """
    evaluations = []
    rejected = []
    for offer in offers:
        try:
            evaluations.append(evaluate_offer(offer))
        except InvalidInputError as e:
            logger.warning(
                f"Offer excluded from comparison: {e}",
                extra={"step": "offer_rejected", "offer_id": offer.offer_id, "field": e.field},
            )
            rejected.append((offer.offer_id, str(e)))

    best_emi: Optional[OfferEvaluation] = None
    lowest_rate: Optional[OfferEvaluation] = None
    highest_loan: Optional[OfferEvaluation] = None
    if evaluations:
        best_emi = min(evaluations, key=lambda e: e.emi)
        lowest_rate = min(evaluations, key=lambda e: e.interest_rate)
        highest_loan = max(evaluations, key=_max_amount)

    return LoanComparison(
        sort_key=sort_key,
        ranked=rank_offers(evaluations, sort_key),
        best_emi=best_emi,
        lowest_rate=lowest_rate,
        highest_loan=highest_loan,
        rejected=rejected,
    )
