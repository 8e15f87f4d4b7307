"""Loan categories, listing normalization and per-lender display cards"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from fincalc_gateway.domain.exceptions import InvalidInputError
from fincalc_gateway.domain.formatting import NOT_AVAILABLE, format_indian_abbreviated, format_range
from fincalc_gateway.domain.models import LoanCategory, LoanOffer, LoanTerms
from fincalc_gateway.domain.parsing import parse_int, parse_number, parse_range

LOAN_CATEGORIES = (
    LoanCategory("HOME_LOAN", "Home Loan", "Buy, build, or renovate your home"),
    LoanCategory("LOAN_AGAINST_PROPERTY", "Loan Against Property", "Get funds using your property"),
    LoanCategory("BALANCE_TRANSFER_TOP_UP", "Balance Transfer Top-Up", "Transfer loan & avail extra funds"),
    LoanCategory("PLOT_LOAN", "Plot Loan", "Buy land for construction"),
    LoanCategory("CONSTRUCTION_LOAN", "Construction Loan", "Fund construction projects"),
)


def get_category(key: str) -> Optional[LoanCategory]:
    for category in LOAN_CATEGORIES:
        if category.key == key:
            return category
    return None


@dataclass(frozen=True)
class OfferCard:
    """Display strings for one lender"""

    interest_rate: str
    loan_amount: str
    age: str
    tenure: str
    credit_score: str


def offer_from_listing(
    payload: Mapping[str, Any],
    index: int,
    principal: Any = None,
    tenure_years: Any = None,
    default_tenure_years: float = 20,
) -> LoanOffer:
    """
    Normalize one loans-listing record into a LoanOffer.

    Principal: requested principal, else minLoanAmount.
    Rate: lower end of the interest-rate band; left unset when the listing
    has none, so the offer is rejected at comparison time.
    Tenure: requested tenure, else maxTenure, else default_tenure_years.

    Raises:
        InvalidInputError: bankName missing, or a field is not numeric
    """
    lender = payload.get("bankName")
    if not lender:
        raise InvalidInputError("bankName is required", field="bankName")

    min_amount, max_amount = parse_range(payload, "loanAmount")
    min_rate, max_rate = parse_range(payload, "interestRate")
    min_tenure, max_tenure = parse_range(payload, "tenure")
    min_age, max_age = parse_range(payload, "age")

    requested_principal = parse_number(principal, "principal", required=False)
    requested_tenure = parse_number(tenure_years, "tenure_years", required=False)

    terms = LoanTerms(
        principal=requested_principal if requested_principal is not None else (min_amount or 0.0),
        interest_rate=min_rate,
        tenure_years=requested_tenure or max_tenure or default_tenure_years,
        processing_fee_rate=parse_number(payload.get("processingFee"), "processingFee", required=False),
    )

    return LoanOffer(
        offer_id=f"{lender}-{index}",
        lender_name=lender,
        terms=terms,
        bank_type=payload.get("bankType"),
        min_credit_score=parse_int(payload.get("minCibilScore"), "minCibilScore", required=False),
        max_loan_amount=max_amount,
        min_loan_amount=min_amount,
        max_interest_rate=max_rate,
        min_age=min_age,
        max_age=max_age,
        min_tenure_years=min_tenure,
        max_tenure_years=max_tenure,
        min_income_required=parse_number(payload.get("minIncomeRequired"), "minIncomeRequired", required=False),
    )


def _abbreviated(amount: Optional[float]) -> Optional[str]:
    return None if amount is None else format_indian_abbreviated(amount)


def build_offer_card(offer: LoanOffer) -> OfferCard:
    """Interest-rate, amount, age and tenure bands as shown on a lender card"""
    if offer.min_loan_amount:
        loan_amount = format_range(
            _abbreviated(offer.min_loan_amount), _abbreviated(offer.max_loan_amount)
        )
    else:
        loan_amount = format_range(_abbreviated(offer.max_loan_amount))

    if offer.max_tenure_years is not None:
        tenure = format_range(offer.max_tenure_years, suffix=" yrs")
    else:
        tenure = format_range(offer.terms.tenure_years, suffix=" yrs")

    return OfferCard(
        interest_rate=format_range(offer.terms.interest_rate, offer.max_interest_rate, "%", "start"),
        loan_amount=loan_amount,
        age=format_range(offer.min_age, offer.max_age, " yrs"),
        tenure=tenure,
        credit_score=NOT_AVAILABLE if offer.min_credit_score is None else f"{offer.min_credit_score}+",
    )
