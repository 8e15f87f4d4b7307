"""Domain models - pure Python dataclasses for loans, SIPs and comparisons"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from fincalc_gateway.domain.parsing import parse_number


@dataclass(frozen=True)
class LoanTerms:
    """Principal, nominal annual rate (%) and tenure in years"""

    principal: float
    interest_rate: Optional[float]
    tenure_years: float
    processing_fee_rate: Optional[float] = None


@dataclass(frozen=True)
class AmortizationResult:
    """Derived loan figures. total_cost == principal + total_interest + processing_fee"""

    principal: float
    emi: float
    total_interest: float
    processing_fee: float
    total_cost: float
    interest_clamped: bool = False


@dataclass(frozen=True)
class ScheduleRow:
    """Year-end snapshot of a month-by-month amortization walk"""

    year: int
    month: int
    emi: float
    principal_paid: float
    interest_paid: float
    closing_balance: float


@dataclass(frozen=True)
class SipParameters:
    """Recurring monthly contribution at an expected annual return"""

    monthly_amount: float
    annual_rate: float
    duration_months: int


@dataclass(frozen=True)
class SipResult:
    """total_value == total_investment + estimated_returns"""

    total_investment: float
    estimated_returns: float
    total_value: float
    returns_clamped: bool = False


@dataclass(frozen=True)
class SipYearRow:
    """SIP value at a year boundary (or the final month)"""

    year: int
    month: int
    invested: float
    value: float


@dataclass(frozen=True)
class LoanCategory:
    """Loan product family offered for comparison"""

    key: str
    name: str
    description: str


@dataclass(frozen=True)
class LoanOffer:
    """A lender's offer: loan terms plus eligibility metadata"""

    offer_id: str
    lender_name: str
    terms: LoanTerms
    bank_type: Optional[str] = None
    min_credit_score: Optional[int] = None
    max_loan_amount: Optional[float] = None
    min_loan_amount: Optional[float] = None
    max_interest_rate: Optional[float] = None
    min_age: Optional[float] = None
    max_age: Optional[float] = None
    min_tenure_years: Optional[float] = None
    max_tenure_years: Optional[float] = None
    min_income_required: Optional[float] = None


@dataclass(frozen=True)
class OfferEvaluation:
    """An offer together with its derived amortization figures"""

    offer: LoanOffer
    result: AmortizationResult

    @property
    def emi(self) -> float:
        return self.result.emi

    @property
    def interest_rate(self) -> float:
        return parse_number(self.offer.terms.interest_rate, "interest_rate")

    @property
    def total_cost(self) -> float:
        return self.result.total_cost

    @property
    def processing_fee(self) -> float:
        return self.result.processing_fee


@dataclass
class LoanComparison:
    """Output of a comparison: ranked view plus independent recommendations"""

    sort_key: str
    ranked: List[OfferEvaluation]
    best_emi: Optional[OfferEvaluation] = None
    lowest_rate: Optional[OfferEvaluation] = None
    highest_loan: Optional[OfferEvaluation] = None
    rejected: List[Tuple[str, str]] = field(default_factory=list)
