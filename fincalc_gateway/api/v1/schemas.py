"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field, StrictFloat, StrictInt
from typing import List, Optional, Union

# Numbers or numeric strings; coerced explicitly by domain.parsing.
# Strict number types keep JSON booleans from turning into 1.0 / 0.0.
Numeric = Union[StrictFloat, StrictInt, str]


class EMIRequest(BaseModel):
    """Request body for POST /v1/emi and /v1/emi/schedule"""

    principal: Numeric = Field(..., description="Loan amount (₹)")
    interest_rate: Numeric = Field(..., description="Nominal annual rate (%)")
    tenure_years: Numeric = Field(..., description="Loan tenure in years")
    processing_fee_rate: Optional[Numeric] = Field(None, description="Processing fee (% of principal)")


class EMIResponse(BaseModel):
    """Response for POST /v1/emi"""

    emi: float
    total_interest: float
    processing_fee: float
    total_cost: float
    interest_clamped: bool = False
    emi_display: str
    total_interest_display: str
    total_cost_display: str


class ScheduleRowSchema(BaseModel):
    """Year-end row of an amortization schedule"""

    year: int
    month: int
    emi: float
    principal_paid: float
    interest_paid: float
    closing_balance: float


class ScheduleResponse(BaseModel):
    """Response for POST /v1/emi/schedule"""

    emi: float
    rows: List[ScheduleRowSchema]


class SIPRequest(BaseModel):
    """Request body for POST /v1/sip"""

    monthly_amount: Numeric = Field(..., description="Monthly contribution (₹)")
    annual_rate: Numeric = Field(..., description="Expected annual return (%)")
    years: Numeric = Field(..., description="Investment horizon in years")


class SIPYearSchema(BaseModel):
    year: int
    month: int
    invested: float
    value: float


class SIPResponse(BaseModel):
    """Response for POST /v1/sip"""

    total_investment: float
    estimated_returns: float
    total_value: float
    total_investment_display: str
    estimated_returns_display: str
    total_value_display: str
    growth: List[SIPYearSchema]


class OfferSchema(BaseModel):
    """One lender offer submitted for comparison"""

    offer_id: Optional[str] = None
    lender_name: str = Field(..., min_length=1)
    principal: Numeric
    interest_rate: Numeric
    tenure_years: Numeric
    processing_fee_rate: Optional[Numeric] = None
    bank_type: Optional[str] = None
    min_credit_score: Optional[Numeric] = None
    max_loan_amount: Optional[Numeric] = None
    min_loan_amount: Optional[Numeric] = None
    max_interest_rate: Optional[Numeric] = None
    min_age: Optional[Numeric] = None
    max_age: Optional[Numeric] = None


class CompareRequest(BaseModel):
    """Request body for POST /v1/compare"""

    offers: List[OfferSchema]
    sort_by: Optional[str] = None


class OfferCardSchema(BaseModel):
    interest_rate: str
    loan_amount: str
    age: str
    tenure: str
    credit_score: str


class ComparedOfferSchema(BaseModel):
    """Offer with derived figures and display strings"""

    offer_id: str
    lender_name: str
    bank_type: Optional[str] = None
    principal: float
    interest_rate: float
    tenure_years: float
    emi: float
    total_interest: float
    processing_fee: float
    total_cost: float
    emi_display: str
    total_cost_display: str
    card: OfferCardSchema


class RejectedOfferSchema(BaseModel):
    offer_id: str
    reason: str


class CompareResponse(BaseModel):
    """Response for comparison endpoints"""

    sort_by: str
    offers: List[ComparedOfferSchema]
    best_emi: Optional[str] = None
    lowest_rate: Optional[str] = None
    highest_loan: Optional[str] = None
    rejected: List[RejectedOfferSchema] = []


class LoanCategorySchema(BaseModel):
    key: str
    name: str
    description: str
