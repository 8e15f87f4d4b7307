"""POST /v1/emi, /v1/emi/schedule, /v1/sip - loan and SIP calculators"""

import time
from fastapi import APIRouter, Request

from fincalc_gateway.api.v1.schemas import (
    EMIRequest,
    EMIResponse,
    ScheduleResponse,
    ScheduleRowSchema,
    SIPRequest,
    SIPResponse,
    SIPYearSchema,
)
from fincalc_gateway.api.dependencies import get_request_id
from fincalc_gateway.api.errors import invalid_input
from fincalc_gateway.domain.amortization import amortize, generate_amortization_schedule
from fincalc_gateway.domain.sip import calculate_sip_returns, project_sip_growth
from fincalc_gateway.domain.formatting import format_currency
from fincalc_gateway.domain.models import LoanTerms
from fincalc_gateway.domain.exceptions import InvalidInputError
from fincalc_gateway.infrastructure.observability.metrics import record_calculation, record_data_quality
from fincalc_gateway.infrastructure.observability.logging import log_calculation

router = APIRouter()


@router.post("/emi", response_model=EMIResponse)
def calculate_emi_endpoint(request_body: EMIRequest, request: Request):
    """EMI, total interest, processing fee and total cost for one loan"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = amortize(
            LoanTerms(
                principal=request_body.principal,
                interest_rate=request_body.interest_rate,
                tenure_years=request_body.tenure_years,
                processing_fee_rate=request_body.processing_fee_rate,
            )
        )
    except InvalidInputError as e:
        raise invalid_input("emi", e, request_id)

    if result.interest_clamped:
        record_data_quality("interest_clamp")
    record_calculation("emi")
    log_calculation(request_id, "emi", (time.time() - start_time) * 1000, emi=result.emi)

    return EMIResponse(
        emi=result.emi,
        total_interest=result.total_interest,
        processing_fee=result.processing_fee,
        total_cost=result.total_cost,
        interest_clamped=result.interest_clamped,
        emi_display=format_currency(result.emi),
        total_interest_display=format_currency(result.total_interest),
        total_cost_display=format_currency(result.total_cost),
    )


@router.post("/emi/schedule", response_model=ScheduleResponse)
def amortization_schedule_endpoint(request_body: EMIRequest, request: Request):
    """Year-by-year principal/interest split and closing balance"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        rows = generate_amortization_schedule(
            request_body.principal,
            request_body.interest_rate,
            request_body.tenure_years,
        )
    except InvalidInputError as e:
        raise invalid_input("schedule", e, request_id)

    record_calculation("schedule")
    log_calculation(request_id, "schedule", (time.time() - start_time) * 1000, rows=len(rows))

    return ScheduleResponse(
        emi=rows[0].emi,
        rows=[
            ScheduleRowSchema(
                year=row.year,
                month=row.month,
                emi=row.emi,
                principal_paid=row.principal_paid,
                interest_paid=row.interest_paid,
                closing_balance=row.closing_balance,
            )
            for row in rows
        ],
    )


@router.post("/sip", response_model=SIPResponse)
def calculate_sip_endpoint(request_body: SIPRequest, request: Request):
    """SIP totals plus the yearly growth curve"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = calculate_sip_returns(
            request_body.monthly_amount, request_body.annual_rate, request_body.years
        )
        growth = project_sip_growth(
            request_body.monthly_amount, request_body.annual_rate, request_body.years
        )
    except InvalidInputError as e:
        raise invalid_input("sip", e, request_id)

    if result.returns_clamped:
        record_data_quality("returns_clamp")
    record_calculation("sip")
    log_calculation(request_id, "sip", (time.time() - start_time) * 1000, total_value=result.total_value)

    return SIPResponse(
        total_investment=result.total_investment,
        estimated_returns=result.estimated_returns,
        total_value=result.total_value,
        total_investment_display=format_currency(result.total_investment),
        estimated_returns_display=format_currency(result.estimated_returns),
        total_value_display=format_currency(result.total_value),
        growth=[
            SIPYearSchema(year=row.year, month=row.month, invested=row.invested, value=row.value)
            for row in growth
        ],
    )
