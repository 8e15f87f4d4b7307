"""Amortization engine - EMI, interest, fees and total cost of a loan"""

import logging
from typing import Any, List

from fincalc_gateway.domain.exceptions import InvalidInputError
from fincalc_gateway.domain.models import AmortizationResult, LoanTerms, ScheduleRow
from fincalc_gateway.domain.parsing import parse_number

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def _validate_principal(principal: Any) -> float:
    value = parse_number(principal, "principal")
    if value <= 0:
        raise InvalidInputError("principal must be greater than 0", field="principal")
    return value


def _validate_rate(rate: Any, field: str = "interest_rate") -> float:
    value = parse_number(rate, field)
    if value < 0 or value > 100:
        raise InvalidInputError(f"{field} must be between 0 and 100", field=field)
    return value


def _validate_tenure(tenure_years: Any) -> float:
    value = parse_number(tenure_years, "tenure_years")
    if value <= 0:
        raise InvalidInputError("tenure_years must be greater than 0", field="tenure_years")
    return value


def monthly_rate(annual_rate_percent: float) -> float:
    """Nominal annual percentage -> monthly fraction"""
    return annual_rate_percent / MONTHS_PER_YEAR / 100


def calculate_emi(principal: Any, annual_rate_percent: Any, tenure_years: Any) -> float:
    """
    Equated monthly installment on a reducing balance.

    EMI = P × r × (1+r)^n / ((1+r)^n - 1)

    Where r = annual_rate_percent / 12 / 100 and n = tenure_years × 12.
    A zero rate degenerates to P / n. The value is returned unrounded;
    rounding is left to the formatter.

    Raises:
        InvalidInputError: principal <= 0, rate outside 0-100, tenure <= 0
    """
    principal = _validate_principal(principal)
    rate = _validate_rate(annual_rate_percent)
    tenure = _validate_tenure(tenure_years)

    r = monthly_rate(rate)
    n = tenure * MONTHS_PER_YEAR

    if r == 0:
        return principal / n

    factor = (1 + r) ** n
    return principal * r * factor / (factor - 1)


def _total_interest(principal: float, emi: float, tenure: float) -> tuple[float, bool]:
    interest = emi * (tenure * MONTHS_PER_YEAR) - principal
    if interest < 0:
        logger.warning(
            "Negative total interest clamped to zero",
            extra={
                "step": "total_interest_clamp",
                "principal": principal,
                "emi": emi,
                "tenure_years": tenure,
                "computed_interest": interest,
            },
        )
        return 0.0, True
    return interest, False


def calculate_total_interest(principal: Any, emi: Any, tenure_years: Any) -> float:
    """
    Interest paid over the full tenure: emi × tenure_years × 12 - principal.

    A negative result (floating-point residue on zero-rate loans, or an
    EMI that does not cover the principal) is clamped to zero and logged.
    """
    principal = _validate_principal(principal)
    emi = parse_number(emi, "emi")
    if emi < 0:
        raise InvalidInputError("emi cannot be negative", field="emi")
    tenure = _validate_tenure(tenure_years)

    interest, _ = _total_interest(principal, emi, tenure)
    return interest


def calculate_processing_fee(principal: Any, fee_rate_percent: Any = None) -> float:
    """One-time fee as a percentage of principal; zero when no rate is given"""
    principal = _validate_principal(principal)
    if parse_number(fee_rate_percent, "processing_fee_rate", required=False) is None:
        return 0.0
    return principal * _validate_rate(fee_rate_percent, "processing_fee_rate") / 100


def calculate_total_cost(principal: Any, total_interest: Any, processing_fee: Any) -> float:
    """principal + total_interest + processing_fee"""
    principal = _validate_principal(principal)
    total_interest = parse_number(total_interest, "total_interest")
    processing_fee = parse_number(processing_fee, "processing_fee")
    if total_interest < 0:
        raise InvalidInputError("total_interest cannot be negative", field="total_interest")
    if processing_fee < 0:
        raise InvalidInputError("processing_fee cannot be negative", field="processing_fee")
    return principal + total_interest + processing_fee


def amortize(terms: LoanTerms) -> AmortizationResult:
    """
    Main entry point: derive every loan figure from a single set of terms.

    The invariant total_cost == principal + total_interest + processing_fee
    holds exactly since all three are computed once and summed once.
    """
    principal = _validate_principal(terms.principal)
    tenure = _validate_tenure(terms.tenure_years)

    emi = calculate_emi(principal, terms.interest_rate, tenure)
    total_interest, clamped = _total_interest(principal, emi, tenure)
    processing_fee = calculate_processing_fee(principal, terms.processing_fee_rate)

    return AmortizationResult(
        principal=principal,
        emi=emi,
        total_interest=total_interest,
        processing_fee=processing_fee,
        total_cost=calculate_total_cost(principal, total_interest, processing_fee),
        interest_clamped=clamped,
    )


def generate_amortization_schedule(
    principal: Any,
    annual_rate_percent: Any,
    tenure_years: Any,
) -> List[ScheduleRow]:
    """
    Walk the loan month by month and snapshot each completed year.

    Each month: interest = balance × r, principal part = EMI - interest.
    Rows carry the principal and interest paid during that year; the
    closing balance is floored at zero. A tenure that is not a whole
    number of years gets a final partial-year row.

    Example:
        120000 at 0% over 1 year -> [ScheduleRow(1, 12, 10000, 120000, 0, 0)]
    """
    principal = _validate_principal(principal)
    rate = _validate_rate(annual_rate_percent)
    tenure = _validate_tenure(tenure_years)

    emi = calculate_emi(principal, rate, tenure)
    r = monthly_rate(rate)
    months = max(1, round(tenure * MONTHS_PER_YEAR))

    balance = principal
    year_principal = 0.0
    year_interest = 0.0
    rows = []

    for month in range(1, months + 1):
        interest = balance * r
        principal_part = emi - interest
        balance -= principal_part
        year_principal += principal_part
        year_interest += interest

        if month % MONTHS_PER_YEAR == 0 or month == months:
            rows.append(
                ScheduleRow(
                    year=(month + MONTHS_PER_YEAR - 1) // MONTHS_PER_YEAR,
                    month=month,
                    emi=emi,
                    principal_paid=year_principal,
                    interest_paid=year_interest,
                    closing_balance=max(balance, 0.0),
                )
            )
            year_principal = 0.0
            year_interest = 0.0

    return rows
