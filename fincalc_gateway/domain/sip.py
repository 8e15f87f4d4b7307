"""SIP projector - future value of a fixed monthly contribution"""

import logging
from typing import Any, List

from fincalc_gateway.domain.amortization import MONTHS_PER_YEAR, monthly_rate
from fincalc_gateway.domain.exceptions import InvalidInputError
from fincalc_gateway.domain.models import SipParameters, SipResult, SipYearRow
from fincalc_gateway.domain.parsing import parse_number

logger = logging.getLogger(__name__)


def _validate(monthly_amount: Any, annual_rate_percent: Any, months: Any) -> tuple[float, float, float]:
    amount = parse_number(monthly_amount, "monthly_amount")
    if amount <= 0:
        raise InvalidInputError("monthly_amount must be greater than 0", field="monthly_amount")

    rate = parse_number(annual_rate_percent, "annual_rate")
    if rate < 0 or rate > 100:
        raise InvalidInputError("annual_rate must be between 0 and 100", field="annual_rate")

    if months <= 0:
        raise InvalidInputError("duration must be greater than 0", field="duration")

    return amount, rate, months


def _future_value(amount: float, r: float, n: float) -> float:
    """Annuity-due: each contribution compounds for the month it is paid in"""
    if r == 0:
        return amount * n
    return amount * (((1 + r) ** n - 1) / r) * (1 + r)


def _sip_result(amount: float, rate: float, n: float) -> SipResult:
    total_value = _future_value(amount, monthly_rate(rate), n)
    total_investment = amount * n
    estimated_returns = total_value - total_investment

    clamped = False
    if estimated_returns < 0:
        logger.warning(
            "Negative SIP returns clamped to zero",
            extra={
                "step": "sip_returns_clamp",
                "monthly_amount": amount,
                "annual_rate": rate,
                "months": n,
                "computed_returns": estimated_returns,
            },
        )
        estimated_returns = 0.0
        total_value = total_investment
        clamped = True

    return SipResult(
        total_investment=total_investment,
        estimated_returns=estimated_returns,
        total_value=total_value,
        returns_clamped=clamped,
    )


def calculate_sip_returns(monthly_amount: Any, annual_rate_percent: Any, years: Any) -> SipResult:
    """
    Project a SIP over ``years`` of monthly contributions.

    FV = M × ((1+r)^n - 1) / r × (1+r), with r = annual_rate / 12 / 100
    and n = years × 12. A zero rate yields FV = M × n and no returns.

    Raises:
        InvalidInputError: amount <= 0, rate outside 0-100, years <= 0
    """
    years = parse_number(years, "years")
    amount, rate, n = _validate(monthly_amount, annual_rate_percent, years * MONTHS_PER_YEAR)
    return _sip_result(amount, rate, n)


def project_sip(params: SipParameters) -> SipResult:
    """Evaluate SipParameters, whose duration is expressed in months"""
    months = parse_number(params.duration_months, "duration_months")
    amount, rate, n = _validate(params.monthly_amount, params.annual_rate, months)
    return _sip_result(amount, rate, n)


def project_sip_growth(monthly_amount: Any, annual_rate_percent: Any, years: Any) -> List[SipYearRow]:
    """
    Month-by-month SIP growth, reported at each year end and the final month.

    value = (value + contribution) × (1 + r), the same annuity-due convention
    as calculate_sip_returns, so the last row matches its total_value.
    """
    years = parse_number(years, "years")
    amount, rate, n = _validate(monthly_amount, annual_rate_percent, years * MONTHS_PER_YEAR)
    r = monthly_rate(rate)
    months = max(1, round(n))

    value = 0.0
    rows = []
    for month in range(1, months + 1):
        value = (value + amount) * (1 + r)
        if month % MONTHS_PER_YEAR == 0 or month == months:
            rows.append(
                SipYearRow(
                    year=(month + MONTHS_PER_YEAR - 1) // MONTHS_PER_YEAR,
                    month=month,
                    invested=amount * month,
                    value=value,
                )
            )

    return rows
