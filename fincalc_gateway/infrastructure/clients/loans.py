"""Loans listing HTTP client for fetching lender offers by category"""

import httpx
from typing import Any, List
from fincalc_gateway.domain.models import LoanOffer
from fincalc_gateway.domain.offers import offer_from_listing
from fincalc_gateway.domain.exceptions import InvalidInputError, LoansAPIError
from fincalc_gateway.infrastructure.observability.metrics import loans_latency_histogram
from fincalc_gateway.config import settings


class LoansClient:
    """Client for the external loans listing API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.loans_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def get_offers(
        self,
        loan_type: str,
        principal: Any = None,
        tenure_years: Any = None,
    ) -> List[LoanOffer]:
        """
        Fetch lender offers for a loan category.

        A response body that is not a JSON array is treated as no offers.

        Raises:
            LoansAPIError: On timeout, HTTP errors, or unusable records
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with loans_latency_histogram.time():
                    response = await client.get(
                        f"{self.base_url}/banks/compare",
                        params={"loanType": loan_type},
                    )
                response.raise_for_status()
                data = response.json()

                if not isinstance(data, list):
                    return []

                return [
                    offer_from_listing(
                        record,
                        index,
                        principal=principal,
                        tenure_years=tenure_years,
                        default_tenure_years=settings.default_tenure_years,
                    )
                    for index, record in enumerate(data)
                ]

            except httpx.TimeoutException as e:
                raise LoansAPIError(f"Loans API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise LoansAPIError(f"Loans API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise LoansAPIError(f"Loans API unreachable: {e}") from e
            except (InvalidInputError, AttributeError, ValueError) as e:
                raise LoansAPIError(f"Invalid loan data from listing API: {e}") from e
