"""Mapping of domain failures to HTTP errors"""

import logging
from fastapi import HTTPException

from fincalc_gateway.domain.exceptions import InvalidInputError
from fincalc_gateway.infrastructure.observability.metrics import record_calculation


def invalid_input(operation: str, error: InvalidInputError, request_id: str) -> HTTPException:
    """Record and log a rejected calculation, returning the 422 to raise"""
    record_calculation(operation, valid=False)
    logging.warning(
        f"Invalid input: {error}",
        extra={"request_id": request_id, "operation": operation, "field": error.field},
    )
    return HTTPException(status_code=422, detail={"message": str(error), "field": error.field})
