"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from fincalc_gateway.infrastructure.clients.loans import LoansClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_loans_client() -> LoansClient:
    """Provide loans listing API client instance"""
    return LoansClient()
