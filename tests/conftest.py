"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from fincalc_gateway.api.main import create_app
from fincalc_gateway.domain.models import LoanOffer, LoanTerms


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def sample_offers() -> list[LoanOffer]:
    """Four lenders with rate and max-amount ties to exercise stable ordering"""
    return [
        LoanOffer(
            offer_id="alpha",
            lender_name="Alpha Bank",
            terms=LoanTerms(principal=1_000_000, interest_rate=9.0, tenure_years=20),
            max_loan_amount=5_000_000,
        ),
        LoanOffer(
            offer_id="beta",
            lender_name="Beta Bank",
            terms=LoanTerms(principal=1_000_000, interest_rate=8.5, tenure_years=20, processing_fee_rate=0.5),
            max_loan_amount=10_000_000,
        ),
        LoanOffer(
            offer_id="gamma",
            lender_name="Gamma Finance",
            terms=LoanTerms(principal=1_000_000, interest_rate=10.5, tenure_years=15),
            max_loan_amount=10_000_000,
        ),
        LoanOffer(
            offer_id="delta",
            lender_name="Delta Bank",
            terms=LoanTerms(principal=1_000_000, interest_rate=8.5, tenure_years=25),
        ),
    ]


@pytest.fixture
def listing_payload() -> list[dict]:
    """Loans listing API response for one category"""
    return [
        {
            "bankName": "State Bank",
            "bankType": "Public",
            "minLoanAmount": "500000",
            "maxLoanAmount": 50_000_000,
            "interestRate": "8.5 - 9.65",
            "maxTenure": 30,
            "minCibilScore": "700",
            "minAge": 18,
            "maxAge": 70,
        },
        {
            "bankName": "City Housing",
            "bankType": "HFC",
            "minLoanAmount": 300000,
            "maxLoanAmount": 20_000_000,
            "minInterestRate": 9.1,
            "maxTenure": 20,
            "minCibilScore": 650,
            "processingFee": 1,
        },
    ]
