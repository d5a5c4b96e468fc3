"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.calculations.schemas import Financials


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture(scope="session")
def anyio_backend():
    """Backend for async tests."""
    return "asyncio"


@pytest.fixture
def rental_inputs():
    """Single-unit rental: $100k, 20% down, 5% / 30 years, $1,700 in seller credits."""
    return {
        "list_price": 100000,
        "purchase_price": 100000,
        "rehab_cost": 0,
        "down_payment_percent": 20,
        "monthly_rents": [1000],
        "vacancy_rate": 5,
        "maintenance_rate": 5,
        "management_rate": 10,
        "capex_rate": 5,
        "monthly_taxes": 100,
        "monthly_insurance": 50,
        "loan_interest_rate": 5,
        "loan_term_years": 30,
        "seller_credit_rents": 1000,
        "seller_credit_security_deposit": 500,
        "seller_credit_misc": 200,
    }


@pytest.fixture
def financials(rental_inputs):
    return Financials(**rental_inputs)
