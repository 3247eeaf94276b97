"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from ukcalc.api.app import create_app
from ukcalc.calculators.models import DeductionOptions
from ukcalc.calculators.tax_data import TAX_YEARS, TaxYearData


@pytest.fixture
def tax_2025() -> TaxYearData:
    """2025-26 tax year tables."""
    return TAX_YEARS["2025-26"]


@pytest.fixture
def tax_2024() -> TaxYearData:
    """2024-25 tax year tables."""
    return TAX_YEARS["2024-25"]


@pytest.fixture
def default_options() -> DeductionOptions:
    return DeductionOptions()


@pytest.fixture
def advanced_options() -> DeductionOptions:
    """Scottish taxpayer paying 5% pension and a Plan 2 student loan."""
    return DeductionOptions(
        region="scotland",
        pension_type="percent",
        pension_value=5,
        student_loan_plan="plan2",
    )


@pytest.fixture
def client() -> TestClient:
    """Test client over the full app (exception handlers included, no lifespan)."""
    return TestClient(create_app())
