"""Canonical test fixtures used across all engine tests.

Fixture: $250K single-family rental, 20% down, 7.5% rate, 30yr fixed,
$1,800/mo rent, $2,400/yr tax, $150/mo insurance.
"""

import pytest
from decimal import Decimal

from src.models.deal import DealInputs, PropertyType


@pytest.fixture
def example_deal() -> DealInputs:
    """Hand-checkable deal: every field not listed is zero."""
    return DealInputs(
        purchase_price=Decimal("250000"),
        property_type=PropertyType.SINGLE_FAMILY,
        is_cash_purchase=False,
        down_payment_percent=Decimal("20"),
        interest_rate=Decimal("7.5"),
        loan_term_years=30,
        closing_cost_percent=Decimal("0"),
        monthly_rent=Decimal("1800"),
        other_monthly_income=Decimal("0"),
        vacancy_rate_percent=Decimal("0"),
        annual_property_tax=Decimal("2400"),
        monthly_insurance=Decimal("150"),
        monthly_hoa=Decimal("0"),
        property_management_percent=Decimal("0"),
        maintenance_percent=Decimal("0"),
        capex_percent=Decimal("0"),
        monthly_utilities=Decimal("0"),
        other_monthly_expenses=Decimal("0"),
        appreciation_rate_percent=Decimal("0"),
    )


@pytest.fixture
def canonical_deal() -> DealInputs:
    """$250K property with the app's default assumptions."""
    return DealInputs(
        purchase_price=Decimal("250000"),
        monthly_rent=Decimal("2800"),
        annual_property_tax=Decimal("2400"),
        monthly_insurance=Decimal("150"),
    )


@pytest.fixture
def cash_deal() -> DealInputs:
    """Same property bought outright."""
    return DealInputs(
        purchase_price=Decimal("250000"),
        is_cash_purchase=True,
        monthly_rent=Decimal("2800"),
        annual_property_tax=Decimal("2400"),
        monthly_insurance=Decimal("150"),
    )


@pytest.fixture
def duplex_deal() -> DealInputs:
    """Two-unit property."""
    return DealInputs(
        purchase_price=Decimal("400000"),
        property_type=PropertyType.DUPLEX,
        monthly_rent=Decimal("3600"),
        annual_property_tax=Decimal("4800"),
        monthly_insurance=Decimal("200"),
    )
