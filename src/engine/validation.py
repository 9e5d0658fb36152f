"""Boundary checks for deal inputs and loan terms.

Invalid values are rejected with InvalidInputError before any metric is
computed, so callers never see a partial result built on a bad input.
"""

from decimal import Decimal

from src.models.deal import DealInputs, PropertyType

_MONEY_FIELDS = (
    "monthly_rent",
    "other_monthly_income",
    "annual_property_tax",
    "monthly_insurance",
    "monthly_hoa",
    "monthly_utilities",
    "other_monthly_expenses",
)

_PERCENT_FIELDS = (
    "down_payment_percent",
    "closing_cost_percent",
    "vacancy_rate_percent",
    "property_management_percent",
    "maintenance_percent",
    "capex_percent",
)


class InvalidInputError(ValueError):
    """An input outside the domain the engine accepts."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


def require_non_negative(field: str, value: Decimal) -> None:
    if value < 0:
        raise InvalidInputError(field, f"must be non-negative, got {value}")


def require_percent(field: str, value: Decimal) -> None:
    if value < 0 or value > 100:
        raise InvalidInputError(field, f"must be between 0 and 100, got {value}")


def require_whole_number(field: str, value) -> None:
    # bool is an int subclass; True is not a count
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(field, f"must be a whole number, got {value!r}")


def require_term_for_loan(field: str, loan_amount: Decimal, term_years) -> None:
    require_whole_number(field, term_years)
    if loan_amount > 0 and term_years <= 0:
        raise InvalidInputError(field, "must be positive when there is a loan to repay")


def validate_loan_terms(annual_rate_percent: Decimal, term_years) -> None:
    require_non_negative("interest_rate", annual_rate_percent)
    require_whole_number("loan_term_years", term_years)
    require_non_negative("loan_term_years", term_years)


def validate_deal_inputs(inputs: DealInputs) -> None:
    """Raise InvalidInputError for the first out-of-domain field found."""
    if not isinstance(inputs.property_type, PropertyType):
        raise InvalidInputError("property_type", f"unknown property type {inputs.property_type!r}")

    require_non_negative("purchase_price", inputs.purchase_price)

    for name in _MONEY_FIELDS:
        require_non_negative(name, getattr(inputs, name))

    for name in _PERCENT_FIELDS:
        require_percent(name, getattr(inputs, name))

    require_non_negative("interest_rate", inputs.interest_rate)
    require_term_for_loan("loan_term_years", inputs.loan_amount, inputs.loan_term_years)
