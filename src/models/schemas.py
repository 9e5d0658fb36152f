"""Pydantic schemas for loading deal inputs from raw data (JSON, forms)."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.engine.validation import InvalidInputError
from src.models.deal import DealInputs, PropertyType

_PERCENT_FIELDS = (
    "down_payment_percent",
    "interest_rate",
    "closing_cost_percent",
    "vacancy_rate_percent",
    "property_management_percent",
    "maintenance_percent",
    "capex_percent",
    "appreciation_rate_percent",
)


class DealInputsSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Purchase
    purchase_price: Decimal = Field(..., ge=0)
    property_type: PropertyType = PropertyType.SINGLE_FAMILY
    is_cash_purchase: bool = False

    # Financing
    down_payment_percent: Decimal = Field(Decimal("20"), ge=0, le=100)
    interest_rate: Decimal = Field(Decimal("7.5"), ge=0)
    loan_term_years: int = Field(30, ge=0)
    closing_cost_percent: Decimal = Field(Decimal("3"), ge=0, le=100)

    # Income
    monthly_rent: Decimal = Field(Decimal("0"), ge=0)
    other_monthly_income: Decimal = Field(Decimal("0"), ge=0)
    vacancy_rate_percent: Decimal = Field(Decimal("8"), ge=0, le=100)

    # Expenses
    annual_property_tax: Decimal = Field(Decimal("0"), ge=0)
    monthly_insurance: Decimal = Field(Decimal("0"), ge=0)
    monthly_hoa: Decimal = Field(Decimal("0"), ge=0)
    property_management_percent: Decimal = Field(Decimal("10"), ge=0, le=100)
    maintenance_percent: Decimal = Field(Decimal("1"), ge=0, le=100)
    capex_percent: Decimal = Field(Decimal("1"), ge=0, le=100)
    monthly_utilities: Decimal = Field(Decimal("0"), ge=0)
    other_monthly_expenses: Decimal = Field(Decimal("0"), ge=0)

    # Projection
    appreciation_rate_percent: Decimal = Decimal("3")

    @field_validator(*_PERCENT_FIELDS, mode="before")
    @classmethod
    def _strip_percent_sign(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.replace("%", "").strip()
        return v

    def to_inputs(self) -> DealInputs:
        return DealInputs(**self.model_dump())


def parse_deal_inputs(data: dict[str, Any]) -> DealInputs:
    """Validate a raw mapping and build DealInputs.

    Raises InvalidInputError naming the first offending field.
    """
    try:
        return DealInputsSchema.model_validate(data).to_inputs()
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(part) for part in err["loc"]) or "deal"
        raise InvalidInputError(field, err["msg"]) from e
