from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

HUNDRED = Decimal("100")
MONTHS = Decimal("12")


class PropertyType(Enum):
    SINGLE_FAMILY = "single_family"
    DUPLEX = "duplex"
    TRIPLEX = "triplex"
    FOURPLEX = "fourplex"
    SMALL_MULTI_FAMILY = "small_multi_family"

    @property
    def unit_count(self) -> int:
        return _UNIT_COUNTS[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_UNIT_COUNTS = {
    PropertyType.SINGLE_FAMILY: 1,
    PropertyType.DUPLEX: 2,
    PropertyType.TRIPLEX: 3,
    PropertyType.FOURPLEX: 4,
    PropertyType.SMALL_MULTI_FAMILY: 5,  # 5+ units
}

_DESCRIPTIONS = {
    PropertyType.SINGLE_FAMILY: "Single-family home (1 unit)",
    PropertyType.DUPLEX: "Duplex (2 units)",
    PropertyType.TRIPLEX: "Triplex (3 units)",
    PropertyType.FOURPLEX: "Fourplex (4 units)",
    PropertyType.SMALL_MULTI_FAMILY: "Small multi-family (5+ units)",
}


@dataclass(frozen=True)
class DealInputs:
    """Snapshot of everything needed to underwrite one rental deal.

    Percent fields hold whole-number percents (7.5 means 7.5%) and are
    divided by 100 where they are used.
    """

    # Purchase
    purchase_price: Decimal
    property_type: PropertyType = PropertyType.SINGLE_FAMILY
    is_cash_purchase: bool = False

    # Financing
    down_payment_percent: Decimal = Decimal("20")
    interest_rate: Decimal = Decimal("7.5")  # Annual
    loan_term_years: int = 30
    closing_cost_percent: Decimal = Decimal("3")

    # Income
    monthly_rent: Decimal = Decimal("0")
    other_monthly_income: Decimal = Decimal("0")  # Laundry, parking, etc.
    vacancy_rate_percent: Decimal = Decimal("8")

    # Expenses
    annual_property_tax: Decimal = Decimal("0")
    monthly_insurance: Decimal = Decimal("0")
    monthly_hoa: Decimal = Decimal("0")
    property_management_percent: Decimal = Decimal("10")  # % of rent
    maintenance_percent: Decimal = Decimal("1")  # % of value, annually
    capex_percent: Decimal = Decimal("1")  # % of value, annually
    monthly_utilities: Decimal = Decimal("0")
    other_monthly_expenses: Decimal = Decimal("0")

    # Projection
    appreciation_rate_percent: Decimal = Decimal("3")

    @property
    def down_payment_amount(self) -> Decimal:
        return self.purchase_price * self.down_payment_percent / HUNDRED

    @property
    def loan_amount(self) -> Decimal:
        if self.is_cash_purchase:
            return Decimal("0")
        return self.purchase_price - self.down_payment_amount

    @property
    def closing_costs(self) -> Decimal:
        return self.purchase_price * self.closing_cost_percent / HUNDRED

    @property
    def total_cash_needed(self) -> Decimal:
        if self.is_cash_purchase:
            return self.purchase_price + self.closing_costs
        return self.down_payment_amount + self.closing_costs

    @property
    def monthly_property_tax(self) -> Decimal:
        return self.annual_property_tax / MONTHS

    @property
    def monthly_maintenance_reserve(self) -> Decimal:
        return self.purchase_price * self.maintenance_percent / HUNDRED / MONTHS

    @property
    def monthly_capex_reserve(self) -> Decimal:
        return self.purchase_price * self.capex_percent / HUNDRED / MONTHS

    @property
    def monthly_property_management(self) -> Decimal:
        return self.monthly_rent * self.property_management_percent / HUNDRED

    @property
    def gross_monthly_income(self) -> Decimal:
        return self.monthly_rent + self.other_monthly_income

    @property
    def effective_monthly_income(self) -> Decimal:
        return self.gross_monthly_income * (1 - self.vacancy_rate_percent / HUNDRED)

    @property
    def monthly_operating_expenses(self) -> Decimal:
        """Operating expenses only. Debt service is tracked separately."""
        return (
            self.monthly_property_tax
            + self.monthly_insurance
            + self.monthly_hoa
            + self.monthly_property_management
            + self.monthly_maintenance_reserve
            + self.monthly_capex_reserve
            + self.monthly_utilities
            + self.other_monthly_expenses
        )

    @property
    def door_count(self) -> int:
        return self.property_type.unit_count
