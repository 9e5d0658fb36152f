from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.engine.debt import AmortizationSchedule, YearlyDebtSummary


class WarningSeverity(Enum):
    INFO = "info"
    CAUTION = "caution"
    DANGER = "danger"


@dataclass(frozen=True)
class DealWarning:
    severity: WarningSeverity
    code: str
    message: str


@dataclass(frozen=True)
class CalculationResults:
    monthly_mortgage_payment: Decimal = Decimal("0")
    monthly_operating_expenses: Decimal = Decimal("0")
    effective_monthly_income: Decimal = Decimal("0")

    # Cash flow (levered)
    monthly_cash_flow: Decimal = Decimal("0")
    annual_cash_flow: Decimal = Decimal("0")
    cash_flow_per_door: Decimal = Decimal("0")

    # Operations (unlevered)
    net_operating_income_annual: Decimal = Decimal("0")

    # Metrics, percents as whole numbers
    cap_rate: Decimal = Decimal("0")
    cash_on_cash_return: Decimal = Decimal("0")
    expense_ratio: Decimal = Decimal("0")
    # None when there is no debt service (cash purchase, zero loan)
    debt_service_coverage_ratio: Decimal | None = None
    gross_rent_multiplier: Decimal = Decimal("0")
    break_even_rent: Decimal = Decimal("0")

    total_cash_needed: Decimal = Decimal("0")


@dataclass(frozen=True)
class FiveYearProjection:
    years: int = 5
    total_cash_flow: Decimal = Decimal("0")
    total_equity_buildup: Decimal = Decimal("0")  # Principal paid down
    total_appreciation: Decimal = Decimal("0")
    projected_property_value: Decimal = Decimal("0")
    remaining_loan_balance: Decimal = Decimal("0")
    total_return: Decimal = Decimal("0")
    return_on_investment: Decimal = Decimal("0")  # Percent of cash needed
    annualized_return: Decimal = Decimal("0")  # Compound annual, percent


@dataclass(frozen=True)
class OfferPrices:
    by_cap_rate: Decimal = Decimal("0")
    by_cash_flow: Decimal = Decimal("0")
    by_cash_on_cash: Decimal = Decimal("0")

    @property
    def suggested_max_price(self) -> Decimal:
        """Most conservative price that meets every reachable target."""
        prices = [p for p in (self.by_cap_rate, self.by_cash_flow, self.by_cash_on_cash) if p > 0]
        return min(prices) if prices else Decimal("0")


@dataclass(frozen=True)
class RefinanceAnalysis:
    new_loan_amount: Decimal
    new_monthly_payment: Decimal
    monthly_savings: Decimal
    break_even_months: int | None  # None when the new payment saves nothing
    current_total_remaining: Decimal
    new_total_payments: Decimal
    lifetime_savings: Decimal
    should_refinance: bool


@dataclass(frozen=True)
class BRRRRAnalysis:
    total_investment: Decimal
    refinance_amount: Decimal
    cash_out_at_refinance: Decimal
    cash_left_in_deal: Decimal
    monthly_mortgage: Decimal
    monthly_cash_flow: Decimal
    annual_cash_flow: Decimal
    # None when no cash is left in the deal (infinite return)
    cash_on_cash_return: Decimal | None
    equity_created: Decimal


@dataclass(frozen=True)
class DealScore:
    score: int = 0  # 0-100
    grade: str = "F"
    verdict: str = "Pass"
    verdict_detail: str = ""
    # (label, points, max points) per scored metric
    breakdown: tuple[tuple[str, int, int], ...] = ()


@dataclass(frozen=True)
class DealAnalysis:
    results: CalculationResults
    schedule: "AmortizationSchedule"
    yearly_debt: list["YearlyDebtSummary"] = field(default_factory=list)
    projection: FiveYearProjection = field(default_factory=FiveYearProjection)
    warnings: list[DealWarning] = field(default_factory=list)
    score: DealScore = field(default_factory=DealScore)

    @property
    def has_danger(self) -> bool:
        return any(w.severity is WarningSeverity.DANGER for w in self.warnings)
