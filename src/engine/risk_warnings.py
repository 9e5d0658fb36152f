"""Heuristic risk warnings driven by a rule table.

Each rule names a metric and a half-open range [lower, upper). A rule fires
when its metric is defined and falls in range. Rules are independent and
evaluated in table order, so the output order is fixed.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable

from src.config import Settings, settings
from src.models.deal import DealInputs
from src.models.results import CalculationResults, DealWarning, WarningSeverity

logger = logging.getLogger(__name__)

MetricFn = Callable[[DealInputs, CalculationResults], Decimal | None]


def _rent_to_price(inputs: DealInputs, results: CalculationResults) -> Decimal | None:
    if inputs.monthly_rent <= 0 or inputs.purchase_price <= 0:
        return None
    return inputs.monthly_rent / inputs.purchase_price * 100


METRICS: dict[str, MetricFn] = {
    "monthly_cash_flow": lambda i, r: r.monthly_cash_flow,
    "dscr": lambda i, r: r.debt_service_coverage_ratio,
    "vacancy_rate_percent": lambda i, r: i.vacancy_rate_percent,
    "cash_on_cash_return": lambda i, r: r.cash_on_cash_return,
    "reserves_percent": lambda i, r: i.maintenance_percent + i.capex_percent,
    "cap_rate": lambda i, r: r.cap_rate,
    "expense_ratio": lambda i, r: r.expense_ratio,
    "rent_to_price_percent": _rent_to_price,
    "cash_flow_per_door": lambda i, r: r.cash_flow_per_door,
}


@dataclass(frozen=True)
class WarningRule:
    code: str
    severity: WarningSeverity
    metric: str
    lower: Decimal | None  # Inclusive; None is unbounded
    upper: Decimal | None  # Exclusive; None is unbounded
    message: str  # Formatted with {value}, {lower} and {upper}
    show_magnitude: bool = False  # Render the value unsigned

    def matches(self, value: Decimal | None) -> bool:
        if value is None:
            return False
        if self.lower is not None and value < self.lower:
            return False
        if self.upper is not None and value >= self.upper:
            return False
        return True


def build_rules(cfg: Settings) -> tuple[WarningRule, ...]:
    """Default rule table with thresholds taken from settings."""
    return (
        WarningRule(
            "NEGATIVE_CASH_FLOW", WarningSeverity.DANGER, "monthly_cash_flow",
            None, Decimal("0"),
            "Property loses ${value:,.0f}/month after all expenses and debt service.",
            show_magnitude=True,
        ),
        WarningRule(
            "DSCR_BELOW_ONE", WarningSeverity.DANGER, "dscr",
            None, cfg.dscr_danger,
            "DSCR of {value:.2f} means income does not cover debt service.",
        ),
        WarningRule(
            "DSCR_MARGINAL", WarningSeverity.CAUTION, "dscr",
            cfg.dscr_danger, cfg.dscr_caution,
            "DSCR of {value:.2f} is below the {upper} most lenders require.",
        ),
        WarningRule(
            "VACANCY_OPTIMISTIC", WarningSeverity.CAUTION, "vacancy_rate_percent",
            None, cfg.min_vacancy_percent,
            "A {value:.1f}% vacancy allowance is optimistic for most markets.",
        ),
        WarningRule(
            "NEGATIVE_COC", WarningSeverity.DANGER, "cash_on_cash_return",
            None, Decimal("0"),
            "Cash-on-cash return of {value:.1f}% loses money on the cash invested.",
        ),
        WarningRule(
            "LOW_COC", WarningSeverity.CAUTION, "cash_on_cash_return",
            Decimal("0"), cfg.low_coc_percent,
            "Cash-on-cash return of {value:.1f}% is low for the capital at risk.",
        ),
        WarningRule(
            "LOW_RESERVES", WarningSeverity.CAUTION, "reserves_percent",
            None, cfg.min_reserves_percent,
            "Maintenance and CapEx reserves total only {value:.2f}% of value per year.",
        ),
        WarningRule(
            "LOW_CAP_RATE", WarningSeverity.INFO, "cap_rate",
            None, cfg.low_cap_rate_percent,
            "Cap rate of {value:.2f}% is low; returns depend on appreciation.",
        ),
        WarningRule(
            "HIGH_EXPENSE_RATIO", WarningSeverity.CAUTION, "expense_ratio",
            cfg.high_expense_ratio_percent, None,
            "Operating expenses consume {value:.0f}% of gross income.",
        ),
        WarningRule(
            "RENT_BELOW_ONE_PERCENT_RULE", WarningSeverity.INFO, "rent_to_price_percent",
            None, cfg.min_rent_to_price_percent,
            "Rent is only {value:.2f}% of price per month; verify market rents.",
        ),
        WarningRule(
            "LOW_CASH_FLOW_PER_DOOR", WarningSeverity.INFO, "cash_flow_per_door",
            Decimal("0"), cfg.min_cash_flow_per_door,
            "Cash flow of ${value:,.0f} per door is below the per-door target.",
        ),
    )


DEFAULT_RULES = build_rules(settings)


def evaluate(
    inputs: DealInputs,
    results: CalculationResults,
    rules: tuple[WarningRule, ...] | list[WarningRule] | None = None,
) -> list[DealWarning]:
    """Run every rule against the deal and return the ones that fire."""
    if rules is None:
        rules = DEFAULT_RULES

    warnings: list[DealWarning] = []
    for rule in rules:
        try:
            metric = METRICS[rule.metric]
        except KeyError:
            raise ValueError(f"Unknown warning metric: {rule.metric}") from None

        value = metric(inputs, results)
        if not rule.matches(value):
            continue

        shown = abs(value) if rule.show_magnitude else value
        warnings.append(DealWarning(
            severity=rule.severity,
            code=rule.code,
            message=rule.message.format(value=shown, lower=rule.lower, upper=rule.upper),
        ))

    logger.debug("Warnings fired: %s", [w.code for w in warnings])
    return warnings
