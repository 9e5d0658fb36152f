"""Maximum offer price for target returns.

Holding every input except the price fixed, NOI and debt service are both
linear in price:

    NOI(p)  = A - b * p
    debt(p) = k * p

where A is annual effective income less the expenses that do not scale
with price, b is the maintenance + CapEx reserve rate and k is the annual
debt service per dollar of price. Each target therefore has a closed form.
"""

import logging
from decimal import Decimal

from src.engine.debt import monthly_payment
from src.engine.validation import validate_deal_inputs
from src.models.deal import DealInputs, HUNDRED
from src.models.results import OfferPrices

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _price_independent_noi(inputs: DealInputs) -> Decimal:
    fixed_expenses = (
        inputs.monthly_operating_expenses
        - inputs.monthly_maintenance_reserve
        - inputs.monthly_capex_reserve
    )
    return (inputs.effective_monthly_income - fixed_expenses) * 12


def _reserve_rate(inputs: DealInputs) -> Decimal:
    return (inputs.maintenance_percent + inputs.capex_percent) / HUNDRED


def _debt_rate(inputs: DealInputs) -> Decimal:
    if inputs.is_cash_purchase:
        return ZERO
    loan_fraction = 1 - inputs.down_payment_percent / HUNDRED
    if loan_fraction <= 0:
        return ZERO
    per_dollar = monthly_payment(Decimal("1"), inputs.interest_rate, inputs.loan_term_years)
    return per_dollar * 12 * loan_fraction


def _cash_fraction(inputs: DealInputs) -> Decimal:
    if inputs.is_cash_purchase:
        return 1 + inputs.closing_cost_percent / HUNDRED
    return (inputs.down_payment_percent + inputs.closing_cost_percent) / HUNDRED


def _solve(numerator: Decimal, denominator: Decimal) -> Decimal:
    # Zero means this target puts no positive bound on the price
    if numerator <= 0 or denominator <= 0:
        return ZERO
    return numerator / denominator


def max_price_by_cap_rate(inputs: DealInputs, target_cap_rate: Decimal) -> Decimal:
    if target_cap_rate <= 0:
        return ZERO
    return _solve(
        _price_independent_noi(inputs),
        _reserve_rate(inputs) + target_cap_rate / HUNDRED,
    )


def max_price_by_cash_flow(inputs: DealInputs, target_monthly_cash_flow: Decimal) -> Decimal:
    return _solve(
        _price_independent_noi(inputs) - target_monthly_cash_flow * 12,
        _reserve_rate(inputs) + _debt_rate(inputs),
    )


def max_price_by_cash_on_cash(inputs: DealInputs, target_cash_on_cash: Decimal) -> Decimal:
    return _solve(
        _price_independent_noi(inputs),
        _reserve_rate(inputs) + _debt_rate(inputs) + target_cash_on_cash / HUNDRED * _cash_fraction(inputs),
    )


def max_offer_prices(
    inputs: DealInputs,
    target_cap_rate: Decimal = Decimal("8"),
    target_monthly_cash_flow: Decimal = Decimal("200"),
    target_cash_on_cash: Decimal = Decimal("8"),
) -> OfferPrices:
    """Highest purchase price meeting each target, other inputs unchanged."""
    validate_deal_inputs(inputs)
    offers = OfferPrices(
        by_cap_rate=max_price_by_cap_rate(inputs, target_cap_rate),
        by_cash_flow=max_price_by_cash_flow(inputs, target_monthly_cash_flow),
        by_cash_on_cash=max_price_by_cash_on_cash(inputs, target_cash_on_cash),
    )
    logger.debug("Offer prices: %s suggested=%s", offers, offers.suggested_max_price)
    return offers
