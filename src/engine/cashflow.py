"""Cash flow analysis: NOI, cap rate, CoC return, DSCR, GRM.

Pure functions: Decimal in, Decimal out. No I/O.
Percent outputs are whole-number percents (6.96 means 6.96%).
"""

import logging
from decimal import Decimal

from src.engine.debt import monthly_payment
from src.engine.validation import validate_deal_inputs
from src.models.deal import DealInputs
from src.models.results import CalculationResults

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def mortgage_payment(inputs: DealInputs) -> Decimal:
    """Monthly P&I for the deal's loan, 0 for a cash purchase."""
    if inputs.is_cash_purchase:
        return ZERO
    return monthly_payment(inputs.loan_amount, inputs.interest_rate, inputs.loan_term_years)


def cap_rate(noi_annual: Decimal, purchase_price: Decimal) -> Decimal:
    """Cap rate = annual NOI / purchase price."""
    if purchase_price <= 0:
        return ZERO
    return noi_annual / purchase_price * HUNDRED


def cash_on_cash(annual_cash_flow: Decimal, total_cash_invested: Decimal) -> Decimal:
    """Cash-on-cash return = annual cash flow / total cash invested."""
    if total_cash_invested <= 0:
        return ZERO
    return annual_cash_flow / total_cash_invested * HUNDRED


def dscr(noi_annual: Decimal, annual_debt_service: Decimal) -> Decimal | None:
    """Debt Service Coverage Ratio = NOI / annual debt service.

    None when there is no debt to cover. A cash deal is not a zero-coverage
    deal.
    """
    if annual_debt_service <= 0:
        return None
    return noi_annual / annual_debt_service


def gross_rent_multiplier(purchase_price: Decimal, monthly_rent: Decimal) -> Decimal:
    if monthly_rent <= 0:
        return ZERO
    return purchase_price / (monthly_rent * 12)


def expense_ratio(monthly_expenses: Decimal, gross_monthly_income: Decimal) -> Decimal:
    """Operating expenses as a percent of gross income."""
    if gross_monthly_income <= 0:
        return ZERO
    return monthly_expenses / gross_monthly_income * HUNDRED


def break_even_rent(monthly_obligations: Decimal, vacancy_rate_percent: Decimal) -> Decimal:
    """Gross rent needed to cover expenses and debt after vacancy."""
    occupancy = 1 - vacancy_rate_percent / HUNDRED
    if occupancy <= 0:
        return ZERO
    return monthly_obligations / occupancy


def calculate(inputs: DealInputs) -> CalculationResults:
    """Compute the full metric set for one deal.

    Raises InvalidInputError for out-of-domain inputs. Degenerate but
    valid deals (zero price, zero rent, cash purchase) produce zeros or
    the undefined DSCR instead of raising.
    """
    validate_deal_inputs(inputs)

    mortgage = mortgage_payment(inputs)
    effective_income = inputs.effective_monthly_income
    opex = inputs.monthly_operating_expenses

    noi_annual = (effective_income - opex) * 12
    monthly_cf = effective_income - opex - mortgage
    annual_cf = monthly_cf * 12
    total_cash = inputs.total_cash_needed

    results = CalculationResults(
        monthly_mortgage_payment=mortgage,
        monthly_operating_expenses=opex,
        effective_monthly_income=effective_income,
        monthly_cash_flow=monthly_cf,
        annual_cash_flow=annual_cf,
        cash_flow_per_door=monthly_cf / inputs.door_count,
        net_operating_income_annual=noi_annual,
        cap_rate=cap_rate(noi_annual, inputs.purchase_price),
        cash_on_cash_return=cash_on_cash(annual_cf, total_cash),
        expense_ratio=expense_ratio(opex, inputs.gross_monthly_income),
        debt_service_coverage_ratio=dscr(noi_annual, mortgage * 12),
        gross_rent_multiplier=gross_rent_multiplier(inputs.purchase_price, inputs.monthly_rent),
        break_even_rent=break_even_rent(opex + mortgage, inputs.vacancy_rate_percent),
        total_cash_needed=total_cash,
    )

    logger.debug(
        "Calculated deal: noi=%s cash_flow=%s cap_rate=%s coc=%s dscr=%s",
        noi_annual, monthly_cf, results.cap_rate, results.cash_on_cash_return,
        results.debt_service_coverage_ratio,
    )
    return results
