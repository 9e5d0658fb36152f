"""Multi-year hold projection: cash flow, loan paydown and appreciation.

Pure computation. No I/O.
"""

import logging
from decimal import Decimal

from src.config import settings
from src.engine.debt import amortization_schedule, yearly_debt_summary
from src.engine.validation import require_non_negative, require_whole_number, validate_deal_inputs
from src.models.deal import DealInputs, HUNDRED
from src.models.results import FiveYearProjection

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
ONE = Decimal("1")


def _compound(rate_percent: Decimal, periods: int) -> Decimal:
    # Zero periods is always 1, even when the rate wipes out the base
    if periods == 0:
        return ONE
    return (1 + rate_percent / HUNDRED) ** periods


def annualized_return(total_invested: Decimal, ending_value: Decimal, years: Decimal) -> Decimal:
    """Compound annual growth rate of an investment, as a whole-number percent.

    0 when nothing was invested, the holding period is not positive, or the
    investment was wiped out.
    """
    if total_invested <= 0 or years <= 0:
        return ZERO
    growth = ending_value / total_invested
    if growth <= 0:
        return ZERO
    return (growth ** (ONE / Decimal(years)) - 1) * HUNDRED


def projected_monthly_cash_flow(inputs: DealInputs, year: int, monthly_debt_service: Decimal) -> Decimal:
    """Monthly cash flow in a given year (1-indexed).

    Rent grows with the appreciation rate; management follows rent. Other
    expenses are held flat.
    """
    rent = inputs.monthly_rent * _compound(inputs.appreciation_rate_percent, year - 1)
    effective_income = (rent + inputs.other_monthly_income) * (1 - inputs.vacancy_rate_percent / HUNDRED)
    management = rent * inputs.property_management_percent / HUNDRED
    expenses = inputs.monthly_operating_expenses - inputs.monthly_property_management + management
    return effective_income - expenses - monthly_debt_service


def five_year_projection(inputs: DealInputs, years: int | None = None) -> FiveYearProjection:
    """Project the total return of holding the deal for a number of years."""
    validate_deal_inputs(inputs)
    if years is None:
        years = settings.projection_years
    require_whole_number("years", years)
    require_non_negative("years", years)

    if inputs.is_cash_purchase:
        yearly_debt = []
    else:
        schedule = amortization_schedule(
            inputs.loan_amount, inputs.interest_rate, inputs.loan_term_years
        )
        yearly_debt = yearly_debt_summary(schedule)

    total_cash_flow = ZERO
    equity_buildup = ZERO
    loan_balance = inputs.loan_amount

    for year in range(1, years + 1):
        if year <= len(yearly_debt):
            debt_year = yearly_debt[year - 1]
            monthly_debt = debt_year.debt_service / 12
            equity_buildup += debt_year.principal
            loan_balance = debt_year.ending_balance
        else:
            # Loan paid off, or no loan
            monthly_debt = ZERO
            loan_balance = ZERO

        total_cash_flow += projected_monthly_cash_flow(inputs, year, monthly_debt) * 12

    value = inputs.purchase_price * _compound(inputs.appreciation_rate_percent, years)
    appreciation = value - inputs.purchase_price
    total_return = total_cash_flow + equity_buildup + appreciation
    cash_needed = inputs.total_cash_needed
    roi = total_return / cash_needed * HUNDRED if cash_needed > 0 else ZERO
    annualized = annualized_return(cash_needed, cash_needed + total_return, Decimal(years))

    logger.debug(
        "Projected %d years: total_return=%s roi=%s annualized=%s",
        years, total_return, roi, annualized,
    )

    return FiveYearProjection(
        years=years,
        total_cash_flow=total_cash_flow,
        total_equity_buildup=equity_buildup,
        total_appreciation=appreciation,
        projected_property_value=value,
        remaining_loan_balance=max(ZERO, loan_balance),
        total_return=total_return,
        return_on_investment=roi,
        annualized_return=annualized,
    )
