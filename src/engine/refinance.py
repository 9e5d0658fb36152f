"""Refinance analysis: payment savings, break-even and lifetime cost."""

import logging
import math
from decimal import Decimal

from src.engine.debt import monthly_payment
from src.engine.validation import require_non_negative, require_term_for_loan, require_whole_number
from src.models.results import RefinanceAnalysis

logger = logging.getLogger(__name__)


def analyze_refinance(
    current_balance: Decimal,
    current_rate: Decimal,
    current_payment: Decimal,
    months_remaining: int,
    new_rate: Decimal,
    new_term_years: int,
    closing_costs: Decimal,
    cash_out: Decimal = Decimal("0"),
) -> RefinanceAnalysis:
    """Compare keeping the current loan with refinancing into a new one.

    Closing costs and any cash out are rolled into the new loan. Rates are
    whole-number annual percents.
    """
    require_non_negative("current_balance", current_balance)
    require_non_negative("current_rate", current_rate)
    require_non_negative("current_payment", current_payment)
    require_whole_number("months_remaining", months_remaining)
    require_non_negative("months_remaining", months_remaining)
    require_non_negative("closing_costs", closing_costs)
    require_non_negative("cash_out", cash_out)

    new_loan = current_balance + closing_costs + cash_out
    require_term_for_loan("new_term_years", new_loan, new_term_years)
    new_payment = monthly_payment(new_loan, new_rate, new_term_years)
    savings = current_payment - new_payment

    if savings > 0:
        break_even = math.ceil(closing_costs / savings)
    else:
        break_even = None

    current_total = current_payment * months_remaining
    new_total = new_payment * new_term_years * 12
    lifetime_savings = current_total - new_total - closing_costs

    should_refinance = break_even is not None and break_even <= months_remaining

    logger.debug(
        "Refinance %s -> %s: savings=%s/mo break_even=%s months",
        current_rate, new_rate, savings, break_even,
    )

    return RefinanceAnalysis(
        new_loan_amount=new_loan,
        new_monthly_payment=new_payment,
        monthly_savings=savings,
        break_even_months=break_even,
        current_total_remaining=current_total,
        new_total_payments=new_total,
        lifetime_savings=lifetime_savings,
        should_refinance=should_refinance,
    )
