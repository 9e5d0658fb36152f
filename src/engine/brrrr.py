"""BRRRR analysis: buy, rehab, rent, refinance, repeat.

Assumes the purchase and rehab are paid in cash and the refinance is sized
off the after-repair value.
"""

from decimal import Decimal

from src.engine.debt import monthly_payment
from src.engine.validation import (
    require_non_negative,
    require_percent,
    require_term_for_loan,
    require_whole_number,
)
from src.models.results import BRRRRAnalysis

HUNDRED = Decimal("100")


def analyze_brrrr(
    purchase_price: Decimal,
    rehab_cost: Decimal,
    after_repair_value: Decimal,
    months_to_rehab: int,
    holding_cost_per_month: Decimal,
    refinance_ltv_percent: Decimal,
    refinance_rate: Decimal,
    monthly_rent: Decimal,
    monthly_expenses: Decimal,
    refinance_term_years: int = 30,
) -> BRRRRAnalysis:
    require_non_negative("purchase_price", purchase_price)
    require_non_negative("rehab_cost", rehab_cost)
    require_non_negative("after_repair_value", after_repair_value)
    require_whole_number("months_to_rehab", months_to_rehab)
    require_non_negative("months_to_rehab", months_to_rehab)
    require_non_negative("holding_cost_per_month", holding_cost_per_month)
    require_percent("refinance_ltv_percent", refinance_ltv_percent)
    require_non_negative("monthly_rent", monthly_rent)
    require_non_negative("monthly_expenses", monthly_expenses)

    total_investment = purchase_price + rehab_cost + months_to_rehab * holding_cost_per_month
    refinance_amount = after_repair_value * refinance_ltv_percent / HUNDRED
    require_term_for_loan("refinance_term_years", refinance_amount, refinance_term_years)
    cash_left = max(Decimal("0"), total_investment - refinance_amount)

    mortgage = monthly_payment(refinance_amount, refinance_rate, refinance_term_years)
    monthly_cf = monthly_rent - monthly_expenses - mortgage
    annual_cf = monthly_cf * 12

    # All cash recovered: the return is unbounded
    coc = annual_cf / cash_left * HUNDRED if cash_left > 0 else None

    return BRRRRAnalysis(
        total_investment=total_investment,
        refinance_amount=refinance_amount,
        cash_out_at_refinance=refinance_amount - purchase_price,
        cash_left_in_deal=cash_left,
        monthly_mortgage=mortgage,
        monthly_cash_flow=monthly_cf,
        annual_cash_flow=annual_cf,
        cash_on_cash_return=coc,
        equity_created=after_repair_value - refinance_amount,
    )
