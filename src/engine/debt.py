"""Amortization schedule computation.

Pure functions: Decimal in, dataclass out. No I/O.
Rates are whole-number annual percents (7.5 means 7.5%).
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from src.engine.validation import validate_loan_terms

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class AmortizationPayment:
    index: int  # 1-based month number
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal  # Remaining after this payment


@dataclass(frozen=True)
class AmortizationSchedule:
    payments: tuple[AmortizationPayment, ...]
    monthly_payment: Decimal
    total_interest: Decimal
    total_principal: Decimal


@dataclass(frozen=True)
class YearlyDebtSummary:
    year: int  # 1-based loan year
    principal: Decimal
    interest: Decimal
    debt_service: Decimal
    ending_balance: Decimal


EMPTY_SCHEDULE = AmortizationSchedule(
    payments=(), monthly_payment=ZERO, total_interest=ZERO, total_principal=ZERO
)


def _monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    return Decimal(annual_rate_percent) / 100 / 12


def monthly_payment(loan_amount: Decimal, annual_rate_percent: Decimal, term_years: int) -> Decimal:
    """Fixed monthly principal and interest payment.

    Raises InvalidInputError for a negative rate or a negative/non-integer
    term. A zero loan or zero term is the cash-purchase case and pays 0.
    """
    validate_loan_terms(annual_rate_percent, term_years)
    if loan_amount <= 0 or term_years == 0:
        return ZERO

    r = _monthly_rate(annual_rate_percent)
    n = term_years * 12
    if r == 0:
        return loan_amount / n

    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** n
    return loan_amount * (r * factor) / (factor - 1)


def amortization_schedule(
    loan_amount: Decimal,
    annual_rate_percent: Decimal,
    term_years: int,
) -> AmortizationSchedule:
    """Generate the full monthly schedule for a fixed-rate loan.

    The payment is computed once and held constant. The last period pays
    off whatever balance is left, so the final balance is exactly zero.
    """
    pmt = monthly_payment(loan_amount, annual_rate_percent, term_years)
    if pmt == 0:
        return EMPTY_SCHEDULE

    r = _monthly_rate(annual_rate_percent)
    n_periods = term_years * 12

    payments: list[AmortizationPayment] = []
    balance = loan_amount
    total_interest = ZERO
    total_principal = ZERO

    for index in range(1, n_periods + 1):
        interest = balance * r
        if index == n_periods:
            # Final payment absorbs rounding drift
            principal_paid = balance
            actual_payment = interest + principal_paid
        else:
            principal_paid = pmt - interest
            actual_payment = pmt

        balance -= principal_paid
        total_interest += interest
        total_principal += principal_paid

        payments.append(AmortizationPayment(
            index=index,
            payment=actual_payment,
            principal=principal_paid,
            interest=interest,
            balance=balance,
        ))

    logger.debug(
        "Amortized %s over %d months: payment=%s total_interest=%s",
        loan_amount, n_periods, pmt, total_interest,
    )

    return AmortizationSchedule(
        payments=tuple(payments),
        monthly_payment=pmt,
        total_interest=total_interest,
        total_principal=total_principal,
    )


def remaining_balance(
    loan_amount: Decimal,
    annual_rate_percent: Decimal,
    term_years: int,
    payments_made: int,
) -> Decimal:
    """Loan balance after a number of scheduled payments."""
    if payments_made <= 0:
        return max(loan_amount, ZERO)
    schedule = amortization_schedule(loan_amount, annual_rate_percent, term_years)
    if not schedule.payments:
        return ZERO
    if payments_made >= len(schedule.payments):
        return ZERO
    return schedule.payments[payments_made - 1].balance


def yearly_debt_summary(schedule: AmortizationSchedule) -> list[YearlyDebtSummary]:
    """Roll the monthly schedule up into loan years of 12 payments."""
    summaries = []
    payments = schedule.payments
    for start in range(0, len(payments), 12):
        months = payments[start:start + 12]
        summaries.append(YearlyDebtSummary(
            year=start // 12 + 1,
            principal=sum((p.principal for p in months), ZERO),
            interest=sum((p.interest for p in months), ZERO),
            debt_service=sum((p.payment for p in months), ZERO),
            ending_balance=months[-1].balance,
        ))
    return summaries
