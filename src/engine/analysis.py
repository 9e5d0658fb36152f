"""Deal analysis orchestrator: composes the engine sub-modules for one deal.

Pure computation. No I/O. DealInputs in, DealAnalysis out.
"""

from src.engine.cashflow import calculate
from src.engine.debt import EMPTY_SCHEDULE, amortization_schedule, yearly_debt_summary
from src.engine.projection import five_year_projection
from src.engine.risk_warnings import WarningRule, evaluate
from src.engine.scoring import score_deal
from src.models.deal import DealInputs
from src.models.results import DealAnalysis


def analyze_deal(
    inputs: DealInputs,
    rules: tuple[WarningRule, ...] | list[WarningRule] | None = None,
) -> DealAnalysis:
    """Run metrics, amortization, projection, warnings and score for a deal."""
    results = calculate(inputs)

    if inputs.is_cash_purchase:
        schedule = EMPTY_SCHEDULE
    else:
        schedule = amortization_schedule(
            inputs.loan_amount, inputs.interest_rate, inputs.loan_term_years
        )

    return DealAnalysis(
        results=results,
        schedule=schedule,
        yearly_debt=yearly_debt_summary(schedule),
        projection=five_year_projection(inputs),
        warnings=evaluate(inputs, results, rules),
        score=score_deal(results),
    )
