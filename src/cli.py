"""CLI for running a deal through the engine and printing a terminal report.

Usage:
    python -m src.cli deal.json
    python -m src.cli --price 250000 --rent 1800 --tax 2400 --insurance 150
    python -m src.cli deal.json --cash --schedule
"""

import argparse
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path

from src.config import settings
from src.engine.analysis import analyze_deal
from src.engine.validation import InvalidInputError
from src.models.results import DealAnalysis
from src.models.schemas import parse_deal_inputs

logger = logging.getLogger(__name__)

# Flag name -> DealInputs field
FLAG_FIELDS = {
    "price": "purchase_price",
    "property_type": "property_type",
    "down": "down_payment_percent",
    "rate": "interest_rate",
    "term": "loan_term_years",
    "closing": "closing_cost_percent",
    "rent": "monthly_rent",
    "other_income": "other_monthly_income",
    "vacancy": "vacancy_rate_percent",
    "tax": "annual_property_tax",
    "insurance": "monthly_insurance",
    "hoa": "monthly_hoa",
    "management": "property_management_percent",
    "maintenance": "maintenance_percent",
    "capex": "capex_percent",
    "utilities": "monthly_utilities",
    "other_expenses": "other_monthly_expenses",
    "appreciation": "appreciation_rate_percent",
}


# ── Helpers ──────────────────────────────────────────────────────────────────

def _pct(v) -> str:
    """Format a whole-number percent."""
    return f"{float(v):.2f}%"


def _dollar(v) -> str:
    return f"${float(v):,.0f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_metrics(analysis: DealAnalysis) -> None:
    r = analysis.results
    dscr = r.debt_service_coverage_ratio
    _header("Deal Metrics")
    print(f"  Mortgage (P&I):       {_dollar(r.monthly_mortgage_payment)}/mo")
    print(f"  Operating Expenses:   {_dollar(r.monthly_operating_expenses)}/mo")
    print(f"  Monthly Cash Flow:    {_dollar(r.monthly_cash_flow)}")
    print(f"  Annual Cash Flow:     {_dollar(r.annual_cash_flow)}")
    print(f"  Cash Flow / Door:     {_dollar(r.cash_flow_per_door)}")
    print(f"  NOI (annual):         {_dollar(r.net_operating_income_annual)}")
    print(f"  Cap Rate:             {_pct(r.cap_rate)}")
    print(f"  Cash-on-Cash:         {_pct(r.cash_on_cash_return)}")
    print(f"  DSCR:                 {'n/a (no debt)' if dscr is None else f'{float(dscr):.2f}x'}")
    print(f"  GRM:                  {float(r.gross_rent_multiplier):.2f}")
    print(f"  Expense Ratio:        {_pct(r.expense_ratio)}")
    print(f"  Break-even Rent:      {_dollar(r.break_even_rent)}/mo")
    print(f"  Total Cash Needed:    {_dollar(r.total_cash_needed)}")


def print_projection(analysis: DealAnalysis) -> None:
    p = analysis.projection
    _header(f"{p.years}-Year Projection")
    print(f"  Total Cash Flow:      {_dollar(p.total_cash_flow)}")
    print(f"  Equity Build-up:      {_dollar(p.total_equity_buildup)}")
    print(f"  Appreciation:         {_dollar(p.total_appreciation)}")
    print(f"  Property Value:       {_dollar(p.projected_property_value)}")
    print(f"  Loan Balance:         {_dollar(p.remaining_loan_balance)}")
    print(f"  Total Return:         {_dollar(p.total_return)}")
    print(f"  ROI:                  {_pct(p.return_on_investment)}")
    print(f"  Annualized Return:    {_pct(p.annualized_return)}")


def print_schedule(analysis: DealAnalysis) -> None:
    _header("Amortization by Year")
    if not analysis.yearly_debt:
        print("  No loan.")
        return
    print(f"  {'Year':>4}  {'Principal':>12}  {'Interest':>12}  {'Balance':>14}")
    for y in analysis.yearly_debt:
        print(
            f"  {y.year:>4}  {_dollar(y.principal):>12}  "
            f"{_dollar(y.interest):>12}  {_dollar(y.ending_balance):>14}"
        )


def print_score(analysis: DealAnalysis) -> None:
    s = analysis.score
    _header(f"Deal Score: {s.score}/100 ({s.grade})")
    for label, points, max_points in s.breakdown:
        print(f"  {label + ':':<22}{points:>3}/{max_points}")
    print(f"\n  {s.verdict}. {s.verdict_detail}")


def print_warnings(analysis: DealAnalysis) -> None:
    _header("Warnings")
    if not analysis.warnings:
        print("  None.")
        return
    for w in analysis.warnings:
        print(f"  [{w.severity.value.upper():>7}] {w.code}")
        print(f"            {w.message}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rental property deal analyzer")
    parser.add_argument("deal_file", nargs="?", help="JSON file with deal inputs")
    parser.add_argument("--price", type=Decimal, help="Purchase price")
    parser.add_argument("--property-type", dest="property_type", help="single_family, duplex, ...")
    parser.add_argument("--down", type=Decimal, help="Down payment percent")
    parser.add_argument("--rate", type=Decimal, help="Annual interest rate percent")
    parser.add_argument("--term", type=int, help="Loan term in years")
    parser.add_argument("--closing", type=Decimal, help="Closing cost percent")
    parser.add_argument("--rent", type=Decimal, help="Monthly rent")
    parser.add_argument("--other-income", dest="other_income", type=Decimal, help="Other monthly income")
    parser.add_argument("--vacancy", type=Decimal, help="Vacancy rate percent")
    parser.add_argument("--tax", type=Decimal, help="Annual property tax")
    parser.add_argument("--insurance", type=Decimal, help="Monthly insurance")
    parser.add_argument("--hoa", type=Decimal, help="Monthly HOA")
    parser.add_argument("--management", type=Decimal, help="Property management percent of rent")
    parser.add_argument("--maintenance", type=Decimal, help="Maintenance percent of value per year")
    parser.add_argument("--capex", type=Decimal, help="CapEx percent of value per year")
    parser.add_argument("--utilities", type=Decimal, help="Monthly utilities")
    parser.add_argument("--other-expenses", dest="other_expenses", type=Decimal, help="Other monthly expenses")
    parser.add_argument("--appreciation", type=Decimal, help="Annual appreciation percent")
    parser.add_argument("--cash", action="store_true", help="All-cash purchase")
    parser.add_argument("--schedule", action="store_true", help="Print the yearly amortization schedule")
    return parser


def load_deal_data(args: argparse.Namespace) -> dict:
    """Merge the JSON file (if any) with command-line overrides."""
    data: dict = {}
    if args.deal_file:
        data = json.loads(Path(args.deal_file).read_text(), parse_float=Decimal)
    for flag, field in FLAG_FIELDS.items():
        value = getattr(args, flag)
        if value is not None:
            data[field] = value
    if args.cash:
        data["is_cash_purchase"] = True
    return data


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=settings.log_level)
    parser = build_parser()
    args = parser.parse_args(argv)

    data = load_deal_data(args)
    if "purchase_price" not in data:
        parser.error("a deal file or --price is required")

    try:
        inputs = parse_deal_inputs(data)
        analysis = analyze_deal(inputs)
    except InvalidInputError as e:
        logger.debug("Rejected deal input: %s", e)
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2

    print_metrics(analysis)
    print_projection(analysis)
    if args.schedule:
        print_schedule(analysis)
    print_score(analysis)
    print_warnings(analysis)
    return 0


if __name__ == "__main__":
    sys.exit(main())
