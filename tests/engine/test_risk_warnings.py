from dataclasses import replace
from decimal import Decimal

import pytest

from src.config import Settings
from src.engine.cashflow import calculate
from src.engine.risk_warnings import DEFAULT_RULES, WarningRule, build_rules, evaluate
from src.models.results import CalculationResults, WarningSeverity


@pytest.fixture
def healthy_results() -> CalculationResults:
    """Metrics that trip no default rule."""
    return CalculationResults(
        monthly_mortgage_payment=Decimal("1400"),
        monthly_operating_expenses=Decimal("1000"),
        effective_monthly_income=Decimal("2900"),
        monthly_cash_flow=Decimal("500"),
        annual_cash_flow=Decimal("6000"),
        cash_flow_per_door=Decimal("500"),
        net_operating_income_annual=Decimal("22800"),
        cap_rate=Decimal("8"),
        cash_on_cash_return=Decimal("10"),
        expense_ratio=Decimal("35"),
        debt_service_coverage_ratio=Decimal("1.5"),
        gross_rent_multiplier=Decimal("7.4"),
        break_even_rent=Decimal("2600"),
        total_cash_needed=Decimal("57500"),
    )


def codes(warnings):
    return [w.code for w in warnings]


class TestRuleTable:
    def test_default_order(self):
        assert [r.code for r in DEFAULT_RULES] == [
            "NEGATIVE_CASH_FLOW",
            "DSCR_BELOW_ONE",
            "DSCR_MARGINAL",
            "VACANCY_OPTIMISTIC",
            "NEGATIVE_COC",
            "LOW_COC",
            "LOW_RESERVES",
            "LOW_CAP_RATE",
            "HIGH_EXPENSE_RATIO",
            "RENT_BELOW_ONE_PERCENT_RULE",
            "LOW_CASH_FLOW_PER_DOOR",
        ]

    def test_thresholds_from_settings(self):
        rules = build_rules(Settings(dscr_caution=Decimal("1.4"), low_coc_percent=Decimal("6")))
        by_code = {r.code: r for r in rules}
        assert by_code["DSCR_MARGINAL"].upper == Decimal("1.4")
        assert by_code["LOW_COC"].upper == Decimal("6")

    def test_range_is_half_open(self):
        rule = WarningRule(
            "X", WarningSeverity.INFO, "cap_rate", Decimal("1"), Decimal("2"), "{value}"
        )
        assert rule.matches(Decimal("1"))
        assert rule.matches(Decimal("1.99"))
        assert not rule.matches(Decimal("2"))
        assert not rule.matches(Decimal("0.99"))
        assert not rule.matches(None)


class TestEvaluate:
    def test_healthy_deal_has_no_warnings(self, canonical_deal, healthy_results):
        assert evaluate(canonical_deal, healthy_results) == []

    def test_negative_cash_flow(self, canonical_deal, healthy_results):
        results = replace(
            healthy_results,
            monthly_cash_flow=Decimal("-50"),
            annual_cash_flow=Decimal("-600"),
            cash_flow_per_door=Decimal("-50"),
            cash_on_cash_return=Decimal("-1.04"),
        )
        warnings = evaluate(canonical_deal, results)
        assert warnings[0].code == "NEGATIVE_CASH_FLOW"
        assert warnings[0].severity is WarningSeverity.DANGER
        assert "$50/month" in warnings[0].message
        # Independent rules co-fire; LOW_COC does not overlap NEGATIVE_COC
        assert "NEGATIVE_COC" in codes(warnings)
        assert "LOW_COC" not in codes(warnings)
        assert "LOW_CASH_FLOW_PER_DOOR" not in codes(warnings)

    def test_dscr_below_one(self, canonical_deal, healthy_results):
        results = replace(healthy_results, debt_service_coverage_ratio=Decimal("0.9"))
        warnings = evaluate(canonical_deal, results)
        assert codes(warnings) == ["DSCR_BELOW_ONE"]
        assert warnings[0].severity is WarningSeverity.DANGER

    @pytest.mark.parametrize("value", ["1.0", "1.1", "1.249"])
    def test_dscr_marginal(self, canonical_deal, healthy_results, value):
        results = replace(healthy_results, debt_service_coverage_ratio=Decimal(value))
        warnings = evaluate(canonical_deal, results)
        assert codes(warnings) == ["DSCR_MARGINAL"]
        assert warnings[0].severity is WarningSeverity.CAUTION

    def test_dscr_undefined_never_fires(self, canonical_deal, healthy_results):
        results = replace(healthy_results, debt_service_coverage_ratio=None)
        assert evaluate(canonical_deal, results) == []

    def test_optimistic_vacancy(self, canonical_deal, healthy_results):
        deal = replace(canonical_deal, vacancy_rate_percent=Decimal("3"))
        warnings = evaluate(deal, healthy_results)
        assert codes(warnings) == ["VACANCY_OPTIMISTIC"]

    def test_vacancy_at_threshold_ok(self, canonical_deal, healthy_results):
        deal = replace(canonical_deal, vacancy_rate_percent=Decimal("5"))
        assert evaluate(deal, healthy_results) == []

    def test_low_coc(self, canonical_deal, healthy_results):
        results = replace(healthy_results, cash_on_cash_return=Decimal("3"))
        warnings = evaluate(canonical_deal, results)
        assert codes(warnings) == ["LOW_COC"]
        assert warnings[0].severity is WarningSeverity.CAUTION

    def test_zero_coc_is_low_not_negative(self, canonical_deal, healthy_results):
        results = replace(healthy_results, cash_on_cash_return=Decimal("0"))
        assert codes(evaluate(canonical_deal, results)) == ["LOW_COC"]

    def test_low_reserves(self, canonical_deal, healthy_results):
        deal = replace(canonical_deal, maintenance_percent=Decimal("0.5"), capex_percent=Decimal("0.25"))
        assert codes(evaluate(deal, healthy_results)) == ["LOW_RESERVES"]

    def test_low_cap_rate(self, canonical_deal, healthy_results):
        results = replace(healthy_results, cap_rate=Decimal("3.5"))
        warnings = evaluate(canonical_deal, results)
        assert codes(warnings) == ["LOW_CAP_RATE"]
        assert warnings[0].severity is WarningSeverity.INFO

    def test_high_expense_ratio(self, canonical_deal, healthy_results):
        results = replace(healthy_results, expense_ratio=Decimal("62"))
        warnings = evaluate(canonical_deal, results)
        assert codes(warnings) == ["HIGH_EXPENSE_RATIO"]
        assert "62%" in warnings[0].message

    def test_rent_below_one_percent_rule(self, canonical_deal, healthy_results):
        deal = replace(canonical_deal, monthly_rent=Decimal("1000"))
        assert codes(evaluate(deal, healthy_results)) == ["RENT_BELOW_ONE_PERCENT_RULE"]

    def test_rent_rule_skips_zero_rent(self, canonical_deal, healthy_results):
        deal = replace(canonical_deal, monthly_rent=Decimal("0"))
        assert evaluate(deal, healthy_results) == []

    def test_low_cash_flow_per_door(self, canonical_deal, healthy_results):
        results = replace(healthy_results, cash_flow_per_door=Decimal("150"))
        assert codes(evaluate(canonical_deal, results)) == ["LOW_CASH_FLOW_PER_DOOR"]

    def test_custom_rules(self, canonical_deal, healthy_results):
        rules = [
            WarningRule(
                "CAP_RATE_UNDER_TEN", WarningSeverity.CAUTION, "cap_rate",
                None, Decimal("10"), "Cap rate {value}% under {upper}%",
            ),
        ]
        warnings = evaluate(canonical_deal, healthy_results, rules)
        assert codes(warnings) == ["CAP_RATE_UNDER_TEN"]
        assert warnings[0].message == "Cap rate 8% under 10%"

    def test_unknown_metric(self, canonical_deal, healthy_results):
        rules = [WarningRule("X", WarningSeverity.INFO, "nope", None, None, "")]
        with pytest.raises(ValueError):
            evaluate(canonical_deal, healthy_results, rules)


class TestWithCalculatedResults:
    def test_example_deal(self, example_deal):
        warnings = evaluate(example_deal, calculate(example_deal))
        assert codes(warnings) == [
            "DSCR_MARGINAL",
            "VACANCY_OPTIMISTIC",
            "LOW_COC",
            "LOW_RESERVES",
            "LOW_CASH_FLOW_PER_DOOR",
        ]

    def test_cash_deal_has_no_dscr_warning(self, cash_deal):
        warnings = evaluate(cash_deal, calculate(cash_deal))
        assert not any(w.code.startswith("DSCR") for w in warnings)

    def test_fresh_list_each_call(self, example_deal):
        results = calculate(example_deal)
        first = evaluate(example_deal, results)
        second = evaluate(example_deal, results)
        assert first == second
        assert first is not second
