from dataclasses import replace
from decimal import Decimal

import pytest

from src.engine.analysis import analyze_deal
from src.engine.cashflow import calculate
from src.engine.validation import InvalidInputError


class TestAnalyzeDeal:
    def test_financed_deal(self, example_deal):
        analysis = analyze_deal(example_deal)
        assert analysis.results == calculate(example_deal)
        assert len(analysis.schedule.payments) == 360
        assert len(analysis.yearly_debt) == 30
        assert analysis.yearly_debt[-1].ending_balance == 0
        assert analysis.projection.years == 5
        assert not analysis.has_danger

    def test_schedule_payment_matches_metrics(self, example_deal):
        analysis = analyze_deal(example_deal)
        assert analysis.schedule.monthly_payment == analysis.results.monthly_mortgage_payment

    def test_cash_purchase_has_no_schedule(self, cash_deal):
        analysis = analyze_deal(cash_deal)
        assert analysis.schedule.payments == ()
        assert analysis.yearly_debt == []
        assert analysis.results.debt_service_coverage_ratio is None

    def test_losing_deal_is_dangerous(self, canonical_deal):
        analysis = analyze_deal(replace(canonical_deal, monthly_rent=Decimal("1000")))
        assert analysis.has_danger
        assert analysis.warnings[0].code == "NEGATIVE_CASH_FLOW"

    def test_custom_rules(self, example_deal):
        assert analyze_deal(example_deal, rules=[]).warnings == []

    def test_invalid_input_propagates(self, example_deal):
        with pytest.raises(InvalidInputError):
            analyze_deal(replace(example_deal, monthly_rent=Decimal("-1")))

    def test_total_loss_appreciation(self, canonical_deal):
        analysis = analyze_deal(replace(canonical_deal, appreciation_rate_percent=Decimal("-100")))
        assert analysis.projection.projected_property_value == 0

    def test_score_attached(self, cash_deal):
        analysis = analyze_deal(cash_deal)
        assert analysis.score.score == 75
