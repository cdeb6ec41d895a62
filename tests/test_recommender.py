"""Tests for the savings recommender."""

import pytest

from billinsight.analysis.recommender import (
    DEFAULT_RULES,
    NoMatchingRuleError,
    RecommendationRule,
    annualized_plan_savings,
    recommend,
)
from billinsight.config import RecommenderSettings
from billinsight.models.bill import SavingsRecommendation


class TestRulePrecedence:
    """Tests for first-match-wins ordering."""

    def test_variable_plan_beats_digital_rule(self, make_bill):
        """Test a variable plan with low activity gets the plan switch."""
        rec = recommend(
            make_bill(plan_type="variable", digital_activity_score=10),
            RecommenderSettings(),
        )
        assert rec.rule_id == "variable_plan_switch"
        assert rec.title == "Switch to Fixed-Index Blend"
        assert rec.has_recommendation is True
        # 128.80 * 0.6 = 77.28
        assert rec.savings == 77

    def test_fixed_plan_low_activity(self, make_bill):
        """Test the digital enablement recommendation."""
        rec = recommend(
            make_bill(plan_type="fixed", digital_activity_score=29),
            RecommenderSettings(),
        )
        assert rec.rule_id == "digital_enablement"
        assert rec.title == "Enable Digital Features"
        assert rec.savings == 40
        assert rec.has_recommendation is True

    def test_low_activity_threshold_is_strict(self, make_bill):
        """Test that a score of exactly 30 is not low activity."""
        rec = recommend(
            make_bill(plan_type="fixed", digital_activity_score=30),
            RecommenderSettings(),
        )
        assert rec.rule_id == "already_optimized"

    def test_fixed_plan_high_activity(self, make_bill):
        """Test the default: nothing to recommend."""
        rec = recommend(
            make_bill(plan_type="fixed", digital_activity_score=80),
            RecommenderSettings(),
        )
        assert rec.has_recommendation is False
        assert rec.savings == 0
        assert rec.title == "Your Plan is Optimized"

    def test_unknown_plan_falls_through(self, make_bill):
        """Test that unknown plan types get the default recommendation."""
        rec = recommend(
            make_bill(plan_type="prepaid", digital_activity_score=5),
            RecommenderSettings(),
        )
        assert rec.rule_id == "already_optimized"

    def test_default_table_ends_with_catch_all(self):
        """Test that the built-in table is exhaustive."""
        assert DEFAULT_RULES[-1].rule_id == "already_optimized"


class TestSavingsAmount:
    """Tests for the annualized plan-switch saving."""

    def test_halves_round_up(self, make_bill):
        """Test 7.50 * 0.05 * 12 = 4.50 rounds to 5."""
        bill = make_bill(curr_kwh=75, curr_rate="0.10")
        assert annualized_plan_savings(bill, RecommenderSettings()) == 5

    def test_just_below_a_half_rounds_down(self, make_bill):
        """Test a long-digit bill a hair under 7.50 is not rounded up to it first."""
        # 7.4999...9 (31 significant digits) * 0.6 = 4.4999...94
        bill = make_bill(curr_kwh="74." + "9" * 29, curr_rate="0.10")
        assert annualized_plan_savings(bill, RecommenderSettings()) == 4

    def test_rate_is_configurable(self, make_bill):
        """Test overriding the 5% monthly saving."""
        rec = recommend(
            make_bill(plan_type="variable"),
            RecommenderSettings(variable_plan_savings_rate=0.1),
        )
        # 128.80 * 0.1 * 12 = 154.56
        assert rec.savings == 155

    def test_digital_saving_is_configurable(self, make_bill):
        """Test overriding the flat digital enablement saving."""
        rec = recommend(
            make_bill(plan_type="fixed", digital_activity_score=0),
            RecommenderSettings(digital_enablement_savings=55),
        )
        assert rec.savings == 55


class TestCustomRules:
    """Tests for alternative rule tables."""

    def test_extra_plan_binding(self, make_bill):
        """Test binding a new plan type ahead of the built-in rules."""
        time_of_use = RecommendationRule(
            rule_id="shift_load",
            applies=lambda bill, settings: bill.plan_type == "time-of-use",
            build=lambda bill, settings: SavingsRecommendation(
                title="Shift usage off-peak",
                recommendation="Run appliances overnight",
                savings=60,
                has_recommendation=True,
                rule_id="shift_load",
            ),
        )
        rules = (time_of_use,) + DEFAULT_RULES

        rec = recommend(make_bill(plan_type="time-of-use"), RecommenderSettings(), rules)
        assert rec.rule_id == "shift_load"

        rec = recommend(make_bill(plan_type="variable"), RecommenderSettings(), rules)
        assert rec.rule_id == "variable_plan_switch"

    def test_empty_table_raises(self, make_bill):
        """Test that a table without a catch-all can fail loudly."""
        with pytest.raises(NoMatchingRuleError, match="prepaid"):
            recommend(make_bill(plan_type="prepaid"), RecommenderSettings(), rules=())
