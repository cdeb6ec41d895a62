"""
Savings Recommender

Picks exactly one recommendation for a bill by walking an ordered rule
table; the first rule whose predicate holds wins.

    1. variable plan                      -> switch to a fixed-index blend
    2. fixed plan with low digital usage  -> enable digital features
    3. anything else                      -> plan already optimized

Rule 1 outranks rule 2: a variable-plan customer with low digital
activity is told to switch plans. The last rule always matches, so the
table is exhaustive.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Callable, Optional, Sequence

from billinsight.config import RecommenderSettings, get_settings
from billinsight.models.bill import (
    EXACT_CONTEXT,
    BillInput,
    PlanType,
    SavingsRecommendation,
)


class NoMatchingRuleError(LookupError):
    """Raised when a custom rule table has no rule for a bill."""
    pass


@dataclass(frozen=True)
class RecommendationRule:
    """One row of the recommendation table."""

    rule_id: str
    applies: Callable[[BillInput, RecommenderSettings], bool]
    build: Callable[[BillInput, RecommenderSettings], SavingsRecommendation]


def annualized_plan_savings(bill: BillInput, settings: RecommenderSettings) -> int:
    """
    Yearly saving from leaving a variable plan, to the nearest whole unit.

    Halves round up, so 38.5 becomes 39.
    """
    with localcontext(EXACT_CONTEXT):
        curr_bill = bill.curr_kwh * bill.curr_rate
        monthly = curr_bill * Decimal(str(settings.variable_plan_savings_rate))
        annual = monthly * settings.months_per_year
        whole = annual.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(whole)


# Predicates

def _is_variable_plan(bill: BillInput, settings: RecommenderSettings) -> bool:
    return bill.plan_type == PlanType.VARIABLE.value


def _is_fixed_plan_with_low_activity(bill: BillInput, settings: RecommenderSettings) -> bool:
    threshold = Decimal(str(settings.low_digital_activity_threshold))
    return (
        bill.plan_type == PlanType.FIXED.value
        and bill.digital_activity_score < threshold
    )


def _always(bill: BillInput, settings: RecommenderSettings) -> bool:
    return True


# Builders

def _switch_to_fixed_index(bill: BillInput, settings: RecommenderSettings) -> SavingsRecommendation:
    return SavingsRecommendation(
        title="Switch to Fixed-Index Blend",
        recommendation="Lock in predictable pricing and avoid rate volatility",
        savings=annualized_plan_savings(bill, settings),
        has_recommendation=True,
        rule_id="variable_plan_switch",
    )


def _enable_digital_features(bill: BillInput, settings: RecommenderSettings) -> SavingsRecommendation:
    return SavingsRecommendation(
        title="Enable Digital Features",
        recommendation="Get autopay discounts and real-time monitoring",
        savings=settings.digital_enablement_savings,
        has_recommendation=True,
        rule_id="digital_enablement",
    )


def _already_optimized(bill: BillInput, settings: RecommenderSettings) -> SavingsRecommendation:
    return SavingsRecommendation(
        title="Your Plan is Optimized",
        recommendation="No immediate changes needed",
        savings=0,
        has_recommendation=False,
        rule_id="already_optimized",
    )


DEFAULT_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule("variable_plan_switch", _is_variable_plan, _switch_to_fixed_index),
    RecommendationRule("digital_enablement", _is_fixed_plan_with_low_activity, _enable_digital_features),
    RecommendationRule("already_optimized", _always, _already_optimized),
)


def recommend(
    bill: BillInput,
    settings: Optional[RecommenderSettings] = None,
    rules: Sequence[RecommendationRule] = DEFAULT_RULES,
) -> SavingsRecommendation:
    """
    Return the recommendation of the first matching rule.

    Args:
        bill: Validated bill record
        settings: Savings rates and thresholds. Defaults to the loaded settings.
        rules: Ordered rule table. Custom tables should end with a catch-all.

    Raises:
        NoMatchingRuleError: a custom table had no rule for this bill
    """
    settings = settings or get_settings().recommender

    for rule in rules:
        if rule.applies(bill, settings):
            return rule.build(bill, settings)

    raise NoMatchingRuleError(
        f"No recommendation rule matched plan type '{bill.plan_type}'"
    )
