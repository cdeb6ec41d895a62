"""Computation core: variance analysis, savings and loyalty rules."""

from billinsight.analysis.loyalty import TierRule, build_tier_rules, classify_tier
from billinsight.analysis.projection import project_bill
from billinsight.analysis.recommender import (
    DEFAULT_RULES,
    NoMatchingRuleError,
    RecommendationRule,
    recommend,
)
from billinsight.analysis.variance import analyze, display_weight

__all__ = [
    "DEFAULT_RULES",
    "NoMatchingRuleError",
    "RecommendationRule",
    "TierRule",
    "analyze",
    "build_tier_rules",
    "classify_tier",
    "display_weight",
    "project_bill",
    "recommend",
]
