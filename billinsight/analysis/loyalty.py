"""
Loyalty Tier Classifier

Assigns one tier from an ordered rule table over tenure and digital
activity. Both thresholds of a rule must hold; otherwise the next rule
down is tried. Progress figures are fixed per rule, there is no
interpolation between tiers.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from billinsight.config import LoyaltySettings, get_settings
from billinsight.models.bill import BillInput, LoyaltyTier, TierName


@dataclass(frozen=True)
class TierRule:
    """A tier and the minimum tenure and activity that unlock it."""

    min_tenure_months: int
    min_activity: Decimal  # fraction of the 0-100 score
    tier: LoyaltyTier

    def matches(self, bill: BillInput) -> bool:
        activity = bill.digital_activity_score / 100
        return (
            bill.tenure_months >= self.min_tenure_months
            and activity >= self.min_activity
        )


PLATINUM = LoyaltyTier(
    name=TierName.PLATINUM,
    subtext="Premium rewards unlocked",
    benefits=("Exclusive offers", "Priority support", "Max savings"),
    progress_to_next=100,
    actions_to_next=0,
)

GOLD = LoyaltyTier(
    name=TierName.GOLD,
    subtext="Maintain activity for 12 months to unlock Platinum",
    benefits=("Partner discounts", "Bonus rewards"),
    progress_to_next=60,
    actions_to_next=2,
)

SILVER = LoyaltyTier(
    name=TierName.SILVER,
    subtext="Engage with 2 more offers to unlock Gold",
    benefits=("Verified savings on energy bill",),
    progress_to_next=30,
    actions_to_next=2,
)


def build_tier_rules(settings: LoyaltySettings) -> tuple[TierRule, ...]:
    """Rule table for the given thresholds, highest tier first."""
    return (
        TierRule(
            min_tenure_months=settings.platinum_min_tenure_months,
            min_activity=Decimal(str(settings.platinum_min_activity)),
            tier=PLATINUM,
        ),
        TierRule(
            min_tenure_months=settings.gold_min_tenure_months,
            min_activity=Decimal(str(settings.gold_min_activity)),
            tier=GOLD,
        ),
        TierRule(min_tenure_months=0, min_activity=Decimal("0"), tier=SILVER),
    )


def classify_tier(
    bill: BillInput,
    settings: Optional[LoyaltySettings] = None,
    rules: Optional[Sequence[TierRule]] = None,
) -> LoyaltyTier:
    """
    Return the tier of the first rule the bill satisfies.

    Falls back to Silver when a custom table matches nothing.
    """
    if rules is None:
        rules = build_tier_rules(settings or get_settings().loyalty)

    for rule in rules:
        if rule.matches(bill):
            return rule.tier

    return SILVER
