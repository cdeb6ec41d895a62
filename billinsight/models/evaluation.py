"""
Evaluation bundle returned to the presentation layer.
"""

from decimal import Decimal
from uuid import UUID

from pydantic import Field

from billinsight.models.bill import (
    BillAnalysis,
    BillInput,
    LoyaltyTier,
    SavingsRecommendation,
    _ResultModel,
)
from billinsight.models.offer import Offer


class BillEvaluation(_ResultModel):
    """Everything computed for one BillInput in one pass."""

    correlation_id: UUID
    bill: BillInput
    analysis: BillAnalysis
    recommendation: SavingsRecommendation
    tier: LoyaltyTier
    offers: tuple[Offer, ...] = ()
    recommendation_applied: bool = False
    projected_bill: Decimal = Field(
        ...,
        description="Current bill, less one month of savings when the recommendation is applied"
    )
