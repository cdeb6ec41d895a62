"""Projected bill after acting on a savings recommendation."""

from decimal import Decimal

from billinsight.models.bill import BillAnalysis, SavingsRecommendation


def project_bill(
    analysis: BillAnalysis,
    recommendation: SavingsRecommendation,
    apply: bool,
    months_per_year: int = 12,
) -> Decimal:
    """Current bill, less one month of the annual saving when applied."""
    if not apply:
        return analysis.curr_bill
    return analysis.curr_bill - Decimal(recommendation.savings) / months_per_year
