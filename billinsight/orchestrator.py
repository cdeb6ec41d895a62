"""
Evaluation Orchestrator for Bill Insight

Ties the three core computations together for a caller:
1. Validate (raw record → BillInput), optional
2. Analyze (bill change breakdown)
3. Recommend (one savings recommendation)
4. Classify (loyalty tier)
5. Match offers and project the bill

DESIGN DECISION: The orchestrator is the only place that knows about all
components. The analyzer, recommender and classifier never call each
other; each receives the same BillInput. Every step is audited under
one correlation ID.
"""

from typing import Any, Iterable, Optional
from uuid import UUID

from billinsight.analysis import analyze, classify_tier, project_bill, recommend
from billinsight.audit import AuditLogger, create_correlation_id
from billinsight.config import Settings, get_settings
from billinsight.models.bill import BillInput
from billinsight.models.evaluation import BillEvaluation
from billinsight.models.offer import Offer
from billinsight.offers import match_offers, target_personas
from billinsight.validation import BillInputValidator, InvalidBillInputError


class BillEvaluationFlow:
    """
    Orchestrates one evaluation of a bill record.

    Flow:
    1. Validate → only for raw records (evaluate_raw)
    2. Analyze → Recommend → Classify, all on the same BillInput
    3. Match offers → Project bill
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        validator: Optional[BillInputValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        settings = settings or get_settings()
        self._analyzer_settings = settings.analyzer
        self._recommender_settings = settings.recommender
        self._loyalty_settings = settings.loyalty
        self._offer_settings = settings.offers
        self._validator = validator or BillInputValidator(settings.validation)
        self._audit_logger = audit_logger

    def evaluate(
        self,
        bill: BillInput,
        offers: Iterable[Offer] = (),
        apply_recommendation: bool = False,
        correlation_id: Optional[UUID] = None,
    ) -> BillEvaluation:
        """
        Run every computation on a validated bill.

        Args:
            bill: Validated bill record
            offers: Offer catalog to match against
            apply_recommendation: Project the bill as if the recommendation were taken
            correlation_id: Ties the audit events of this evaluation together

        Returns:
            BillEvaluation bundling all results
        """
        correlation_id = correlation_id or create_correlation_id()

        if self._audit_logger:
            self._audit_logger.log_evaluation_started(
                plan_type=bill.plan_type,
                correlation_id=correlation_id,
            )

        try:
            analysis = analyze(bill, self._analyzer_settings)
            recommendation = recommend(bill, self._recommender_settings)
            tier = classify_tier(bill, self._loyalty_settings)
            matched = match_offers(bill, offers, self._offer_settings)
            projected = project_bill(
                analysis,
                recommendation,
                apply_recommendation,
                self._recommender_settings.months_per_year,
            )
        except Exception as e:
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type=type(e).__name__,
                    error_message=str(e),
                    details={"plan_type": bill.plan_type},
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_analysis_completed(
                delta=str(analysis.delta),
                drivers={driver.name.value: str(driver.value) for driver in analysis.drivers},
                correlation_id=correlation_id,
            )
            self._audit_logger.log_recommendation_selected(
                rule_id=recommendation.rule_id,
                savings=recommendation.savings,
                correlation_id=correlation_id,
            )
            self._audit_logger.log_tier_assigned(
                tier=tier.name.value,
                correlation_id=correlation_id,
            )
            self._audit_logger.log_offers_matched(
                partners=[offer.partner for offer in matched],
                personas=target_personas(bill, self._offer_settings),
                correlation_id=correlation_id,
            )
            self._audit_logger.log_evaluation_completed(
                projected_bill=str(projected),
                correlation_id=correlation_id,
            )

        return BillEvaluation(
            correlation_id=correlation_id,
            bill=bill,
            analysis=analysis,
            recommendation=recommendation,
            tier=tier,
            offers=tuple(matched),
            recommendation_applied=apply_recommendation,
            projected_bill=projected,
        )

    def evaluate_raw(
        self,
        data: dict[str, Any],
        offers: Iterable[Offer] = (),
        apply_recommendation: bool = False,
        correlation_id: Optional[UUID] = None,
    ) -> BillEvaluation:
        """
        Validate a raw bill record, then evaluate it.

        Semantic warnings are logged but do not block evaluation.

        Raises:
            InvalidBillInputError: the record failed schema validation
        """
        correlation_id = correlation_id or create_correlation_id()

        result = self._validator.validate(data)

        if result.bill is None:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    stage="schema",
                    issues=[issue.model_dump() for issue in result.issues],
                    correlation_id=correlation_id,
                )
            raise InvalidBillInputError(result)

        if self._audit_logger:
            self._audit_logger.log_validation_passed(
                warnings=result.warnings,
                correlation_id=correlation_id,
            )

        return self.evaluate(
            result.bill,
            offers=offers,
            apply_recommendation=apply_recommendation,
            correlation_id=correlation_id,
        )


def create_evaluation_flow(with_audit: bool = True) -> BillEvaluationFlow:
    """
    Create an evaluation flow wired to the loaded settings.

    Call this once at startup and reuse the flow.
    """
    settings = get_settings()
    audit_logger = AuditLogger(settings.app.log_level) if with_audit else None
    return BillEvaluationFlow(settings=settings, audit_logger=audit_logger)
