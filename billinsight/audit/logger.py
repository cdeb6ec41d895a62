"""
Audit Logger

DESIGN DECISION: Every evaluation step is logged.
This provides:
1. Traceability from input record to displayed figures
2. Debugging capability
3. A record of which rule fired

The audit logger:
- Is synchronous, like the computation core it observes
- Writes structured JSON through structlog, nothing is persisted
- Supports correlation IDs to trace the events of one evaluation
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from billinsight.config import get_settings
from billinsight.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


AUDIT_LOGGER_NAME = "billinsight.audit"

# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def _configure_stdlib_logger(level: str) -> None:
    """Attach a stream handler to the audit logger once."""
    std_logger = logging.getLogger(AUDIT_LOGGER_NAME)
    std_logger.setLevel(level)
    if not std_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        std_logger.addHandler(handler)


class AuditLogger:
    """
    Central audit logging service.

    Routes each AuditEvent to the structured log at the level
    matching its severity.
    """

    def __init__(self, log_level: Optional[str] = None):
        """
        Initialize audit logger.

        Args:
            log_level: Minimum level to emit. Defaults to the app settings.
        """
        _configure_stdlib_logger(log_level or get_settings().app.log_level)
        self._logger = structlog.get_logger(AUDIT_LOGGER_NAME)

    def log(self, event: AuditEvent) -> AuditEvent:
        """
        Log an audit event.

        Returns the event so callers can keep a trail if they want one.
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        return event

    def log_validation_passed(
        self,
        warnings: list[str],
        correlation_id: UUID,
    ) -> None:
        """Log successful input validation."""
        self.log(AuditEventBuilder.validation_passed(
            warnings=warnings,
            correlation_id=correlation_id,
        ))

    def log_validation_failed(
        self,
        stage: str,
        issues: list[dict],
        correlation_id: UUID,
    ) -> None:
        """Log validation failure."""
        self.log(AuditEventBuilder.validation_failed(
            stage=stage,
            issues=issues,
            correlation_id=correlation_id,
        ))

    def log_evaluation_started(
        self,
        plan_type: str,
        correlation_id: UUID,
    ) -> None:
        """Log the start of an evaluation."""
        self.log(AuditEventBuilder.evaluation_started(
            plan_type=plan_type,
            correlation_id=correlation_id,
        ))

    def log_analysis_completed(
        self,
        delta: str,
        drivers: dict[str, str],
        correlation_id: UUID,
    ) -> None:
        """Log the variance breakdown."""
        self.log(AuditEventBuilder.analysis_completed(
            delta=delta,
            drivers=drivers,
            correlation_id=correlation_id,
        ))

    def log_recommendation_selected(
        self,
        rule_id: str,
        savings: int,
        correlation_id: UUID,
    ) -> None:
        """Log which recommendation rule fired."""
        self.log(AuditEventBuilder.recommendation_selected(
            rule_id=rule_id,
            savings=savings,
            correlation_id=correlation_id,
        ))

    def log_tier_assigned(
        self,
        tier: str,
        correlation_id: UUID,
    ) -> None:
        """Log the loyalty tier."""
        self.log(AuditEventBuilder.tier_assigned(
            tier=tier,
            correlation_id=correlation_id,
        ))

    def log_offers_matched(
        self,
        partners: list[str],
        personas: list[str],
        correlation_id: UUID,
    ) -> None:
        """Log matched offers."""
        self.log(AuditEventBuilder.offers_matched(
            partners=partners,
            personas=personas,
            correlation_id=correlation_id,
        ))

    def log_evaluation_completed(
        self,
        projected_bill: str,
        correlation_id: UUID,
    ) -> None:
        """Log the end of an evaluation."""
        self.log(AuditEventBuilder.evaluation_completed(
            projected_bill=projected_bill,
            correlation_id=correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of an evaluation and pass it through every step.
    """
    return uuid4()
