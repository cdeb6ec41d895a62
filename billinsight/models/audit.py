"""
Audit Models for Bill Insight

Every evaluation step emits an audit event. This provides:
1. Traceability from a raw bill record to the figures shown to a customer
2. Debugging information when a breakdown looks wrong
3. A record of which rule fired for each recommendation and tier

DESIGN DECISION: Audit events only go to the structured log.
There is no persistent audit store.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every step of an evaluation has its own event type.
    """
    # Input
    VALIDATION_PASSED = "validation_passed"
    VALIDATION_FAILED = "validation_failed"

    # Evaluation
    EVALUATION_STARTED = "evaluation_started"
    ANALYSIS_COMPLETED = "analysis_completed"
    RECOMMENDATION_SELECTED = "recommendation_selected"
    TIER_ASSIGNED = "tier_assigned"
    OFFERS_MATCHED = "offers_matched"
    EVALUATION_COMPLETED = "evaluation_completed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant step creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation - all events of one evaluation share this
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate the events of one evaluation"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.evaluation_started(correlation_id, plan_type)
        event = AuditEventBuilder.tier_assigned("Gold", correlation_id)
    """

    @staticmethod
    def validation_passed(
        warnings: list[str],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_PASSED,
            severity=AuditSeverity.WARNING if warnings else AuditSeverity.INFO,
            correlation_id=correlation_id,
            description=f"Bill input validated with {len(warnings)} warnings",
            details={
                "warnings": warnings,
            },
        )

    @staticmethod
    def validation_failed(
        stage: str,
        issues: list[dict],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"{stage.capitalize()} validation failed with {len(issues)} issues",
            details={
                "stage": stage,
                "issues": issues,
            },
        )

    @staticmethod
    def evaluation_started(
        plan_type: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EVALUATION_STARTED,
            correlation_id=correlation_id,
            description=f"Evaluation started for {plan_type} plan",
            details={
                "plan_type": plan_type,
            },
        )

    @staticmethod
    def analysis_completed(
        delta: str,
        drivers: dict[str, str],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ANALYSIS_COMPLETED,
            correlation_id=correlation_id,
            description=f"Bill change of {delta} decomposed",
            details={
                "delta": delta,
                "drivers": drivers,
            },
        )

    @staticmethod
    def recommendation_selected(
        rule_id: str,
        savings: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECOMMENDATION_SELECTED,
            correlation_id=correlation_id,
            description=f"Recommendation rule '{rule_id}' fired",
            details={
                "rule_id": rule_id,
                "savings": savings,
            },
        )

    @staticmethod
    def tier_assigned(
        tier: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TIER_ASSIGNED,
            correlation_id=correlation_id,
            description=f"Loyalty tier assigned: {tier}",
            details={
                "tier": tier,
            },
        )

    @staticmethod
    def offers_matched(
        partners: list[str],
        personas: list[str],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OFFERS_MATCHED,
            correlation_id=correlation_id,
            description=f"{len(partners)} offers matched",
            details={
                "partners": partners,
                "personas": personas,
            },
        )

    @staticmethod
    def evaluation_completed(
        projected_bill: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EVALUATION_COMPLETED,
            correlation_id=correlation_id,
            description="Evaluation completed",
            details={
                "projected_bill": projected_bill,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
