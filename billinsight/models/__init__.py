"""
Data Models Package

This package contains all Pydantic models used by Bill Insight.
All data flowing through the core must conform to these schemas.
"""

from billinsight.models.bill import (
    BillAnalysis,
    BillDriver,
    BillInput,
    DriverName,
    LoyaltyTier,
    PlanType,
    SavingsRecommendation,
    TierName,
    ValidationIssue,
    ValidationResult,
)
from billinsight.models.offer import (
    CategoryDisplay,
    Offer,
    OfferCategory,
    PersonaTag,
)
from billinsight.models.evaluation import BillEvaluation
from billinsight.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Bill models
    "BillAnalysis",
    "BillDriver",
    "BillInput",
    "DriverName",
    "LoyaltyTier",
    "PlanType",
    "SavingsRecommendation",
    "TierName",
    "ValidationIssue",
    "ValidationResult",
    # Offer models
    "CategoryDisplay",
    "Offer",
    "OfferCategory",
    "PersonaTag",
    # Evaluation
    "BillEvaluation",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
