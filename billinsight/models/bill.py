"""
Core Data Models for Bill Insight

These models define the strict schemas for everything flowing through the
computation core. They are designed to:
1. Enforce type safety at runtime
2. Be immutable once created (frozen)
3. Serialize to the camelCase records the presentation layer renders

DESIGN DECISION: Money and consumption are Decimal, never float.
The variance breakdown must reconcile to the bill delta exactly, and
Decimal addition is exact where binary floating point is not.
"""

from datetime import datetime
from decimal import Context, Decimal, localcontext
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


# Wide enough that products and sums of float-derived inputs never round.
# Every bill amount and effect is computed, and reconciled, under it.
EXACT_CONTEXT = Context(prec=120)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class PlanType(str, Enum):
    """
    Plan types the recommendation rules know about.

    BillInput.plan_type is a free string: unknown plans are allowed and
    simply fall through to the default rule.
    """
    FIXED = "fixed"
    VARIABLE = "variable"


class TierName(str, Enum):
    """Loyalty tiers, declared from lowest to highest."""
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"

    @property
    def rank(self) -> int:
        """Position of the tier, 0 for the lowest."""
        return list(TierName).index(self)


class DriverName(str, Enum):
    """Causal components of a bill change, in display order."""
    USAGE = "Usage Change"
    RATE = "Rate Change"
    SEASONAL = "Seasonal Effect"


# =============================================================================
# INPUT MODEL
# =============================================================================

class BillInput(BaseModel):
    """
    One raw bill record covering the previous and current billing periods.

    Immutable per evaluation. Field names match the bill record keys
    supplied by the caller.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    prev_kwh: Decimal = Field(..., ge=0, description="Previous period consumption (kWh)")
    curr_kwh: Decimal = Field(..., ge=0, description="Current period consumption (kWh)")
    prev_rate: Decimal = Field(..., gt=0, description="Previous price per kWh")
    curr_rate: Decimal = Field(..., gt=0, description="Current price per kWh")
    days_prev: int = Field(..., gt=0, description="Previous billing period length in days")
    days_curr: int = Field(..., gt=0, description="Current billing period length in days")
    weather_idx_prev: Decimal = Field(..., description="Climate severity index, previous period")
    weather_idx_curr: Decimal = Field(..., description="Climate severity index, current period")
    plan_type: str = Field(..., min_length=1, max_length=50)
    tenure_months: int = Field(..., ge=0, description="Months the account has been active")
    digital_activity_score: Decimal = Field(
        ...,
        ge=0,
        le=100,
        description="Engagement with digital account features (0-100)"
    )

    @field_validator(
        'prev_kwh', 'curr_kwh', 'prev_rate', 'curr_rate',
        'weather_idx_prev', 'weather_idx_curr', 'digital_activity_score',
        mode='before',
    )
    @classmethod
    def float_to_decimal(cls, v):
        """Convert floats through their shortest repr, so 0.12 stays 0.12."""
        if isinstance(v, float):
            return Decimal(repr(v))
        return v


# =============================================================================
# OUTPUT MODELS
# =============================================================================

class _ResultModel(BaseModel):
    """Frozen result record that dumps to camelCase with by_alias=True."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class BillDriver(_ResultModel):
    """
    One component of the bill change.

    `percentage` is a display weight relative to |delta|, not a share:
    it can be negative or exceed 100.
    """
    name: DriverName
    value: Decimal
    percentage: Decimal


class BillAnalysis(_ResultModel):
    """
    Month-over-month breakdown of a bill change.

    usage_effect + rate_effect + seasonal_effect == delta, exactly.
    """
    prev_bill: Decimal
    curr_bill: Decimal
    delta: Decimal
    usage_effect: Decimal
    rate_effect: Decimal
    seasonal_effect: Decimal
    weather_estimate: Decimal = Field(
        ...,
        description="Weather-index sensitivity estimate of the seasonal component"
    )
    drivers: tuple[BillDriver, ...]

    @model_validator(mode='after')
    def validate_reconciliation(self) -> 'BillAnalysis':
        """The effects must account for the whole change."""
        with localcontext(EXACT_CONTEXT):
            total = self.usage_effect + self.rate_effect + self.seasonal_effect
        if total != self.delta:
            raise ValueError(
                f"Effects ({total}) do not reconcile to bill delta ({self.delta})"
            )
        return self


class SavingsRecommendation(_ResultModel):
    """A single savings recommendation. `savings` is annual, in whole currency units."""
    title: str
    recommendation: str
    savings: int = Field(..., ge=0)
    has_recommendation: bool
    rule_id: str = Field(..., description="Name of the rule that produced this recommendation")


class LoyaltyTier(_ResultModel):
    """Loyalty classification and the fixed progress indicator of its rule."""
    name: TierName
    subtext: str
    benefits: tuple[str, ...]
    progress_to_next: int = Field(..., ge=0, le=100)
    actions_to_next: int = Field(..., ge=0)


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'suspicious_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of the two-stage input validation.

    Stage 1: Schema validation (types, ranges, required fields)
    Stage 2: Semantic validation (plausibility checks, warnings only)
    """

    validation_id: UUID = Field(
        default_factory=uuid4
    )
    validated_at: datetime = Field(
        default_factory=datetime.utcnow
    )

    schema_valid: bool = Field(
        ...,
        description="Did schema validation pass?"
    )
    semantic_valid: bool = Field(
        ...,
        description="Did semantic validation run? Its checks only warn, so it passes whenever stage 1 did"
    )
    is_valid: bool = Field(
        ...,
        description="Overall validation result"
    )

    # Only set when schema validation passed
    bill: Optional[BillInput] = None

    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")
