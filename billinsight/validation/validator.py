"""
Two-Stage Input Validation

The computation core assumes validated input. This module is what a
caller runs on a raw bill record before handing it to the core.

STAGE 1 - SCHEMA VALIDATION:
- Type checking and coercion
- Required field presence
- Range checks (non-negative consumption, positive rates, score 0-100)
- Any failure here is an error: the record cannot be evaluated

STAGE 2 - SEMANTIC VALIDATION:
- Plan type unknown to the recommendation rules
- Billing periods of very different length
- Unusually large rate change
- These are warnings: evaluation proceeds, but the figures deserve a look

IMPORTANT: Validation NEVER silently fixes issues.
It reports them for review.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import ValidationError

from billinsight.config import ValidationSettings, get_settings
from billinsight.models.bill import (
    BillInput,
    PlanType,
    ValidationIssue,
    ValidationResult,
)


class InvalidBillInputError(ValueError):
    """Raised when a raw bill record fails schema validation."""

    def __init__(self, result: ValidationResult):
        self.result = result
        fields = ", ".join(issue.field for issue in result.issues if issue.severity == "error")
        super().__init__(f"Invalid bill input ({result.error_count} errors): {fields}")


class BillInputValidator:
    """
    Validates raw bill records through a two-stage pipeline.

    Stage 2 only runs when stage 1 produced a BillInput.
    """

    def __init__(self, settings: Optional[ValidationSettings] = None):
        self._settings = settings or get_settings().validation

    def _validate_schema(
        self,
        data: dict[str, Any],
    ) -> tuple[Optional[BillInput], list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Returns: (bill_or_None, list_of_issues)
        """
        try:
            return BillInput.model_validate(data), []
        except ValidationError as e:
            issues = []
            for error in e.errors():
                field = ".".join(str(part) for part in error["loc"]) or "bill"
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="missing" if error["type"] == "missing" else "invalid_value",
                    message=f"{field}: {error['msg']}",
                    severity="error",
                    suggested_fix="Check the value supplied for this field",
                ))
            return None, issues

    def _validate_semantic(
        self,
        bill: BillInput,
    ) -> list[ValidationIssue]:
        """
        Stage 2: Semantic validation.

        Only reports warnings and info; nothing found here blocks evaluation.
        """
        issues = []

        known_plans = {plan.value for plan in PlanType}
        if bill.plan_type not in known_plans:
            issues.append(ValidationIssue(
                field="plan_type",
                issue_type="unknown_value",
                message=(
                    f"Plan type '{bill.plan_type}' is not one of "
                    f"{sorted(known_plans)}; no plan-specific advice applies"
                ),
                severity="warning",
            ))

        period_gap = abs(bill.days_curr - bill.days_prev)
        if period_gap > self._settings.max_period_length_difference_days:
            issues.append(ValidationIssue(
                field="days_curr",
                issue_type="inconsistent",
                message=(
                    f"Billing periods differ by {period_gap} days "
                    f"({bill.days_prev} vs {bill.days_curr}); usage change may reflect period length"
                ),
                severity="warning",
                suggested_fix="Please verify both billing period dates",
            ))

        rate_change = abs(bill.curr_rate - bill.prev_rate) / bill.prev_rate
        if rate_change > Decimal(str(self._settings.max_rate_change_ratio)):
            issues.append(ValidationIssue(
                field="curr_rate",
                issue_type="suspicious_value",
                message=f"Rate changed by {rate_change:.0%} between periods",
                severity="warning",
                suggested_fix="Please verify the rate was read correctly",
            ))

        if bill.prev_kwh == 0 and bill.curr_kwh == 0:
            issues.append(ValidationIssue(
                field="curr_kwh",
                issue_type="suspicious_value",
                message="No consumption recorded in either period",
                severity="info",
            ))

        return issues

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """
        Run the full two-stage validation pipeline.

        Args:
            data: Raw bill record, keyed by BillInput field names

        Returns:
            ValidationResult with the parsed bill (when stage 1 passed)
            and all issues found
        """
        all_issues = []

        bill, schema_issues = self._validate_schema(data)
        all_issues.extend(schema_issues)
        schema_valid = bill is not None

        # Semantic checks never block, so this stage passes whenever it runs
        semantic_valid = bill is not None
        if bill is not None:
            all_issues.extend(self._validate_semantic(bill))

        warnings = [issue.message for issue in all_issues if issue.severity == "warning"]

        return ValidationResult(
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            is_valid=schema_valid and semantic_valid,
            bill=bill,
            issues=all_issues,
            warnings=warnings,
        )

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """
        Summarize validation results for display.
        """
        if result.is_valid and not result.warnings:
            return "✅ All checks passed."

        lines = []

        if not result.schema_valid:
            lines.append("❌ The bill record could not be read:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please verify the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
