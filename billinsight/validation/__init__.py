"""Input validation package."""

from billinsight.validation.validator import BillInputValidator, InvalidBillInputError

__all__ = ["BillInputValidator", "InvalidBillInputError"]
