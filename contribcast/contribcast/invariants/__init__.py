"""
Submission rules and collection integrity checks.
"""
from .rules import MIN_DESCRIPTION_LENGTH, InvariantViolation
from .validate import ValidationReport, validate_collection, validate_contribution, validate_submission

__all__ = [
    "MIN_DESCRIPTION_LENGTH",
    "InvariantViolation",
    "ValidationReport",
    "validate_collection",
    "validate_contribution",
    "validate_submission",
]
