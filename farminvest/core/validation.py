"""Investment Validation: field predicates that report every violation.

Invariants:
    - Each check returns None (valid) or exactly one FieldViolation
    - collect_violations() never stops at the first failure
    - bool is rejected as an amount even though it subclasses int
    - NaN and infinities are not positive numbers
    - Accepted amounts fit NUMERIC(12, 2) unchanged: below AMOUNT_MAX and at
      most two decimal places, so storage never rounds or overflows

Design Decisions:
    - Checks return violations instead of raising, so callers (Pydantic schema,
      client form) decide how to surface them
    - FieldViolation.field is a plain str: request-level failures ("body")
      share the same shape as per-field ones
"""

import math
from dataclasses import dataclass
from typing import Any, Mapping

from farminvest.core.domain_types import (
    AMOUNT_MAX, AMOUNT_SCALE, CROP_MAX_LENGTH, FARMER_NAME_MAX_LENGTH,
    InvestmentField,
)

_TEXT_LIMITS = {
    InvestmentField.FARMER_NAME: FARMER_NAME_MAX_LENGTH,
    InvestmentField.CROP: CROP_MAX_LENGTH,
}

_AMOUNT_REQUIRED = "amount is required and must be a positive number"


@dataclass(frozen=True)
class FieldViolation:
    """One rejected field, tagged with the reason."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


def check_text(field: InvestmentField, value: Any) -> FieldViolation | None:
    """Required, non-blank string within the column limit."""
    if not isinstance(value, str) or not value.strip():
        return FieldViolation(
            field.value,
            f"{field.value} is required and must be a non-empty string",
        )
    limit = _TEXT_LIMITS[field]
    if len(value.strip()) > limit:
        return FieldViolation(
            field.value, f"{field.value} must be at most {limit} characters",
        )
    return None


def check_amount(value: Any) -> FieldViolation | None:
    """Required finite number strictly greater than zero that fits the column."""
    field = InvestmentField.AMOUNT.value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return FieldViolation(field, _AMOUNT_REQUIRED)
    # ints are compared exactly: huge JSON integers do not fit a float
    if isinstance(value, float) and not math.isfinite(value):
        return FieldViolation(field, _AMOUNT_REQUIRED)
    if value <= 0:
        return FieldViolation(field, _AMOUNT_REQUIRED)
    if value >= AMOUNT_MAX:
        return FieldViolation(field, f"amount must be less than {AMOUNT_MAX}")
    if isinstance(value, float) and round(value, AMOUNT_SCALE) != value:
        return FieldViolation(
            field, f"amount must have at most {AMOUNT_SCALE} decimal places",
        )
    return None


def collect_violations(data: Mapping[str, Any]) -> list[FieldViolation]:
    """Check all three fields and return every violation, in field order."""
    checks = [
        check_text(
            InvestmentField.FARMER_NAME,
            data.get(InvestmentField.FARMER_NAME.value),
        ),
        check_amount(data.get(InvestmentField.AMOUNT.value)),
        check_text(InvestmentField.CROP, data.get(InvestmentField.CROP.value)),
    ]
    return [v for v in checks if v is not None]
