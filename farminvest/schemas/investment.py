"""Investment Schemas: Pydantic models for the /api/investments boundary.

Invariants:
    - InvestmentCreate reports one error per failing field and every failing
      field at once (Pydantic collects across fields)
    - Missing fields run through the same checks (validate_default=True), so a
      missing field and an empty field produce the same message
    - Text fields are stripped before persistence

Design Decisions:
    - mode="before" validators delegate to core/validation.py: one source for
      the predicates, no lax coercion of "1500" into a number
    - PydanticCustomError with type "investment_field": the error handler can
      pass our message through verbatim
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from farminvest.core.domain_types import InvestmentField
from farminvest.core.validation import FieldViolation, check_amount, check_text

INVESTMENT_FIELD_ERROR = "investment_field"


def _raise_violation(violation: FieldViolation):
    raise PydanticCustomError(INVESTMENT_FIELD_ERROR, violation.message)


class InvestmentCreate(BaseModel):
    """Investment creation payload."""
    model_config = ConfigDict(extra="ignore")

    farmer_name: str = Field(default=None, validate_default=True)
    amount: float = Field(default=None, validate_default=True)
    crop: str = Field(default=None, validate_default=True)

    @field_validator("farmer_name", "crop", mode="before")
    @classmethod
    def check_text_field(cls, v: Any, info) -> str:
        violation = check_text(InvestmentField(info.field_name), v)
        if violation:
            _raise_violation(violation)
        return v.strip()

    @field_validator("amount", mode="before")
    @classmethod
    def check_amount_field(cls, v: Any) -> Any:
        violation = check_amount(v)
        if violation:
            _raise_violation(violation)
        return v


class InvestmentResponse(BaseModel):
    """Persisted investment as returned by list and create."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    farmer_name: str
    amount: float
    crop: str
    created_at: datetime
