"""Domain Types: identity types, field names and environment modes.

Invariants:
    - InvestmentId is a server-assigned int; TempId is a client-generated str,
      so the two namespaces can never collide
    - Column limits live here so the schema, ORM and validators agree
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

InvestmentId = NewType("InvestmentId", int)
TempId = NewType("TempId", str)


# ─── Column Limits ───────────────────────────────────────────────

FARMER_NAME_MAX_LENGTH = 255
CROP_MAX_LENGTH = 100

# NUMERIC(12, 2): ten integer digits, two decimal places
AMOUNT_PRECISION = 12
AMOUNT_SCALE = 2
AMOUNT_MAX = 10 ** (AMOUNT_PRECISION - AMOUNT_SCALE)


# ─── Enums ───────────────────────────────────────────────────────

class InvestmentField(str, Enum):
    """The three client-supplied fields of an investment."""
    FARMER_NAME = "farmer_name"
    AMOUNT = "amount"
    CROP = "crop"


class Environment(str, Enum):
    """Deployment mode; decides whether internal error details are exposed."""
    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"
