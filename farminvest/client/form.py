"""Investment Form: turns raw text inputs into a NewInvestment draft.

Invariants:
    - Text fields are trimmed before they are checked or submitted
    - amount text must parse as a finite decimal number > 0
    - All failing fields are reported together (InvestmentValidationError)
"""

import re

from farminvest.client.types import NewInvestment
from farminvest.core.errors import InvestmentValidationError
from farminvest.core.validation import collect_violations


# Commas only as thousands separators: "1,500.75" but never "1,5"
_GROUPED = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d*)?$")


def parse_amount(text: str) -> float | None:
    """Decimal text to float; None when it is not a number."""
    cleaned = text.strip()
    if _GROUPED.match(cleaned):
        cleaned = cleaned.replace(",", "")
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


class InvestmentForm:
    """The three inputs of the new-investment form."""

    def __init__(self, farmer_name: str = "", amount: str = "", crop: str = ""):
        self.farmer_name = farmer_name
        self.amount = amount
        self.crop = crop

    def to_draft(self) -> NewInvestment:
        data = {
            "farmer_name": self.farmer_name.strip(),
            "amount": parse_amount(self.amount),
            "crop": self.crop.strip(),
        }
        violations = collect_violations(data)
        if violations:
            raise InvestmentValidationError(violations)
        return NewInvestment(**data)

    def reset(self) -> None:
        self.farmer_name = ""
        self.amount = ""
        self.crop = ""

    @classmethod
    def parse(cls, farmer_name: str, amount: str, crop: str) -> NewInvestment:
        return cls(farmer_name, amount, crop).to_draft()
