"""Investment Validation: predicates and all-errors collection.

Tests cover:
    - Text checks: missing, blank, non-string, over-length
    - Amount checks: zero, negative, bool, string, NaN, infinity, column fit
    - collect_violations reports every failing field in field order
"""

import math

import pytest

from farminvest.core.domain_types import InvestmentField
from farminvest.core.validation import (
    FieldViolation, check_amount, check_text, collect_violations,
)


@pytest.mark.parametrize("value", [None, "", "   ", 12, ["Jane"]])
def test_text_rejects_missing_blank_and_non_strings(value):
    violation = check_text(InvestmentField.FARMER_NAME, value)
    assert violation == FieldViolation(
        "farmer_name",
        "farmer_name is required and must be a non-empty string",
    )


def test_text_accepts_padded_string():
    assert check_text(InvestmentField.CROP, "  Rice  ") is None


def test_text_limit_applies_to_trimmed_value():
    assert check_text(InvestmentField.CROP, " " + "x" * 100 + " ") is None
    violation = check_text(InvestmentField.CROP, "x" * 101)
    assert violation.message == "crop must be at most 100 characters"


@pytest.mark.parametrize("value", [
    None, 0, -5, -0.01, True, False, "1500", math.nan, math.inf,
])
def test_amount_rejects_non_positive_and_non_numbers(value):
    violation = check_amount(value)
    assert violation is not None
    assert violation.field == "amount"


@pytest.mark.parametrize("value", [1, 0.01, 1500, 2_500_000.75, 9_999_999_999.99])
def test_amount_accepts_positive_numbers(value):
    assert check_amount(value) is None


def test_amount_huge_integer_is_a_violation_not_an_overflow():
    violation = check_amount(10 ** 400)
    assert violation == FieldViolation(
        "amount", "amount must be less than 10000000000",
    )


@pytest.mark.parametrize("value", [10_000_000_000, 1e10, 1e300])
def test_amount_must_fit_the_column(value):
    violation = check_amount(value)
    assert violation.message == "amount must be less than 10000000000"


@pytest.mark.parametrize("value", [0.004, 1.234, 12.345])
def test_amount_rejects_more_than_two_decimals(value):
    violation = check_amount(value)
    assert violation.message == "amount must have at most 2 decimal places"


def test_collect_reports_every_field():
    violations = collect_violations({"farmer_name": "", "amount": -5, "crop": ""})
    assert [v.field for v in violations] == ["farmer_name", "amount", "crop"]


def test_collect_reports_only_failing_fields():
    violations = collect_violations(
        {"farmer_name": "Jane", "amount": 0, "crop": ""},
    )
    assert [v.field for v in violations] == ["amount", "crop"]


def test_collect_valid_input_is_empty():
    assert collect_violations(
        {"farmer_name": "Jane Smith", "amount": 1500, "crop": "Rice"},
    ) == []


def test_violation_to_dict():
    v = FieldViolation("crop", "bad")
    assert v.to_dict() == {"field": "crop", "message": "bad"}
