"""Mini README: Tests covering the transaction creation contract.

Structure:
    * boundary tests - zero amounts, 200/201 character descriptions, dates.
    * coercion tests - type names in any casing and the legacy numeric codes.
    * aggregation test - every broken field is reported in one error.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from simple_accounting.errors import ValidationError
from simple_accounting.ledger import (
    MAX_DESCRIPTION_LENGTH,
    TransactionType,
    validate_new_transaction,
)

TODAY = date(2024, 6, 15)


def _validate(**overrides):
    fields = {
        "amount": "1000",
        "description": "Salary",
        "transaction_type": "Income",
        "occurred_on": TODAY,
    }
    fields.update(overrides)
    return validate_new_transaction(today=TODAY, **fields)


def test_valid_input_builds_draft() -> None:
    """Valid fields become a NewTransaction with coerced types."""

    draft = _validate()

    assert draft.amount == Decimal("1000")
    assert draft.description == "Salary"
    assert draft.transaction_type is TransactionType.INCOME
    assert draft.occurred_on == TODAY


@pytest.mark.parametrize("amount", [0, "0", "-5", Decimal("-0.01")])
def test_non_positive_amount_is_rejected(amount) -> None:
    """Zero and negative amounts are refused."""

    with pytest.raises(ValidationError) as caught:
        _validate(amount=amount)

    assert "amount" in caught.value.field_errors


@pytest.mark.parametrize("amount", [None, "", "abc", "NaN", True])
def test_missing_or_non_numeric_amount_is_rejected(amount) -> None:
    """Absent or non-numeric amounts are refused with a specific message."""

    with pytest.raises(ValidationError) as caught:
        _validate(amount=amount)

    assert list(caught.value.field_errors) == ["amount"]


def test_description_of_exactly_max_length_is_accepted() -> None:
    """A description at the length limit is accepted."""

    draft = _validate(description="x" * MAX_DESCRIPTION_LENGTH)

    assert len(draft.description) == 200


def test_description_over_max_length_is_rejected() -> None:
    """A description one character over the limit is refused."""

    with pytest.raises(ValidationError) as caught:
        _validate(description="x" * (MAX_DESCRIPTION_LENGTH + 1))

    assert caught.value.field_errors["description"] == ["Description must be at most 200 characters."]


@pytest.mark.parametrize("description", [None, "", "   "])
def test_blank_description_is_rejected(description) -> None:
    """Empty or whitespace-only descriptions are refused."""

    with pytest.raises(ValidationError) as caught:
        _validate(description=description)

    assert caught.value.field_errors["description"] == ["Description is required."]


def test_today_is_accepted_and_tomorrow_rejected() -> None:
    """Today is a valid date and tomorrow is in the future."""

    assert _validate(occurred_on=TODAY).occurred_on == TODAY

    with pytest.raises(ValidationError) as caught:
        _validate(occurred_on=TODAY + timedelta(days=1))

    assert caught.value.field_errors["date"] == ["Date cannot be in the future."]


def test_dates_may_be_iso_strings_or_datetimes() -> None:
    """ISO strings and datetimes are both reduced to calendar dates."""

    assert _validate(occurred_on="2024-06-01").occurred_on == date(2024, 6, 1)
    assert _validate(occurred_on="2024-06-01T00:00:00").occurred_on == date(2024, 6, 1)
    assert _validate(occurred_on=datetime(2024, 6, 2, 13, 30)).occurred_on == date(2024, 6, 2)


def test_invalid_date_is_rejected() -> None:
    """Unparseable dates are refused."""

    with pytest.raises(ValidationError) as caught:
        _validate(occurred_on="15/06/2024")

    assert "date" in caught.value.field_errors


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Income", TransactionType.INCOME),
        ("expense", TransactionType.EXPENSE),
        ("  EXPENSE ", TransactionType.EXPENSE),
        (0, TransactionType.INCOME),
        (1, TransactionType.EXPENSE),
        ("1", TransactionType.EXPENSE),
        (TransactionType.INCOME, TransactionType.INCOME),
    ],
)
def test_transaction_type_coercion(raw, expected) -> None:
    """Names in any case and the legacy codes map onto TransactionType."""

    assert _validate(transaction_type=raw).transaction_type is expected


@pytest.mark.parametrize("raw", [None, "", "Transfer", 2, 1.5])
def test_unknown_transaction_type_is_rejected(raw) -> None:
    """Types other than Income and Expense are refused."""

    with pytest.raises(ValidationError) as caught:
        _validate(transaction_type=raw)

    assert "type" in caught.value.field_errors


def test_all_field_errors_are_reported_together() -> None:
    """Every failing field is reported in a single ValidationError."""

    with pytest.raises(ValidationError) as caught:
        validate_new_transaction(
            amount=0,
            description="",
            transaction_type="Gift",
            occurred_on=TODAY + timedelta(days=3),
            today=TODAY,
        )

    assert set(caught.value.field_errors) == {"amount", "description", "type", "date"}
    assert "amount" in str(caught.value)
