"""Mini README: Input contract for creating ledger transactions.

Structure:
    * MAX_DESCRIPTION_LENGTH - upper bound for descriptions.
    * validate_new_transaction - checks raw fields and builds a NewTransaction.

Every rule is evaluated so callers receive all field messages in one
``ValidationError``. Validation always happens before the store is touched.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional

from ..errors import ValidationError
from .models import NewTransaction, TransactionType

MAX_DESCRIPTION_LENGTH = 200


def validate_new_transaction(
    *,
    amount: object,
    description: object,
    transaction_type: object,
    occurred_on: object,
    today: date,
) -> NewTransaction:
    """Return a validated draft or raise ``ValidationError`` listing every problem.

    ``today`` is the caller's calendar date; ``occurred_on`` may not be later
    than it.
    """

    errors: Dict[str, List[str]] = {}

    parsed_amount = _parse_amount(amount, errors)

    text = description if isinstance(description, str) else ""
    if not text.strip():
        errors.setdefault("description", []).append("Description is required.")
    elif len(text) > MAX_DESCRIPTION_LENGTH:
        errors.setdefault("description", []).append(
            f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters."
        )

    parsed_type: Optional[TransactionType] = None
    if transaction_type is None or transaction_type == "":
        errors.setdefault("type", []).append("Transaction type is required.")
    else:
        try:
            parsed_type = TransactionType.from_value(transaction_type)  # type: ignore[arg-type]
        except ValueError:
            errors.setdefault("type", []).append("Transaction type must be Income or Expense.")

    parsed_date = _parse_date(occurred_on, errors)
    if parsed_date is not None and parsed_date > today:
        errors.setdefault("date", []).append("Date cannot be in the future.")

    if errors:
        raise ValidationError(errors)
    return NewTransaction(
        transaction_type=parsed_type,  # type: ignore[arg-type]
        description=text,
        amount=parsed_amount,  # type: ignore[arg-type]
        occurred_on=parsed_date,  # type: ignore[arg-type]
    )


def _parse_amount(value: object, errors: Dict[str, List[str]]) -> Optional[Decimal]:
    """Coerce the amount into a finite positive Decimal."""

    if value is None or value == "" or isinstance(value, bool):
        errors.setdefault("amount", []).append("Amount is required.")
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        errors.setdefault("amount", []).append("Amount must be a number.")
        return None
    if not amount.is_finite():
        errors.setdefault("amount", []).append("Amount must be a number.")
        return None
    if amount <= 0:
        errors.setdefault("amount", []).append("Amount must be greater than 0.")
        return None
    return amount


def _parse_date(value: object, errors: Dict[str, List[str]]) -> Optional[date]:
    """Accept date objects, datetimes, or ISO formatted strings."""

    if value is None or value == "":
        errors.setdefault("date", []).append("Date is required.")
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    errors.setdefault("date", []).append("Date must be an ISO formatted calendar date.")
    return None
