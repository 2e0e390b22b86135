"""Mini README: Domain records for the append-only ledger.

Structure:
    * TransactionType - closed enum of the two transaction directions.
    * NewTransaction - validated draft that has not been stored yet.
    * Transaction - stored record with identifier and creation timestamp.

Amounts are always positive ``Decimal`` values; the direction lives in
``TransactionType`` so balances never depend on stored signs. Records are
frozen because the ledger only ever appends and reads.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, Union

_LEGACY_CODES = {0: "Income", 1: "Expense"}


class TransactionType(str, Enum):
    """Enumerate the supported transaction directions."""

    INCOME = "Income"
    EXPENSE = "Expense"

    @classmethod
    def from_value(cls, value: Union["TransactionType", str, int]) -> "TransactionType":
        """Coerce names in any casing, or the legacy 0/1 codes, into a member."""

        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            if value in _LEGACY_CODES:
                return cls(_LEGACY_CODES[value])
            raise ValueError(f"Unsupported transaction type: {value}")
        try:
            normalised = value.strip()
        except AttributeError as error:
            raise ValueError(f"Unsupported transaction type: {value}") from error
        if normalised.isdigit() and int(normalised) in _LEGACY_CODES:
            return cls(_LEGACY_CODES[int(normalised)])
        for member in cls:
            if member.value.lower() == normalised.lower():
                return member
        raise ValueError(f"Unsupported transaction type: {value}")

    @property
    def sign(self) -> int:
        return 1 if self is TransactionType.INCOME else -1


@dataclass(frozen=True, slots=True)
class NewTransaction:
    """Transaction draft accepted by the store's append operation."""

    transaction_type: TransactionType
    description: str
    amount: Decimal
    occurred_on: date


@dataclass(frozen=True, slots=True)
class Transaction:
    """Ledger entry as persisted by the store."""

    transaction_id: int
    transaction_type: TransactionType
    description: str
    amount: Decimal
    occurred_on: date
    created_at: datetime

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the direction applied: positive income, negative expense."""

        return self.amount * self.transaction_type.sign

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction using the JSON field names of the API."""

        return {
            "id": self.transaction_id,
            "amount": decimal_to_number(self.amount),
            "description": self.description,
            "type": self.transaction_type.value,
            "date": self.occurred_on.isoformat(),
            "createdAt": self.created_at.strftime("%Y-%m-%d %H:%M:%S"),
        }


def decimal_to_number(value: Decimal) -> Union[int, float]:
    """Render a Decimal as a JSON number, keeping whole amounts integral."""

    if value == value.to_integral_value():
        return int(value)
    return float(value)
