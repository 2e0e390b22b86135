"""Mini README: Balance and ordering rules over an in-memory transaction set.

Structure:
    * compute_balance - income minus expense across every transaction.
    * list_transactions - listing order, newest date first.
    * order_for_report - journal order, oldest date first.

The functions are pure and never mutate their input. The listing and report
orders intentionally differ: screens show the latest activity first while
the printed journal reads chronologically.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List

from .models import Transaction


def compute_balance(transactions: Iterable[Transaction]) -> Decimal:
    """Return the signed net of all income and expense amounts."""

    return sum((transaction.signed_amount for transaction in transactions), Decimal("0"))


def list_transactions(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Return transactions ordered by date, then creation time, both descending."""

    return sorted(
        transactions,
        key=lambda transaction: (transaction.occurred_on, transaction.created_at),
        reverse=True,
    )


def order_for_report(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Return transactions in chronological order for the printed journal."""

    return sorted(transactions, key=lambda transaction: transaction.occurred_on)
