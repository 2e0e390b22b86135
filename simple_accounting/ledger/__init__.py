"""Mini README: Ledger domain for Simple Accounting.

This package groups the transaction records, the balance and ordering
rules, the creation contract, and the append-only stores that hold the
ledger. The stores are interchangeable so the API and export pipeline can
run against SQLite in production and an in-memory ledger in tests.
"""

from .engine import compute_balance, list_transactions, order_for_report
from .models import NewTransaction, Transaction, TransactionType
from .store import InMemoryLedgerStore, LedgerStore, SqliteLedgerStore, create_store
from .validation import MAX_DESCRIPTION_LENGTH, validate_new_transaction

__all__ = [
    "InMemoryLedgerStore",
    "LedgerStore",
    "MAX_DESCRIPTION_LENGTH",
    "NewTransaction",
    "SqliteLedgerStore",
    "Transaction",
    "TransactionType",
    "compute_balance",
    "create_store",
    "list_transactions",
    "order_for_report",
    "validate_new_transaction",
]
