"""Mini README: Append-only ledger stores.

Structure:
    * LedgerStore - abstract interface: read everything, append one draft.
    * InMemoryLedgerStore - process-local store used by tests and demos.
    * SqliteLedgerStore - durable store backed by a single SQLite table.
    * create_store - pick a backend from the runtime settings.

Stores assign identifiers and creation timestamps; callers never supply
them. Records are returned in insertion order and are never updated or
deleted. Backend failures surface as ``StoreError`` with the cause chained.
"""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from ..configuration import AccountingSettings
from ..errors import StoreError
from ..logging_utils import get_logger
from .models import NewTransaction, Transaction, TransactionType

LOGGER = get_logger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LedgerStore(ABC):
    """Ordered, append-only collection of transactions."""

    def __init__(self, *, clock: Optional[Clock] = None) -> None:
        self._clock = clock or _utc_now

    @abstractmethod
    def all(self) -> List[Transaction]:
        """Return every stored transaction in insertion order."""

    @abstractmethod
    def append(self, draft: NewTransaction) -> Transaction:
        """Persist a validated draft and return the stored record."""

    def close(self) -> None:
        """Release backend resources; a no-op unless overridden."""


class InMemoryLedgerStore(LedgerStore):
    """Keep transactions in a dictionary keyed by a monotonic sequence."""

    def __init__(
        self,
        transactions: Optional[Iterable[Transaction]] = None,
        *,
        clock: Optional[Clock] = None,
    ) -> None:
        super().__init__(clock=clock)
        self._transactions: Dict[int, Transaction] = {}
        self._sequence = 0
        for transaction in transactions or ():
            self._register(transaction)
        LOGGER.debug("In-memory ledger initialised with %s transactions", len(self._transactions))

    def _register(self, transaction: Transaction) -> None:
        """Store a transaction ensuring identifiers remain unique."""

        if transaction.transaction_id in self._transactions:
            raise StoreError(f"Transaction {transaction.transaction_id} already exists.")
        self._transactions[transaction.transaction_id] = transaction
        self._sequence = max(self._sequence, transaction.transaction_id)

    def all(self) -> List[Transaction]:
        return list(self._transactions.values())

    def append(self, draft: NewTransaction) -> Transaction:
        self._sequence += 1
        transaction = Transaction(
            transaction_id=self._sequence,
            transaction_type=draft.transaction_type,
            description=draft.description,
            amount=draft.amount,
            occurred_on=draft.occurred_on,
            created_at=self._clock(),
        )
        self._register(transaction)
        LOGGER.info("Recorded transaction %s (%s)", transaction.transaction_id, transaction.transaction_type.value)
        return transaction


class SqliteLedgerStore(LedgerStore):
    """Persist transactions in a single SQLite ``transactions`` table.

    Amounts are stored as text so Decimal values round-trip exactly.
    """

    def __init__(self, database_path: Path | str, *, clock: Optional[Clock] = None) -> None:
        super().__init__(clock=clock)
        self.database_path = str(database_path)
        if self.database_path != ":memory:":
            Path(self.database_path).parent.mkdir(parents=True, exist_ok=True)
        self._conn: Optional[sqlite3.Connection] = None
        self.initialize()

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            try:
                self._conn = sqlite3.connect(self.database_path, check_same_thread=False)
            except sqlite3.Error as error:
                raise StoreError(f"Unable to open ledger database {self.database_path}") from error
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def initialize(self) -> None:
        """Create the schema when it does not exist yet."""

        conn = self.get_connection()
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS transactions (
                    id          INTEGER PRIMARY KEY AUTOINCREMENT,
                    amount      TEXT NOT NULL,
                    description TEXT NOT NULL,
                    type        TEXT NOT NULL CHECK(type IN ('Income','Expense')),
                    date        TEXT NOT NULL,
                    created_at  TEXT NOT NULL
                );
                CREATE INDEX IF NOT EXISTS idx_transactions_date ON transactions(date);
            """)
            conn.commit()
        except sqlite3.Error as error:
            raise StoreError("Unable to initialise the ledger schema") from error
        LOGGER.debug("SQLite ledger ready at %s", self.database_path)

    def _row_to_model(self, row: sqlite3.Row) -> Transaction:
        return Transaction(
            transaction_id=row["id"],
            transaction_type=TransactionType(row["type"]),
            description=row["description"],
            amount=Decimal(row["amount"]),
            occurred_on=date.fromisoformat(row["date"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def all(self) -> List[Transaction]:
        conn = self.get_connection()
        try:
            rows = conn.execute("SELECT * FROM transactions ORDER BY id ASC").fetchall()
        except sqlite3.Error as error:
            raise StoreError("Unable to read transactions") from error
        return [self._row_to_model(row) for row in rows]

    def append(self, draft: NewTransaction) -> Transaction:
        conn = self.get_connection()
        created_at = self._clock()
        try:
            cursor = conn.execute(
                """INSERT INTO transactions (amount, description, type, date, created_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (
                    str(draft.amount),
                    draft.description,
                    draft.transaction_type.value,
                    draft.occurred_on.isoformat(),
                    created_at.isoformat(),
                ),
            )
            conn.commit()
        except sqlite3.Error as error:
            conn.rollback()
            raise StoreError("Unable to record transaction") from error
        transaction = Transaction(
            transaction_id=cursor.lastrowid,
            transaction_type=draft.transaction_type,
            description=draft.description,
            amount=draft.amount,
            occurred_on=draft.occurred_on,
            created_at=created_at,
        )
        LOGGER.info("Recorded transaction %s (%s)", transaction.transaction_id, transaction.transaction_type.value)
        return transaction

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None


def create_store(settings: AccountingSettings) -> LedgerStore:
    """Instantiate the ledger backend named in the settings."""

    if settings.storage_backend == "memory":
        LOGGER.info("Using in-memory ledger store")
        return InMemoryLedgerStore()
    LOGGER.info("Using SQLite ledger store at %s", settings.database_path)
    return SqliteLedgerStore(settings.database_path)
