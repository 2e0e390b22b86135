"""Mini README: Error taxonomy shared by the ledger, export pipeline and API.

Structure:
    * AccountingError - base class carrying a user-facing message and detail.
    * ValidationError - rejected input with field-level messages.
    * StoreError - persistence failure in the ledger store.
    * PdfExportError - catch-all for the PDF export path.
    * BrowserProvisioningError - headless runtime missing or not installable.
    * PdfGenerationError - browser launched but rendering or printing failed.

The API layer maps each class to an HTTP status and a generic message while
the logs keep the chained cause. Wrap foreign exceptions with
``raise SomeError(...) from error`` so ``detail`` can report the cause.
"""

from __future__ import annotations

from typing import Dict, List, Optional


class AccountingError(Exception):
    """Base class for every failure surfaced by the service."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def detail(self) -> Optional[str]:
        """Short diagnostic string describing the wrapped cause, if any."""

        cause = self.__cause__
        if cause is None:
            return None
        return str(cause) or type(cause).__name__


class ValidationError(AccountingError):
    """Raised when a transaction draft breaks the input contract."""

    def __init__(self, field_errors: Dict[str, List[str]]) -> None:
        super().__init__("Transaction input is invalid.")
        self.field_errors = {field: list(messages) for field, messages in field_errors.items()}

    def __str__(self) -> str:
        parts = [f"{field}: {'; '.join(messages)}" for field, messages in self.field_errors.items()]
        return f"{self.message} ({', '.join(parts)})" if parts else self.message


class StoreError(AccountingError):
    """Raised when the ledger store cannot read or append records."""


class PdfExportError(AccountingError):
    """Raised for unexpected failures anywhere in the PDF export path."""


class BrowserProvisioningError(PdfExportError):
    """Raised when the headless browser runtime is unavailable."""


class PdfGenerationError(PdfExportError):
    """Raised when the browser could not render or print the journal."""
