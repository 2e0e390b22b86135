"""Mini README: Core package initializer for the Simple Accounting service.

This module exposes convenience imports so callers can reach the logging
helpers and error taxonomy without knowing the exact module structure. The
file stays lightweight so importing the package never pulls in the web
framework or the browser automation stack.
"""

from .errors import (
    AccountingError,
    BrowserProvisioningError,
    PdfExportError,
    PdfGenerationError,
    StoreError,
    ValidationError,
)
from .logging_utils import get_logger

__all__ = [
    "AccountingError",
    "BrowserProvisioningError",
    "PdfExportError",
    "PdfGenerationError",
    "StoreError",
    "ValidationError",
    "get_logger",
]
