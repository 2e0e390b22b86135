"""Mini README: FastAPI-powered transaction API for Simple Accounting.

Structure:
    * TransactionCreateRequest - request body accepted when recording entries.
    * create_application - application factory wiring routes and handlers.
    * Error handlers - map the error taxonomy onto HTTP responses.

Routes stay thin: they validate input, delegate to the ledger store, the
balance/ordering engine and the PDF exporter, then shape JSON or binary
responses. Server errors return a generic message plus a short detail while
the logs keep the full chained traceback.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Union
from urllib.parse import quote

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from ..configuration import AccountingSettings, get_settings
from ..errors import (
    BrowserProvisioningError,
    PdfExportError,
    PdfGenerationError,
    StoreError,
    ValidationError,
)
from ..export import RUNTIME, PdfExporter
from ..ledger import (
    LedgerStore,
    compute_balance,
    create_store,
    list_transactions,
    validate_new_transaction,
)
from ..ledger.models import decimal_to_number
from ..logging_utils import configure_root_logger, get_logger
from ..reporting import JournalRenderer

LOGGER = get_logger(__name__)


class TransactionCreateRequest(BaseModel):
    """Body of ``POST /api/transactions``; business rules are checked afterwards."""

    amount: Optional[Decimal] = Field(None, description="Positive amount of the transaction.")
    description: Optional[str] = Field(None, description="Free text, at most 200 characters.")
    type: Optional[Union[int, str]] = Field(
        None, description="'Income' or 'Expense' (legacy codes 0 and 1 are accepted)."
    )
    occurred_on: Optional[date] = Field(
        None, alias="date", description="Calendar date the transaction occurred."
    )


def journal_filename(label: str, exported_on: date) -> str:
    """Suggested download name, e.g. ``仕訳帳_2024-05-31.pdf``."""

    return f"{label}_{exported_on.isoformat()}.pdf"


def content_disposition(filename: str) -> str:
    """Build an attachment header, using RFC 5987 encoding for non-ASCII names."""

    quoted = quote(filename)
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'


def _field_errors_from_request(error: RequestValidationError) -> Dict[str, List[str]]:
    """Flatten FastAPI's request errors into ``{field: [messages]}``."""

    field_errors: Dict[str, List[str]] = {}
    for entry in error.errors():
        location = [str(part) for part in entry.get("loc", ()) if part != "body"]
        field = ".".join(location) or "body"
        field_errors.setdefault(field, []).append(entry.get("msg", "Invalid value."))
    return field_errors


def create_application(
    *,
    settings: Optional[AccountingSettings] = None,
    store: Optional[LedgerStore] = None,
    exporter: Optional[PdfExporter] = None,
    today: Callable[[], date] = date.today,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    configure_root_logger(settings.log_level)
    store = store or create_store(settings)
    if exporter is None:
        RUNTIME.auto_install = settings.auto_install_browser
        exporter = PdfExporter(
            store,
            renderer=JournalRenderer(
                title=settings.journal_label, currency_suffix=settings.currency_suffix
            ),
            timeout_seconds=settings.pdf_timeout_seconds,
        )

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        store.close()
        LOGGER.debug("Ledger store closed")

    app = FastAPI(title="Simple Accounting API", version="1.0.0", lifespan=lifespan)
    app.state.store = store
    app.state.exporter = exporter
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, error: ValidationError) -> JSONResponse:
        LOGGER.info("Rejected %s %s: %s", request.method, request.url.path, error)
        return JSONResponse(
            status_code=400,
            content={"message": error.message, "errors": error.field_errors},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_error(request: Request, error: RequestValidationError) -> JSONResponse:
        field_errors = _field_errors_from_request(error)
        LOGGER.info("Malformed request %s %s: %s", request.method, request.url.path, field_errors)
        return JSONResponse(
            status_code=400,
            content={"message": "Transaction input is invalid.", "errors": field_errors},
        )

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, error: StoreError) -> JSONResponse:
        LOGGER.error("Ledger store failure on %s: %s", request.url.path, error, exc_info=error)
        return JSONResponse(
            status_code=500,
            content={"message": "The ledger could not be accessed.", "detail": error.message},
        )

    @app.exception_handler(PdfExportError)
    async def handle_export_error(request: Request, error: PdfExportError) -> JSONResponse:
        LOGGER.error("PDF export failure: %s (cause: %s)", error, error.detail, exc_info=error)
        if isinstance(error, BrowserProvisioningError):
            message = "The PDF engine is not available on the server."
        elif isinstance(error, PdfGenerationError):
            message = "Failed to generate the PDF."
        else:
            message = "An unexpected error occurred while exporting the PDF."
        return JSONResponse(
            status_code=500,
            content={"message": message, "detail": error.detail or error.message},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, error: Exception) -> JSONResponse:
        LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=error)
        return JSONResponse(
            status_code=500,
            content={"message": "An unexpected error occurred.", "detail": type(error).__name__},
        )

    @app.get("/api/transactions")
    async def get_transactions() -> JSONResponse:
        """Return every transaction, newest date first."""

        transactions = list_transactions(store.all())
        LOGGER.debug("Returning %s transactions", len(transactions))
        return JSONResponse([transaction.as_dict() for transaction in transactions])

    @app.post("/api/transactions", status_code=201)
    async def create_transaction(payload: TransactionCreateRequest) -> JSONResponse:
        """Validate and append a transaction, echoing the stored record."""

        draft = validate_new_transaction(
            amount=payload.amount,
            description=payload.description,
            transaction_type=payload.type,
            occurred_on=payload.occurred_on,
            today=today(),
        )
        transaction = store.append(draft)
        return JSONResponse(status_code=201, content=transaction.as_dict())

    @app.get("/api/transactions/balance")
    async def get_balance() -> JSONResponse:
        """Return the current income-minus-expense balance."""

        balance = compute_balance(store.all())
        return JSONResponse({"balance": decimal_to_number(balance)})

    @app.get("/api/transactions/pdf")
    async def download_pdf() -> Response:
        """Return the journal as a PDF attachment named after today's date."""

        pdf_bytes = await exporter.export_journal_as_pdf()
        filename = journal_filename(settings.journal_label, today())
        LOGGER.info("Serving %s (%s bytes)", filename, len(pdf_bytes))
        return Response(
            content=pdf_bytes,
            media_type="application/pdf",
            headers={"Content-Disposition": content_disposition(filename)},
        )

    @app.get("/health")
    async def health() -> JSONResponse:
        """Liveness probe for container orchestration."""

        return JSONResponse(
            {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}
        )

    return app
