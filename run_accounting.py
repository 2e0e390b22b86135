"""Mini README: Entry point CLI for the Simple Accounting service.

This script exposes a Typer CLI that starts the FastAPI application with
configurable host, port, and production flags, provisions the headless
browser ahead of time, and exports the journal PDF without going through
HTTP. Settings come from environment variables when available.
"""

from __future__ import annotations

import asyncio
from datetime import date
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from simple_accounting.configuration import get_settings
from simple_accounting.errors import AccountingError
from simple_accounting.export import RUNTIME, PdfExporter
from simple_accounting.interface.web_app import journal_filename
from simple_accounting.ledger import create_store
from simple_accounting.logging_utils import configure_root_logger
from simple_accounting.reporting import JournalRenderer

cli = typer.Typer(help="Run and manage the Simple Accounting service.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open 0.0.0.0 directly, so point operators at localhost.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Simple Accounting on {effective_host}:{effective_port}.\n"
        f"API docs: http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "simple_accounting.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command("install-browser")
def install_browser() -> None:
    """Make sure the headless Chromium used for PDF export is installed."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    RUNTIME.auto_install = True
    try:
        asyncio.run(RUNTIME.ensure_ready())
    except AccountingError as error:
        typer.secho(f"{error.message}: {error.detail}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from error
    typer.echo("Headless browser runtime is ready.")


@cli.command("export-pdf")
def export_pdf(
    output: Optional[Path] = typer.Option(None, help="Destination file for the journal PDF."),
) -> None:
    """Export the journal of the configured ledger to a PDF file."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    RUNTIME.auto_install = settings.auto_install_browser
    store = create_store(settings)
    exporter = PdfExporter(
        store,
        renderer=JournalRenderer(
            title=settings.journal_label, currency_suffix=settings.currency_suffix
        ),
        timeout_seconds=settings.pdf_timeout_seconds,
    )
    destination = output or Path(journal_filename(settings.journal_label, date.today()))
    try:
        pdf_bytes = asyncio.run(exporter.export_journal_as_pdf())
    except AccountingError as error:
        typer.secho(f"{error.message}: {error.detail}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from error
    finally:
        store.close()
    destination.write_bytes(pdf_bytes)
    typer.echo(f"Journal written to {destination} ({len(pdf_bytes)} bytes).")


if __name__ == "__main__":
    cli()
