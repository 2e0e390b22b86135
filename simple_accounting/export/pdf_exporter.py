"""Mini README: Print the ledger journal to PDF with a headless browser.

Structure:
    * PDF_OPTIONS - fixed paper size, margins and background printing.
    * PdfExporter - snapshot the ledger, render HTML, print it in Chromium.

Each export provisions the runtime (once per process), reads the store,
renders the journal and prints it in a freshly launched browser. Page and
browser are closed on every exit path, timeouts included. Failures are
mapped onto the export error classes with the original cause chained.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Callable, Optional, Sequence

from playwright.async_api import async_playwright

from ..errors import BrowserProvisioningError, PdfExportError, PdfGenerationError, StoreError
from ..ledger.engine import compute_balance, order_for_report
from ..ledger.store import LedgerStore
from ..logging_utils import get_logger
from ..reporting.renderer import JournalRenderer
from .browser import CHROMIUM_ARGS, RUNTIME, BrowserRuntime

LOGGER = get_logger(__name__)

PDF_MAGIC = b"%PDF"

PDF_OPTIONS = {
    "format": "A4",
    "margin": {"top": "20mm", "right": "20mm", "bottom": "20mm", "left": "20mm"},
    "print_background": True,
}


class PdfExporter:
    """Produce journal PDFs from the current contents of a ledger store."""

    def __init__(
        self,
        store: LedgerStore,
        *,
        renderer: Optional[JournalRenderer] = None,
        runtime: Optional[BrowserRuntime] = None,
        playwright_factory: Callable = async_playwright,
        timeout_seconds: float = 30.0,
        clock: Callable[[], datetime] = datetime.now,
        launch_args: Sequence[str] = CHROMIUM_ARGS,
    ) -> None:
        self.store = store
        self.renderer = renderer or JournalRenderer()
        self.runtime = runtime or RUNTIME
        self.timeout_seconds = timeout_seconds
        self._playwright_factory = playwright_factory
        self._clock = clock
        self._launch_args = list(launch_args)

    async def export_journal_as_pdf(self) -> bytes:
        """Return the journal as PDF bytes or raise a ``PdfExportError`` subclass."""

        LOGGER.info("PDF export started")
        try:
            pdf_bytes = await asyncio.wait_for(self._export(), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as error:
            LOGGER.error("PDF export timed out after %.1f seconds", self.timeout_seconds)
            raise PdfExportError(
                f"PDF export did not finish within {self.timeout_seconds:g} seconds"
            ) from error
        LOGGER.info("PDF export finished (%s bytes)", len(pdf_bytes))
        return pdf_bytes

    def render_snapshot(self) -> str:
        """Read the store and render the journal HTML in report order."""

        transactions = self.store.all()
        LOGGER.debug("Loaded %s transactions for the journal", len(transactions))
        balance = compute_balance(transactions)
        return self.renderer.render(order_for_report(transactions), balance, self._clock())

    async def _export(self) -> bytes:
        try:
            await self.runtime.ensure_ready()
            html = self.render_snapshot()
            return await self._print_pdf(html)
        except (BrowserProvisioningError, PdfGenerationError, StoreError):
            raise
        except Exception as error:
            LOGGER.exception("Unexpected failure during PDF export")
            raise PdfExportError("Unexpected error while exporting the journal") from error

    async def _print_pdf(self, html: str) -> bytes:
        """Launch Chromium, load ``html`` into one page and print it."""

        try:
            async with self._playwright_factory() as playwright:
                browser = await playwright.chromium.launch(headless=True, args=self._launch_args)
                LOGGER.debug("Browser launched")
                try:
                    page = await browser.new_page()
                    try:
                        await page.set_content(html)
                        LOGGER.debug("Journal HTML loaded into page")
                        pdf_bytes = await page.pdf(**PDF_OPTIONS)
                    finally:
                        await page.close()
                finally:
                    await browser.close()
                    LOGGER.debug("Browser closed")
        except Exception as error:
            LOGGER.exception("Headless browser failed to produce the PDF")
            raise PdfGenerationError("Failed to generate the journal PDF") from error

        if not pdf_bytes:
            raise PdfGenerationError("PDF generation returned an empty document")
        if not pdf_bytes.startswith(PDF_MAGIC):
            raise PdfGenerationError("PDF generation returned data without a PDF header")
        return pdf_bytes
