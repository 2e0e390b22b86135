"""Mini README: PDF export for the ledger journal.

Exposes the headless browser runtime helper and the exporter that prints
the rendered journal to PDF. Other output formats can live alongside these
modules later.
"""

from .browser import CHROMIUM_ARGS, RUNTIME, BrowserRuntime, install_chromium
from .pdf_exporter import PDF_OPTIONS, PdfExporter

__all__ = [
    "BrowserRuntime",
    "CHROMIUM_ARGS",
    "PDF_OPTIONS",
    "PdfExporter",
    "RUNTIME",
    "install_chromium",
]
