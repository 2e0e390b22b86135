"""Mini README: Reporting helpers for the printable journal.

Exposes the Jinja2-based renderer that turns a ledger snapshot into the
HTML document later printed to PDF by the export pipeline.
"""

from .renderer import (
    JOURNAL_LABELS,
    JournalRenderer,
    balance_class,
    render_journal_html,
    round_amount,
)

__all__ = [
    "JOURNAL_LABELS",
    "JournalRenderer",
    "balance_class",
    "render_journal_html",
    "round_amount",
]
