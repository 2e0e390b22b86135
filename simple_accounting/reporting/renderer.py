"""Mini README: HTML rendering of the printable journal.

Structure:
    * JOURNAL_LABELS - localised captions used by the template.
    * JournalRenderer - Jinja2 environment bound to the journal template.
    * render_journal_html - convenience wrapper using the default renderer.

The renderer does not reorder or total anything itself; callers hand over
transactions already in report order together with the computed balance.
Autoescaping is enabled so free-text descriptions cannot inject markup.
"""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Dict, Iterable, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from ..ledger.models import Transaction, TransactionType
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

TEMPLATE_DIRECTORY = Path(__file__).parent / "templates"
TEMPLATE_NAME = "journal.html"

JOURNAL_LABELS: Dict[str, str] = {
    "generated_at": "出力日時",
    "date": "日付",
    "description": "摘要",
    "amount": "金額",
    "type": "区分",
    "balance": "残高",
    "no_data": "取引データがありません",
}

TYPE_LABELS = {
    TransactionType.INCOME: "収入",
    TransactionType.EXPENSE: "支出",
}


def round_amount(amount: Decimal) -> Decimal:
    """Round to whole units, halves away from zero; never returns negative zero."""

    rounded = Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return rounded if rounded else Decimal("0")


def balance_class(balance: Decimal) -> str:
    """CSS class for the balance summary as printed: positive, zero or negative."""

    rounded = round_amount(balance)
    if rounded > 0:
        return "positive"
    if rounded < 0:
        return "negative"
    return "zero"


class JournalRenderer:
    """Render ledger snapshots into a self-contained HTML document."""

    def __init__(
        self,
        *,
        title: str = "仕訳帳",
        currency_suffix: str = "円",
        template_directory: Optional[Path] = None,
    ) -> None:
        self.title = title
        self.currency_suffix = currency_suffix
        self._environment = Environment(
            loader=FileSystemLoader(str(template_directory or TEMPLATE_DIRECTORY)),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
        )
        self._environment.filters.update(
            {
                "money": self.format_amount,
                "date_label": lambda value: value.strftime("%Y/%m/%d"),
                "datetime_label": lambda value: value.strftime("%Y/%m/%d %H:%M:%S"),
                "type_label": lambda value: TYPE_LABELS[value],
                "type_class": lambda value: value.value.lower(),
            }
        )

    def format_amount(self, amount: Decimal) -> str:
        """Round half up to whole units, group thousands, add the currency suffix."""

        return f"{round_amount(amount):,}{self.currency_suffix}"

    def render(
        self,
        transactions: Iterable[Transaction],
        balance: Decimal,
        generated_at: datetime,
    ) -> str:
        """Return the journal HTML for the given rows, balance and timestamp."""

        rows = list(transactions)
        template = self._environment.get_template(TEMPLATE_NAME)
        html = template.render(
            title=self.title,
            labels=JOURNAL_LABELS,
            transactions=rows,
            balance=balance,
            balance_class=balance_class(balance),
            generated_at=generated_at,
        )
        LOGGER.debug("Rendered journal HTML with %s rows (%s characters)", len(rows), len(html))
        return html


def render_journal_html(
    transactions: Iterable[Transaction],
    balance: Decimal,
    generated_at: datetime,
    *,
    renderer: Optional[JournalRenderer] = None,
) -> str:
    """Render the journal with ``renderer`` or a default Japanese-labelled one."""

    return (renderer or JournalRenderer()).render(transactions, balance, generated_at)
