"""Mini README: Shared fixtures and Playwright stand-ins for the test suite.

Structure:
    * FakePlaywright - records launches, page calls and closes without a browser.
    * fake_playwright - fixture returning a fresh FakePlaywright per test.
    * ready_runtime - BrowserRuntime already provisioned against the fake.
    * make_transaction - factory fixture for stored Transaction records.
"""

from __future__ import annotations

import asyncio
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional

import pytest

from simple_accounting.export import BrowserRuntime
from simple_accounting.ledger import Transaction, TransactionType

FAKE_PDF = b"%PDF-1.7\n% fake journal\n%%EOF"


class FakePage:
    def __init__(self, owner: "FakePlaywright") -> None:
        self._owner = owner

    async def set_content(self, html: str) -> None:
        self._owner.html.append(html)
        if self._owner.fail_on == "set_content":
            raise RuntimeError("page crashed while loading content")

    async def pdf(self, **options: object) -> bytes:
        self._owner.pdf_options.append(options)
        if self._owner.pdf_delay:
            await asyncio.sleep(self._owner.pdf_delay)
        if self._owner.fail_on == "pdf":
            raise RuntimeError("printing failed")
        return self._owner.pdf_bytes

    async def close(self) -> None:
        self._owner.pages_closed += 1


class FakeBrowser:
    def __init__(self, owner: "FakePlaywright") -> None:
        self._owner = owner

    async def new_page(self) -> FakePage:
        self._owner.pages_opened += 1
        return FakePage(self._owner)

    async def close(self) -> None:
        self._owner.browsers_closed += 1


class FakeChromium:
    def __init__(self, owner: "FakePlaywright") -> None:
        self._owner = owner

    async def launch(self, **kwargs: object) -> FakeBrowser:
        self._owner.launches.append(kwargs)
        if self._owner.launch_errors:
            raise self._owner.launch_errors.pop(0)
        return FakeBrowser(self._owner)


class FakePlaywright:
    """Callable standing in for ``async_playwright``."""

    def __init__(self) -> None:
        self.chromium = FakeChromium(self)
        self.pdf_bytes: bytes = FAKE_PDF
        self.pdf_delay: float = 0.0
        self.fail_on: Optional[str] = None
        self.launch_errors: List[Exception] = []
        self.launches: List[Dict[str, object]] = []
        self.html: List[str] = []
        self.pdf_options: List[Dict[str, object]] = []
        self.pages_opened = 0
        self.pages_closed = 0
        self.browsers_closed = 0
        self.sessions_closed = 0

    def __call__(self) -> "FakePlaywright":
        return self

    async def __aenter__(self) -> "FakePlaywright":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.sessions_closed += 1


@pytest.fixture
def fake_playwright() -> FakePlaywright:
    return FakePlaywright()


@pytest.fixture
def ready_runtime(fake_playwright: FakePlaywright) -> BrowserRuntime:
    runtime = BrowserRuntime(playwright_factory=fake_playwright)
    asyncio.run(runtime.ensure_ready())
    fake_playwright.launches.clear()
    fake_playwright.browsers_closed = 0
    fake_playwright.sessions_closed = 0
    return runtime


@pytest.fixture
def make_transaction():
    def _make(
        transaction_id: int,
        transaction_type: TransactionType,
        amount: str,
        occurred_on: date,
        *,
        description: str = "Entry",
        created_at: Optional[datetime] = None,
    ) -> Transaction:
        return Transaction(
            transaction_id=transaction_id,
            transaction_type=transaction_type,
            description=description,
            amount=Decimal(amount),
            occurred_on=occurred_on,
            created_at=created_at or datetime(2024, 1, 1, tzinfo=timezone.utc),
        )

    return _make
