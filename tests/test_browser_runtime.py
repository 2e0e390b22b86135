"""Mini README: Tests for headless browser provisioning.

Ensures the readiness probe runs once per runtime, a missing Chromium
triggers a single installation, and installer or probe failures surface as
BrowserProvisioningError.
"""

from __future__ import annotations

import asyncio

import pytest

from simple_accounting.errors import BrowserProvisioningError
from simple_accounting.export import BrowserRuntime

MISSING = "BrowserType.launch: Executable doesn't exist at /root/.cache/ms-playwright/chromium"


def test_ready_runtime_short_circuits_after_first_probe(fake_playwright) -> None:
    """Concurrent and repeated calls share a single launch probe."""

    runtime = BrowserRuntime(playwright_factory=fake_playwright)

    async def provision_repeatedly():
        await asyncio.gather(*(runtime.ensure_ready() for _ in range(5)))
        await runtime.ensure_ready()

    asyncio.run(provision_repeatedly())

    assert runtime.ready is True
    assert len(fake_playwright.launches) == 1
    assert fake_playwright.browsers_closed == 1


def test_missing_executable_installs_once(fake_playwright) -> None:
    """A missing Chromium triggers one installation for the runtime's lifetime."""

    fake_playwright.launch_errors.append(RuntimeError(MISSING))
    installs = []

    async def installer() -> int:
        installs.append(True)
        return 0

    runtime = BrowserRuntime(playwright_factory=fake_playwright, installer=installer)
    asyncio.run(runtime.ensure_ready())
    asyncio.run(runtime.ensure_ready())

    assert installs == [True]
    assert runtime.ready is True


def test_failed_installation_leaves_runtime_unready(fake_playwright) -> None:
    """A non-zero installer exit is reported with its code and nothing is cached."""

    fake_playwright.launch_errors.append(RuntimeError(MISSING))

    async def installer() -> int:
        return 3

    runtime = BrowserRuntime(playwright_factory=fake_playwright, installer=installer)

    with pytest.raises(BrowserProvisioningError) as caught:
        asyncio.run(runtime.ensure_ready())

    assert "exit code 3" in caught.value.message
    assert runtime.ready is False


def test_installer_crash_is_wrapped(fake_playwright) -> None:
    """An installer that cannot start surfaces as a provisioning error with its cause."""

    fake_playwright.launch_errors.append(RuntimeError(MISSING))

    async def installer() -> int:
        raise FileNotFoundError("python executable vanished")

    runtime = BrowserRuntime(playwright_factory=fake_playwright, installer=installer)

    with pytest.raises(BrowserProvisioningError) as caught:
        asyncio.run(runtime.ensure_ready())

    assert isinstance(caught.value.__cause__, FileNotFoundError)


def test_auto_install_can_be_disabled(fake_playwright) -> None:
    """With auto-install off a missing Chromium fails fast without running the installer."""

    fake_playwright.launch_errors.append(RuntimeError(MISSING))

    async def installer() -> int:
        raise AssertionError("installer must not run")

    runtime = BrowserRuntime(
        playwright_factory=fake_playwright, installer=installer, auto_install=False
    )

    with pytest.raises(BrowserProvisioningError) as caught:
        asyncio.run(runtime.ensure_ready())

    assert "disabled" in caught.value.message


def test_unrelated_probe_failure_is_a_provisioning_error(fake_playwright) -> None:
    """Launch errors other than a missing executable are not retried as installs."""

    fake_playwright.launch_errors.append(RuntimeError("Host system is missing dependencies"))
    runtime = BrowserRuntime(playwright_factory=fake_playwright)

    with pytest.raises(BrowserProvisioningError) as caught:
        asyncio.run(runtime.ensure_ready())

    assert "missing dependencies" in caught.value.detail


def test_chromium_still_missing_after_install_is_an_error(fake_playwright) -> None:
    """A successful installer exit is not trusted until a second launch works."""

    fake_playwright.launch_errors.extend([RuntimeError(MISSING), RuntimeError(MISSING)])
    installs = []

    async def installer() -> int:
        installs.append(True)
        return 0

    runtime = BrowserRuntime(playwright_factory=fake_playwright, installer=installer)

    with pytest.raises(BrowserProvisioningError) as caught:
        asyncio.run(runtime.ensure_ready())

    assert "still missing" in caught.value.message
    assert installs == [True]
    assert len(fake_playwright.launches) == 2
    assert runtime.ready is False
