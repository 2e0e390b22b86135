"""Mini README: Headless browser runtime provisioning.

Structure:
    * CHROMIUM_ARGS - launch flags suited to containers and batch printing.
    * BrowserRuntime - idempotent "ensure Chromium is installed" helper.
    * RUNTIME - process-wide instance shared by every exporter.

The first export probes Chromium by launching and closing it. When the
executable is missing and auto-install is enabled, ``playwright install
chromium`` runs in a subprocess. Success flips a readiness flag that stays
set for the lifetime of the process so later exports skip the probe.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Awaitable, Callable, Optional, Sequence

from playwright.async_api import async_playwright

from ..errors import BrowserProvisioningError
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

CHROMIUM_ARGS: Sequence[str] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-extensions",
    "--disable-gpu",
    "--no-first-run",
    "--disable-background-timer-throttling",
    "--disable-backgrounding-occluded-windows",
    "--disable-renderer-backgrounding",
)

MISSING_EXECUTABLE_MARKER = "Executable doesn't exist"

Installer = Callable[[], Awaitable[int]]


async def install_chromium() -> int:
    """Run ``python -m playwright install chromium`` and return its exit code."""

    LOGGER.info("Installing the Playwright Chromium build")
    process = await asyncio.create_subprocess_exec(
        sys.executable,
        "-m",
        "playwright",
        "install",
        "chromium",
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.STDOUT,
    )
    try:
        output, _ = await process.communicate()
    finally:
        if process.returncode is None:
            LOGGER.warning("Stopping unfinished Chromium installation (pid %s)", process.pid)
            try:
                process.kill()
            except ProcessLookupError:
                pass
            await process.wait()
    if output:
        LOGGER.debug("playwright install output:\n%s", output.decode(errors="replace"))
    return process.returncode


class BrowserRuntime:
    """Track whether a launchable Chromium exists in this process."""

    def __init__(
        self,
        *,
        playwright_factory: Callable = async_playwright,
        installer: Installer = install_chromium,
        auto_install: bool = True,
    ) -> None:
        self._playwright_factory = playwright_factory
        self._installer = installer
        self.auto_install = auto_install
        self._ready = False
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def ready(self) -> bool:
        return self._ready

    def _get_lock(self) -> asyncio.Lock:
        """Return a lock bound to the running loop; CLI and tests start fresh loops."""

        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def ensure_ready(self) -> None:
        """Make sure Chromium can be launched, installing it at most once."""

        if self._ready:
            return
        async with self._get_lock():
            if self._ready:
                return
            if await self._probe_or_fail():
                await self._install()
                if await self._probe_or_fail():
                    raise BrowserProvisioningError(
                        "Chromium is still missing after installation"
                    )
            self._ready = True
            LOGGER.info("Headless browser runtime ready")

    async def _probe_or_fail(self) -> bool:
        try:
            return await self._probe()
        except Exception as error:
            LOGGER.exception("Headless browser probe failed")
            raise BrowserProvisioningError("Headless browser runtime is unavailable") from error

    async def _probe(self) -> bool:
        """Launch and close Chromium; return True when the executable is missing."""

        async with self._playwright_factory() as playwright:
            try:
                browser = await playwright.chromium.launch(headless=True, args=list(CHROMIUM_ARGS))
            except Exception as error:
                if MISSING_EXECUTABLE_MARKER in str(error):
                    LOGGER.warning("Chromium executable not found")
                    return True
                raise
            await browser.close()
        LOGGER.debug("Chromium already installed")
        return False

    async def _install(self) -> None:
        if not self.auto_install:
            raise BrowserProvisioningError(
                "Chromium is not installed and automatic installation is disabled"
            )
        try:
            exit_code = await self._installer()
        except Exception as error:
            LOGGER.exception("Chromium installation could not be started")
            raise BrowserProvisioningError("Failed to install the headless browser") from error
        if exit_code != 0:
            LOGGER.error("Chromium installation exited with code %s", exit_code)
            raise BrowserProvisioningError(
                f"Failed to install the headless browser (exit code {exit_code})"
            )
        LOGGER.info("Chromium installation completed")


RUNTIME = BrowserRuntime()
