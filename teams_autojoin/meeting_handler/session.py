"""
Persistent Teams browser session.

This module owns the Chromium profile directory and the Playwright persistent
context built on top of it. The profile keeps cookies and local storage
between runs, so after the first login later runs open Teams already
authenticated.

Only one process may use a profile directory at a time; callers are
responsible for not running two sessions against the same directory.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path
from typing import Optional, Union

from playwright.async_api import (
    async_playwright,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
)

from teams_autojoin.config import Settings
from teams_autojoin.core import BrowserLaunchError, get_logger


logger = get_logger("session")

TEAMS_URL_PATTERN = re.compile(r"teams\.microsoft\.com")


class ProfileManager:
    """Filesystem side of the persistent browser profile."""

    def __init__(self, user_data_dir: Union[str, Path]) -> None:
        self.path = Path(user_data_dir).resolve()

    def exists(self) -> bool:
        return self.path.exists()

    def is_first_run(self) -> bool:
        """True when no profile has been saved yet. Check before ensure()."""
        return not self.exists()

    def reset(self) -> bool:
        """
        Delete the saved profile.

        Returns:
            True if a profile was deleted, False if there was nothing to delete
        """
        if not self.exists():
            return False
        logger.info(f"Resetting saved profile at {self.path}")
        shutil.rmtree(self.path)
        return True

    def ensure(self) -> Path:
        self.path.mkdir(parents=True, exist_ok=True)
        return self.path


class TeamsSession:
    """
    Chromium window running Teams on a persistent profile.

    Usage pattern:
        session = TeamsSession(settings)
        page = await session.start()
        ...
        await session.wait_until_closed()
        await session.stop()
    """

    def __init__(self, settings: Settings, profile: Optional[ProfileManager] = None) -> None:
        self.settings = settings
        self.profile = profile or ProfileManager(settings.user_data_dir)
        self._playwright: Optional[Playwright] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    @property
    def is_running(self) -> bool:
        """Return True if the browser context is currently available."""
        return self._context is not None

    @property
    def context(self) -> BrowserContext:
        if self._context is None:
            raise BrowserLaunchError("Browser session is not started")
        return self._context

    @property
    def page(self) -> Page:
        if self._page is None:
            raise BrowserLaunchError("Browser session is not started")
        return self._page

    async def start(self) -> Page:
        """
        Launch Chromium on the profile directory and open Teams.

        Returns:
            The page showing Teams
        """
        if self._page is not None:
            return self._page

        self.profile.ensure()
        logger.info(f"Launching Chromium with profile {self.profile.path}")

        try:
            self._playwright = await async_playwright().start()
            self._context = await self._playwright.chromium.launch_persistent_context(
                str(self.profile.path),
                headless=self.settings.headless,
                no_viewport=True,
                args=["--start-maximized"],
            )
        except PlaywrightError as e:
            await self.stop()
            raise BrowserLaunchError(
                f"Could not launch Chromium: {e}",
                {"user_data_dir": str(self.profile.path)},
            ) from e

        # Use the restored tab if there is one
        pages = self._context.pages
        self._page = pages[0] if pages else await self._context.new_page()

        logger.info(f"Opening {self.settings.teams_url}")
        await self._page.goto(self.settings.teams_url, wait_until="domcontentloaded")
        return self._page

    async def wait_for_app(self, timeout_ms: int = 120_000) -> bool:
        """Wait for the Teams web app URL (login redirects land elsewhere first)."""
        try:
            await self.page.wait_for_url(TEAMS_URL_PATTERN, timeout=timeout_ms)
            return True
        except PlaywrightTimeoutError:
            logger.warning("Teams did not finish loading in time, continuing anyway")
            return False

    async def wait_until_closed(self) -> None:
        """Block until the user closes the browser window."""
        if self._context is None:
            return
        logger.info("Leaving the browser open. Close the window to exit.")
        try:
            await self._context.wait_for_event("close", timeout=0)
        except PlaywrightError as e:
            logger.debug(f"Browser closed: {e}")

    async def stop(self) -> None:
        """Close the browser context and stop Playwright."""
        try:
            if self._context is not None:
                await self._context.close()
        except PlaywrightError as e:
            logger.debug(f"Context already closed: {e}")
        finally:
            self._context = None
            self._page = None

        try:
            if self._playwright is not None:
                await self._playwright.stop()
        finally:
            self._playwright = None
