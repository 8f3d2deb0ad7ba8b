"""
Bounded polling for transient Teams UI elements.

Two pollers share the same contract: check immediately, keep checking until
a click succeeds or the deadline passes, and report expiry as a plain False
rather than an exception.

- poll_until_clicked watches a single page on a fixed interval, optionally
  reloading it before every re-check.
- poll_surfaces_until_clicked watches every tab of the browser context and
  picks up tabs opened while it runs (Teams opens meetings in a new window).
"""

from __future__ import annotations

import asyncio
import math
import time
from typing import Awaitable, Callable, Optional, Sequence

from playwright.async_api import (
    BrowserContext,
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
)
from pydantic import BaseModel, ConfigDict, Field

from teams_autojoin.core import ConfigurationError, get_logger
from .locator import click_when_ready, find_and_click
from .teams_selectors import get_selectors_for


logger = get_logger("poller")

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]
SurfaceCheck = Callable[[Page, Sequence[str]], Awaitable[bool]]

NEW_SURFACE_WAIT_MS = 1000
SURFACE_SETTLE_TIMEOUT_MS = 10_000


class PollConfig(BaseModel):
    """Interval/timeout envelope for the bounded poller."""
    model_config = ConfigDict(frozen=True)

    interval_seconds: float = Field(default=30.0, gt=0, description="Wait between checks")
    timeout_seconds: float = Field(default=600.0, ge=0, description="Total time budget")
    reload_before_each_check: bool = Field(default=False, description="Reload the page before re-checks")


def _require_selectors(selectors: Sequence[str]) -> None:
    if not selectors:
        raise ConfigurationError("Selector set must not be empty")


async def _reload(surface: Page) -> None:
    try:
        await surface.reload(wait_until="domcontentloaded")
    except PlaywrightTimeoutError as e:
        logger.debug(f"Reload timed out, checking the current page anyway: {e}")
    except PlaywrightError as e:
        logger.warning(f"Reload failed, checking the current page anyway: {e}")


async def poll_until_clicked(
    surface: Page,
    selectors: Sequence[str],
    config: PollConfig,
    *,
    check: SurfaceCheck = find_and_click,
    sleep: Sleep = asyncio.sleep,
    clock: Clock = time.monotonic,
) -> bool:
    """
    Poll one page for a clickable element.

    Args:
        surface: Page to watch
        selectors: Ordered selector set
        config: Interval, timeout and reload behaviour
        check: Locate-and-click step applied on every cycle
        sleep: Interval sleep (injectable for tests)
        clock: Monotonic clock in seconds (injectable for tests)

    Returns:
        True if a click succeeded before the deadline, False on expiry
    """
    _require_selectors(selectors)
    start = clock()

    # Immediate check, no delay
    if await check(surface, selectors):
        return True

    while clock() - start < config.timeout_seconds:
        left = max(0.0, config.timeout_seconds - (clock() - start))
        logger.info(
            f"Target not found. Next check in {round(config.interval_seconds)}s, "
            f"~{math.ceil(left / 60)} min left."
        )
        await sleep(config.interval_seconds)

        if config.reload_before_each_check:
            await _reload(surface)

        if await check(surface, selectors):
            return True

    return False


async def _wait_for_new_surface(context: BrowserContext, wait_ms: int) -> Optional[Page]:
    try:
        return await context.wait_for_event("page", timeout=wait_ms)
    except PlaywrightTimeoutError:
        return None


async def _settle(surface: Page, timeout_ms: int) -> None:
    try:
        await surface.wait_for_load_state("domcontentloaded", timeout=timeout_ms)
    except PlaywrightError as e:
        logger.debug(f"New tab did not finish loading: {e}")


async def _scan_surfaces(
    context: BrowserContext,
    selectors: Sequence[str],
    check: SurfaceCheck,
) -> bool:
    for surface in list(context.pages):
        if surface.is_closed():
            continue
        if await check(surface, selectors):
            return True
    return False


async def poll_surfaces_until_clicked(
    context: BrowserContext,
    selectors: Sequence[str],
    timeout_seconds: float,
    *,
    check: SurfaceCheck = click_when_ready,
    new_surface_wait_ms: int = NEW_SURFACE_WAIT_MS,
    settle_timeout_ms: int = SURFACE_SETTLE_TIMEOUT_MS,
    clock: Clock = time.monotonic,
) -> bool:
    """
    Poll every tab of a browser context for a clickable element.

    Each cycle waits up to new_surface_wait_ms for a new tab, lets a new tab
    settle, then rescans all tabs in creation order.

    Returns:
        True if a click succeeded on any tab before the deadline
    """
    _require_selectors(selectors)
    if timeout_seconds < 0:
        raise ConfigurationError("Timeout must not be negative", {"timeout_seconds": timeout_seconds})
    end_at = clock() + timeout_seconds

    if await _scan_surfaces(context, selectors, check):
        return True

    while clock() < end_at:
        new_surface = await _wait_for_new_surface(context, new_surface_wait_ms)
        if new_surface is not None:
            logger.info("New tab opened, including it in the scan")
            await _settle(new_surface, settle_timeout_ms)

        if await _scan_surfaces(context, selectors, check):
            return True

    return False


async def wait_and_click_join(page: Page, config: PollConfig, **kwargs) -> bool:
    """Watch a channel for the ongoing-meeting 'Join' button and click it."""
    return await poll_until_clicked(page, get_selectors_for("join_button"), config, **kwargs)


async def wait_and_click_prejoin(context: BrowserContext, timeout_seconds: float, **kwargs) -> bool:
    """Watch all tabs for the pre-join 'Join now' button and click it."""
    return await poll_surfaces_until_clicked(
        context, get_selectors_for("prejoin_join_button"), timeout_seconds, **kwargs
    )
