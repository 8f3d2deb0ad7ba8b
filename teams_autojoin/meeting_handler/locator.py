"""
Element locating and clicking helpers.

Selector sets are treated as a fallback chain: the first selector that
matches anything wins and the remaining selectors are never evaluated.
Clicking is gated on visibility, with a single unconditional attempt on the
first match when nothing reports itself visible (Teams sometimes misreports
visibility of banner buttons).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from playwright.async_api import (
    Error as PlaywrightError,
    Locator,
    Page,
    TimeoutError as PlaywrightTimeoutError,
)

from teams_autojoin.core import get_logger


logger = get_logger("locator")

CLICK_TIMEOUT_MS = 5000


@dataclass
class LocatedElements:
    """Matches for the winning selector of a selector set."""

    selector: Optional[str] = None
    elements: List[Locator] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.elements)

    def __len__(self) -> int:
        return len(self.elements)


async def locate(surface: Page, selectors: Sequence[str]) -> LocatedElements:
    """
    Find all elements matching the first selector that matches anything.

    Args:
        surface: Page to search
        selectors: Ordered selector set, highest priority first

    Returns:
        LocatedElements; empty when no selector matched
    """
    for selector in selectors:
        loc = surface.locator(selector)
        try:
            count = await loc.count()
        except PlaywrightError as e:
            # Page navigating or closed mid-query
            logger.debug(f"Selector {selector!r} could not be evaluated: {e}")
            continue
        if count == 0:
            continue
        logger.debug(f"Selector {selector!r} matched {count} element(s)")
        return LocatedElements(selector=selector, elements=[loc.nth(i) for i in range(count)])
    return LocatedElements()


async def _is_visible(element: Locator) -> bool:
    try:
        return await element.is_visible()
    except PlaywrightError:
        return False


async def _is_disabled(element: Locator) -> bool:
    try:
        return await element.is_disabled()
    except PlaywrightError:
        return False


async def _try_click(element: Locator, timeout_ms: int) -> bool:
    """Click once; transient failures return False instead of raising."""
    try:
        await element.click(timeout=timeout_ms)
        return True
    except PlaywrightTimeoutError as e:
        # Covered, detached or still disabled at the instant of dispatch
        logger.debug(f"Click timed out: {e}")
    except PlaywrightError as e:
        logger.warning(f"Click failed, the page layout may have changed: {e}")
    return False


async def click_first_actionable(
    elements: Sequence[Locator],
    click_timeout_ms: int = CLICK_TIMEOUT_MS,
) -> bool:
    """
    Click the first visible, enabled element.

    Falls back to clicking the first element unconditionally when none of
    them report visible.

    Returns:
        True once one click has succeeded, False otherwise
    """
    if not elements:
        return False

    any_visible = False
    for element in elements:
        if not await _is_visible(element):
            continue
        any_visible = True
        if await _is_disabled(element):
            logger.debug("Skipping disabled candidate")
            continue
        if await _try_click(element, click_timeout_ms):
            return True

    if not any_visible:
        logger.debug("No candidate reported visible, trying the first one anyway")
        return await _try_click(elements[0], click_timeout_ms)

    return False


async def find_and_click(surface: Page, selectors: Sequence[str]) -> bool:
    """Locate with a selector set and click the first actionable match."""
    located = await locate(surface, selectors)
    if not located:
        return False
    clicked = await click_first_actionable(located.elements)
    if clicked:
        logger.info(f"Clicked element matched by {located.selector!r}")
    return clicked


async def click_when_ready(
    surface: Page,
    selectors: Sequence[str],
    ready_timeout_ms: int = CLICK_TIMEOUT_MS,
) -> bool:
    """
    Pre-join variant of find_and_click.

    Gives the first match of the winning selector a short while to become
    visible, skips it if disabled, then clicks it.
    """
    located = await locate(surface, selectors)
    if not located:
        return False

    candidate = located.elements[0]
    try:
        await candidate.wait_for(state="visible", timeout=ready_timeout_ms)
    except PlaywrightError:
        pass
    if await _is_disabled(candidate):
        logger.debug(f"Element matched by {located.selector!r} is disabled")
        return False
    if await _try_click(candidate, ready_timeout_ms):
        logger.info(f"Clicked element matched by {located.selector!r}")
        return True
    return False
