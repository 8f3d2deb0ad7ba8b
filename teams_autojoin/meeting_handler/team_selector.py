"""
Teams hub navigation, team listing and team selection.

Team names are read from the accessible label first and the visible text
second. Matching normalizes both sides to NFKC and lower case, then uses a
substring test (or equality when exact matching is requested). The first
match in DOM order wins.
"""

from __future__ import annotations

import unicodedata
from typing import List, Optional, Sequence, Tuple

from playwright.async_api import (
    Error as PlaywrightError,
    Locator,
    Page,
    TimeoutError as PlaywrightTimeoutError,
)

from teams_autojoin.core import TeamSelectionError, get_logger
from .teams_selectors import as_selector_group, get_first_selector, get_selectors_for


logger = get_logger("team_selector")


def normalize_team_name(name: str) -> str:
    return unicodedata.normalize("NFKC", name).strip()


def matches_team(name: str, query: str, exact: bool = False) -> bool:
    """Case-insensitive match of a display name against a query."""
    candidate = normalize_team_name(name).lower()
    wanted = normalize_team_name(query).lower()
    return candidate == wanted if exact else wanted in candidate


def find_team_match(
    names: Sequence[str],
    query: str,
    exact: bool = False,
) -> Optional[Tuple[int, str]]:
    """
    Find the first team name matching the query.

    Returns:
        (index, normalized name) of the first match, or None
    """
    for index, name in enumerate(names):
        if matches_team(name, query, exact):
            return index, normalize_team_name(name)
    return None


async def _read_team_name(button: Locator) -> str:
    aria = await button.get_attribute("aria-label") or ""
    try:
        text = await button.inner_text() or ""
    except PlaywrightError:
        text = ""
    return aria or text


async def _read_team_names(page: Page) -> Tuple[Locator, List[str]]:
    buttons = page.locator(get_first_selector("team_name"))
    count = await buttons.count()
    names = [await _read_team_name(buttons.nth(i)) for i in range(count)]
    return buttons, names


async def ensure_on_teams_hub(page: Page) -> bool:
    """Click the 'Teams' app bar button if one is present (labels vary by locale)."""
    for selector in get_selectors_for("teams_hub_button"):
        try:
            element = await page.query_selector(selector)
            if element is None:
                continue
            await element.click()
            logger.debug(f"Opened Teams hub via {selector!r}")
            return True
        except PlaywrightError as e:
            logger.debug(f"Teams hub button {selector!r} not usable: {e}")
            return False
    return False


async def wait_for_teams_list(page: Page) -> None:
    """
    Wait until the teams list is rendered.

    Raises:
        TeamSelectionError: if neither the team buttons nor a fallback tree appear
    """
    try:
        await page.wait_for_selector(get_first_selector("team_name"), timeout=60_000)
        return
    except PlaywrightTimeoutError:
        logger.debug("Team name buttons not found, waiting for fallback tree items")
    except PlaywrightError as e:
        raise TeamSelectionError("Teams list could not be read") from e

    try:
        await page.wait_for_selector(as_selector_group("team_list_fallback"), timeout=30_000)
    except PlaywrightError as e:
        raise TeamSelectionError("Teams list did not appear") from e


async def list_teams(page: Page) -> List[str]:
    """
    Collect team display names in first-seen order, without duplicates.
    """
    _, names = await _read_team_names(page)
    unique: List[str] = []
    for name in names:
        name = name.strip()
        if name and name not in unique:
            unique.append(name)
    return unique


async def select_team(page: Page, query: str, exact: bool = False) -> Optional[str]:
    """
    Open the first team whose name matches the query.

    Returns:
        The matched display name, or None if nothing matched
    """
    buttons, names = await _read_team_names(page)
    if not names:
        return None

    match = find_team_match(names, query, exact)
    if match is None:
        return None

    index, name = match
    await buttons.nth(index).click()
    # Wait a bit for the team view to load
    await page.wait_for_load_state("domcontentloaded")
    logger.info(f"Selected team {name!r}")
    return name
