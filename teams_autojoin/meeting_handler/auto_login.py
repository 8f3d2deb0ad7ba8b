"""
Best-effort Microsoft account auto-login.

Microsoft login pages change often and 2FA cannot be automated, so every
failure here is downgraded to a message asking the user to finish logging in
by hand in the open window.
"""

from __future__ import annotations

from typing import Optional

from playwright.async_api import Error as PlaywrightError, Page

from teams_autojoin.core import get_logger
from .teams_selectors import as_selector_group


logger = get_logger("auto_login")

TYPING_DELAY_MS = 20


async def _fill_field(page: Page, selector_set: str, value: str, timeout_ms: int) -> None:
    field = await page.wait_for_selector(as_selector_group(selector_set), timeout=timeout_ms)
    await field.fill("")
    await field.type(value, delay=TYPING_DELAY_MS)
    await page.keyboard.press("Enter")


async def maybe_auto_login(page: Page, email: Optional[str], password: Optional[str]) -> bool:
    """
    Fill the Microsoft login form if credentials are available.

    Args:
        page: Page that may be on the login flow
        email: Account e-mail (MS_EMAIL)
        password: Account password (MS_PASSWORD)

    Returns:
        True if the whole form was submitted, False if skipped or failed
    """
    if not email or not password:
        logger.info("Tip: set MS_EMAIL and MS_PASSWORD to attempt auto-login.")
        return False

    try:
        await page.wait_for_load_state("domcontentloaded", timeout=60_000)

        # Times out (and we skip) when there was no redirect to the login page
        await _fill_field(page, "login_email", email, timeout_ms=15_000)
        await _fill_field(page, "login_password", password, timeout_ms=30_000)

        try:
            stay_signed_in = await page.wait_for_selector(
                as_selector_group("stay_signed_in"), timeout=20_000
            )
        except PlaywrightError:
            stay_signed_in = None
        if stay_signed_in is not None:
            await stay_signed_in.click()

        logger.info("Attempted auto-login with provided credentials.")
        return True

    except PlaywrightError as e:
        logger.info(
            "Auto-login skipped or failed (likely 2FA or a layout change). "
            "Log in manually in the opened browser window."
        )
        logger.debug(f"Auto-login failure: {e}")
        return False
