"""
Tests for best-effort credential auto-login.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

from playwright.async_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from teams_autojoin.meeting_handler.auto_login import maybe_auto_login


def field_mock():
    field = MagicMock()
    field.fill = AsyncMock()
    field.type = AsyncMock()
    field.click = AsyncMock()
    return field


def login_page(*selector_results):
    page = MagicMock()
    page.wait_for_load_state = AsyncMock()
    page.wait_for_selector = AsyncMock(side_effect=list(selector_results))
    page.keyboard.press = AsyncMock()
    return page


class TestMaybeAutoLogin:
    """maybe_auto_login()"""

    def test_skipped_without_credentials(self):
        page = MagicMock()

        assert asyncio.run(maybe_auto_login(page, None, "secret")) is False
        assert asyncio.run(maybe_auto_login(page, "me@example.com", "")) is False
        assert page.method_calls == []

    def test_fills_email_password_and_stays_signed_in(self):
        email, password, yes = field_mock(), field_mock(), field_mock()
        page = login_page(email, password, yes)

        assert asyncio.run(maybe_auto_login(page, "me@example.com", "secret")) is True

        email.type.assert_awaited_once_with("me@example.com", delay=20)
        password.type.assert_awaited_once_with("secret", delay=20)
        yes.click.assert_awaited_once()
        assert page.keyboard.press.await_count == 2

    def test_missing_stay_signed_in_prompt_is_fine(self):
        email, password = field_mock(), field_mock()
        page = login_page(email, password, PlaywrightTimeoutError("Timeout 20000ms exceeded"))

        assert asyncio.run(maybe_auto_login(page, "me@example.com", "secret")) is True

    def test_login_form_timeout_downgraded(self):
        page = login_page(PlaywrightTimeoutError("Timeout 15000ms exceeded"))

        assert asyncio.run(maybe_auto_login(page, "me@example.com", "secret")) is False
        page.keyboard.press.assert_not_awaited()

    def test_password_step_failure_downgraded(self):
        email = field_mock()
        page = login_page(email, PlaywrightTimeoutError("Timeout 30000ms exceeded"))

        assert asyncio.run(maybe_auto_login(page, "me@example.com", "secret")) is False
        email.type.assert_awaited_once()

    def test_detached_field_downgraded(self):
        email = field_mock()
        email.fill.side_effect = PlaywrightError("Element is not attached to the DOM")
        page = login_page(email)

        assert asyncio.run(maybe_auto_login(page, "me@example.com", "secret")) is False
        email.type.assert_not_awaited()
        page.keyboard.press.assert_not_awaited()
