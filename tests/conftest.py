"""
Shared fakes for Playwright pages, locators and browser contexts.
"""

import sys
import os
from typing import Dict, List, Optional

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

# Add project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class FakeElement:
    """Stands in for a single-element Playwright Locator."""

    def __init__(
        self,
        name: str = "el",
        visible: bool = True,
        disabled: bool = False,
        click_error: Optional[Exception] = None,
        aria_label: Optional[str] = None,
        text: str = "",
    ):
        self.name = name
        self.visible = visible
        self.disabled = disabled
        self.click_error = click_error
        self.aria_label = aria_label
        self.text = text
        self.clicks = 0
        self.click_attempts = 0

    async def is_visible(self):
        return self.visible

    async def is_disabled(self):
        return self.disabled

    async def wait_for(self, state="visible", timeout=None):
        if not self.visible:
            raise PlaywrightTimeoutError("element not visible")

    async def click(self, timeout=None):
        self.click_attempts += 1
        if self.click_error is not None:
            raise self.click_error
        self.clicks += 1

    async def get_attribute(self, name):
        if name == "aria-label":
            return self.aria_label
        return None

    async def inner_text(self):
        return self.text


class FakeLocator:
    def __init__(self, elements: List[FakeElement], error: Optional[Exception] = None):
        self.elements = elements
        self.error = error

    async def count(self):
        if self.error is not None:
            raise self.error
        return len(self.elements)

    def nth(self, index):
        return self.elements[index]

    @property
    def first(self):
        return self.elements[0]


class FakePage:
    """Page whose selectors resolve from a dict; records which selectors were queried."""

    def __init__(self, name: str = "page", selectors: Optional[Dict[str, List[FakeElement]]] = None):
        self.name = name
        self.selectors = selectors or {}
        self.selector_errors: Dict[str, Exception] = {}
        self.locator_calls: List[str] = []
        self.reloads = 0
        self.reload_error: Optional[Exception] = None
        self.load_state_error: Optional[Exception] = None
        self.closed = False
        self.actionable = False

    def locator(self, selector):
        self.locator_calls.append(selector)
        return FakeLocator(self.selectors.get(selector, []), self.selector_errors.get(selector))

    async def query_selector(self, selector):
        found = self.selectors.get(selector, [])
        return found[0] if found else None

    async def reload(self, wait_until=None):
        self.reloads += 1
        if self.reload_error is not None:
            raise self.reload_error

    async def wait_for_load_state(self, state=None, timeout=None):
        if self.load_state_error is not None:
            raise self.load_state_error

    def is_closed(self):
        return self.closed


class FakeClock:
    """Monotonic clock advanced only by the code under test."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: List[float] = []

    def __call__(self):
        return self.now

    async def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class FakeContext:
    """Browser context that opens scheduled pages when their time comes."""

    def __init__(self, pages: List[FakePage], clock: FakeClock):
        self.pages = list(pages)
        self.clock = clock
        self.scheduled: List[tuple] = []
        self.event_waits = 0

    def schedule_page(self, at: float, page: FakePage):
        self.scheduled.append((at, page))

    async def wait_for_event(self, event, timeout=None):
        self.event_waits += 1
        self.clock.now += (timeout or 0) / 1000
        for item in list(self.scheduled):
            at, page = item
            if self.clock.now >= at:
                self.scheduled.remove(item)
                self.pages.append(page)
                return page
        raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded while waiting for event \"{event}\"")


@pytest.fixture
def clock():
    return FakeClock()
