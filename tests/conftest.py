"""
Shared pytest fixtures for the conference test suite.

Unit tests never start a browser: Playwright's ``Browser``,
``BrowserContext`` and ``Page`` are replaced by ``MagicMock`` objects
built against the real classes, so the harness code runs unchanged.

Key Concepts Demonstrated:
- Factory fixtures for fake participant sessions
- Spec'd mocks that reject attributes the real API does not have
- Side effects that mimic Playwright state (closing a context closes its page)
"""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest
from playwright.sync_api import Browser, BrowserContext, Page

from conference.session import Session


def _fake_context() -> MagicMock:
    """Build a context whose page reports closed once the context is closed."""
    page = MagicMock(spec=Page)
    page.is_closed.return_value = False

    context = MagicMock(spec=BrowserContext)
    context.new_page.return_value = page

    def _close(*args, **kwargs):
        page.is_closed.return_value = True

    context.close.side_effect = _close
    return context


@pytest.fixture
def fake_browser() -> MagicMock:
    """
    Playwright browser double that records every context it creates.

    Returns:
        Mock browser; ``created_contexts`` lists contexts in creation order.
    """
    browser = MagicMock(spec=Browser)
    browser.created_contexts = []

    def _new_context(**kwargs):
        context = _fake_context()
        browser.created_contexts.append(context)
        return context

    browser.new_context.side_effect = _new_context
    return browser


@pytest.fixture
def session_factory() -> Callable[..., Session]:
    """
    Factory for sessions backed by mock pages.

    Example:
        def test_something(session_factory):
            owner = session_factory("owner")
            owner.page.locator.return_value.count.return_value = 1
    """

    def _make(role: str = "owner", url: str = "https://meet.example/room") -> Session:
        context = _fake_context()
        return Session(role=role, context=context, page=context.new_page(), url=url)

    return _make


@pytest.fixture
def meeting_url() -> str:
    return "https://meet.example/torture123"
