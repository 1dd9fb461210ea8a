"""Playwright fixtures for multi-participant conference E2E tests."""

from __future__ import annotations

import json
import uuid
from collections.abc import Generator

import pytest
from faker import Faker
from playwright.sync_api import Browser
from playwright.sync_api import Error as PlaywrightError

from conference.session import OWNER, SECOND_PARTICIPANT, THIRD_PARTICIPANT, ConferenceFixture
from conference.waits import wait_for_meeting_reachable
from config import Config, get_config
from tests.e2e.pages.meeting_page import MeetingPage

fake = Faker()


@pytest.fixture(scope="session")
def settings() -> type[Config]:
    return get_config()


@pytest.fixture(scope="session")
def test_run_id() -> str:
    """Unique id for current E2E run so parallel runs never share a room."""
    return uuid.uuid4().hex[:8]


@pytest.fixture(scope="session")
def meeting_url(settings: type[Config], test_run_id: str) -> str:
    """
    Return the URL of a fresh meeting room on a reachable deployment.

    MEET_BASE_URL must point at a running conference web client.
    """
    base_url = settings.MEET_BASE_URL
    if not base_url:
        pytest.skip("MEET_BASE_URL is not set; point it at a conference deployment")
    wait_for_meeting_reachable(base_url, verify=settings.VERIFY_TLS)
    return f"{base_url.rstrip('/')}/{settings.ROOM_PREFIX}{test_run_id}"


@pytest.fixture(scope="session")
def browser_type_launch_args(browser_type_launch_args: dict, settings: type[Config]) -> dict:
    return settings.launch_args(browser_type_launch_args)


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args: dict, settings: type[Config]) -> dict:
    return {
        **browser_context_args,
        **settings.BROWSER_CONTEXT_ARGS,
        "permissions": ["camera", "microphone"],
    }


@pytest.fixture(scope="session")
def participant_names() -> dict[str, str]:
    """Display name per participant role."""
    return {role: fake.first_name() for role in (OWNER, SECOND_PARTICIPANT, THIRD_PARTICIPANT)}


@pytest.fixture(scope="module")
def conference(
    meeting_url: str,
    browser: Browser,
    browser_context_args: dict,
    participant_names: dict[str, str],
    settings: type[Config],
) -> Generator[ConferenceFixture, None, None]:
    """
    Conference with the owner and second participant joined.

    Module scope lets the ordered steps of one scenario build on each
    other's state; every module starts from a clean pair of browsers.
    """
    fixture = ConferenceFixture(
        browser,
        meeting_url,
        role_overrides={
            role: {"userInfo.displayName": json.dumps(name)}
            for role, name in participant_names.items()
        },
        context_args=browser_context_args,
    )
    try:
        for role in (OWNER, SECOND_PARTICIPANT):
            fixture.start(role)
            fixture.wait_for_joined(role, settings.JOIN_TIMEOUT)
        yield fixture
    finally:
        fixture.close_all()


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Capture a screenshot of every live participant on test failure."""
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        conference = item.funcargs.get("conference")
        if conference is not None:
            test_name = item.name.replace("/", "_").replace("::", "_")
            for role in conference.active_roles():
                try:
                    path = MeetingPage(conference.get(role)).take_screenshot(test_name)
                    print(f"\nScreenshot saved: {path}")
                except PlaywrightError as exc:
                    print(f"\nFailed to capture screenshot for {role}: {exc}")
