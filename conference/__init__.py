"""
Conference UI test harness.

Reusable pieces shared by the conference regression scenarios: a
fixture owning one browser session per participant role, semantic UI
actions, and bounded polling waits for asynchronous UI transitions.
"""

from __future__ import annotations

import logging

from conference.errors import (
    ConferenceError,
    ElementNotFoundError,
    NotFoundError,
    SessionStartError,
    WaitTimeoutError,
)
from conference.session import (
    OWNER,
    SECOND_PARTICIPANT,
    THIRD_PARTICIPANT,
    ConferenceFixture,
    Session,
    build_meeting_url,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

__all__ = [
    "OWNER",
    "SECOND_PARTICIPANT",
    "THIRD_PARTICIPANT",
    "ConferenceError",
    "ConferenceFixture",
    "ElementNotFoundError",
    "NotFoundError",
    "Session",
    "SessionStartError",
    "WaitTimeoutError",
    "build_meeting_url",
]
