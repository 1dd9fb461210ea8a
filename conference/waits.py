"""
Bounded polling waits for asynchronous UI transitions.

CSS transitions, toolbar auto-hide and remote media arriving are not
observable as events from outside the client, so every wait here checks
the page on a fixed interval until the expected state shows up or the
timeout elapses.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import requests

from conference import actions
from conference.errors import WaitTimeoutError
from config import get_config

if TYPE_CHECKING:
    from conference.session import Session

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_POLL_INTERVAL: float = get_config().WAIT_POLL_INTERVAL


def poll_until(
    check: Callable[[], T],
    accept: Callable[[T], bool],
    timeout: float,
    interval: float = DEFAULT_POLL_INTERVAL,
    description: str = "condition",
    **error_fields: Any,
) -> T:
    """
    Check until a value is accepted or the timeout elapses.

    The first check happens immediately. Sleeps never run past the
    deadline, and the last check happens at or after it, so a failure
    is raised no earlier than ``timeout`` and no later than one
    interval after it.

    Args:
        check: Zero-argument callable returning the observed value.
        accept: Predicate deciding whether the observed value is final.
        timeout: Upper bound in seconds.
        interval: Seconds between two checks.
        description: Human-readable condition used in the error.
        **error_fields: Extra attributes for :class:`WaitTimeoutError`.

    Returns:
        The first accepted value.

    Raises:
        WaitTimeoutError: If no check was accepted in time.
    """
    if interval <= 0:
        raise ValueError(f"Polling interval must be positive, got {interval}")

    deadline = time.monotonic() + timeout
    while True:
        observed = check()
        if accept(observed):
            return observed
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            logger.warning("Gave up waiting for %s after %ss", description, timeout)
            raise WaitTimeoutError(
                description, timeout, last_observed=observed, **error_fields
            )
        logger.debug("Still waiting for %s (observed %r)", description, observed)
        time.sleep(min(interval, remaining))


def is_displayed(session: Session, selector: str) -> bool:
    """Return True when the first element matching ``selector`` is visible."""
    return session.page.locator(selector).first.is_visible()


def wait_until(
    session: Session,
    selector: str,
    expected_presence: bool,
    timeout_seconds: float,
    interval: float = DEFAULT_POLL_INTERVAL,
) -> None:
    """
    Block until ``selector`` is (or is not) displayed for a participant.

    Args:
        session: Participant session to observe.
        selector: CSS or XPath selector.
        expected_presence: True to wait for display, False for disappearance.
        timeout_seconds: Upper bound in seconds.
        interval: Seconds between two checks.

    Raises:
        WaitTimeoutError: Carrying the selector and the last observed state.
    """
    state = "displayed" if expected_presence else "not displayed"
    poll_until(
        lambda: is_displayed(session, selector),
        lambda displayed: displayed == expected_presence,
        timeout_seconds,
        interval,
        description=f"{selector} to be {state} for {session.role}",
        selector=selector,
        expected=expected_presence,
    )


def wait_until_displayed(
    session: Session,
    selector: str,
    timeout_seconds: float,
    interval: float = DEFAULT_POLL_INTERVAL,
) -> None:
    wait_until(session, selector, True, timeout_seconds, interval)


def wait_until_absent(
    session: Session,
    selector: str,
    timeout_seconds: float,
    interval: float = DEFAULT_POLL_INTERVAL,
) -> None:
    wait_until(session, selector, False, timeout_seconds, interval)


def wait_for_mute_state(
    observer: Session,
    observed: Session,
    kind: str,
    muted: bool,
    timeout_seconds: float,
    interval: float = DEFAULT_POLL_INTERVAL,
) -> None:
    """Block until ``observer`` sees the ``kind`` mute icon of ``observed`` as ``muted``."""
    state = "muted" if muted else "unmuted"
    poll_until(
        lambda: actions.read_mute_state(observer, observed, kind),
        lambda shown: shown == muted,
        timeout_seconds,
        interval,
        description=f"{observer.role} to see {observed.role} {kind} {state}",
        expected=muted,
    )


def wait_for_script_value(
    session: Session,
    script: str,
    expected: Any,
    timeout_seconds: float,
    interval: float = DEFAULT_POLL_INTERVAL,
) -> Any:
    """Block until evaluating ``script`` in the page returns ``expected``."""
    return poll_until(
        lambda: actions.execute_script(session, script),
        lambda value: value == expected,
        timeout_seconds,
        interval,
        description=f"{script!r} to return {expected!r} for {session.role}",
        expected=expected,
    )


def _status_code(url: str, verify: bool) -> int | None:
    try:
        return requests.get(url, timeout=2, verify=verify).status_code
    except requests.RequestException as exc:
        logger.debug("Conference server at %s not answering: %s", url, exc)
        return None


def wait_for_meeting_reachable(
    url: str, timeout: float = 60, interval: float = 1, verify: bool = False
) -> None:
    """
    Poll the conference web server until it answers 200 or the timeout elapses.

    Args:
        url: Root URL of the conference web client.
        timeout: Upper bound in seconds.
        interval: Seconds between two requests.
        verify: Verify the server's TLS certificate.

    Raises:
        WaitTimeoutError: If the server never answered 200 in time.
    """
    poll_until(
        lambda: _status_code(url, verify),
        lambda status: status == 200,
        timeout,
        interval,
        description=f"conference server at {url} to answer",
        expected=200,
    )
