"""
Exceptions raised by the conference test harness.

Every error propagates straight to the running scenario; the harness
never retries on its own (apart from the bounded polling loop in
:mod:`conference.waits`).
"""

from __future__ import annotations


class ConferenceError(Exception):
    """Base class for harness errors."""


class SessionStartError(ConferenceError):
    """A participant browser session could not be created, navigated or closed."""

    def __init__(self, role: str, url: str | None, reason: str):
        self.role = role
        self.url = url
        self.reason = reason
        target = f" at {url}" if url else ""
        super().__init__(f"Session for {role!r}{target} failed: {reason}")


class NotFoundError(ConferenceError):
    """A requested session (or element) does not exist."""

    def __init__(self, message: str, role: str | None = None):
        self.role = role
        super().__init__(message)


class ElementNotFoundError(NotFoundError):
    """The target element of a UI action is absent from the page."""

    def __init__(self, role: str, selector: str):
        self.selector = selector
        super().__init__(f"No element matching {selector!r} for {role!r}", role=role)


class WaitTimeoutError(ConferenceError):
    """A polled condition did not hold within its timeout."""

    def __init__(
        self,
        description: str,
        timeout: float,
        last_observed: object = None,
        selector: str | None = None,
        expected: object = None,
    ):
        self.description = description
        self.timeout = timeout
        self.last_observed = last_observed
        self.selector = selector
        self.expected = expected
        super().__init__(
            f"Timed out after {timeout}s waiting for {description} "
            f"(last observed: {last_observed!r})"
        )
