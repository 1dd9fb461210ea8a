"""
Participant session fixture.

A :class:`ConferenceFixture` owns one Playwright browser context per
participant role ("owner", "second participant", ...). Scenarios borrow
:class:`Session` handles from it and never close them directly.

Configuration overrides travel in the meeting URL and are only read by
the client at load time, so changing them means closing the role's
session and starting a new one.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import quote

from playwright.sync_api import Browser, BrowserContext, Page
from playwright.sync_api import Error as PlaywrightError

from conference.errors import NotFoundError, SessionStartError, WaitTimeoutError
from conference.waits import DEFAULT_POLL_INTERVAL, poll_until, wait_for_script_value
from config import get_config

logger = logging.getLogger(__name__)

OWNER = "owner"
SECOND_PARTICIPANT = "second participant"
THIRD_PARTICIPANT = "third participant"

# Seconds allowed for a closed context to report its page closed.
CLOSE_TIMEOUT = 5.0

# Characters left unescaped in override values; the client parses the
# fragment itself and accepts quoted JSON strings.
_VALUE_SAFE_CHARS = "\"'/:,"


def encode_overrides(overrides: Mapping[str, str]) -> str:
    """Encode overrides as ``key=value&key=value`` preserving insertion order."""
    return "&".join(
        f"{key}={quote(str(value), safe=_VALUE_SAFE_CHARS)}"
        for key, value in overrides.items()
    )


def build_meeting_url(
    meeting_url: str,
    overrides: Mapping[str, str] | None = None,
    in_query: bool = False,
) -> str:
    """
    Append configuration overrides to a meeting URL.

    Args:
        meeting_url: URL of the meeting room.
        overrides: Opaque configuration key/value pairs.
        in_query: Put overrides in the query string instead of the fragment.

    Returns:
        The URL the participant browser should load.
    """
    if not overrides:
        return meeting_url

    encoded = encode_overrides(overrides)
    if in_query:
        base, hash_mark, fragment = meeting_url.partition("#")
        separator = "&" if "?" in base else "?"
        return f"{base}{separator}{encoded}{hash_mark}{fragment}"

    separator = "&" if "#" in meeting_url else "#"
    return f"{meeting_url}{separator}{encoded}"


@dataclass
class Session:
    """
    One participant's browser, bound to a role.

    Attributes:
        role: Participant role name.
        context: Isolated Playwright browser context.
        page: The page showing the meeting.
        url: Last navigation URL, overrides included.
    """

    role: str
    context: BrowserContext
    page: Page
    url: str

    @property
    def is_closed(self) -> bool:
        return self.page.is_closed()


class ConferenceFixture:
    """
    Owns the live participant sessions of a scenario group.

    At most one session exists per role; starting a role that is already
    live closes the old session (and waits for it to be gone) first.
    """

    def __init__(
        self,
        browser: Browser,
        meeting_url: str,
        baseline_overrides: Mapping[str, str] | None = None,
        role_overrides: Mapping[str, Mapping[str, str]] | None = None,
        context_args: dict | None = None,
        navigation_timeout: float | None = None,
        overrides_in_query: bool | None = None,
    ):
        """
        Initialize the fixture.

        Args:
            browser: Playwright browser the sessions are created in.
            meeting_url: URL of the meeting room.
            baseline_overrides: Overrides applied to every session.
            role_overrides: Per-role overrides applied on every start of
                that role (display names, for instance).
            context_args: Keyword arguments for ``browser.new_context``.
            navigation_timeout: Seconds allowed for the meeting to load.
            overrides_in_query: Encode overrides in the query string.
        """
        settings = get_config()
        self._browser = browser
        self.meeting_url = meeting_url
        self.baseline_overrides = dict(
            settings.BASELINE_URL_OVERRIDES
            if baseline_overrides is None
            else baseline_overrides
        )
        self.role_overrides = {
            role: dict(values) for role, values in (role_overrides or {}).items()
        }
        self._context_args = dict(context_args or {})
        self.navigation_timeout = (
            settings.NAVIGATION_TIMEOUT if navigation_timeout is None else navigation_timeout
        )
        self.overrides_in_query = (
            settings.OVERRIDES_IN_QUERY if overrides_in_query is None else overrides_in_query
        )
        self._sessions: dict[str, Session] = {}

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def url_for(self, role: str, url_overrides: Mapping[str, str] | None = None) -> str:
        """Return the meeting URL ``role`` would load with ``url_overrides``."""
        overrides = dict(self.baseline_overrides)
        overrides.update(self.role_overrides.get(role, {}))
        overrides.update(url_overrides or {})
        return build_meeting_url(self.meeting_url, overrides, self.overrides_in_query)

    def start(self, role: str, url_overrides: Mapping[str, str] | None = None) -> Session:
        """
        Start a fresh session for ``role`` and load the meeting.

        Any live session of the role is closed first, and its closure is
        verified before the new browser context is created.

        Args:
            role: Participant role name.
            url_overrides: Configuration overrides for this session only.

        Returns:
            The new session.

        Raises:
            SessionStartError: If the old session would not close, or the
                new one could not be created or navigated.
        """
        if role in self._sessions:
            logger.info("Restarting %s", role)
            self.close(role)

        url = self.url_for(role, url_overrides)
        logger.info("Starting %s at %s", role, url)

        try:
            context = self._browser.new_context(**self._context_args)
        except PlaywrightError as exc:
            raise SessionStartError(role, url, f"could not create browser context: {exc}") from exc

        try:
            page = context.new_page()
            page.goto(url, timeout=self.navigation_timeout * 1000)
        except PlaywrightError as exc:
            context.close()
            raise SessionStartError(role, url, f"navigation failed: {exc}") from exc

        session = Session(role=role, context=context, page=page, url=url)
        self._sessions[role] = session
        return session

    def get(self, role: str) -> Session:
        """
        Return the live session of ``role``.

        Raises:
            NotFoundError: If no session was started for the role.
        """
        try:
            return self._sessions[role]
        except KeyError:
            raise NotFoundError(f"No session started for {role!r}", role=role) from None

    def close(self, role: str) -> None:
        """
        Close the session of ``role`` and wait until it is gone.

        Closing a role without a live session does nothing.

        Raises:
            SessionStartError: If the browser refuses to close the context
                or the page never reports closed.
        """
        session = self._sessions.pop(role, None)
        if session is None:
            return

        logger.info("Closing %s", role)
        try:
            session.context.close()
        except PlaywrightError as exc:
            raise SessionStartError(role, session.url, f"close failed: {exc}") from exc
        try:
            poll_until(
                lambda: session.is_closed,
                bool,
                CLOSE_TIMEOUT,
                min(DEFAULT_POLL_INTERVAL, 0.1),
                description=f"{role} page to close",
            )
        except WaitTimeoutError as exc:
            raise SessionStartError(role, session.url, "session did not close") from exc

    def restart_all(self, default_overrides: Mapping[str, str] | None = None) -> list[Session]:
        """
        Close every live session, then start each role again from baseline.

        Args:
            default_overrides: Overrides applied on top of the baseline;
                None restarts with the baseline alone.

        Returns:
            The restarted sessions in their original start order.
        """
        roles = self.active_roles()
        logger.info("Restarting participants: %s", ", ".join(roles) or "none")
        for role in roles:
            self.close(role)
        return [self.start(role, default_overrides) for role in roles]

    def close_all(self) -> None:
        """
        Close every live session; used at suite teardown.

        Every role is attempted even when an earlier one fails.

        Raises:
            SessionStartError: The first close failure, after all roles
                were attempted.
        """
        first_error: SessionStartError | None = None
        for role in self.active_roles():
            try:
                self.close(role)
            except SessionStartError as exc:
                logger.warning("Could not close %s: %s", role, exc)
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def active_roles(self) -> list[str]:
        return list(self._sessions)

    def is_active(self, role: str) -> bool:
        return role in self._sessions

    def wait_for_joined(self, role: str, timeout: float) -> None:
        """Block until ``role`` has joined the conference."""
        wait_for_script_value(
            self.get(role), "() => APP.conference.isJoined()", True, timeout
        )

    def wait_for_participant_count(self, role: str, count: int, timeout: float) -> None:
        """Block until ``role`` sees ``count`` members, itself included."""
        wait_for_script_value(
            self.get(role), "() => APP.conference.membersCount", count, timeout
        )
