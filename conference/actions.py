"""
Semantic UI actions against a participant session.

Each helper translates one conference-level action (click a toolbar
control, focus the self view, read a mute icon) into Playwright calls.
None of them wait: callers synchronise with :mod:`conference.waits`
before acting.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from playwright.sync_api import Locator

from conference import selectors
from conference.errors import ElementNotFoundError

if TYPE_CHECKING:
    from conference.session import Session

logger = logging.getLogger(__name__)

MUTE_KINDS = tuple(selectors.MUTE_ICONS)


def locate(session: Session, selector: str) -> Locator:
    """
    Return the first element matching ``selector``.

    Raises:
        ElementNotFoundError: If nothing matches.
    """
    locator = session.page.locator(selector)
    if locator.count() == 0:
        raise ElementNotFoundError(session.role, selector)
    return locator.first


def click_control(session: Session, control_id: str) -> None:
    """Click the control whose element id is ``control_id``."""
    logger.info("%s clicks %s", session.role, control_id)
    locate(session, f"#{control_id}").click()


def click_local_video(session: Session) -> None:
    """Click the self-view thumbnail, toggling focus on the local video."""
    logger.info("%s clicks the local video", session.role)
    locate(session, selectors.LOCAL_VIDEO_CONTAINER).click()


def hover_element(session: Session, element_id: str) -> None:
    """Move the pointer over ``element_id`` and leave it there."""
    locate(session, f"#{element_id}").hover()


def execute_script(session: Session, script: str) -> Any:
    return session.page.evaluate(script)


def endpoint_id(session: Session) -> str:
    """Return the conference endpoint id of the participant behind ``session``."""
    return execute_script(session, "() => APP.conference.getMyUserId()")


def set_toolbar_docked(session: Session, docked: bool) -> None:
    # Docked toolbars never auto-hide, which keeps the filmstrip pinned open.
    execute_script(session, f"() => APP.UI.dockToolbar({'true' if docked else 'false'})")


def read_mute_state(session: Session, observed: Session, kind: str) -> bool:
    """
    Report whether ``session`` displays the ``kind`` mute icon for ``observed``.

    Args:
        session: The observing participant.
        observed: The participant whose thumbnail is inspected; may be
            the observer itself, in which case the self view is used.
        kind: ``"audio"`` or ``"video"``.

    Returns:
        True if the mute indicator is displayed.
    """
    if kind not in MUTE_KINDS:
        raise ValueError(f"Unknown mute kind {kind!r}; expected one of {MUTE_KINDS}")

    if observed.role == session.role:
        container_id = selectors.LOCAL_VIDEO_CONTAINER_ID
    else:
        container_id = selectors.participant_container_id(endpoint_id(observed))

    icon = session.page.locator(selectors.mute_icon(container_id, kind))
    return icon.first.is_visible()
