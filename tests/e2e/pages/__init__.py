"""
Page Object Model (POM) classes for the conference UI.

Page objects wrap a participant session borrowed from the conference
fixture and keep selectors and waits out of the scenario code.
"""

from tests.e2e.pages.base_page import BasePage
from tests.e2e.pages.meeting_page import MeetingPage
from tests.e2e.pages.video_quality_dialog import VideoQualityDialog

__all__ = ["BasePage", "MeetingPage", "VideoQualityDialog"]
