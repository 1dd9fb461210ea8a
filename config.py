"""
Harness configuration module.

This module defines configuration classes for the environments the
conference suite runs in (local development, CI). Values are loaded
from environment variables with sensible defaults.
"""

import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


class Config:
    """Base configuration with default settings."""

    # Root of the conference web client; the room name is appended to it.
    MEET_BASE_URL: str | None = os.environ.get("MEET_BASE_URL")
    ROOM_PREFIX: str = os.environ.get("MEET_ROOM_PREFIX", "torture")

    # Seconds allowed for a participant page to load the meeting.
    NAVIGATION_TIMEOUT: float = float(os.environ.get("MEET_NAVIGATION_TIMEOUT", "30"))

    # Seconds between two checks of a polling wait.
    WAIT_POLL_INTERVAL: float = float(os.environ.get("MEET_WAIT_POLL_INTERVAL", "0.5"))

    # Seconds allowed for a participant to join the conference.
    JOIN_TIMEOUT: float = float(os.environ.get("MEET_JOIN_TIMEOUT", "20"))

    # The client reads load-time overrides from the URL fragment by default.
    OVERRIDES_IN_QUERY: bool = _env_flag("MEET_OVERRIDES_IN_QUERY", "false")

    # Feed synthetic camera/microphone streams to the browsers.
    FAKE_MEDIA: bool = _env_flag("MEET_FAKE_MEDIA", "true")
    FAKE_MEDIA_ARGS: list = [
        "--use-fake-ui-for-media-stream",
        "--use-fake-device-for-media-stream",
    ]

    HEADLESS: bool = _env_flag("MEET_HEADLESS", "true")

    # Verify TLS certificates when polling the deployment; test deployments
    # commonly run on self-signed certificates.
    VERIFY_TLS: bool = _env_flag("MEET_VERIFY_TLS", "false")

    SCREENSHOT_DIR: Path = Path(
        os.environ.get("MEET_SCREENSHOT_DIR", BASE_DIR / "test-results" / "screenshots")
    )

    # Overrides appended to every participant's meeting URL.
    BASELINE_URL_OVERRIDES: dict = {
        "config.requireDisplayName": "false",
        "config.debug": "true",
        "config.disableAEC": "true",
        "config.disableNS": "true",
        "config.callStatsID": "false",
        "config.alwaysVisibleToolbar": "true",
        "config.p2p.enabled": "false",
        "config.disable1On1Mode": "true",
    }

    BROWSER_CONTEXT_ARGS: dict = {
        "viewport": {"width": 1280, "height": 720},
        "ignore_https_errors": True,
    }

    @classmethod
    def launch_args(cls, base: dict) -> dict:
        """
        Merge harness settings into the browser launch options.

        Args:
            base: Launch options assembled from the pytest command line.

        Returns:
            Launch options with headless mode and fake media applied.
            A headed run requested on the command line stays headed.
        """
        options = {**base, "headless": cls.HEADLESS and base.get("headless", True)}
        if cls.FAKE_MEDIA:
            options["args"] = [*base.get("args", []), *cls.FAKE_MEDIA_ARGS]
        return options


class LocalConfig(Config):
    """Local development configuration."""

    HEADLESS: bool = _env_flag("MEET_HEADLESS", "false")


class CIConfig(Config):
    """Continuous integration configuration."""

    HEADLESS: bool = True

    # Shared CI runners load the client noticeably slower.
    NAVIGATION_TIMEOUT: float = float(os.environ.get("MEET_NAVIGATION_TIMEOUT", "60"))


# Configuration mapping for easy access
config = {
    "local": LocalConfig,
    "ci": CIConfig,
    "default": LocalConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (local, ci).
             If None, uses the MEET_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("MEET_ENV", "local")
    return config.get(env, config["default"])
