"""
Application settings loaded from the process environment.

A ``.env`` file in the working directory is read first, so local setups can
keep the store URL and key out of the shell profile.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from shopdesk.domain.errors import ConfigurationError, missing_setting

STORE_URL_ENV = "SHOPDESK_STORE_URL"
STORE_KEY_ENV = "SHOPDESK_STORE_KEY"
PREFS_PATH_ENV = "SHOPDESK_PREFS_PATH"
FETCH_ATTEMPTS_ENV = "SHOPDESK_FETCH_ATTEMPTS"
FETCH_RETRY_DELAY_ENV = "SHOPDESK_FETCH_RETRY_DELAY"

DEFAULT_FETCH_ATTEMPTS = 3
DEFAULT_FETCH_RETRY_DELAY = 0.5


@dataclass(frozen=True)
class StoreSettings:
    """Connection parameters for the record store."""

    url: str
    key: Optional[str] = None

    @property
    def is_remote(self) -> bool:
        """True when the URL points at the hosted REST store."""
        return self.url.startswith(("http://", "https://"))


@dataclass(frozen=True)
class FetchSettings:
    """Retry policy for snapshot fetches."""

    attempts: int = DEFAULT_FETCH_ATTEMPTS
    retry_delay: float = DEFAULT_FETCH_RETRY_DELAY


def load_store_settings(url: Optional[str] = None, key: Optional[str] = None) -> StoreSettings:
    """Resolve store settings from arguments, then the environment.

    Raises:
        ConfigurationError: If the URL is missing, or the key is missing for
            a remote store
    """
    load_dotenv(find_dotenv(usecwd=True))
    url = url or os.environ.get(STORE_URL_ENV)
    key = key or os.environ.get(STORE_KEY_ENV)

    if not url:
        raise ConfigurationError(missing_setting(STORE_URL_ENV))

    settings = StoreSettings(url=url, key=key or None)
    if settings.is_remote and not settings.key:
        raise ConfigurationError(missing_setting(STORE_KEY_ENV))
    return settings


def load_fetch_settings() -> FetchSettings:
    """Read the snapshot retry policy from the environment.

    Raises:
        ConfigurationError: If a value is not a number or out of range
    """
    raw_attempts = os.environ.get(FETCH_ATTEMPTS_ENV)
    raw_delay = os.environ.get(FETCH_RETRY_DELAY_ENV)
    try:
        attempts = int(raw_attempts) if raw_attempts else DEFAULT_FETCH_ATTEMPTS
        delay = float(raw_delay) if raw_delay else DEFAULT_FETCH_RETRY_DELAY
    except ValueError as e:
        raise ConfigurationError(f"Invalid fetch retry setting: {e}") from e

    if attempts < 1:
        raise ConfigurationError(f"{FETCH_ATTEMPTS_ENV} must be at least 1")
    if delay < 0:
        raise ConfigurationError(f"{FETCH_RETRY_DELAY_ENV} must not be negative")
    return FetchSettings(attempts=attempts, retry_delay=delay)


def default_prefs_path() -> Path:
    """Preference file location: SHOPDESK_PREFS_PATH or ~/.shopdesk/preferences.json."""
    configured = os.environ.get(PREFS_PATH_ENV)
    if configured:
        return Path(configured)
    return Path.home() / ".shopdesk" / "preferences.json"
