"""Tests for environment-driven settings."""

import os

import pytest

from shopdesk.config.settings import (
    DEFAULT_FETCH_ATTEMPTS,
    load_fetch_settings,
    load_store_settings,
)
from shopdesk.domain.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in (
        "SHOPDESK_STORE_URL",
        "SHOPDESK_STORE_KEY",
        "SHOPDESK_FETCH_ATTEMPTS",
        "SHOPDESK_FETCH_RETRY_DELAY",
    ):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the tests
    monkeypatch.chdir(tmp_path)
    yield
    # load_dotenv writes to os.environ directly
    os.environ.pop("SHOPDESK_STORE_URL", None)


def test_missing_url_is_an_error():
    with pytest.raises(ConfigurationError, match="SHOPDESK_STORE_URL is not set"):
        load_store_settings()


def test_remote_url_requires_key(monkeypatch):
    monkeypatch.setenv("SHOPDESK_STORE_URL", "https://example.supabase.co")
    with pytest.raises(ConfigurationError, match="SHOPDESK_STORE_KEY is not set"):
        load_store_settings()


def test_remote_settings_from_environment(monkeypatch):
    monkeypatch.setenv("SHOPDESK_STORE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SHOPDESK_STORE_KEY", "anon")

    settings = load_store_settings()

    assert settings.is_remote
    assert settings.key == "anon"


def test_arguments_override_environment(monkeypatch):
    monkeypatch.setenv("SHOPDESK_STORE_URL", "https://example.supabase.co")
    settings = load_store_settings(url="sqlite:///shop.db")
    assert not settings.is_remote
    assert settings.key is None


def test_dotenv_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("SHOPDESK_STORE_URL=sqlite:///from-dotenv.db\n")
    assert load_store_settings().url == "sqlite:///from-dotenv.db"


def test_fetch_settings_defaults():
    settings = load_fetch_settings()
    assert settings.attempts == DEFAULT_FETCH_ATTEMPTS
    assert settings.retry_delay == 0.5


def test_fetch_settings_from_environment(monkeypatch):
    monkeypatch.setenv("SHOPDESK_FETCH_ATTEMPTS", "5")
    monkeypatch.setenv("SHOPDESK_FETCH_RETRY_DELAY", "0")
    settings = load_fetch_settings()
    assert settings.attempts == 5
    assert settings.retry_delay == 0


@pytest.mark.parametrize("attempts, delay", [("many", "1"), ("0", "1"), ("2", "-1")])
def test_invalid_fetch_settings(monkeypatch, attempts, delay):
    monkeypatch.setenv("SHOPDESK_FETCH_ATTEMPTS", attempts)
    monkeypatch.setenv("SHOPDESK_FETCH_RETRY_DELAY", delay)
    with pytest.raises(ConfigurationError):
        load_fetch_settings()
