"""Configuration for shopdesk: settings and logging."""

from shopdesk.config.logging import configure_logging, get_logger
from shopdesk.config.settings import (
    FetchSettings,
    StoreSettings,
    load_fetch_settings,
    load_store_settings,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "FetchSettings",
    "StoreSettings",
    "load_fetch_settings",
    "load_store_settings",
]
