"""Gateway factory functions for creating store gateway instances."""

from pathlib import Path
from typing import Optional

from shopdesk.config.settings import StoreSettings
from shopdesk.gateway.base import StoreGateway
from shopdesk.gateway.changes import ChangeHub
from shopdesk.gateway.sqlalchemy_gateway import SQLAlchemyGateway


def create_sqlite_gateway(database_path: str | Path, hub: Optional[ChangeHub] = None) -> SQLAlchemyGateway:
    """Create a gateway over a local SQLite file.

    Args:
        database_path: Path to the SQLite database file
        hub: Optional change hub shared with other gateways

    Returns:
        SQLAlchemyGateway instance configured for SQLite
    """
    return SQLAlchemyGateway(f"sqlite:///{database_path}", hub=hub)


def create_gateway(settings: StoreSettings, hub: Optional[ChangeHub] = None) -> StoreGateway:
    """Create the gateway matching the configured store URL.

    ``http(s)://`` URLs select the hosted store; anything else is handed to
    SQLAlchemy as a database URL.
    """
    if settings.is_remote:
        # Imported here so local-only setups do not pay for the HTTP stack
        from shopdesk.gateway.supabase_gateway import SupabaseGateway

        return SupabaseGateway(settings.url, settings.key or "", hub=hub)
    return SQLAlchemyGateway(settings.url, hub=hub)
