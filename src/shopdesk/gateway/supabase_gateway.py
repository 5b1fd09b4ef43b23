"""Supabase-backed store gateway."""

from decimal import Decimal
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from shopdesk.config.logging import get_logger
from shopdesk.domain.errors import GatewayError, record_not_found
from shopdesk.gateway.base import Record, StoreGateway
from shopdesk.gateway.changes import ChangeHub, ChangeKind

logger = get_logger(__name__)


def _jsonable(value: Any) -> Any:
    """Make a wire value JSON serializable for the REST API."""
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value


def _payload(record: Record) -> Record:
    return {k: _jsonable(v) for k, v in record.items() if k != "id"}


class SupabaseGateway(StoreGateway):
    """Gateway over the hosted Postgres store through the supabase client.

    Writes made through this gateway are announced on its hub right away.
    Writes made by other clients are picked up by ``poll_changes``.
    """

    def __init__(
        self,
        url: str,
        key: str,
        hub: Optional[ChangeHub] = None,
        client: Optional[Client] = None,
    ):
        """Initialize Supabase gateway.

        Args:
            url: Project URL
            key: Anon or service key
            hub: Change hub to publish on
            client: Pre-built client; created from url and key when omitted
        """
        super().__init__(hub)
        self.url = url
        self._key = key
        self._client = client

    def _get_client(self) -> Client:
        if self._client is None:
            self.connect()
        return self._client

    def connect(self) -> None:
        """Create the supabase client if it does not exist yet."""
        if self._client is None:
            try:
                self._client = create_client(self.url, self._key)
            except Exception as e:
                # The client validates URL and key eagerly
                raise GatewayError(f"Could not connect to {self.url}: {e}") from e

    def disconnect(self) -> None:
        """Drop the client; the REST transport holds no open session."""
        self._client = None

    def _execute(self, action: str, collection: str, query: Any) -> list[Record]:
        try:
            response = query.execute()
        except APIError as e:
            logger.warning("gateway_request_failed", action=action, collection=collection, error=e.message)
            raise GatewayError(f"Could not {action} {collection}: {e.message}") from e
        except httpx.HTTPError as e:
            logger.warning("gateway_request_failed", action=action, collection=collection, error=str(e))
            raise GatewayError(f"Could not {action} {collection}: {e}") from e
        return list(response.data or [])

    def list_all(self, collection: str) -> list[Record]:
        """Return every row of a table."""
        self.check_collection(collection)
        query = self._get_client().table(collection).select("*")
        return self._execute("list", collection, query)

    def insert(self, collection: str, record: Record) -> str:
        """Insert a row and return the id the store assigned."""
        self.check_collection(collection)
        query = self._get_client().table(collection).insert(_payload(record))
        rows = self._execute("insert into", collection, query)
        record_id = str(rows[0]["id"]) if rows and "id" in rows[0] else ""
        self.notify(collection, ChangeKind.INSERT, record_id or None)
        return record_id

    def update(self, collection: str, record_id: str, record: Record) -> None:
        """Replace the fields of a row."""
        self.check_collection(collection)
        query = self._get_client().table(collection).update(_payload(record)).eq("id", record_id)
        rows = self._execute("update", collection, query)
        if not rows:
            raise GatewayError(record_not_found(collection, record_id))
        self.notify(collection, ChangeKind.UPDATE, record_id)

    def delete(self, collection: str, record_id: str) -> None:
        """Delete a row."""
        self.check_collection(collection)
        query = self._get_client().table(collection).delete().eq("id", record_id)
        rows = self._execute("delete from", collection, query)
        if not rows:
            raise GatewayError(record_not_found(collection, record_id))
        self.notify(collection, ChangeKind.DELETE, record_id)
