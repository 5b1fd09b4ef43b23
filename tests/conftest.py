"""Shared pytest fixtures for shopdesk tests."""

from typing import Any, Optional

import pytest

from shopdesk.config.logging import configure_logging
from shopdesk.domain.errors import GatewayError, record_not_found
from shopdesk.gateway.base import Record, StoreGateway
from shopdesk.gateway.changes import ChangeHub, ChangeKind
from shopdesk.gateway.factories import create_sqlite_gateway
from shopdesk.preferences import PreferenceStore


class FakeGateway(StoreGateway):
    """In-memory gateway that records every call.

    Set ``fail_next`` to a number of upcoming calls that should raise
    ``GatewayError``, or ``fail_always`` to fail every call.
    """

    def __init__(self, hub: Optional[ChangeHub] = None):
        super().__init__(hub)
        self.collections: dict[str, dict[str, Record]] = {}
        self.calls: list[tuple[Any, ...]] = []
        self.fail_next = 0
        self.fail_always = False
        self._next_id = 0

    def _maybe_fail(self, action: str) -> None:
        if self.fail_always or self.fail_next > 0:
            self.fail_next = max(0, self.fail_next - 1)
            raise GatewayError(f"Could not {action}: store unavailable")

    def seed(self, collection: str, *records: Record) -> None:
        """Put records in place without publishing a change."""
        rows = self.collections.setdefault(collection, {})
        for record in records:
            rows[str(record["id"])] = dict(record)

    def connect(self) -> None:
        self.calls.append(("connect",))

    def disconnect(self) -> None:
        self.calls.append(("disconnect",))

    def list_all(self, collection: str) -> list[Record]:
        self.calls.append(("list_all", collection))
        self.check_collection(collection)
        self._maybe_fail("list")
        return [dict(r) for r in self.collections.get(collection, {}).values()]

    def insert(self, collection: str, record: Record) -> str:
        self.calls.append(("insert", collection, record))
        self._maybe_fail("insert")
        self._next_id += 1
        record_id = f"id{self._next_id}"
        self.collections.setdefault(collection, {})[record_id] = {"id": record_id, **record}
        self.notify(collection, ChangeKind.INSERT, record_id)
        return record_id

    def update(self, collection: str, record_id: str, record: Record) -> None:
        self.calls.append(("update", collection, record_id, record))
        self._maybe_fail("update")
        rows = self.collections.get(collection, {})
        if record_id not in rows:
            raise GatewayError(record_not_found(collection, record_id))
        rows[record_id] = {"id": record_id, **record}
        self.notify(collection, ChangeKind.UPDATE, record_id)

    def delete(self, collection: str, record_id: str) -> None:
        self.calls.append(("delete", collection, record_id))
        self._maybe_fail("delete")
        rows = self.collections.get(collection, {})
        if record_id not in rows:
            raise GatewayError(record_not_found(collection, record_id))
        del rows[record_id]
        self.notify(collection, ChangeKind.DELETE, record_id)

    def writes(self) -> list[tuple[Any, ...]]:
        return [c for c in self.calls if c[0] in ("insert", "update", "delete")]


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep log output off the captured CLI output."""
    configure_logging(level="WARNING", json_output=False)


@pytest.fixture
def fake_gateway():
    """In-memory gateway with call recording and failure injection."""
    return FakeGateway()


@pytest.fixture
def temp_gateway(tmp_path):
    """SQLAlchemy gateway over a temporary SQLite file."""
    db_path = tmp_path / "shop.db"
    gateway = create_sqlite_gateway(db_path)
    gateway.connect()

    yield gateway

    gateway.disconnect()


@pytest.fixture
def preferences(tmp_path):
    """Preference store backed by a file in tmp_path."""
    return PreferenceStore(tmp_path / "prefs.json")


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_env(tmp_path):
    """Environment pointing the CLI at a temporary store and preference file."""
    return {
        "SHOPDESK_STORE_URL": f"sqlite:///{tmp_path / 'cli.db'}",
        "SHOPDESK_STORE_KEY": "",
        "SHOPDESK_PREFS_PATH": str(tmp_path / "cli-prefs.json"),
        "SHOPDESK_FETCH_RETRY_DELAY": "0",
    }
