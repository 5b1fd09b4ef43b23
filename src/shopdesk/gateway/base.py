"""Abstract store gateway interface."""

import hashlib
import json
from abc import ABC, abstractmethod
from typing import Any, Optional

from shopdesk.config.logging import get_logger
from shopdesk.domain.errors import GatewayError, unknown_collection
from shopdesk.gateway.changes import (
    ChangeEvent,
    ChangeHandler,
    ChangeHub,
    ChangeKind,
    SubscriptionHandle,
)

logger = get_logger(__name__)

Record = dict[str, Any]

COLLECTIONS = ("subscriptions", "transactions", "customers", "products", "sales")


def fingerprint(records: list[Record]) -> str:
    """Content hash of a collection snapshot, independent of row order."""
    ordered = sorted(records, key=lambda r: str(r.get("id")))
    payload = json.dumps(ordered, sort_keys=True, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class StoreGateway(ABC):
    """CRUD and change notifications for the shop's named collections.

    Every failure is raised as ``GatewayError`` with a readable message.
    ``list_all`` makes no ordering promise. A successful write does not mean
    any cached snapshot already reflects it; that happens on the next
    change notification.
    """

    def __init__(self, hub: Optional[ChangeHub] = None):
        """Initialize gateway.

        Args:
            hub: Change hub to publish on. Pass the same hub to several
                gateways to let them see each other's writes.
        """
        self.hub = hub if hub is not None else ChangeHub()
        self._fingerprints: dict[str, str] = {}

    @abstractmethod
    def connect(self) -> None:
        """Open the connection to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close the connection to the store."""
        pass

    @abstractmethod
    def list_all(self, collection: str) -> list[Record]:
        """Return every record of ``collection``."""
        pass

    @abstractmethod
    def insert(self, collection: str, record: Record) -> str:
        """Insert a record (without id). Returns the new record's id."""
        pass

    @abstractmethod
    def update(self, collection: str, record_id: str, record: Record) -> None:
        """Replace every field of record ``record_id``."""
        pass

    @abstractmethod
    def delete(self, collection: str, record_id: str) -> None:
        """Delete record ``record_id``."""
        pass

    def subscribe(self, collection: str, handler: ChangeHandler) -> SubscriptionHandle:
        """Call ``handler`` on any change to ``collection``."""
        self.check_collection(collection)
        return self.hub.subscribe(collection, handler)

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        """Stop delivering notifications for ``handle``."""
        self.hub.unsubscribe(handle)

    def check_collection(self, collection: str) -> None:
        """Raise GatewayError for names outside the shop's collections."""
        if collection not in COLLECTIONS:
            raise GatewayError(unknown_collection(collection))

    def notify(self, collection: str, kind: ChangeKind, record_id: Optional[str] = None) -> None:
        """Publish a change made through this gateway."""
        # Our own write: the next poll re-baselines instead of re-announcing it
        self._fingerprints.pop(collection, None)
        self.hub.publish(ChangeEvent(collection=collection, kind=kind, record_id=record_id))

    def poll_changes(self) -> list[str]:
        """Detect changes made outside this process.

        Re-lists every subscribed collection and publishes an ``UNKNOWN``
        change when its content differs from the last poll. The first poll
        of a collection only records a baseline.

        Returns:
            Names of collections for which a change was published
        """
        changed = []
        for collection in sorted(self.hub.subscribed_collections()):
            current = fingerprint(self.list_all(collection))
            previous = self._fingerprints.get(collection)
            self._fingerprints[collection] = current
            if previous is not None and previous != current:
                logger.info("remote_change_detected", collection=collection)
                self.hub.publish(ChangeEvent(collection=collection, kind=ChangeKind.UNKNOWN))
                changed.append(collection)
        return changed
