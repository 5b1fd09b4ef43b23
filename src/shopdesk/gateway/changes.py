"""In-process change notification hub.

Gateways publish a ``ChangeEvent`` after every committed write. Subscribers
receive every event for the collection they asked for, regardless of which
client caused it. Gateways that share one hub behave like several clients
connected to the same store.
"""

import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from shopdesk.config.logging import get_logger

logger = get_logger(__name__)


class ChangeKind(str, Enum):
    """What happened to the collection."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    # Drift detected by polling, the affected record is not known
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ChangeEvent:
    """A change notification for one collection."""

    collection: str
    kind: ChangeKind
    record_id: Optional[str] = None


ChangeHandler = Callable[[ChangeEvent], None]


@dataclass(frozen=True)
class SubscriptionHandle:
    """Opaque token returned by ``subscribe``."""

    collection: str
    token: int


class ChangeHub:
    """Fan-out of change events to per-collection handlers."""

    def __init__(self) -> None:
        self._handlers: dict[int, tuple[str, ChangeHandler]] = {}
        self._tokens = itertools.count(1)

    def subscribe(self, collection: str, handler: ChangeHandler) -> SubscriptionHandle:
        """Register a handler for every change to ``collection``."""
        handle = SubscriptionHandle(collection=collection, token=next(self._tokens))
        self._handlers[handle.token] = (collection, handler)
        logger.debug("change_subscribed", collection=collection, token=handle.token)
        return handle

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        """Remove a handler. Unknown or already removed handles are ignored."""
        if self._handlers.pop(handle.token, None) is not None:
            logger.debug("change_unsubscribed", collection=handle.collection, token=handle.token)

    def subscribed_collections(self) -> set[str]:
        """Collections that currently have at least one handler."""
        return {collection for collection, _ in self._handlers.values()}

    def subscriber_count(self, collection: str) -> int:
        """Number of handlers registered for ``collection``."""
        return sum(1 for name, _ in self._handlers.values() if name == collection)

    def publish(self, event: ChangeEvent) -> None:
        """Deliver ``event`` to every handler of its collection.

        A failing handler is logged and does not stop delivery to the others;
        the write that caused the event has already been committed.
        """
        targets = [
            handler
            for collection, handler in list(self._handlers.values())
            if collection == event.collection
        ]
        for handler in targets:
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "change_handler_failed",
                    collection=event.collection,
                    change=event.kind.value,
                )
