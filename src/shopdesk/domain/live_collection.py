"""Client-side snapshot of one collection, kept in step with the store.

The strategy is deliberately coarse: any change notification, whatever
record it concerns and whoever caused it, triggers a full re-list that
replaces the snapshot wholesale. There is no merging and no diffing.
"""

from enum import Enum
from typing import Any, Callable, Optional

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from shopdesk.config.logging import get_logger
from shopdesk.config.settings import FetchSettings
from shopdesk.domain.errors import GatewayError
from shopdesk.domain.kinds import EntityKind
from shopdesk.gateway.base import StoreGateway
from shopdesk.gateway.changes import ChangeEvent, SubscriptionHandle

logger = get_logger(__name__)

SnapshotListener = Callable[[tuple[Any, ...]], None]


class CollectionState(str, Enum):
    """Lifecycle of a live collection."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    REFRESHING = "refreshing"


class LiveCollection:
    """Authoritative in-memory snapshot of one collection.

    ``IDLE -> LOADING -> READY``, then ``READY <-> REFRESHING`` on every
    change notification. A failed fetch is retried with bounded backoff; if
    it still fails the previous snapshot stays in place, ``last_error`` is
    set and ``is_stale`` turns true. The state does not leave LOADING until
    a fetch succeeds.
    """

    def __init__(
        self,
        gateway: StoreGateway,
        kind: EntityKind,
        fetch_settings: Optional[FetchSettings] = None,
    ):
        """Initialize live collection.

        Args:
            gateway: Store gateway, shared with the rest of the process
            kind: Entity kind held by this collection
            fetch_settings: Retry policy for fetches
        """
        self.gateway = gateway
        self.kind = kind
        self.fetch_settings = fetch_settings or FetchSettings()
        self.state = CollectionState.IDLE
        self.last_error: Optional[str] = None
        self._snapshot: tuple[Any, ...] = ()
        self._handle: Optional[SubscriptionHandle] = None
        # Bumped on every activation and deactivation; fetches started under
        # an older generation are discarded when they complete
        self._generation = 0
        self._listeners: list[SnapshotListener] = []

    @property
    def snapshot(self) -> tuple[Any, ...]:
        """Current snapshot. Replaced, never mutated."""
        return self._snapshot

    @property
    def is_active(self) -> bool:
        return self.state is not CollectionState.IDLE

    @property
    def is_stale(self) -> bool:
        """True when the last fetch failed and the snapshot may be out of date."""
        return self.last_error is not None

    def add_listener(self, listener: SnapshotListener) -> None:
        """Call ``listener`` with the new snapshot after every replacement."""
        self._listeners.append(listener)

    def remove_listener(self, listener: SnapshotListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def find(self, record_id: str) -> Optional[Any]:
        """Record with the given id in the current snapshot, if any."""
        for record in self._snapshot:
            if record.id == record_id:
                return record
        return None

    def activate(self) -> None:
        """Load the first snapshot, then subscribe to changes."""
        if self.is_active:
            return
        self._generation += 1
        generation = self._generation
        self.state = CollectionState.LOADING
        logger.info("collection_activating", collection=self.kind.collection)
        self._load(generation)

        if generation != self._generation:
            # Deactivated by a listener while loading
            return
        try:
            self._handle = self.gateway.subscribe(self.kind.collection, self._on_change)
        except GatewayError as e:
            logger.warning("collection_subscribe_failed", collection=self.kind.collection, error=str(e))
            self.last_error = str(e)

    def deactivate(self) -> None:
        """Unsubscribe and discard the snapshot."""
        if not self.is_active:
            return
        if self._handle is not None:
            self.gateway.unsubscribe(self._handle)
            self._handle = None
        self._generation += 1
        self._snapshot = ()
        self.last_error = None
        self.state = CollectionState.IDLE
        logger.info("collection_deactivated", collection=self.kind.collection)

    def refresh(self) -> None:
        """Re-list the collection and replace the snapshot."""
        if not self.is_active:
            return
        if self.state is CollectionState.READY:
            self.state = CollectionState.REFRESHING
        self._load(self._generation)

    def _on_change(self, event: ChangeEvent) -> None:
        logger.debug(
            "collection_change_received",
            collection=self.kind.collection,
            change=event.kind.value,
            record_id=event.record_id,
        )
        self.refresh()

    def _fetch(self) -> list[dict[str, Any]]:
        delay = self.fetch_settings.retry_delay
        retrying = Retrying(
            stop=stop_after_attempt(self.fetch_settings.attempts),
            wait=wait_exponential(multiplier=delay, min=delay, max=delay * 8),
            retry=retry_if_exception_type(GatewayError),
            before_sleep=self._log_retry,
            reraise=True,
        )
        return retrying(self.gateway.list_all, self.kind.collection)

    def _log_retry(self, retry_state: RetryCallState) -> None:
        logger.warning(
            "fetch_retry",
            collection=self.kind.collection,
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    def _load(self, generation: int) -> None:
        try:
            records = self._fetch()
            snapshot = tuple(self.kind.from_record(r) for r in records)
        except (KeyError, ValueError) as e:
            # GatewayError is a ValueError; malformed rows raise KeyError/ValueError
            if generation != self._generation:
                return
            logger.warning("collection_refresh_failed", collection=self.kind.collection, error=str(e))
            self.last_error = str(e) or e.__class__.__name__
            if self.state is CollectionState.REFRESHING:
                self.state = CollectionState.READY
            return

        if generation != self._generation:
            logger.debug("stale_fetch_discarded", collection=self.kind.collection)
            return

        self._snapshot = snapshot
        self.last_error = None
        self.state = CollectionState.READY
        for listener in list(self._listeners):
            listener(self._snapshot)

    def __enter__(self) -> "LiveCollection":
        self.activate()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.deactivate()
