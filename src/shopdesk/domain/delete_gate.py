"""Soft-confirmation delete flow, shared by every entity kind."""

from enum import Enum
from typing import Optional

from shopdesk.config.logging import get_logger
from shopdesk.domain.errors import DomainError
from shopdesk.domain.kinds import EntityKind
from shopdesk.gateway.base import StoreGateway
from shopdesk.preferences import PreferenceStore

logger = get_logger(__name__)


class DeleteOutcome(str, Enum):
    """What a delete request did."""

    DELETED = "deleted"
    STAGED = "staged"


class DeleteGate:
    """Stages deletions until confirmed, unless the user opted out.

    Gateway failures are raised as ``GatewayError`` to the caller that
    initiated the delete; the staged id is cleared either way.
    """

    def __init__(self, gateway: StoreGateway, kind: EntityKind, preferences: PreferenceStore):
        """Initialize delete gate.

        Args:
            gateway: Store gateway to delete through
            kind: Entity kind whose records are deleted
            preferences: Device preferences holding the skip flag
        """
        self.gateway = gateway
        self.kind = kind
        self.preferences = preferences
        self.staged_id: Optional[str] = None

    def request(self, record_id: str) -> DeleteOutcome:
        """Delete now if warnings are off, otherwise stage for confirmation."""
        if self.preferences.skip_delete_warning:
            self._delete(record_id)
            return DeleteOutcome.DELETED
        self.staged_id = record_id
        logger.debug("delete_staged", collection=self.kind.collection, record_id=record_id)
        return DeleteOutcome.STAGED

    def confirm(self, dont_ask_again: bool = False) -> str:
        """Delete the staged record.

        Args:
            dont_ask_again: Persist the preference to skip confirmation from now on

        Returns:
            Id of the deleted record

        Raises:
            DomainError: If nothing is staged
            GatewayError: If the store rejects the delete
        """
        if self.staged_id is None:
            raise DomainError("No deletion is waiting for confirmation")
        if dont_ask_again:
            self.preferences.skip_delete_warning = True
        record_id = self.staged_id
        try:
            self._delete(record_id)
        finally:
            self.staged_id = None
        return record_id

    def cancel(self) -> None:
        """Forget the staged record without deleting it."""
        self.staged_id = None

    def _delete(self, record_id: str) -> None:
        self.gateway.delete(self.kind.collection, record_id)
        logger.info("record_deleted", collection=self.kind.collection, record_id=record_id)
