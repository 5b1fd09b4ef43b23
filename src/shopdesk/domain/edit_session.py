"""Create/edit sessions for a single record."""

import dataclasses
import uuid
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Optional

from shopdesk.config.logging import get_logger
from shopdesk.domain.entities import Purchase, TransactionType
from shopdesk.domain.errors import (
    DomainError,
    GatewayError,
    NotFoundError,
    ValidationError,
    purchase_not_found,
)
from shopdesk.domain.kinds import EntityKind
from shopdesk.gateway.base import StoreGateway

logger = get_logger(__name__)

DATE_FIELDS = ("activation_date", "expiration_date", "date")


class SessionState(str, Enum):
    """Whether the form is closed, creating a record or editing one."""

    CLOSED = "closed"
    CREATING = "creating"
    EDITING = "editing"


def generate_purchase_id() -> str:
    """Short random id for an embedded purchase."""
    return uuid.uuid4().hex[:8]


class EditSession:
    """Transient draft of one record, committed through the gateway.

    The draft belongs to the session alone. It is never shared with a live
    collection's snapshot; the snapshot only learns about the change through
    the notification that follows a successful write.
    """

    def __init__(
        self,
        gateway: StoreGateway,
        kind: EntityKind,
        today: Callable[[], date] = date.today,
    ):
        """Initialize edit session.

        Args:
            gateway: Store gateway to write through
            kind: Entity kind being edited
            today: Clock used for date defaults
        """
        self.gateway = gateway
        self.kind = kind
        self.today = today
        self.state = SessionState.CLOSED
        self.draft: dict[str, Any] = {}
        self.editing_id: Optional[str] = None
        self.error: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.state is not SessionState.CLOSED

    def open_create(self, **overrides: Any) -> None:
        """Start a new record from the kind's defaults.

        Args:
            **overrides: Draft fields to preset, e.g. the transaction type
                of the tab the form was opened from
        """
        self.draft = self.kind.defaults(self.today())
        for name, value in overrides.items():
            self.set_field(name, value)
        self.editing_id = None
        self.error = None
        self.state = SessionState.CREATING

    def open_edit(self, record: Any) -> None:
        """Start editing a copy of an existing record."""
        draft = {name: getattr(record, name) for name in self.kind.draft_fields}
        if "purchases" in draft:
            # Fresh list of immutable purchases: edits never reach the snapshot
            draft["purchases"] = list(draft["purchases"])
        self.draft = draft
        self.editing_id = record.id
        self.error = None
        self.state = SessionState.EDITING

    def cancel(self) -> None:
        """Close without writing."""
        self._close()

    def set_field(self, name: str, value: Any) -> None:
        """Change one draft field.

        Raises:
            DomainError: If the kind has no such field
        """
        if name not in self.kind.draft_fields:
            raise DomainError(f"{self.kind.name} has no field '{name}'")
        if name == "purchases":
            value = list(value)
        self.draft[name] = value

    def update(self, **fields: Any) -> None:
        """Change several draft fields at once."""
        for name, value in fields.items():
            self.set_field(name, value)

    # Embedded purchases (customers only)

    def _purchases(self) -> list[Purchase]:
        if "purchases" not in self.draft:
            raise DomainError(f"{self.kind.name} has no purchases")
        return self.draft["purchases"]

    def add_purchase(self, details: str = "", purchase_date: Optional[date] = None) -> Purchase:
        """Append a purchase dated today with a fresh id."""
        purchase = Purchase(
            id=generate_purchase_id(),
            date=purchase_date or self.today(),
            details=details,
        )
        self._purchases().append(purchase)
        return purchase

    def update_purchase(self, purchase_id: str, field: str, value: Any) -> Purchase:
        """Replace one field of a drafted purchase.

        Raises:
            NotFoundError: If no purchase has that id
            DomainError: If the field is not date or details
        """
        if field not in ("date", "details"):
            raise DomainError(f"Purchase has no editable field '{field}'")
        purchases = self._purchases()
        for index, purchase in enumerate(purchases):
            if purchase.id == purchase_id:
                purchases[index] = dataclasses.replace(purchase, **{field: value})
                return purchases[index]
        raise NotFoundError(purchase_not_found(purchase_id))

    def remove_purchase(self, purchase_id: str) -> None:
        """Drop a drafted purchase.

        Raises:
            NotFoundError: If no purchase has that id
        """
        purchases = self._purchases()
        remaining = [p for p in purchases if p.id != purchase_id]
        if len(remaining) == len(purchases):
            raise NotFoundError(purchase_not_found(purchase_id))
        self.draft["purchases"] = remaining

    def validate(self) -> dict[str, str]:
        """Field-level problems with the draft; empty when it can be submitted."""
        errors: dict[str, str] = {}
        for name in self.kind.required_fields:
            value = self.draft.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                errors[name] = "is required"

        for name in self.kind.numeric_fields:
            value = self.draft.get(name)
            if name in errors or value is None:
                continue
            if not isinstance(value, (int, float, Decimal)) or isinstance(value, bool):
                errors[name] = "must be a number"
            elif value < 0:
                errors[name] = "must not be negative"

        for name in DATE_FIELDS:
            value = self.draft.get(name)
            if name in self.draft and name not in errors and value is not None and not isinstance(value, date):
                errors[name] = "must be a date"

        if "type" in self.kind.draft_fields and "type" not in errors:
            try:
                TransactionType(self.draft["type"])
            except ValueError:
                errors["type"] = "must be 'expense' or 'income'"

        for index, purchase in enumerate(self.draft.get("purchases") or []):
            if not purchase.details.strip():
                errors[f"purchases[{index}].details"] = "is required"
            if purchase.date is None:
                errors[f"purchases[{index}].date"] = "is required"

        return errors

    def build_record(self) -> dict[str, Any]:
        """Wire record for the current draft (without id)."""
        fields = dict(self.draft)
        if "purchases" in fields:
            fields["purchases"] = tuple(fields["purchases"])
        if "type" in fields:
            fields["type"] = TransactionType(fields["type"])
        for name in self.kind.numeric_fields:
            fields[name] = Decimal(str(fields[name]))
        entity = self.kind.entity_type(id=self.editing_id or "", **fields)
        return self.kind.to_record(entity)

    def submit(self) -> bool:
        """Write the draft through the gateway.

        Returns:
            True if the write succeeded and the session closed, False if the
            store rejected it; the message is then in ``error`` and the
            session stays open for another try.

        Raises:
            ValidationError: If the draft fails validation (session stays open)
            DomainError: If the session is not open
        """
        if not self.is_open:
            raise DomainError("No record is being edited")

        errors = self.validate()
        if errors:
            raise ValidationError(errors)

        record = self.build_record()
        collection = self.kind.collection
        try:
            if self.state is SessionState.EDITING:
                self.gateway.update(collection, self.editing_id, record)
            else:
                self.gateway.insert(collection, record)
        except GatewayError as e:
            logger.warning(
                "gateway_write_failed",
                collection=collection,
                action=self.state.value,
                record_id=self.editing_id,
                error=str(e),
            )
            self.error = str(e)
            return False

        logger.info("record_saved", collection=collection, action=self.state.value, record_id=self.editing_id)
        self._close()
        return True

    def _close(self) -> None:
        self.state = SessionState.CLOSED
        self.draft = {}
        self.editing_id = None
        self.error = None
