"""Entity kinds: one descriptor per record type.

Every screen of the shop works the same way; a kind carries what differs
between them (collection name, mappers, searchable fields, required fields
and draft defaults).
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Callable

from shopdesk.domain import entities
from shopdesk.domain.errors import DomainError, unknown_collection
from shopdesk.gateway import mappers

Record = dict[str, Any]


@dataclass(frozen=True)
class EntityKind:
    """Descriptor binding an entity type to its collection."""

    name: str
    collection: str
    entity_type: type
    from_record: Callable[[Record], Any]
    to_record: Callable[[Any], Record]
    search_fields: tuple[str, ...]
    required_fields: tuple[str, ...]
    numeric_fields: tuple[str, ...]
    defaults: Callable[[date], dict[str, Any]]

    @property
    def draft_fields(self) -> tuple[str, ...]:
        """Entity fields a draft may hold (everything but id)."""
        return tuple(f for f in self.entity_type.__dataclass_fields__ if f != "id")


SUBSCRIPTIONS = EntityKind(
    name="subscription",
    collection="subscriptions",
    entity_type=entities.Subscription,
    from_record=mappers.subscription_from_record,
    to_record=mappers.subscription_to_record,
    search_fields=("name", "notes"),
    required_fields=("name", "activation_date", "expiration_date"),
    numeric_fields=(),
    defaults=lambda today: {
        "name": "",
        "activation_date": today,
        "expiration_date": None,
        "notes": "",
        "category": "General",
    },
)

TRANSACTIONS = EntityKind(
    name="transaction",
    collection="transactions",
    entity_type=entities.Transaction,
    from_record=mappers.transaction_from_record,
    to_record=mappers.transaction_to_record,
    search_fields=("person", "description"),
    required_fields=("type", "person", "description", "amount", "date"),
    numeric_fields=("amount",),
    defaults=lambda today: {
        "type": entities.TransactionType.EXPENSE,
        "person": "",
        "description": "",
        "amount": Decimal("0"),
        "date": today,
    },
)

CUSTOMERS = EntityKind(
    name="customer",
    collection="customers",
    entity_type=entities.Customer,
    from_record=mappers.customer_from_record,
    to_record=mappers.customer_to_record,
    search_fields=("name", "username", "notes"),
    required_fields=("name",),
    numeric_fields=(),
    defaults=lambda today: {
        "name": "",
        "username": "",
        "purchases": [],
        "notes": "",
    },
)

PRODUCTS = EntityKind(
    name="product",
    collection="products",
    entity_type=entities.Product,
    from_record=mappers.product_from_record,
    to_record=mappers.product_to_record,
    search_fields=("name", "supplier"),
    required_fields=("name", "supplier", "cost_price", "selling_price"),
    numeric_fields=("cost_price", "selling_price"),
    defaults=lambda today: {
        "name": "",
        "cost_price": Decimal("0"),
        "selling_price": Decimal("0"),
        "supplier": "",
        "notes": "",
    },
)

SALES = EntityKind(
    name="sale",
    collection="sales",
    entity_type=entities.SaleRecord,
    from_record=mappers.sale_from_record,
    to_record=mappers.sale_to_record,
    search_fields=("customer_name", "customer_username", "product_name", "notes"),
    required_fields=("customer_name", "product_name", "price", "date"),
    numeric_fields=("price",),
    defaults=lambda today: {
        "customer_name": "",
        "customer_username": "",
        "date": today,
        "product_name": "",
        "price": Decimal("0"),
        "notes": "",
    },
)

KINDS: dict[str, EntityKind] = {
    kind.collection: kind for kind in (SUBSCRIPTIONS, TRANSACTIONS, CUSTOMERS, PRODUCTS, SALES)
}


def get_kind(name: str) -> EntityKind:
    """Look up a kind by collection name ("sales") or entity name ("sale").

    Raises:
        DomainError: If no kind matches
    """
    if name in KINDS:
        return KINDS[name]
    for kind in KINDS.values():
        if kind.name == name:
            return kind
    raise DomainError(unknown_collection(name))
