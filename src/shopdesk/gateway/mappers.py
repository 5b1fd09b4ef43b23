"""Mapper functions between wire records, domain entities and ORM rows.

Wire records are plain dicts keyed by the store's camelCase column names.
They are what every gateway speaks. Domain entities are the frozen
dataclasses in ``shopdesk.domain.entities``. This layer keeps the two apart
so the store's layout can change without touching the domain.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from shopdesk.domain import entities as domain
from shopdesk.gateway.models import (
    Subscription as ORMSubscription,
    Transaction as ORMTransaction,
    Customer as ORMCustomer,
    Product as ORMProduct,
    Sale as ORMSale,
)

Record = dict[str, Any]


def _to_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    # Timestamps coming back from Postgres carry a time part
    return date.fromisoformat(str(value)[:10])


def _to_decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {value!r}") from e


def _text(record: Record, key: str) -> str:
    value = record.get(key)
    return "" if value is None else str(value)


# Wire record -> domain entity


def subscription_from_record(record: Record) -> domain.Subscription:
    """Convert a wire record to a Subscription entity."""
    return domain.Subscription(
        id=str(record["id"]),
        name=_text(record, "name"),
        activation_date=_to_date(record["activationDate"]),
        expiration_date=_to_date(record["expirationDate"]),
        notes=_text(record, "notes"),
        category=_text(record, "category"),
    )


def transaction_from_record(record: Record) -> domain.Transaction:
    """Convert a wire record to a Transaction entity."""
    return domain.Transaction(
        id=str(record["id"]),
        type=domain.TransactionType(record["type"]),
        person=_text(record, "person"),
        description=_text(record, "description"),
        amount=_to_decimal(record.get("amount")),
        date=_to_date(record["date"]),
    )


def purchase_from_record(record: Record) -> domain.Purchase:
    """Convert an embedded purchase dict to a Purchase entity."""
    if not isinstance(record, dict):
        raise ValueError(f"Purchase must be an object, got {type(record).__name__}")
    return domain.Purchase(
        id=str(record["id"]),
        date=_to_date(record["date"]),
        details=_text(record, "details"),
    )


def customer_from_record(record: Record) -> domain.Customer:
    """Convert a wire record to a Customer entity."""
    purchases = record.get("purchases") or []
    if not isinstance(purchases, list):
        raise ValueError(f"Purchases must be a list, got {type(purchases).__name__}")
    return domain.Customer(
        id=str(record["id"]),
        name=_text(record, "name"),
        username=_text(record, "username"),
        purchases=tuple(purchase_from_record(p) for p in purchases),
        notes=_text(record, "notes"),
    )


def product_from_record(record: Record) -> domain.Product:
    """Convert a wire record to a Product entity."""
    return domain.Product(
        id=str(record["id"]),
        name=_text(record, "name"),
        cost_price=_to_decimal(record.get("costPrice")),
        selling_price=_to_decimal(record.get("sellingPrice")),
        supplier=_text(record, "supplier"),
        notes=_text(record, "notes"),
    )


def sale_from_record(record: Record) -> domain.SaleRecord:
    """Convert a wire record to a SaleRecord entity."""
    return domain.SaleRecord(
        id=str(record["id"]),
        customer_name=_text(record, "customerName"),
        customer_username=_text(record, "customerUsername"),
        date=_to_date(record["date"]),
        product_name=_text(record, "productName"),
        price=_to_decimal(record.get("price")),
        notes=_text(record, "notes"),
    )


# Domain entity -> wire record (without id; ids are owned by the store)


def subscription_to_record(entity: domain.Subscription) -> Record:
    """Convert a Subscription entity to a wire record."""
    return {
        "name": entity.name,
        "activationDate": entity.activation_date.isoformat(),
        "expirationDate": entity.expiration_date.isoformat(),
        "notes": entity.notes,
        "category": entity.category,
    }


def transaction_to_record(entity: domain.Transaction) -> Record:
    """Convert a Transaction entity to a wire record."""
    return {
        "type": domain.TransactionType(entity.type).value,
        "person": entity.person,
        "description": entity.description,
        "amount": entity.amount,
        "date": entity.date.isoformat(),
    }


def purchase_to_record(entity: domain.Purchase) -> Record:
    """Convert a Purchase entity to its embedded dict."""
    return {
        "id": entity.id,
        "date": entity.date.isoformat(),
        "details": entity.details,
    }


def customer_to_record(entity: domain.Customer) -> Record:
    """Convert a Customer entity to a wire record."""
    return {
        "name": entity.name,
        "username": entity.username,
        "purchases": [purchase_to_record(p) for p in entity.purchases],
        "notes": entity.notes,
    }


def product_to_record(entity: domain.Product) -> Record:
    """Convert a Product entity to a wire record."""
    return {
        "name": entity.name,
        "costPrice": entity.cost_price,
        "sellingPrice": entity.selling_price,
        "supplier": entity.supplier,
        "notes": entity.notes,
    }


def sale_to_record(entity: domain.SaleRecord) -> Record:
    """Convert a SaleRecord entity to a wire record."""
    return {
        "customerName": entity.customer_name,
        "customerUsername": entity.customer_username,
        "date": entity.date.isoformat(),
        "productName": entity.product_name,
        "price": entity.price,
        "notes": entity.notes,
    }


# ORM row -> wire record


def subscription_row_to_record(row: ORMSubscription) -> Record:
    """Convert a SQLAlchemy Subscription row to a wire record."""
    return {
        "id": row.id,
        "name": row.name,
        "activationDate": row.activation_date.isoformat(),
        "expirationDate": row.expiration_date.isoformat(),
        "notes": row.notes,
        "category": row.category,
    }


def transaction_row_to_record(row: ORMTransaction) -> Record:
    """Convert a SQLAlchemy Transaction row to a wire record."""
    return {
        "id": row.id,
        "type": row.type,
        "person": row.person,
        "description": row.description,
        "amount": row.amount,
        "date": row.date.isoformat(),
    }


def customer_row_to_record(row: ORMCustomer) -> Record:
    """Convert a SQLAlchemy Customer row to a wire record."""
    return {
        "id": row.id,
        "name": row.name,
        "username": row.username,
        "purchases": [dict(p) for p in (row.purchases or [])],
        "notes": row.notes,
    }


def product_row_to_record(row: ORMProduct) -> Record:
    """Convert a SQLAlchemy Product row to a wire record."""
    return {
        "id": row.id,
        "name": row.name,
        "costPrice": row.cost_price,
        "sellingPrice": row.selling_price,
        "supplier": row.supplier,
        "notes": row.notes,
    }


def sale_row_to_record(row: ORMSale) -> Record:
    """Convert a SQLAlchemy Sale row to a wire record."""
    return {
        "id": row.id,
        "customerName": row.customer_name,
        "customerUsername": row.customer_username,
        "date": row.date.isoformat(),
        "productName": row.product_name,
        "price": row.price,
        "notes": row.notes,
    }
