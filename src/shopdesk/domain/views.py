"""Derived views over collection snapshots.

Everything here is a pure function of a snapshot, query parameters and the
current date. Nothing is cached: "today" moves, so statuses and monthly
totals are recomputed on every call.
"""

import locale
import unicodedata
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional, Sequence

from shopdesk.domain.entities import (
    Customer,
    CustomerStats,
    Product,
    ProductStats,
    SaleRecord,
    SalesStats,
    Subscription,
    SubscriptionStats,
    SubscriptionStatus,
    Transaction,
    TransactionTotals,
    TransactionType,
)
from shopdesk.domain.kinds import EntityKind

EXPIRING_SOON_DAYS = 7


def days_remaining(expiration_date: date, today: date) -> int:
    """Whole days from today until the expiration date (negative once past)."""
    return (expiration_date - today).days


def subscription_status(subscription: Subscription, today: date) -> SubscriptionStatus:
    """Classify a subscription relative to today."""
    days = days_remaining(subscription.expiration_date, today)
    if days < 0:
        return SubscriptionStatus.EXPIRED
    if days <= EXPIRING_SOON_DAYS:
        return SubscriptionStatus.EXPIRING_SOON
    return SubscriptionStatus.ACTIVE


def matches(kind: EntityKind, record: Any, query: str) -> bool:
    """True if the query is empty or a substring of any searchable field."""
    needle = query.lower()
    if not needle:
        return True
    return any(needle in (getattr(record, name) or "").lower() for name in kind.search_fields)


def filter_records(kind: EntityKind, records: Iterable[Any], query: str = "") -> list[Any]:
    """Keep the records matching ``query``, preserving order."""
    return [r for r in records if matches(kind, r, query)]


def _customer_sort_key(customer: Customer) -> date:
    # Customers without purchases sort last, as if they bought at the epoch
    return customer.last_purchase_date or date.min


def _name_sort_key(name: str) -> tuple[str, str, str]:
    # Accents and case only break ties, so "Éclair" files under E
    folded = name.casefold()
    base = "".join(c for c in unicodedata.normalize("NFKD", folded) if not unicodedata.combining(c))
    return (locale.strxfrm(base), locale.strxfrm(folded), name)


def sort_records(kind: EntityKind, records: Iterable[Any]) -> list[Any]:
    """Sort records with the kind's fixed order. The sort is stable."""
    items = list(records)
    if kind.collection == "subscriptions":
        return sorted(items, key=lambda s: s.expiration_date)
    if kind.collection == "customers":
        return sorted(items, key=_customer_sort_key, reverse=True)
    if kind.collection == "products":
        return sorted(items, key=lambda p: _name_sort_key(p.name))
    if kind.collection in ("sales", "transactions"):
        return sorted(items, key=lambda r: r.date, reverse=True)
    return items


def derive_view(
    kind: EntityKind,
    records: Iterable[Any],
    query: str = "",
    transaction_type: Optional[TransactionType] = None,
) -> list[Any]:
    """Filtered and sorted list, as shown on a screen.

    Args:
        kind: Entity kind of the records
        records: Snapshot to project
        query: Search text; empty keeps everything
        transaction_type: For transactions, the tab being shown
    """
    items = list(records)
    if transaction_type is not None:
        items = [r for r in items if r.type == transaction_type]
    return sort_records(kind, filter_records(kind, items, query))


def subscription_stats(subscriptions: Sequence[Subscription], today: date) -> SubscriptionStats:
    """Dashboard counters.

    Expiring-soon subscriptions are still active and are counted in both.
    """
    active = expired = expiring_soon = 0
    for sub in subscriptions:
        status = subscription_status(sub, today)
        if status is SubscriptionStatus.EXPIRED:
            expired += 1
        elif status is SubscriptionStatus.EXPIRING_SOON:
            expiring_soon += 1
            active += 1
        else:
            active += 1
    return SubscriptionStats(
        total=len(subscriptions),
        active=active,
        expired=expired,
        expiring_soon=expiring_soon,
    )


def transaction_totals(
    transactions: Sequence[Transaction], transaction_type: TransactionType, today: date
) -> TransactionTotals:
    """Sum one transaction type for the current calendar month and all time."""
    of_type = [t for t in transactions if t.type == transaction_type]
    month_total = sum(
        (t.amount for t in of_type if t.date.year == today.year and t.date.month == today.month),
        Decimal("0"),
    )
    all_time_total = sum((t.amount for t in of_type), Decimal("0"))
    return TransactionTotals(
        type=transaction_type,
        current_month_total=month_total,
        all_time_total=all_time_total,
    )


def product_stats(products: Sequence[Product]) -> ProductStats:
    """Product count and summed per-unit profit."""
    return ProductStats(
        total_products=len(products),
        total_potential_profit=sum((p.profit for p in products), Decimal("0")),
    )


def sales_stats(sales: Sequence[SaleRecord]) -> SalesStats:
    """Sale count and revenue."""
    return SalesStats(
        total_sales=len(sales),
        total_revenue=sum((s.price for s in sales), Decimal("0")),
    )


def customer_stats(customers: Sequence[Customer]) -> CustomerStats:
    """Customer count and number of embedded purchases."""
    return CustomerStats(
        total_customers=len(customers),
        total_purchases=sum(len(c.purchases) for c in customers),
    )
