"""Domain model entities for shopdesk.

These are pure data classes representing the shop's records, independent of
how the remote store lays them out. Wire records use camelCase field names;
the mappers in ``shopdesk.gateway.mappers`` translate between the two.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


class TransactionType(str, Enum):
    """Direction of a money movement."""

    EXPENSE = "expense"
    INCOME = "income"


class SubscriptionStatus(str, Enum):
    """Derived state of a subscription relative to today."""

    ACTIVE = "active"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"


@dataclass(frozen=True)
class Subscription:
    """Subscription license domain entity."""

    id: str
    name: str
    activation_date: date
    expiration_date: date
    notes: str = ""
    category: str = "General"


@dataclass(frozen=True)
class Transaction:
    """Expense or income domain entity."""

    id: str
    type: TransactionType
    person: str
    description: str
    amount: Decimal
    date: date


@dataclass(frozen=True)
class Purchase:
    """Purchase embedded in a customer record."""

    id: str
    date: date
    details: str = ""


@dataclass(frozen=True)
class Customer:
    """Customer domain entity with an embedded purchase history."""

    id: str
    name: str
    username: str = ""
    purchases: tuple[Purchase, ...] = field(default_factory=tuple)
    notes: str = ""

    @property
    def last_purchase_date(self) -> date | None:
        """Most recent purchase date, or None without purchases."""
        if not self.purchases:
            return None
        return max(p.date for p in self.purchases)


@dataclass(frozen=True)
class Product:
    """Product domain entity."""

    id: str
    name: str
    cost_price: Decimal
    selling_price: Decimal
    supplier: str = ""
    notes: str = ""

    @property
    def profit(self) -> Decimal:
        """Margin earned per unit sold."""
        return self.selling_price - self.cost_price


@dataclass(frozen=True)
class SaleRecord:
    """Sale domain entity.

    Customer and product names are copied, not referenced.
    """

    id: str
    customer_name: str
    customer_username: str
    date: date
    product_name: str
    price: Decimal
    notes: str = ""


@dataclass(frozen=True)
class SubscriptionStats:
    """Dashboard counters for subscriptions."""

    total: int
    active: int
    expired: int
    expiring_soon: int


@dataclass(frozen=True)
class TransactionTotals:
    """Totals for one transaction type."""

    type: TransactionType
    current_month_total: Decimal
    all_time_total: Decimal


@dataclass(frozen=True)
class ProductStats:
    """Dashboard counters for products."""

    total_products: int
    total_potential_profit: Decimal


@dataclass(frozen=True)
class SalesStats:
    """Dashboard counters for sales."""

    total_sales: int
    total_revenue: Decimal


@dataclass(frozen=True)
class CustomerStats:
    """Dashboard counters for customers."""

    total_customers: int
    total_purchases: int
