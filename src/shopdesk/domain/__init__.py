"""Domain layer for shopdesk application."""

from shopdesk.domain.entities import (
    Customer,
    Product,
    Purchase,
    SaleRecord,
    Subscription,
    SubscriptionStatus,
    Transaction,
    TransactionType,
)
from shopdesk.domain.errors import (
    ConfigurationError,
    DomainError,
    GatewayError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "Customer",
    "Product",
    "Purchase",
    "SaleRecord",
    "Subscription",
    "SubscriptionStatus",
    "Transaction",
    "TransactionType",
    "ConfigurationError",
    "DomainError",
    "GatewayError",
    "NotFoundError",
    "ValidationError",
]
