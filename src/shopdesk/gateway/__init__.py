"""Store gateway layer for shopdesk."""

from shopdesk.gateway.base import COLLECTIONS, StoreGateway
from shopdesk.gateway.changes import ChangeEvent, ChangeHub, ChangeKind, SubscriptionHandle
from shopdesk.gateway.factories import create_gateway, create_sqlite_gateway

__all__ = [
    "COLLECTIONS",
    "StoreGateway",
    "ChangeEvent",
    "ChangeHub",
    "ChangeKind",
    "SubscriptionHandle",
    "create_gateway",
    "create_sqlite_gateway",
]
