"""Text rendering of derived views for the terminal."""

from datetime import date
from decimal import Decimal
from typing import Any, Optional, Sequence

import click

from shopdesk.domain import views
from shopdesk.domain.entities import SubscriptionStatus, TransactionType
from shopdesk.domain.kinds import EntityKind

STATUS_LABELS = {
    SubscriptionStatus.ACTIVE: "Active",
    SubscriptionStatus.EXPIRING_SOON: "Expiring soon",
    SubscriptionStatus.EXPIRED: "Expired",
}


def format_amount(amount: Decimal) -> str:
    return f"{amount:,.2f}"


def format_row(kind: EntityKind, record: Any, today: date) -> str:
    """One line per record."""
    if kind.collection == "subscriptions":
        status = views.subscription_status(record, today)
        days = views.days_remaining(record.expiration_date, today)
        return (
            f"ID: {record.id} | {record.name:20s} | {record.category:10s} | "
            f"{record.activation_date} -> {record.expiration_date} | "
            f"{STATUS_LABELS[status]} ({days}d)"
        )
    if kind.collection == "transactions":
        return (
            f"ID: {record.id} | {record.date} | {record.person:15s} | "
            f"{record.description:25s} | {format_amount(record.amount):>12s}"
        )
    if kind.collection == "customers":
        last = record.last_purchase_date or "-"
        username = f"@{record.username}" if record.username else "-"
        return (
            f"ID: {record.id} | {record.name:20s} | {username:15s} | "
            f"Purchases: {len(record.purchases):3d} | Last: {last}"
        )
    if kind.collection == "products":
        sign = "+" if record.profit >= 0 else ""
        return (
            f"ID: {record.id} | {record.name:20s} | {record.supplier or '-':15s} | "
            f"Cost: {format_amount(record.cost_price):>10s} | "
            f"Price: {format_amount(record.selling_price):>10s} | "
            f"Profit: {sign}{format_amount(record.profit)}"
        )
    username = f" (@{record.customer_username})" if record.customer_username else ""
    return (
        f"ID: {record.id} | {record.date} | {record.customer_name}{username} | "
        f"{record.product_name:20s} | {format_amount(record.price):>10s}"
    )


def format_stats(
    kind: EntityKind,
    snapshot: Sequence[Any],
    today: date,
    transaction_type: Optional[TransactionType] = None,
) -> list[str]:
    """Aggregate lines for the dashboard header."""
    if kind.collection == "subscriptions":
        stats = views.subscription_stats(snapshot, today)
        return [
            f"Total: {stats.total} | Active: {stats.active} | "
            f"Expiring soon: {stats.expiring_soon} | Expired: {stats.expired}"
        ]
    if kind.collection == "transactions":
        totals = views.transaction_totals(snapshot, transaction_type or TransactionType.EXPENSE, today)
        label = "Expenses" if totals.type is TransactionType.EXPENSE else "Income"
        return [
            f"{label} this month: {format_amount(totals.current_month_total)} | "
            f"All time: {format_amount(totals.all_time_total)}"
        ]
    if kind.collection == "customers":
        stats = views.customer_stats(snapshot)
        return [f"Customers: {stats.total_customers} | Purchases: {stats.total_purchases}"]
    if kind.collection == "products":
        stats = views.product_stats(snapshot)
        return [
            f"Products: {stats.total_products} | "
            f"Potential profit: {format_amount(stats.total_potential_profit)}"
        ]
    stats = views.sales_stats(snapshot)
    return [f"Sales: {stats.total_sales} | Revenue: {format_amount(stats.total_revenue)}"]


def render_view(
    kind: EntityKind,
    snapshot: Sequence[Any],
    today: date,
    query: str = "",
    transaction_type: Optional[TransactionType] = None,
) -> None:
    """Echo statistics followed by the filtered, sorted list."""
    for line in format_stats(kind, snapshot, today, transaction_type):
        click.echo(line)
    click.echo("-" * 60)

    rows = views.derive_view(kind, snapshot, query=query, transaction_type=transaction_type)
    if not rows:
        click.echo("No matching records." if query else "No records found.")
        return
    for record in rows:
        click.echo(format_row(kind, record, today))
