"""Customer and purchase history commands."""

import click

from shopdesk.cli.collection import (
    create_record,
    delete_record,
    edit_record,
    find_record,
    get_gateway,
    show_list,
    submit_session,
)
from shopdesk.cli.error_handling import handle_domain_error
from shopdesk.cli.parsing import parse_date_option, provided
from shopdesk.domain.edit_session import EditSession
from shopdesk.domain.errors import DomainError
from shopdesk.domain.kinds import CUSTOMERS


def _open_session(ctx, customer_id: str) -> EditSession:
    session = EditSession(get_gateway(ctx), CUSTOMERS)
    session.open_edit(find_record(ctx, CUSTOMERS, customer_id))
    return session


@click.group()
def customer_group():
    """Manage customers and their purchases."""
    pass


@customer_group.command("list")
@click.option("--search", "-s", default="", help="Filter by name, username or notes")
@click.pass_context
def list_customers(ctx, search: str):
    """List customers, most recent buyers first."""
    show_list(ctx, CUSTOMERS, search)


@customer_group.command("show")
@click.argument("customer_id")
@click.pass_context
def show_customer(ctx, customer_id: str):
    """Show a customer with their purchase history."""
    customer = find_record(ctx, CUSTOMERS, customer_id)
    click.echo(f"{customer.name}" + (f" (@{customer.username})" if customer.username else ""))
    if customer.notes:
        click.echo(f"Notes: {customer.notes}")
    if not customer.purchases:
        click.echo("No purchases recorded.")
        return
    click.echo(f"\nPurchases ({len(customer.purchases)}):")
    for purchase in sorted(customer.purchases, key=lambda p: p.date, reverse=True):
        click.echo(f"  ID: {purchase.id} | {purchase.date} | {purchase.details}")


@customer_group.command("add")
@click.option("--name", required=True, help="Customer name")
@click.option("--username", help="Username on the shop's platform")
@click.option("--notes", help="Free-form notes")
@click.pass_context
def add_customer(ctx, name: str, username: str | None, notes: str | None):
    """Add a new customer."""
    create_record(ctx, CUSTOMERS, **provided(name=name, username=username, notes=notes))


@customer_group.command("edit")
@click.argument("customer_id")
@click.option("--name", help="New name")
@click.option("--username", help="New username")
@click.option("--notes", help="New notes")
@click.pass_context
def edit_customer(ctx, customer_id: str, name: str | None, username: str | None, notes: str | None):
    """Edit a customer's details."""
    edit_record(ctx, CUSTOMERS, customer_id, **provided(name=name, username=username, notes=notes))


@customer_group.command("delete")
@click.argument("customer_id")
@click.option("--dont-ask-again", is_flag=True, help="Stop asking for confirmation before deleting")
@click.pass_context
def delete_customer(ctx, customer_id: str, dont_ask_again: bool):
    """Delete a customer and their purchase history."""
    delete_record(ctx, CUSTOMERS, customer_id, dont_ask_again)


@customer_group.command("purchase-add")
@click.argument("customer_id")
@click.option("--details", required=True, help="What was bought")
@click.option("--date", "date_str", help="Purchase date (default: today)")
@click.pass_context
def add_purchase(ctx, customer_id: str, details: str, date_str: str | None):
    """Record a purchase for a customer."""
    purchase_date = parse_date_option(ctx, date_str, "date")
    session = _open_session(ctx, customer_id)
    purchase = session.add_purchase(details=details, purchase_date=purchase_date)
    submit_session(ctx, session)
    click.echo(f"Added purchase {purchase.id} to customer {customer_id}")


@customer_group.command("purchase-update")
@click.argument("customer_id")
@click.argument("purchase_id")
@click.option("--details", help="New details")
@click.option("--date", "date_str", help="New purchase date")
@click.pass_context
def update_purchase(ctx, customer_id: str, purchase_id: str, details: str | None, date_str: str | None):
    """Change a recorded purchase."""
    fields = provided(details=details, date=parse_date_option(ctx, date_str, "date"))
    if not fields:
        click.echo("Error: Nothing to update (use --details or --date)", err=True)
        ctx.exit(1)

    session = _open_session(ctx, customer_id)
    try:
        for field, value in fields.items():
            session.update_purchase(purchase_id, field, value)
    except DomainError as e:
        handle_domain_error(ctx, e)
    submit_session(ctx, session)
    click.echo(f"Updated purchase {purchase_id}")


@customer_group.command("purchase-remove")
@click.argument("customer_id")
@click.argument("purchase_id")
@click.pass_context
def remove_purchase(ctx, customer_id: str, purchase_id: str):
    """Remove a purchase from a customer's history."""
    session = _open_session(ctx, customer_id)
    try:
        session.remove_purchase(purchase_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    submit_session(ctx, session)
    click.echo(f"Removed purchase {purchase_id}")


def register_commands(cli):
    """Register customer commands with main CLI."""
    cli.add_command(customer_group, name="customer")
