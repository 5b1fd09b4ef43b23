"""Subscription management commands."""

import click

from shopdesk.cli.collection import create_record, delete_record, edit_record, show_list
from shopdesk.cli.parsing import parse_date_option, provided
from shopdesk.domain.kinds import SUBSCRIPTIONS


@click.group()
def subscription_group():
    """Manage customer subscriptions."""
    pass


@subscription_group.command("list")
@click.option("--search", "-s", default="", help="Filter by name or notes")
@click.pass_context
def list_subscriptions(ctx, search: str):
    """List subscriptions, soonest expiry first."""
    show_list(ctx, SUBSCRIPTIONS, search)


@subscription_group.command("add")
@click.option("--name", required=True, help="Subscriber or service name")
@click.option("--expires", required=True, help="Expiration date (YYYY-MM-DD, 'tomorrow', '+30d')")
@click.option("--activated", help="Activation date (default: today)")
@click.option("--category", help="Category (default: General)")
@click.option("--notes", help="Free-form notes")
@click.pass_context
def add_subscription(ctx, name: str, expires: str, activated: str | None, category: str | None, notes: str | None):
    """Add a new subscription."""
    fields = provided(
        name=name,
        activation_date=parse_date_option(ctx, activated, "activation date"),
        expiration_date=parse_date_option(ctx, expires, "expiration date"),
        category=category,
        notes=notes,
    )
    create_record(ctx, SUBSCRIPTIONS, **fields)


@subscription_group.command("edit")
@click.argument("subscription_id")
@click.option("--name", help="New name")
@click.option("--activated", help="New activation date")
@click.option("--expires", help="New expiration date")
@click.option("--category", help="New category")
@click.option("--notes", help="New notes")
@click.pass_context
def edit_subscription(
    ctx,
    subscription_id: str,
    name: str | None,
    activated: str | None,
    expires: str | None,
    category: str | None,
    notes: str | None,
):
    """Edit an existing subscription."""
    fields = provided(
        name=name,
        activation_date=parse_date_option(ctx, activated, "activation date"),
        expiration_date=parse_date_option(ctx, expires, "expiration date"),
        category=category,
        notes=notes,
    )
    edit_record(ctx, SUBSCRIPTIONS, subscription_id, **fields)


@subscription_group.command("delete")
@click.argument("subscription_id")
@click.option("--dont-ask-again", is_flag=True, help="Stop asking for confirmation before deleting")
@click.pass_context
def delete_subscription(ctx, subscription_id: str, dont_ask_again: bool):
    """Delete a subscription."""
    delete_record(ctx, SUBSCRIPTIONS, subscription_id, dont_ask_again)


def register_commands(cli):
    """Register subscription commands with main CLI."""
    cli.add_command(subscription_group, name="subscription")
