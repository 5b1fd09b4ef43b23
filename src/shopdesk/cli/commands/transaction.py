"""Income and expense commands."""

import click

from shopdesk.cli.collection import create_record, delete_record, edit_record, show_list
from shopdesk.cli.parsing import parse_amount_option, parse_date_option, provided
from shopdesk.domain.entities import TransactionType
from shopdesk.domain.kinds import TRANSACTIONS

TYPE_CHOICE = click.Choice([t.value for t in TransactionType], case_sensitive=False)


def _type(value: str | None) -> TransactionType | None:
    return TransactionType(value.lower()) if value is not None else None


@click.group()
def transaction_group():
    """Track income and expenses."""
    pass


@transaction_group.command("list")
@click.option("--type", "transaction_type", type=TYPE_CHOICE, default="expense", help="Which tab to show (default: expense)")
@click.option("--search", "-s", default="", help="Filter by person or description")
@click.pass_context
def list_transactions(ctx, transaction_type: str, search: str):
    """List transactions of one type, newest first, with monthly totals."""
    show_list(ctx, TRANSACTIONS, search, transaction_type=_type(transaction_type))


@transaction_group.command("add")
@click.option("--type", "transaction_type", type=TYPE_CHOICE, default="expense", help="Transaction type (default: expense)")
@click.option("--person", required=True, help="Who paid or was paid")
@click.option("--description", required=True, help="What it was for")
@click.option("--amount", required=True, help="Amount (e.g., 12.50, $1,200)")
@click.option("--date", "date_str", help="Date (default: today)")
@click.pass_context
def add_transaction(ctx, transaction_type: str, person: str, description: str, amount: str, date_str: str | None):
    """Record an expense or income."""
    fields = provided(
        type=_type(transaction_type),
        person=person,
        description=description,
        amount=parse_amount_option(ctx, amount, "amount"),
        date=parse_date_option(ctx, date_str, "date"),
    )
    create_record(ctx, TRANSACTIONS, **fields)


@transaction_group.command("edit")
@click.argument("transaction_id")
@click.option("--type", "transaction_type", type=TYPE_CHOICE, help="New type")
@click.option("--person", help="New person")
@click.option("--description", help="New description")
@click.option("--amount", help="New amount")
@click.option("--date", "date_str", help="New date")
@click.pass_context
def edit_transaction(
    ctx,
    transaction_id: str,
    transaction_type: str | None,
    person: str | None,
    description: str | None,
    amount: str | None,
    date_str: str | None,
):
    """Edit an existing transaction."""
    fields = provided(
        type=_type(transaction_type),
        person=person,
        description=description,
        amount=parse_amount_option(ctx, amount, "amount"),
        date=parse_date_option(ctx, date_str, "date"),
    )
    edit_record(ctx, TRANSACTIONS, transaction_id, **fields)


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--dont-ask-again", is_flag=True, help="Stop asking for confirmation before deleting")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, dont_ask_again: bool):
    """Delete a transaction."""
    delete_record(ctx, TRANSACTIONS, transaction_id, dont_ask_again)


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
