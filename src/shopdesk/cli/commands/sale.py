"""Sales log commands."""

import click

from shopdesk.cli.collection import create_record, delete_record, edit_record, show_list
from shopdesk.cli.parsing import parse_amount_option, parse_date_option, provided
from shopdesk.domain.kinds import SALES


@click.group()
def sale_group():
    """Log and review sales."""
    pass


@sale_group.command("list")
@click.option("--search", "-s", default="", help="Filter by customer, product or notes")
@click.pass_context
def list_sales(ctx, search: str):
    """List sales, newest first, with revenue."""
    show_list(ctx, SALES, search)


@sale_group.command("add")
@click.option("--customer", required=True, help="Customer name")
@click.option("--username", help="Customer username")
@click.option("--product", required=True, help="Product sold")
@click.option("--price", required=True, help="Sale price")
@click.option("--date", "date_str", help="Sale date (default: today)")
@click.option("--notes", help="Free-form notes")
@click.pass_context
def add_sale(
    ctx,
    customer: str,
    username: str | None,
    product: str,
    price: str,
    date_str: str | None,
    notes: str | None,
):
    """Log a sale."""
    fields = provided(
        customer_name=customer,
        customer_username=username,
        product_name=product,
        price=parse_amount_option(ctx, price, "price"),
        date=parse_date_option(ctx, date_str, "date"),
        notes=notes,
    )
    create_record(ctx, SALES, **fields)


@sale_group.command("edit")
@click.argument("sale_id")
@click.option("--customer", help="New customer name")
@click.option("--username", help="New customer username")
@click.option("--product", help="New product")
@click.option("--price", help="New price")
@click.option("--date", "date_str", help="New date")
@click.option("--notes", help="New notes")
@click.pass_context
def edit_sale(
    ctx,
    sale_id: str,
    customer: str | None,
    username: str | None,
    product: str | None,
    price: str | None,
    date_str: str | None,
    notes: str | None,
):
    """Edit a logged sale."""
    fields = provided(
        customer_name=customer,
        customer_username=username,
        product_name=product,
        price=parse_amount_option(ctx, price, "price"),
        date=parse_date_option(ctx, date_str, "date"),
        notes=notes,
    )
    edit_record(ctx, SALES, sale_id, **fields)


@sale_group.command("delete")
@click.argument("sale_id")
@click.option("--dont-ask-again", is_flag=True, help="Stop asking for confirmation before deleting")
@click.pass_context
def delete_sale(ctx, sale_id: str, dont_ask_again: bool):
    """Delete a sale."""
    delete_record(ctx, SALES, sale_id, dont_ask_again)


def register_commands(cli):
    """Register sale commands with main CLI."""
    cli.add_command(sale_group, name="sale")
