"""Product catalog commands."""

import click

from shopdesk.cli.collection import create_record, delete_record, edit_record, show_list
from shopdesk.cli.parsing import parse_amount_option, provided
from shopdesk.domain.kinds import PRODUCTS


@click.group()
def product_group():
    """Manage the product catalog."""
    pass


@product_group.command("list")
@click.option("--search", "-s", default="", help="Filter by name or supplier")
@click.pass_context
def list_products(ctx, search: str):
    """List products alphabetically with their margins."""
    show_list(ctx, PRODUCTS, search)


@product_group.command("add")
@click.option("--name", required=True, help="Product name")
@click.option("--supplier", required=True, help="Where the product is sourced")
@click.option("--cost", required=True, help="Cost price")
@click.option("--price", required=True, help="Selling price")
@click.option("--notes", help="Free-form notes")
@click.pass_context
def add_product(ctx, name: str, supplier: str, cost: str, price: str, notes: str | None):
    """Add a product to the catalog."""
    fields = provided(
        name=name,
        supplier=supplier,
        cost_price=parse_amount_option(ctx, cost, "cost price"),
        selling_price=parse_amount_option(ctx, price, "selling price"),
        notes=notes,
    )
    create_record(ctx, PRODUCTS, **fields)


@product_group.command("edit")
@click.argument("product_id")
@click.option("--name", help="New name")
@click.option("--supplier", help="New supplier")
@click.option("--cost", help="New cost price")
@click.option("--price", help="New selling price")
@click.option("--notes", help="New notes")
@click.pass_context
def edit_product(
    ctx,
    product_id: str,
    name: str | None,
    supplier: str | None,
    cost: str | None,
    price: str | None,
    notes: str | None,
):
    """Edit an existing product."""
    fields = provided(
        name=name,
        supplier=supplier,
        cost_price=parse_amount_option(ctx, cost, "cost price"),
        selling_price=parse_amount_option(ctx, price, "selling price"),
        notes=notes,
    )
    edit_record(ctx, PRODUCTS, product_id, **fields)


@product_group.command("delete")
@click.argument("product_id")
@click.option("--dont-ask-again", is_flag=True, help="Stop asking for confirmation before deleting")
@click.pass_context
def delete_product(ctx, product_id: str, dont_ask_again: bool):
    """Delete a product."""
    delete_record(ctx, PRODUCTS, product_id, dont_ask_again)


def register_commands(cli):
    """Register product commands with main CLI."""
    cli.add_command(product_group, name="product")
