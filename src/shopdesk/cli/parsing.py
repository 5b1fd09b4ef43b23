"""CLI helpers for option parsing."""

from datetime import date
from decimal import Decimal

import click

from shopdesk.utils.amount_parser import parse_amount
from shopdesk.utils.date_parser import parse_date


def parse_date_option(ctx: click.Context, value: str | None, label: str) -> date | None:
    """Parse a date option, or exit with a CLI error."""
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def parse_amount_option(ctx: click.Context, value: str | None, label: str) -> Decimal | None:
    """Parse an amount option, or exit with a CLI error."""
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def provided(**fields) -> dict:
    """Drop options the user did not pass."""
    return {name: value for name, value in fields.items() if value is not None}
