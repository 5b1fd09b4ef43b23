"""CLI error handling helpers."""

from typing import NoReturn

import click

from shopdesk.domain.errors import DomainError, ValidationError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> NoReturn:
    """Render a domain error and exit with failure."""
    if isinstance(error, ValidationError):
        click.echo("Error: Invalid input", err=True)
        for name, problem in error.field_errors.items():
            click.echo(f"  {name}: {problem}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
