"""Main CLI entry point."""

import locale

import click

from shopdesk.config.logging import configure_logging, get_logger

from shopdesk.cli.commands import (
    customer,
    prefs,
    product,
    sale,
    subscription,
    transaction,
    watch,
)

logger = get_logger(__name__)


@click.group()
@click.option(
    "--store-url",
    help="Store URL: https://<project>.supabase.co or a SQLAlchemy database URL "
    "(overrides SHOPDESK_STORE_URL environment variable)",
    envvar="SHOPDESK_STORE_URL",
)
@click.option(
    "--store-key",
    help="API key for a hosted store (overrides SHOPDESK_STORE_KEY environment variable)",
    envvar="SHOPDESK_STORE_KEY",
)
@click.option(
    "--prefs-path",
    type=click.Path(dir_okay=False),
    help="Path to the preferences file (overrides SHOPDESK_PREFS_PATH environment variable)",
    envvar="SHOPDESK_PREFS_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr")
@click.pass_context
def cli(ctx, store_url: str | None, store_key: str | None, prefs_path: str | None, verbose: bool):
    """Shopdesk - Back office for a small online shop.

    Keep track of subscriptions, income and expenses, customers and their
    purchases, the product catalog and sales, all in one shared store.
    """
    configure_logging(level="INFO" if verbose else None)
    try:
        # Product names sort by the user's collation rules
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning("locale_unavailable", error=str(e))
    ctx.ensure_object(dict)
    ctx.obj["store_url"] = store_url
    ctx.obj["store_key"] = store_key
    ctx.obj["prefs_path"] = prefs_path
    # Created on first use so --help never touches the store
    ctx.obj.setdefault("gateway", None)
    ctx.obj.setdefault("preferences", None)


subscription.register_commands(cli)
transaction.register_commands(cli)
customer.register_commands(cli)
product.register_commands(cli)
sale.register_commands(cli)
watch.register_commands(cli)
prefs.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
