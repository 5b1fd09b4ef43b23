"""Live view command: re-renders a collection whenever it changes."""

import time
from datetime import datetime, date

import click

from shopdesk.cli.collection import get_gateway, open_collection, warn_if_stale
from shopdesk.cli.error_handling import handle_domain_error
from shopdesk.cli.rendering import render_view
from shopdesk.config.logging import get_logger
from shopdesk.domain.entities import TransactionType
from shopdesk.domain.errors import DomainError, GatewayError
from shopdesk.domain.kinds import KINDS, get_kind

logger = get_logger(__name__)

COLLECTION_CHOICE = click.Choice(sorted(KINDS) + sorted(kind.name for kind in KINDS.values()))


@click.command("watch")
@click.argument("collection_name", metavar="COLLECTION", type=COLLECTION_CHOICE)
@click.option("--interval", type=click.FloatRange(min=0.1), default=5.0, help="Seconds between checks for remote changes (default: 5)")
@click.option("--search", "-s", default="", help="Filter the view")
@click.option("--type", "transaction_type", type=click.Choice([t.value for t in TransactionType]), default="expense", help="Transaction tab (default: expense)")
@click.option("--once", is_flag=True, help="Render the current view and exit")
@click.pass_context
def watch(ctx, collection_name: str, interval: float, search: str, transaction_type: str, once: bool):
    """Keep a collection on screen, refreshed on every change.

    Changes made from other devices are picked up by checking the store
    every --interval seconds. Press Ctrl+C to stop.
    """
    try:
        kind = get_kind(collection_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    tab = TransactionType(transaction_type) if kind.collection == "transactions" else None

    def render(snapshot):
        click.echo(f"\n[{datetime.now():%H:%M:%S}] {kind.collection}")
        render_view(kind, snapshot, date.today(), query=search, transaction_type=tab)

    gateway = get_gateway(ctx)
    collection = open_collection(ctx, kind)
    try:
        render(collection.snapshot)
        if once:
            return
        collection.add_listener(render)
        try:
            while True:
                try:
                    gateway.poll_changes()
                except GatewayError as e:
                    logger.warning("poll_failed", collection=kind.collection, error=str(e))
                warn_if_stale(collection)
                time.sleep(interval)
        except KeyboardInterrupt:
            click.echo("\nStopped watching.")
    finally:
        collection.remove_listener(render)
        collection.deactivate()


def register_commands(cli):
    """Register watch command with main CLI."""
    cli.add_command(watch)
