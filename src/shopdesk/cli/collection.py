"""Shared plumbing for the per-collection command groups.

Every collection command works the same way: build the gateway once per
invocation, load a live collection for reads, drive an edit session for
writes and a delete gate for deletions.
"""

from datetime import date
from typing import Any, Optional

import click

from shopdesk.cli.error_handling import handle_domain_error
from shopdesk.cli.rendering import render_view
from shopdesk.config.settings import load_fetch_settings, load_store_settings
from shopdesk.domain.delete_gate import DeleteGate, DeleteOutcome
from shopdesk.domain.edit_session import EditSession
from shopdesk.domain.entities import TransactionType
from shopdesk.domain.errors import DomainError, NotFoundError, record_not_found
from shopdesk.domain.kinds import EntityKind
from shopdesk.domain.live_collection import LiveCollection
from shopdesk.gateway.base import StoreGateway
from shopdesk.gateway.factories import create_gateway
from shopdesk.preferences import PreferenceStore


def get_gateway(ctx: click.Context) -> StoreGateway:
    """Gateway for this invocation, created on first use."""
    obj = ctx.find_root().obj
    if obj.get("gateway") is None:
        try:
            settings = load_store_settings(url=obj.get("store_url"), key=obj.get("store_key"))
            gateway = create_gateway(settings)
            gateway.connect()
        except DomainError as e:
            handle_domain_error(ctx, e)
        obj["gateway"] = gateway
        ctx.find_root().call_on_close(gateway.disconnect)
    return obj["gateway"]


def get_preferences(ctx: click.Context) -> PreferenceStore:
    obj = ctx.find_root().obj
    if obj.get("preferences") is None:
        obj["preferences"] = PreferenceStore(obj.get("prefs_path"))
    return obj["preferences"]


def open_collection(ctx: click.Context, kind: EntityKind) -> LiveCollection:
    """Activated live collection; warns on stderr when the data may be stale."""
    try:
        fetch_settings = load_fetch_settings()
    except DomainError as e:
        handle_domain_error(ctx, e)
    collection = LiveCollection(get_gateway(ctx), kind, fetch_settings=fetch_settings)
    collection.activate()
    warn_if_stale(collection)
    return collection


def warn_if_stale(collection: LiveCollection) -> None:
    if collection.is_stale:
        click.echo(f"Warning: data may be stale ({collection.last_error})", err=True)


def show_list(
    ctx: click.Context,
    kind: EntityKind,
    query: str,
    transaction_type: Optional[TransactionType] = None,
) -> None:
    """Render a collection's statistics and filtered list."""
    collection = open_collection(ctx, kind)
    try:
        render_view(kind, collection.snapshot, date.today(), query=query, transaction_type=transaction_type)
    finally:
        collection.deactivate()


def find_record(ctx: click.Context, kind: EntityKind, record_id: str) -> Any:
    """Record from a fresh snapshot, or exit with a CLI error."""
    collection = open_collection(ctx, kind)
    try:
        record = collection.find(record_id)
    finally:
        collection.deactivate()
    if record is None:
        handle_domain_error(ctx, NotFoundError(record_not_found(kind.collection, record_id)))
    return record


def submit_session(ctx: click.Context, session: EditSession) -> None:
    """Submit a session, exiting with the store's message on failure."""
    try:
        saved = session.submit()
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not saved:
        click.echo(f"Error: {session.error}", err=True)
        ctx.exit(1)


def create_record(ctx: click.Context, kind: EntityKind, **fields: Any) -> None:
    """Create a record from the kind's defaults plus the given fields."""
    session = EditSession(get_gateway(ctx), kind)
    try:
        session.open_create(**fields)
    except DomainError as e:
        handle_domain_error(ctx, e)
    submit_session(ctx, session)
    click.echo(f"Created {kind.name}")


def edit_record(ctx: click.Context, kind: EntityKind, record_id: str, **fields: Any) -> None:
    """Overwrite the given fields of an existing record."""
    record = find_record(ctx, kind, record_id)
    session = EditSession(get_gateway(ctx), kind)
    session.open_edit(record)
    try:
        session.update(**fields)
    except DomainError as e:
        handle_domain_error(ctx, e)
    submit_session(ctx, session)
    click.echo(f"Updated {kind.name} {record_id}")


def delete_record(ctx: click.Context, kind: EntityKind, record_id: str, dont_ask_again: bool) -> None:
    """Delete through the confirmation gate."""
    gate = DeleteGate(get_gateway(ctx), kind, get_preferences(ctx))
    try:
        outcome = gate.request(record_id)
        if outcome is DeleteOutcome.STAGED:
            if not click.confirm(f"Are you sure you want to delete {kind.name} {record_id}? This cannot be undone"):
                gate.cancel()
                click.echo("Deletion cancelled.")
                return
            gate.confirm(dont_ask_again=dont_ask_again)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted {kind.name} {record_id}")
