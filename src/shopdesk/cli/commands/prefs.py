"""Device preference commands."""

import click

from shopdesk.cli.collection import get_preferences


@click.group()
def prefs_group():
    """Show or reset preferences stored on this device."""
    pass


@prefs_group.command("show")
@click.pass_context
def show_prefs(ctx):
    """Show current preferences."""
    preferences = get_preferences(ctx)
    confirm = "off" if preferences.skip_delete_warning else "on"
    click.echo(f"Preferences file: {preferences.path}")
    click.echo(f"Confirm before deleting: {confirm}")


@prefs_group.command("reset-delete-warning")
@click.pass_context
def reset_delete_warning(ctx):
    """Ask for confirmation before deleting again."""
    get_preferences(ctx).skip_delete_warning = False
    click.echo("Delete confirmation re-enabled.")


def register_commands(cli):
    """Register preference commands with main CLI."""
    cli.add_command(prefs_group, name="prefs")
