"""Search path override commands backed by settings.yaml scopes."""

import click

from ..console import console
from ..errors import escape_markup
from ..settings import SettingsManager

SCOPES = ["user", "project", "local"]


@click.group(invoke_without_command=True)
@click.pass_context
def root(ctx: click.Context):
    """Manage configured search path roots."""
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@root.command(name="add")
@click.argument("path")
@click.option("--scope", type=click.Choice(SCOPES), default="project", show_default=True, help="Settings scope")
def root_add(path: str, scope: str):
    """Append PATH to the configured search path."""
    SettingsManager().add_search_root(path, scope)
    console.print(f"[green]✓ Added {scope} search root:[/green] {escape_markup(path)}")


@root.command(name="remove")
@click.argument("path")
@click.option("--scope", type=click.Choice(SCOPES), default="project", show_default=True, help="Settings scope")
@click.pass_context
def root_remove(ctx: click.Context, path: str, scope: str):
    """Remove PATH from the configured search path."""
    if SettingsManager().remove_search_root(path, scope):
        console.print(f"[green]✓ Removed {scope} search root:[/green] {escape_markup(path)}")
        return
    console.print(f"[yellow]Not configured in {scope} scope:[/yellow] {escape_markup(path)}")
    ctx.exit(1)


@root.command(name="show")
def root_show():
    """Show the merged search path override, if any."""
    settings = SettingsManager().load()
    if settings.search_path is None:
        console.print("[dim]No override configured; using sys.path.[/dim]")
        return
    for entry in settings.search_path:
        console.print(f"[cyan]{escape_markup(entry)}[/cyan]")
