"""Resource lookup commands: roots, exists, find, cat, ls, namespaces."""

from __future__ import annotations

import click
from rich.table import Table

from ..console import console
from ..errors import ResourceNotFoundError
from ..errors import escape_markup
from ..errors import format_error_message
from ..locator import ResourceLocator
from ..registry import NamespaceRegistry
from ..registry import register_resource_namespaces
from ..settings import LocatorSettings


def _locator(ctx: click.Context) -> ResourceLocator:
    return ctx.obj["locator"]


def _settings(ctx: click.Context) -> LocatorSettings:
    return ctx.obj["settings"]


@click.command(name="roots")
@click.pass_context
def roots_cmd(ctx: click.Context):
    """Show the search path roots in search order."""
    locator = _locator(ctx)
    roots = locator.search_path.roots()

    if not roots:
        console.print("[dim]No usable search path roots.[/dim]")
        return

    table = Table(title="Search Path Roots")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="green")
    table.add_column("Path", style="cyan")
    for index, search_root in enumerate(roots, start=1):
        table.add_row(str(index), search_root.kind.value, escape_markup(search_root.path))
    console.print(table)


@click.command(name="exists")
@click.argument("path")
@click.pass_context
def exists_cmd(ctx: click.Context, path: str):
    """Check whether PATH exists in any root. Exits with 1 when absent."""
    if _locator(ctx).resource_exists(path):
        console.print(f"[green]✓[/green] {escape_markup(path)}")
        return
    console.print(f"[red]✗[/red] {escape_markup(path)}")
    ctx.exit(1)


@click.command(name="find")
@click.argument("path")
@click.option("--all", "find_all", is_flag=True, help="Show every matching file, not just the first")
@click.pass_context
def find_cmd(ctx: click.Context, path: str, find_all: bool):
    """Show the directory-root file(s) for PATH."""
    locator = _locator(ctx)
    if find_all:
        matches = locator.find_all_files(path)
    else:
        first = locator.find_file(path)
        matches = [first] if first is not None else []

    if not matches:
        console.print(f"[yellow]Not found:[/yellow] {escape_markup(path)}")
        ctx.exit(1)

    for match in matches:
        click.echo(str(match))


@click.command(name="cat")
@click.argument("directory")
@click.argument("filename")
@click.option("--encoding", default="utf-8", show_default=True, help="Text encoding")
@click.pass_context
def cat_cmd(ctx: click.Context, directory: str, filename: str, encoding: str):
    """Print DIRECTORY/FILENAME from the first root that holds it."""
    try:
        text = _locator(ctx).load_resource_as_string(directory, filename, encoding)
    except (ResourceNotFoundError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] {escape_markup(format_error_message(e, include_type=False))}")
        ctx.exit(1)
    click.echo(text, nl=False)


@click.command(name="ls")
@click.argument("directory")
@click.pass_context
def ls_cmd(ctx: click.Context, directory: str):
    """List names directly under DIRECTORY in every directory and archive root."""
    names = sorted(_locator(ctx).child_names_under_directory(directory))
    if not names:
        console.print(f"[dim]Nothing under {escape_markup(directory)}[/dim]")
        return
    for name in names:
        click.echo(name)


@click.command(name="namespaces")
@click.argument("directory")
@click.option("--suffix", default=None, help="Source file suffix (defaults to the configured name suffix)")
@click.pass_context
def namespaces_cmd(ctx: click.Context, directory: str, suffix: str | None):
    """List namespaces defined by source files under DIRECTORY."""
    suffix = suffix or _settings(ctx).name_suffix
    registry = NamespaceRegistry()
    names = register_resource_namespaces(registry, _locator(ctx), directory, suffix)

    if not names:
        console.print(f"[dim]No {escape_markup(suffix)} files under {escape_markup(directory)}[/dim]")
        return

    table = Table(title=f"Namespaces in {escape_markup(directory)}")
    table.add_column("Namespace", style="cyan")
    table.add_column("Loadable")
    for name in names:
        loadable = registry.namespace_exists(name)
        table.add_row(escape_markup(name), "[green]yes[/green]" if loadable else "[dim]archive only[/dim]")
    console.print(table)
