"""Name conversion commands: to-path, to-name, ns."""

import click

from ..console import console
from ..errors import FormatError
from ..errors import escape_markup
from ..errors import format_error_message
from ..names import name_to_path
from ..names import namespace_for_path
from ..names import path_to_name


def _suffix(ctx: click.Context, suffix: str | None) -> str:
    return suffix if suffix is not None else ctx.obj["settings"].name_suffix


@click.command(name="to-path")
@click.argument("name")
@click.option("--suffix", default=None, help="File suffix (defaults to the configured name suffix)")
@click.pass_context
def to_path_cmd(ctx: click.Context, name: str, suffix: str | None):
    """Convert a dotted NAME to a relative file path."""
    click.echo(name_to_path(name, _suffix(ctx, suffix), separator="/"))


@click.command(name="to-name")
@click.argument("path")
@click.option("--suffix", default=None, help="File suffix (defaults to the configured name suffix)")
@click.pass_context
def to_name_cmd(ctx: click.Context, path: str, suffix: str | None):
    """Convert a relative file PATH to a dotted name."""
    try:
        click.echo(path_to_name(path, _suffix(ctx, suffix)))
    except FormatError as e:
        console.print(f"[red]Error:[/red] {escape_markup(format_error_message(e, include_type=False))}")
        ctx.exit(1)


@click.command(name="ns")
@click.argument("root")
@click.argument("path")
@click.option("--suffix", default=None, help="File suffix (defaults to the configured name suffix)")
@click.pass_context
def ns_cmd(ctx: click.Context, root: str, path: str, suffix: str | None):
    """Show the namespace of file PATH found under search ROOT."""
    try:
        click.echo(namespace_for_path(root, path, _suffix(ctx, suffix)))
    except FormatError as e:
        console.print(f"[red]Error:[/red] {escape_markup(format_error_message(e, include_type=False))}")
        ctx.exit(1)
