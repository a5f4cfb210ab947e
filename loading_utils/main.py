"""loading-utils CLI - inspect resources on a search path."""

import logging

import click

from .commands.lookup import cat_cmd
from .commands.lookup import exists_cmd
from .commands.lookup import find_cmd
from .commands.lookup import ls_cmd
from .commands.lookup import namespaces_cmd
from .commands.lookup import roots_cmd
from .commands.names import ns_cmd
from .commands.names import to_name_cmd
from .commands.names import to_path_cmd
from .commands.root import root as root_group
from .locator import ResourceLocator
from .logging_setup import init_json_logging
from .search_path import SearchPath
from .settings import SettingsManager

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="loading-utils")
@click.option(
    "--search-path",
    "-s",
    "search_path",
    multiple=True,
    help="Search path entry (repeatable). Replaces configured and sys.path entries.",
)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write JSONL logs to this file")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, ...)")
@click.pass_context
def cli(ctx: click.Context, search_path: tuple[str, ...], log_file: str | None, log_level: str | None):
    """Locate resources across directory and archive search path roots."""
    settings = SettingsManager().load()
    if search_path:
        settings = settings.model_copy(update={"search_path": list(search_path)})

    init_json_logging(log_file, log_level or settings.log_level)

    locator = ResourceLocator(SearchPath.from_settings(settings))
    logger.debug(f"[cli:init] {locator!r}")
    ctx.obj = {"settings": settings, "locator": locator}


cli.add_command(roots_cmd)
cli.add_command(exists_cmd)
cli.add_command(find_cmd)
cli.add_command(cat_cmd)
cli.add_command(ls_cmd)
cli.add_command(namespaces_cmd)
cli.add_command(to_path_cmd)
cli.add_command(to_name_cmd)
cli.add_command(ns_cmd)
cli.add_command(root_group)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
