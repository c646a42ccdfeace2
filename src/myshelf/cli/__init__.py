# ABOUTME: CLI package for MyShelf, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from myshelf.cli.commands import (
    add_cmd,
    edit_cmd,
    export_cmd,
    import_cmd,
    info_cmd,
    login_cmd,
    ls_cmd,
    manual_cmd,
    rm_cmd,
    scan_cmd,
    stats_cmd,
)
from myshelf.cli.context import AppContext
from myshelf.settings import DEFAULT_SETTINGS_PATH, load_settings

_LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr through Rich; -v for INFO, -vv for DEBUG."""
    logging.basicConfig(
        level=_LOG_LEVELS.get(verbosity, logging.DEBUG),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


@click.group()
@click.version_option(package_name="myshelf")
@click.option("-v", "--verbose", count=True, help="Increase log output (-v, -vv).")
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="MYSHELF_SETTINGS",
    default=None,
    help=f"Settings file (default: {DEFAULT_SETTINGS_PATH}).",
)
@click.pass_context
def cli(ctx: click.Context, verbose: int, settings_path: Path | None) -> None:
    """MyShelf - scan ISBNs and keep track of your book library."""
    configure_logging(verbose)
    path = settings_path.expanduser() if settings_path else DEFAULT_SETTINGS_PATH
    ctx.obj = AppContext(settings=load_settings(path), home=path.parent)


cli.add_command(scan_cmd.scan)
cli.add_command(add_cmd.add)
cli.add_command(manual_cmd.manual)
cli.add_command(ls_cmd.ls)
cli.add_command(info_cmd.info)
cli.add_command(edit_cmd.edit)
cli.add_command(rm_cmd.rm)
cli.add_command(rm_cmd.clear)
cli.add_command(stats_cmd.stats)
cli.add_command(export_cmd.export)
cli.add_command(import_cmd.import_command)
cli.add_command(login_cmd.login)
cli.add_command(login_cmd.logout)
