# ABOUTME: The `myshelf import` command for loading a JSON or CSV export.
# ABOUTME: Adds every record whose ISBN is not already in the library.

from pathlib import Path

import click
from rich.console import Console

from myshelf.cli.context import AppContext, open_store
from myshelf.cli.options import db_option, remote_option
from myshelf.library.export import ExportFormatError, load_export

console = Console()


@click.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@db_option
@remote_option
@click.pass_obj
def import_command(
    app: AppContext, path: Path, db_path: Path | None, remote_url: str | None
) -> None:
    """Import books from a MyShelf JSON or CSV export."""
    try:
        books = load_export(path)
    except ExportFormatError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    with open_store(app, db_path, remote_url) as store:
        # Oldest first, so the newest import ends up at the top of the shelf.
        added = len(store.add_many(reversed(books)))
    skipped = len(books) - added

    parts = [f"[green]{added} added[/green]"]
    if skipped:
        parts.append(f"[yellow]{skipped} skipped[/yellow]")
    console.print(", ".join(parts))
