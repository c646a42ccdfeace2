# ABOUTME: The `myshelf info` command for displaying a single book.
# ABOUTME: Shows all stored fields for a book by ISBN.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from myshelf.cli.commands.ls_cmd import format_rating
from myshelf.cli.context import AppContext, open_store
from myshelf.cli.options import db_option, remote_option

console = Console()


@click.command("info")
@click.argument("isbn")
@db_option
@remote_option
@click.pass_obj
def info(app: AppContext, isbn: str, db_path: Path | None, remote_url: str | None) -> None:
    """Show details for a book by ISBN."""
    with open_store(app, db_path, remote_url) as store:
        record = store.get(isbn)

    if record is None:
        console.print(f"[red]Book {isbn} not found.[/red]")
        raise SystemExit(1)

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("ISBN", record.isbn)
    table.add_row("Title", record.title)
    table.add_row("Author", record.author or "unknown")
    if record.genres:
        table.add_row("Genres", ", ".join(record.genres))
    if record.series:
        order = f" #{record.series_order}" if record.series_order else ""
        table.add_row("Series", f"{record.series}{order}")
    if record.publisher:
        table.add_row("Publisher", record.publisher)
    if record.publish_year:
        table.add_row("Published", str(record.publish_year))
    if record.language:
        table.add_row("Language", record.language)
    if record.page_count:
        table.add_row("Pages", str(record.page_count))
    table.add_row("Status", record.reading_status.value)
    if record.rating:
        table.add_row("Rating", format_rating(record.rating))
    table.add_row("Favorite", "yes" if record.favorite else "no")
    if record.notes:
        table.add_row("Notes", record.notes)
    if record.description:
        table.add_row("Description", record.description)
    if record.cover_url:
        table.add_row("Cover", record.cover_url)
    if record.source:
        table.add_row("Source", record.source)
    table.add_row("Added", record.date_added)

    console.print(table)
