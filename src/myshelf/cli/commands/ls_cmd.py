# ABOUTME: The `myshelf ls` command for browsing the library.
# ABOUTME: Filters by status or favorites, searches title/author, sorts, and prints a Rich table.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from myshelf.cli.context import AppContext, open_store
from myshelf.cli.options import db_option, remote_option
from myshelf.library.query import ALL, FAVORITES, SORT_KEYS, filter_books, sort_books
from myshelf.library.types import ReadingStatus

console = Console()

_STATUS_CHOICES = [ALL, *(s.value for s in ReadingStatus), FAVORITES]


def format_rating(rating: int | None) -> str:
    return "*" * rating if rating else ""


@click.command("ls")
@db_option
@remote_option
@click.option(
    "--status",
    "status_filter",
    type=click.Choice(_STATUS_CHOICES),
    default=ALL,
    help="Show only books with this reading status, or favorites.",
)
@click.option("--favorites", is_flag=True, default=False, help="Shortcut for --status favorites.")
@click.option("-s", "--search", default=None, help="Match title or author (case-insensitive).")
@click.option(
    "--sort",
    "sort_key",
    type=click.Choice(SORT_KEYS),
    default="dateAdded",
    help="Sort order (default: newest first).",
)
@click.option("--asc", is_flag=True, default=False, help="Sort ascending instead of descending.")
@click.pass_obj
def ls(
    app: AppContext,
    db_path: Path | None,
    remote_url: str | None,
    status_filter: str,
    favorites: bool,
    search: str | None,
    sort_key: str,
    asc: bool,
) -> None:
    """List books in the library."""
    with open_store(app, db_path, remote_url) as store:
        books = store.records()

    if not books:
        console.print("[yellow]No books in the library.[/yellow]")
        return

    status = FAVORITES if favorites else status_filter
    records = sort_books(
        filter_books(books, status=status, search=search), key=sort_key, ascending=asc
    )
    if not records:
        console.print("[yellow]No books match those filters.[/yellow]")
        return

    table = Table()
    table.add_column("ISBN", style="dim", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Status")
    table.add_column("Rating")
    table.add_column("Fav")

    for record in records:
        table.add_row(
            record.isbn,
            record.title,
            record.author or "[dim]unknown[/dim]",
            record.reading_status.value,
            format_rating(record.rating),
            "yes" if record.favorite else "",
        )

    console.print(table)
    console.print(f"\n[dim]{len(records)} of {len(books)} book(s)[/dim]")
