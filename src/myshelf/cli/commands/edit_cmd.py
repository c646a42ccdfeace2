# ABOUTME: The `myshelf edit` command for updating reading status, rating, notes and favorites.
# ABOUTME: Applies only the fields given on the command line to an existing book.

from pathlib import Path

import click
from rich.console import Console

from myshelf.cli.context import AppContext, open_store
from myshelf.cli.options import db_option, remote_option
from myshelf.library.types import ReadingStatus

console = Console()


@click.command("edit")
@click.argument("isbn")
@click.option(
    "--status",
    type=click.Choice([s.value for s in ReadingStatus]),
    default=None,
    help="New reading status.",
)
@click.option("--rating", type=click.IntRange(1, 5), default=None, help="Star rating, 1-5.")
@click.option("--clear-rating", is_flag=True, default=False, help="Remove the rating.")
@click.option("--notes", default=None, help="Replace the notes text.")
@click.option("--favorite/--no-favorite", default=None, help="Mark or unmark as favorite.")
@db_option
@remote_option
@click.pass_obj
def edit(
    app: AppContext,
    isbn: str,
    status: str | None,
    rating: int | None,
    clear_rating: bool,
    notes: str | None,
    favorite: bool | None,
    db_path: Path | None,
    remote_url: str | None,
) -> None:
    """Edit a book's status, rating, notes or favorite flag."""
    if rating is not None and clear_rating:
        raise click.UsageError("--rating and --clear-rating are mutually exclusive.")
    if all(value is None for value in (status, rating, notes, favorite)) and not clear_rating:
        raise click.UsageError("Nothing to change; pass at least one option.")

    with open_store(app, db_path, remote_url) as store:
        record = store.get(isbn)
        if record is None:
            console.print(f"[red]Book {isbn} not found.[/red]")
            raise SystemExit(1)

        if status is not None:
            store.set_status(isbn, status)
        if rating is not None or clear_rating:
            store.set_rating(isbn, rating)
        if notes is not None:
            store.set_notes(isbn, notes)
        if favorite is not None:
            store.set_favorite(isbn, favorite)

    console.print(f"Updated [bold]{record.title}[/bold].")
