# ABOUTME: The `myshelf manual` command for entering a book by hand.
# ABOUTME: Skips metadata lookup; a synthetic ISBN is used when none is given.

from pathlib import Path

import click
from rich.console import Console

from myshelf.cli.context import AppContext, open_store
from myshelf.cli.options import db_option, remote_option
from myshelf.library.types import create_manual_book

console = Console()


def _split(value: str | None) -> list[str]:
    return [part.strip() for part in (value or "").split(",") if part.strip()]


@click.command("manual")
@click.option("--title", required=True, help="Book title.")
@click.option("--authors", default=None, help="Comma-separated author names.")
@click.option("--genres", default=None, help="Comma-separated genres.")
@click.option("--isbn", default=None, help="ISBN, if the book has one.")
@click.option("--description", default=None, help="Short description.")
@click.option("--cover-url", default=None, help="Cover image URL.")
@db_option
@remote_option
@click.pass_obj
def manual(
    app: AppContext,
    title: str,
    authors: str | None,
    genres: str | None,
    isbn: str | None,
    description: str | None,
    cover_url: str | None,
    db_path: Path | None,
    remote_url: str | None,
) -> None:
    """Add a book without looking it up."""
    try:
        record = create_manual_book(
            title,
            isbn=isbn,
            authors=_split(authors),
            genres=_split(genres),
            description=description,
            cover_url=cover_url,
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--title") from exc

    with open_store(app, db_path, remote_url) as store:
        if not store.add(record):
            console.print(f"[yellow]Already in your shelf:[/yellow] {record.isbn}")
            return

    console.print(f"[green]Added:[/green] {record.title} [dim]({record.isbn})[/dim]")
