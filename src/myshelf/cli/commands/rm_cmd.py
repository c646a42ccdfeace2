# ABOUTME: The `myshelf rm` and `myshelf clear` commands for removing books.
# ABOUTME: Deletes a single book by ISBN, or empties the whole library after confirmation.

from pathlib import Path

import click
from rich.console import Console

from myshelf.cli.context import AppContext, open_store
from myshelf.cli.options import db_option, remote_option

console = Console()


@click.command("rm")
@click.argument("isbn")
@db_option
@remote_option
@click.pass_obj
def rm(app: AppContext, isbn: str, db_path: Path | None, remote_url: str | None) -> None:
    """Remove a book from the library."""
    with open_store(app, db_path, remote_url) as store:
        record = store.get(isbn)
        if record is None or not store.delete(isbn):
            console.print(f"[red]Book {isbn} not found.[/red]")
            raise SystemExit(1)

    console.print(f"Removed [bold]{record.title}[/bold].")


@click.command("clear")
@click.confirmation_option(prompt="Delete every book in the library?")
@db_option
@remote_option
@click.pass_obj
def clear(app: AppContext, db_path: Path | None, remote_url: str | None) -> None:
    """Remove all books from the library."""
    with open_store(app, db_path, remote_url) as store:
        count = len(store)
        store.clear()

    console.print(f"Removed {count} book(s).")
