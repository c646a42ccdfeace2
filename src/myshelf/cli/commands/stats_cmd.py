# ABOUTME: The `myshelf stats` command for library statistics.
# ABOUTME: Prints counts by status, top genres and authors, and the rating spread.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from myshelf.cli.context import AppContext, open_store
from myshelf.cli.options import db_option, remote_option
from myshelf.library.query import compute_stats

console = Console()


@click.command("stats")
@db_option
@remote_option
@click.pass_obj
def stats(app: AppContext, db_path: Path | None, remote_url: str | None) -> None:
    """Show reading statistics for the library."""
    with open_store(app, db_path, remote_url) as store:
        summary = compute_stats(store.records())

    if not summary.total:
        console.print("[yellow]No books in the library.[/yellow]")
        return

    console.print(
        f"[bold]{summary.total}[/bold] books, {summary.read_percent}% read, "
        f"{summary.favorites} favorite(s)\n"
    )

    status_table = Table(title="By status")
    status_table.add_column("Status")
    status_table.add_column("Books", justify="right")
    for status, count in summary.by_status.items():
        status_table.add_row(status.value, str(count))
    console.print(status_table)

    if summary.top_genres:
        genre_table = Table(title="Top genres")
        genre_table.add_column("Genre")
        genre_table.add_column("Books", justify="right")
        for genre, count in summary.top_genres:
            genre_table.add_row(genre, str(count))
        console.print(genre_table)

    if summary.top_authors:
        author_table = Table(title="Top authors")
        author_table.add_column("Author")
        author_table.add_column("Books", justify="right")
        for author, count in summary.top_authors:
            author_table.add_row(author, str(count))
        console.print(author_table)

    if any(summary.rating_counts):
        rating_table = Table(title="Ratings")
        rating_table.add_column("Stars")
        rating_table.add_column("Books", justify="right")
        for stars, count in enumerate(summary.rating_counts, start=1):
            rating_table.add_row("*" * stars, str(count))
        console.print(rating_table)

    if summary.monthly_activity:
        activity = ", ".join(f"{month}: {n}" for month, n in summary.monthly_activity.items())
        console.print(f"\n[dim]Added per month:[/dim] {activity}")
