# ABOUTME: The `myshelf add` command for adding books by typed ISBN.
# ABOUTME: Resolves each ISBN (Open Library, then the LLM fallback) and catalogs it.

from pathlib import Path

import click
from rich.console import Console

from myshelf.cli.context import AppContext, open_resolver, open_store
from myshelf.cli.options import api_key_option, db_option, remote_option
from myshelf.core.lookup import AddResult, AddStatus, add_isbns

console = Console()


def _report(result: AddResult) -> None:
    if result.status is AddStatus.ADDED and result.record:
        console.print(f"[green]Added:[/green] {result.record.title} [dim]({result.isbn})[/dim]")
    elif result.status is AddStatus.SKIPPED and result.record:
        console.print(f"[yellow]Already in your shelf:[/yellow] {result.record.title}")
    elif result.status is AddStatus.NOT_FOUND:
        console.print(f"[red]Book not found:[/red] {result.isbn}")
    else:
        console.print(f"[red]Not a valid ISBN-13:[/red] {result.isbn}")


@click.command("add")
@click.argument("isbns", nargs=-1)
@click.option(
    "-f",
    "--file",
    "isbn_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read ISBNs from a file, one per line.",
)
@db_option
@remote_option
@api_key_option
@click.pass_obj
def add(
    app: AppContext,
    isbns: tuple[str, ...],
    isbn_file: Path | None,
    db_path: Path | None,
    remote_url: str | None,
    api_key: str | None,
) -> None:
    """Look up one or more ISBNs and add them to the library."""
    pending = list(isbns)
    if isbn_file is not None:
        pending.extend(isbn_file.read_text(encoding="utf-8").splitlines())
    if not any(isbn.strip() for isbn in pending):
        raise click.UsageError("Give at least one ISBN or --file.")

    with open_resolver(app, api_key) as resolver, open_store(app, db_path, remote_url) as store:
        result = add_isbns(pending, resolver, store, on_result=_report)

    parts = []
    if result.added:
        parts.append(f"[green]{result.added} added[/green]")
    if result.skipped:
        parts.append(f"[yellow]{result.skipped} skipped[/yellow]")
    if result.not_found:
        parts.append(f"[red]{result.not_found} not found[/red]")
    if result.invalid:
        parts.append(f"[red]{result.invalid} invalid[/red]")
    console.print(", ".join(parts))

    if not result.added and not result.skipped:
        raise SystemExit(1)
