# ABOUTME: The `myshelf export` command for writing the library to JSON or CSV.
# ABOUTME: Prints to stdout or writes a file named by --output.

from pathlib import Path

import click
from rich.console import Console

from myshelf.cli.context import AppContext, open_store
from myshelf.cli.options import db_option, remote_option
from myshelf.library.export import to_csv, to_json

console = Console(stderr=True)


@click.command("export")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["json", "csv"]),
    default="json",
    help="Output format (default: json).",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="File to write (default: stdout).",
)
@db_option
@remote_option
@click.pass_obj
def export(
    app: AppContext,
    fmt: str,
    output: Path | None,
    db_path: Path | None,
    remote_url: str | None,
) -> None:
    """Export the library as JSON or CSV."""
    with open_store(app, db_path, remote_url) as store:
        books = store.records()

    content = to_json(books) if fmt == "json" else to_csv(books)

    if output is None:
        click.echo(content, nl=not content.endswith("\n"))
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content if content.endswith("\n") else content + "\n", encoding="utf-8")
    console.print(f"Exported {len(books)} book(s) to {output}")
