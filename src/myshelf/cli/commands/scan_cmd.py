# ABOUTME: The `myshelf scan` command for batch-scanning barcodes into the library.
# ABOUTME: Reads decoded barcode text line by line and feeds it through a ScanSession.

import sys
import time
from pathlib import Path

import click
from rich.console import Console

from myshelf.cli.context import AppContext, open_resolver, open_store
from myshelf.cli.options import api_key_option, db_option, remote_option
from myshelf.core.scanner import ScanOutcome, ScanResult, ScanSession, ScanState

console = Console()

# Seconds between checks while a lookup cools down.
IDLE_POLL_INTERVAL = 0.05


def _announce(result: ScanResult) -> None:
    """Print the toast-style message for a user-visible scan outcome."""
    title = result.record.title if result.record else result.code
    if result.outcome is ScanOutcome.ADDED:
        console.print(f"[green]Added:[/green] {title}")
    elif result.outcome is ScanOutcome.ALREADY_OWNED:
        console.print(f"[yellow]Already in your shelf:[/yellow] {title}")
    elif result.outcome is ScanOutcome.NOT_FOUND:
        console.print(f"[red]Book not found:[/red] {result.code}")
    elif result.outcome is ScanOutcome.ERROR:
        console.print(f"[red]Error looking up {result.code}:[/red] {result.error}")


def _wait_until_idle(session: ScanSession) -> None:
    """Block until the session accepts a new code.

    A line-fed reader sends each barcode once, so a code read during the
    cooldown would otherwise be dropped as BUSY.
    """
    while session.state is not ScanState.IDLE:
        time.sleep(IDLE_POLL_INTERVAL)


@click.command("scan")
@db_option
@remote_option
@api_key_option
@click.option(
    "--cooldown",
    type=click.FloatRange(min=0.0),
    default=None,
    help="Seconds to pause after each lookup (default from settings).",
)
@click.pass_obj
def scan(
    app: AppContext,
    db_path: Path | None,
    remote_url: str | None,
    api_key: str | None,
    cooldown: float | None,
) -> None:
    """Scan ISBN barcodes from a reader that types one code per line.

    Point a USB or Bluetooth barcode scanner at this terminal (or pipe
    decoded codes in) and finish with Ctrl-D. Each line waits for the
    previous lookup's cooldown, so no code is lost.
    """
    with (
        open_resolver(app, api_key) as resolver,
        open_store(app, db_path, remote_url) as store,
    ):
        session = ScanSession(
            resolver,
            store,
            cooldown=app.settings.cooldown if cooldown is None else cooldown,
            duplicate_cooldown=app.settings.duplicate_cooldown,
            on_result=_announce,
        )
        console.print("[dim]Scanning; press Ctrl-D when done.[/dim]")

        try:
            for line in sys.stdin:
                code = line.strip()
                if code:
                    _wait_until_idle(session)
                    session.handle_decode(code)
        except KeyboardInterrupt:
            pass
        finally:
            session.stop()

        counts = session.counts
        parts = []
        if counts[ScanOutcome.ADDED]:
            parts.append(f"[green]{counts[ScanOutcome.ADDED]} added[/green]")
        if counts[ScanOutcome.ALREADY_OWNED]:
            parts.append(f"[yellow]{counts[ScanOutcome.ALREADY_OWNED]} already owned[/yellow]")
        failed = counts[ScanOutcome.NOT_FOUND] + counts[ScanOutcome.ERROR]
        if failed:
            parts.append(f"[red]{failed} not found[/red]")
        if counts[ScanOutcome.BUSY]:
            parts.append(f"[red]{counts[ScanOutcome.BUSY]} dropped while busy[/red]")
        console.print(", ".join(parts) if parts else "[yellow]No books scanned.[/yellow]")
