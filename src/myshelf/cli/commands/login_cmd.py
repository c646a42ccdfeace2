# ABOUTME: The `myshelf login` and `myshelf logout` commands for the shared remote library.
# ABOUTME: Exchanges credentials for a bearer token stored beside the settings file.

import click
from rich.console import Console

from myshelf.cli.context import AppContext
from myshelf.cli.options import remote_option
from myshelf.http import FetchError, ShelfHttpClient
from myshelf.remote.auth import AuthError
from myshelf.remote.auth import login as remote_login

console = Console()


@click.command("login")
@remote_option
@click.option("-u", "--username", prompt=True, help="Account name on the server.")
@click.option("-p", "--password", prompt=True, hide_input=True, help="Account password.")
@click.pass_obj
def login(app: AppContext, remote_url: str | None, username: str, password: str) -> None:
    """Log in to a shared MyShelf server."""
    base_url = app.remote_url(remote_url)
    if not base_url:
        raise click.UsageError("No server configured; pass --remote or set remote_url.")

    http = ShelfHttpClient(max_retries=0)
    try:
        remote_login(http, base_url, username, password, app.tokens)
    except AuthError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    except FetchError as exc:
        console.print(f"[red]Login failed:[/red] {exc}")
        raise SystemExit(1) from exc
    finally:
        http.close()

    console.print(f"Logged in to [bold]{base_url}[/bold] as {username}.")


@click.command("logout")
@click.pass_obj
def logout(app: AppContext) -> None:
    """Forget the stored server credentials."""
    app.tokens.clear()
    console.print("Logged out.")
