# ABOUTME: Per-invocation CLI context: settings, credentials, resolver and library opening.
# ABOUTME: Chooses the local SQLite or remote backend and maps backend errors to exit codes.

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from myshelf.db.connection import open_database
from myshelf.db.kv import SqliteBackend
from myshelf.http import HttpClient, ShelfHttpClient
from myshelf.library.store import LibraryStore
from myshelf.metadata.resolver import MetadataResolver, build_resolver
from myshelf.remote.auth import AuthError, TokenStore
from myshelf.remote.backend import BackendError, RemoteBackend
from myshelf.settings import Settings

console = Console()


@dataclass
class AppContext:
    """Shared state for one CLI invocation, stored on click's ctx.obj."""

    settings: Settings
    home: Path

    @property
    def tokens(self) -> TokenStore:
        return TokenStore(self.home / "auth-token")

    def remote_url(self, override: str | None) -> str:
        return override or self.settings.remote_url

    def resolver(self, http: HttpClient, api_key: str | None) -> MetadataResolver:
        return build_resolver(http, api_key=api_key, models=self.settings.models)


@contextmanager
def open_resolver(app: AppContext, api_key: str | None) -> Iterator[MetadataResolver]:
    """Build the metadata resolver over an HTTP client that is closed on exit."""
    http = ShelfHttpClient()
    try:
        yield app.resolver(http, api_key)
    finally:
        http.close()


@contextmanager
def open_store(
    app: AppContext, db_path: Path | None, remote_url: str | None
) -> Iterator[LibraryStore]:
    """Open the library from the remote server or the local database.

    Prints a message and exits with status 1 when the remote rejects the
    stored credentials (which are cleared) or cannot be reached.
    """
    base_url = app.remote_url(remote_url)
    try:
        if base_url:
            token = app.tokens.get()
            if token is None:
                console.print("[red]Not logged in.[/red] Run [bold]myshelf login[/bold] first.")
                raise SystemExit(1)
            http = ShelfHttpClient(token=token)
            try:
                yield LibraryStore.open(RemoteBackend(http, base_url, app.tokens))
            finally:
                http.close()
        else:
            conn = open_database(db_path or app.settings.resolve_db_path(app.home))
            try:
                yield LibraryStore.open(SqliteBackend(conn))
            finally:
                conn.close()
    except AuthError as exc:
        console.print(f"[red]{exc}[/red] Run [bold]myshelf login[/bold] again.")
        raise SystemExit(1) from exc
    except BackendError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
