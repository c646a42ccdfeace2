# ABOUTME: LibraryBackend that stores the library on the shared remote server.
# ABOUTME: Speaks the server's GET/POST/DELETE /api/library protocol; a 401 drops the stored token.

import logging
from collections.abc import Callable
from typing import Any

from myshelf.http import FetchError, HttpClient, UnauthorizedError
from myshelf.remote.auth import AuthError, TokenStore

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """Raised when the remote library cannot be read or written."""


def new_books_on_top(
    previous: list[dict[str, Any]] | None, books: list[dict[str, Any]]
) -> list[dict[str, Any]] | None:
    """Return the books prepended to `previous` to give `books`.

    Returns None when `books` is not `previous` with new entries on top
    (something was edited, removed or reordered) or `previous` is unknown.
    """
    if previous is None:
        return None
    added = len(books) - len(previous)
    if added < 0 or books[added:] != previous:
        return None
    return books[:added]


class RemoteBackend:
    """Get-all/set-all persistence against `<base_url>/api/library`.

    The server only knows three requests: GET returns the array, POST
    prepends one book (ignoring ISBNs it already has) and DELETE empties the
    library. `save` compares against the last array it loaded or wrote:
    pure additions are POSTed oldest first; any other change clears the
    library and POSTs every book back.

    The http_client must already carry the bearer token. Any 401 clears the
    stored token and raises AuthError so the caller can send the user back
    to `myshelf login`.
    """

    def __init__(self, http_client: HttpClient, base_url: str, tokens: TokenStore) -> None:
        self._http = http_client
        self._url = f"{base_url.rstrip('/')}/api/library"
        self._tokens = tokens
        self._snapshot: list[dict[str, Any]] | None = None

    def load(self) -> list[dict[str, Any]]:
        data = self._call("fetch", self._http.get, self._url)
        if data is None:
            data = []
        if not isinstance(data, list):
            raise BackendError("Remote library is not a JSON array")
        self._snapshot = list(data)
        return data

    def save(self, books: list[dict[str, Any]]) -> None:
        books = list(books)
        pending = new_books_on_top(self._snapshot, books)
        # Unknown until this write completes.
        self._snapshot = None

        if pending is None:
            logger.info("Rewriting remote library with %d book(s)", len(books))
            self._call("save", self._http.delete, self._url)
            pending = books
        # Each POST lands on top, so the newest book goes last.
        for book in reversed(pending):
            self._call("save", self._http.post, self._url, json=book)
        self._snapshot = books

    def _call(self, action: str, request: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        try:
            return request(*args, **kwargs)
        except UnauthorizedError as exc:
            logger.warning("Remote library answered 401; clearing stored token")
            self._tokens.clear()
            raise AuthError("Session expired; please log in again") from exc
        except FetchError as exc:
            raise BackendError(f"Failed to {action} library: {exc}") from exc
