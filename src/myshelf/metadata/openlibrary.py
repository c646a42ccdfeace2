# ABOUTME: Open Library metadata provider implementation.
# ABOUTME: Looks up a single ISBN via the Books API and returns a normalized BookRecord.

import logging
from collections.abc import Callable

from myshelf.http import FetchError, HttpClient
from myshelf.library.types import BookRecord, utc_timestamp
from myshelf.metadata.openlibrary_parser import parse_books_response

logger = logging.getLogger(__name__)

_OL_BASE = "https://openlibrary.org"


class OpenLibraryProvider:
    """Metadata provider backed by the Open Library Books API.

    This is the primary source: free, keyless and fast. Uses a
    dependency-injected HttpClient for testability.
    """

    def __init__(
        self,
        http_client: HttpClient,
        *,
        timestamp: Callable[[], str] = utc_timestamp,
    ) -> None:
        self._http = http_client
        self._timestamp = timestamp

    @property
    def name(self) -> str:
        return "openlibrary"

    def lookup(self, isbn: str) -> BookRecord | None:
        """Fetch and normalize the Books API entry for an ISBN.

        Returns None when Open Library has no entry or the request fails.
        """
        params = {"bibkeys": f"ISBN:{isbn}", "format": "json", "jscmd": "data"}
        try:
            data = self._http.get(f"{_OL_BASE}/api/books", params=params)
        except FetchError as exc:
            logger.warning("Open Library lookup failed for %s: %s", isbn, exc)
            return None

        record = parse_books_response(data, isbn, date_added=self._timestamp())
        if record is None:
            logger.info("Open Library has no entry for %s", isbn)
        return record
