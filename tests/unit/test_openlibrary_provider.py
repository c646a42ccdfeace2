# ABOUTME: Unit tests for OpenLibraryProvider.
# ABOUTME: Uses a FakeHttpClient to test the Books API request, parsing, and error handling.

import logging

import pytest

from myshelf.http import FetchError
from myshelf.metadata.openlibrary import OpenLibraryProvider
from myshelf.metadata.provider import MetadataProvider
from tests.fixtures.books import NAME_OF_THE_ROSE
from tests.fixtures.fakes import FakeHttpClient
from tests.fixtures.openlibrary_responses import BOOKS_RESPONSE_EMPTY, BOOKS_RESPONSE_FULL

STAMP = "2024-05-01T12:00:00.000Z"


def _provider(client: FakeHttpClient) -> OpenLibraryProvider:
    return OpenLibraryProvider(client, timestamp=lambda: STAMP)


class TestOpenLibraryProviderProtocol:
    """Tests that OpenLibraryProvider satisfies MetadataProvider."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(_provider(FakeHttpClient()), MetadataProvider)

    def test_name_property(self) -> None:
        assert _provider(FakeHttpClient()).name == "openlibrary"


class TestLookup:
    """Tests for ISBN lookup."""

    def test_lookup_returns_record(self) -> None:
        client = FakeHttpClient({"/api/books": BOOKS_RESPONSE_FULL})
        record = _provider(client).lookup(NAME_OF_THE_ROSE)
        assert record is not None
        assert record.title == "The Name of the Rose"
        assert record.date_added == STAMP

    def test_request_uses_books_api_data_format(self) -> None:
        client = FakeHttpClient({"/api/books": BOOKS_RESPONSE_FULL})
        _provider(client).lookup(NAME_OF_THE_ROSE)
        method, url, params = client.requests[0]
        assert method == "GET"
        assert url == "https://openlibrary.org/api/books"
        assert params == {
            "bibkeys": f"ISBN:{NAME_OF_THE_ROSE}",
            "format": "json",
            "jscmd": "data",
        }

    def test_unknown_isbn_returns_none(self) -> None:
        client = FakeHttpClient({"/api/books": BOOKS_RESPONSE_EMPTY})
        assert _provider(client).lookup(NAME_OF_THE_ROSE) is None

    def test_fetch_error_returns_none_and_logs(self, caplog: pytest.LogCaptureFixture) -> None:
        client = FakeHttpClient({"/api/books": FetchError("HTTP 503", status_code=503)})
        with caplog.at_level(logging.WARNING, logger="myshelf.metadata.openlibrary"):
            assert _provider(client).lookup(NAME_OF_THE_ROSE) is None
        assert "Open Library lookup failed" in caplog.text
