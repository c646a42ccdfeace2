# ABOUTME: Integration tests for the scan pipeline from decoded text to a persisted library.
# ABOUTME: Real resolver chain over a fake httpx transport emulating Open Library and OpenRouter.

import json
from pathlib import Path

import httpx

from myshelf.core.scanner import ScanOutcome, ScanSession
from myshelf.db.connection import open_database
from myshelf.db.kv import SqliteBackend
from myshelf.http import ShelfHttpClient
from myshelf.library.store import LibraryStore
from myshelf.metadata.resolver import build_resolver
from tests.fixtures.books import HOBBIT, NAME_OF_THE_ROSE, ODYSSEY
from tests.fixtures.fakes import FakeClock
from tests.fixtures.llm_responses import HOBBIT_COMPLETION
from tests.fixtures.openlibrary_responses import BOOKS_RESPONSE_FULL


class BookServiceTransport(httpx.BaseTransport):
    """Emulates the Books API (knows one ISBN) and OpenRouter (knows the Hobbit)."""

    def __init__(self) -> None:
        self.paths: list[str] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.paths.append(request.url.path)
        if request.url.path == "/api/books":
            key = request.url.params["bibkeys"]
            found = {k: v for k, v in BOOKS_RESPONSE_FULL.items() if k == key}
            return httpx.Response(200, json=found)
        if request.url.path == "/api/v1/chat/completions":
            prompt = json.loads(request.content)["messages"][0]["content"]
            if HOBBIT in prompt:
                return httpx.Response(200, json=HOBBIT_COMPLETION)
            return httpx.Response(200, json={"choices": [{"message": {"content": "unknown"}}]})
        return httpx.Response(404)


def _setup(tmp_path: Path, api_key: str | None):
    transport = BookServiceTransport()
    http = ShelfHttpClient(min_request_interval=0.0, retry_delay=0.0, transport=transport)
    conn = open_database(tmp_path / "library.db")
    store = LibraryStore.open(SqliteBackend(conn))
    clock = FakeClock()
    session = ScanSession(build_resolver(http, api_key=api_key), store, clock=clock)
    return session, store, conn, clock, transport


class TestScanPipeline:
    def test_open_library_hit_is_persisted(self, tmp_path: Path) -> None:
        session, _, conn, _, transport = _setup(tmp_path, api_key=None)
        assert session.handle_decode(NAME_OF_THE_ROSE).outcome is ScanOutcome.ADDED
        assert transport.paths == ["/api/books"]
        conn.close()

        conn = open_database(tmp_path / "library.db")
        record = LibraryStore.open(SqliteBackend(conn)).get(NAME_OF_THE_ROSE)
        conn.close()
        assert record is not None
        assert record.title == "The Name of the Rose"
        assert record.source == "openlibrary"

    def test_llm_fallback_after_open_library_miss(self, tmp_path: Path) -> None:
        session, store, conn, _, transport = _setup(tmp_path, api_key="sk-test")
        assert session.handle_decode(HOBBIT).outcome is ScanOutcome.ADDED
        assert transport.paths == ["/api/books", "/api/v1/chat/completions"]
        record = store.get(HOBBIT)
        assert record is not None
        assert record.source == "llm"
        assert record.series == "Middle-earth"
        conn.close()

    def test_every_source_misses(self, tmp_path: Path) -> None:
        session, store, conn, _, transport = _setup(tmp_path, api_key="sk-test")
        assert session.handle_decode(ODYSSEY).outcome is ScanOutcome.NOT_FOUND
        # Open Library once, then each of the two default models.
        assert len(transport.paths) == 3
        assert len(store) == 0
        conn.close()

    def test_batch_of_scans(self, tmp_path: Path) -> None:
        session, store, conn, clock, transport = _setup(tmp_path, api_key="sk-test")
        for code in [NAME_OF_THE_ROSE, NAME_OF_THE_ROSE, "not-a-code"]:
            session.handle_decode(code)
        clock.advance(2.0)
        session.handle_decode(HOBBIT)
        clock.advance(2.0)
        assert session.handle_decode(NAME_OF_THE_ROSE).outcome is ScanOutcome.ALREADY_OWNED

        assert [b.isbn for b in store] == [HOBBIT, NAME_OF_THE_ROSE]
        counts = session.counts
        assert counts[ScanOutcome.ADDED] == 2
        assert counts[ScanOutcome.SUPPRESSED] == 1
        assert counts[ScanOutcome.INVALID] == 1
        assert transport.paths.count("/api/books") == 2
        conn.close()
