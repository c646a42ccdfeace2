# ABOUTME: Unit tests for the add-by-ISBN pipeline.
# ABOUTME: Verifies cleaning, validation, skip-if-owned, and batch summaries.

from myshelf.core.lookup import AddResult, AddStatus, add_isbn, add_isbns
from myshelf.library.store import LibraryStore
from myshelf.library.types import BookRecord
from tests.fixtures.books import BAD_CHECKSUM, HOBBIT, NAME_OF_THE_ROSE, ODYSSEY
from tests.fixtures.fakes import FakeResolver


class TestAddIsbn:
    def test_adds_resolved_book(self) -> None:
        hobbit = BookRecord(isbn=HOBBIT, title="The Hobbit")
        store = LibraryStore()
        result = add_isbn(HOBBIT, FakeResolver({HOBBIT: hobbit}), store)
        assert result.status is AddStatus.ADDED
        assert result.record is hobbit
        assert HOBBIT in store

    def test_cleans_hyphenated_input(self) -> None:
        resolver = FakeResolver()
        result = add_isbn("978-0-547-92822-7", resolver, LibraryStore())
        assert result.isbn == HOBBIT
        assert resolver.calls == [HOBBIT]

    def test_invalid_isbn_not_looked_up(self) -> None:
        resolver = FakeResolver()
        result = add_isbn(BAD_CHECKSUM, resolver, LibraryStore())
        assert result.status is AddStatus.INVALID
        assert resolver.calls == []

    def test_owned_book_skipped_without_lookup(self, rose: BookRecord) -> None:
        resolver = FakeResolver()
        result = add_isbn(NAME_OF_THE_ROSE, resolver, LibraryStore([rose]))
        assert result.status is AddStatus.SKIPPED
        assert result.record is rose
        assert resolver.calls == []

    def test_not_found(self) -> None:
        result = add_isbn(ODYSSEY, FakeResolver(), LibraryStore())
        assert result.status is AddStatus.NOT_FOUND
        assert result.record is None


class TestAddIsbns:
    def test_summary_counts(self, rose: BookRecord) -> None:
        hobbit = BookRecord(isbn=HOBBIT, title="The Hobbit")
        store = LibraryStore([rose])
        seen: list[AddResult] = []
        result = add_isbns(
            [HOBBIT, NAME_OF_THE_ROSE, ODYSSEY, "nope", "  "],
            FakeResolver({HOBBIT: hobbit}),
            store,
            on_result=seen.append,
        )
        assert (result.added, result.skipped, result.not_found, result.invalid) == (1, 1, 1, 1)
        assert len(result.details) == 4
        assert [r.isbn for r in seen] == [HOBBIT, NAME_OF_THE_ROSE, ODYSSEY, "nope"]

    def test_repeated_isbn_skipped_second_time(self) -> None:
        hobbit = BookRecord(isbn=HOBBIT, title="The Hobbit")
        resolver = FakeResolver({HOBBIT: hobbit})
        result = add_isbns([HOBBIT, HOBBIT], resolver, LibraryStore())
        assert (result.added, result.skipped) == (1, 1)
        assert resolver.calls == [HOBBIT]
