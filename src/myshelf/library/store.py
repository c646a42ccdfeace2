# ABOUTME: In-memory library of BookRecords with ISBN dedup and newest-first ordering.
# ABOUTME: Persists the whole collection through a get-all/set-all LibraryBackend on every change.

import logging
from collections.abc import Iterable, Iterator
from dataclasses import replace
from typing import Any, Protocol, runtime_checkable

from myshelf.library.types import BookRecord, ReadingStatus, validate_rating

logger = logging.getLogger(__name__)


@runtime_checkable
class LibraryBackend(Protocol):
    """Persistence medium for a library: read everything, write everything.

    Writes must be idempotent; saving the same list twice is harmless.
    """

    def load(self) -> list[dict[str, Any]]: ...

    def save(self, books: list[dict[str, Any]]) -> None: ...


class LibraryStore:
    """The user's book collection.

    All operations are synchronous over an in-memory list kept newest-first.
    When a backend is attached, the full collection is written back after
    every mutation that changed something.
    """

    def __init__(
        self,
        records: list[BookRecord] | None = None,
        *,
        backend: LibraryBackend | None = None,
    ) -> None:
        self._records: list[BookRecord] = []
        self._backend = backend
        for record in records or []:
            if self.get(record.isbn) is None:
                self._records.append(record)

    @classmethod
    def open(cls, backend: LibraryBackend) -> "LibraryStore":
        """Load a store from a backend, migrating stored entries to full records."""
        records = [BookRecord.from_dict(item) for item in backend.load()]
        logger.debug("Loaded %d record(s) from %s", len(records), type(backend).__name__)
        return cls(records, backend=backend)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[BookRecord]:
        return iter(list(self._records))

    def __contains__(self, isbn: object) -> bool:
        return any(record.isbn == isbn for record in self._records)

    def records(self) -> list[BookRecord]:
        """All records, newest first."""
        return list(self._records)

    def isbns(self) -> set[str]:
        return {record.isbn for record in self._records}

    def get(self, isbn: str) -> BookRecord | None:
        for record in self._records:
            if record.isbn == isbn:
                return record
        return None

    def add(self, record: BookRecord) -> bool:
        """Insert a record at the front. No-op if its ISBN is already present.

        Returns:
            True if the record was added, False if it was a duplicate.
        """
        return bool(self.add_many([record]))

    def add_many(self, records: Iterable[BookRecord]) -> list[BookRecord]:
        """Insert records at the front in order, saving once.

        Each record lands on top of the previous one, so the last record
        given ends up newest. ISBNs already present (or repeated within
        `records`) are skipped.

        Returns:
            The records that were added.
        """
        added: list[BookRecord] = []
        seen = self.isbns()
        for record in records:
            if record.isbn in seen:
                logger.debug("Skipping duplicate %s", record.isbn)
                continue
            seen.add(record.isbn)
            added.append(record)
        if added:
            self._commit(added[::-1] + self._records)
        return added

    def update(self, record: BookRecord) -> bool:
        """Replace the record with the same ISBN. No-op if there is none.

        The stored date_added always survives the replacement.
        """
        for index, existing in enumerate(self._records):
            if existing.isbn == record.isbn:
                records = list(self._records)
                records[index] = replace(record, date_added=existing.date_added)
                self._commit(records)
                return True
        return False

    def delete(self, isbn: str) -> bool:
        records = [r for r in self._records if r.isbn != isbn]
        if len(records) == len(self._records):
            return False
        self._commit(records)
        return True

    def clear(self) -> None:
        self._commit([])

    # --- Edit helpers ---

    def set_status(self, isbn: str, status: ReadingStatus | str) -> bool:
        return self._edit(isbn, reading_status=ReadingStatus(status))

    def set_rating(self, isbn: str, rating: int | None) -> bool:
        """Set or clear (None) a 1-5 star rating.

        Raises:
            ValueError: If the rating is outside 1-5.
        """
        validate_rating(rating)
        return self._edit(isbn, rating=rating)

    def set_notes(self, isbn: str, notes: str) -> bool:
        return self._edit(isbn, notes=notes)

    def set_favorite(self, isbn: str, favorite: bool) -> bool:
        return self._edit(isbn, favorite=favorite)

    def _edit(self, isbn: str, **changes: Any) -> bool:
        existing = self.get(isbn)
        if existing is None:
            return False
        return self.update(replace(existing, **changes))

    def _commit(self, records: list[BookRecord]) -> None:
        """Save `records` through the backend, then make them current.

        A failed save leaves the in-memory library unchanged.
        """
        if self._backend is not None:
            self._backend.save([record.to_dict() for record in records])
        self._records = records
