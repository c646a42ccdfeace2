# ABOUTME: Add-by-ISBN pipeline for typed or listed ISBNs (the non-camera path).
# ABOUTME: Validates, skips owned books, resolves metadata, and records a summary.

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

from myshelf.isbn import clean_isbn, is_valid_isbn
from myshelf.library.store import LibraryStore
from myshelf.library.types import BookRecord
from myshelf.metadata.resolver import MetadataResolver

logger = logging.getLogger(__name__)


class AddStatus(Enum):
    ADDED = "added"
    SKIPPED = "skipped"
    NOT_FOUND = "not_found"
    INVALID = "invalid"


@dataclass
class AddResult:
    """Result of adding a single ISBN."""

    isbn: str
    status: AddStatus
    record: BookRecord | None = None


@dataclass
class ImportResult:
    """Summary of adding a batch of ISBNs."""

    added: int = 0
    skipped: int = 0
    not_found: int = 0
    invalid: int = 0
    details: list[AddResult] = field(default_factory=list)


def add_isbn(raw: str, resolver: MetadataResolver, store: LibraryStore) -> AddResult:
    """Resolve one typed ISBN and add it to the store.

    Hyphens and spaces are stripped before validation. Books already in the
    store are skipped without a lookup.
    """
    isbn = clean_isbn(raw)
    if not is_valid_isbn(isbn):
        return AddResult(isbn, AddStatus.INVALID)

    existing = store.get(isbn)
    if existing is not None:
        return AddResult(isbn, AddStatus.SKIPPED, existing)

    record = resolver.resolve(isbn)
    if record is None:
        return AddResult(isbn, AddStatus.NOT_FOUND)

    if not store.add(record):
        return AddResult(isbn, AddStatus.SKIPPED, store.get(isbn))
    return AddResult(isbn, AddStatus.ADDED, record)


def add_isbns(
    isbns: Iterable[str],
    resolver: MetadataResolver,
    store: LibraryStore,
    *,
    on_result: Callable[[AddResult], None] | None = None,
) -> ImportResult:
    """Add a list of ISBNs one after another, counting each outcome.

    Args:
        isbns: Raw ISBN strings; blank entries are ignored.
        resolver: Metadata resolver used for every lookup.
        store: The library to add books to.
        on_result: Optional callback invoked after each ISBN for progress output.
    """
    result = ImportResult()
    for raw in isbns:
        if not raw.strip():
            continue
        outcome = add_isbn(raw, resolver, store)
        result.details.append(outcome)
        if outcome.status is AddStatus.ADDED:
            result.added += 1
        elif outcome.status is AddStatus.SKIPPED:
            result.skipped += 1
        elif outcome.status is AddStatus.NOT_FOUND:
            result.not_found += 1
        else:
            result.invalid += 1
        logger.debug("%s: %s", outcome.isbn, outcome.status.value)
        if on_result is not None:
            on_result(outcome)
    return result
