# ABOUTME: Public API for the in-memory book library and its record types.
# ABOUTME: Exports BookRecord, ReadingStatus, LibraryStore and the backend protocol.

from myshelf.library.store import LibraryBackend, LibraryStore
from myshelf.library.types import BookRecord, ReadingStatus, create_manual_book

__all__ = [
    "BookRecord",
    "LibraryBackend",
    "LibraryStore",
    "ReadingStatus",
    "create_manual_book",
]
