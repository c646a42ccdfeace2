# ABOUTME: Browsing helpers over a list of BookRecords: filter, search, sort, and stats.
# ABOUTME: Pure functions shared by the `ls` and `stats` commands.

from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from myshelf.library.types import BookRecord, ReadingStatus

SORT_KEYS = ("dateAdded", "title", "author", "rating")
FAVORITES = "favorites"
ALL = "all"

_TOP_GENRES = 6
_TOP_AUTHORS = 5


def filter_books(
    books: list[BookRecord],
    *,
    status: ReadingStatus | str = ALL,
    search: str | None = None,
) -> list[BookRecord]:
    """Filter by reading status (or "favorites"/"all") and a search term.

    The search is a case-insensitive substring match on the title or any
    author.
    """
    result = list(books)
    if status == FAVORITES:
        result = [b for b in result if b.favorite]
    elif status != ALL:
        wanted = ReadingStatus(status)
        result = [b for b in result if b.reading_status == wanted]

    if search:
        term = search.lower()
        result = [
            b
            for b in result
            if term in b.title.lower() or any(term in a.lower() for a in b.authors)
        ]
    return result


def _parse_timestamp(value: str) -> float:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp()
    except ValueError:
        return 0.0


_SORT_KEY_FUNCS: dict[str, Callable[[BookRecord], Any]] = {
    "dateAdded": lambda b: _parse_timestamp(b.date_added),
    "title": lambda b: b.title,
    "author": lambda b: b.authors[0] if b.authors else "",
    "rating": lambda b: b.rating or 0,
}


def sort_books(
    books: list[BookRecord], *, key: str = "dateAdded", ascending: bool = False
) -> list[BookRecord]:
    """Sort by date added (default, newest first), title, first author, or rating.

    Unrated books sort as 0. The sort is stable.

    Raises:
        ValueError: On an unknown sort key.
    """
    sort_key = _SORT_KEY_FUNCS.get(key)
    if sort_key is None:
        raise ValueError(f"Unknown sort key {key!r}; expected one of {', '.join(SORT_KEYS)}")
    return sorted(books, key=sort_key, reverse=not ascending)


@dataclass
class LibraryStats:
    """Aggregate numbers for the stats view."""

    total: int = 0
    by_status: dict[ReadingStatus, int] = field(default_factory=dict)
    favorites: int = 0
    top_genres: list[tuple[str, int]] = field(default_factory=list)
    top_authors: list[tuple[str, int]] = field(default_factory=list)
    rating_counts: list[int] = field(default_factory=lambda: [0] * 5)
    monthly_activity: dict[str, int] = field(default_factory=dict)

    @property
    def read_percent(self) -> int:
        if not self.total:
            return 0
        return round(self.by_status.get(ReadingStatus.READ, 0) / self.total * 100)


def compute_stats(books: list[BookRecord]) -> LibraryStats:
    """Count books by status, genre, author, rating and the month they were added."""
    status_counts = Counter(b.reading_status for b in books)
    genre_counts = Counter(g for b in books for g in b.genres)
    author_counts = Counter(a for b in books for a in b.authors)

    rating_counts = [0] * 5
    for book in books:
        if book.rating:
            rating_counts[book.rating - 1] += 1

    monthly: Counter[str] = Counter()
    for book in books:
        month = book.date_added[:7]
        if len(month) == 7:
            monthly[month] += 1

    return LibraryStats(
        total=len(books),
        by_status={status: status_counts.get(status, 0) for status in ReadingStatus},
        favorites=sum(1 for b in books if b.favorite),
        top_genres=genre_counts.most_common(_TOP_GENRES),
        top_authors=author_counts.most_common(_TOP_AUTHORS),
        rating_counts=rating_counts,
        monthly_activity=dict(sorted(monthly.items())),
    )
