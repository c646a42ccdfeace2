# ABOUTME: Core data structures for the book library: BookRecord and ReadingStatus.
# ABOUTME: BookRecord is the interchange format between resolvers, the store, and exporters.

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_AUTHOR = "Unknown Author"
UNCATEGORIZED = "Uncategorized"
PLACEHOLDER_COVER_URL = "https://via.placeholder.com/200x300/1a1a1c/666?text=No+Cover"
MANUAL_ISBN_PREFIX = "MANUAL-"

VALID_RATINGS = frozenset({1, 2, 3, 4, 5})


class ReadingStatus(str, Enum):
    """Where a book sits in the owner's reading queue."""

    UNREAD = "unread"
    READING = "reading"
    READ = "read"
    WISHLIST = "wishlist"


def utc_timestamp(moment: datetime | None = None) -> str:
    """Format a moment as an ISO-8601 UTC timestamp with millisecond precision.

    Matches the "2024-05-01T12:30:00.000Z" shape browsers produce, so records
    written by either side of a shared library sort identically.
    """
    moment = moment or datetime.now(timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def validate_rating(rating: int | None) -> None:
    """Raise ValueError unless rating is None or an integer from 1 to 5."""
    if rating is None:
        return
    if isinstance(rating, bool) or rating not in VALID_RATINGS:
        raise ValueError(f"rating must be between 1 and 5, got {rating!r}")


@dataclass
class BookRecord:
    """A single book in a user's library.

    `isbn` is the unique key within a LibraryStore. `date_added` is stamped
    once at creation; the store never lets an update change it.
    """

    isbn: str
    title: str
    authors: list[str] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)
    description: str = ""
    cover_url: str = ""
    page_count: int = 0
    date_added: str = field(default_factory=utc_timestamp)
    reading_status: ReadingStatus = ReadingStatus.UNREAD
    rating: int | None = None
    notes: str = ""
    favorite: bool = False
    publisher: str | None = None
    publish_year: int | None = None
    language: str | None = None
    series: str | None = None
    series_order: str | None = None
    source: str | None = None

    def __post_init__(self) -> None:
        self.reading_status = ReadingStatus(self.reading_status)
        validate_rating(self.rating)
        if self.page_count < 0:
            raise ValueError(f"page_count must be >= 0, got {self.page_count}")

    @property
    def author(self) -> str:
        """Convenience property: joined author string for display."""
        return ", ".join(self.authors)

    @property
    def is_manual(self) -> bool:
        """Whether this record was entered by hand with a synthetic ISBN."""
        return self.isbn.startswith(MANUAL_ISBN_PREFIX)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON shape shared with the web app.

        Optional fields are omitted when unset.
        """
        data: dict[str, Any] = {
            "isbn": self.isbn,
            "title": self.title,
            "authors": list(self.authors),
            "genre": list(self.genres),
            "description": self.description,
            "coverUrl": self.cover_url,
            "pageCount": self.page_count,
            "dateAdded": self.date_added,
            "readingStatus": self.reading_status.value,
            "rating": self.rating,
            "notes": self.notes,
            "favorite": self.favorite,
        }
        optional = {
            "publisher": self.publisher,
            "publishYear": self.publish_year,
            "language": self.language,
            "series": self.series,
            "seriesOrder": self.series_order,
            "source": self.source,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BookRecord":
        """Build a record from stored JSON, filling defaults for missing fields.

        Older libraries predate reading status, rating, notes and favorites;
        those get their defaults here so every loaded record is complete.
        """
        status = data.get("readingStatus") or ReadingStatus.UNREAD.value
        try:
            reading_status = ReadingStatus(status)
        except ValueError:
            reading_status = ReadingStatus.UNREAD

        rating = data.get("rating")
        if not isinstance(rating, int) or isinstance(rating, bool) or rating not in VALID_RATINGS:
            rating = None

        series_order = data.get("seriesOrder")
        if series_order is not None:
            series_order = str(series_order)

        return cls(
            isbn=str(data.get("isbn") or ""),
            title=data.get("title") or "Unknown",
            authors=list(data.get("authors") or []),
            genres=list(data.get("genre") or []),
            description=data.get("description") or "",
            cover_url=data.get("coverUrl") or "",
            page_count=max(_as_int(data.get("pageCount")), 0),
            date_added=data.get("dateAdded") or utc_timestamp(),
            reading_status=reading_status,
            rating=rating,
            notes=data.get("notes") or "",
            favorite=bool(data.get("favorite", False)),
            publisher=data.get("publisher"),
            publish_year=data.get("publishYear"),
            language=data.get("language"),
            series=data.get("series"),
            series_order=series_order,
            source=data.get("source"),
        )


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def create_manual_book(
    title: str,
    *,
    isbn: str | None = None,
    authors: list[str] | None = None,
    genres: list[str] | None = None,
    description: str | None = None,
    cover_url: str | None = None,
    date_added: str | None = None,
) -> BookRecord:
    """Create a record from user-supplied fields, bypassing the resolver.

    A synthetic "MANUAL-<epoch ms>" ISBN is used when none is given.

    Raises:
        ValueError: If the title is blank.
    """
    title = title.strip()
    if not title:
        raise ValueError("Title is required")

    authors = [a.strip() for a in authors or [] if a.strip()] or [UNKNOWN_AUTHOR]
    genres = [g.strip() for g in genres or [] if g.strip()] or [UNCATEGORIZED]
    description = (description or "").strip() or f"{title} by {', '.join(authors)}"

    return BookRecord(
        isbn=(isbn or "").strip() or f"{MANUAL_ISBN_PREFIX}{time.time_ns() // 1_000_000}",
        title=title,
        authors=authors,
        genres=genres,
        description=description,
        cover_url=(cover_url or "").strip() or PLACEHOLDER_COVER_URL,
        page_count=0,
        date_added=date_added or utc_timestamp(),
        source="manual",
    )
