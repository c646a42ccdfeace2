# ABOUTME: Parsing functions for Open Library Books API JSON responses.
# ABOUTME: Converts the jscmd=data payload into normalized BookRecord instances.

import re
from typing import Any

from myshelf.library.types import (
    UNCATEGORIZED,
    UNKNOWN_AUTHOR,
    UNKNOWN_TITLE,
    BookRecord,
)

_COVERS_BASE_URL = "https://covers.openlibrary.org/b/isbn"
_MAX_GENRES = 5
_YEAR_RE = re.compile(r"\d+")


def build_cover_url(isbn: str, size: str = "L") -> str:
    """Build an Open Library cover image URL for a given ISBN.

    Args:
        isbn: The ISBN to look up cover art for.
        size: Image size: "S" (small), "M" (medium), or "L" (large).
    """
    return f"{_COVERS_BASE_URL}/{isbn}-{size}.jpg"


def _names(entries: Any) -> list[str]:
    """Pull the "name" out of a list of {"name": ...} objects, skipping blanks."""
    if not isinstance(entries, list):
        return []
    names = []
    for entry in entries:
        name = entry.get("name") if isinstance(entry, dict) else entry
        if isinstance(name, str) and name.strip():
            names.append(name.strip())
    return names


def _text(value: Any) -> str | None:
    """Handle the OL quirk where text is either a string or {"value": ...}."""
    if isinstance(value, dict):
        value = value.get("value")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def parse_publish_year(publish_date: Any) -> int | None:
    """Extract the year from a free-form publish date ("1983", "March 2005").

    Takes the first run of four digits; falls back to the leading integer.
    """
    if not isinstance(publish_date, str):
        return None
    numbers = _YEAR_RE.findall(publish_date)
    for number in numbers:
        if len(number) == 4:
            return int(number)
    return int(numbers[0]) if numbers else None


def parse_series(data: dict[str, Any]) -> str | None:
    """Series comes as a list of strings/objects or a single object."""
    series = data.get("series")
    if isinstance(series, list):
        names = _names(series)
        return names[0] if names else None
    if isinstance(series, dict):
        return _text(series.get("name"))
    return _text(series)


def parse_language(data: dict[str, Any]) -> str | None:
    languages = data.get("languages") or []
    if not languages or not isinstance(languages[0], dict):
        return None
    key = languages[0].get("key", "")
    return key.rsplit("/", 1)[-1] if key else None


def parse_books_response(
    data: dict[str, Any], isbn: str, *, date_added: str
) -> BookRecord | None:
    """Parse an Open Library Books API response for one ISBN.

    The payload is keyed by "ISBN:<isbn>"; a missing key means Open Library
    has no record, which is reported as None rather than an error.
    Missing fields are normalized: "Unknown Title", ["Unknown Author"],
    ["Uncategorized"], and a "<title> by <author>" description.
    """
    if not isinstance(data, dict):
        return None
    entry = data.get(f"ISBN:{isbn}")
    if not isinstance(entry, dict) or not entry:
        return None

    title = _text(entry.get("title")) or UNKNOWN_TITLE
    authors = _names(entry.get("authors")) or [UNKNOWN_AUTHOR]
    genres = _names(entry.get("subjects"))[:_MAX_GENRES] or [UNCATEGORIZED]

    description = _text(entry.get("notes"))
    if description is None:
        excerpts = entry.get("excerpts") or []
        if excerpts and isinstance(excerpts[0], dict):
            description = _text(excerpts[0].get("text"))
    if description is None:
        first_author = _names(entry.get("authors"))[:1] or ["Unknown"]
        description = f"{title} by {first_author[0]}"

    page_count = entry.get("number_of_pages")
    if not isinstance(page_count, int) or page_count < 0:
        page_count = 0

    publishers = _names(entry.get("publishers"))

    return BookRecord(
        isbn=isbn,
        title=title,
        authors=authors,
        genres=genres,
        description=description,
        cover_url=build_cover_url(isbn),
        page_count=page_count,
        date_added=date_added,
        publisher=publishers[0] if publishers else None,
        publish_year=parse_publish_year(entry.get("publish_date")),
        language=parse_language(entry),
        series=parse_series(entry),
        source="openlibrary",
    )
