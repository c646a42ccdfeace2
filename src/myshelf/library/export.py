# ABOUTME: JSON and CSV export/import for the book library.
# ABOUTME: Pure string transforms; writing files is left to the caller.

import csv
import io
import json
from pathlib import Path

from myshelf.library.types import BookRecord

CSV_HEADERS = [
    "isbn",
    "title",
    "authors",
    "genre",
    "dateAdded",
    "description",
    "pageCount",
    "coverUrl",
]
_LIST_SEPARATOR = ", "


class ExportFormatError(ValueError):
    """Raised when an import file cannot be parsed as a library export."""


def to_json(books: list[BookRecord]) -> str:
    """Serialize books as a pretty-printed JSON array (2-space indent)."""
    return json.dumps([book.to_dict() for book in books], indent=2, ensure_ascii=False)


def from_json(text: str) -> list[BookRecord]:
    """Parse a JSON export back into records, filling defaults for old entries.

    Raises:
        ExportFormatError: If the text is not a JSON array of objects.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ExportFormatError(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ExportFormatError("Expected a JSON array of book objects")
    return [BookRecord.from_dict(item) for item in data]


def to_csv(books: list[BookRecord]) -> str:
    """Serialize books as CSV with a fixed header row.

    List fields are joined with ", ". Fields containing commas, quotes or
    newlines are quoted, with embedded quotes doubled. An empty library
    produces just the header.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for book in books:
        writer.writerow(
            [
                book.isbn,
                book.title,
                _LIST_SEPARATOR.join(book.authors),
                _LIST_SEPARATOR.join(book.genres),
                book.date_added,
                book.description,
                book.page_count,
                book.cover_url,
            ]
        )
    return buffer.getvalue()


def _split_list(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def from_csv(text: str) -> list[BookRecord]:
    """Parse a CSV export produced by to_csv().

    Reading status, ratings, notes and favorites are not part of the CSV
    format, so imported records get their defaults.

    Raises:
        ExportFormatError: If the header row is missing required columns.
    """
    reader = csv.DictReader(io.StringIO(text))
    missing = [h for h in ("isbn", "title") if h not in (reader.fieldnames or [])]
    if missing:
        raise ExportFormatError(f"CSV is missing column(s): {', '.join(missing)}")

    books = []
    for row in reader:
        books.append(
            BookRecord.from_dict(
                {
                    "isbn": row.get("isbn") or "",
                    "title": row.get("title") or "",
                    "authors": _split_list(row.get("authors") or ""),
                    "genre": _split_list(row.get("genre") or ""),
                    "dateAdded": row.get("dateAdded") or None,
                    "description": row.get("description") or "",
                    "pageCount": row.get("pageCount") or 0,
                    "coverUrl": row.get("coverUrl") or "",
                }
            )
        )
    return books


def load_export(path: Path) -> list[BookRecord]:
    """Read a .json or .csv export file, choosing the parser by extension.

    Raises:
        ExportFormatError: On an unsupported extension or unparseable content.
    """
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".json":
        return from_json(text)
    if suffix == ".csv":
        return from_csv(text)
    raise ExportFormatError(f"Unsupported import format: {path.name} (use .json or .csv)")
