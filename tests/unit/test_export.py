# ABOUTME: Unit tests for JSON and CSV export and import.
# ABOUTME: Checks the fixed CSV header, quoting, list joining, and import validation.

import csv
import io
import json
from pathlib import Path

import pytest

from myshelf.library.export import (
    CSV_HEADERS,
    ExportFormatError,
    from_csv,
    from_json,
    load_export,
    to_csv,
    to_json,
)
from myshelf.library.types import BookRecord, ReadingStatus
from tests.fixtures.books import ODYSSEY


class TestJsonExport:
    def test_pretty_printed_array(self, sample_books: list[BookRecord]) -> None:
        text = to_json(sample_books)
        assert text.startswith("[\n  {")
        data = json.loads(text)
        assert [item["isbn"] for item in data] == [b.isbn for b in sample_books]
        assert data[0]["readingStatus"] == "reading"

    def test_empty_library(self) -> None:
        assert to_json([]) == "[]"

    def test_non_ascii_kept(self) -> None:
        text = to_json([BookRecord(isbn=ODYSSEY, title="Ὀδύσσεια")])
        assert "Ὀδύσσεια" in text

    def test_import_restores_user_fields(self, sample_books: list[BookRecord]) -> None:
        assert from_json(to_json(sample_books)) == sample_books

    def test_import_rejects_invalid_json(self) -> None:
        with pytest.raises(ExportFormatError, match="Invalid JSON"):
            from_json("{not json")

    def test_import_rejects_non_array(self) -> None:
        with pytest.raises(ExportFormatError, match="array"):
            from_json('{"isbn": "x"}')


class TestCsvExport:
    def test_header_row(self) -> None:
        assert to_csv([]) == "isbn,title,authors,genre,dateAdded,description,pageCount,coverUrl\n"

    def test_lists_joined_and_quoted(self, sample_books: list[BookRecord]) -> None:
        text = to_csv(sample_books)
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[0] == CSV_HEADERS
        odyssey = rows[3]
        assert odyssey[0] == ODYSSEY
        assert odyssey[2] == "Homer, Emily Wilson"
        assert '"Homer, Emily Wilson"' in text

    def test_embedded_quotes_doubled(self) -> None:
        book = BookRecord(isbn=ODYSSEY, title='The "Odyssey"', description="Sing, muse")
        text = to_csv([book])
        assert '"The ""Odyssey"""' in text
        assert '"Sing, muse"' in text

    def test_csv_import(self, sample_books: list[BookRecord]) -> None:
        books = from_csv(to_csv(sample_books))
        assert [b.isbn for b in books] == [b.isbn for b in sample_books]
        odyssey = books[2]
        assert odyssey.authors == ["Homer", "Emily Wilson"]
        assert odyssey.date_added == "2024-02-01T08:15:00.000Z"
        # Status and rating are not part of the CSV format.
        assert odyssey.reading_status is ReadingStatus.UNREAD

    def test_csv_import_requires_columns(self) -> None:
        with pytest.raises(ExportFormatError, match="title"):
            from_csv("isbn,author\n123,x\n")


class TestLoadExport:
    def test_picks_parser_by_extension(self, tmp_path: Path, rose: BookRecord) -> None:
        json_path = tmp_path / "shelf.json"
        json_path.write_text(to_json([rose]), encoding="utf-8")
        csv_path = tmp_path / "shelf.CSV"
        csv_path.write_text(to_csv([rose]), encoding="utf-8")
        assert load_export(json_path) == [rose]
        assert load_export(csv_path)[0].title == rose.title

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "shelf.xml"
        path.write_text("<books/>", encoding="utf-8")
        with pytest.raises(ExportFormatError, match="Unsupported"):
            load_export(path)
