# ABOUTME: Shared pytest fixtures for MyShelf tests.
# ABOUTME: Isolates settings and credentials per test and provides sample books and a fake clock.

from pathlib import Path

import pytest

from myshelf.library.types import BookRecord, ReadingStatus
from tests.fixtures.books import HOBBIT, NAME_OF_THE_ROSE, NINETEEN_EIGHTY_FOUR, ODYSSEY
from tests.fixtures.fakes import FakeClock


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the settings file at a temp dir and drop ambient server/API config."""
    home = tmp_path / "myshelf-home"
    monkeypatch.setenv("MYSHELF_SETTINGS", str(home / "settings.json"))
    monkeypatch.delenv("MYSHELF_REMOTE_URL", raising=False)
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    return home


@pytest.fixture
def rose() -> BookRecord:
    return BookRecord(
        isbn=NAME_OF_THE_ROSE,
        title="The Name of the Rose",
        authors=["Umberto Eco"],
        genres=["Mystery", "Historical fiction"],
        description="A mystery set in a medieval Italian monastery.",
        cover_url=f"https://covers.openlibrary.org/b/isbn/{NAME_OF_THE_ROSE}-L.jpg",
        page_count=536,
        date_added="2024-01-10T09:00:00.000Z",
        reading_status=ReadingStatus.READ,
        rating=5,
        favorite=True,
    )


@pytest.fixture
def sample_books(rose: BookRecord) -> list[BookRecord]:
    """Four books, newest first, with mixed statuses and ratings."""
    return [
        BookRecord(
            isbn=HOBBIT,
            title="The Hobbit",
            authors=["J.R.R. Tolkien"],
            genres=["Fantasy"],
            date_added="2024-03-02T18:30:00.000Z",
            reading_status=ReadingStatus.READING,
            rating=4,
        ),
        BookRecord(
            isbn=NINETEEN_EIGHTY_FOUR,
            title="Nineteen Eighty-Four",
            authors=["George Orwell"],
            genres=["Dystopia", "Fantasy"],
            date_added="2024-02-15T12:00:00.000Z",
            reading_status=ReadingStatus.READ,
            rating=3,
        ),
        BookRecord(
            isbn=ODYSSEY,
            title="The Odyssey",
            authors=["Homer", "Emily Wilson"],
            genres=["Classics"],
            date_added="2024-02-01T08:15:00.000Z",
            reading_status=ReadingStatus.WISHLIST,
        ),
        rose,
    ]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
