# ABOUTME: User settings for MyShelf, persisted as JSON in ~/.myshelf/settings.json.
# ABOUTME: Holds the database path, remote URL, LLM model order, and scan cooldowns.

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path

from myshelf.core.scanner import DEFAULT_COOLDOWN, DEFAULT_DUPLICATE_COOLDOWN
from myshelf.metadata.llm import DEFAULT_MODELS

logger = logging.getLogger(__name__)

MYSHELF_DIR = Path.home() / ".myshelf"
DEFAULT_SETTINGS_PATH = MYSHELF_DIR / "settings.json"


@dataclass
class Settings:
    """Application settings.

    Relative paths are resolved from ~/.myshelf. An empty remote_url means
    the library is kept in the local SQLite database. Secrets (the LLM API
    key, remote credentials) never live here; they come from the
    environment or `myshelf login`.
    """

    db_path: str = "library.db"
    remote_url: str = ""
    models: list[str] = field(default_factory=lambda: list(DEFAULT_MODELS))
    cooldown: float = DEFAULT_COOLDOWN
    duplicate_cooldown: float = DEFAULT_DUPLICATE_COOLDOWN

    def resolve_db_path(self, base: Path = MYSHELF_DIR) -> Path:
        """Resolve db_path to an absolute path, relative to ~/.myshelf."""
        path = Path(self.db_path).expanduser()
        if not path.is_absolute():
            path = base / path
        return path.resolve()


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a JSON file.

    Creates the file with defaults if it does not exist. Unknown keys are
    ignored; a corrupt file falls back to defaults with a warning.
    """
    path = path or DEFAULT_SETTINGS_PATH
    if not path.exists():
        settings = Settings()
        save_settings(settings, path)
        return settings

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return Settings()
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return Settings()

    known = {f.name for f in fields(Settings)}
    return Settings(**{k: v for k, v in data.items() if k in known})


def save_settings(settings: Settings, path: Path | None = None) -> None:
    """Write settings to a JSON file, creating parent directories."""
    path = path or DEFAULT_SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(settings), indent=2) + "\n", encoding="utf-8")
