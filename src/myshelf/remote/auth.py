# ABOUTME: Login and credential storage for the shared remote library.
# ABOUTME: Exchanges username/password for a bearer token and persists it on disk.

import logging
from pathlib import Path

from myshelf.http import HttpClient, UnauthorizedError

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_PATH = Path.home() / ".myshelf" / "auth-token"


class AuthError(Exception):
    """Raised when the remote library rejects our credentials."""


class TokenStore:
    """Keeps the bearer token in a private file between runs."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or DEFAULT_TOKEN_PATH

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> str | None:
        if not self._path.exists():
            return None
        token = self._path.read_text(encoding="utf-8").strip()
        return token or None

    def set(self, token: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(token, encoding="utf-8")
        self._path.chmod(0o600)

    def clear(self) -> None:
        """Forget the stored token. Safe to call when none is stored."""
        self._path.unlink(missing_ok=True)


def login(
    http_client: HttpClient,
    base_url: str,
    username: str,
    password: str,
    tokens: TokenStore,
) -> str:
    """Log in to the remote library and store the returned token.

    Raises:
        AuthError: If the server rejects the credentials or answers without
            a token.
        FetchError: On network failures or other HTTP errors.
    """
    if not username or not password:
        raise AuthError("Missing credentials")

    url = f"{base_url.rstrip('/')}/api/login"
    try:
        data = http_client.post(url, json={"username": username, "password": password})
    except UnauthorizedError as exc:
        raise AuthError("Invalid credentials") from exc

    token = data.get("token") if isinstance(data, dict) else None
    if not isinstance(token, str) or not token:
        raise AuthError("Invalid auth response")

    tokens.set(token)
    logger.info("Logged in to %s as %s", base_url, username)
    return token

