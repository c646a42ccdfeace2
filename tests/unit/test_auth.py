# ABOUTME: Unit tests for remote login and on-disk token storage.
# ABOUTME: Verifies the login request, credential errors, and token file permissions.

import stat
from pathlib import Path

import pytest

from myshelf.http import UnauthorizedError
from myshelf.remote.auth import AuthError, TokenStore, login
from tests.fixtures.fakes import FakeHttpClient


@pytest.fixture
def tokens(tmp_path: Path) -> TokenStore:
    return TokenStore(tmp_path / "creds" / "auth-token")


class TestTokenStore:
    def test_empty_when_missing(self, tokens: TokenStore) -> None:
        assert tokens.get() is None

    def test_set_get_clear(self, tokens: TokenStore) -> None:
        tokens.set("abc")
        assert tokens.get() == "abc"
        tokens.clear()
        assert tokens.get() is None
        tokens.clear()

    def test_file_is_private(self, tokens: TokenStore) -> None:
        tokens.set("abc")
        assert stat.S_IMODE(tokens.path.stat().st_mode) == 0o600


class TestLogin:
    def test_stores_returned_token(self, tokens: TokenStore) -> None:
        client = FakeHttpClient({"/api/login": {"token": "tok-1"}})
        assert login(client, "https://shelf.example.com", "ada", "pw", tokens) == "tok-1"
        assert tokens.get() == "tok-1"
        assert client.requests == [
            ("POST", "https://shelf.example.com/api/login", {"username": "ada", "password": "pw"})
        ]

    def test_bad_credentials(self, tokens: TokenStore) -> None:
        client = FakeHttpClient({"/api/login": UnauthorizedError("HTTP 401", status_code=401)})
        with pytest.raises(AuthError, match="Invalid credentials"):
            login(client, "https://shelf.example.com", "ada", "wrong", tokens)
        assert tokens.get() is None

    def test_response_without_token(self, tokens: TokenStore) -> None:
        client = FakeHttpClient({"/api/login": {"ok": True}})
        with pytest.raises(AuthError, match="Invalid auth response"):
            login(client, "https://shelf.example.com", "ada", "pw", tokens)

    def test_missing_credentials(self, tokens: TokenStore) -> None:
        client = FakeHttpClient()
        with pytest.raises(AuthError, match="Missing credentials"):
            login(client, "https://shelf.example.com", "", "pw", tokens)
        assert client.requests == []
