# ABOUTME: Shared remote library: login, token storage, and the HTTP backend.
# ABOUTME: Exports the pieces the CLI needs to talk to a MyShelf server.

from myshelf.remote.auth import AuthError, TokenStore, login
from myshelf.remote.backend import BackendError, RemoteBackend

__all__ = ["AuthError", "BackendError", "RemoteBackend", "TokenStore", "login"]
