# ABOUTME: HTTP client abstraction for metadata lookups and the shared library backend.
# ABOUTME: Provides rate limiting, retry with backoff, bearer auth, and injectable transport.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
_OK_STATUS_CODES = {200, 201, 204}


class FetchError(Exception):
    """Raised when an HTTP request fails or returns an unusable response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnauthorizedError(FetchError):
    """Raised on a 401 response; callers must drop their credentials."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for the JSON HTTP operations used across MyShelf."""

    def get(self, url: str, params: dict[str, str] | None = None) -> Any: ...

    def post(
        self, url: str, json: Any, headers: dict[str, str] | None = None
    ) -> Any: ...

    def delete(self, url: str) -> Any: ...


class ShelfHttpClient:
    """HTTP client with rate limiting and retry for JSON APIs.

    Wraps httpx.Client with configurable request intervals and retry logic
    for transient failures (429, 5xx). An optional bearer token is attached
    to every request.
    """

    def __init__(
        self,
        *,
        min_request_interval: float = 0.1,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 30.0,
        token: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"User-Agent": "myshelf/0.1.0"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        client_kwargs: dict[str, Any] = {"headers": headers, "timeout": timeout}
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._min_interval = min_request_interval
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._last_request_time: float = 0.0

    def get(self, url: str, params: dict[str, str] | None = None) -> Any:
        """Send a GET request and return the parsed JSON body.

        Raises:
            UnauthorizedError: On HTTP 401.
            FetchError: On other non-retryable errors, exhausted retries, or
                a body that is not JSON.
        """
        return self._request("GET", url, params=params)

    def post(self, url: str, json: Any, headers: dict[str, str] | None = None) -> Any:
        """Send a JSON POST request and return the parsed JSON body."""
        return self._request("POST", url, json=json, headers=headers)

    def delete(self, url: str) -> Any:
        """Send a DELETE request and return the parsed JSON body (or None)."""
        return self._request("DELETE", url)

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        self._rate_limit()

        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = self._client.request(method, url, **kwargs)
                last_status = response.status_code
            except httpx.HTTPError as exc:
                raise FetchError(f"Request failed: {url}: {exc}") from exc

            if response.status_code in _OK_STATUS_CODES:
                return self._decode(response, url)

            if response.status_code == 401:
                raise UnauthorizedError(f"HTTP 401 from {url}", status_code=401)

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise FetchError(
                    f"HTTP {response.status_code} from {url}",
                    status_code=response.status_code,
                )

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                time.sleep(delay)

        raise FetchError(
            f"HTTP {last_status} from {url} after {attempts} attempts",
            status_code=last_status,
        )

    @staticmethod
    def _decode(response: httpx.Response, url: str) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(f"Invalid JSON from {url}: {exc}") from exc

    def _rate_limit(self) -> None:
        """Sleep if needed to maintain minimum interval between requests."""
        if self._min_interval <= 0:
            return
        now = time.monotonic()
        elapsed = now - self._last_request_time
        if elapsed < self._min_interval and self._last_request_time > 0:
            time.sleep(self._min_interval - elapsed)
        self._last_request_time = time.monotonic()
