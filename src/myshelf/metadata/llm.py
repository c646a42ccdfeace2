# ABOUTME: LLM-backed fallback metadata provider using an OpenRouter chat-completions API.
# ABOUTME: Prompts for strict JSON, tries an ordered list of models, and validates the payload.

import json
import logging
import re
from collections.abc import Callable, Sequence
from typing import Any

from myshelf.http import FetchError, HttpClient
from myshelf.library.types import (
    UNCATEGORIZED,
    UNKNOWN_AUTHOR,
    BookRecord,
    utc_timestamp,
)
from myshelf.metadata.openlibrary_parser import build_cover_url

logger = logging.getLogger(__name__)

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODELS = ("google/gemini-2.5-flash", "openai/gpt-4o-mini")

_CODE_FENCE_RE = re.compile(r"```(?:json)?\n?")

PROMPT_TEMPLATE = """You are a book metadata API. Given an ISBN, return ONLY valid JSON with book information.

ISBN: {isbn}

Return this exact JSON format (no markdown, no explanation):
{{
  "title": "Book Title",
  "authors": ["Author Name"],
  "genre": ["Specific Genre 1", "Specific Genre 2", "Mood"],
  "description": "Engaging description (max 3 sentences)",
  "pageCount": 0,
  "series": "Series Name (if any)",
  "seriesOrder": "1" (if any)
}}"""


def build_prompt(isbn: str) -> str:
    return PROMPT_TEMPLATE.format(isbn=isbn)


def strip_code_fences(content: str) -> str:
    """Remove ``` and ```json markers models like to wrap JSON in."""
    return _CODE_FENCE_RE.sub("", content).strip()


def _string_list(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if str(item).strip()]


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_llm_payload(
    payload: Any, isbn: str, *, date_added: str
) -> BookRecord | None:
    """Validate a model's JSON payload and normalize it into a BookRecord.

    The payload must be an object with a non-empty string title; anything
    else is rejected (None) so the next model gets a chance. Remaining
    fields are coerced and defaulted the same way as Open Library data.
    """
    if not isinstance(payload, dict):
        return None
    title = payload.get("title")
    if not isinstance(title, str) or not title.strip():
        return None
    title = title.strip()

    authors = _string_list(payload.get("authors")) or [UNKNOWN_AUTHOR]
    genres = _string_list(payload.get("genre"))[:5] or [UNCATEGORIZED]
    description = _optional_text(payload.get("description")) or f"{title} by {authors[0]}"

    try:
        page_count = max(int(payload.get("pageCount") or 0), 0)
    except (TypeError, ValueError):
        page_count = 0

    return BookRecord(
        isbn=isbn,
        title=title,
        authors=authors,
        genres=genres,
        description=description,
        cover_url=build_cover_url(isbn),
        page_count=page_count,
        date_added=date_added,
        series=_optional_text(payload.get("series")),
        series_order=_optional_text(payload.get("seriesOrder")),
        source="llm",
    )


def extract_message_content(result: Any) -> str:
    """Pull choices[0].message.content out of a chat completion response.

    Raises:
        ValueError: If the response does not have the expected shape.
    """
    try:
        content = result["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise ValueError(f"Malformed chat completion: missing {exc}") from exc
    if content is None:
        return ""
    if not isinstance(content, str):
        raise ValueError("Malformed chat completion: content is not text")
    return content


class LlmProvider:
    """Fallback provider that asks a generative model for book metadata.

    Models are tried in order; the first one returning a payload that parses
    and passes validation wins. Any failure for a model (HTTP error,
    malformed response, invalid JSON, failed validation) moves on to the next.
    """

    def __init__(
        self,
        http_client: HttpClient,
        api_key: str,
        *,
        models: Sequence[str] = DEFAULT_MODELS,
        url: str = OPENROUTER_URL,
        site_url: str = "https://myshelf.vercel.app",
        site_name: str = "MyShelf Book Scanner",
        timestamp: Callable[[], str] = utc_timestamp,
    ) -> None:
        if not api_key:
            raise ValueError("An API key is required for the LLM provider")
        self._http = http_client
        self._api_key = api_key
        self._models = tuple(models)
        self._url = url
        self._site_url = site_url
        self._site_name = site_name
        self._timestamp = timestamp

    @property
    def name(self) -> str:
        return "llm"

    @property
    def models(self) -> tuple[str, ...]:
        return self._models

    def lookup(self, isbn: str) -> BookRecord | None:
        """Ask each configured model in turn; None if every model fails."""
        prompt = build_prompt(isbn)
        for model in self._models:
            record = self._ask(model, prompt, isbn)
            if record is not None:
                logger.info("Model %s resolved %s", model, isbn)
                return record
        return None

    def _ask(self, model: str, prompt: str, isbn: str) -> BookRecord | None:
        body = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": 0.1,
            "max_tokens": 500,
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "HTTP-Referer": self._site_url,
            "X-Title": self._site_name,
        }
        try:
            result = self._http.post(self._url, json=body, headers=headers)
            content = strip_code_fences(extract_message_content(result))
            payload = json.loads(content)
        except (FetchError, ValueError) as exc:
            logger.warning("Model %s failed for %s: %s", model, isbn, exc)
            return None

        record = parse_llm_payload(payload, isbn, date_added=self._timestamp())
        if record is None:
            logger.warning("Model %s returned an unusable payload for %s", model, isbn)
        return record
