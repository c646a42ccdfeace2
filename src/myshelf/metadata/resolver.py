# ABOUTME: Metadata resolver that maps an ISBN to a BookRecord via an ordered provider chain.
# ABOUTME: Tries Open Library first, then the LLM fallback; any failure counts as "nothing found".

import logging
from collections.abc import Sequence

from myshelf.http import HttpClient
from myshelf.library.types import BookRecord
from myshelf.metadata.llm import DEFAULT_MODELS, LlmProvider
from myshelf.metadata.openlibrary import OpenLibraryProvider
from myshelf.metadata.provider import MetadataProvider

logger = logging.getLogger(__name__)


class MetadataResolver:
    """Resolve ISBNs against providers in strict sequence.

    The first provider to return a record wins. A provider that raises is
    logged and skipped, exactly as if it had found nothing. Negative results
    are not cached, and the resolver never touches the library store.
    """

    def __init__(self, providers: Sequence[MetadataProvider]) -> None:
        if not providers:
            raise ValueError("MetadataResolver needs at least one provider")
        self._providers = list(providers)

    @property
    def providers(self) -> list[MetadataProvider]:
        return list(self._providers)

    def resolve(self, isbn: str) -> BookRecord | None:
        """Return a normalized record for the ISBN, or None if no source has it."""
        for provider in self._providers:
            try:
                record = provider.lookup(isbn)
            except Exception:
                logger.exception("Provider %s raised while resolving %s", provider.name, isbn)
                continue
            if record is not None:
                logger.debug("Resolved %s via %s", isbn, provider.name)
                return record
            logger.debug("Provider %s found nothing for %s", provider.name, isbn)
        logger.info("No provider could resolve %s", isbn)
        return None


def build_resolver(
    http_client: HttpClient,
    *,
    api_key: str | None = None,
    models: Sequence[str] = DEFAULT_MODELS,
) -> MetadataResolver:
    """Build the default chain: Open Library, plus the LLM when a key is set."""
    providers: list[MetadataProvider] = [OpenLibraryProvider(http_client)]
    if api_key:
        providers.append(LlmProvider(http_client, api_key, models=models))
    else:
        logger.debug("No LLM API key configured; Open Library only")
    return MetadataResolver(providers)
