# ABOUTME: Metadata package: ISBN lookups against Open Library and an LLM fallback.
# ABOUTME: Exports the resolver and provider types used by the scan and add pipelines.

from myshelf.metadata.llm import LlmProvider
from myshelf.metadata.openlibrary import OpenLibraryProvider
from myshelf.metadata.provider import MetadataProvider
from myshelf.metadata.resolver import MetadataResolver, build_resolver

__all__ = [
    "LlmProvider",
    "MetadataProvider",
    "MetadataResolver",
    "OpenLibraryProvider",
    "build_resolver",
]
