# ABOUTME: MetadataProvider protocol defining the contract for ISBN metadata sources.
# ABOUTME: Open Library and the LLM fallback both implement it; the resolver chains them.

from typing import Protocol, runtime_checkable

from myshelf.library.types import BookRecord


@runtime_checkable
class MetadataProvider(Protocol):
    """Protocol for ISBN lookup services.

    `lookup` returns a normalized BookRecord, or None when the source has
    nothing for the ISBN. Implementations swallow their own network and parse
    errors (logging them) and report them as None.
    """

    @property
    def name(self) -> str: ...

    def lookup(self, isbn: str) -> BookRecord | None: ...
