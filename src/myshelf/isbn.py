# ABOUTME: ISBN-13 validation and cleanup helpers.
# ABOUTME: Pure functions used by the scan session, the CLI, and the resolver.

import re

_ISBN13_PREFIXES = ("978", "979")
_SEPARATOR_RE = re.compile(r"[\s-]")


def is_valid_isbn(candidate: str) -> bool:
    """Check whether a string is a valid ISBN-13.

    The candidate must be exactly 13 ASCII digits, start with "978" or "979",
    and carry a correct check digit (alternating 1/3 weights, mod 10).
    Decoded scanner text is checked verbatim; use clean_isbn() first for
    user-typed input with hyphens or spaces.
    """
    if not isinstance(candidate, str):
        return False
    if len(candidate) != 13 or not (candidate.isascii() and candidate.isdigit()):
        return False
    if not candidate.startswith(_ISBN13_PREFIXES):
        return False

    digits = [int(ch) for ch in candidate]
    total = sum(d * (1 if i % 2 == 0 else 3) for i, d in enumerate(digits[:12]))
    return (10 - total % 10) % 10 == digits[12]


def clean_isbn(raw: str) -> str:
    """Strip whitespace and hyphens from a typed ISBN ("978-0-14-044913-6")."""
    return _SEPARATOR_RE.sub("", raw)
