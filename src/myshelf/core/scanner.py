# ABOUTME: Batch-scan controller that debounces decoded barcode text before resolving ISBNs.
# ABOUTME: Suppresses invalid, owned, repeated and in-flight scans; one lookup at a time.

import logging
import math
import threading
import time
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Protocol

from myshelf.isbn import is_valid_isbn
from myshelf.library.store import LibraryStore
from myshelf.library.types import BookRecord, utc_timestamp

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN = 1.5
DEFAULT_DUPLICATE_COOLDOWN = 2.0


class Resolver(Protocol):
    def resolve(self, isbn: str) -> BookRecord | None: ...


class ScanState(Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    COOLDOWN = "cooldown"


class ScanOutcome(Enum):
    """What happened to one decoded string.

    ADDED, ALREADY_OWNED, NOT_FOUND and ERROR are user-visible; the rest are
    silent suppressions.
    """

    ADDED = "added"
    ALREADY_OWNED = "already_owned"
    NOT_FOUND = "not_found"
    ERROR = "error"
    INVALID = "invalid"
    SUPPRESSED = "suppressed"
    BUSY = "busy"
    IGNORED = "ignored"
    DISCARDED = "discarded"

    @property
    def is_visible(self) -> bool:
        return self in _VISIBLE_OUTCOMES


_VISIBLE_OUTCOMES = frozenset(
    {ScanOutcome.ADDED, ScanOutcome.ALREADY_OWNED, ScanOutcome.NOT_FOUND, ScanOutcome.ERROR}
)


@dataclass(frozen=True)
class ScanResult:
    """Outcome of handling one decoded string."""

    outcome: ScanOutcome
    code: str
    record: BookRecord | None = None
    error: str | None = None


class ScanSession:
    """One continuous scanning session feeding a LibraryStore.

    Decoded strings may arrive from a decoder thread. The session keeps a
    single in-flight flag under a lock, so at most one Resolver call runs at
    a time; codes arriving meanwhile are dropped, not queued. After every
    lookup the session cools down for `cooldown` seconds. Codes already in
    the library are reported once and then muted for `duplicate_cooldown`
    seconds while the barcode stays in view.

    State is derived from the injected clock, so no timer threads are
    needed and tests can drive time by hand.
    """

    def __init__(
        self,
        resolver: Resolver,
        store: LibraryStore,
        *,
        cooldown: float = DEFAULT_COOLDOWN,
        duplicate_cooldown: float = DEFAULT_DUPLICATE_COOLDOWN,
        clock: Callable[[], float] = time.monotonic,
        timestamp: Callable[[], str] = utc_timestamp,
        on_result: Callable[[ScanResult], None] | None = None,
    ) -> None:
        self._resolver = resolver
        self._store = store
        self._cooldown = cooldown
        self._duplicate_cooldown = duplicate_cooldown
        self._clock = clock
        self._timestamp = timestamp
        self._on_result = on_result

        self._lock = threading.Lock()
        self._in_flight = False
        self._stopped = False
        self._cooldown_until = -math.inf
        self._last_scanned = ""
        self._marker_until = -math.inf
        self._counts: Counter[ScanOutcome] = Counter()

    @property
    def state(self) -> ScanState:
        with self._lock:
            if self._in_flight:
                return ScanState.PROCESSING
            if self._clock() < self._cooldown_until:
                return ScanState.COOLDOWN
            return ScanState.IDLE

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def counts(self) -> Counter[ScanOutcome]:
        """How many times each outcome occurred in this session."""
        return Counter(self._counts)

    def stop(self) -> None:
        """End the session. A lookup still in flight has its result discarded."""
        with self._lock:
            self._stopped = True

    def handle_decode(self, text: str) -> ScanResult:
        """Process one decoded string from the barcode reader.

        Raises whatever the store's backend raises when persisting an added
        record (e.g. AuthError); the session is back to cooldown by then.
        """
        with self._lock:
            early = self._screen(text)
            if early is None:
                self._in_flight = True
                self._last_scanned = text
                self._marker_until = math.inf
        if early is not None:
            return self._finish(early)

        scan_time = self._timestamp()
        logger.info("Looking up %s", text)
        record: BookRecord | None = None
        error: str | None = None
        try:
            record = self._resolver.resolve(text)
        except Exception as exc:
            logger.exception("Lookup failed for %s", text)
            error = str(exc) or type(exc).__name__

        with self._lock:
            try:
                result = self._complete(text, record, error, scan_time)
            finally:
                self._in_flight = False
                self._cooldown_until = self._clock() + self._cooldown
                self._marker_until = self._cooldown_until
        return self._finish(result)

    def _screen(self, text: str) -> ScanResult | None:
        """Decide, under the lock, whether a code is dropped before lookup."""
        if self._stopped:
            return ScanResult(ScanOutcome.IGNORED, text)
        if not is_valid_isbn(text):
            return ScanResult(ScanOutcome.INVALID, text)

        now = self._clock()
        if now >= self._marker_until:
            self._last_scanned = ""
        if text == self._last_scanned:
            return ScanResult(ScanOutcome.SUPPRESSED, text)
        if self._in_flight or now < self._cooldown_until:
            return ScanResult(ScanOutcome.BUSY, text)

        if text in self._store:
            self._last_scanned = text
            self._marker_until = now + self._duplicate_cooldown
            return ScanResult(ScanOutcome.ALREADY_OWNED, text, record=self._store.get(text))
        return None

    def _complete(
        self, text: str, record: BookRecord | None, error: str | None, scan_time: str
    ) -> ScanResult:
        if self._stopped:
            logger.info("Session stopped; discarding result for %s", text)
            return ScanResult(ScanOutcome.DISCARDED, text, record=record)
        if error is not None:
            return ScanResult(ScanOutcome.ERROR, text, error=error)
        if record is None:
            return ScanResult(ScanOutcome.NOT_FOUND, text)

        record = replace(record, date_added=scan_time)
        if not self._store.add(record):
            return ScanResult(ScanOutcome.ALREADY_OWNED, text, record=self._store.get(text))
        return ScanResult(ScanOutcome.ADDED, text, record=record)

    def _finish(self, result: ScanResult) -> ScanResult:
        self._counts[result.outcome] += 1
        if result.outcome.is_visible and self._on_result is not None:
            self._on_result(result)
        return result
