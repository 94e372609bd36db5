"""
Admission cache.

Remembers which (credential, origin) pairs passed external verification so
that repeat requests inside the validity window skip the verification call.
Shared by every request thread; all reads and writes of the record table go
through a single lock, and the verification call itself never runs under it.
"""
import logging
import threading
import time
from typing import Callable, Dict, Optional

from .contracts import AdmissionConfig, AdmissionRecord, AdmissionStats

logger = logging.getLogger(__name__)


class AdmissionCache:
    """TTL-bounded record of verified credentials.

    At most one record exists per credential; the latest successful
    verification overwrites any earlier one.
    """

    def __init__(self, config: Optional[AdmissionConfig] = None, clock: Optional[Callable[[], float]] = None):
        """Initialize the admission cache.

        Args:
            config: Cache configuration
            clock: Optional clock function for testing (defaults to time.time)
        """
        self.config = config or AdmissionConfig()
        self.clock = clock or time.time
        self.stats = AdmissionStats()
        self._records: Dict[str, AdmissionRecord] = {}
        self._lock = threading.Lock()

    def _is_live(self, record: AdmissionRecord, now: float) -> bool:
        return now - record.issued_at <= self.config.window_sec

    def _purge_locked(self, now: float) -> int:
        expired = [key for key, record in self._records.items() if not self._is_live(record, now)]
        for key in expired:
            del self._records[key]
        self.stats.purged += len(expired)
        return len(expired)

    def _store_locked(self, credential: str, origin: str, now: float) -> AdmissionRecord:
        record = AdmissionRecord(credential=credential, origin=origin, issued_at=now)
        self._records[credential] = record
        return record

    def is_admitted(self, credential: str, origin: str) -> bool:
        """Whether a live record exists for ``credential`` from ``origin``."""
        with self._lock:
            record = self._records.get(credential)
            return record is not None and record.origin == origin and self._is_live(record, self.clock())

    def register(self, credential: str, origin: str) -> AdmissionRecord:
        """Create or overwrite the record for ``credential``."""
        with self._lock:
            return self._store_locked(credential, origin, self.clock())

    def purge_expired(self) -> int:
        """Remove every record older than the window. Returns the number removed."""
        with self._lock:
            return self._purge_locked(self.clock())

    def check_and_register(self, credential: str, origin: str, verify: Callable[[str], bool]) -> bool:
        """Admit a request, verifying the credential externally on a miss.

        Args:
            credential: Opaque token presented by the caller
            origin: Caller origin (client address)
            verify: External verification callable, invoked outside the lock

        Returns:
            True if the request is admitted
        """
        with self._lock:
            now = self.clock()
            self.stats.lookups += 1
            record = self._records.get(credential)
            if record is not None and record.origin == origin and self._is_live(record, now):
                self.stats.hits += 1
                self._purge_locked(now)
                return True
            self.stats.misses += 1

        verified = False
        try:
            verified = bool(verify(credential))
        finally:
            with self._lock:
                now = self.clock()
                if verified:
                    self._store_locked(credential, origin, now)
                    self.stats.verifications += 1
                else:
                    self.stats.rejections += 1
                self._purge_locked(now)

        if not verified:
            logger.info(f"[ADMISSION] Verification failed for origin={origin}")
        return verified

    def size(self) -> int:
        """Get current number of records."""
        with self._lock:
            return len(self._records)

    def clear(self):
        """Drop all records. Stats are preserved."""
        with self._lock:
            self._records.clear()
