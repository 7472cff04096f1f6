"""Cache store - process-wide parsed datasets keyed by logical name."""

from collections.abc import Callable
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any

from loguru import logger

from app.models.common import CacheEntry
from helpers.dates import to_iso, utc_now


class CacheKey(StrEnum):
    """One key per logical dataset."""

    CONTACTS = "contacts"
    CONTACT_LIST = "contactList"
    OPP_CONTACT_LINKS = "oppContactLinks"
    COMPANY_LIST = "companyList"
    OPPORTUNITIES = "opportunities"
    INTERACTIONS = "interactions"
    EVENT_LOGS = "eventLogs"
    ANNOUNCEMENTS = "announcements"
    WEEKLY_BUSINESS = "weeklyBusiness"
    SYSTEM_CONFIG = "systemConfig"
    USERS = "users"


class CacheStore:
    """In-memory cache with a shared freshness window.

    One instance per process, passed to every reader and writer. Not locked:
    all access happens on one event loop and no method awaits.
    """

    def __init__(
        self,
        ttl: timedelta = timedelta(seconds=30),
        clock: Callable[[], datetime] = utc_now,
    ):
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._last_write: datetime | None = None
        logger.debug("CacheStore initialized (ttl={}s)", ttl.total_seconds())

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def get(self, key: str) -> CacheEntry | None:
        """Entry for `key`, fresh or not. Absence is normal."""
        return self._entries.get(key)

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.fetched_at < self._ttl

    def set(self, key: str, value: Any) -> CacheEntry:
        """Store `value` stamped with the current time, replacing any prior entry."""
        if isinstance(value, list):
            value = tuple(value)
        entry = CacheEntry(value=value, fetched_at=self._clock())
        self._entries[key] = entry
        logger.debug("Cache set: {}", key)
        return entry

    def invalidate(self, key: str | None = None) -> None:
        """Drop one entry, or every entry when `key` is None. Unknown keys are ignored."""
        if key is None:
            self._entries.clear()
            logger.info("All cache cleared")
            return
        if self._entries.pop(key, None) is not None:
            logger.debug("Cache invalidated: {}", key)

    def keys(self) -> list[str]:
        return list(self._entries)

    def record_write(self) -> None:
        """Mark that some writer just mutated the remote store."""
        self._last_write = self._clock()

    def get_last_write_timestamp(self) -> str | None:
        return to_iso(self._last_write)
