"""Event log repository (read-only)."""

from app.models.crm.event_log import EventLog
from app.repositories.base import BaseReader
from app.repositories.common.cache import CacheKey
from helpers.dates import newest_first
from settings import SHEET_EVENT_LOGS


class EventLogReader(BaseReader):
    cache_keys = (CacheKey.EVENT_LOGS,)

    async def get_event_logs(self) -> list[EventLog]:
        rng = self._range(SHEET_EVENT_LOGS, "L")
        return await self.fetch_and_cache(
            CacheKey.EVENT_LOGS,
            rng,
            lambda row, i: EventLog.from_row(row, i + rng.start_row),
            sorter=newest_first(lambda e: e.created_time),
        )

    async def get_event_log_by_id(self, event_id: str) -> EventLog | None:
        for event in await self.get_event_logs():
            if event.event_id == event_id:
                return event
        return None
