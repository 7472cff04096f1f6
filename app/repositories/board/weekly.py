"""Weekly business repository."""

from collections import Counter

from loguru import logger

from app.models.board.weekly import DEFAULT_CATEGORY, WEEKLY_COLUMNS, WeeklyEntry, WeeklyField
from app.repositories.base import BaseReader, BaseWriter, new_id
from app.repositories.common.cache import CacheKey
from app.repositories.errors import RecordNotFoundError
from helpers.dates import newest_first, to_iso, utc_now
from settings import SHEET_WEEKLY_BUSINESS


class WeeklyBusinessReader(BaseReader):
    """Reader for the weekly business sheet."""

    cache_keys = (CacheKey.WEEKLY_BUSINESS,)

    async def get_all_entries(self) -> list[WeeklyEntry]:
        """Every entry, latest date first."""
        rng = self._range(SHEET_WEEKLY_BUSINESS, "K")
        return await self.fetch_and_cache(
            CacheKey.WEEKLY_BUSINESS,
            rng,
            lambda row, i: WeeklyEntry.from_row(row, i + rng.start_row),
            sorter=newest_first(lambda e: e.date),
        )

    async def get_entries_for_week(self, week_id: str) -> list[WeeklyEntry]:
        return [e for e in await self.get_all_entries() if e.week_id == week_id]

    async def find_entry_by_record_id(self, record_id: str) -> WeeklyEntry | None:
        if not record_id:
            return None
        for entry in await self.get_all_entries():
            if entry.record_id == record_id:
                return entry
        return None

    async def get_weekly_summary(self) -> dict[str, int]:
        """Week id -> number of entries with a summary, for every week on file.

        Derived from the cached entry list on each call; not stored separately.
        """
        counts: Counter[str] = Counter()
        for entry in await self.get_all_entries():
            if not entry.week_id:
                continue
            counts[entry.week_id] += 1 if entry.summary else 0
        return dict(counts)


class WeeklyBusinessWriter(BaseWriter):
    """Writer for the weekly business sheet; rows are located through the reader."""

    invalidates = (CacheKey.WEEKLY_BUSINESS,)

    def __init__(self, source, cache, spreadsheet_id: str, reader: WeeklyBusinessReader):
        super().__init__(source, cache, spreadsheet_id)
        self._reader = reader

    @property
    def source_range(self):
        return self._range(SHEET_WEEKLY_BUSINESS, "K")

    async def _locate(self, record_id: str) -> WeeklyEntry:
        entry = await self._reader.find_entry_by_record_id(record_id)
        if entry is None:
            raise RecordNotFoundError(f"Weekly entry not found: {record_id}")
        return entry

    async def create_entry(self, data: dict, creator: str) -> str:
        F = WeeklyField
        now = utc_now()
        record_id = new_id("WK")

        row = [""] * WEEKLY_COLUMNS
        row[F.DATE] = data.get("date") or now.date().isoformat()
        row[F.WEEK_ID] = data.get("week_id", "")
        row[F.CATEGORY] = data.get("category") or DEFAULT_CATEGORY
        row[F.THEME] = data.get("theme", "")
        row[F.PARTICIPANTS] = data.get("participants", "")
        row[F.SUMMARY] = data.get("summary", "")
        row[F.TODO] = data.get("todo", "")
        row[F.CREATED_TIME] = to_iso(now)
        row[F.LAST_UPDATE_TIME] = to_iso(now)
        row[F.CREATOR] = creator
        row[F.RECORD_ID] = record_id

        await self._append(self.source_range, row)
        self._committed()
        logger.info("Weekly entry created: {} by {}", record_id, creator)
        return record_id

    async def update_entry(self, record_id: str, data: dict, modifier: str) -> None:
        F = WeeklyField
        entry = await self._locate(record_id)
        row = await self._read_row(self.source_range, entry.row_index, F.RECORD_ID, record_id)

        for field, column in (
            ("date", F.DATE),
            ("week_id", F.WEEK_ID),
            ("category", F.CATEGORY),
            ("theme", F.THEME),
            ("participants", F.PARTICIPANTS),
            ("summary", F.SUMMARY),
            ("todo", F.TODO),
        ):
            if field in data:
                row[column] = data[field]
        row[F.LAST_UPDATE_TIME] = to_iso(utc_now())

        await self._update(self.source_range, entry.row_index, row)
        self._committed()
        logger.info("Weekly entry updated: {} by {}", record_id, modifier)

    async def delete_entry(self, record_id: str) -> None:
        entry = await self._locate(record_id)
        await self._read_row(self.source_range, entry.row_index, WeeklyField.RECORD_ID, record_id)
        await self._delete_row(self.source_range, entry.row_index)
        self._committed()
        logger.info("Weekly entry deleted: {}", record_id)
