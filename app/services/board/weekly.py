"""Weekly business service - week lists, options and entry writes."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from app.models.board.weekly import WeeklyEntry, WeekSummary
from app.repositories.board.weekly import WeeklyBusinessReader, WeeklyBusinessWriter
from helpers.dates import WeekInfo, parse_timestamp, utc_now, week_id, week_info

OPTION_LABELS = ("上一週", "本週", "下一週")


@dataclass
class WeekOption:
    id: str
    label: str
    disabled: bool = False


@dataclass
class WeekDetails:
    info: WeekInfo
    entries: list[WeeklyEntry] = field(default_factory=list)


class WeeklyBusinessService:
    def __init__(
        self,
        weekly_reader: WeeklyBusinessReader,
        weekly_writer: WeeklyBusinessWriter,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._reader = weekly_reader
        self._writer = weekly_writer
        self._clock = clock

    def _today(self) -> date:
        return self._clock().date()

    async def get_entries_for_week(self, wid: str) -> list[WeeklyEntry]:
        return await self._reader.get_entries_for_week(wid)

    async def get_weekly_details(self, wid: str) -> WeekDetails:
        return WeekDetails(info=week_info(wid), entries=await self.get_entries_for_week(wid))

    async def get_summary_list(self) -> list[WeekSummary]:
        """Weeks on file plus the current week, latest week first."""
        summary = await self._reader.get_weekly_summary()
        current = week_id(self._today())
        summary.setdefault(current, 0)

        weeks = []
        for wid, count in summary.items():
            try:
                info = week_info(wid)
            except ValueError:
                continue
            weeks.append(WeekSummary(id=wid, title=info.title, date_range=info.date_range, summary_count=count))
        return sorted(weeks, key=lambda w: w.id, reverse=True)

    async def get_week_options(self) -> list[WeekOption]:
        """Previous, current and next week; weeks that already have entries are disabled."""
        today = self._today()
        existing = set(await self._reader.get_weekly_summary())
        days = (today - timedelta(days=7), today, today + timedelta(days=7))
        return [
            WeekOption(id=week_id(d), label=label, disabled=week_id(d) in existing)
            for d, label in zip(days, OPTION_LABELS)
        ]

    async def create_entry(self, data: dict, creator: str) -> str:
        """Create an entry; the week id is derived from its date (today when missing)."""
        ts = parse_timestamp(data.get("date"))
        entry_date = ts.date() if ts else self._today()
        return await self._writer.create_entry(
            {**data, "date": entry_date.isoformat(), "week_id": week_id(entry_date)},
            creator,
        )

    async def update_entry(self, record_id: str, data: dict, modifier: str) -> None:
        await self._writer.update_entry(record_id, data, modifier)

    async def delete_entry(self, record_id: str) -> None:
        await self._writer.delete_entry(record_id)
