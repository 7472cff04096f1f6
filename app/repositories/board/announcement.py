"""Announcement repository."""

from loguru import logger

from app.models.board.announcement import ANNOUNCEMENT_COLUMNS, PUBLISHED, Announcement, AnnouncementField
from app.repositories.base import BaseReader, BaseWriter, new_id
from app.repositories.common.cache import CacheKey
from helpers.dates import pinned_then_newest, to_iso, utc_now
from settings import SHEET_ANNOUNCEMENTS


class AnnouncementReader(BaseReader):
    cache_keys = (CacheKey.ANNOUNCEMENTS,)

    async def get_announcements(self) -> list[Announcement]:
        """All announcements: pinned first, then most recently updated."""
        rng = self._range(SHEET_ANNOUNCEMENTS, "H")
        return await self.fetch_and_cache(
            CacheKey.ANNOUNCEMENTS,
            rng,
            lambda row, i: Announcement.from_row(row, i + rng.start_row),
            sorter=pinned_then_newest(lambda a: a.is_pinned, lambda a: a.last_update_time),
        )

    async def find_by_id(self, announcement_id: str) -> Announcement | None:
        for announcement in await self.get_announcements():
            if announcement.id == announcement_id:
                return announcement
        return None


class AnnouncementWriter(BaseWriter):
    invalidates = (CacheKey.ANNOUNCEMENTS,)

    @property
    def source_range(self):
        return self._range(SHEET_ANNOUNCEMENTS, "H")

    async def create_announcement(self, data: dict, creator: str) -> Announcement:
        F = AnnouncementField
        now = to_iso(utc_now())

        row = [""] * ANNOUNCEMENT_COLUMNS
        row[F.ID] = new_id("ANN")
        row[F.TITLE] = data["title"]
        row[F.CONTENT] = data.get("content", "")
        row[F.CREATOR] = creator
        row[F.CREATE_TIME] = now
        row[F.LAST_UPDATE_TIME] = now
        row[F.STATUS] = data.get("status") or PUBLISHED
        row[F.IS_PINNED] = "TRUE" if data.get("is_pinned") else "FALSE"

        await self._append(self.source_range, row)
        self._committed()
        logger.info("Announcement created: {} by {}", row[F.ID], creator)
        return Announcement.from_row(row, 0)

    async def update_announcement(self, announcement: Announcement, data: dict, modifier: str) -> None:
        F = AnnouncementField
        row = await self._read_row(self.source_range, announcement.row_index, F.ID, announcement.id)

        for field, column in (("title", F.TITLE), ("content", F.CONTENT), ("status", F.STATUS)):
            if field in data:
                row[column] = data[field]
        if "is_pinned" in data:
            row[F.IS_PINNED] = "TRUE" if data["is_pinned"] else "FALSE"
        row[F.LAST_UPDATE_TIME] = to_iso(utc_now())

        await self._update(self.source_range, announcement.row_index, row)
        self._committed()
        logger.info("Announcement updated: {} by {}", announcement.id, modifier)

    async def delete_announcement(self, announcement: Announcement) -> None:
        await self._read_row(self.source_range, announcement.row_index, AnnouncementField.ID, announcement.id)
        await self._delete_row(self.source_range, announcement.row_index)
        self._committed()
        logger.info("Announcement deleted: {}", announcement.id)
