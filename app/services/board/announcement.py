"""Announcement service - published list and id-addressed writes."""

from app.models.board.announcement import PUBLISHED, Announcement
from app.repositories.board.announcement import AnnouncementReader, AnnouncementWriter
from app.repositories.errors import RecordNotFoundError
from app.services.errors import MissingFieldError


class AnnouncementService:
    def __init__(self, announcement_reader: AnnouncementReader, announcement_writer: AnnouncementWriter):
        self._reader = announcement_reader
        self._writer = announcement_writer

    async def get_announcements(self) -> list[Announcement]:
        """Published announcements, pinned first."""
        return [a for a in await self._reader.get_announcements() if a.status == PUBLISHED]

    async def create_announcement(self, data: dict, creator: str) -> Announcement:
        if not (data.get("title") or "").strip():
            raise MissingFieldError("Announcement title is required")
        return await self._writer.create_announcement(data, creator)

    async def _require(self, announcement_id: str) -> Announcement:
        announcement = await self._reader.find_by_id(announcement_id)
        if announcement is None:
            raise RecordNotFoundError(f"Announcement not found: {announcement_id}")
        return announcement

    async def update_announcement(self, announcement_id: str, data: dict, modifier: str) -> None:
        await self._writer.update_announcement(await self._require(announcement_id), data, modifier)

    async def delete_announcement(self, announcement_id: str) -> None:
        await self._writer.delete_announcement(await self._require(announcement_id))
