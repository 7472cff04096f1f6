"""Board repositories - announcements and weekly business."""

from app.repositories.board.announcement import AnnouncementReader, AnnouncementWriter
from app.repositories.board.weekly import WeeklyBusinessReader, WeeklyBusinessWriter

__all__ = [
    "AnnouncementReader",
    "AnnouncementWriter",
    "WeeklyBusinessReader",
    "WeeklyBusinessWriter",
]
