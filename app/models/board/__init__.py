"""Board models - announcements and weekly business entries."""

from app.models.board.announcement import PUBLISHED, Announcement, AnnouncementField
from app.models.board.weekly import WeeklyEntry, WeeklyField, WeekSummary

__all__ = [
    "PUBLISHED",
    "Announcement",
    "AnnouncementField",
    "WeeklyEntry",
    "WeeklyField",
    "WeekSummary",
]
