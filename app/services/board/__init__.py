"""Board services - announcements and weekly business."""

from app.services.board.announcement import AnnouncementService
from app.services.board.weekly import WeeklyBusinessService

__all__ = ["AnnouncementService", "WeeklyBusinessService"]
