"""Dashboard API response schemas."""

from pydantic import BaseModel


class ContactStatsResponse(BaseModel):
    total: int
    pending: int
    processed: int
    dropped: int


class RecentInteractionItem(BaseModel):
    interaction_id: str
    interaction_time: str
    event_type: str
    event_title: str
    context_name: str
    recorder: str


class AnnouncementItem(BaseModel):
    id: str
    title: str
    content: str
    creator: str
    last_update_time: str
    is_pinned: bool


class WeekEntryItem(BaseModel):
    record_id: str
    date: str
    day: int
    category: str
    theme: str
    summary: str


class DashboardResponse(BaseModel):
    """Dashboard overview response."""

    contact_stats: ContactStatsResponse
    opportunities_by_stage: dict[str, int]
    recent_interactions: list[RecentInteractionItem]
    announcements: list[AnnouncementItem]
    week_id: str
    week_entries: list[WeekEntryItem]
