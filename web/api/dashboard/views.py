"""Dashboard API views - thin layer over services."""

from dataclasses import asdict

from app.container import container

from .schemas import (
    AnnouncementItem,
    ContactStatsResponse,
    DashboardResponse,
    RecentInteractionItem,
    WeekEntryItem,
)


async def get_dashboard() -> DashboardResponse:
    """Get the dashboard overview."""
    data = await container.dashboard.get_dashboard_data()

    return DashboardResponse(
        contact_stats=ContactStatsResponse(**asdict(data.contact_stats)),
        opportunities_by_stage=data.opportunities_by_stage,
        recent_interactions=[
            RecentInteractionItem(
                interaction_id=i.interaction_id,
                interaction_time=i.interaction_time,
                event_type=i.event_type,
                event_title=i.event_title,
                context_name=i.context_name,
                recorder=i.recorder,
            )
            for i in data.recent_interactions
        ],
        announcements=[
            AnnouncementItem(
                id=a.id,
                title=a.title,
                content=a.content,
                creator=a.creator,
                last_update_time=a.last_update_time,
                is_pinned=a.is_pinned,
            )
            for a in data.announcements
        ],
        week_id=data.week_id,
        week_entries=[
            WeekEntryItem(
                record_id=e.record_id,
                date=e.date,
                day=e.day,
                category=e.category,
                theme=e.theme,
                summary=e.summary,
            )
            for e in data.week_entries
        ],
    )
