"""Dashboard service - one concurrent fan-out over the cached datasets."""

import asyncio
from collections import Counter
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, TypeVar

from loguru import logger

from app.models.board.announcement import Announcement
from app.models.board.weekly import WeeklyEntry
from app.models.crm.interaction import ContextualInteraction
from app.models.crm.opportunity import ARCHIVED
from app.repositories.crm.interaction import InteractionReader
from app.repositories.crm.opportunity import OpportunityReader
from app.repositories.errors import RepositoryError
from app.services.board.announcement import AnnouncementService
from app.services.board.weekly import WeeklyBusinessService
from app.services.contact.service import ContactService, ContactStats
from helpers.dates import utc_now, week_id
from sheets_client.source import TableSourceError

T = TypeVar("T")

RECENT_INTERACTIONS = 5
UNSTAGED = "未分類"


@dataclass
class DashboardData:
    contact_stats: ContactStats = field(default_factory=ContactStats)
    opportunities_by_stage: dict[str, int] = field(default_factory=dict)
    recent_interactions: list[ContextualInteraction] = field(default_factory=list)
    announcements: list[Announcement] = field(default_factory=list)
    week_id: str = ""
    week_entries: list[WeeklyEntry] = field(default_factory=list)


async def _feed(name: str, load: Callable[[], Awaitable[T]], empty: Callable[[], T]) -> T:
    """Run one dashboard feed; a failing feed yields its empty value."""
    try:
        return await load()
    except (TableSourceError, RepositoryError, ValueError) as e:
        logger.error("Dashboard feed {} failed: {}", name, e)
        return empty()


class DashboardService:
    """Dashboard business logic."""

    def __init__(
        self,
        contact_service: ContactService,
        opportunity_reader: OpportunityReader,
        interaction_reader: InteractionReader,
        announcement_service: AnnouncementService,
        weekly_service: WeeklyBusinessService,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._contacts = contact_service
        self._opportunities = opportunity_reader
        self._interactions = interaction_reader
        self._announcements = announcement_service
        self._weekly = weekly_service
        self._clock = clock

    async def _opportunities_by_stage(self) -> dict[str, int]:
        opps = await self._opportunities.get_opportunities()
        return dict(Counter(o.current_stage or UNSTAGED for o in opps if o.current_status != ARCHIVED))

    async def _recent_interactions(self) -> list[ContextualInteraction]:
        recent = await self._interactions.get_recent_interactions(RECENT_INTERACTIONS)
        return await self._interactions.with_context(recent)

    async def get_dashboard_data(self) -> DashboardData:
        """All dashboard feeds, fetched concurrently."""
        this_week = week_id(self._clock().date())
        results: list[Any] = await asyncio.gather(
            _feed("contact_stats", self._contacts.get_dashboard_stats, ContactStats),
            _feed("opportunities_by_stage", self._opportunities_by_stage, dict),
            _feed("recent_interactions", self._recent_interactions, list),
            _feed("announcements", self._announcements.get_announcements, list),
            _feed("week_entries", lambda: self._weekly.get_entries_for_week(this_week), list),
        )
        stats, by_stage, recent, announcements, entries = results

        logger.debug("Dashboard assembled for week {}", this_week)
        return DashboardData(
            contact_stats=stats,
            opportunities_by_stage=by_stage,
            recent_interactions=recent,
            announcements=announcements,
            week_id=this_week,
            week_entries=entries,
        )
