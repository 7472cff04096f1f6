"""Event log service - read side only."""

import asyncio

from app.models.crm.event_log import EventLog, EventLogDetail
from app.models.system.config import EVENT_TYPES, ConfigItem
from app.repositories.crm.company import CompanyReader
from app.repositories.crm.event_log import EventLogReader
from app.repositories.crm.opportunity import OpportunityReader
from app.repositories.system.system import SystemReader
from helpers.joins import build_join_map, company_name_map


class EventLogService:
    def __init__(
        self,
        event_log_reader: EventLogReader,
        opportunity_reader: OpportunityReader,
        company_reader: CompanyReader,
        system_reader: SystemReader,
    ):
        self._events = event_log_reader
        self._opportunities = opportunity_reader
        self._companies = company_reader
        self._system = system_reader

    async def get_all_events(self) -> list[EventLog]:
        return await self._events.get_event_logs()

    async def get_event_by_id(self, event_id: str) -> EventLogDetail | None:
        """Event with opportunity and company names; unresolved names stay empty."""
        event = await self._events.get_event_log_by_id(event_id)
        if event is None:
            return None

        opportunities, companies = await asyncio.gather(
            self._opportunities.get_opportunities(),
            self._companies.get_company_list(),
        )
        opp_names = build_join_map(opportunities, lambda o: o.opportunity_id, lambda o: o.opportunity_name)
        return EventLogDetail.from_event(
            event,
            opportunity_name=opp_names.get(event.opportunity_id, ""),
            company_name=company_name_map(companies).get(event.company_id, ""),
        )

    async def get_event_types(self) -> list[ConfigItem]:
        config = await self._system.get_system_config()
        return config.get(EVENT_TYPES, [])
