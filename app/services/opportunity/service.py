"""Opportunity service."""

import asyncio
from dataclasses import dataclass, field

from app.models.crm.contact import LinkedContact
from app.models.crm.event_log import EventLog
from app.models.crm.interaction import Interaction
from app.models.crm.opportunity import Opportunity
from app.repositories.crm.contact import ContactReader
from app.repositories.crm.event_log import EventLogReader
from app.repositories.crm.interaction import InteractionReader
from app.repositories.crm.opportunity import OpportunityReader, OpportunityWriter
from app.repositories.errors import RecordNotFoundError
from app.services.errors import MissingFieldError


@dataclass
class OpportunityDetails:
    opportunity_info: Opportunity
    linked_contacts: list[LinkedContact] = field(default_factory=list)
    interactions: list[Interaction] = field(default_factory=list)
    event_logs: list[EventLog] = field(default_factory=list)


class OpportunityService:
    def __init__(
        self,
        opportunity_reader: OpportunityReader,
        opportunity_writer: OpportunityWriter,
        contact_reader: ContactReader,
        interaction_reader: InteractionReader,
        event_log_reader: EventLogReader,
    ):
        self._opportunities = opportunity_reader
        self._writer = opportunity_writer
        self._contacts = contact_reader
        self._interactions = interaction_reader
        self._event_logs = event_log_reader

    async def _require(self, opportunity_id: str) -> Opportunity:
        opp = await self._opportunities.find_by_id(opportunity_id)
        if opp is None:
            raise RecordNotFoundError(f"Opportunity not found: {opportunity_id}")
        return opp

    async def get_opportunity_details(self, opportunity_id: str) -> OpportunityDetails:
        """Opportunity with linked contacts, interactions and event logs (each newest first)."""
        opp = await self._require(opportunity_id)
        contacts, interactions, event_logs = await asyncio.gather(
            self._contacts.get_linked_contacts(opportunity_id),
            self._interactions.get_interactions(),
            self._event_logs.get_event_logs(),
        )
        return OpportunityDetails(
            opportunity_info=opp,
            linked_contacts=contacts,
            interactions=[i for i in interactions if i.opportunity_id == opportunity_id],
            event_logs=[e for e in event_logs if e.opportunity_id == opportunity_id],
        )

    async def create_opportunity(self, data: dict, modifier: str) -> Opportunity:
        if not (data.get("opportunity_name") or "").strip():
            raise MissingFieldError("Opportunity name is required")
        return await self._writer.create_opportunity(data, modifier)

    async def update_opportunity(self, opportunity_id: str, data: dict, modifier: str) -> None:
        opp = await self._require(opportunity_id)
        await self._writer.update_opportunity(opp, data, modifier)
