"""Contact service."""

from dataclasses import dataclass

from loguru import logger

from app.models.crm.contact import DROPPED, PENDING, PROCESSED, ContactWithCompany, OppContactLink, PotentialContact
from app.repositories.crm.contact import ContactReader, ContactWriter
from app.repositories.crm.opportunity import OpportunityReader
from app.repositories.errors import RecordNotFoundError
from app.services.errors import ConflictError
from helpers.joins import ACTIVE
from helpers.pagination import Page

STATS_SAMPLE = 3000


@dataclass
class ContactStats:
    total: int = 0
    pending: int = 0
    processed: int = 0
    dropped: int = 0


class ContactService:
    """Business cards and official contacts."""

    def __init__(
        self,
        contact_reader: ContactReader,
        contact_writer: ContactWriter,
        opportunity_reader: OpportunityReader,
    ):
        self._contacts = contact_reader
        self._writer = contact_writer
        self._opportunities = opportunity_reader

    async def get_dashboard_stats(self) -> ContactStats:
        """Business card counts by status. A card without status counts as pending."""
        cards = await self._contacts.get_contacts(limit=STATS_SAMPLE)
        return ContactStats(
            total=len(cards),
            pending=sum(1 for c in cards if not c.status or c.status == PENDING),
            processed=sum(1 for c in cards if c.status == PROCESSED),
            dropped=sum(1 for c in cards if c.status == DROPPED),
        )

    async def get_potential_contacts(self, limit: int = 2000) -> list[PotentialContact]:
        cards = await self._contacts.get_contacts(limit=limit)
        return [c for c in cards if c.name or c.company]

    async def search_official_contacts(self, query: str | None = None, page: int = 1) -> Page[ContactWithCompany]:
        return await self._contacts.search_contact_list(query, page)

    async def get_contact_by_id(self, contact_id: str) -> ContactWithCompany | None:
        for contact in await self._contacts.get_contacts_with_company():
            if contact.contact_id == contact_id:
                return contact
        return None

    async def update_contact(self, contact_id: str, data: dict, modifier: str) -> None:
        for contact in await self._contacts.get_contact_list():
            if contact.contact_id == contact_id:
                await self._writer.update_contact(contact, data, modifier)
                return
        raise RecordNotFoundError(f"Contact not found: {contact_id}")

    async def update_potential_contact(self, row_index: int, data: dict, modifier: str) -> None:
        await self._writer.update_potential_contact(row_index, data, modifier)

    async def link_contact_to_opportunity(self, opportunity_id: str, contact_id: str, creator: str) -> str:
        """Link a contact to an opportunity; an existing active link is reused."""
        if await self._opportunities.find_by_id(opportunity_id) is None:
            raise RecordNotFoundError(f"Opportunity not found: {opportunity_id}")

        existing = await self._find_active_link(opportunity_id, contact_id)
        if existing is not None:
            logger.info("Contact {} already linked to {}", contact_id, opportunity_id)
            return existing.link_id

        return await self._writer.link_contact(opportunity_id, contact_id, creator)

    async def unlink_contact_from_opportunity(self, opportunity_id: str, contact_id: str) -> None:
        link = await self._find_active_link(opportunity_id, contact_id)
        if link is None:
            raise ConflictError(f"Contact {contact_id} is not linked to {opportunity_id}")
        await self._writer.unlink_contact(link)

    async def _find_active_link(self, opportunity_id: str, contact_id: str) -> OppContactLink | None:
        for link in await self._contacts.get_all_opp_contact_links():
            if link.opportunity_id == opportunity_id and link.contact_id == contact_id and link.status == ACTIVE:
                return link
        return None
