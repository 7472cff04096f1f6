"""Contact repository - business cards, official contacts and opportunity links."""

import asyncio

from loguru import logger

from app.models.crm.contact import (
    ContactWithCompany,
    LinkedContact,
    OfficialContact,
    OfficialContactField,
    OppContactLink,
    OppContactLinkField,
    PotentialContact,
    PotentialContactField,
)
from app.repositories.base import BaseReader, BaseWriter, new_id
from app.repositories.common.cache import CacheKey
from app.repositories.crm.company import CompanyReader
from helpers.dates import newest_first, to_iso, utc_now
from helpers.joins import ACTIVE, company_name_map, resolve_linked_contacts
from helpers.pagination import Page, paginate
from settings import (
    CONTACTS_PER_PAGE,
    SHEET_CONTACT_LIST,
    SHEET_CONTACTS,
    SHEET_OPP_CONTACT_LINK,
)

INACTIVE = "inactive"
MANUAL_SOURCE = "MANUAL"


class ContactReader(BaseReader):
    """Reader for the three contact sheets."""

    cache_keys = (CacheKey.CONTACTS, CacheKey.CONTACT_LIST, CacheKey.OPP_CONTACT_LINKS)

    def __init__(self, source, cache, spreadsheet_id: str, company_reader: CompanyReader):
        super().__init__(source, cache, spreadsheet_id)
        self._companies = company_reader

    async def get_contacts(self, limit: int = 2000) -> list[PotentialContact]:
        """Business cards, newest first."""
        rng = self._range(SHEET_CONTACTS, "Y")
        contacts = await self.fetch_and_cache(
            CacheKey.CONTACTS,
            rng,
            lambda row, i: PotentialContact.from_row(row, i + rng.start_row),
            sorter=newest_first(lambda c: c.created_time),
        )
        return contacts[:limit]

    async def get_contact_list(self) -> list[OfficialContact]:
        """Official contacts in sheet order."""
        rng = self._range(SHEET_CONTACT_LIST, "M")
        return await self.fetch_and_cache(
            CacheKey.CONTACT_LIST,
            rng,
            lambda row, i: OfficialContact.from_row(row, i + rng.start_row),
        )

    async def get_all_opp_contact_links(self) -> list[OppContactLink]:
        rng = self._range(SHEET_OPP_CONTACT_LINK, "F")
        return await self.fetch_and_cache(
            CacheKey.OPP_CONTACT_LINKS,
            rng,
            lambda row, i: OppContactLink.from_row(row, i + rng.start_row),
        )

    async def get_linked_contacts(self, opportunity_id: str) -> list[LinkedContact]:
        """Contacts actively linked to an opportunity, with company name and card image."""
        links, contacts, companies, cards = await asyncio.gather(
            self.get_all_opp_contact_links(),
            self.get_contact_list(),
            self._companies.get_company_list(),
            self.get_contacts(limit=9999),
        )
        return resolve_linked_contacts(opportunity_id, contacts, links, cards, companies)

    async def search_contacts(self, query: str | None = None) -> list[PotentialContact]:
        """Business cards matching `query` on name or company; blank rows dropped."""
        contacts = [c for c in await self.get_contacts() if c.name or c.company]
        if query:
            term = query.lower()
            contacts = [c for c in contacts if term in c.name.lower() or term in c.company.lower()]
        return contacts

    async def get_contacts_with_company(self) -> list[ContactWithCompany]:
        """Official contacts with company ids resolved; an unknown id is shown as-is."""
        contacts, companies = await asyncio.gather(
            self.get_contact_list(),
            self._companies.get_company_list(),
        )
        names = company_name_map(companies)
        return [ContactWithCompany.from_official(c, names.get(c.company_id, c.company_id)) for c in contacts]

    async def search_contact_list(self, query: str | None = None, page: int = 1) -> Page[ContactWithCompany]:
        """Official contacts with company names, filtered and paginated."""
        rows = await self.get_contacts_with_company()

        if query:
            term = query.lower()
            rows = [c for c in rows if term in c.name.lower() or term in c.company_name.lower()]

        return paginate(rows, page, CONTACTS_PER_PAGE)


class ContactWriter(BaseWriter):
    """Writer for the contact sheets."""

    invalidates = ()

    async def create_contact(self, data: dict) -> str:
        """Append an official contact. Returns its id."""
        F = OfficialContactField
        now = to_iso(utc_now())
        contact_id = data.get("contact_id") or new_id("C")

        row = [""] * len(F)
        row[F.ID] = contact_id
        row[F.SOURCE_ID] = data.get("source_id") or MANUAL_SOURCE
        row[F.NAME] = data.get("name", "")
        row[F.COMPANY_ID] = data.get("company_id", "")
        row[F.DEPARTMENT] = data.get("department", "")
        row[F.POSITION] = data.get("position", "")
        row[F.MOBILE] = data.get("mobile", "")
        row[F.PHONE] = data.get("phone", "")
        row[F.EMAIL] = data.get("email", "")
        row[F.CREATED_TIME] = now
        row[F.LAST_UPDATE_TIME] = now
        row[F.CREATOR] = data.get("creator", "System")
        row[F.LAST_MODIFIER] = data.get("creator", "System")

        await self._append(self._range(SHEET_CONTACT_LIST, "M"), row)
        self._committed(CacheKey.CONTACT_LIST)
        logger.info("Contact created: {} ({})", row[F.NAME], contact_id)
        return contact_id

    async def update_contact(self, contact: OfficialContact, data: dict, modifier: str) -> None:
        F = OfficialContactField
        rng = self._range(SHEET_CONTACT_LIST, "M")
        row = await self._read_row(rng, contact.row_index, F.ID, contact.contact_id)

        for field, column in (
            ("name", F.NAME),
            ("company_id", F.COMPANY_ID),
            ("department", F.DEPARTMENT),
            ("position", F.POSITION),
            ("mobile", F.MOBILE),
            ("phone", F.PHONE),
            ("email", F.EMAIL),
        ):
            if field in data:
                row[column] = data[field]
        row[F.LAST_UPDATE_TIME] = to_iso(utc_now())
        row[F.LAST_MODIFIER] = modifier

        await self._update(rng, contact.row_index, row)
        self._committed(CacheKey.CONTACT_LIST)
        logger.info("Contact updated: {} by {}", contact.contact_id, modifier)

    async def update_potential_contact(self, row_index: int, data: dict, modifier: str) -> None:
        """Patch a business card row in place; notes are appended, not replaced."""
        F = PotentialContactField
        rng = self._range(SHEET_CONTACTS, "Y")
        row = await self._read_row(rng, row_index)

        for field, column in (
            ("name", F.NAME),
            ("company", F.COMPANY),
            ("position", F.POSITION),
            ("mobile", F.MOBILE),
            ("email", F.EMAIL),
            ("status", F.STATUS),
        ):
            if field in data:
                row[column] = data[field]

        if data.get("notes"):
            entry = f"[{modifier} {utc_now():%Y/%m/%d}] {data['notes']}"
            old = row[F.NOTES]
            row[F.NOTES] = f"{old}\n{entry}" if old else entry

        await self._update(rng, row_index, row)
        self._committed(CacheKey.CONTACTS)
        logger.info("Potential contact updated: row {} by {}", row_index, modifier)

    async def link_contact(self, opportunity_id: str, contact_id: str, creator: str) -> str:
        F = OppContactLinkField
        link_id = new_id("LNK")

        row = [""] * len(F)
        row[F.ID] = link_id
        row[F.OPPORTUNITY_ID] = opportunity_id
        row[F.CONTACT_ID] = contact_id
        row[F.CREATE_TIME] = to_iso(utc_now())
        row[F.STATUS] = ACTIVE
        row[F.CREATOR] = creator

        await self._append(self._range(SHEET_OPP_CONTACT_LINK, "F"), row)
        self._committed(CacheKey.OPP_CONTACT_LINKS)
        logger.info("Linked contact {} to opportunity {}", contact_id, opportunity_id)
        return link_id

    async def unlink_contact(self, link: OppContactLink) -> None:
        """Soft-delete: the link row stays, marked inactive."""
        F = OppContactLinkField
        rng = self._range(SHEET_OPP_CONTACT_LINK, "F")
        row = await self._read_row(rng, link.row_index, F.ID, link.link_id)
        row[F.STATUS] = INACTIVE

        await self._update(rng, link.row_index, row)
        self._committed(CacheKey.OPP_CONTACT_LINKS)
        logger.info("Unlinked contact {} from opportunity {}", link.contact_id, link.opportunity_id)
