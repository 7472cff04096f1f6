"""Company service - list with activity, details, guarded writes."""

import asyncio
from dataclasses import dataclass, field

from loguru import logger

from app.models.crm.company import Company, CompanyWithActivity
from app.models.crm.contact import OfficialContact
from app.models.crm.event_log import EventLog
from app.models.crm.interaction import SYSTEM_EVENT, Interaction
from app.models.crm.opportunity import Opportunity
from app.repositories.crm.company import CompanyReader, CompanyWriter
from app.repositories.crm.contact import ContactReader
from app.repositories.crm.event_log import EventLogReader
from app.repositories.crm.interaction import InteractionReader, InteractionWriter
from app.repositories.crm.opportunity import OpportunityReader
from app.repositories.errors import RecordNotFoundError, RepositoryError
from app.services.errors import ConflictError, MissingFieldError
from helpers.dates import newest_first, parse_timestamp, to_iso
from helpers.joins import last_activity_map, match_company, normalize_company_name
from sheets_client.source import TableSourceError

# filter name -> attribute; "all" disables a filter
FILTER_FIELDS = {
    "type": "company_type",
    "stage": "customer_stage",
    "rating": "engagement_rating",
}
SEARCH_FIELDS = ("company_name", "phone", "address", "county", "introduction")


@dataclass
class CompanyDetails:
    company_info: Company | None = None
    related_contacts: list[OfficialContact] = field(default_factory=list)
    related_opportunities: list[Opportunity] = field(default_factory=list)
    interactions: list[Interaction] = field(default_factory=list)
    event_logs: list[EventLog] = field(default_factory=list)


def filter_companies(companies: list[Company], filters: dict) -> list[Company]:
    """In-memory search (`q`) and dropdown filters."""
    if q := (filters.get("q") or "").lower().strip():
        companies = [c for c in companies if any(q in getattr(c, f).lower() for f in SEARCH_FIELDS)]

    for name, attr in FILTER_FIELDS.items():
        value = filters.get(name)
        if value and value != "all":
            companies = [c for c in companies if getattr(c, attr) == value]
    return companies


def with_activity(
    companies: list[Company],
    interactions: list[Interaction],
    event_logs: list[EventLog],
) -> list[CompanyWithActivity]:
    """Attach last activity (creation time as fallback) and sort most recent first."""
    latest = last_activity_map(
        ((i.company_id, i.interaction_time) for i in interactions),
        ((e.company_id, e.created_time) for e in event_logs),
    )

    rows = []
    for company in companies:
        ts = latest.get(company.company_id) or parse_timestamp(company.created_time)
        rows.append(CompanyWithActivity.from_company(company, to_iso(ts)))
    return sorted(rows, key=newest_first(lambda c: c.last_activity))


class CompanyService:
    """Company business logic."""

    def __init__(
        self,
        company_reader: CompanyReader,
        company_writer: CompanyWriter,
        contact_reader: ContactReader,
        opportunity_reader: OpportunityReader,
        interaction_reader: InteractionReader,
        interaction_writer: InteractionWriter,
        event_log_reader: EventLogReader,
    ):
        self._companies = company_reader
        self._company_writer = company_writer
        self._contacts = contact_reader
        self._opportunities = opportunity_reader
        self._interactions = interaction_reader
        self._interaction_writer = interaction_writer
        self._event_logs = event_log_reader

    async def _require(self, name: str) -> Company:
        company = await self._companies.find_by_name(name)
        if company is None:
            raise RecordNotFoundError(f"Company not found: {name}")
        return company

    async def create_company(self, name: str, data: dict, modifier: str) -> tuple[Company, bool]:
        """Create a company unless one with the same normalized name exists.

        Returns (company, created).
        """
        if not normalize_company_name(name):
            raise MissingFieldError("Company name is required")

        existing = await self._companies.find_by_name(name)
        if existing is not None:
            logger.info("Company already exists: {} -> {}", name, existing.company_id)
            return existing, False

        company_id = await self._company_writer.create_company({**data, "company_name": name}, modifier)
        company = await self._companies.find_by_name(name)
        if company is None:
            raise RecordNotFoundError(f"Company {company_id} was written but could not be read back")
        return company, True

    async def get_company_list_with_activity(self, filters: dict | None = None) -> list[CompanyWithActivity]:
        """Filtered companies, most recent activity first.

        An unreadable activity feed reads as empty, so every company then falls
        back to its creation time.
        """
        companies = filter_companies(await self._companies.get_company_list(), filters or {})
        interactions, event_logs = await asyncio.gather(
            self._interactions.get_interactions(),
            self._event_logs.get_event_logs(),
        )
        return with_activity(companies, interactions, event_logs)

    async def get_company_details(self, name: str) -> CompanyDetails:
        """Company with its contacts, opportunities, interactions and event logs."""
        companies, contacts, opportunities, interactions, event_logs = await asyncio.gather(
            self._companies.get_company_list(),
            self._contacts.get_contact_list(),
            self._opportunities.get_opportunities(),
            self._interactions.get_interactions(),
            self._event_logs.get_event_logs(),
        )

        company = match_company(companies, name)
        if company is None:
            return CompanyDetails()

        target = normalize_company_name(company.company_name)
        related_opps = [o for o in opportunities if normalize_company_name(o.customer_company) == target]
        opp_ids = {o.opportunity_id for o in related_opps}

        def related(record) -> bool:
            return record.company_id == company.company_id or (
                bool(record.opportunity_id) and record.opportunity_id in opp_ids
            )

        return CompanyDetails(
            company_info=company,
            related_contacts=[c for c in contacts if c.company_id == company.company_id],
            related_opportunities=related_opps,
            interactions=sorted(filter(related, interactions), key=newest_first(lambda i: i.interaction_time)),
            event_logs=sorted(filter(related, event_logs), key=newest_first(lambda e: e.created_time)),
        )

    async def update_company(self, name: str, data: dict, modifier: str) -> None:
        company = await self._require(name)
        await self._company_writer.update_company(company, data, modifier)
        await self._log_system_event(company.company_id, "資料更新", "公司資料已更新。", modifier)

    async def delete_company(self, name: str) -> None:
        """Delete a company; refused while any opportunity still names it."""
        target = normalize_company_name(name)
        related = [
            o for o in await self._opportunities.get_opportunities() if normalize_company_name(o.customer_company) == target
        ]
        if related:
            raise ConflictError(
                f"Company {name} still has {len(related)} opportunities (e.g. {related[0].opportunity_name})"
            )

        company = await self._require(name)
        await self._company_writer.delete_company(company)

    async def _log_system_event(self, company_id: str, title: str, summary: str, modifier: str) -> None:
        """Best-effort audit interaction; failure is logged, not raised."""
        try:
            await self._interaction_writer.create_interaction(
                {
                    "company_id": company_id,
                    "event_type": SYSTEM_EVENT,
                    "event_title": title,
                    "content_summary": summary,
                },
                modifier,
            )
        except (TableSourceError, RepositoryError) as e:
            logger.warning("System event for {} not logged: {}", company_id, e)
