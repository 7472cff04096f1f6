"""Dependency Injection container - initialized at app startup."""

from datetime import timedelta

from loguru import logger

from app.repositories.board.announcement import AnnouncementReader, AnnouncementWriter
from app.repositories.board.weekly import WeeklyBusinessReader, WeeklyBusinessWriter
from app.repositories.common.cache import CacheStore
from app.repositories.crm.company import CompanyReader, CompanyWriter
from app.repositories.crm.contact import ContactReader, ContactWriter
from app.repositories.crm.event_log import EventLogReader
from app.repositories.crm.interaction import InteractionReader, InteractionWriter
from app.repositories.crm.opportunity import OpportunityReader, OpportunityWriter
from app.repositories.system.system import SystemReader, SystemWriter
from app.services.board.announcement import AnnouncementService
from app.services.board.weekly import WeeklyBusinessService
from app.services.company.service import CompanyService
from app.services.contact.service import ContactService
from app.services.dashboard.service import DashboardService
from app.services.event_log.service import EventLogService
from app.services.interaction.service import InteractionService
from app.services.opportunity.service import OpportunityService
from app.services.system.service import SystemService
from settings import (
    AUTH_SPREADSHEET_ID,
    CACHE_TTL_SECONDS,
    MAX_CONCURRENT,
    SHEETS_ACCESS_TOKEN,
    SHEETS_API_BASE_URL,
    SHEETS_API_TIMEOUT,
    SPREADSHEET_ID,
)
from sheets_client import SheetsTableSource, SheetsValuesClient, TableSource, set_api_config


class Container:
    """Application DI container - holds all singleton instances.

    Wiring order follows the reader dependencies (companies before contacts,
    opportunities before interactions); nothing is constructed on demand.
    """

    _instance = None
    _initialized = False
    _client = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def init(self, source: TableSource | None = None, cache: CacheStore | None = None) -> None:
        """Initialize all dependencies. Call once at app startup."""
        if self._initialized:
            return

        self._client = None
        if source is None:
            set_api_config(SHEETS_API_BASE_URL, SHEETS_API_TIMEOUT, SHEETS_ACCESS_TOKEN)
            self._client = SheetsValuesClient(max_concurrent=MAX_CONCURRENT)
            source = SheetsTableSource(self._client)

        self.cache = cache or CacheStore(ttl=timedelta(seconds=CACHE_TTL_SECONDS))
        sid = SPREADSHEET_ID

        # Readers
        self._company_reader = CompanyReader(source, self.cache, sid)
        self._contact_reader = ContactReader(source, self.cache, sid, self._company_reader)
        self._opportunity_reader = OpportunityReader(source, self.cache, sid)
        self._interaction_reader = InteractionReader(
            source, self.cache, sid, self._opportunity_reader, self._company_reader
        )
        self._event_log_reader = EventLogReader(source, self.cache, sid)
        self._announcement_reader = AnnouncementReader(source, self.cache, sid)
        self._weekly_reader = WeeklyBusinessReader(source, self.cache, sid)
        self._system_reader = SystemReader(source, self.cache, sid, AUTH_SPREADSHEET_ID)

        # Writers
        self._company_writer = CompanyWriter(source, self.cache, sid)
        self._contact_writer = ContactWriter(source, self.cache, sid)
        self._opportunity_writer = OpportunityWriter(source, self.cache, sid)
        self._interaction_writer = InteractionWriter(source, self.cache, sid)
        self._announcement_writer = AnnouncementWriter(source, self.cache, sid)
        self._weekly_writer = WeeklyBusinessWriter(source, self.cache, sid, self._weekly_reader)
        self._system_writer = SystemWriter(source, self.cache, sid, self._system_reader)

        # Services
        self.companies = CompanyService(
            company_reader=self._company_reader,
            company_writer=self._company_writer,
            contact_reader=self._contact_reader,
            opportunity_reader=self._opportunity_reader,
            interaction_reader=self._interaction_reader,
            interaction_writer=self._interaction_writer,
            event_log_reader=self._event_log_reader,
        )
        self.contacts = ContactService(
            contact_reader=self._contact_reader,
            contact_writer=self._contact_writer,
            opportunity_reader=self._opportunity_reader,
        )
        self.opportunities = OpportunityService(
            opportunity_reader=self._opportunity_reader,
            opportunity_writer=self._opportunity_writer,
            contact_reader=self._contact_reader,
            interaction_reader=self._interaction_reader,
            event_log_reader=self._event_log_reader,
        )
        self.interactions = InteractionService(
            interaction_reader=self._interaction_reader,
            interaction_writer=self._interaction_writer,
        )
        self.event_logs = EventLogService(
            event_log_reader=self._event_log_reader,
            opportunity_reader=self._opportunity_reader,
            company_reader=self._company_reader,
            system_reader=self._system_reader,
        )
        self.announcements = AnnouncementService(
            announcement_reader=self._announcement_reader,
            announcement_writer=self._announcement_writer,
        )
        self.weekly = WeeklyBusinessService(
            weekly_reader=self._weekly_reader,
            weekly_writer=self._weekly_writer,
        )
        self.system = SystemService(
            system_reader=self._system_reader,
            system_writer=self._system_writer,
            cache=self.cache,
        )
        self.dashboard = DashboardService(
            contact_service=self.contacts,
            opportunity_reader=self._opportunity_reader,
            interaction_reader=self._interaction_reader,
            announcement_service=self.announcements,
            weekly_service=self.weekly,
        )

        self._initialized = True
        logger.info("Container initialized (cache ttl={}s)", self.cache.ttl.total_seconds())

    async def close(self) -> None:
        """Release the HTTP client and allow a fresh init()."""
        if self._client is not None:
            await self._client.close()
            self._client = None
        self._initialized = False


# Global container instance
container = Container()
