"""Tests for the service layer over an in-memory table source."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from app.models.board.announcement import PUBLISHED, AnnouncementField
from app.models.board.weekly import WeeklyField
from app.models.crm.company import CompanyField
from app.models.crm.contact import OfficialContactField, OppContactLinkField, PotentialContactField
from app.models.crm.event_log import EventLogField
from app.models.crm.interaction import SYSTEM_EVENT, InteractionField
from app.models.crm.opportunity import ARCHIVED, OpportunityField
from app.repositories import (
    AnnouncementReader,
    AnnouncementWriter,
    CompanyReader,
    CompanyWriter,
    ContactReader,
    ContactWriter,
    EventLogReader,
    InteractionReader,
    InteractionWriter,
    OpportunityReader,
    OpportunityWriter,
    RecordNotFoundError,
    RepositoryError,
    SystemReader,
    SystemWriter,
    WeeklyBusinessReader,
    WeeklyBusinessWriter,
)
from app.services import (
    AnnouncementService,
    CompanyService,
    ContactService,
    DashboardService,
    EventLogService,
    InteractionService,
    OpportunityService,
    SystemService,
    WeeklyBusinessService,
)
from app.services.errors import ConflictError, MissingFieldError
from settings import (
    SHEET_ANNOUNCEMENTS,
    SHEET_COMPANIES,
    SHEET_CONTACT_LIST,
    SHEET_CONTACTS,
    SHEET_EVENT_LOGS,
    SHEET_INTERACTIONS,
    SHEET_OPP_CONTACT_LINK,
    SHEET_OPPORTUNITIES,
    SHEET_SYSTEM_CONFIG,
    SHEET_WEEKLY_BUSINESS,
)

SID = "sheet-main"


@pytest.fixture
def repos(source, cache):
    companies = CompanyReader(source, cache, SID)
    opportunities = OpportunityReader(source, cache, SID)
    system = SystemReader(source, cache, SID)
    weekly = WeeklyBusinessReader(source, cache, SID)
    return SimpleNamespace(
        companies=companies,
        company_writer=CompanyWriter(source, cache, SID),
        contacts=ContactReader(source, cache, SID, companies),
        contact_writer=ContactWriter(source, cache, SID),
        opportunities=opportunities,
        opportunity_writer=OpportunityWriter(source, cache, SID),
        interactions=InteractionReader(source, cache, SID, opportunities, companies),
        interaction_writer=InteractionWriter(source, cache, SID),
        event_logs=EventLogReader(source, cache, SID),
        announcements=AnnouncementReader(source, cache, SID),
        announcement_writer=AnnouncementWriter(source, cache, SID),
        weekly=weekly,
        weekly_writer=WeeklyBusinessWriter(source, cache, SID, weekly),
        system=system,
        system_writer=SystemWriter(source, cache, SID, system),
    )


@pytest.fixture
def crm_data(source, make_row):
    C = CompanyField
    source.load(
        SHEET_COMPANIES,
        [
            make_row(C, ID="COM1", NAME="ACME Co., Ltd.", CREATED_TIME="2025-06-01T00:00:00Z", TYPE="maker"),
            make_row(C, ID="COM2", NAME="Globex", CREATED_TIME="2025-07-01T00:00:00Z", TYPE="trader"),
            make_row(C, ID="COM3", NAME="Initech", CREATED_TIME="2025-08-01T00:00:00Z", TYPE="maker"),
        ],
    )
    O = OpportunityField
    source.load(
        SHEET_OPPORTUNITIES,
        [
            make_row(O, ID="OPP1", NAME="Line upgrade", CUSTOMER_COMPANY="ACME", CURRENT_STAGE="proposal",
                     CREATED_TIME="2026-01-02T00:00:00Z"),
            make_row(O, ID="OPP2", NAME="Old deal", CUSTOMER_COMPANY="Initech", CURRENT_STATUS=ARCHIVED,
                     CURRENT_STAGE="won", CREATED_TIME="2025-01-01T00:00:00Z"),
            make_row(O, ID="OPP3", NAME="Pilot", CUSTOMER_COMPANY="Initech", CREATED_TIME="2026-01-04T00:00:00Z"),
        ],
    )
    I = InteractionField
    source.load(
        SHEET_INTERACTIONS,
        [
            make_row(I, ID="I1", OPPORTUNITY_ID="OPP1", INTERACTION_TIME="2026-01-10T00:00:00Z"),
            make_row(I, ID="I2", COMPANY_ID="COM1", INTERACTION_TIME="2026-01-08T00:00:00Z"),
            make_row(I, ID="I3", COMPANY_ID="COM3", INTERACTION_TIME="2026-01-11T00:00:00Z"),
        ],
    )
    E = EventLogField
    source.load(
        SHEET_EVENT_LOGS,
        [
            make_row(E, ID="E1", OPPORTUNITY_ID="OPP1", COMPANY_ID="COM1", CREATED_TIME="2026-01-09T00:00:00Z"),
            make_row(E, ID="E2", COMPANY_ID="COM2", CREATED_TIME="2025-12-01T00:00:00Z"),
            make_row(E, ID="E3", OPPORTUNITY_ID="OPP404", COMPANY_ID="COM404", CREATED_TIME="2025-11-01T00:00:00Z"),
        ],
    )
    source.load(
        SHEET_CONTACT_LIST,
        [
            make_row(OfficialContactField, ID="CT1", NAME="Alice", COMPANY_ID="COM1"),
            make_row(OfficialContactField, ID="CT2", NAME="Bob", COMPANY_ID="COM2"),
        ],
    )
    source.load(
        SHEET_OPP_CONTACT_LINK,
        [make_row(OppContactLinkField, ID="L1", OPPORTUNITY_ID="OPP1", CONTACT_ID="CT1", STATUS="active")],
    )
    P = PotentialContactField
    source.load(
        SHEET_CONTACTS,
        [
            make_row(P, NAME="Alice", COMPANY="ACME"),
            make_row(P, NAME="Bob", COMPANY="Globex", STATUS="Pending"),
            make_row(P, NAME="Cid", COMPANY="Initech", STATUS="Processed"),
            make_row(P, NAME="Dan", COMPANY="Initech", STATUS="Processed"),
            make_row(P, NAME="Eve", COMPANY="Hooli", STATUS="Dropped"),
        ],
    )


@pytest.fixture
def company_service(repos, crm_data):
    return CompanyService(
        company_reader=repos.companies,
        company_writer=repos.company_writer,
        contact_reader=repos.contacts,
        opportunity_reader=repos.opportunities,
        interaction_reader=repos.interactions,
        interaction_writer=repos.interaction_writer,
        event_log_reader=repos.event_logs,
    )


@pytest.fixture
def contact_service(repos, crm_data):
    return ContactService(repos.contacts, repos.contact_writer, repos.opportunities)


class TestCompanyService:
    @pytest.mark.asyncio
    async def test_create_returns_existing_for_same_normalized_name(self, company_service, source):
        company, created = await company_service.create_company("acme inc", {}, "amy")
        assert (company.company_id, created) == ("COM1", False)
        assert not [op for op, _ in source.calls if op == "append"]

    @pytest.mark.asyncio
    async def test_create_new(self, company_service, source):
        company, created = await company_service.create_company("Hooli", {"county": "Taipei"}, "amy")
        assert created is True
        assert company.company_name == "Hooli"
        assert source.rows(SHEET_COMPANIES)[-1][CompanyField.COUNTY] == "Taipei"

    @pytest.mark.asyncio
    async def test_created_company_is_writable(self, company_service, repos, source):
        company, _ = await company_service.create_company("Hooli", {}, "amy")
        assert company.row_index == 5

        await repos.company_writer.update_company(company, {"phone": "555"}, "amy")
        assert source.rows(SHEET_COMPANIES)[4][CompanyField.PHONE] == "555"

    @pytest.mark.asyncio
    async def test_create_requires_name(self, company_service):
        with pytest.raises(MissingFieldError):
            await company_service.create_company("  ", {}, "amy")

    @pytest.mark.asyncio
    async def test_list_by_last_activity(self, company_service):
        result = await company_service.get_company_list_with_activity()
        assert [(c.company_id, c.last_activity) for c in result] == [
            ("COM3", "2026-01-11T00:00:00.000Z"),
            ("COM1", "2026-01-09T00:00:00.000Z"),
            ("COM2", "2025-12-01T00:00:00.000Z"),
        ]

    @pytest.mark.asyncio
    async def test_list_falls_back_to_created_time(self, company_service, source):
        source.load(SHEET_INTERACTIONS, [])
        source.load(SHEET_EVENT_LOGS, [])
        result = await company_service.get_company_list_with_activity()
        assert [c.company_id for c in result] == ["COM3", "COM2", "COM1"]
        assert result[0].last_activity == "2025-08-01T00:00:00.000Z"

    @pytest.mark.asyncio
    async def test_list_filters(self, company_service):
        result = await company_service.get_company_list_with_activity({"type": "maker", "q": "acme"})
        assert [c.company_id for c in result] == ["COM1"]
        result = await company_service.get_company_list_with_activity({"type": "all"})
        assert len(result) == 3

    @pytest.mark.asyncio
    async def test_details(self, company_service):
        details = await company_service.get_company_details("ACME")
        assert details.company_info.company_id == "COM1"
        assert [c.contact_id for c in details.related_contacts] == ["CT1"]
        assert [o.opportunity_id for o in details.related_opportunities] == ["OPP1"]
        assert [i.interaction_id for i in details.interactions] == ["I1", "I2"]
        assert [e.event_id for e in details.event_logs] == ["E1"]

    @pytest.mark.asyncio
    async def test_details_unknown_company(self, company_service):
        details = await company_service.get_company_details("Nobody")
        assert details.company_info is None
        assert details.interactions == []

    @pytest.mark.asyncio
    async def test_update_logs_system_event(self, company_service, source):
        await company_service.update_company("Globex", {"phone": "02-1234"}, "amy")
        assert source.rows(SHEET_COMPANIES)[2][CompanyField.PHONE] == "02-1234"
        logged = source.rows(SHEET_INTERACTIONS)[-1]
        assert logged[InteractionField.COMPANY_ID] == "COM2"
        assert logged[InteractionField.EVENT_TYPE] == SYSTEM_EVENT

    @pytest.mark.asyncio
    async def test_delete_refused_while_referenced(self, company_service, source):
        with pytest.raises(ConflictError):
            await company_service.delete_company("ACME Co., Ltd.")
        assert not [op for op, _ in source.calls if op == "delete"]

    @pytest.mark.asyncio
    async def test_delete(self, company_service, source):
        await company_service.delete_company("Globex")
        assert [r[CompanyField.ID] for r in source.rows(SHEET_COMPANIES)[1:]] == ["COM1", "COM3"]

    @pytest.mark.asyncio
    async def test_update_unknown(self, company_service):
        with pytest.raises(RecordNotFoundError):
            await company_service.update_company("Nobody", {}, "amy")


class TestContactService:
    @pytest.mark.asyncio
    async def test_dashboard_stats(self, contact_service):
        stats = await contact_service.get_dashboard_stats()
        assert (stats.total, stats.pending, stats.processed, stats.dropped) == (5, 2, 2, 1)

    @pytest.mark.asyncio
    async def test_get_contact_by_id(self, contact_service):
        contact = await contact_service.get_contact_by_id("CT2")
        assert contact.name == "Bob"
        assert contact.company_name == "Globex"
        assert await contact_service.get_contact_by_id("CT9") is None

    @pytest.mark.asyncio
    async def test_existing_link_reused(self, contact_service, source):
        assert await contact_service.link_contact_to_opportunity("OPP1", "CT1", "amy") == "L1"
        assert not [op for op, _ in source.calls if op == "append"]

    @pytest.mark.asyncio
    async def test_link_unknown_opportunity(self, contact_service):
        with pytest.raises(RecordNotFoundError):
            await contact_service.link_contact_to_opportunity("OPP404", "CT1", "amy")

    @pytest.mark.asyncio
    async def test_unlink(self, contact_service, repos):
        await contact_service.unlink_contact_from_opportunity("OPP1", "CT1")
        assert await repos.contacts.get_linked_contacts("OPP1") == []
        with pytest.raises(ConflictError):
            await contact_service.unlink_contact_from_opportunity("OPP1", "CT1")

    @pytest.mark.asyncio
    async def test_update_unknown_contact(self, contact_service):
        with pytest.raises(RecordNotFoundError):
            await contact_service.update_contact("CT9", {"name": "x"}, "amy")


class TestOpportunityService:
    @pytest.fixture
    def service(self, repos, crm_data):
        return OpportunityService(
            repos.opportunities, repos.opportunity_writer, repos.contacts, repos.interactions, repos.event_logs
        )

    @pytest.mark.asyncio
    async def test_details(self, service):
        details = await service.get_opportunity_details("OPP1")
        assert details.opportunity_info.opportunity_name == "Line upgrade"
        assert [c.name for c in details.linked_contacts] == ["Alice"]
        assert [i.interaction_id for i in details.interactions] == ["I1"]
        assert [e.event_id for e in details.event_logs] == ["E1"]

    @pytest.mark.asyncio
    async def test_missing(self, service):
        with pytest.raises(RecordNotFoundError):
            await service.get_opportunity_details("OPP404")

    @pytest.mark.asyncio
    async def test_create_requires_name(self, service):
        with pytest.raises(MissingFieldError):
            await service.create_opportunity({"opportunity_name": ""}, "amy")


class TestInteractionService:
    @pytest.fixture
    def service(self, repos, crm_data):
        return InteractionService(repos.interactions, repos.interaction_writer)

    @pytest.mark.asyncio
    async def test_by_opportunity(self, service):
        result = await service.get_interactions_by_opportunity("OPP1")
        assert [(i.interaction_id, i.context_name) for i in result] == [("I1", "Line upgrade")]

    @pytest.mark.asyncio
    async def test_by_company(self, service):
        result = await service.get_interactions_by_company("COM1")
        assert [(i.interaction_id, i.context_name) for i in result] == [("I2", "ACME Co., Ltd.")]

    @pytest.mark.asyncio
    async def test_search_fetch_all(self, service):
        page = await service.search_interactions(fetch_all=True)
        assert [i.interaction_id for i in page.data] == ["I3", "I1", "I2"]

    @pytest.mark.asyncio
    async def test_update_by_id(self, service, source):
        await service.update_interaction("I2", {"event_title": "Call"}, "amy")
        assert source.rows(SHEET_INTERACTIONS)[2][InteractionField.EVENT_TITLE] == "Call"

    @pytest.mark.asyncio
    async def test_delete_by_id(self, service, source):
        await service.delete_interaction("I1")
        assert [r[InteractionField.ID] for r in source.rows(SHEET_INTERACTIONS)[1:]] == ["I2", "I3"]

    @pytest.mark.asyncio
    async def test_delete_unknown(self, service):
        with pytest.raises(RecordNotFoundError):
            await service.delete_interaction("I404")

    @pytest.mark.asyncio
    async def test_create_returns_id(self, service, source):
        new_id = await service.create_interaction({"company_id": "COM2", "event_title": "Visit"}, "amy")
        assert new_id.startswith("INT")
        assert source.rows(SHEET_INTERACTIONS)[-1][InteractionField.RECORDER] == "amy"


class TestEventLogService:
    @pytest.mark.asyncio
    async def test_names_resolved(self, repos, crm_data, source):
        source.load(SHEET_SYSTEM_CONFIG, [])
        service = EventLogService(repos.event_logs, repos.opportunities, repos.companies, repos.system)

        detail = await service.get_event_by_id("E1")
        assert (detail.opportunity_name, detail.company_name) == ("Line upgrade", "ACME Co., Ltd.")

        orphan = await service.get_event_by_id("E3")
        assert (orphan.opportunity_name, orphan.company_name) == ("", "")

        assert await service.get_event_by_id("E9") is None
        assert len(await service.get_event_types()) == 5


class TestAnnouncementService:
    @pytest.fixture
    def service(self, repos, source, make_row):
        F = AnnouncementField
        source.load(
            SHEET_ANNOUNCEMENTS,
            [
                make_row(F, ID="A1", TITLE="Live", STATUS=PUBLISHED, LAST_UPDATE_TIME="2026-01-10T00:00:00Z"),
                make_row(F, ID="A2", TITLE="Draft", STATUS="草稿", LAST_UPDATE_TIME="2026-01-12T00:00:00Z"),
            ],
        )
        return AnnouncementService(repos.announcements, repos.announcement_writer)

    @pytest.mark.asyncio
    async def test_published_only(self, service):
        assert [a.id for a in await service.get_announcements()] == ["A1"]

    @pytest.mark.asyncio
    async def test_title_required(self, service):
        with pytest.raises(MissingFieldError):
            await service.create_announcement({"title": " "}, "amy")

    @pytest.mark.asyncio
    async def test_update_by_id(self, service, source):
        await service.update_announcement("A2", {"status": PUBLISHED}, "amy")
        assert [a.id for a in await service.get_announcements()] == ["A2", "A1"]

    @pytest.mark.asyncio
    async def test_delete_unknown(self, service):
        with pytest.raises(RecordNotFoundError):
            await service.delete_announcement("A9")


class TestWeeklyBusinessService:
    @pytest.fixture
    def service(self, repos, source, clock, make_row):
        F = WeeklyField
        source.load(
            SHEET_WEEKLY_BUSINESS,
            [
                make_row(F, DATE="2026-01-06", WEEK_ID="2026-W02", SUMMARY="plan", RECORD_ID="WK1"),
                make_row(F, DATE="2026-01-07", WEEK_ID="2026-W02", RECORD_ID="WK2"),
                make_row(F, DATE="2025-12-30", WEEK_ID="bogus", SUMMARY="x", RECORD_ID="WK3"),
            ],
        )
        return WeeklyBusinessService(repos.weekly, repos.weekly_writer, clock=clock)

    @pytest.mark.asyncio
    async def test_summary_list_includes_current_week(self, service):
        weeks = await service.get_summary_list()
        assert [(w.id, w.summary_count) for w in weeks] == [("2026-W03", 0), ("2026-W02", 1)]
        assert weeks[0].title == "2026 W03"
        assert weeks[0].date_range == "01/12 - 01/16"

    @pytest.mark.asyncio
    async def test_week_options(self, service):
        options = await service.get_week_options()
        assert [(o.id, o.label, o.disabled) for o in options] == [
            ("2026-W02", "上一週", True),
            ("2026-W03", "本週", False),
            ("2026-W04", "下一週", False),
        ]

    @pytest.mark.asyncio
    async def test_create_derives_week(self, service, source):
        await service.create_entry({"date": "2026-01-20", "theme": "visit"}, "amy")
        await service.create_entry({"theme": "call"}, "amy")

        rows = source.rows(SHEET_WEEKLY_BUSINESS)
        assert rows[-2][WeeklyField.WEEK_ID] == "2026-W04"
        assert rows[-1][WeeklyField.DATE] == "2026-01-14"
        assert rows[-1][WeeklyField.WEEK_ID] == "2026-W03"

    @pytest.mark.asyncio
    async def test_details(self, service):
        details = await service.get_weekly_details("2026-W02")
        assert [d.date for d in details.info.days] == [
            "2026-01-05",
            "2026-01-06",
            "2026-01-07",
            "2026-01-08",
            "2026-01-09",
        ]
        assert [e.record_id for e in details.entries] == ["WK2", "WK1"]


class TestDashboardService:
    @pytest.fixture
    def build(self, repos, crm_data, source, clock):
        def _build(announcement_service=None):
            contacts = ContactService(repos.contacts, repos.contact_writer, repos.opportunities)
            return DashboardService(
                contact_service=contacts,
                opportunity_reader=repos.opportunities,
                interaction_reader=repos.interactions,
                announcement_service=announcement_service
                or AnnouncementService(repos.announcements, repos.announcement_writer),
                weekly_service=WeeklyBusinessService(repos.weekly, repos.weekly_writer, clock=clock),
                clock=clock,
            )

        source.load(SHEET_ANNOUNCEMENTS, [])
        source.load(SHEET_WEEKLY_BUSINESS, [])
        return _build

    @pytest.mark.asyncio
    async def test_all_feeds(self, build):
        data = await build().get_dashboard_data()
        assert data.contact_stats.total == 5
        assert data.opportunities_by_stage == {"proposal": 1, "未分類": 1}
        assert [i.interaction_id for i in data.recent_interactions] == ["I3", "I1", "I2"]
        assert data.recent_interactions[1].context_name == "Line upgrade"
        assert data.week_id == "2026-W03"

    @pytest.mark.asyncio
    async def test_failing_feed_degrades_alone(self, build):
        broken = AsyncMock()
        broken.get_announcements.side_effect = RepositoryError("boom")

        data = await build(broken).get_dashboard_data()

        assert data.announcements == []
        assert data.contact_stats.total == 5

    @pytest.mark.asyncio
    async def test_unreadable_source(self, build, source):
        source.fail_reads = True
        data = await build().get_dashboard_data()
        assert data.contact_stats.total == 0
        assert data.opportunities_by_stage == {}
        assert data.recent_interactions == []


class TestSystemService:
    @pytest.mark.asyncio
    async def test_invalidate_keeps_last_write(self, repos, cache, source):
        source.load(SHEET_SYSTEM_CONFIG, [])
        service = SystemService(repos.system, repos.system_writer, cache)

        await service.update_system_pref("theme", "dark", "amy")
        await service.get_system_config()
        status = service.get_system_status()
        assert status.cached_keys == ["systemConfig"]
        assert status.last_write_timestamp == "2026-01-14T09:00:00.000Z"

        service.invalidate_cache()
        status = service.get_system_status()
        assert status.cached_keys == []
        assert status.last_write_timestamp == "2026-01-14T09:00:00.000Z"
