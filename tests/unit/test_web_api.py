"""Tests for the API views over a container wired to an in-memory source."""

import pytest

from app.container import container
from app.models.crm.company import CompanyField
from app.models.crm.opportunity import OpportunityField
from settings import SHEET_COMPANIES, SHEET_OPPORTUNITIES
from web.api.companies import views as company_views
from web.api.companies.schemas import CompanyFilters
from web.api.contacts import views as contact_views
from web.api.dashboard import views as dashboard_views
from web.api.errors import NotFoundError, ValidationError, validate_required
from web.api.system import views as system_views

SID = "sheet-main"


@pytest.fixture
def api(source, cache, make_row, monkeypatch):
    monkeypatch.setattr("app.container.SPREADSHEET_ID", SID)
    monkeypatch.setattr("app.container.AUTH_SPREADSHEET_ID", SID)
    source.load(
        SHEET_COMPANIES,
        [
            make_row(CompanyField, ID="COM1", NAME="ACME", TYPE="maker", CREATED_TIME="2025-06-01T00:00:00Z"),
            make_row(CompanyField, ID="COM2", NAME="Globex", TYPE="trader", CREATED_TIME="2025-07-01T00:00:00Z"),
        ],
    )
    source.load(
        SHEET_OPPORTUNITIES,
        [make_row(OpportunityField, ID="OPP1", NAME="Line upgrade", CUSTOMER_COMPANY="ACME", CURRENT_STAGE="lead")],
    )

    container._initialized = False
    container.init(source=source, cache=cache)
    yield container
    container._initialized = False


class TestCompanyViews:
    @pytest.mark.asyncio
    async def test_list_with_aliased_filters(self, api):
        response = await company_views.list_companies(CompanyFilters(companyType="trader"))
        assert response.total == 1
        assert response.items[0].company_name == "Globex"
        assert response.items[0].last_activity == "2025-07-01T00:00:00.000Z"

    @pytest.mark.asyncio
    async def test_details(self, api):
        response = await company_views.get_company("acme")
        assert response.company.company_id == "COM1"
        assert [o.opportunity_id for o in response.opportunities] == ["OPP1"]
        assert response.company.last_activity is None

    @pytest.mark.asyncio
    async def test_unknown_company(self, api):
        with pytest.raises(NotFoundError):
            await company_views.get_company("Nobody")

    @pytest.mark.asyncio
    async def test_create_existing(self, api):
        response = await company_views.create_company({"company_name": "ACME"}, "amy")
        assert response.existed is True
        assert response.company.company_id == "COM1"

    @pytest.mark.asyncio
    async def test_create_requires_name(self, api):
        with pytest.raises(ValidationError):
            await company_views.create_company({"company_name": " "}, "amy")

    @pytest.mark.asyncio
    async def test_delete_referenced_company(self, api):
        with pytest.raises(ValidationError):
            await company_views.delete_company("ACME")

    @pytest.mark.asyncio
    async def test_update_unknown_company(self, api):
        with pytest.raises(NotFoundError):
            await company_views.update_company("Nobody", {"phone": "1"}, "amy")


class TestContactViews:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("page", [0, -1, 10_001])
    async def test_page_bounds(self, api, page):
        with pytest.raises(ValidationError):
            await contact_views.search_contacts(None, page)

    @pytest.mark.asyncio
    async def test_empty_search(self, api):
        response = await contact_views.search_contacts()
        assert response.data == []
        assert response.pagination.total_items == 0

    @pytest.mark.asyncio
    async def test_linked_contacts_unknown_opportunity(self, api):
        with pytest.raises(NotFoundError):
            await contact_views.get_linked_contacts("OPP404")


class TestDashboardView:
    @pytest.mark.asyncio
    async def test_overview(self, api):
        response = await dashboard_views.get_dashboard()
        assert response.opportunities_by_stage == {"lead": 1}
        assert response.contact_stats.total == 0


class TestSystemViews:
    @pytest.mark.asyncio
    async def test_config_and_status(self, api):
        config = await system_views.get_system_config()
        assert len(config.items["事件類型"]) == 5

        assert system_views.get_system_status().cached_keys == ["systemConfig"]
        assert system_views.invalidate_cache().success is True
        assert system_views.get_system_status().cached_keys == []


class TestValidation:
    def test_required_fields(self):
        validate_required({"a": "x"}, "a")
        with pytest.raises(ValidationError, match="b, c"):
            validate_required({"a": "x", "b": "  "}, "a", "b", "c")
