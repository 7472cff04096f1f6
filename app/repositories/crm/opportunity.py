"""Opportunity repository."""

from collections import Counter

from loguru import logger

from app.models.crm.opportunity import ARCHIVED, OPPORTUNITY_COLUMNS, Opportunity, OpportunityField
from app.repositories.base import BaseReader, BaseWriter, new_id
from app.repositories.common.cache import CacheKey
from helpers.dates import newest_first, to_iso, utc_now
from helpers.pagination import Page, paginate, single_page
from settings import OPPORTUNITIES_PER_PAGE, SHEET_OPPORTUNITIES

# filter name -> attribute
FILTER_FIELDS = {
    "assignee": "assignee",
    "type": "opportunity_type",
    "stage": "current_stage",
    "status": "current_status",
    "county": "county",
}

UNKNOWN_COUNTY = "未指定"


class OpportunityReader(BaseReader):
    """Reader for the opportunity sheet."""

    cache_keys = (CacheKey.OPPORTUNITIES,)

    @property
    def source_range(self):
        return self._range(SHEET_OPPORTUNITIES, "R")

    async def get_opportunities(self) -> list[Opportunity]:
        """All opportunities, newest created first."""
        rng = self.source_range
        return await self.fetch_and_cache(
            CacheKey.OPPORTUNITIES,
            rng,
            lambda row, i: Opportunity.from_row(row, i + rng.start_row),
            sorter=newest_first(lambda o: o.created_time),
        )

    async def find_by_id(self, opportunity_id: str) -> Opportunity | None:
        for opp in await self.get_opportunities():
            if opp.opportunity_id == opportunity_id:
                return opp
        return None

    async def search_opportunities(
        self,
        query: str | None = None,
        page: int = 0,
        filters: dict | None = None,
    ) -> Page[Opportunity]:
        """Active opportunities matching name/company `query` and exact-value filters.

        page <= 0 returns every match on a single page.
        """
        opps = [o for o in await self.get_opportunities() if o.current_status != ARCHIVED]

        if query:
            term = query.lower()
            opps = [
                o for o in opps if term in o.opportunity_name.lower() or term in o.customer_company.lower()
            ]

        for name, value in (filters or {}).items():
            attr = FILTER_FIELDS.get(name)
            if attr is None or value in (None, ""):
                continue
            opps = [o for o in opps if getattr(o, attr) == value]

        if page <= 0:
            return single_page(opps)
        return paginate(opps, page, OPPORTUNITIES_PER_PAGE)

    async def get_opportunities_by_county(self, opportunity_type: str | None = None) -> list[dict]:
        """Opportunity counts per county, largest first."""
        opps = [o for o in await self.get_opportunities() if o.current_status != ARCHIVED]
        if opportunity_type:
            opps = [o for o in opps if o.opportunity_type == opportunity_type]

        counts = Counter(o.county or UNKNOWN_COUNTY for o in opps)
        return [{"county": county, "count": count} for county, count in counts.most_common()]


class OpportunityWriter(BaseWriter):
    """Writer for the opportunity sheet."""

    invalidates = (CacheKey.OPPORTUNITIES,)

    @property
    def source_range(self):
        return self._range(SHEET_OPPORTUNITIES, "R")

    async def create_opportunity(self, data: dict, modifier: str) -> Opportunity:
        F = OpportunityField
        now = to_iso(utc_now())

        row = [""] * OPPORTUNITY_COLUMNS
        row[F.ID] = data.get("opportunity_id") or new_id("OPP")
        row[F.NAME] = data["opportunity_name"]
        row[F.CUSTOMER_COMPANY] = data.get("customer_company", "")
        row[F.MAIN_CONTACT] = data.get("main_contact", "")
        row[F.ASSIGNEE] = data.get("assignee") or modifier
        row[F.TYPE] = data.get("opportunity_type", "")
        row[F.SOURCE] = data.get("opportunity_source", "")
        row[F.CURRENT_STAGE] = data.get("current_stage", "")
        row[F.CREATED_TIME] = now
        row[F.EXPECTED_CLOSE_DATE] = data.get("expected_close_date", "")
        row[F.VALUE] = data.get("opportunity_value", "")
        row[F.CURRENT_STATUS] = data.get("current_status", "")
        row[F.LAST_UPDATE_TIME] = now
        row[F.COUNTY] = data.get("county", "")
        row[F.NOTES] = data.get("notes", "")
        row[F.CREATOR] = modifier
        row[F.LAST_MODIFIER] = modifier

        await self._append(self.source_range, row)
        self._committed()
        logger.info("Opportunity created: {} ({})", row[F.NAME], row[F.ID])
        return Opportunity.from_row(row, 0)

    async def update_opportunity(self, opportunity: Opportunity, data: dict, modifier: str) -> None:
        F = OpportunityField
        row = await self._read_row(self.source_range, opportunity.row_index, F.ID, opportunity.opportunity_id)

        for field, column in (
            ("opportunity_name", F.NAME),
            ("customer_company", F.CUSTOMER_COMPANY),
            ("main_contact", F.MAIN_CONTACT),
            ("assignee", F.ASSIGNEE),
            ("opportunity_type", F.TYPE),
            ("opportunity_source", F.SOURCE),
            ("current_stage", F.CURRENT_STAGE),
            ("expected_close_date", F.EXPECTED_CLOSE_DATE),
            ("opportunity_value", F.VALUE),
            ("current_status", F.CURRENT_STATUS),
            ("county", F.COUNTY),
            ("notes", F.NOTES),
        ):
            if field in data:
                row[column] = data[field]
        row[F.LAST_UPDATE_TIME] = to_iso(utc_now())
        row[F.LAST_MODIFIER] = modifier

        await self._update(self.source_range, opportunity.row_index, row)
        self._committed()
        logger.info("Opportunity updated: {} by {}", opportunity.opportunity_id, modifier)
