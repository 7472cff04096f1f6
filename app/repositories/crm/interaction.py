"""Interaction repository."""

import asyncio

from loguru import logger

from app.models.crm.interaction import (
    INTERACTION_COLUMNS,
    ContextualInteraction,
    Interaction,
    InteractionField,
)
from app.repositories.base import BaseReader, BaseWriter, new_id
from app.repositories.common.cache import CacheKey
from app.repositories.crm.company import CompanyReader
from app.repositories.crm.opportunity import OpportunityReader
from helpers.dates import newest_first, to_iso, utc_now
from helpers.joins import build_join_map, company_name_map
from helpers.pagination import Page, paginate, single_page
from settings import INTERACTIONS_PER_PAGE, SHEET_INTERACTIONS

UNKNOWN_OPPORTUNITY = "未知機會"
UNKNOWN_COMPANY = "未知公司"
UNASSIGNED = "未指定"


def context_name(interaction: Interaction, opportunity_names: dict, company_names: dict) -> str:
    """Label for the record an interaction belongs to."""
    if interaction.opportunity_id in opportunity_names:
        return opportunity_names[interaction.opportunity_id]
    if interaction.company_id in company_names:
        return company_names[interaction.company_id]
    if interaction.opportunity_id:
        return UNKNOWN_OPPORTUNITY
    if interaction.company_id:
        return UNKNOWN_COMPANY
    return UNASSIGNED


class InteractionReader(BaseReader):
    """Reader for the interaction sheet."""

    cache_keys = (CacheKey.INTERACTIONS,)

    def __init__(
        self,
        source,
        cache,
        spreadsheet_id: str,
        opportunity_reader: OpportunityReader,
        company_reader: CompanyReader,
    ):
        super().__init__(source, cache, spreadsheet_id)
        self._opportunities = opportunity_reader
        self._companies = company_reader

    @property
    def source_range(self):
        return self._range(SHEET_INTERACTIONS, "M")

    async def get_interactions(self) -> list[Interaction]:
        """All interactions, most recent interaction time first."""
        rng = self.source_range
        return await self.fetch_and_cache(
            CacheKey.INTERACTIONS,
            rng,
            lambda row, i: Interaction.from_row(row, i + rng.start_row),
            sorter=newest_first(lambda x: x.interaction_time),
        )

    async def get_recent_interactions(self, limit: int = 10) -> list[Interaction]:
        return (await self.get_interactions())[:limit]

    async def find_by_id(self, interaction_id: str) -> Interaction | None:
        for interaction in await self.get_interactions():
            if interaction.interaction_id == interaction_id:
                return interaction
        return None

    async def with_context(self, interactions: list[Interaction]) -> list[ContextualInteraction]:
        """Attach the opportunity or company name to each interaction."""
        opportunities, companies = await asyncio.gather(
            self._opportunities.get_opportunities(),
            self._companies.get_company_list(),
        )
        opp_names = build_join_map(opportunities, lambda o: o.opportunity_id, lambda o: o.opportunity_name)
        company_names = company_name_map(companies)
        return [
            ContextualInteraction.from_interaction(i, context_name(i, opp_names, company_names))
            for i in interactions
        ]

    async def search_all_interactions(
        self,
        query: str | None = None,
        page: int = 1,
        fetch_all: bool = False,
    ) -> Page[ContextualInteraction]:
        """Interactions with context names, searched on summary, title, context and recorder."""
        rows = await self.with_context(await self.get_interactions())

        if query:
            term = query.lower()
            rows = [
                i
                for i in rows
                if term in i.content_summary.lower()
                or term in i.event_title.lower()
                or term in i.context_name.lower()
                or term in i.recorder.lower()
            ]

        if fetch_all:
            return single_page(rows)
        return paginate(rows, page, INTERACTIONS_PER_PAGE)


class InteractionWriter(BaseWriter):
    """Writer for the interaction sheet."""

    invalidates = (CacheKey.INTERACTIONS,)

    @property
    def source_range(self):
        return self._range(SHEET_INTERACTIONS, "M")

    async def create_interaction(self, data: dict, recorder: str) -> str:
        """Append an interaction row. Returns its id."""
        F = InteractionField
        now = to_iso(utc_now())

        row = [""] * INTERACTION_COLUMNS
        row[F.ID] = data.get("interaction_id") or new_id("INT")
        row[F.OPPORTUNITY_ID] = data.get("opportunity_id", "")
        row[F.INTERACTION_TIME] = data.get("interaction_time") or now
        row[F.EVENT_TYPE] = data.get("event_type", "")
        row[F.EVENT_TITLE] = data.get("event_title", "")
        row[F.CONTENT_SUMMARY] = data.get("content_summary", "")
        row[F.PARTICIPANTS] = data.get("participants", "")
        row[F.NEXT_ACTION] = data.get("next_action", "")
        row[F.ATTACHMENT_LINK] = data.get("attachment_link", "")
        row[F.CALENDAR_EVENT_ID] = data.get("calendar_event_id", "")
        row[F.RECORDER] = data.get("recorder") or recorder
        row[F.CREATED_TIME] = now
        row[F.COMPANY_ID] = data.get("company_id", "")

        await self._append(self.source_range, row)
        self._committed()
        logger.info("Interaction created: {} ({})", row[F.ID], row[F.EVENT_TYPE])
        return row[F.ID]

    async def update_interaction(self, interaction: Interaction, data: dict, modifier: str) -> None:
        F = InteractionField
        row = await self._read_row(self.source_range, interaction.row_index, F.ID, interaction.interaction_id)

        for field, column in (
            ("opportunity_id", F.OPPORTUNITY_ID),
            ("interaction_time", F.INTERACTION_TIME),
            ("event_type", F.EVENT_TYPE),
            ("event_title", F.EVENT_TITLE),
            ("content_summary", F.CONTENT_SUMMARY),
            ("participants", F.PARTICIPANTS),
            ("next_action", F.NEXT_ACTION),
            ("attachment_link", F.ATTACHMENT_LINK),
            ("company_id", F.COMPANY_ID),
        ):
            if field in data:
                row[column] = data[field]

        await self._update(self.source_range, interaction.row_index, row)
        self._committed()
        logger.info("Interaction updated: {} by {}", interaction.interaction_id, modifier)

    async def delete_interaction(self, interaction: Interaction) -> None:
        await self._read_row(self.source_range, interaction.row_index, InteractionField.ID, interaction.interaction_id)
        await self._delete_row(self.source_range, interaction.row_index)
        self._committed()
        logger.info("Interaction deleted: {} (row {})", interaction.interaction_id, interaction.row_index)
