"""Interaction service."""

from app.models.crm.interaction import ContextualInteraction, Interaction
from app.repositories.crm.interaction import InteractionReader, InteractionWriter
from app.repositories.errors import RecordNotFoundError
from helpers.pagination import Page


class InteractionService:
    def __init__(self, interaction_reader: InteractionReader, interaction_writer: InteractionWriter):
        self._reader = interaction_reader
        self._writer = interaction_writer

    async def search_interactions(
        self,
        query: str | None = None,
        page: int = 1,
        fetch_all: bool = False,
    ) -> Page[ContextualInteraction]:
        return await self._reader.search_all_interactions(query, page, fetch_all)

    async def get_interactions_by_opportunity(self, opportunity_id: str) -> list[ContextualInteraction]:
        interactions = [i for i in await self._reader.get_interactions() if i.opportunity_id == opportunity_id]
        return await self._reader.with_context(interactions)

    async def get_interactions_by_company(self, company_id: str) -> list[ContextualInteraction]:
        interactions = [i for i in await self._reader.get_interactions() if i.company_id == company_id]
        return await self._reader.with_context(interactions)

    async def _require(self, interaction_id: str) -> Interaction:
        interaction = await self._reader.find_by_id(interaction_id)
        if interaction is None:
            raise RecordNotFoundError(f"Interaction not found: {interaction_id}")
        return interaction

    async def create_interaction(self, data: dict, recorder: str) -> str:
        return await self._writer.create_interaction(data, recorder)

    async def update_interaction(self, interaction_id: str, data: dict, modifier: str) -> None:
        await self._writer.update_interaction(await self._require(interaction_id), data, modifier)

    async def delete_interaction(self, interaction_id: str) -> None:
        await self._writer.delete_interaction(await self._require(interaction_id))
