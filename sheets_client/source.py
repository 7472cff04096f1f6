"""TableSource - the range-addressed row transport the cache layer consumes."""

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any, Protocol

import httpx
from loguru import logger

from sheets_client.values.client import SheetsValuesClient


class TableSourceError(Exception):
    """Transport failure (network, permission, not found) or an unreadable response body."""


class WriteMode(StrEnum):
    APPEND = "append"
    UPDATE = "update"


@dataclass(frozen=True)
class SheetRange:
    """A1-style range inside one spreadsheet.

    `start_row` is 1-based. Readers of sheets with a header row start at 2,
    so a parsed row at position `index` lives at `index + start_row`.
    """

    spreadsheet_id: str
    sheet: str
    first_col: str = "A"
    last_col: str = "Z"
    start_row: int = 1
    end_row: int | None = None

    @property
    def a1(self) -> str:
        start = f"{self.first_col}{self.start_row}" if self.start_row > 1 or self.end_row else self.first_col
        end = f"{self.last_col}{self.end_row}" if self.end_row else self.last_col
        return f"{self.sheet}!{start}:{end}"

    def row(self, row_index: int) -> "SheetRange":
        """Single-row range for targeted writes."""
        return replace(self, start_row=row_index, end_row=row_index)

    def __str__(self) -> str:
        return self.a1


class TableSource(Protocol):
    """Remote tabular store. No caching, no parsing."""

    async def read(self, source_range: SheetRange) -> list[list[Any]]: ...

    async def write(self, source_range: SheetRange, rows: list[list[Any]], mode: WriteMode) -> None: ...

    async def delete_rows(self, spreadsheet_id: str, sheet: str, start_index: int, end_index: int) -> None: ...


class SheetsTableSource:
    """TableSource over the spreadsheet values API."""

    def __init__(self, client: SheetsValuesClient):
        self._client = client
        self._sheet_ids: dict[tuple[str, str], int] = {}

    async def read(self, source_range: SheetRange) -> list[list[Any]]:
        try:
            result = await self._client.get_values(source_range.spreadsheet_id, source_range.a1)
        except (httpx.HTTPError, ValueError) as e:
            raise TableSourceError(f"read {source_range.a1} failed: {e}") from e
        logger.debug("Read {}: {} rows", source_range.a1, len(result.values))
        return result.values

    async def write(self, source_range: SheetRange, rows: list[list[Any]], mode: WriteMode) -> None:
        try:
            if mode is WriteMode.APPEND:
                await self._client.append_values(source_range.spreadsheet_id, source_range.a1, rows)
            else:
                await self._client.update_values(source_range.spreadsheet_id, source_range.a1, rows)
        except (httpx.HTTPError, ValueError) as e:
            raise TableSourceError(f"{mode} {source_range.a1} failed: {e}") from e
        logger.debug("{} {}: {} rows", mode, source_range.a1, len(rows))

    async def delete_rows(self, spreadsheet_id: str, sheet: str, start_index: int, end_index: int) -> None:
        try:
            sheet_id = await self._sheet_id(spreadsheet_id, sheet)
            await self._client.delete_dimension(spreadsheet_id, sheet_id, start_index, end_index)
        except (httpx.HTTPError, ValueError) as e:
            raise TableSourceError(f"delete rows {sheet}[{start_index}:{end_index}] failed: {e}") from e
        logger.debug("Deleted rows {}[{}:{}]", sheet, start_index, end_index)

    async def _sheet_id(self, spreadsheet_id: str, sheet: str) -> int:
        """Resolve a sheet title to its numeric id (cached per spreadsheet)."""
        key = (spreadsheet_id, sheet)
        if key not in self._sheet_ids:
            meta = await self._client.get_spreadsheet(spreadsheet_id)
            for s in meta.sheets:
                self._sheet_ids[(spreadsheet_id, s.properties.title)] = s.properties.sheet_id
        if key not in self._sheet_ids:
            raise TableSourceError(f"Sheet {sheet!r} not found in spreadsheet {spreadsheet_id}")
        return self._sheet_ids[key]
