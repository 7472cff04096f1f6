"""Shared fixtures: in-memory table source and a controllable clock."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from app.repositories.common.cache import CacheStore
from sheets_client.source import SheetRange, TableSourceError, WriteMode

SID = "sheet-main"
AUTH_SID = "sheet-auth"


class FakeClock:
    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 1, 14, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakeTableSource:
    """TableSource over in-memory sheets. Row 1 of every sheet is the header.

    Every call is recorded in `calls` as (operation, a1 range or sheet).
    """

    def __init__(self):
        self.sheets: dict[tuple[str, str], list[list[Any]]] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_reads = False
        self.fail_writes = False
        self.yield_on_read = False

    def load(self, sheet: str, rows: list[list[Any]], spreadsheet_id: str = SID, header: bool = True) -> None:
        self.sheets[(spreadsheet_id, sheet)] = ([["header"]] if header else []) + [list(r) for r in rows]

    def rows(self, sheet: str, spreadsheet_id: str = SID) -> list[list[Any]]:
        return self.sheets.get((spreadsheet_id, sheet), [])

    def reads(self) -> list[str]:
        return [target for op, target in self.calls if op == "read"]

    async def read(self, source_range: SheetRange) -> list[list[Any]]:
        self.calls.append(("read", source_range.a1))
        if self.fail_reads:
            raise TableSourceError(f"read {source_range.a1} failed")
        if self.yield_on_read:
            await asyncio.sleep(0)
        table = self.rows(source_range.sheet, source_range.spreadsheet_id)
        end = source_range.end_row or len(table)
        return [list(r) for r in table[source_range.start_row - 1 : end]]

    async def write(self, source_range: SheetRange, rows: list[list[Any]], mode: WriteMode) -> None:
        self.calls.append((str(mode), source_range.a1))
        if self.fail_writes:
            raise TableSourceError(f"{mode} {source_range.a1} failed")
        table = self.sheets.setdefault((source_range.spreadsheet_id, source_range.sheet), [["header"]])
        if mode is WriteMode.APPEND:
            table.extend(list(r) for r in rows)
        else:
            for offset, row in enumerate(rows):
                table[source_range.start_row - 1 + offset] = list(row)

    async def delete_rows(self, spreadsheet_id: str, sheet: str, start_index: int, end_index: int) -> None:
        self.calls.append(("delete", sheet))
        if self.fail_writes:
            raise TableSourceError(f"delete {sheet} failed")
        del self.sheets[(spreadsheet_id, sheet)][start_index:end_index]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def source() -> FakeTableSource:
    return FakeTableSource()


@pytest.fixture
def cache(clock) -> CacheStore:
    return CacheStore(ttl=timedelta(seconds=30), clock=clock)


def build_row(fields, **values) -> list[str]:
    """Sheet row from field-name keywords, e.g. build_row(CompanyField, ID="C1", NAME="ACME")."""
    row = [""] * len(fields)
    for name, value in values.items():
        row[fields[name]] = value
    return row


@pytest.fixture
def make_row():
    return build_row
