"""Tests for BaseReader.fetch_and_cache."""

import asyncio

import pytest

from app.repositories.base import BaseReader
from app.repositories.common.cache import CacheKey
from helpers.dates import newest_first
from sheets_client.source import SheetRange

SID = "sheet-main"
PEOPLE = "People"


def parse_person(row, index):
    return {"row_index": index + 2, "name": row[0], "company": row[1], "date": row[2]}


@pytest.fixture
def reader(source, cache):
    source.load(
        PEOPLE,
        [
            ["Alice", "ACME Inc", "2026-01-01"],
            ["Bob", "", "2026-01-02"],
        ],
    )
    return BaseReader(source, cache, SID)


@pytest.fixture
def people_range():
    return SheetRange(SID, PEOPLE, last_col="C", start_row=2)


async def fetch(reader, rng, parser=parse_person, **kwargs):
    return await reader.fetch_and_cache("people", rng, parser, sorter=newest_first(lambda r: r["date"]), **kwargs)


class TestEndToEnd:
    @pytest.mark.asyncio
    async def test_parsed_sorted_and_cached(self, reader, people_range, source):
        first = await fetch(reader, people_range)
        assert [p["name"] for p in first] == ["Bob", "Alice"]
        assert first[1]["row_index"] == 2

        second = await fetch(reader, people_range)
        assert second == first
        assert len(source.reads()) == 1


class TestFreshness:
    @pytest.mark.asyncio
    async def test_refetch_after_window(self, reader, people_range, source, clock):
        await fetch(reader, people_range)
        clock.advance(30)
        await fetch(reader, people_range)
        assert len(source.reads()) == 2

    @pytest.mark.asyncio
    async def test_invalidate_forces_refresh(self, reader, people_range, source, cache):
        await fetch(reader, people_range)
        cache.invalidate("people")
        await fetch(reader, people_range)
        assert len(source.reads()) == 2

    @pytest.mark.asyncio
    async def test_wildcard_invalidation_refreshes_every_key(self, reader, people_range, source, cache):
        await fetch(reader, people_range)
        await reader.fetch_and_cache(CacheKey.COMPANY_LIST, people_range, parse_person)
        cache.invalidate(None)

        await fetch(reader, people_range)
        await reader.fetch_and_cache(CacheKey.COMPANY_LIST, people_range, parse_person)
        assert len(source.reads()) == 4

    @pytest.mark.asyncio
    async def test_callers_get_independent_lists(self, reader, people_range):
        first = await fetch(reader, people_range)
        first.clear()
        assert len(await fetch(reader, people_range)) == 2


class TestConcurrentMisses:
    @pytest.mark.asyncio
    async def test_both_fetch_and_last_set_wins(self, reader, people_range, source, cache):
        source.yield_on_read = True

        def tagged(row, index):
            return {**parse_person(row, index), "by": "second"}

        first, second = await asyncio.gather(
            fetch(reader, people_range),
            fetch(reader, people_range, parser=tagged),
        )

        assert len(source.reads()) == 2
        assert cache.keys() == ["people"]
        assert "by" not in first[0]
        assert second[0]["by"] == "second"
        assert [p["by"] for p in cache.get("people").value] == ["second", "second"]


class TestDegradation:
    @pytest.mark.asyncio
    async def test_malformed_row_gets_defaults(self, reader, people_range, source):
        source.load(PEOPLE, [["Alice", "ACME", "2026-01-01"], ["Broken"]])

        def parser(row, index):
            return {"name": row[0] if row else "", "company": row[1] if row else "", "date": row[2] if row else ""}

        records = await fetch(reader, people_range, parser=parser)
        assert len(records) == 2
        assert records[-1] == {"name": "", "company": "", "date": ""}

    @pytest.mark.asyncio
    async def test_failure_returns_empty_and_is_not_cached(self, reader, people_range, source, cache):
        source.fail_reads = True
        assert await fetch(reader, people_range) == []
        assert cache.get("people") is None

        source.fail_reads = False
        assert len(await fetch(reader, people_range)) == 2
        assert len(source.reads()) == 2

    @pytest.mark.asyncio
    async def test_failure_returns_default(self, reader, people_range, source):
        source.fail_reads = True
        assert await fetch(reader, people_range, default=[{"name": "fallback"}]) == [{"name": "fallback"}]

    @pytest.mark.asyncio
    async def test_empty_table(self, reader, people_range, source, cache):
        source.load(PEOPLE, [])
        assert await fetch(reader, people_range) == []
        assert cache.get("people").value == ()


class TestInvalidateCache:
    def test_reader_drops_own_keys(self, source, cache):
        class Reader(BaseReader):
            cache_keys = (CacheKey.COMPANY_LIST, CacheKey.CONTACTS)

        cache.set(CacheKey.COMPANY_LIST, [])
        cache.set(CacheKey.CONTACTS, [])
        cache.set(CacheKey.USERS, [])

        Reader(source, cache, SID).invalidate_cache()
        assert cache.keys() == [CacheKey.USERS]

    def test_explicit_keys(self, source, cache):
        cache.set(CacheKey.COMPANY_LIST, [])
        cache.set(CacheKey.CONTACTS, [])
        BaseReader(source, cache, SID).invalidate_cache(CacheKey.CONTACTS)
        assert cache.keys() == [CacheKey.COMPANY_LIST]
