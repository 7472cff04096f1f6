"""Base reader and writer classes."""

import time
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from loguru import logger

from app.repositories.common.cache import CacheKey, CacheStore
from app.repositories.errors import InvalidRowIndexError, RecordNotFoundError, StaleRowError
from sheets_client.source import SheetRange, TableSource, TableSourceError, WriteMode

T = TypeVar("T")

RowParser = Callable[[Sequence[Any], int], T]
SortKey = Callable[[T], Any]

HEADER_ROWS = 1
FIRST_DATA_ROW = HEADER_ROWS + 1

# Exceptions a row parser may raise on a malformed row
_PARSE_ERRORS = (IndexError, KeyError, TypeError, ValueError, AttributeError)


def new_id(prefix: str) -> str:
    """Time-based record id, e.g. COM1768459200123."""
    return f"{prefix}{int(time.time() * 1000)}"


class BaseReader:
    """Base reader: fetch rows, parse, sort, cache."""

    cache_keys: tuple[CacheKey, ...] = ()

    def __init__(self, source: TableSource, cache: CacheStore, spreadsheet_id: str):
        self._source = source
        self._cache = cache
        self._spreadsheet_id = spreadsheet_id
        logger.debug("{} initialized", self.__class__.__name__)

    def _range(self, sheet: str, last_col: str, start_row: int = FIRST_DATA_ROW) -> SheetRange:
        return SheetRange(self._spreadsheet_id, sheet, last_col=last_col, start_row=start_row)

    async def fetch_and_cache(
        self,
        key: str,
        source_range: SheetRange,
        row_parser: RowParser[T],
        sorter: SortKey[T] | None = None,
        default: Iterable[T] | None = None,
    ) -> list[T]:
        """Cached records for `key`, fetching from the source when missing or stale.

        A row that breaks the parser becomes a record with default fields. A
        failed fetch is logged and not cached; `default` (or []) is returned
        so the next call retries.
        """
        entry = self._cache.get(key)
        if entry is not None and self._cache.is_fresh(entry):
            logger.debug("Cache hit: {}", key)
            return list(entry.value)

        logger.debug("Cache miss: {}", key)
        try:
            rows = await self._source.read(source_range)
        except TableSourceError as e:
            logger.error("Fetch {} ({}) failed, not cached: {}", key, source_range, e)
            return list(default) if default is not None else []

        records = []
        for index, row in enumerate(rows):
            try:
                records.append(row_parser(row, index))
            except _PARSE_ERRORS as e:
                logger.warning("{}: malformed row {} ({}), using defaults", key, index, e)
                records.append(row_parser([], index))

        if sorter is not None:
            records = sorted(records, key=sorter)

        self._cache.set(key, records)
        logger.info("Fetched {}: {} records", key, len(records))
        return records

    def invalidate_cache(self, *keys: CacheKey) -> None:
        """Drop the given keys, or all of this reader's keys."""
        for key in keys or self.cache_keys:
            self._cache.invalidate(key)


class BaseWriter:
    """Base writer: remote mutation followed by cache invalidation.

    Every successful mutation invalidates `invalidates` (plus any extra keys
    the caller names) and stamps the global last-write time. A failed
    mutation propagates and leaves the cache untouched.
    """

    invalidates: tuple[CacheKey, ...] = ()

    def __init__(self, source: TableSource, cache: CacheStore, spreadsheet_id: str):
        self._source = source
        self._cache = cache
        self._spreadsheet_id = spreadsheet_id
        logger.debug("{} initialized", self.__class__.__name__)

    def _range(self, sheet: str, last_col: str, start_row: int = FIRST_DATA_ROW) -> SheetRange:
        return SheetRange(self._spreadsheet_id, sheet, last_col=last_col, start_row=start_row)

    def _committed(self, *extra: CacheKey) -> None:
        for key in (*self.invalidates, *extra):
            self._cache.invalidate(key)
        self._cache.record_write()

    async def _append(self, source_range: SheetRange, row: list[Any]) -> None:
        await self._source.write(source_range, [row], WriteMode.APPEND)

    async def _update(self, source_range: SheetRange, row_index: int, row: list[Any]) -> None:
        await self._source.write(source_range.row(row_index), [row], WriteMode.UPDATE)

    async def _read_row(
        self,
        source_range: SheetRange,
        row_index: int,
        id_column: int | None = None,
        expected_id: str | None = None,
    ) -> list[Any]:
        """Current content of one row, padded to the range width.

        With `id_column`/`expected_id`, the row must still hold that record;
        otherwise the table shifted since the caller resolved the row index.
        """
        _check_row_index(row_index, source_range.start_row)
        rows = await self._source.read(source_range.row(row_index))
        current = list(rows[0]) if rows else []
        if not current:
            raise RecordNotFoundError(f"No data at {source_range.sheet} row {row_index}")

        if id_column is not None and expected_id is not None:
            found = str(current[id_column]).strip() if id_column < len(current) else ""
            if found != expected_id:
                raise StaleRowError(
                    f"{source_range.sheet} row {row_index} holds {found!r}, expected {expected_id!r}"
                )

        width = _column_count(source_range)
        return current + [""] * (width - len(current))

    async def _delete_row(self, source_range: SheetRange, row_index: int) -> None:
        _check_row_index(row_index, source_range.start_row)
        await self._source.delete_rows(source_range.spreadsheet_id, source_range.sheet, row_index - 1, row_index)


def _check_row_index(row_index: int, first_data_row: int) -> None:
    if not isinstance(row_index, int) or row_index < first_data_row:
        raise InvalidRowIndexError(f"Invalid row index: {row_index!r}")


def _column_count(source_range: SheetRange) -> int:
    def col(letters: str) -> int:
        n = 0
        for ch in letters.upper():
            n = n * 26 + ord(ch) - ord("A") + 1
        return n

    return col(source_range.last_col) - col(source_range.first_col) + 1
