"""Tests for timestamp parsing, sort keys and week helpers."""

from datetime import date, datetime, timezone

import pytest

from app.models.board.announcement import Announcement
from helpers.dates import (
    newest_first,
    parse_timestamp,
    pinned_then_newest,
    to_iso,
    week_id,
    week_info,
    weekday_of,
)


class TestParseTimestamp:
    def test_iso_with_z(self):
        assert parse_timestamp("2026-01-14T09:30:00.000Z") == datetime(2026, 1, 14, 9, 30, tzinfo=timezone.utc)

    def test_slash_format(self):
        assert parse_timestamp("2026/01/14 09:30") == datetime(2026, 1, 14, 9, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["", "   ", "yesterday", None, 42])
    def test_invalid(self, value):
        assert parse_timestamp(value) is None

    def test_to_iso(self):
        assert to_iso(datetime(2026, 1, 14, 9, 30, tzinfo=timezone.utc)) == "2026-01-14T09:30:00.000Z"
        assert to_iso(None) is None


class TestAnnouncementOrder:
    key = staticmethod(pinned_then_newest(lambda a: a.is_pinned, lambda a: a.last_update_time))

    def test_pinned_before_newer_unpinned(self):
        a = Announcement(id="A", is_pinned=True, last_update_time="2026-01-01T00:00:00Z")
        b = Announcement(id="B", is_pinned=False, last_update_time="2026-01-10T00:00:00Z")
        assert [x.id for x in sorted([b, a], key=self.key)] == ["A", "B"]

    def test_newer_first_among_unpinned(self):
        a = Announcement(id="A", last_update_time="2026-01-01T00:00:00Z")
        b = Announcement(id="B", last_update_time="2026-01-10T00:00:00Z")
        assert [x.id for x in sorted([a, b], key=self.key)] == ["B", "A"]

    def test_invalid_timestamp_last(self):
        a = Announcement(id="A", last_update_time="garbage")
        b = Announcement(id="B", last_update_time="2020-01-01T00:00:00Z")
        c = Announcement(id="C", last_update_time="")
        assert [x.id for x in sorted([a, c, b], key=self.key)] == ["B", "A", "C"]


class TestNewestFirst:
    def test_stable_for_equal_timestamps(self):
        rows = [("x", "2026-01-01"), ("y", "2026-01-01"), ("z", "2026-01-02")]
        result = sorted(rows, key=newest_first(lambda r: r[1]))
        assert [r[0] for r in result] == ["z", "x", "y"]


class TestWeeks:
    def test_week_id(self):
        assert week_id(date(2026, 1, 14)) == "2026-W03"
        assert week_id(date(2027, 1, 1)) == "2026-W53"

    def test_week_info(self):
        info = week_info("2026-W03")
        assert info.title == "2026 W03"
        assert info.date_range == "01/12 - 01/16"
        assert [d.date for d in info.days][0] == "2026-01-12"
        assert [d.day_index for d in info.days] == [1, 2, 3, 4, 5]

    @pytest.mark.parametrize("wid", ["", "2026-3", "W03-2026", None])
    def test_invalid_week_id(self, wid):
        with pytest.raises(ValueError):
            week_info(wid)

    def test_weekday(self):
        assert weekday_of("2026-01-18") == 0
        assert weekday_of("2026-01-14") == 3
        assert weekday_of("2026-02-30") == -1
        assert weekday_of("14/01/2026") == -1
