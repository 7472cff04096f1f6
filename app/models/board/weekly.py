"""Weekly business entry (週間業務) model."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from app.models.common import BaseEntity, cell
from helpers.dates import weekday_of

DEFAULT_CATEGORY = "一般"


class WeeklyField(IntEnum):
    """Column index in the weekly business sheet (A:K)."""

    DATE = 0
    WEEK_ID = 1
    CATEGORY = 2
    THEME = 3
    PARTICIPANTS = 4
    SUMMARY = 5
    TODO = 6
    CREATED_TIME = 7
    LAST_UPDATE_TIME = 8
    CREATOR = 9
    RECORD_ID = 10


WEEKLY_COLUMNS = len(WeeklyField)


@dataclass(frozen=True)
class WeeklyEntry(BaseEntity):
    row_index: int = 0
    date: str = ""
    week_id: str = ""
    category: str = ""
    theme: str = ""
    participants: str = ""
    summary: str = ""
    todo: str = ""
    created_time: str = ""
    last_update_time: str = ""
    creator: str = ""
    record_id: str = ""
    day: int = -1  # 0 = Sunday, -1 = no valid date

    @classmethod
    def from_row(cls, row: Sequence[Any], row_index: int) -> "WeeklyEntry":
        F = WeeklyField
        date = cell(row, F.DATE)
        return cls(
            row_index=row_index,
            date=date,
            week_id=cell(row, F.WEEK_ID),
            category=cell(row, F.CATEGORY),
            theme=cell(row, F.THEME),
            participants=cell(row, F.PARTICIPANTS),
            summary=cell(row, F.SUMMARY),
            todo=cell(row, F.TODO),
            created_time=cell(row, F.CREATED_TIME),
            last_update_time=cell(row, F.LAST_UPDATE_TIME),
            creator=cell(row, F.CREATOR),
            record_id=cell(row, F.RECORD_ID),
            day=weekday_of(date),
        )


@dataclass(frozen=True)
class WeekSummary(BaseEntity):
    """Week list item."""

    id: str
    title: str
    date_range: str
    summary_count: int = 0
