"""Announcement (佈告欄) model."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from app.models.common import BaseEntity, cell, flag

PUBLISHED = "已發布"


class AnnouncementField(IntEnum):
    """Column index in the announcement sheet (A:H)."""

    ID = 0
    TITLE = 1
    CONTENT = 2
    CREATOR = 3
    CREATE_TIME = 4
    LAST_UPDATE_TIME = 5
    STATUS = 6
    IS_PINNED = 7


ANNOUNCEMENT_COLUMNS = len(AnnouncementField)


@dataclass(frozen=True)
class Announcement(BaseEntity):
    row_index: int = 0
    id: str = ""
    title: str = ""
    content: str = ""
    creator: str = ""
    create_time: str = ""
    last_update_time: str = ""
    status: str = ""
    is_pinned: bool = False

    @classmethod
    def from_row(cls, row: Sequence[Any], row_index: int) -> "Announcement":
        F = AnnouncementField
        return cls(
            row_index=row_index,
            id=cell(row, F.ID),
            title=cell(row, F.TITLE),
            content=cell(row, F.CONTENT),
            creator=cell(row, F.CREATOR),
            create_time=cell(row, F.CREATE_TIME),
            last_update_time=cell(row, F.LAST_UPDATE_TIME),
            status=cell(row, F.STATUS),
            is_pinned=flag(row, F.IS_PINNED),
        )
