"""Event log (事件紀錄) model."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from enum import IntEnum
from typing import Any

from app.models.common import BaseEntity, cell


class EventLogField(IntEnum):
    """Column index in the event log sheet (A:L)."""

    ID = 0
    NAME = 1
    TYPE = 2
    OPPORTUNITY_ID = 3
    COMPANY_ID = 4
    CREATOR = 5
    CREATED_TIME = 6
    LAST_MODIFIED_TIME = 7
    OUR_PARTICIPANTS = 8
    CLIENT_PARTICIPANTS = 9
    VISIT_PLACE = 10
    CONTENT = 11


@dataclass(frozen=True)
class EventLog(BaseEntity):
    row_index: int = 0
    event_id: str = ""
    event_name: str = ""
    event_type: str = ""
    opportunity_id: str = ""
    company_id: str = ""
    creator: str = ""
    created_time: str = ""
    last_modified_time: str = ""
    our_participants: str = ""
    client_participants: str = ""
    visit_place: str = ""
    event_content: str = ""

    @classmethod
    def from_row(cls, row: Sequence[Any], row_index: int) -> "EventLog":
        F = EventLogField
        return cls(
            row_index=row_index,
            event_id=cell(row, F.ID),
            event_name=cell(row, F.NAME),
            event_type=cell(row, F.TYPE),
            opportunity_id=cell(row, F.OPPORTUNITY_ID),
            company_id=cell(row, F.COMPANY_ID),
            creator=cell(row, F.CREATOR),
            created_time=cell(row, F.CREATED_TIME),
            last_modified_time=cell(row, F.LAST_MODIFIED_TIME),
            our_participants=cell(row, F.OUR_PARTICIPANTS),
            client_participants=cell(row, F.CLIENT_PARTICIPANTS),
            visit_place=cell(row, F.VISIT_PLACE),
            event_content=cell(row, F.CONTENT),
        )


@dataclass(frozen=True)
class EventLogDetail(EventLog):
    """Event log with opportunity and company names resolved."""

    opportunity_name: str = ""
    company_name: str = ""

    @classmethod
    def from_event(cls, event: EventLog, opportunity_name: str = "", company_name: str = "") -> "EventLogDetail":
        return cls(**asdict(event), opportunity_name=opportunity_name, company_name=company_name)
