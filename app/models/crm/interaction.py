"""Interaction (互動紀錄) model."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from enum import IntEnum
from typing import Any

from app.models.common import BaseEntity, cell

SYSTEM_EVENT = "系統事件"


class InteractionField(IntEnum):
    """Column index in the interaction sheet (A:M)."""

    ID = 0
    OPPORTUNITY_ID = 1
    INTERACTION_TIME = 2
    EVENT_TYPE = 3
    EVENT_TITLE = 4
    CONTENT_SUMMARY = 5
    PARTICIPANTS = 6
    NEXT_ACTION = 7
    ATTACHMENT_LINK = 8
    CALENDAR_EVENT_ID = 9
    RECORDER = 10
    CREATED_TIME = 11
    COMPANY_ID = 12


INTERACTION_COLUMNS = len(InteractionField)


@dataclass(frozen=True)
class Interaction(BaseEntity):
    row_index: int = 0
    interaction_id: str = ""
    opportunity_id: str = ""
    interaction_time: str = ""
    event_type: str = ""
    event_title: str = ""
    content_summary: str = ""
    participants: str = ""
    next_action: str = ""
    attachment_link: str = ""
    calendar_event_id: str = ""
    recorder: str = ""
    created_time: str = ""
    company_id: str = ""

    @classmethod
    def from_row(cls, row: Sequence[Any], row_index: int) -> "Interaction":
        F = InteractionField
        return cls(
            row_index=row_index,
            interaction_id=cell(row, F.ID),
            opportunity_id=cell(row, F.OPPORTUNITY_ID),
            interaction_time=cell(row, F.INTERACTION_TIME),
            event_type=cell(row, F.EVENT_TYPE),
            event_title=cell(row, F.EVENT_TITLE),
            content_summary=cell(row, F.CONTENT_SUMMARY),
            participants=cell(row, F.PARTICIPANTS),
            next_action=cell(row, F.NEXT_ACTION),
            attachment_link=cell(row, F.ATTACHMENT_LINK),
            calendar_event_id=cell(row, F.CALENDAR_EVENT_ID),
            recorder=cell(row, F.RECORDER),
            created_time=cell(row, F.CREATED_TIME),
            company_id=cell(row, F.COMPANY_ID),
        )


@dataclass(frozen=True)
class ContextualInteraction(Interaction):
    """Interaction labelled with the opportunity or company it belongs to."""

    context_name: str = ""

    @classmethod
    def from_interaction(cls, interaction: Interaction, context_name: str) -> "ContextualInteraction":
        return cls(**asdict(interaction), context_name=context_name)
