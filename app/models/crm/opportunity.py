"""Opportunity (機會案件) model."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from app.models.common import BaseEntity, cell

ARCHIVED = "已封存"


class OpportunityField(IntEnum):
    """Column index in the opportunity sheet (A:R)."""

    ID = 0
    NAME = 1
    CUSTOMER_COMPANY = 2
    MAIN_CONTACT = 3
    ASSIGNEE = 4
    TYPE = 5
    SOURCE = 6
    CURRENT_STAGE = 7
    CREATED_TIME = 8
    EXPECTED_CLOSE_DATE = 9
    VALUE = 10
    CURRENT_STATUS = 11
    LAST_UPDATE_TIME = 12
    COUNTY = 13
    NOTES = 14
    DRIVE_FOLDER_LINK = 15
    CREATOR = 16
    LAST_MODIFIER = 17


OPPORTUNITY_COLUMNS = len(OpportunityField)


@dataclass(frozen=True)
class Opportunity(BaseEntity):
    row_index: int = 0
    opportunity_id: str = ""
    opportunity_name: str = ""
    customer_company: str = ""
    main_contact: str = ""
    assignee: str = ""
    opportunity_type: str = ""
    opportunity_source: str = ""
    current_stage: str = ""
    created_time: str = ""
    expected_close_date: str = ""
    opportunity_value: str = ""
    current_status: str = ""
    last_update_time: str = ""
    county: str = ""
    notes: str = ""
    drive_folder_link: str = ""
    creator: str = ""
    last_modifier: str = ""

    @classmethod
    def from_row(cls, row: Sequence[Any], row_index: int) -> "Opportunity":
        F = OpportunityField
        return cls(
            row_index=row_index,
            opportunity_id=cell(row, F.ID),
            opportunity_name=cell(row, F.NAME),
            customer_company=cell(row, F.CUSTOMER_COMPANY),
            main_contact=cell(row, F.MAIN_CONTACT),
            assignee=cell(row, F.ASSIGNEE),
            opportunity_type=cell(row, F.TYPE),
            opportunity_source=cell(row, F.SOURCE),
            current_stage=cell(row, F.CURRENT_STAGE),
            created_time=cell(row, F.CREATED_TIME),
            expected_close_date=cell(row, F.EXPECTED_CLOSE_DATE),
            opportunity_value=cell(row, F.VALUE),
            current_status=cell(row, F.CURRENT_STATUS),
            last_update_time=cell(row, F.LAST_UPDATE_TIME),
            county=cell(row, F.COUNTY),
            notes=cell(row, F.NOTES),
            drive_folder_link=cell(row, F.DRIVE_FOLDER_LINK),
            creator=cell(row, F.CREATOR),
            last_modifier=cell(row, F.LAST_MODIFIER),
        )
