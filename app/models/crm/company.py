"""Company (公司總表) model."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from enum import IntEnum
from typing import Any

from app.models.common import BaseEntity, cell


class CompanyField(IntEnum):
    """Column index in the company sheet (A:M)."""

    ID = 0
    NAME = 1
    PHONE = 2
    ADDRESS = 3
    CREATED_TIME = 4
    LAST_UPDATE_TIME = 5
    COUNTY = 6
    CREATOR = 7
    INTRODUCTION = 8
    TYPE = 9
    CUSTOMER_STAGE = 10
    ENGAGEMENT_RATING = 11
    LAST_MODIFIER = 12


COMPANY_COLUMNS = len(CompanyField)


@dataclass(frozen=True)
class Company(BaseEntity):
    row_index: int = 0
    company_id: str = ""
    company_name: str = ""
    phone: str = ""
    address: str = ""
    created_time: str = ""
    last_update_time: str = ""
    county: str = ""
    creator: str = ""
    introduction: str = ""
    company_type: str = ""
    customer_stage: str = ""
    engagement_rating: str = ""
    last_modifier: str = ""

    @classmethod
    def from_row(cls, row: Sequence[Any], row_index: int) -> "Company":
        F = CompanyField
        return cls(
            row_index=row_index,
            company_id=cell(row, F.ID),
            company_name=cell(row, F.NAME),
            phone=cell(row, F.PHONE),
            address=cell(row, F.ADDRESS),
            created_time=cell(row, F.CREATED_TIME),
            last_update_time=cell(row, F.LAST_UPDATE_TIME),
            county=cell(row, F.COUNTY),
            creator=cell(row, F.CREATOR),
            introduction=cell(row, F.INTRODUCTION),
            company_type=cell(row, F.TYPE),
            customer_stage=cell(row, F.CUSTOMER_STAGE),
            engagement_rating=cell(row, F.ENGAGEMENT_RATING),
            last_modifier=cell(row, F.LAST_MODIFIER),
        )


@dataclass(frozen=True)
class CompanyWithActivity(Company):
    """Company list item with its latest activity (ISO string)."""

    last_activity: str | None = None

    @classmethod
    def from_company(cls, company: Company, last_activity: str | None) -> "CompanyWithActivity":
        return cls(**asdict(company), last_activity=last_activity)
