"""Contact models - business cards (potential), official contacts and opportunity links."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from enum import IntEnum
from typing import Any

from app.models.common import BaseEntity, cell

# Status values of a business card row
PENDING = "Pending"
PROCESSED = "Processed"
DROPPED = "Dropped"


class PotentialContactField(IntEnum):
    """Column index in the raw business card sheet (A:Y)."""

    TIME = 0
    NAME = 1
    COMPANY = 2
    POSITION = 3
    DEPARTMENT = 4
    PHONE = 5
    MOBILE = 6
    FAX = 7
    EMAIL = 8
    WEBSITE = 9
    ADDRESS = 10
    CONFIDENCE = 11
    STATUS = 12
    DRIVE_LINK = 13
    LINE_USER_ID = 14
    USER_NICKNAME = 15
    NOTES = 16


class OfficialContactField(IntEnum):
    """Column index in the contact list sheet (A:M)."""

    ID = 0
    SOURCE_ID = 1
    NAME = 2
    COMPANY_ID = 3
    DEPARTMENT = 4
    POSITION = 5
    MOBILE = 6
    PHONE = 7
    EMAIL = 8
    CREATED_TIME = 9
    LAST_UPDATE_TIME = 10
    CREATOR = 11
    LAST_MODIFIER = 12


class OppContactLinkField(IntEnum):
    """Column index in the opportunity-contact link sheet (A:F)."""

    ID = 0
    OPPORTUNITY_ID = 1
    CONTACT_ID = 2
    CREATE_TIME = 3
    STATUS = 4
    CREATOR = 5


@dataclass(frozen=True)
class PotentialContact(BaseEntity):
    """Scanned business card, not yet promoted to an official contact."""

    row_index: int = 0
    created_time: str = ""
    name: str = ""
    company: str = ""
    position: str = ""
    department: str = ""
    phone: str = ""
    mobile: str = ""
    email: str = ""
    website: str = ""
    address: str = ""
    confidence: str = ""
    status: str = ""
    drive_link: str = ""
    line_user_id: str = ""
    user_nickname: str = ""
    notes: str = ""

    @property
    def card_image(self) -> str:
        return self.drive_link

    @classmethod
    def from_row(cls, row: Sequence[Any], row_index: int) -> "PotentialContact":
        F = PotentialContactField
        return cls(
            row_index=row_index,
            created_time=cell(row, F.TIME),
            name=cell(row, F.NAME),
            company=cell(row, F.COMPANY),
            position=cell(row, F.POSITION),
            department=cell(row, F.DEPARTMENT),
            phone=cell(row, F.PHONE),
            mobile=cell(row, F.MOBILE),
            email=cell(row, F.EMAIL),
            website=cell(row, F.WEBSITE),
            address=cell(row, F.ADDRESS),
            confidence=cell(row, F.CONFIDENCE),
            status=cell(row, F.STATUS),
            drive_link=cell(row, F.DRIVE_LINK),
            line_user_id=cell(row, F.LINE_USER_ID),
            user_nickname=cell(row, F.USER_NICKNAME),
            notes=cell(row, F.NOTES),
        )


@dataclass(frozen=True)
class OfficialContact(BaseEntity):
    row_index: int = 0
    contact_id: str = ""
    source_id: str = ""
    name: str = ""
    company_id: str = ""
    department: str = ""
    position: str = ""
    mobile: str = ""
    phone: str = ""
    email: str = ""
    created_time: str = ""
    last_update_time: str = ""
    creator: str = ""
    last_modifier: str = ""

    @classmethod
    def from_row(cls, row: Sequence[Any], row_index: int) -> "OfficialContact":
        F = OfficialContactField
        return cls(
            row_index=row_index,
            contact_id=cell(row, F.ID),
            source_id=cell(row, F.SOURCE_ID),
            name=cell(row, F.NAME),
            company_id=cell(row, F.COMPANY_ID),
            department=cell(row, F.DEPARTMENT),
            position=cell(row, F.POSITION),
            mobile=cell(row, F.MOBILE),
            phone=cell(row, F.PHONE),
            email=cell(row, F.EMAIL),
            created_time=cell(row, F.CREATED_TIME),
            last_update_time=cell(row, F.LAST_UPDATE_TIME),
            creator=cell(row, F.CREATOR),
            last_modifier=cell(row, F.LAST_MODIFIER),
        )


@dataclass(frozen=True)
class ContactWithCompany(OfficialContact):
    """Official contact with the company id resolved to a display name."""

    company_name: str = ""

    @classmethod
    def from_official(cls, contact: OfficialContact, company_name: str) -> "ContactWithCompany":
        return cls(**asdict(contact), company_name=company_name)


@dataclass(frozen=True)
class OppContactLink(BaseEntity):
    row_index: int = 0
    link_id: str = ""
    opportunity_id: str = ""
    contact_id: str = ""
    create_time: str = ""
    status: str = ""
    creator: str = ""

    @classmethod
    def from_row(cls, row: Sequence[Any], row_index: int) -> "OppContactLink":
        F = OppContactLinkField
        return cls(
            row_index=row_index,
            link_id=cell(row, F.ID),
            opportunity_id=cell(row, F.OPPORTUNITY_ID),
            contact_id=cell(row, F.CONTACT_ID),
            create_time=cell(row, F.CREATE_TIME),
            status=cell(row, F.STATUS),
            creator=cell(row, F.CREATOR),
        )


@dataclass(frozen=True)
class LinkedContact(BaseEntity):
    """Contact shown on an opportunity, with company name and card image."""

    contact_id: str = ""
    source_id: str = ""
    name: str = ""
    company_id: str = ""
    department: str = ""
    position: str = ""
    mobile: str = ""
    phone: str = ""
    email: str = ""
    company_name: str = ""
    drive_link: str = ""

    @classmethod
    def from_official(cls, contact: OfficialContact, company_name: str, drive_link: str) -> "LinkedContact":
        return cls(
            contact_id=contact.contact_id,
            source_id=contact.source_id,
            name=contact.name,
            company_id=contact.company_id,
            department=contact.department,
            position=contact.position,
            mobile=contact.mobile,
            phone=contact.phone,
            email=contact.email,
            company_name=company_name,
            drive_link=drive_link,
        )
