"""Contact API response schemas."""

from pydantic import BaseModel


class PaginationSchema(BaseModel):
    current: int
    total: int
    total_items: int
    has_next: bool
    has_prev: bool


class OfficialContactItem(BaseModel):
    contact_id: str
    name: str
    company_id: str
    company_name: str
    department: str
    position: str
    mobile: str
    phone: str
    email: str


class ContactSearchResponse(BaseModel):
    data: list[OfficialContactItem]
    pagination: PaginationSchema


class BusinessCardItem(BaseModel):
    row_index: int
    created_time: str
    name: str
    company: str
    position: str
    mobile: str
    email: str
    status: str
    card_image: str


class LinkedContactItem(BaseModel):
    contact_id: str
    name: str
    company_name: str
    position: str
    mobile: str
    email: str
    drive_link: str
