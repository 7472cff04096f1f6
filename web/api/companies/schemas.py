"""Company API request/response schemas."""

from pydantic import BaseModel, Field


class CompanyFilters(BaseModel):
    """Query parameters of the company list."""

    q: str | None = None
    type: str | None = Field(default=None, alias="companyType")
    stage: str | None = Field(default=None, alias="customerStage")
    rating: str | None = Field(default=None, alias="engagementRating")

    class Config:
        populate_by_name = True


class CompanyItem(BaseModel):
    company_id: str
    company_name: str
    phone: str
    address: str
    county: str
    company_type: str
    customer_stage: str
    engagement_rating: str
    created_time: str
    last_activity: str | None = None


class CompanyListResponse(BaseModel):
    items: list[CompanyItem]
    total: int


class ContactItem(BaseModel):
    contact_id: str
    name: str
    position: str
    mobile: str
    email: str


class OpportunityItem(BaseModel):
    opportunity_id: str
    opportunity_name: str
    current_stage: str
    assignee: str


class ActivityItem(BaseModel):
    id: str
    title: str
    type: str
    time: str


class CompanyDetailsResponse(BaseModel):
    company: CompanyItem
    contacts: list[ContactItem]
    opportunities: list[OpportunityItem]
    interactions: list[ActivityItem]
    event_logs: list[ActivityItem]


class CreateCompanyResponse(BaseModel):
    company: CompanyItem
    existed: bool
