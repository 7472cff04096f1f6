"""Company API views - thin layer over services."""

from app.container import container
from app.models.crm.company import Company
from app.repositories.errors import RecordNotFoundError
from app.services.errors import ServiceError
from web.api.errors import NotFoundError, translate_errors, validate_required

from .schemas import (
    ActivityItem,
    CompanyDetailsResponse,
    CompanyFilters,
    CompanyItem,
    CompanyListResponse,
    ContactItem,
    CreateCompanyResponse,
    OpportunityItem,
)


def _company_item(c: Company, last_activity: str | None = None) -> CompanyItem:
    return CompanyItem(
        company_id=c.company_id,
        company_name=c.company_name,
        phone=c.phone,
        address=c.address,
        county=c.county,
        company_type=c.company_type,
        customer_stage=c.customer_stage,
        engagement_rating=c.engagement_rating,
        created_time=c.created_time,
        last_activity=last_activity,
    )


async def list_companies(filters: CompanyFilters | None = None) -> CompanyListResponse:
    """Companies, most recent activity first."""
    filters = filters or CompanyFilters()
    companies = await container.companies.get_company_list_with_activity(filters.model_dump())
    return CompanyListResponse(items=[_company_item(c, c.last_activity) for c in companies], total=len(companies))


async def get_company(name: str) -> CompanyDetailsResponse:
    """Company with its related records."""
    details = await container.companies.get_company_details(name)
    if details.company_info is None:
        raise NotFoundError(f"Company not found: {name}")

    return CompanyDetailsResponse(
        company=_company_item(details.company_info),
        contacts=[
            ContactItem(contact_id=c.contact_id, name=c.name, position=c.position, mobile=c.mobile, email=c.email)
            for c in details.related_contacts
        ],
        opportunities=[
            OpportunityItem(
                opportunity_id=o.opportunity_id,
                opportunity_name=o.opportunity_name,
                current_stage=o.current_stage,
                assignee=o.assignee,
            )
            for o in details.related_opportunities
        ],
        interactions=[
            ActivityItem(id=i.interaction_id, title=i.event_title, type=i.event_type, time=i.interaction_time)
            for i in details.interactions
        ],
        event_logs=[
            ActivityItem(id=e.event_id, title=e.event_name, type=e.event_type, time=e.created_time)
            for e in details.event_logs
        ],
    )


async def create_company(data: dict, modifier: str) -> CreateCompanyResponse:
    validate_required(data, "company_name")
    try:
        company, created = await container.companies.create_company(data["company_name"], data, modifier)
    except ServiceError as e:
        raise translate_errors(e) from e
    return CreateCompanyResponse(company=_company_item(company), existed=not created)


async def update_company(name: str, data: dict, modifier: str) -> None:
    try:
        await container.companies.update_company(name, data, modifier)
    except (RecordNotFoundError, ServiceError) as e:
        raise translate_errors(e) from e


async def delete_company(name: str) -> None:
    try:
        await container.companies.delete_company(name)
    except (RecordNotFoundError, ServiceError) as e:
        raise translate_errors(e) from e
