"""Contact API views - thin layer over services."""

from dataclasses import asdict

from app.container import container
from app.repositories.errors import RecordNotFoundError
from web.api.errors import translate_errors, validate_page

from .schemas import (
    BusinessCardItem,
    ContactSearchResponse,
    LinkedContactItem,
    OfficialContactItem,
    PaginationSchema,
)


async def search_contacts(query: str | None = None, page: int = 1) -> ContactSearchResponse:
    """Official contacts with company names, paginated."""
    validate_page(page)
    result = await container.contacts.search_official_contacts(query, page)

    return ContactSearchResponse(
        data=[
            OfficialContactItem(
                contact_id=c.contact_id,
                name=c.name,
                company_id=c.company_id,
                company_name=c.company_name,
                department=c.department,
                position=c.position,
                mobile=c.mobile,
                phone=c.phone,
                email=c.email,
            )
            for c in result.data
        ],
        pagination=PaginationSchema(**asdict(result.pagination)),
    )


async def list_business_cards(limit: int = 2000) -> list[BusinessCardItem]:
    cards = await container.contacts.get_potential_contacts(limit)
    return [
        BusinessCardItem(
            row_index=c.row_index,
            created_time=c.created_time,
            name=c.name,
            company=c.company,
            position=c.position,
            mobile=c.mobile,
            email=c.email,
            status=c.status,
            card_image=c.card_image,
        )
        for c in cards
    ]


async def get_linked_contacts(opportunity_id: str) -> list[LinkedContactItem]:
    try:
        details = await container.opportunities.get_opportunity_details(opportunity_id)
    except RecordNotFoundError as e:
        raise translate_errors(e) from e
    return [
        LinkedContactItem(
            contact_id=c.contact_id,
            name=c.name,
            company_name=c.company_name,
            position=c.position,
            mobile=c.mobile,
            email=c.email,
            drive_link=c.drive_link,
        )
        for c in details.linked_contacts
    ]
