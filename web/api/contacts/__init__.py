"""Contact API."""

from web.api.contacts.views import get_linked_contacts, list_business_cards, search_contacts

__all__ = [
    "search_contacts",
    "list_business_cards",
    "get_linked_contacts",
]
