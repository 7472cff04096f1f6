"""Company API."""

from web.api.companies.views import create_company, delete_company, get_company, list_companies, update_company

__all__ = [
    "list_companies",
    "get_company",
    "create_company",
    "update_company",
    "delete_company",
]
