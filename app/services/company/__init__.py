from app.services.company.service import CompanyDetails, CompanyService

__all__ = ["CompanyDetails", "CompanyService"]
