"""Services package - service class exports."""

from app.services.board import AnnouncementService, WeeklyBusinessService
from app.services.company.service import CompanyService
from app.services.contact.service import ContactService
from app.services.dashboard.service import DashboardService
from app.services.event_log.service import EventLogService
from app.services.interaction.service import InteractionService
from app.services.opportunity.service import OpportunityService
from app.services.system.service import SystemService

__all__ = [
    "AnnouncementService",
    "CompanyService",
    "ContactService",
    "DashboardService",
    "EventLogService",
    "InteractionService",
    "OpportunityService",
    "SystemService",
    "WeeklyBusinessService",
]
