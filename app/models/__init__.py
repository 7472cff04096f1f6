"""Models package - row entities and field maps for all sheets."""

from app.models.board import Announcement, WeeklyEntry, WeekSummary
from app.models.common import BaseEntity, CacheEntry
from app.models.crm import (
    Company,
    CompanyWithActivity,
    ContactWithCompany,
    ContextualInteraction,
    EventLog,
    EventLogDetail,
    Interaction,
    LinkedContact,
    OfficialContact,
    OppContactLink,
    Opportunity,
    PotentialContact,
)
from app.models.system import ConfigItem, ConfigRow, User

__all__ = [
    # Common
    "BaseEntity",
    "CacheEntry",
    # CRM
    "Company",
    "CompanyWithActivity",
    "PotentialContact",
    "OfficialContact",
    "ContactWithCompany",
    "OppContactLink",
    "LinkedContact",
    "Opportunity",
    "Interaction",
    "ContextualInteraction",
    "EventLog",
    "EventLogDetail",
    # Board
    "Announcement",
    "WeeklyEntry",
    "WeekSummary",
    # System
    "ConfigItem",
    "ConfigRow",
    "User",
]
