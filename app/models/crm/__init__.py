"""CRM domain models - companies, contacts, opportunities, interactions, event logs."""

from app.models.crm.company import Company, CompanyField, CompanyWithActivity
from app.models.crm.contact import (
    ContactWithCompany,
    LinkedContact,
    OfficialContact,
    OfficialContactField,
    OppContactLink,
    OppContactLinkField,
    PotentialContact,
    PotentialContactField,
)
from app.models.crm.event_log import EventLog, EventLogDetail, EventLogField
from app.models.crm.interaction import ContextualInteraction, Interaction, InteractionField
from app.models.crm.opportunity import Opportunity, OpportunityField

__all__ = [
    # Companies
    "Company",
    "CompanyField",
    "CompanyWithActivity",
    # Contacts
    "PotentialContact",
    "PotentialContactField",
    "OfficialContact",
    "OfficialContactField",
    "ContactWithCompany",
    "OppContactLink",
    "OppContactLinkField",
    "LinkedContact",
    # Opportunities
    "Opportunity",
    "OpportunityField",
    # Interactions
    "Interaction",
    "InteractionField",
    "ContextualInteraction",
    # Event logs
    "EventLog",
    "EventLogField",
    "EventLogDetail",
]
