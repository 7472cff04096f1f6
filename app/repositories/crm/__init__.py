"""CRM repositories - companies, contacts, opportunities, interactions, event logs."""

from app.repositories.crm.company import CompanyReader, CompanyWriter
from app.repositories.crm.contact import ContactReader, ContactWriter
from app.repositories.crm.event_log import EventLogReader
from app.repositories.crm.interaction import InteractionReader, InteractionWriter
from app.repositories.crm.opportunity import OpportunityReader, OpportunityWriter

__all__ = [
    "CompanyReader",
    "CompanyWriter",
    "ContactReader",
    "ContactWriter",
    "EventLogReader",
    "InteractionReader",
    "InteractionWriter",
    "OpportunityReader",
    "OpportunityWriter",
]
