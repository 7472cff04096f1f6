"""Repositories package - cached readers and invalidating writers over the sheets."""

from app.repositories.base import BaseReader, BaseWriter
from app.repositories.board import (
    AnnouncementReader,
    AnnouncementWriter,
    WeeklyBusinessReader,
    WeeklyBusinessWriter,
)
from app.repositories.common import CacheKey, CacheStore
from app.repositories.crm import (
    CompanyReader,
    CompanyWriter,
    ContactReader,
    ContactWriter,
    EventLogReader,
    InteractionReader,
    InteractionWriter,
    OpportunityReader,
    OpportunityWriter,
)
from app.repositories.errors import (
    InvalidRowIndexError,
    RecordNotFoundError,
    RepositoryError,
    StaleRowError,
)
from app.repositories.system import SystemReader, SystemWriter

__all__ = [
    # Base
    "BaseReader",
    "BaseWriter",
    # Cache
    "CacheKey",
    "CacheStore",
    # Errors
    "RepositoryError",
    "RecordNotFoundError",
    "InvalidRowIndexError",
    "StaleRowError",
    # CRM
    "CompanyReader",
    "CompanyWriter",
    "ContactReader",
    "ContactWriter",
    "EventLogReader",
    "InteractionReader",
    "InteractionWriter",
    "OpportunityReader",
    "OpportunityWriter",
    # Board
    "AnnouncementReader",
    "AnnouncementWriter",
    "WeeklyBusinessReader",
    "WeeklyBusinessWriter",
    # System
    "SystemReader",
    "SystemWriter",
]
