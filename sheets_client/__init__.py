"""Spreadsheet API client package."""

from sheets_client.base import BaseClient, set_api_config
from sheets_client.source import (
    SheetRange,
    SheetsTableSource,
    TableSource,
    TableSourceError,
    WriteMode,
)
from sheets_client.values import SheetsValuesClient

__all__ = [
    # Base
    "BaseClient",
    "set_api_config",
    # Clients
    "SheetsValuesClient",
    # Table source
    "SheetRange",
    "SheetsTableSource",
    "TableSource",
    "TableSourceError",
    "WriteMode",
]
