"""Spreadsheet values API client."""

from sheets_client.values.client import SheetsValuesClient
from sheets_client.values.schemas import (
    SheetPropertiesSchema,
    SpreadsheetSchema,
    UpdateResultSchema,
    ValueInputOption,
    ValueRangeSchema,
)

__all__ = [
    "SheetsValuesClient",
    "ValueInputOption",
    "ValueRangeSchema",
    "UpdateResultSchema",
    "SheetPropertiesSchema",
    "SpreadsheetSchema",
]
