"""Spreadsheet values API schemas."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ValueInputOption(StrEnum):
    """How written values are interpreted by the spreadsheet."""

    RAW = "RAW"
    USER_ENTERED = "USER_ENTERED"


class ValueRangeSchema(BaseModel):
    """A block of cell values (values.get response)."""

    range: str = ""
    major_dimension: str = Field(alias="majorDimension", default="ROWS")
    values: list[list[Any]] = []

    class Config:
        populate_by_name = True


class UpdateResultSchema(BaseModel):
    """Result of values.update / the `updates` part of values.append."""

    spreadsheet_id: str = Field(alias="spreadsheetId", default="")
    updated_range: str = Field(alias="updatedRange", default="")
    updated_rows: int = Field(alias="updatedRows", default=0)
    updated_cells: int = Field(alias="updatedCells", default=0)

    class Config:
        populate_by_name = True


class SheetPropertiesSchema(BaseModel):
    """Sheet (tab) properties."""

    sheet_id: int = Field(alias="sheetId")
    title: str

    class Config:
        populate_by_name = True


class SheetSchema(BaseModel):
    properties: SheetPropertiesSchema


class SpreadsheetSchema(BaseModel):
    """Spreadsheet metadata, restricted to sheet properties."""

    sheets: list[SheetSchema] = []
