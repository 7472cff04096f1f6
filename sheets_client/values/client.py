"""Spreadsheet values API client - read, append, update, delete rows."""

from urllib.parse import quote

from sheets_client.base import BaseClient
from sheets_client.values.schemas import (
    SpreadsheetSchema,
    UpdateResultSchema,
    ValueInputOption,
    ValueRangeSchema,
)


class SheetsValuesClient(BaseClient):
    """Client for the spreadsheet values endpoints."""

    async def get_values(self, spreadsheet_id: str, a1_range: str) -> ValueRangeSchema:
        """GET /{id}/values/{range} - cell values of a range."""
        data = await self._get(f"{spreadsheet_id}/values/{quote(a1_range, safe='')}")
        return ValueRangeSchema.model_validate(data)

    async def append_values(
        self,
        spreadsheet_id: str,
        a1_range: str,
        rows: list[list],
        option: ValueInputOption = ValueInputOption.USER_ENTERED,
    ) -> UpdateResultSchema:
        """POST /{id}/values/{range}:append - append rows after the table."""
        data = await self._post(
            f"{spreadsheet_id}/values/{quote(a1_range, safe='')}:append",
            json={"values": rows},
            params={"valueInputOption": option.value, "insertDataOption": "INSERT_ROWS"},
        )
        return UpdateResultSchema.model_validate(data.get("updates", {}))

    async def update_values(
        self,
        spreadsheet_id: str,
        a1_range: str,
        rows: list[list],
        option: ValueInputOption = ValueInputOption.USER_ENTERED,
    ) -> UpdateResultSchema:
        """PUT /{id}/values/{range} - overwrite a range."""
        data = await self._put(
            f"{spreadsheet_id}/values/{quote(a1_range, safe='')}",
            json={"values": rows},
            params={"valueInputOption": option.value},
        )
        return UpdateResultSchema.model_validate(data)

    async def get_spreadsheet(self, spreadsheet_id: str) -> SpreadsheetSchema:
        """GET /{id} - sheet ids and titles."""
        data = await self._get(
            spreadsheet_id,
            params={"fields": "sheets.properties.title,sheets.properties.sheetId"},
        )
        return SpreadsheetSchema.model_validate(data)

    async def delete_dimension(self, spreadsheet_id: str, sheet_id: int, start_index: int, end_index: int) -> None:
        """POST /{id}:batchUpdate - delete rows [start_index, end_index)."""
        await self._post(
            f"{spreadsheet_id}:batchUpdate",
            json={
                "requests": [
                    {
                        "deleteDimension": {
                            "range": {
                                "sheetId": sheet_id,
                                "dimension": "ROWS",
                                "startIndex": start_index,
                                "endIndex": end_index,
                            }
                        }
                    }
                ]
            },
        )
