"""Company repository - company list reader and writer."""

from loguru import logger

from app.models.crm.company import COMPANY_COLUMNS, Company, CompanyField
from app.repositories.base import BaseReader, BaseWriter, new_id
from app.repositories.common.cache import CacheKey
from helpers.dates import to_iso, utc_now
from helpers.joins import match_company
from settings import SHEET_COMPANIES


class CompanyReader(BaseReader):
    """Reader for the company sheet."""

    cache_keys = (CacheKey.COMPANY_LIST,)

    @property
    def source_range(self):
        return self._range(SHEET_COMPANIES, "M")

    async def get_company_list(self) -> list[Company]:
        """All companies in sheet order."""
        rng = self.source_range
        return await self.fetch_and_cache(
            CacheKey.COMPANY_LIST,
            rng,
            lambda row, i: Company.from_row(row, i + rng.start_row),
        )

    async def find_by_name(self, name: str) -> Company | None:
        """Company by exact or normalized name."""
        return match_company(await self.get_company_list(), name)


class CompanyWriter(BaseWriter):
    """Writer for the company sheet."""

    invalidates = (CacheKey.COMPANY_LIST,)

    @property
    def source_range(self):
        return self._range(SHEET_COMPANIES, "M")

    async def create_company(self, data: dict, modifier: str) -> str:
        """Append a company row. Returns its id; read the company back to get its row."""
        now = to_iso(utc_now())
        company_id = data.get("company_id") or new_id("COM")

        F = CompanyField
        row = [""] * COMPANY_COLUMNS
        row[F.ID] = company_id
        row[F.NAME] = data["company_name"]
        row[F.PHONE] = data.get("phone", "")
        row[F.ADDRESS] = data.get("address", "")
        row[F.CREATED_TIME] = now
        row[F.LAST_UPDATE_TIME] = now
        row[F.COUNTY] = data.get("county", "")
        row[F.CREATOR] = modifier
        row[F.INTRODUCTION] = data.get("introduction", "")
        row[F.TYPE] = data.get("company_type", "")
        row[F.CUSTOMER_STAGE] = data.get("customer_stage", "")
        row[F.ENGAGEMENT_RATING] = data.get("engagement_rating", "")
        row[F.LAST_MODIFIER] = modifier

        await self._append(self.source_range, row)
        self._committed()
        logger.info("Company created: {} ({})", row[F.NAME], company_id)
        return company_id

    async def update_company(self, company: Company, data: dict, modifier: str) -> None:
        """Patch the row `company` was read from; fails if the row shifted since."""
        F = CompanyField
        row = await self._read_row(self.source_range, company.row_index, F.ID, company.company_id)

        for field, column in (
            ("company_name", F.NAME),
            ("phone", F.PHONE),
            ("address", F.ADDRESS),
            ("county", F.COUNTY),
            ("introduction", F.INTRODUCTION),
            ("company_type", F.TYPE),
            ("customer_stage", F.CUSTOMER_STAGE),
            ("engagement_rating", F.ENGAGEMENT_RATING),
        ):
            if field in data:
                row[column] = data[field]
        row[F.LAST_UPDATE_TIME] = to_iso(utc_now())
        row[F.LAST_MODIFIER] = modifier

        await self._update(self.source_range, company.row_index, row)
        self._committed()
        logger.info("Company updated: {} (row {})", company.company_id, company.row_index)

    async def delete_company(self, company: Company) -> None:
        await self._read_row(self.source_range, company.row_index, CompanyField.ID, company.company_id)
        await self._delete_row(self.source_range, company.row_index)
        self._committed()
        logger.info("Company deleted: {} (row {})", company.company_id, company.row_index)
