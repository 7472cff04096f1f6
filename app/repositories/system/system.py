"""System repository - config options and the user roster."""

from dataclasses import replace

from loguru import logger

from app.models.system.config import (
    CALENDAR_RULES,
    DEFAULT_CATEGORY,
    DEFAULT_EVENT_TYPES,
    EVENT_TYPES,
    SYSTEM_PREF,
    ConfigField,
    ConfigItem,
    ConfigRow,
    parse_order,
)
from app.models.system.user import DEFAULT_ROLE, User, UserField
from app.repositories.base import BaseReader, BaseWriter
from app.repositories.common.cache import CacheKey
from app.repositories.errors import RecordNotFoundError
from settings import SHEET_SYSTEM_CONFIG, SHEET_USERS
from sheets_client.source import SheetRange

SYSTEM_CATEGORY = "System"


def group_config(rows: list[ConfigRow]) -> dict[str, list[ConfigItem]]:
    """Enabled rows grouped by type and sorted by order.

    Built-in event types and an empty calendar rule list are always present.
    A later row for an existing (type, item) only updates its note and order.
    """
    settings: dict[str, list[ConfigItem]] = {
        EVENT_TYPES: list(DEFAULT_EVENT_TYPES),
        CALENDAR_RULES: [],
    }

    for row in rows:
        if not (row.enabled and row.type and row.item):
            continue
        items = settings.setdefault(row.type, [])
        note = row.note or row.item
        order = parse_order(row.order)

        for pos, existing in enumerate(items):
            if existing.value == row.item:
                items[pos] = replace(existing, note=note, order=order)
                break
        else:
            items.append(
                ConfigItem(
                    value=row.item,
                    note=note,
                    order=order,
                    color=row.color or None,
                    value2=row.value2 or None,
                    value3=row.value3 or None,
                    category=row.category or DEFAULT_CATEGORY,
                )
            )

    for items in settings.values():
        items.sort(key=lambda item: item.order)
    return settings


class SystemReader(BaseReader):
    """Reader for system config and users; users live in the auth spreadsheet."""

    cache_keys = (CacheKey.SYSTEM_CONFIG, CacheKey.USERS)

    def __init__(self, source, cache, spreadsheet_id: str, auth_spreadsheet_id: str | None = None):
        super().__init__(source, cache, spreadsheet_id)
        self._auth_spreadsheet_id = auth_spreadsheet_id or spreadsheet_id

    @property
    def users_range(self):
        # No header row on the roster sheet
        return SheetRange(self._auth_spreadsheet_id, SHEET_USERS, last_col="D", start_row=1)

    async def get_config_rows(self) -> list[ConfigRow]:
        rng = self._range(SHEET_SYSTEM_CONFIG, "I")
        return await self.fetch_and_cache(
            CacheKey.SYSTEM_CONFIG,
            rng,
            lambda row, i: ConfigRow.from_row(row, i + rng.start_row),
        )

    async def get_system_config(self) -> dict[str, list[ConfigItem]]:
        """Dropdown options per config type. Falls back to the defaults when the sheet is unreadable."""
        return group_config(await self.get_config_rows())

    async def get_users(self) -> list[User]:
        rng = self.users_range
        users = await self.fetch_and_cache(
            CacheKey.USERS,
            rng,
            lambda row, i: User.from_row(row, i + rng.start_row),
        )
        return [u for u in users if u.username and u.password_hash]

    async def find_user(self, username: str) -> User | None:
        for user in await self.get_users():
            if user.username == username:
                return user
        return None

    def get_last_write_timestamp(self) -> str | None:
        return self._cache.get_last_write_timestamp()


class SystemWriter(BaseWriter):
    """Writer for system config and users; user rows are located through the reader."""

    def __init__(self, source, cache, spreadsheet_id: str, reader: SystemReader):
        super().__init__(source, cache, spreadsheet_id)
        self._reader = reader

    @property
    def users_range(self):
        return self._reader.users_range

    async def update_system_config(self, data: dict, modifier: str) -> None:
        """Append a config row; the reader lets the latest row win."""
        row = [""] * len(ConfigField)
        row[ConfigField.TYPE] = data["type"]
        row[ConfigField.ITEM] = data["value"]
        row[ConfigField.ORDER] = data.get("order", 99)
        row[ConfigField.ENABLED] = "TRUE"
        row[ConfigField.NOTE] = data.get("note", "")
        row[ConfigField.COLOR] = data.get("color", "")
        row[ConfigField.CATEGORY] = SYSTEM_CATEGORY

        await self._append(self._range(SHEET_SYSTEM_CONFIG, "I"), row)
        self._committed(CacheKey.SYSTEM_CONFIG)
        logger.info("System config updated: {}/{} by {}", data["type"], data["value"], modifier)

    async def update_system_pref(self, item: str, note: str, modifier: str = "System") -> None:
        await self.update_system_config({"type": SYSTEM_PREF, "value": item, "note": note, "order": 0}, modifier)

    async def create_user(self, data: dict) -> None:
        row = [
            data["username"],
            data["password_hash"],
            data.get("display_name", ""),
            data.get("role") or DEFAULT_ROLE,
        ]
        await self._append(self.users_range, row)
        self._committed(CacheKey.USERS)
        logger.info("User created: {}", data["username"])

    async def _locate(self, username: str) -> User:
        user = await self._reader.find_user(username)
        if user is None:
            raise RecordNotFoundError(f"User not found: {username}")
        return user

    async def update_user_password(self, username: str, password_hash: str) -> None:
        user = await self._locate(username)
        row = await self._read_row(self.users_range, user.row_index, UserField.USERNAME, username)
        row[UserField.PASSWORD_HASH] = password_hash

        await self._update(self.users_range, user.row_index, row)
        self._committed(CacheKey.USERS)
        logger.info("Password updated: {}", username)

    async def delete_user(self, username: str) -> None:
        user = await self._locate(username)
        await self._read_row(self.users_range, user.row_index, UserField.USERNAME, username)
        await self._delete_row(self.users_range, user.row_index)
        self._committed(CacheKey.USERS)
        logger.info("User deleted: {}", username)
