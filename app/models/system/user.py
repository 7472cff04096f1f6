"""User roster (使用者名冊) model."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from app.models.common import BaseEntity, cell

DEFAULT_ROLE = "sales"


class UserField(IntEnum):
    """Column index in the user sheet (A:D, no header row)."""

    USERNAME = 0
    PASSWORD_HASH = 1
    DISPLAY_NAME = 2
    ROLE = 3


@dataclass(frozen=True)
class User(BaseEntity):
    row_index: int = 0
    username: str = ""
    password_hash: str = ""
    display_name: str = ""
    role: str = DEFAULT_ROLE

    @classmethod
    def from_row(cls, row: Sequence[Any], row_index: int) -> "User":
        F = UserField
        return cls(
            row_index=row_index,
            username=cell(row, F.USERNAME).strip(),
            password_hash=cell(row, F.PASSWORD_HASH).strip(),
            display_name=cell(row, F.DISPLAY_NAME).strip(),
            role=cell(row, F.ROLE).strip().lower() or DEFAULT_ROLE,
        )
