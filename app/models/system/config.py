"""System config (系統設定) model - dropdown options and preferences."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from app.models.common import BaseEntity, cell, flag

EVENT_TYPES = "事件類型"
CALENDAR_RULES = "日曆篩選規則"
SYSTEM_PREF = "SystemPref"
DEFAULT_CATEGORY = "其他"
DEFAULT_ORDER = 99


class ConfigField(IntEnum):
    """Column index in the system config sheet (A:I)."""

    TYPE = 0
    ITEM = 1
    ORDER = 2
    ENABLED = 3
    NOTE = 4
    COLOR = 5
    VALUE2 = 6
    VALUE3 = 7
    CATEGORY = 8


@dataclass(frozen=True)
class ConfigRow(BaseEntity):
    """One raw config row."""

    row_index: int = 0
    type: str = ""
    item: str = ""
    order: str = ""
    enabled: bool = False
    note: str = ""
    color: str = ""
    value2: str = ""
    value3: str = ""
    category: str = ""

    @classmethod
    def from_row(cls, row: Sequence[Any], row_index: int) -> "ConfigRow":
        F = ConfigField
        return cls(
            row_index=row_index,
            type=cell(row, F.TYPE),
            item=cell(row, F.ITEM),
            order=cell(row, F.ORDER),
            enabled=flag(row, F.ENABLED),
            note=cell(row, F.NOTE),
            color=cell(row, F.COLOR),
            value2=cell(row, F.VALUE2),
            value3=cell(row, F.VALUE3),
            category=cell(row, F.CATEGORY),
        )


@dataclass(frozen=True)
class ConfigItem(BaseEntity):
    """Option of one config type, as served to the front-end."""

    value: str
    note: str
    order: int = DEFAULT_ORDER
    color: str | None = None
    value2: str | None = None
    value3: str | None = None
    category: str = DEFAULT_CATEGORY


DEFAULT_EVENT_TYPES = (
    ConfigItem(value="general", note="一般", order=1, color="#6c757d"),
    ConfigItem(value="iot", note="IOT", order=2, color="#007bff"),
    ConfigItem(value="dt", note="DT", order=3, color="#28a745"),
    ConfigItem(value="dx", note="DX", order=4, color="#ffc107"),
    ConfigItem(value="legacy", note="舊事件", order=5, color="#dc3545"),
)


def parse_order(value: str) -> int:
    """Leading integer of a cell, like parseInt; DEFAULT_ORDER otherwise."""
    digits = ""
    for ch in value.strip():
        if ch.isdigit() or (ch == "-" and not digits):
            digits += ch
        else:
            break
    try:
        return int(digits) or DEFAULT_ORDER
    except ValueError:
        return DEFAULT_ORDER
