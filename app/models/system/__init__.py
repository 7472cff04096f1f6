"""System models - config options and users."""

from app.models.system.config import (
    CALENDAR_RULES,
    DEFAULT_EVENT_TYPES,
    EVENT_TYPES,
    SYSTEM_PREF,
    ConfigField,
    ConfigItem,
    ConfigRow,
)
from app.models.system.user import User, UserField

__all__ = [
    "CALENDAR_RULES",
    "DEFAULT_EVENT_TYPES",
    "EVENT_TYPES",
    "SYSTEM_PREF",
    "ConfigField",
    "ConfigItem",
    "ConfigRow",
    "User",
    "UserField",
]
