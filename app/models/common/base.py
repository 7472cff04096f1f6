"""Base entity class and cell accessors for sheet rows."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import Any

TRUE = "TRUE"


@dataclass(frozen=True)
class BaseEntity:
    """Base class for all entities. Entities are immutable once parsed."""

    def to_dict(self) -> dict[str, Any]:
        """Convert entity to dictionary."""
        return asdict(self)


def cell(row: Sequence[Any], idx: int) -> str:
    """Cell value as a string; missing or empty cells become ""."""
    if idx >= len(row):
        return ""
    value = row[idx]
    if value is None:
        return ""
    if isinstance(value, bool):
        return TRUE if value else "FALSE"
    return str(value)


def flag(row: Sequence[Any], idx: int) -> bool:
    """Checkbox cell - only an explicit TRUE counts."""
    return cell(row, idx).strip().upper() == TRUE
