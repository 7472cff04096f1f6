"""Cache entry - one fetched dataset and when it was fetched."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    fetched_at: datetime
