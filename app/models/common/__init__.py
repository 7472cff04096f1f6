"""Common models - base classes and cache entry."""

from app.models.common.base import BaseEntity, cell, flag
from app.models.common.cache import CacheEntry

__all__ = [
    "BaseEntity",
    "CacheEntry",
    "cell",
    "flag",
]
