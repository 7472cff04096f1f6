"""Common repositories - shared cache store."""

from app.repositories.common.cache import CacheKey, CacheStore

__all__ = [
    "CacheKey",
    "CacheStore",
]
