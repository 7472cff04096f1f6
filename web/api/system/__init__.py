"""System API."""

from web.api.system.views import get_system_config, get_system_status, invalidate_cache

__all__ = [
    "get_system_config",
    "get_system_status",
    "invalidate_cache",
]
