"""Dashboard API."""

from web.api.dashboard.views import get_dashboard

__all__ = [
    "get_dashboard",
]
