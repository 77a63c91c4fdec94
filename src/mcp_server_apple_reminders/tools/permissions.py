"""MCP tools for checking and requesting macOS privacy permissions."""

from ..models import PermissionDomain, PermissionStatus
from ..store import EventKitStore


async def get_permission_status(scope: PermissionDomain) -> PermissionStatus:
    """Check whether this server may access Reminders or Calendar.

    Args:
        scope: "reminders" or "calendars".

    Returns:
        The authorization status, whether a permission dialog can still be
        shown, and instructions for granting access manually.
    """
    store = EventKitStore.get_instance()
    return await store.get_permission_status(scope)


async def request_permission(scope: PermissionDomain) -> PermissionStatus:
    """Ask macOS for Reminders or Calendar access.

    Shows the system permission dialog if access has not been decided.
    If access was previously denied, follow the returned instructions
    (System Settings > Privacy & Security).

    Args:
        scope: "reminders" or "calendars".
    """
    store = EventKitStore.get_instance()
    return await store.request_permission(scope)


__all__ = ["get_permission_status", "request_permission"]
