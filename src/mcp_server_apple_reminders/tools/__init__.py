"""MCP tools for Apple Reminders and Calendar."""

from .calendar import (
    create_calendar_event,
    delete_calendar_event,
    get_calendar_event,
    get_calendar_events,
    list_calendars,
    update_calendar_event,
)
from .lists import (
    create_reminder_list,
    delete_reminder_list,
    list_reminder_lists,
    update_reminder_list,
)
from .permissions import get_permission_status, request_permission
from .reminders import (
    complete_reminder,
    create_reminder,
    delete_reminder,
    get_reminders,
    update_reminder,
)

__all__ = [
    # List management
    "list_reminder_lists",
    "create_reminder_list",
    "update_reminder_list",
    "delete_reminder_list",
    # Reminders
    "get_reminders",
    "create_reminder",
    "update_reminder",
    "complete_reminder",
    "delete_reminder",
    # Calendar
    "list_calendars",
    "get_calendar_events",
    "get_calendar_event",
    "create_calendar_event",
    "update_calendar_event",
    "delete_calendar_event",
    # Permissions
    "get_permission_status",
    "request_permission",
]
