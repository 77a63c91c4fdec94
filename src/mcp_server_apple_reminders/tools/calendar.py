"""MCP tools for calendar events."""

from datetime import datetime

from ..models import Calendar, CalendarEvent, DeleteResult
from ..store import EventKitStore
from ..utils import paginate


async def list_calendars() -> dict[str, list[Calendar]]:
    """Get all calendars that can hold events."""
    store = EventKitStore.get_instance()
    return {"calendars": await store.find_calendars()}


async def get_calendar_events(
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    calendar_name: str | None = None,
    search: str | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> dict[str, list[CalendarEvent] | int]:
    """Get calendar events with optional filters.

    Args:
        start_date: Only events ending after this time (optional).
        end_date: Only events starting before this time (optional).
        calendar_name: Only events in the calendar with this title (optional).
        search: Text to match in event titles, notes, or locations (optional).
        limit: Maximum number of events to return (optional).
        offset: Number of events to skip for pagination (default 0).

    Returns:
        Matching events and the total before pagination.
    """
    store = EventKitStore.get_instance()
    events = await store.find_events(start_date, end_date, calendar_name, search)
    return {"events": paginate(events, offset, limit), "total": len(events)}


async def get_calendar_event(event_id: str) -> CalendarEvent:
    """Get a single calendar event by ID.

    Raises:
        NotFoundError: If no event exists with the given ID.
    """
    store = EventKitStore.get_instance()
    return await store.find_event_by_id(event_id)


async def create_calendar_event(
    title: str,
    start_date: datetime,
    end_date: datetime,
    calendar_name: str | None = None,
    notes: str | None = None,
    location: str | None = None,
    url: str | None = None,
    is_all_day: bool | None = None,
) -> CalendarEvent:
    """Create a calendar event.

    Args:
        title: Title of the event.
        start_date: Start date and time. Naive times are local time.
        end_date: End date and time.
        calendar_name: Title of the calendar to add it to (default calendar
            if not specified).
        notes: Optional notes.
        location: Optional location text.
        url: Optional URL.
        is_all_day: Whether the event spans whole days (optional).

    Returns:
        The newly created event.
    """
    store = EventKitStore.get_instance()
    return await store.create_event(
        title,
        start_date,
        end_date,
        calendar_name=calendar_name,
        notes=notes,
        location=location,
        url=url,
        is_all_day=is_all_day,
    )


async def update_calendar_event(
    event_id: str,
    title: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    calendar_name: str | None = None,
    notes: str | None = None,
    location: str | None = None,
    url: str | None = None,
    is_all_day: bool | None = None,
) -> CalendarEvent:
    """Update a calendar event. Only provided fields are changed."""
    store = EventKitStore.get_instance()
    return await store.update_event(
        event_id,
        title=title,
        start_date=start_date,
        end_date=end_date,
        calendar_name=calendar_name,
        notes=notes,
        location=location,
        url=url,
        is_all_day=is_all_day,
    )


async def delete_calendar_event(event_id: str) -> DeleteResult:
    """Delete a calendar event by ID."""
    store = EventKitStore.get_instance()
    return await store.delete_event(event_id)


__all__ = [
    "list_calendars",
    "get_calendar_events",
    "get_calendar_event",
    "create_calendar_event",
    "update_calendar_event",
    "delete_calendar_event",
]
