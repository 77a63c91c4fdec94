"""MCP tools for reminder operations."""

from datetime import datetime

from ..exceptions import NotFoundError
from ..models import DeleteResult, DueWithin, Reminder, ReminderFilters
from ..store import EventKitStore
from ..utils import paginate


async def get_reminders(
    list_name: str | None = None,
    show_completed: bool = False,
    search: str | None = None,
    due_within: DueWithin | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> dict[str, list[Reminder] | int]:
    """Get reminders with optional filters.

    Args:
        list_name: Only get reminders from the list with this title (optional).
        show_completed: Include completed reminders (default False).
        search: Case-insensitive text to match in titles or notes (optional).
        due_within: Due date window: today, tomorrow, this-week, overdue,
            or no-date (optional).
        limit: Maximum number of reminders to return (optional).
        offset: Number of reminders to skip for pagination (default 0).

    Returns:
        Matching reminders and the total before pagination.
    """
    store = EventKitStore.get_instance()
    reminders = await store.find_reminders(
        ReminderFilters(
            show_completed=show_completed,
            list=list_name,
            search=search,
            due_within=due_within,
        )
    )

    # Wrap in dict to ensure FastMCP always returns a TextContent
    # (empty lists cause "No result received" in Claude Desktop)
    return {"reminders": paginate(reminders, offset, limit), "total": len(reminders)}


async def create_reminder(
    title: str,
    list_name: str | None = None,
    notes: str | None = None,
    url: str | None = None,
    due_date: datetime | None = None,
) -> Reminder:
    """Create a new reminder.

    Args:
        title: The title/name of the reminder.
        list_name: Title of the list to add it to (uses default list if not specified).
        notes: Optional additional notes.
        url: Optional URL to associate with the reminder.
        due_date: Optional due date and time. Naive times are local time.

    Returns:
        The newly created reminder.
    """
    store = EventKitStore.get_instance()
    return await store.create_reminder(title, list_name, notes, url, due_date)


async def update_reminder(
    title: str,
    list_name: str | None = None,
    new_title: str | None = None,
    notes: str | None = None,
    url: str | None = None,
    completed: bool | None = None,
    due_date: datetime | None = None,
) -> Reminder:
    """Update an existing reminder, found by its current title.

    Only provided fields will be updated; others remain unchanged.

    Args:
        title: Current title of the reminder to update.
        list_name: Title of the list holding the reminder, to disambiguate
            reminders with the same title (optional).
        new_title: New title (optional).
        notes: New notes (optional).
        url: New URL (optional).
        completed: New completion status (optional).
        due_date: New due date (optional).

    Returns:
        The updated reminder.

    Raises:
        NotFoundError: If no reminder has the given title.
    """
    store = EventKitStore.get_instance()
    reminder = await store.find_reminder_by_title(title, list_name)
    if reminder is None:
        raise NotFoundError("Reminder", title)
    return await store.update_reminder(
        reminder.id,
        title=new_title,
        notes=notes,
        url=url,
        completed=completed,
        due_date=due_date,
    )


async def complete_reminder(
    title: str,
    list_name: str | None = None,
    completed: bool = True,
) -> Reminder:
    """Mark a reminder as complete or incomplete.

    Args:
        title: Title of the reminder.
        list_name: Title of the list holding the reminder (optional).
        completed: True to mark as complete, False to mark as incomplete.

    Returns:
        The updated reminder with its new completion status.

    Raises:
        NotFoundError: If no reminder has the given title.
    """
    return await update_reminder(title, list_name=list_name, completed=completed)


async def delete_reminder(title: str, list_name: str | None = None) -> DeleteResult:
    """Delete a reminder, found by its title.

    Args:
        title: Title of the reminder to delete.
        list_name: Title of the list holding the reminder (optional).

    Raises:
        NotFoundError: If no reminder has the given title.
    """
    store = EventKitStore.get_instance()
    reminder = await store.find_reminder_by_title(title, list_name)
    if reminder is None:
        raise NotFoundError("Reminder", title)
    return await store.delete_reminder(reminder.id)


__all__ = [
    "get_reminders",
    "create_reminder",
    "update_reminder",
    "complete_reminder",
    "delete_reminder",
]
