"""MCP tools for reminder list management."""

from ..models import DeleteResult, ReminderList
from ..store import EventKitStore


async def list_reminder_lists() -> dict[str, list[ReminderList]]:
    """Get all reminder lists.

    Returns every list in the user's Reminders app with its ID and title.
    """
    store = EventKitStore.get_instance()
    lists = await store.find_all_lists()
    # Wrap in dict to ensure FastMCP always returns a TextContent
    # (empty lists cause "No result received" in Claude Desktop)
    return {"lists": lists}


async def create_reminder_list(name: str) -> ReminderList:
    """Create a new reminder list.

    Args:
        name: The title for the new list.

    Returns:
        The newly created reminder list.
    """
    store = EventKitStore.get_instance()
    return await store.create_list(name)


async def update_reminder_list(name: str, new_name: str) -> ReminderList:
    """Rename a reminder list.

    Args:
        name: Current title of the list.
        new_name: New title for the list.

    Returns:
        The updated reminder list.
    """
    store = EventKitStore.get_instance()
    return await store.update_list(name, new_name)


async def delete_reminder_list(name: str) -> DeleteResult:
    """Delete a reminder list.

    Warning: This will also delete all reminders in the list.

    Args:
        name: Title of the list to delete.
    """
    store = EventKitStore.get_instance()
    return await store.delete_list(name)


__all__ = [
    "list_reminder_lists",
    "create_reminder_list",
    "update_reminder_list",
    "delete_reminder_list",
]
