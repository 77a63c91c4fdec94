"""Integration tests against a real EventKitCLI binary.

These tests require a built bin/EventKitCLI (or EVENTKIT_CLI_PATH) on macOS
with Reminders access granted in System Settings. They create a test list
called __MCP_TEST__ and clean up after each test.
"""

import sys
import uuid

import pytest

from mcp_server_apple_reminders.binary import BinaryLocator, get_environment_binary_config
from mcp_server_apple_reminders.cli import EventKitCli
from mcp_server_apple_reminders.exceptions import RemindersMCPError
from mcp_server_apple_reminders.store import EventKitStore
from mcp_server_apple_reminders.tools.lists import (
    create_reminder_list,
    delete_reminder_list,
    list_reminder_lists,
)
from mcp_server_apple_reminders.tools.reminders import (
    complete_reminder,
    create_reminder,
    delete_reminder,
    get_reminders,
)

# Test list name
TEST_LIST_NAME = "__MCP_TEST__"


def _find_binary() -> BinaryLocator | None:
    """Return a locator for a usable binary, or None."""
    if sys.platform != "darwin":
        return None
    locator = BinaryLocator(config=get_environment_binary_config("development"))
    try:
        locator.locate()
    except RemindersMCPError:
        return None
    return locator


_LOCATOR = _find_binary()

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        _LOCATOR is None,
        reason="EventKitCLI not built or not on macOS",
    ),
]


@pytest.fixture
async def test_list(restore_store):
    """Create a test list and clean it up after the test."""
    EventKitStore.configure(EventKitCli(locator=_LOCATOR))

    # Unique suffix to avoid conflicts
    list_name = f"{TEST_LIST_NAME}_{uuid.uuid4().hex[:8]}"
    test_list = await create_reminder_list(list_name)

    yield test_list

    # Cleanup: delete the test list (and all reminders in it)
    try:
        await delete_reminder_list(test_list.title)
    except RemindersMCPError:
        pass  # Already deleted


async def test_list_reminder_lists(test_list):
    """Test that list_reminder_lists returns the test list."""
    result = await list_reminder_lists()

    assert test_list.title in [lst.title for lst in result["lists"]]


async def test_reminder_lifecycle(test_list):
    """Test create, complete, and delete of a reminder by title."""
    reminder = await create_reminder(
        title="Lifecycle Test",
        list_name=test_list.title,
        notes="Test notes",
    )
    assert reminder.title == "Lifecycle Test"
    assert not reminder.is_completed

    completed = await complete_reminder("Lifecycle Test", list_name=test_list.title)
    assert completed.is_completed

    result = await get_reminders(list_name=test_list.title, show_completed=True)
    assert [r.id for r in result["reminders"]] == [reminder.id]

    await delete_reminder("Lifecycle Test", list_name=test_list.title)
    result = await get_reminders(list_name=test_list.title, show_completed=True)
    assert result["total"] == 0
