"""Tests for the MCP tool functions against a scripted EventKitCLI."""

import pytest

from helpers import FakeCli
from mcp_server_apple_reminders.exceptions import CliCommandError, NotFoundError
from mcp_server_apple_reminders.models import PermissionDomain
from mcp_server_apple_reminders.store import EventKitStore
from mcp_server_apple_reminders.tools import (
    complete_reminder,
    delete_reminder,
    get_calendar_events,
    get_permission_status,
    get_reminders,
    list_calendars,
    list_reminder_lists,
    request_permission,
    update_reminder,
)

READ = {
    "lists": [{"id": "l1", "title": "Groceries"}],
    "reminders": [
        {"id": f"r{i}", "title": f"Item {i}", "list": "Groceries"} for i in range(5)
    ],
}


@pytest.fixture
def cli(restore_store) -> FakeCli:
    fake = FakeCli({"read": READ})
    EventKitStore.configure(fake)
    return fake


async def test_get_reminders_paginates_and_reports_total(cli):
    result = await get_reminders(limit=2, offset=1)

    assert [r.id for r in result["reminders"]] == ["r1", "r2"]
    assert result["total"] == 5


async def test_get_reminders_empty_is_wrapped(cli):
    result = await get_reminders(list_name="Nowhere")

    assert result == {"reminders": [], "total": 0}


async def test_update_reminder_by_title(cli):
    cli.responses["update"] = {"id": "r3", "title": "Renamed", "list": "Groceries"}

    updated = await update_reminder("Item 3", new_title="Renamed")

    assert updated.title == "Renamed"
    assert cli.calls[-1] == ["--action", "update", "--id", "r3", "--title", "Renamed"]


async def test_update_missing_reminder_raises(cli):
    with pytest.raises(NotFoundError, match="Reminder not found: Nope"):
        await update_reminder("Nope", new_title="x")

    assert all(call[1] == "read" for call in cli.calls)


async def test_complete_reminder(cli):
    cli.responses["update"] = {
        "id": "r0",
        "title": "Item 0",
        "list": "Groceries",
        "isCompleted": True,
    }

    reminder = await complete_reminder("Item 0")

    assert reminder.is_completed
    assert cli.calls[-1] == ["--action", "update", "--id", "r0", "--isCompleted", "true"]


async def test_delete_reminder_by_title(cli):
    cli.responses["delete"] = {"id": "r4", "title": "Item 4", "deleted": True}

    result = await delete_reminder("Item 4", list_name="Groceries")

    assert result.deleted
    assert cli.calls[-1] == ["--action", "delete", "--id", "r4"]


async def test_delete_missing_reminder_raises(cli):
    with pytest.raises(NotFoundError):
        await delete_reminder("Item 4", list_name="Elsewhere")


async def test_list_tools_wrap_results(cli):
    cli.responses["read-lists"] = READ["lists"]
    cli.responses["read-calendars"] = []

    lists = await list_reminder_lists()
    calendars = await list_calendars()

    assert [lst.id for lst in lists["lists"]] == ["l1"]
    assert calendars == {"calendars": []}


async def test_get_calendar_events_total(cli):
    cli.responses["read-events"] = {
        "calendars": [],
        "events": [
            {
                "id": f"e{i}",
                "title": "Meeting",
                "calendar": "Work",
                "startDate": "2025-10-30T09:00:00",
                "endDate": "2025-10-30T10:00:00",
            }
            for i in range(3)
        ],
    }

    result = await get_calendar_events(limit=1)

    assert [e.id for e in result["events"]] == ["e0"]
    assert result["total"] == 3


async def test_permission_tools(cli):
    status = {"scope": "reminders", "status": "authorized", "promptAllowed": False}
    cli.responses["permission-status"] = status
    cli.responses["request-permission"] = status

    checked = await get_permission_status(PermissionDomain.REMINDERS)
    requested = await request_permission(PermissionDomain.REMINDERS)

    assert checked.status == "authorized"
    assert requested.status == "authorized"
    assert cli.calls[-2:] == [
        ["--action", "permission-status", "--target", "reminders"],
        ["--action", "request-permission", "--target", "reminders"],
    ]


async def test_cli_errors_reach_the_caller(cli):
    cli.responses["read"] = CliCommandError("Reminder permission denied")

    with pytest.raises(CliCommandError, match="Reminder permission denied"):
        await get_reminders()
