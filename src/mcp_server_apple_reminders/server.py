"""FastMCP server for macOS Reminders and Calendar via EventKitCLI."""

import argparse
import logging
import os
import signal
import sys
from typing import Any

from fastmcp import FastMCP

from .binary import BinaryLocator
from .cli import EventKitCli
from .exceptions import (
    BinaryConfigurationError,
    BinaryNotFoundError,
    BinaryValidationError,
)
from .store import EventKitStore
from .tools.calendar import (
    create_calendar_event,
    delete_calendar_event,
    get_calendar_event,
    get_calendar_events,
    list_calendars,
    update_calendar_event,
)
from .tools.lists import (
    create_reminder_list,
    delete_reminder_list,
    list_reminder_lists,
    update_reminder_list,
)
from .tools.permissions import get_permission_status, request_permission
from .tools.reminders import (
    complete_reminder,
    create_reminder,
    delete_reminder,
    get_reminders,
    update_reminder,
)

# Configure logging
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastMCP server instance
mcp = FastMCP(
    name="mcp-server-apple-reminders",
    instructions="""
An MCP server for macOS Reminders and Calendar.

All operations run through the bundled EventKitCLI binary. When macOS
reports that Reminders or Calendar access is denied, the server triggers
the system permission dialog once and retries the operation.

## Available Tools

### Reminders (5 tools)
| Tool | Purpose |
|------|---------|
| get_reminders | Get reminders with filters (list, completion, search, due window) |
| create_reminder | Create with title, notes, url, due date |
| update_reminder | Update a reminder found by title |
| complete_reminder | Toggle completion status |
| delete_reminder | Delete a reminder found by title |

### List Management (4 tools)
| Tool | Purpose |
|------|---------|
| list_reminder_lists | Get all reminder lists |
| create_reminder_list | Create a new list |
| update_reminder_list | Rename a list |
| delete_reminder_list | Delete a list |

### Calendar (6 tools)
| Tool | Purpose |
|------|---------|
| list_calendars | Get all calendars |
| get_calendar_events | Get events with date/calendar/search filters |
| get_calendar_event | Get a single event by ID |
| create_calendar_event | Create an event |
| update_calendar_event | Update an event |
| delete_calendar_event | Delete an event |

### Permissions (2 tools)
| Tool | Purpose |
|------|---------|
| get_permission_status | Check Reminders or Calendar access |
| request_permission | Ask macOS for Reminders or Calendar access |

## Limitations
- Reminders are addressed by title for update/delete; the first match wins
- If access stays denied, grant it in System Settings > Privacy & Security
""",
)

# Register all MCP tools

# Reminder tools
mcp.tool(get_reminders)
mcp.tool(create_reminder)
mcp.tool(update_reminder)
mcp.tool(complete_reminder)
mcp.tool(delete_reminder)

# List management tools
mcp.tool(list_reminder_lists)
mcp.tool(create_reminder_list)
mcp.tool(update_reminder_list)
mcp.tool(delete_reminder_list)

# Calendar tools
mcp.tool(list_calendars)
mcp.tool(get_calendar_events)
mcp.tool(get_calendar_event)
mcp.tool(create_calendar_event)
mcp.tool(update_calendar_event)
mcp.tool(delete_calendar_event)

# Permission tools
mcp.tool(get_permission_status)
mcp.tool(request_permission)


# Signal handling for graceful shutdown
def signal_handler(signum: int, frame: Any) -> None:
    """Handle shutdown signals."""
    logger.info(f"Received signal {signum}, shutting down...")
    sys.exit(0)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="An MCP Server for macOS Reminders and Calendar"
    )
    parser.add_argument(
        "--cli-path",
        help="Path to the EventKitCLI binary (defaults to bin/EventKitCLI)",
    )
    args = parser.parse_args()

    # Resolve the binary at startup so a missing or tampered binary is
    # reported immediately rather than on the first tool call
    try:
        locator = BinaryLocator(override=args.cli_path)
        location = locator.locate()
        logger.info(f"Using EventKitCLI at {location.path}")
    except (BinaryConfigurationError, BinaryNotFoundError, BinaryValidationError) as e:
        logger.error(f"Failed to locate EventKitCLI: {e}")
        logger.error(
            "Build the binary into bin/EventKitCLI or set EVENTKIT_CLI_PATH "
            "to its absolute path"
        )
        sys.exit(1)

    EventKitStore.configure(EventKitCli(locator=locator))

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    mcp.run()


if __name__ == "__main__":
    main()
