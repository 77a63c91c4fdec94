"""Utility functions for MCP Server for Apple Reminders and Calendar."""

import subprocess
from collections.abc import Awaitable, Callable, Sequence
from datetime import date, datetime, timedelta
from typing import TypeVar

import anyio

from .models import DueWithin, Reminder, ReminderFilters

T = TypeVar("T")

ProcessRunner = Callable[[Sequence[str]], Awaitable[subprocess.CompletedProcess]]


async def run_process(command: Sequence[str]) -> subprocess.CompletedProcess:
    """Run a command without a shell and capture its output.

    Non-zero exit statuses are returned, not raised; spawn failures raise
    OSError.
    """
    return await anyio.run_process(list(command), check=False)


def decode_output(data: bytes | str | None) -> str:
    """Decode captured process output, tolerating bad bytes."""
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")


def format_cli_datetime(dt: datetime | date) -> str:
    """Format a date for EventKitCLI.

    Naive datetimes are sent as local ``YYYY-MM-DD HH:MM:SS``; aware ones as
    ISO 8601 with offset; plain dates as ``YYYY-MM-DD``.
    """
    if not isinstance(dt, datetime):
        return dt.isoformat()
    dt = dt.replace(microsecond=0)
    if dt.tzinfo is not None:
        return dt.isoformat()
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def parse_due_date(value: str | None) -> datetime | None:
    """Parse a due date string from the CLI into a naive local datetime."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def filter_reminders_by_date(
    reminders: list[Reminder],
    due_within: DueWithin,
    now: datetime | None = None,
) -> list[Reminder]:
    """Keep reminders whose due date falls inside the window.

    Windows are computed from local midnight. ``this-week`` runs
    from midnight today through midnight seven days ahead, inclusive.
    Reminders with a missing or unreadable due date only match ``no-date``.
    """
    if due_within == DueWithin.NO_DATE:
        return [r for r in reminders if not r.due_date]

    now = now or datetime.now()
    today = datetime(now.year, now.month, now.day)
    tomorrow = today + timedelta(days=1)
    day_after_tomorrow = tomorrow + timedelta(days=1)
    week_end = today + timedelta(days=7)

    matching = []
    for reminder in reminders:
        due = parse_due_date(reminder.due_date)
        if due is None:
            continue
        if due_within == DueWithin.OVERDUE:
            keep = due < today
        elif due_within == DueWithin.TODAY:
            keep = today <= due < tomorrow
        elif due_within == DueWithin.TOMORROW:
            keep = tomorrow <= due < day_after_tomorrow
        else:
            keep = today <= due <= week_end
        if keep:
            matching.append(reminder)
    return matching


def apply_reminder_filters(
    reminders: list[Reminder],
    filters: ReminderFilters,
    now: datetime | None = None,
) -> list[Reminder]:
    """Apply completion, list, search, and due-date filters in that order."""
    result = list(reminders)

    if not filters.show_completed:
        result = [r for r in result if not r.is_completed]

    if filters.list:
        result = [r for r in result if r.list == filters.list]

    if filters.search:
        query = filters.search.lower()
        result = [
            r
            for r in result
            if query in r.title.lower() or query in (r.notes or "").lower()
        ]

    if filters.due_within is not None:
        result = filter_reminders_by_date(result, filters.due_within, now)

    return result


def paginate(items: list[T], offset: int = 0, limit: int | None = None) -> list[T]:
    """Apply simple offset/limit pagination."""
    if offset:
        items = items[offset:]
    if limit is not None:
        items = items[:limit]
    return items


def bool_arg(value: bool) -> str:
    """Render a boolean the way EventKitCLI expects it."""
    return "true" if value else "false"

