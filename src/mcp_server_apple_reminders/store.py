"""EventKitCLI-backed access to Reminders and Calendar.

This module provides the EventKitStore singleton. Each method builds an
argument vector for EventKitCLI, runs it through the permission-aware
bridge, and converts the JSON result into models.
"""

import threading
from datetime import date, datetime
from typing import Any

from .cli import EventKitCli
from .exceptions import NotFoundError
from .models import (
    Calendar,
    CalendarEvent,
    DeleteResult,
    PermissionDomain,
    PermissionStatus,
    Reminder,
    ReminderFilters,
    ReminderList,
)
from .utils import apply_reminder_filters, bool_arg, format_cli_datetime

PERMISSION_STATUS_ACTION = "permission-status"
REQUEST_PERMISSION_ACTION = "request-permission"


class EventKitStore:
    """Singleton facade over EventKitCLI.

    Usage:
        store = EventKitStore.get_instance()
        reminders = await store.find_reminders()
    """

    _instance: "EventKitStore | None" = None
    _lock = threading.Lock()

    def __init__(self, cli: EventKitCli | None = None) -> None:
        self._cli = cli or EventKitCli()

    @classmethod
    def get_instance(cls) -> "EventKitStore":
        """Get or create the singleton instance.

        Thread-safe singleton pattern with double-checked locking.
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def configure(cls, cli: EventKitCli) -> "EventKitStore":
        """Replace the singleton with one using the given CLI bridge."""
        with cls._lock:
            cls._instance = cls(cli)
        return cls._instance

    @property
    def cli(self) -> EventKitCli:
        return self._cli

    async def execute_cli(self, args: list[str]) -> Any:
        """Run EventKitCLI with permission-aware retry."""
        return await self._cli.execute(args)

    # Reminder Operations

    async def find_reminders(self, filters: ReminderFilters | None = None) -> list[Reminder]:
        """Get reminders matching the filters.

        Reads every reminder (completed included) and filters locally so
        the same rules apply regardless of the binary's own filtering.
        """
        data = await self.execute_cli(["--action", "read", "--showCompleted", "true"])
        reminders = [Reminder.model_validate(r) for r in data.get("reminders", [])]
        return apply_reminder_filters(reminders, filters or ReminderFilters())

    async def find_reminder_by_title(
        self, title: str, list_name: str | None = None
    ) -> Reminder | None:
        """Find the first reminder with an exact title, completed ones included."""
        reminders = await self.find_reminders(
            ReminderFilters(show_completed=True, list=list_name)
        )
        return next((r for r in reminders if r.title == title), None)

    async def create_reminder(
        self,
        title: str,
        list_name: str | None = None,
        notes: str | None = None,
        url: str | None = None,
        due_date: datetime | date | None = None,
    ) -> Reminder:
        """Create a new reminder.

        Args:
            title: Reminder title
            list_name: Target list title (default list if not specified)
            notes: Optional notes
            url: Optional URL
            due_date: Optional due date

        Returns:
            The created reminder
        """
        args = ["--action", "create", "--title", title]
        if list_name:
            args += ["--targetList", list_name]
        if notes:
            args += ["--note", notes]
        if url:
            args += ["--url", url]
        if due_date is not None:
            args += ["--dueDate", format_cli_datetime(due_date)]
        return Reminder.model_validate(await self.execute_cli(args))

    async def update_reminder(
        self,
        reminder_id: str,
        title: str | None = None,
        list_name: str | None = None,
        notes: str | None = None,
        url: str | None = None,
        completed: bool | None = None,
        due_date: datetime | date | None = None,
    ) -> Reminder:
        """Update an existing reminder; unset fields are left unchanged."""
        args = ["--action", "update", "--id", reminder_id]
        if title:
            args += ["--title", title]
        if list_name:
            args += ["--targetList", list_name]
        if notes:
            args += ["--note", notes]
        if url:
            args += ["--url", url]
        if completed is not None:
            args += ["--isCompleted", bool_arg(completed)]
        if due_date is not None:
            args += ["--dueDate", format_cli_datetime(due_date)]
        return Reminder.model_validate(await self.execute_cli(args))

    async def delete_reminder(self, reminder_id: str) -> DeleteResult:
        data = await self.execute_cli(["--action", "delete", "--id", reminder_id])
        return DeleteResult.model_validate(data or {"id": reminder_id})

    # List Operations

    async def find_all_lists(self) -> list[ReminderList]:
        data = await self.execute_cli(["--action", "read-lists"])
        return [ReminderList.model_validate(item) for item in data or []]

    async def list_exists(self, name: str) -> bool:
        return any(lst.title == name for lst in await self.find_all_lists())

    async def create_list(self, name: str) -> ReminderList:
        data = await self.execute_cli(["--action", "create-list", "--name", name])
        return ReminderList.model_validate(data)

    async def update_list(self, name: str, new_name: str) -> ReminderList:
        data = await self.execute_cli(
            ["--action", "update-list", "--name", name, "--newName", new_name]
        )
        return ReminderList.model_validate(data)

    async def delete_list(self, name: str) -> DeleteResult:
        data = await self.execute_cli(["--action", "delete-list", "--name", name])
        return DeleteResult.model_validate(data or {"title": name})

    # Calendar Operations

    async def find_calendars(self) -> list[Calendar]:
        data = await self.execute_cli(["--action", "read-calendars"])
        return [Calendar.model_validate(item) for item in data or []]

    async def find_events(
        self,
        start_date: datetime | date | None = None,
        end_date: datetime | date | None = None,
        calendar_name: str | None = None,
        search: str | None = None,
    ) -> list[CalendarEvent]:
        """Get events, optionally bounded by dates, calendar, and search text."""
        args = ["--action", "read-events"]
        if start_date is not None:
            args += ["--startDate", format_cli_datetime(start_date)]
        if end_date is not None:
            args += ["--endDate", format_cli_datetime(end_date)]
        if calendar_name:
            args += ["--filterCalendar", calendar_name]
        if search:
            args += ["--search", search]
        data = await self.execute_cli(args)
        return [CalendarEvent.model_validate(e) for e in data.get("events", [])]

    async def find_event_by_id(self, event_id: str) -> CalendarEvent:
        """Get a single event by ID.

        Raises:
            NotFoundError: If no event has the given ID
        """
        for event in await self.find_events():
            if event.id == event_id:
                return event
        raise NotFoundError("Event", event_id)

    async def create_event(
        self,
        title: str,
        start_date: datetime | date,
        end_date: datetime | date,
        calendar_name: str | None = None,
        notes: str | None = None,
        location: str | None = None,
        url: str | None = None,
        is_all_day: bool | None = None,
    ) -> CalendarEvent:
        args = [
            "--action",
            "create-event",
            "--title",
            title,
            "--startDate",
            format_cli_datetime(start_date),
            "--endDate",
            format_cli_datetime(end_date),
        ]
        args += self._event_detail_args(calendar_name, notes, location, url, is_all_day)
        return CalendarEvent.model_validate(await self.execute_cli(args))

    async def update_event(
        self,
        event_id: str,
        title: str | None = None,
        start_date: datetime | date | None = None,
        end_date: datetime | date | None = None,
        calendar_name: str | None = None,
        notes: str | None = None,
        location: str | None = None,
        url: str | None = None,
        is_all_day: bool | None = None,
    ) -> CalendarEvent:
        args = ["--action", "update-event", "--id", event_id]
        if title:
            args += ["--title", title]
        if start_date is not None:
            args += ["--startDate", format_cli_datetime(start_date)]
        if end_date is not None:
            args += ["--endDate", format_cli_datetime(end_date)]
        args += self._event_detail_args(calendar_name, notes, location, url, is_all_day)
        return CalendarEvent.model_validate(await self.execute_cli(args))

    async def delete_event(self, event_id: str) -> DeleteResult:
        data = await self.execute_cli(["--action", "delete-event", "--id", event_id])
        return DeleteResult.model_validate(data or {"id": event_id})

    # Permission Operations

    async def get_permission_status(self, scope: PermissionDomain) -> PermissionStatus:
        data = await self.execute_cli(
            ["--action", PERMISSION_STATUS_ACTION, "--target", PermissionDomain(scope).value]
        )
        return PermissionStatus.model_validate(data)

    async def request_permission(self, scope: PermissionDomain) -> PermissionStatus:
        data = await self.execute_cli(
            ["--action", REQUEST_PERMISSION_ACTION, "--target", PermissionDomain(scope).value]
        )
        return PermissionStatus.model_validate(data)

    # Private Helpers

    @staticmethod
    def _event_detail_args(
        calendar_name: str | None,
        notes: str | None,
        location: str | None,
        url: str | None,
        is_all_day: bool | None,
    ) -> list[str]:
        args: list[str] = []
        if calendar_name:
            args += ["--targetCalendar", calendar_name]
        if notes:
            args += ["--note", notes]
        if location:
            args += ["--location", location]
        if url:
            args += ["--url", url]
        if is_all_day is not None:
            args += ["--isAllDay", bool_arg(is_all_day)]
        return args
