"""Pydantic models for Reminders MCP server."""

from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PermissionDomain(str, Enum):
    """OS privacy scopes the server asks access for.

    Used as the ``--target`` value for permission actions and as the key
    for permission prompt de-duplication.
    """

    REMINDERS = "reminders"
    CALENDARS = "calendars"


class ValidationCode(str, Enum):
    """Reasons a binary path can be rejected."""

    PATH_TRAVERSAL = "PATH_TRAVERSAL"
    NOT_ABSOLUTE_PATH = "NOT_ABSOLUTE_PATH"
    NOT_A_FILE = "NOT_A_FILE"
    NOT_EXECUTABLE = "NOT_EXECUTABLE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    HASH_MISMATCH = "HASH_MISMATCH"


class DueWithin(str, Enum):
    """Due date windows for filtering reminders."""

    TODAY = "today"
    TOMORROW = "tomorrow"
    THIS_WEEK = "this-week"
    OVERDUE = "overdue"
    NO_DATE = "no-date"


# Binary location


class BinaryValidationConfig(BaseModel):
    """Security settings applied to the native binary before it is run."""

    require_absolute_path: bool = Field(
        default=True, description="Reject relative binary paths"
    )
    max_file_size: int = Field(description="Largest accepted binary size in bytes")
    expected_hash: str | None = Field(
        default=None, description="Hex SHA-256 the binary must match"
    )
    search_roots: list[Path] = Field(
        default_factory=list,
        description="Directories searched for bin/EventKitCLI, in order",
    )

    @field_validator("expected_hash")
    @classmethod
    def normalize_hash(cls, v: str | None) -> str | None:
        """Lowercase the digest so comparisons are case-insensitive."""
        if v is None:
            return None
        v = v.strip().lower()
        return v or None


class BinaryLocation(BaseModel):
    """A validated binary path. Immutable once resolved."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(description="Absolute path to the binary")
    size: int = Field(description="File size in bytes at validation time")
    sha256: str | None = Field(
        default=None, description="Content digest, when a hash check ran"
    )


# CLI envelope


class CliSuccessEnvelope(BaseModel):
    status: Literal["success"]
    result: Any = None


class CliErrorEnvelope(BaseModel):
    status: Literal["error"]
    message: str


CliEnvelope = Annotated[
    CliSuccessEnvelope | CliErrorEnvelope, Field(discriminator="status")
]


# Records returned by EventKitCLI


class _WireModel(BaseModel):
    """Accepts the CLI's camelCase keys as well as snake_case names."""

    model_config = ConfigDict(populate_by_name=True)


class PermissionStatus(_WireModel):
    """Authorization state for one permission scope."""

    scope: str = Field(description="Permission scope (reminders or calendars)")
    status: str = Field(
        description="Authorization status, e.g. authorized, denied, notDetermined"
    )
    prompt_allowed: bool = Field(
        default=False,
        alias="promptAllowed",
        description="Whether the OS will still show a permission dialog",
    )
    instructions: str = Field(
        default="", description="Human-readable remediation instructions"
    )


class ReminderList(_WireModel):
    """A Reminders list."""

    id: str = Field(description="Unique identifier for the list")
    title: str = Field(description="Display title of the list")


class Reminder(_WireModel):
    """A reminder item."""

    id: str = Field(description="Unique identifier for the reminder")
    title: str = Field(description="Title/name of the reminder")
    list: str = Field(description="Title of the list this reminder belongs to")
    notes: str | None = Field(default=None, description="Additional notes")
    url: str | None = Field(default=None, description="Associated URL")
    due_date: str | None = Field(
        default=None, alias="dueDate", description="Due date as reported by the CLI"
    )
    is_completed: bool = Field(
        default=False, alias="isCompleted", description="Whether the reminder is done"
    )


class Calendar(_WireModel):
    """A calendar that holds events."""

    id: str = Field(description="Unique identifier for the calendar")
    title: str = Field(description="Display title of the calendar")


class CalendarEvent(_WireModel):
    """A calendar event."""

    id: str = Field(description="Unique identifier for the event")
    title: str = Field(description="Title of the event")
    calendar: str = Field(description="Title of the calendar holding the event")
    start_date: str = Field(alias="startDate", description="Event start")
    end_date: str = Field(alias="endDate", description="Event end")
    notes: str | None = Field(default=None, description="Event notes")
    location: str | None = Field(default=None, description="Event location")
    url: str | None = Field(default=None, description="Associated URL")
    is_all_day: bool = Field(
        default=False, alias="isAllDay", description="Whether the event spans whole days"
    )


class DeleteResult(_WireModel):
    """Acknowledgement for a delete action."""

    id: str | None = Field(default=None, description="ID of the deleted item")
    title: str | None = Field(default=None, description="Title of the deleted item")
    deleted: bool = Field(default=True, description="Whether the item was deleted")


class ReminderFilters(BaseModel):
    """Client-side filters applied to reminders read from the CLI."""

    show_completed: bool = Field(
        default=False, description="Include completed reminders"
    )
    list: str | None = Field(default=None, description="Only reminders in this list")
    search: str | None = Field(
        default=None, description="Case-insensitive match on title or notes"
    )
    due_within: DueWithin | None = Field(
        default=None, description="Only reminders due within this window"
    )
