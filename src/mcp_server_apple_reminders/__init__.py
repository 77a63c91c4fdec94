"""MCP Server for macOS Reminders and Calendar."""

from .binary import BinaryLocator
from .cli import CliInvoker, EventKitCli, RetryOrchestrator, classify_permission_error
from .exceptions import (
    BinaryConfigurationError,
    BinaryNotFoundError,
    BinaryValidationError,
    CliCommandError,
    CliExecutionError,
    NotFoundError,
    PermissionTriggerError,
    RemindersMCPError,
)
from .models import (
    BinaryLocation,
    Calendar,
    CalendarEvent,
    DueWithin,
    PermissionDomain,
    PermissionStatus,
    Reminder,
    ReminderList,
    ValidationCode,
)
from .permissions import PermissionBridge
from .server import main, mcp
from .store import EventKitStore

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "main",
    "mcp",
    # CLI bridge
    "BinaryLocator",
    "PermissionBridge",
    "CliInvoker",
    "RetryOrchestrator",
    "EventKitCli",
    "classify_permission_error",
    # Store
    "EventKitStore",
    # Models
    "BinaryLocation",
    "PermissionDomain",
    "PermissionStatus",
    "ValidationCode",
    "DueWithin",
    "Reminder",
    "ReminderList",
    "Calendar",
    "CalendarEvent",
    # Exceptions
    "RemindersMCPError",
    "BinaryConfigurationError",
    "BinaryValidationError",
    "BinaryNotFoundError",
    "CliExecutionError",
    "CliCommandError",
    "PermissionTriggerError",
    "NotFoundError",
]
