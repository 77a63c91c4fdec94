"""Exceptions for MCP Server for Apple Reminders and Calendar."""

from .constants import BINARY_NAME
from .models import PermissionDomain, ValidationCode


class RemindersMCPError(Exception):
    """Base exception for Reminders MCP operations."""

    pass


class BinaryValidationError(RemindersMCPError):
    """The native binary failed a security check.

    Attributes:
        code: Machine-readable reason (see ValidationCode)
        path: The path that was rejected
    """

    def __init__(self, message: str, code: ValidationCode, path: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.path = path


class BinaryConfigurationError(RemindersMCPError):
    """A binary validation setting from the environment is malformed.

    Attributes:
        variable: Name of the offending environment variable
        value: The rejected value
    """

    def __init__(self, variable: str, value: str, reason: str) -> None:
        super().__init__(f"Invalid {variable}={value!r}: {reason}")
        self.variable = variable
        self.value = value


class BinaryNotFoundError(RemindersMCPError):
    """No candidate path yielded a usable binary."""

    def __init__(self, reasons: list[str] | None = None) -> None:
        super().__init__(
            f"{BINARY_NAME} binary not found. Build it into bin/{BINARY_NAME} "
            "or point EVENTKIT_CLI_PATH at it."
        )
        self.reasons = reasons or []


class CliExecutionError(RemindersMCPError):
    """The binary could not be run or its output could not be understood."""

    pass


class CliCommandError(CliExecutionError):
    """The binary answered with an error envelope.

    ``str(error)`` is exactly the envelope's message; permission retry
    classification depends on it.
    """

    pass


class PermissionTriggerError(RemindersMCPError):
    """Running the permission probe script failed."""

    def __init__(self, domain: PermissionDomain, cause: str) -> None:
        super().__init__(
            f"Failed to trigger {domain.value} permission prompt: {cause}"
        )
        self.domain = domain


class NotFoundError(RemindersMCPError):
    """Reminder, list, or event not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(f"{resource_type} not found: {resource_id}")
        self.resource_type = resource_type
        self.resource_id = resource_id
