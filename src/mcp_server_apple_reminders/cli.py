"""Bridge to the EventKitCLI binary.

EventKitCLI prints a single JSON envelope on stdout:

    {"status": "success", "result": ...}
    {"status": "error", "message": "..."}

CliInvoker runs the binary and unwraps the envelope. RetryOrchestrator adds
one permission-aware retry: when the binary reports that reminder or
calendar access was denied, it triggers the matching macOS permission
prompt and runs the same command once more.
"""

import logging
from collections.abc import Sequence
from typing import Any

import anyio
from pydantic import TypeAdapter, ValidationError

from .binary import BinaryLocator
from .constants import BINARY_NAME
from .exceptions import (
    CliCommandError,
    CliExecutionError,
    PermissionTriggerError,
    RemindersMCPError,
)
from .models import CliEnvelope, CliErrorEnvelope, PermissionDomain
from .permissions import PermissionBridge
from .utils import ProcessRunner, decode_output, run_process

logger = logging.getLogger(__name__)

_ENVELOPE_ADAPTER: TypeAdapter[Any] = TypeAdapter(CliEnvelope)

# Matched case-insensitively against the error message. This is the only
# signal the binary gives for permission failures.
PERMISSION_DENIAL_MARKERS: tuple[tuple[str, PermissionDomain], ...] = (
    ("reminder permission denied", PermissionDomain.REMINDERS),
    ("calendar permission denied", PermissionDomain.CALENDARS),
    ("reminder permission is write-only", PermissionDomain.REMINDERS),
    ("calendar permission is write-only", PermissionDomain.CALENDARS),
)


def classify_permission_error(message: str) -> PermissionDomain | None:
    """Map a permission-denied error message to its domain.

    Returns:
        The domain to request access for, or None if the message is not a
        permission denial
    """
    lowered = message.lower()
    for marker, domain in PERMISSION_DENIAL_MARKERS:
        if marker in lowered:
            return domain
    return None


def _parse_envelope(stdout: str) -> Any:
    """Parse stdout into an envelope, or None if it is not one."""
    try:
        return _ENVELOPE_ADAPTER.validate_json(stdout)
    except ValidationError:
        return None


class CliInvoker:
    """Runs EventKitCLI with an argument vector and unwraps its response."""

    def __init__(
        self,
        locator: BinaryLocator,
        runner: ProcessRunner | None = None,
    ) -> None:
        self._locator = locator
        self._runner = runner or run_process

    async def invoke(self, args: Sequence[str]) -> Any:
        """Run the binary and return the envelope's ``result``.

        Args:
            args: Argument vector, conventionally starting with ``--action``

        Returns:
            The ``result`` field of a success envelope, as parsed JSON

        Raises:
            BinaryNotFoundError: If the binary cannot be located
            BinaryValidationError: If the binary fails validation
            CliCommandError: If the binary answered with an error envelope;
                the message is the envelope's, unchanged
            CliExecutionError: If the binary could not run or printed
                something other than an envelope
        """
        argv = tuple(args)
        location = await anyio.to_thread.run_sync(self._locator.locate)
        command = [str(location.path), *argv]
        logger.debug(f"Running {BINARY_NAME} {' '.join(argv)}")

        try:
            completed = await self._runner(command)
        except OSError as e:
            raise CliExecutionError(f"{BINARY_NAME} execution failed: {e}") from e

        stdout = decode_output(completed.stdout)

        if completed.returncode != 0:
            # The binary exits non-zero after printing an error envelope.
            envelope = _parse_envelope(stdout)
            if isinstance(envelope, CliErrorEnvelope):
                raise CliCommandError(envelope.message)
            stderr = decode_output(completed.stderr).strip()
            cause = stderr or f"exited with status {completed.returncode}"
            raise CliExecutionError(f"{BINARY_NAME} execution failed: {cause}")

        envelope = _parse_envelope(stdout)
        if envelope is None:
            logger.debug(f"Unparseable {BINARY_NAME} output: {stdout[:500]!r}")
            raise CliExecutionError(
                f"{BINARY_NAME} execution failed: could not parse JSON response"
            )
        if isinstance(envelope, CliErrorEnvelope):
            raise CliCommandError(envelope.message)
        return envelope.result


class RetryOrchestrator:
    """Retries a CLI call once after triggering a permission prompt.

    At most one retry per call. If the retry also fails, the first error is
    raised since it carries the permission message the user needs to see.
    """

    def __init__(self, invoker: CliInvoker, bridge: PermissionBridge) -> None:
        self._invoker = invoker
        self._bridge = bridge

    async def execute(self, args: Sequence[str]) -> Any:
        argv = tuple(args)
        try:
            return await self._invoker.invoke(argv)
        except CliExecutionError as first_error:
            domain = classify_permission_error(str(first_error))
            if domain is None:
                raise

            logger.info(
                f"{BINARY_NAME} reported {domain.value} permission denied; "
                "triggering permission prompt and retrying once"
            )
            try:
                await self._bridge.trigger(domain)
            except PermissionTriggerError as e:
                logger.warning(str(e))

            try:
                return await self._invoker.invoke(argv)
            except RemindersMCPError as retry_error:
                logger.warning(
                    f"Retry after {domain.value} permission prompt failed: {retry_error}"
                )
            raise first_error


class EventKitCli:
    """Wires the binary locator, invoker, permission bridge, and retry logic.

    Usage:
        cli = EventKitCli()
        lists = await cli.execute(["--action", "read-lists"])
    """

    def __init__(
        self,
        locator: BinaryLocator | None = None,
        bridge: PermissionBridge | None = None,
        runner: ProcessRunner | None = None,
    ) -> None:
        self.locator = locator or BinaryLocator()
        self.bridge = bridge or PermissionBridge(runner=runner)
        self.invoker = CliInvoker(self.locator, runner=runner)
        self.orchestrator = RetryOrchestrator(self.invoker, self.bridge)

    async def execute(self, args: Sequence[str]) -> Any:
        """Run EventKitCLI with permission-aware retry and return its result."""
        return await self.orchestrator.execute(args)
