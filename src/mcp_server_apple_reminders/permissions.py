"""Trigger macOS permission dialogs through AppleScript.

Running a read-only AppleScript command against Reminders or Calendar makes
macOS show its privacy dialog when access has not been decided yet. The
bridge only reports whether the probe ran, never whether access was
granted.
"""

import logging

import anyio

from .constants import PERMISSION_PROMPT_TIMEOUT
from .exceptions import PermissionTriggerError
from .models import PermissionDomain
from .utils import ProcessRunner, decode_output, run_process

logger = logging.getLogger(__name__)

APPLESCRIPT_SNIPPETS: dict[PermissionDomain, str] = {
    PermissionDomain.REMINDERS: 'tell application "Reminders" to get the name of every list',
    PermissionDomain.CALENDARS: 'tell application "Calendar" to get the name of every calendar',
}


class _PendingTrigger:
    """Shared outcome of one in-flight probe."""

    def __init__(self, domain: PermissionDomain) -> None:
        self.done = anyio.Event()
        # Stays set if the probe is cancelled before it reports back.
        self.error: PermissionTriggerError | None = PermissionTriggerError(
            domain, "permission prompt was cancelled"
        )


class PermissionBridge:
    """Runs permission probes with at most one in flight per domain.

    Concurrent callers for the same domain wait on the probe already
    running and receive its outcome instead of spawning another dialog.
    """

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        timeout: float = PERMISSION_PROMPT_TIMEOUT,
    ) -> None:
        self._runner = runner or run_process
        self._timeout = timeout
        self._in_flight: dict[PermissionDomain, _PendingTrigger] = {}

    def is_pending(self, domain: PermissionDomain) -> bool:
        """Whether a probe for ``domain`` is currently running."""
        return PermissionDomain(domain) in self._in_flight

    async def trigger(self, domain: PermissionDomain) -> None:
        """Run the probe for ``domain``, or join the one already running.

        Raises:
            PermissionTriggerError: If osascript could not run, failed, or
                timed out
        """
        domain = PermissionDomain(domain)

        pending = self._in_flight.get(domain)
        if pending is not None:
            logger.debug(f"Joining in-flight {domain.value} permission prompt")
            await pending.done.wait()
            if pending.error is not None:
                raise pending.error
            return

        pending = _PendingTrigger(domain)
        self._in_flight[domain] = pending
        try:
            logger.info(f"Triggering {domain.value} permission prompt")
            # Runs to completion or timeout even if the starting caller is
            # cancelled; waiters share its outcome.
            with anyio.CancelScope(shield=True):
                pending.error = await self._probe(domain)
        finally:
            del self._in_flight[domain]
            pending.done.set()

        if pending.error is not None:
            raise pending.error

    async def _probe(self, domain: PermissionDomain) -> PermissionTriggerError | None:
        command = ["osascript", "-e", APPLESCRIPT_SNIPPETS[domain]]
        try:
            with anyio.fail_after(self._timeout):
                completed = await self._runner(command)
        except TimeoutError:
            return PermissionTriggerError(
                domain, f"timed out after {self._timeout:g} seconds"
            )
        except OSError as e:
            return PermissionTriggerError(domain, str(e))
        except Exception as e:
            return PermissionTriggerError(domain, str(e) or type(e).__name__)

        if completed.returncode != 0:
            stderr = decode_output(completed.stderr).strip()
            return PermissionTriggerError(
                domain, stderr or f"osascript exited with status {completed.returncode}"
            )
        return None
