"""Test doubles for the EventKitCLI bridge."""

import json
import subprocess
from collections.abc import Sequence
from typing import Any

from mcp_server_apple_reminders.models import PermissionDomain


def completed_process(
    stdout: str = "", returncode: int = 0, stderr: str = ""
) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(
        args=[], returncode=returncode, stdout=stdout.encode(), stderr=stderr.encode()
    )


def success_output(result: Any) -> str:
    return json.dumps({"status": "success", "result": result})


def error_output(message: str) -> str:
    return json.dumps({"status": "error", "message": message})


class FakeRunner:
    """Records commands and replays scripted results in order.

    A result may be a CompletedProcess or an exception to raise. The last
    result repeats once the script runs out.
    """

    def __init__(self, *results: subprocess.CompletedProcess | BaseException) -> None:
        self.calls: list[list[str]] = []
        self._results = list(results)

    async def __call__(self, command: Sequence[str]) -> subprocess.CompletedProcess:
        self.calls.append(list(command))
        result = self._results.pop(0) if len(self._results) > 1 else self._results[0]
        if isinstance(result, BaseException):
            raise result
        return result


class FakeBridge:
    """Stands in for PermissionBridge and records requested domains."""

    def __init__(self, error: BaseException | None = None) -> None:
        self.calls: list[PermissionDomain] = []
        self._error = error

    async def trigger(self, domain: PermissionDomain) -> None:
        self.calls.append(domain)
        if self._error is not None:
            raise self._error


class FakeCli:
    """Stands in for EventKitCli; maps actions to scripted results."""

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.calls: list[list[str]] = []
        self.responses = responses or {}

    async def execute(self, args: Sequence[str]) -> Any:
        argv = list(args)
        self.calls.append(argv)
        response = self.responses.get(argv[1])
        if isinstance(response, BaseException):
            raise response
        return response
