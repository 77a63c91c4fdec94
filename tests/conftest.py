"""Pytest configuration and fixtures for MCP Server for Apple Reminders tests."""

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mcp_server_apple_reminders.binary import BinaryLocator  # noqa: E402
from mcp_server_apple_reminders.constants import (  # noqa: E402
    ENV_BINARY_HASH,
    ENV_BINARY_MAX_SIZE,
    ENV_BINARY_PATH,
    ENV_BINARY_REQUIRE_ABSOLUTE,
    ENV_ENVIRONMENT,
)
from mcp_server_apple_reminders.models import BinaryValidationConfig  # noqa: E402
from mcp_server_apple_reminders.store import EventKitStore  # noqa: E402


@pytest.fixture(autouse=True)
def clean_binary_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's EventKitCLI settings out of unit tests."""
    for name in (
        ENV_ENVIRONMENT,
        ENV_BINARY_PATH,
        ENV_BINARY_HASH,
        ENV_BINARY_MAX_SIZE,
        ENV_BINARY_REQUIRE_ABSOLUTE,
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_binary(tmp_path: Path) -> Path:
    """Create an executable stand-in for EventKitCLI at <tmp>/bin/EventKitCLI.

    Args:
        tmp_path: Pytest's temporary path fixture

    Returns:
        Absolute path to the fake binary
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    binary = bin_dir / "EventKitCLI"
    binary.write_bytes(b"#!/bin/sh\nexit 0\n")
    binary.chmod(0o755)
    return binary


@pytest.fixture
def relaxed_config(tmp_path: Path) -> BinaryValidationConfig:
    """Validation settings like the test environment's, rooted at tmp_path."""
    return BinaryValidationConfig(
        require_absolute_path=False,
        max_file_size=100 * 1024 * 1024,
        search_roots=[tmp_path],
    )


@pytest.fixture
def locator(fake_binary: Path, relaxed_config: BinaryValidationConfig) -> BinaryLocator:
    return BinaryLocator(config=relaxed_config, override=fake_binary)


@pytest.fixture
def restore_store() -> Iterator[None]:
    """Restore the EventKitStore singleton after a test replaces it."""
    saved = EventKitStore._instance
    yield
    EventKitStore._instance = saved
