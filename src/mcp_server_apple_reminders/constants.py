"""Constants for MCP Server for Apple Reminders and Calendar."""

import os

# Environment variable names (read at call time by the binary locator)
ENV_ENVIRONMENT = "MCP_ENV"
ENV_BINARY_PATH = "EVENTKIT_CLI_PATH"
ENV_BINARY_HASH = "EVENTKIT_CLI_SHA256"
ENV_BINARY_MAX_SIZE = "EVENTKIT_CLI_MAX_SIZE"
ENV_BINARY_REQUIRE_ABSOLUTE = "EVENTKIT_CLI_REQUIRE_ABSOLUTE"

DEFAULT_ENVIRONMENT = "production"
RELAXED_ENVIRONMENTS: frozenset[str] = frozenset({"test", "development"})

# Native binary
BINARY_NAME = "EventKitCLI"
BINARY_DIR = "bin"

# Size ceilings
MEGABYTE: int = 1024 * 1024
PRODUCTION_MAX_BINARY_SIZE: int = 50 * MEGABYTE
RELAXED_MAX_BINARY_SIZE: int = 100 * MEGABYTE

# Timeouts
PERMISSION_PROMPT_TIMEOUT: float = float(
    os.environ.get("PERMISSION_PROMPT_TIMEOUT", "30.0")
)

# Project root search
MAX_DIRECTORY_SEARCH_DEPTH: int = 10
PROJECT_MARKER = "pyproject.toml"
