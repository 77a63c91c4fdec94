"""Locate and validate the EventKitCLI binary.

The binary is the only thing this server executes with user data, so every
candidate path goes through the same checks before it is run:

1. No ``..`` segments, before or after normalization
2. Absolute path (unless the environment relaxes this)
3. Regular, executable file no larger than the configured ceiling
4. SHA-256 match when an expected hash is configured

Resolution happens once per BinaryLocator; the result is cached.
"""

import hashlib
import logging
import os
import threading
from collections.abc import Iterable
from pathlib import Path, PurePath

from .constants import (
    BINARY_DIR,
    BINARY_NAME,
    DEFAULT_ENVIRONMENT,
    ENV_BINARY_HASH,
    ENV_BINARY_MAX_SIZE,
    ENV_BINARY_PATH,
    ENV_BINARY_REQUIRE_ABSOLUTE,
    ENV_ENVIRONMENT,
    MAX_DIRECTORY_SEARCH_DEPTH,
    PRODUCTION_MAX_BINARY_SIZE,
    PROJECT_MARKER,
    RELAXED_ENVIRONMENTS,
    RELAXED_MAX_BINARY_SIZE,
)
from .exceptions import (
    BinaryConfigurationError,
    BinaryNotFoundError,
    BinaryValidationError,
)
from .models import BinaryLocation, BinaryValidationConfig, ValidationCode

logger = logging.getLogger(__name__)

_HASH_CHUNK_SIZE = 64 * 1024
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _has_traversal(path: str) -> bool:
    """Check for ``..`` segments in the raw and the normalized path."""
    return ".." in PurePath(path).parts or ".." in PurePath(os.path.normpath(path)).parts


def validate_binary_path(path: str | Path, config: BinaryValidationConfig) -> None:
    """Check the shape of a binary path without touching the filesystem.

    Raises:
        BinaryValidationError: PATH_TRAVERSAL or NOT_ABSOLUTE_PATH
    """
    raw = str(path)
    if _has_traversal(raw):
        raise BinaryValidationError(
            f"Binary path contains traversal segments: {raw}",
            ValidationCode.PATH_TRAVERSAL,
            raw,
        )
    if config.require_absolute_path and not os.path.isabs(raw):
        raise BinaryValidationError(
            f"Binary path must be absolute: {raw}",
            ValidationCode.NOT_ABSOLUTE_PATH,
            raw,
        )


def calculate_binary_hash(path: str | Path) -> str:
    """Return the hex SHA-256 digest of a file's contents."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_HASH_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def validate_binary_integrity(
    path: str | Path, config: BinaryValidationConfig
) -> BinaryLocation:
    """Check an existing file against the size and hash constraints.

    Args:
        path: Path to the binary
        config: Validation settings

    Returns:
        The validated location

    Raises:
        BinaryValidationError: NOT_A_FILE, NOT_EXECUTABLE, FILE_TOO_LARGE,
            or HASH_MISMATCH
    """
    file_path = Path(path)
    raw = str(file_path)

    if not file_path.is_file():
        raise BinaryValidationError(
            f"Binary path is not a regular file: {raw}", ValidationCode.NOT_A_FILE, raw
        )
    if not os.access(file_path, os.X_OK):
        raise BinaryValidationError(
            f"Binary is not executable: {raw}", ValidationCode.NOT_EXECUTABLE, raw
        )

    size = file_path.stat().st_size
    if size > config.max_file_size:
        raise BinaryValidationError(
            f"Binary is {size} bytes, larger than the {config.max_file_size} byte limit",
            ValidationCode.FILE_TOO_LARGE,
            raw,
        )

    sha256 = None
    if config.expected_hash:
        sha256 = calculate_binary_hash(file_path)
        if sha256 != config.expected_hash:
            raise BinaryValidationError(
                f"Binary hash mismatch for {raw}", ValidationCode.HASH_MISMATCH, raw
            )

    return BinaryLocation(path=file_path.resolve(), size=size, sha256=sha256)


def validate_binary_security(
    path: str | Path, config: BinaryValidationConfig
) -> BinaryLocation:
    """Run the path checks followed by the file checks."""
    validate_binary_path(path, config)
    return validate_binary_integrity(path, config)


def find_secure_binary_path(
    candidates: Iterable[str | Path], config: BinaryValidationConfig
) -> tuple[BinaryLocation | None, list[BinaryValidationError]]:
    """Return the first candidate that passes validation.

    Candidates that do not exist are skipped silently. Candidates that exist
    but fail validation are logged and collected so the caller can surface
    the reason.

    Returns:
        Tuple of (location or None, validation errors seen along the way)
    """
    errors: list[BinaryValidationError] = []
    for candidate in candidates:
        try:
            validate_binary_path(candidate, config)
            if not Path(candidate).exists():
                continue
            location = validate_binary_integrity(candidate, config)
        except BinaryValidationError as e:
            logger.warning(f"Rejected {BINARY_NAME} candidate {candidate}: {e}")
            errors.append(e)
            continue
        return location, errors
    return None, errors


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


def _parse_max_size(value: str) -> int:
    """Parse a byte ceiling; it must be a positive integer."""
    try:
        size = int(value)
    except ValueError:
        raise BinaryConfigurationError(
            ENV_BINARY_MAX_SIZE, value, "expected a positive number of bytes"
        ) from None
    if size <= 0:
        raise BinaryConfigurationError(
            ENV_BINARY_MAX_SIZE, value, "expected a positive number of bytes"
        )
    return size


def get_environment_binary_config(
    environment: str | None = None,
    search_roots: list[Path] | None = None,
) -> BinaryValidationConfig:
    """Build validation settings for the current environment.

    ``test`` and ``development`` accept relative paths and binaries up to
    100 MB. Every other environment requires an absolute path, caps the
    size at 50 MB, and takes the expected hash from EVENTKIT_CLI_SHA256.
    EVENTKIT_CLI_MAX_SIZE and EVENTKIT_CLI_REQUIRE_ABSOLUTE override either
    profile.

    Raises:
        BinaryConfigurationError: If EVENTKIT_CLI_MAX_SIZE is not a positive
            integer
    """
    if environment is None:
        environment = os.environ.get(ENV_ENVIRONMENT, DEFAULT_ENVIRONMENT)

    if environment in RELAXED_ENVIRONMENTS:
        require_absolute = False
        max_size = RELAXED_MAX_BINARY_SIZE
        expected_hash = None
    else:
        require_absolute = True
        max_size = PRODUCTION_MAX_BINARY_SIZE
        expected_hash = os.environ.get(ENV_BINARY_HASH) or None

    max_size_override = os.environ.get(ENV_BINARY_MAX_SIZE)
    if max_size_override:
        max_size = _parse_max_size(max_size_override)
    require_absolute_override = os.environ.get(ENV_BINARY_REQUIRE_ABSOLUTE)
    if require_absolute_override:
        require_absolute = _parse_bool(require_absolute_override)

    return BinaryValidationConfig(
        require_absolute_path=require_absolute,
        max_file_size=max_size,
        expected_hash=expected_hash,
        search_roots=search_roots if search_roots is not None else default_search_roots(),
    )


def find_project_root(start: Path, max_depth: int = MAX_DIRECTORY_SEARCH_DEPTH) -> Path | None:
    """Walk upward from ``start`` looking for the project marker file."""
    current = start
    for _ in range(max_depth):
        if (current / PROJECT_MARKER).is_file():
            return current
        if current.parent == current:
            break
        current = current.parent
    return None


def default_search_roots() -> list[Path]:
    """Directories that may hold ``bin/EventKitCLI``, most specific first."""
    package_dir = Path(__file__).resolve().parent
    roots = [package_dir]
    project_root = find_project_root(package_dir)
    if project_root is not None:
        roots.append(project_root)
    roots.append(Path.cwd())

    unique: list[Path] = []
    for root in roots:
        if root not in unique:
            unique.append(root)
    return unique


class BinaryLocator:
    """Resolves the EventKitCLI path once and caches the result.

    Usage:
        locator = BinaryLocator()
        location = locator.locate()
    """

    def __init__(
        self,
        config: BinaryValidationConfig | None = None,
        override: str | Path | None = None,
    ) -> None:
        self._config = config if config is not None else get_environment_binary_config()
        if override is None:
            override = os.environ.get(ENV_BINARY_PATH) or None
        self._override = override
        self._location: BinaryLocation | None = None
        self._lock = threading.Lock()

    @property
    def config(self) -> BinaryValidationConfig:
        return self._config

    def candidates(self) -> list[Path]:
        """Candidate paths in search order (override excluded)."""
        return [root / BINARY_DIR / BINARY_NAME for root in self._config.search_roots]

    def locate(self) -> BinaryLocation:
        """Return the validated binary location, resolving it on first use.

        Raises:
            BinaryValidationError: The configured binary failed a check
            BinaryNotFoundError: No candidate exists
        """
        if self._location is None:
            with self._lock:
                if self._location is None:
                    self._location = self._resolve()
        return self._location

    def _resolve(self) -> BinaryLocation:
        if self._override is not None:
            # An explicit path is validated strictly; no fallback search.
            location = validate_binary_security(self._override, self._config)
            logger.debug(f"{BINARY_NAME} found at {location.path} (override)")
            return location

        location, errors = find_secure_binary_path(self.candidates(), self._config)
        if location is not None:
            logger.debug(f"{BINARY_NAME} found at {location.path}")
            return location
        if errors:
            raise errors[0]
        raise BinaryNotFoundError([str(c) for c in self.candidates()])
