"""
Configuration, file locations and error handling utilities for sfcatalog.

Copyright (c) 2026 sfcatalog contributors

MIT License
"""

import os
from enum import Enum
from pathlib import Path
from typing import Type, Optional

from sfcatalog.logger import get_logger

logger = get_logger(__name__)

HOME_ENV = "SFCATALOG_HOME"
RESOURCES_ENV = "SFCATALOG_RESOURCES"

DATABASE_FILE_NAME = "db.sqlite"
ACTIVE_STATE_FILE_NAME = "activeState.json"


class ErrorMode(Enum):
    """
    Error handling mode for soft catalog conflicts.

    STRICT: All errors raise exceptions (default, fail-fast)
    LENIENT: Non-fatal errors become warnings, execution continues
    """
    STRICT = "strict"
    LENIENT = "lenient"


# Module-level default error mode
DEFAULT_ERROR_MODE: ErrorMode = ErrorMode.STRICT


def set_error_mode(mode: ErrorMode) -> None:
    """
    Set the default error mode for all sfcatalog operations.

    Args:
        mode: The error mode to use
    """
    global DEFAULT_ERROR_MODE
    DEFAULT_ERROR_MODE = mode


def get_error_mode() -> ErrorMode:
    """
    Get the current default error mode.

    Returns:
        The current error mode
    """
    return DEFAULT_ERROR_MODE


def handle_error(
    message: str,
    fatal: bool = False,
    error_mode: Optional[ErrorMode] = None,
    exception_class: Type[Exception] = RuntimeError,
) -> bool:
    """
    Handle an error based on the error mode.

    In STRICT mode (or if fatal=True), raises an exception.
    In LENIENT mode (and fatal=False), logs a warning and returns True.

    Args:
        message: Error description
        fatal: If True, always raise regardless of mode
        error_mode: Override the default error mode (optional)
        exception_class: Exception type to raise (default: RuntimeError)

    Returns:
        True if operation should continue (warning was issued)

    Raises:
        exception_class: If in STRICT mode or fatal=True

    Example:
        # In strict mode, raises TaggingError
        # In lenient mode, logs warning and returns True
        if already_tagged:
            if handle_error("Already tagged.", exception_class=TaggingError):
                return  # Continue in lenient mode
    """
    mode = error_mode if error_mode is not None else DEFAULT_ERROR_MODE

    if fatal or mode == ErrorMode.STRICT:
        raise exception_class(message)
    else:
        logger.warning(message)
        return True


"""Get OS-specific config base directory.

Windows: LOCALAPPDATA
macOS: ~/Library/Application Support
Linux: ~/.config
"""
def _default_config_base() -> Path:
    if os.name == "nt":
        local_app_data = os.environ.get("LOCALAPPDATA", str(Path.home()))
        return Path(local_app_data)
    if os.name == "posix" and "darwin" in os.uname().sysname.lower():
        return Path.home() / "Library" / "Application Support"
    return Path.home() / ".config"


def get_documents_dir() -> Path:
    """
    Return the directory that holds the catalog database and active-state file.

    Uses $SFCATALOG_HOME when set, otherwise a 'sfcatalog' folder under the
    OS-specific configuration directory. The directory is not created here.
    """
    configured = os.environ.get(HOME_ENV)
    if configured:
        return Path(configured).expanduser()
    return _default_config_base() / "sfcatalog"


def get_database_path() -> Path:
    return get_documents_dir() / DATABASE_FILE_NAME


def get_active_state_path() -> Path:
    return get_documents_dir() / ACTIVE_STATE_FILE_NAME


def get_resources_dir() -> Path:
    """
    Return the directory searched for bundled SF2 files.

    Uses $SFCATALOG_RESOURCES when set, otherwise the package's own
    'data' directory.
    """
    configured = os.environ.get(RESOURCES_ENV)
    if configured:
        return Path(configured).expanduser()
    return Path(__file__).resolve().parent / "data"
