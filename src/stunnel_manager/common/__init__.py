"""Common utilities and shared functionality."""

from .exceptions import (
    BackupError,
    BinaryNotFoundError,
    ConfigIOError,
    ConfigReadError,
    ConfigValidationError,
    ConfigWriteError,
    DuplicateProviderError,
    InvalidArgumentError,
    PidFileError,
    ProcessError,
    ProcessTimeoutError,
    StunnelManagerError,
)
from .logging import get_logger, setup_logging
from .utils import (
    MAX_PORT,
    MIN_PORT,
    atomic_write_text,
    validate_non_empty_string,
    validate_port,
    validate_section_name,
)

__all__ = [
    # Exceptions
    "StunnelManagerError",
    "ConfigIOError",
    "ConfigReadError",
    "ConfigWriteError",
    "BackupError",
    "ConfigValidationError",
    "ProcessError",
    "ProcessTimeoutError",
    "BinaryNotFoundError",
    "PidFileError",
    "DuplicateProviderError",
    "InvalidArgumentError",
    # Logging
    "get_logger",
    "setup_logging",
    # Utils
    "validate_port",
    "validate_non_empty_string",
    "validate_section_name",
    "atomic_write_text",
    "MIN_PORT",
    "MAX_PORT",
]
