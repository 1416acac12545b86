"""Service settings and stunnel binary discovery."""

import os
import shutil
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common.exceptions import BinaryNotFoundError
from .common.logging import LOG_LEVELS

DEFAULT_CONFIG_PATH = "/etc/stunnel/stunnel.conf"
DEFAULT_PID_FILE = "/var/run/stunnel.pid"

# Environment variable -> settings field
ENV_FIELDS = {
    "STUNNEL_CONFIG_PATH": "config_path",
    "STUNNEL_PID_FILE": "pid_file",
    "STUNNEL_BINARY_PATH": "binary_path",
    "STUNNEL_COMMAND_TIMEOUT": "command_timeout",
    "STUNNEL_STARTUP_GRACE": "startup_grace",
    "STUNNEL_MANAGER_LOG_LEVEL": "log_level",
    "STUNNEL_MANAGER_LOG_JSON": "log_json",
    "STUNNEL_MANAGER_LOG_FILE": "log_file",
}

BINARY_NAMES = ("stunnel", "stunnel4")

COMMON_BINARY_PATHS = [
    "/usr/bin/stunnel",
    "/usr/local/bin/stunnel",
    "/usr/sbin/stunnel",
    "/opt/stunnel/bin/stunnel",
]


class ServiceSettings(BaseModel):
    """Pydantic model for the control-plane service settings."""

    model_config = ConfigDict(
        str_strip_whitespace=True, validate_assignment=True, extra="forbid"
    )

    config_path: str = Field(
        default=DEFAULT_CONFIG_PATH, min_length=1, description="Managed config file"
    )
    pid_file: str = Field(
        default=DEFAULT_PID_FILE, min_length=1, description="stunnel PID file"
    )
    binary_path: str | None = Field(
        default=None, description="stunnel binary (auto-discovered if None)"
    )
    command_timeout: float = Field(
        default=10.0, ge=0.1, le=300.0, description="Timeout for external commands"
    )
    startup_grace: float = Field(
        default=0.5, ge=0.0, le=30.0, description="Seconds to watch a fresh spawn"
    )
    log_level: str = Field(default="INFO", description="Service log level")
    log_json: bool = Field(default=False, description="Render logs as JSON")
    log_file: str | None = Field(default=None, description="Also log to this file")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("binary_path", "log_file")
    @classmethod
    def validate_optional_path(cls, v: str | None) -> str | None:
        """Treat an empty path as not set."""
        return v or None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServiceSettings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings with every recognised variable applied
        """
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for env_name, field_name in ENV_FIELDS.items():
            raw = environ.get(env_name)
            if raw is None or raw == "":
                continue
            values[field_name] = raw
        return cls(**values)


def find_binary(binary_path: str | None = None) -> str:
    """Find the stunnel binary.

    Args:
        binary_path: Explicit path that must exist when given

    Returns:
        Path to the stunnel binary

    Raises:
        BinaryNotFoundError: If the binary cannot be found
    """
    if binary_path:
        if Path(binary_path).exists():
            return binary_path
        raise BinaryNotFoundError(f"stunnel binary not found at {binary_path}")

    for name in BINARY_NAMES:
        found = shutil.which(name)
        if found:
            return found

    for path in COMMON_BINARY_PATHS:
        if Path(path).exists():
            return path

    raise BinaryNotFoundError(
        "stunnel binary not found. Please install stunnel or set "
        "STUNNEL_BINARY_PATH environment variable."
    )
