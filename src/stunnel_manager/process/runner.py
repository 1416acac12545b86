"""Process capabilities for the stunnel binary: liveness, signals, spawn, check."""

from __future__ import annotations

import os
import signal
import subprocess
import tempfile
from typing import Any, Protocol

import psutil

from ..common.exceptions import (
    ConfigValidationError,
    ProcessError,
    ProcessTimeoutError,
)
from ..common.logging import get_logger
from ..settings import find_binary

logger = get_logger(__name__)

# Flag that makes stunnel check a configuration file and exit
VALIDATE_FLAG = "-test"

# Connection states that are not an active tunnel connection
IDLE_STATES = frozenset({psutil.CONN_LISTEN, psutil.CONN_NONE})


class ProcessRunner(Protocol):
    """Everything the service needs from the operating system."""

    def is_alive(self, pid: int) -> bool:
        """Check whether ``pid`` is a live process."""
        ...

    def send_reload_signal(self, pid: int) -> None:
        """Ask a running stunnel to re-read its configuration."""
        ...

    def spawn(self, config_path: str) -> int:
        """Start stunnel against ``config_path`` and return its pid."""
        ...

    def validate_config(self, config_path: str) -> None:
        """Raise ConfigValidationError if stunnel rejects ``config_path``."""
        ...

    def list_connections(self, pid: int) -> list[str]:
        """Describe the active connections of ``pid`` (empty on error)."""
        ...


def format_connection(conn: Any) -> str:
    """Render a psutil connection as ``laddr -> raddr (STATUS)``."""
    local = f"{conn.laddr.ip}:{conn.laddr.port}" if conn.laddr else "*"
    remote = f"{conn.raddr.ip}:{conn.raddr.port}" if conn.raddr else "*"
    return f"{local} -> {remote} ({conn.status})"


class SystemProcessRunner:
    """ProcessRunner backed by the real stunnel binary and OS primitives."""

    def __init__(
        self,
        binary_path: str | None = None,
        timeout: float = 10.0,
        startup_grace: float = 0.5,
    ):
        """Initialize SystemProcessRunner.

        Args:
            binary_path: Path to stunnel (discovered on first use if None)
            timeout: Upper bound in seconds for every external command
            startup_grace: Seconds to watch a fresh spawn for an early failure
        """
        self._binary_path = binary_path
        self.timeout = timeout
        self.startup_grace = startup_grace

    @property
    def binary_path(self) -> str:
        """Resolved stunnel binary path.

        Raises:
            BinaryNotFoundError: If stunnel cannot be found
        """
        if self._binary_path is None or not os.path.exists(self._binary_path):
            self._binary_path = find_binary(self._binary_path)
        return self._binary_path

    def is_alive(self, pid: int) -> bool:
        if pid <= 0 or not psutil.pid_exists(pid):
            return False
        try:
            return psutil.Process(pid).status() != psutil.STATUS_ZOMBIE
        except psutil.NoSuchProcess:
            return False
        except psutil.AccessDenied:
            # Exists but owned by someone else
            return True

    def send_reload_signal(self, pid: int) -> None:
        """Send SIGHUP to ``pid``.

        Raises:
            ProcessError: If the signal cannot be delivered
        """
        logger.info("Sending reload signal", pid=pid)
        try:
            os.kill(pid, signal.SIGHUP)
        except OSError as e:
            logger.error("Failed to signal stunnel", pid=pid, error=str(e))
            raise ProcessError(f"Failed to signal pid {pid}: {e}") from e

    def spawn(self, config_path: str) -> int:
        """Start stunnel in its own session.

        An exit with code 0 during the startup grace period is stunnel
        daemonising and counts as success; any other exit is a failure.

        Returns:
            Pid of the launched process. When stunnel daemonises this process
            has already exited and the live pid is in stunnel's PID file.

        Raises:
            ProcessError: If the process cannot be started or dies right away
            BinaryNotFoundError: If stunnel cannot be found
        """
        command = [self.binary_path, config_path]
        logger.info("Starting stunnel", command=command)

        with tempfile.TemporaryFile(mode="w+") as stderr:
            try:
                process = subprocess.Popen(
                    command,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.DEVNULL,
                    stderr=stderr,
                    text=True,
                    start_new_session=True,
                )
            except OSError as e:
                logger.error("Failed to start stunnel", error=str(e))
                raise ProcessError(f"Failed to start stunnel: {e}") from e

            returncode = None
            if self.startup_grace > 0:
                try:
                    returncode = process.wait(timeout=self.startup_grace)
                except subprocess.TimeoutExpired:
                    returncode = None

            if returncode:
                stderr.seek(0)
                details = stderr.read().strip()
                logger.error(
                    "stunnel exited during startup",
                    pid=process.pid,
                    returncode=returncode,
                    stderr=details,
                )
                raise ProcessError(
                    f"stunnel exited with code {returncode}"
                    + (f": {details}" if details else "")
                )

        logger.info("stunnel started", pid=process.pid)
        return process.pid

    def validate_config(self, config_path: str) -> None:
        """Run ``stunnel -test <config>``.

        Raises:
            ConfigValidationError: If stunnel exits non-zero
            ProcessTimeoutError: If the check does not finish in time
            ProcessError: If stunnel cannot be run
        """
        command = [self.binary_path, VALIDATE_FLAG, config_path]
        logger.debug("Validating config", command=command)
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ProcessTimeoutError(command, self.timeout) from e
        except OSError as e:
            raise ProcessError(f"Failed to run {command[0]}: {e}") from e

        if result.returncode != 0:
            parts = [p.strip() for p in (result.stdout, result.stderr) if p and p.strip()]
            diagnostic = "\n".join(parts) or f"stunnel exited with code {result.returncode}"
            raise ConfigValidationError(diagnostic)

    def list_connections(self, pid: int) -> list[str]:
        try:
            connections = psutil.net_connections(kind="inet")
        except (psutil.Error, OSError) as e:
            logger.debug("Connection listing failed", pid=pid, error=str(e))
            return []

        return [
            format_connection(conn)
            for conn in connections
            if conn.pid == pid and conn.status not in IDLE_STATES
        ]
