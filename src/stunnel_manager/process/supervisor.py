"""Reload-or-start supervision of the stunnel process.

Nothing about the running process is kept between calls: every decision
re-reads the PID file and re-checks liveness, because the external process
decides its own lifetime.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from ..common.exceptions import PidFileError, StunnelManagerError
from ..common.logging import get_logger
from ..config.models import ValidationResult
from ..config.validation import check_config
from .pidfile import read_pid
from .runner import ProcessRunner

logger = get_logger(__name__)


class SupervisorAction(str, Enum):
    """What a reload request did."""

    RELOADED = "reloaded"
    STARTED = "started"


class ProcessHandle(BaseModel):
    """A live stunnel process as seen at one point in time."""

    model_config = ConfigDict(frozen=True)

    pid: int
    config_path: str


class SupervisorOutcome(BaseModel):
    """Result of a reload-or-start; pid is 0 when it failed."""

    model_config = ConfigDict(frozen=True)

    action: SupervisorAction
    pid: int = 0
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


class ProcessSupervisor:
    """Decides between signalling a running stunnel and starting a new one."""

    def __init__(self, runner: ProcessRunner, pid_file: str, config_path: str):
        """Initialize ProcessSupervisor.

        Args:
            runner: OS capabilities (real or in-memory)
            pid_file: PID file written by stunnel
            config_path: Config used when a request does not name one
        """
        self.runner = runner
        self.pid_file = pid_file
        self.config_path = config_path

    def resolve_config_path(self, config_path: str | None = None) -> str:
        """Return the explicit override or the default config path."""
        return config_path or self.config_path

    def current(self, config_path: str | None = None) -> ProcessHandle | None:
        """Return the running process, or None when stunnel is not running.

        Not running means: no PID file, an unreadable one, or a pid that does
        not belong to a live process.
        """
        try:
            pid = read_pid(self.pid_file)
        except PidFileError as e:
            logger.debug("stunnel not running", reason=str(e))
            return None

        if not self.runner.is_alive(pid):
            logger.debug("Stale PID file", pid_file=self.pid_file, pid=pid)
            return None

        return ProcessHandle(pid=pid, config_path=self.resolve_config_path(config_path))

    def validate(self, config_path: str | None = None) -> ValidationResult:
        """Check a config without touching any process."""
        path = self.resolve_config_path(config_path)
        result = check_config(self.runner, path)
        logger.info("Config checked", config_path=path, valid=result.valid)
        return result

    def reload_or_start(self, config_path: str | None = None) -> SupervisorOutcome:
        """Reload a running stunnel, or start one if none is running.

        A failed reload is never followed by a start, so two instances never
        run against the same config. Failures are reported in the outcome.
        """
        handle = self.current(config_path)

        if handle is not None:
            try:
                self.runner.send_reload_signal(handle.pid)
            except StunnelManagerError as e:
                logger.error("Failed to reload stunnel", pid=handle.pid, error=str(e))
                return SupervisorOutcome(action=SupervisorAction.RELOADED, error=str(e))
            logger.info("stunnel reloaded", pid=handle.pid)
            return SupervisorOutcome(action=SupervisorAction.RELOADED, pid=handle.pid)

        path = self.resolve_config_path(config_path)
        logger.info("Starting new stunnel instance", config_path=path)
        try:
            pid = self.runner.spawn(path)
        except StunnelManagerError as e:
            logger.error("Failed to start stunnel", config_path=path, error=str(e))
            return SupervisorOutcome(action=SupervisorAction.STARTED, error=str(e))
        return SupervisorOutcome(action=SupervisorAction.STARTED, pid=self._daemon_pid(pid))

    def _daemon_pid(self, spawned_pid: int) -> int:
        """Return the pid stunnel recorded after daemonising, else ``spawned_pid``.

        A daemonising stunnel forks and the launched process exits, so the
        live pid is the one in the PID file.
        """
        handle = self.current()
        if handle is None or handle.pid == spawned_pid:
            return spawned_pid
        logger.debug("stunnel daemonised", spawned_pid=spawned_pid, pid=handle.pid)
        return handle.pid

    def reload_if_running(self) -> int | None:
        """Best-effort reload; failures are logged and swallowed.

        Returns:
            The signalled pid, or None if nothing was reloaded
        """
        handle = self.current()
        if handle is None:
            return None

        try:
            self.runner.send_reload_signal(handle.pid)
        except StunnelManagerError as e:
            logger.warning("Reload after config change failed", pid=handle.pid, error=str(e))
            return None

        logger.info("stunnel reloaded", pid=handle.pid)
        return handle.pid
