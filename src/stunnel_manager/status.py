"""Operational status of the supervised stunnel process."""

from .common.logging import get_logger
from .messages import StatusResponse
from .process.supervisor import ProcessSupervisor

logger = get_logger(__name__)


class StatusReporter:
    """Combines the liveness check with the connection listing. Read-only."""

    def __init__(self, supervisor: ProcessSupervisor):
        self.supervisor = supervisor

    def active_connections(self, pid: int) -> list[str]:
        """Connections of ``pid``; a failed listing counts as no connections."""
        try:
            return list(self.supervisor.runner.list_connections(pid))
        except Exception as e:
            logger.debug("Connection listing failed", pid=pid, error=str(e))
            return []

    def report(self) -> StatusResponse:
        handle = self.supervisor.current()

        if handle is None:
            return StatusResponse(
                is_running=False,
                pid=0,
                config_path=self.supervisor.config_path,
                active_connections=[],
            )

        return StatusResponse(
            is_running=True,
            pid=handle.pid,
            config_path=self.supervisor.config_path,
            active_connections=self.active_connections(handle.pid),
        )
