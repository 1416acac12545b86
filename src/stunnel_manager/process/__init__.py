"""stunnel process supervision."""

from .fake import InMemoryProcessRunner
from .pidfile import read_pid
from .runner import ProcessRunner, SystemProcessRunner, format_connection
from .supervisor import (
    ProcessHandle,
    ProcessSupervisor,
    SupervisorAction,
    SupervisorOutcome,
)

__all__ = [
    "ProcessRunner",
    "SystemProcessRunner",
    "InMemoryProcessRunner",
    "ProcessSupervisor",
    "ProcessHandle",
    "SupervisorAction",
    "SupervisorOutcome",
    "read_pid",
    "format_connection",
]
