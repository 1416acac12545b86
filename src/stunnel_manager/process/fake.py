"""In-memory ProcessRunner for deterministic use without a stunnel binary."""

import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from ..common.exceptions import ConfigValidationError, ProcessError


class InMemoryProcessRunner:
    """ProcessRunner that simulates stunnel processes and records every call.

    Attributes:
        alive_pids: Pids considered running
        connections: Connection descriptors reported per pid
        validator: Called with the config text; returns a diagnostic to reject it
        reload_error: When set, reload signals fail with this reason
        spawn_error: When set, spawns fail with this reason
        pid_file: When set, spawns write the new pid here
        calls: ``(operation, argument)`` tuples in call order
    """

    def __init__(
        self,
        alive_pids: set[int] | None = None,
        pid_file: str | None = None,
        first_pid: int = 4000,
    ):
        self.alive_pids: set[int] = set(alive_pids or ())
        self.connections: dict[int, list[str]] = {}
        self.validator: Callable[[str], str | None] | None = None
        self.reload_error: str | None = None
        self.spawn_error: str | None = None
        self.pid_file = pid_file
        self.calls: list[tuple[str, Any]] = []
        self._next_pid = first_pid
        self._lock = threading.Lock()

    def _record(self, operation: str, argument: Any) -> None:
        with self._lock:
            self.calls.append((operation, argument))

    def called(self, operation: str) -> list[Any]:
        """Arguments of every recorded call to ``operation``."""
        return [arg for op, arg in self.calls if op == operation]

    def is_alive(self, pid: int) -> bool:
        self._record("is_alive", pid)
        return pid in self.alive_pids

    def send_reload_signal(self, pid: int) -> None:
        self._record("send_reload_signal", pid)
        if self.reload_error is not None:
            raise ProcessError(self.reload_error)
        if pid not in self.alive_pids:
            raise ProcessError(f"No such process: {pid}")

    def spawn(self, config_path: str) -> int:
        self._record("spawn", config_path)
        if self.spawn_error is not None:
            raise ProcessError(self.spawn_error)
        with self._lock:
            pid = self._next_pid
            self._next_pid += 1
            self.alive_pids.add(pid)
        if self.pid_file:
            Path(self.pid_file).write_text(f"{pid}\n")
        return pid

    def validate_config(self, config_path: str) -> None:
        self._record("validate_config", config_path)
        if self.validator is None:
            return
        try:
            content = Path(config_path).read_text()
        except OSError as e:
            raise ConfigValidationError(f"Cannot open {config_path}: {e}") from e
        diagnostic = self.validator(content)
        if diagnostic:
            raise ConfigValidationError(diagnostic)

    def list_connections(self, pid: int) -> list[str]:
        self._record("list_connections", pid)
        return list(self.connections.get(pid, []))

    def stop(self, pid: int) -> None:
        """Simulate the process with ``pid`` exiting."""
        self.alive_pids.discard(pid)
