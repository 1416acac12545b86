"""Reading the stunnel PID file."""

from ..common.exceptions import PidFileError


def read_pid(pid_file: str) -> int:
    """Read the process id stored in ``pid_file``.

    Only the first token of the first line is used.

    Raises:
        PidFileError: If the file is absent, unreadable, empty or malformed
    """
    try:
        with open(pid_file, encoding="utf-8") as f:
            first_line = f.readline()
    except FileNotFoundError as e:
        raise PidFileError(f"PID file not found: {pid_file}") from e
    except OSError as e:
        raise PidFileError(f"Cannot read PID file {pid_file}: {e.strerror or e}") from e

    tokens = first_line.split()
    if not tokens:
        raise PidFileError(f"PID file is empty: {pid_file}")

    try:
        pid = int(tokens[0])
    except ValueError as e:
        raise PidFileError(f"PID file does not contain a pid: {pid_file}") from e

    if pid <= 0:
        raise PidFileError(f"Invalid pid {pid} in {pid_file}")
    return pid
