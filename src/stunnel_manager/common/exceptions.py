"""Custom exceptions for the stunnel manager."""


class StunnelManagerError(Exception):
    """Base exception for all stunnel manager errors."""
    pass


class ConfigIOError(StunnelManagerError):
    """Raised when a config file or its backup cannot be read, written or copied."""
    pass


class ConfigReadError(ConfigIOError):
    """Raised when the current config cannot be read."""
    pass


class ConfigWriteError(ConfigIOError):
    """Raised when new config content cannot be written."""
    pass


class BackupError(ConfigIOError):
    """Raised when the pre-mutation backup cannot be taken."""
    pass


class ConfigValidationError(StunnelManagerError):
    """Raised when stunnel rejects a configuration file."""

    def __init__(self, diagnostic: str):
        self.diagnostic = diagnostic
        super().__init__(diagnostic)


class ProcessError(StunnelManagerError):
    """Raised when signalling or spawning the stunnel process fails."""
    pass


class ProcessTimeoutError(ProcessError):
    """Raised when an external stunnel invocation does not return in time."""

    def __init__(self, command: list[str], timeout: float):
        self.command = command
        self.timeout = timeout
        super().__init__(f"'{' '.join(command)}' timed out after {timeout:g}s")


class BinaryNotFoundError(ProcessError):
    """Raised when the stunnel binary is not found or not executable."""
    pass


class PidFileError(StunnelManagerError):
    """Raised when the PID file does not yield a usable process id."""
    pass


class DuplicateProviderError(StunnelManagerError):
    """Raised when a provider section with the same name already exists."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Provider {name} already exists in config")


class InvalidArgumentError(StunnelManagerError):
    """Raised when a request is missing a required payload."""
    pass
