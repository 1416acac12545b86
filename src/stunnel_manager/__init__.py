"""stunnel-manager - control plane for a supervised stunnel process."""

from .common.exceptions import (
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
from .common.logging import get_logger, setup_logging
from .config import (
    ConfigGenerator,
    ConfigMutator,
    GlobalSettings,
    PathLockRegistry,
    Provider,
    ProviderEditor,
    ValidationResult,
)
from .messages import (
    AddProviderRequest,
    AddProviderResponse,
    GenerateConfigRequest,
    GenerateConfigResponse,
    ReloadRequest,
    ReloadResponse,
    StatusRequest,
    StatusResponse,
    UpdateConfigRequest,
    UpdateConfigResponse,
)
from .process import (
    InMemoryProcessRunner,
    ProcessRunner,
    ProcessSupervisor,
    SystemProcessRunner,
)
from .service import StunnelService
from .settings import ServiceSettings, find_binary
from .status import StatusReporter

# Setup logging on package initialization
setup_logging(level="INFO")

# Package level logger
logger = get_logger(__name__)

__version__ = "0.1.0"


__all__ = [
    # Service
    "StunnelService",
    "ServiceSettings",
    "find_binary",
    # Requests and responses
    "ReloadRequest",
    "ReloadResponse",
    "StatusRequest",
    "StatusResponse",
    "UpdateConfigRequest",
    "UpdateConfigResponse",
    "GenerateConfigRequest",
    "GenerateConfigResponse",
    "AddProviderRequest",
    "AddProviderResponse",
    # Configuration
    "ConfigGenerator",
    "ConfigMutator",
    "ProviderEditor",
    "PathLockRegistry",
    "GlobalSettings",
    "Provider",
    "ValidationResult",
    # Process supervision
    "ProcessRunner",
    "SystemProcessRunner",
    "InMemoryProcessRunner",
    "ProcessSupervisor",
    "StatusReporter",
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
    # Utilities
    "get_logger",
    "setup_logging",
]
