"""StunnelService: the operations exposed to the RPC layer.

Every operation returns a response record. Failures are logged and reported
with ``success=False``; the only exception that escapes is
InvalidArgumentError for an add-provider request without a provider.
"""

from .common.exceptions import (
    BackupError,
    ConfigReadError,
    ConfigValidationError,
    ConfigWriteError,
    DuplicateProviderError,
    InvalidArgumentError,
)
from .common.logging import get_logger, setup_logging
from .config.editor import ProviderEditor
from .config.generator import ConfigGenerator
from .config.locks import PathLockRegistry
from .config.mutator import ConfigMutator
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
from .process.runner import ProcessRunner, SystemProcessRunner
from .process.supervisor import ProcessSupervisor, SupervisorAction
from .settings import ServiceSettings
from .status import StatusReporter

logger = get_logger(__name__)


class StunnelService:
    """Control plane for one stunnel config file and its process."""

    def __init__(
        self,
        settings: ServiceSettings | None = None,
        runner: ProcessRunner | None = None,
    ):
        """Initialize StunnelService.

        Args:
            settings: Service settings (read from the environment if None)
            runner: Process capabilities (the real OS if None)
        """
        self.settings = settings or ServiceSettings.from_env()
        self.runner: ProcessRunner = runner or SystemProcessRunner(
            binary_path=self.settings.binary_path,
            timeout=self.settings.command_timeout,
            startup_grace=self.settings.startup_grace,
        )
        self.locks = PathLockRegistry()

        self.generator = ConfigGenerator(
            self.runner, self.locks, default_pid_file=self.settings.pid_file
        )
        self.mutator = ConfigMutator(self.runner, self.locks)
        self.editor = ProviderEditor(self.mutator)
        self.supervisor = ProcessSupervisor(
            self.runner, self.settings.pid_file, self.settings.config_path
        )
        self.status_reporter = StatusReporter(self.supervisor)

        logger.info(
            "StunnelService initialized",
            config_path=self.settings.config_path,
            pid_file=self.settings.pid_file,
        )

    @classmethod
    def from_env(cls, runner: ProcessRunner | None = None) -> "StunnelService":
        """Build a service from environment settings and configure logging."""
        settings = ServiceSettings.from_env()
        setup_logging(
            level=settings.log_level,
            json_format=settings.log_json,
            log_file=settings.log_file,
        )
        return cls(settings=settings, runner=runner)

    @property
    def config_path(self) -> str:
        return self.settings.config_path

    def _resolve_path(self, config_path: str) -> str:
        return config_path or self.config_path

    def reload_config(self, request: ReloadRequest) -> ReloadResponse:
        """Validate only, reload a running stunnel, or start a new one."""
        config_path = self._resolve_path(request.config_path)

        if request.validate_only:
            result = self.supervisor.validate(config_path)
            if result.valid:
                return ReloadResponse(success=True, message="Configuration is valid", pid=0)
            return ReloadResponse(
                success=False,
                message=f"Config validation failed: {result.diagnostic}",
                pid=0,
            )

        outcome = self.supervisor.reload_or_start(config_path)
        reloaded = outcome.action == SupervisorAction.RELOADED

        if not outcome.success:
            action = "reload" if reloaded else "start"
            return ReloadResponse(
                success=False, message=f"Failed to {action} stunnel: {outcome.error}", pid=0
            )

        if reloaded:
            message = "Configuration reloaded successfully"
        else:
            message = "Stunnel started successfully"
        return ReloadResponse(success=True, message=message, pid=outcome.pid)

    def get_status(self, request: StatusRequest | None = None) -> StatusResponse:
        """Report whether stunnel runs, its pid and its connections."""
        return self.status_reporter.report()

    def update_config(self, request: UpdateConfigRequest) -> UpdateConfigResponse:
        """Replace a config file, restoring the previous content if rejected."""
        config_path = self._resolve_path(request.config_path)

        try:
            self.mutator.replace(config_path, request.config_content)
        except BackupError as e:
            logger.error("Failed to backup config", config_path=config_path, error=str(e))
            return UpdateConfigResponse(
                success=False, message=f"Failed to backup config: {e}"
            )
        except ConfigWriteError as e:
            return UpdateConfigResponse(
                success=False, message=f"Failed to write config: {e}"
            )
        except ConfigValidationError as e:
            return UpdateConfigResponse(
                success=False, message=f"Invalid configuration: {e.diagnostic}"
            )

        return UpdateConfigResponse(
            success=True, message="Configuration updated successfully"
        )

    def generate_config(self, request: GenerateConfigRequest) -> GenerateConfigResponse:
        """Write a freshly rendered config to the service config path."""
        try:
            content, _ = self.generator.generate(
                request.global_settings(), request.providers, self.config_path
            )
        except ConfigWriteError as e:
            return GenerateConfigResponse(
                success=False,
                message=f"Failed to write config file: {e}",
                config_content="",
                config_path="",
            )

        return GenerateConfigResponse(
            success=True,
            message="Configuration generated successfully",
            config_content=content,
            config_path=self.config_path,
        )

    def add_provider(self, request: AddProviderRequest) -> AddProviderResponse:
        """Append a provider section and optionally reload stunnel.

        Raises:
            InvalidArgumentError: If the request carries no provider
        """
        provider = request.provider
        if provider is None:
            raise InvalidArgumentError("Provider is required")

        try:
            updated_config, _ = self.editor.add_provider(self.config_path, provider)
        except ConfigReadError as e:
            return AddProviderResponse(
                success=False, message=f"Failed to read existing config: {e}"
            )
        except DuplicateProviderError as e:
            return AddProviderResponse(success=False, message=str(e))
        except BackupError as e:
            logger.error("Failed to backup config", config_path=self.config_path, error=str(e))
            return AddProviderResponse(
                success=False, message=f"Failed to backup config: {e}"
            )
        except ConfigWriteError as e:
            return AddProviderResponse(
                success=False, message=f"Failed to write updated config: {e}"
            )

        if request.apply_immediately:
            self.supervisor.reload_if_running()

        return AddProviderResponse(
            success=True,
            message=f"Provider {provider.name} added successfully",
            updated_config=updated_config,
        )
