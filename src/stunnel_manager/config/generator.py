"""Rendering of stunnel configuration files."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ..common.exceptions import ConfigWriteError
from ..common.logging import get_logger
from ..common.utils import atomic_write_text
from ..settings import DEFAULT_PID_FILE
from .locks import PathLockRegistry
from .models import GlobalSettings, Provider, ValidationResult
from .validation import check_config

if TYPE_CHECKING:
    from ..process.runner import ProcessRunner

logger = get_logger(__name__)

HEADER_TITLE = "; Stunnel configuration generated by stunnel-manager"

# "verify = 2": require and verify the peer certificate
VERIFY_PEER_LEVEL = 2


class ConfigGenerator:
    """Builds a complete stunnel config from global settings and providers."""

    def __init__(
        self,
        runner: ProcessRunner,
        locks: PathLockRegistry | None = None,
        default_pid_file: str = DEFAULT_PID_FILE,
    ):
        """Initialize ConfigGenerator.

        Args:
            runner: Used for the best-effort validation after writing
            locks: Per-path locks shared with the other config writers
            default_pid_file: ``pid`` value when the request has none
        """
        self.runner = runner
        self.locks = locks or PathLockRegistry()
        self.default_pid_file = default_pid_file

    def render_global(self, settings: GlobalSettings) -> list[str]:
        """Render global options; empty values are left out entirely."""
        lines = []

        if settings.foreground:
            lines.append("foreground = yes")

        if settings.debug_level is not None:
            lines.append(f"debug = {settings.debug_level}")

        lines.append(f"pid = {settings.pid_file_path or self.default_pid_file}")

        if settings.cert_path:
            lines.append(f"cert = {settings.cert_path}")
        if settings.key_path:
            lines.append(f"key = {settings.key_path}")
        if settings.ca_path:
            lines.append(f"CAfile = {settings.ca_path}")
            lines.append(f"verify = {VERIFY_PEER_LEVEL}")

        return lines

    @staticmethod
    def render_provider(provider: Provider) -> list[str]:
        """Render one provider as a commented service section."""
        lines = [f"; {provider.name} service", provider.header]

        if provider.is_client:
            lines.append("client = yes")

        if provider.accept_port:
            lines.append(f"accept = {provider.accept_host}:{provider.accept_port}")

        if provider.connect_port:
            if provider.connect_host:
                lines.append(f"connect = {provider.connect_host}:{provider.connect_port}")
            else:
                lines.append(f"connect = {provider.connect_port}")

        return lines

    def render(
        self,
        settings: GlobalSettings,
        providers: Iterable[Provider],
        generated_at: datetime | None = None,
    ) -> str:
        """Render the full document.

        Providers keep the order they were given in and are not deduplicated.
        """
        generated_at = generated_at or datetime.now(timezone.utc)

        lines = [HEADER_TITLE, f"; Generated at: {generated_at.isoformat()}", ""]
        lines.extend(self.render_global(settings))
        lines.append("")

        for provider in providers:
            lines.extend(self.render_provider(provider))
            lines.append("")

        return "\n".join(lines) + "\n"

    def generate(
        self,
        settings: GlobalSettings,
        providers: Iterable[Provider],
        config_path: str,
    ) -> tuple[str, ValidationResult]:
        """Overwrite ``config_path`` with a freshly rendered config.

        No backup is taken. A failed validation afterwards is only logged: the
        written file stands.

        Returns:
            The written content and the validation outcome

        Raises:
            ConfigWriteError: If the file cannot be written
        """
        content = self.render(settings, providers)

        with self.locks.hold(config_path):
            try:
                atomic_write_text(config_path, content)
            except (OSError, UnicodeError) as e:
                logger.error(
                    "Failed to write generated config",
                    config_path=config_path,
                    error=str(e),
                )
                reason = getattr(e, "strerror", None) or e
                raise ConfigWriteError(f"{config_path}: {reason}") from e

            validation = check_config(self.runner, config_path)

        if validation.valid:
            logger.info("Config generated", config_path=config_path)
        else:
            logger.warning(
                "Config validation failed (stunnel may not be installed)",
                config_path=config_path,
                diagnostic=validation.diagnostic,
            )

        return content, validation
