"""Incremental provider additions to an existing config."""

from ..common.exceptions import ConfigReadError, DuplicateProviderError
from ..common.logging import get_logger
from .generator import ConfigGenerator
from .models import MutationResult, Provider
from .mutator import ConfigMutator

logger = get_logger(__name__)


class ProviderEditor:
    """Appends provider sections without touching the existing ones."""

    def __init__(self, mutator: ConfigMutator):
        self.mutator = mutator

    @staticmethod
    def render_section(provider: Provider) -> str:
        """Render the text appended for ``provider``."""
        return "\n" + "\n".join(ConfigGenerator.render_provider(provider)) + "\n"

    def add_provider(
        self, config_path: str, provider: Provider
    ) -> tuple[str, MutationResult]:
        """Append ``provider`` to the config at ``config_path``.

        The write is validated but never rolled back: a rejected config only
        produces a warning, as with freshly generated configs.

        Returns:
            The updated full config text and the mutation result

        Raises:
            ConfigReadError: If the current config cannot be read
            DuplicateProviderError: If ``[name]`` already appears in the config
            BackupError: If the backup cannot be taken
            ConfigWriteError: If the updated config cannot be written
        """
        with self.mutator.locks.hold(config_path):
            try:
                with open(config_path, encoding="utf-8") as f:
                    existing = f.read()
            except OSError as e:
                raise ConfigReadError(f"{config_path}: {e.strerror or e}") from e
            except UnicodeDecodeError as e:
                raise ConfigReadError(f"{config_path}: not valid UTF-8 ({e.reason})") from e

            if provider.header in existing:
                logger.info(
                    "Provider already present", config_path=config_path, name=provider.name
                )
                raise DuplicateProviderError(provider.name)

            updated = existing + self.render_section(provider)
            result = self.mutator.commit(config_path, updated, rollback=False)

        logger.info("Provider added", config_path=config_path, name=provider.name)
        return updated, result
