"""Transactional config updates: backup, write, validate, roll back."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..common.exceptions import ConfigValidationError, ConfigWriteError
from ..common.logging import get_logger
from ..common.utils import atomic_write_text
from .backup import backup_file, restore_backup
from .locks import PathLockRegistry
from .models import MutationResult
from .validation import check_config

if TYPE_CHECKING:
    from ..process.runner import ProcessRunner

logger = get_logger(__name__)


class ConfigMutator:
    """Applies all-or-nothing content changes to an existing config file."""

    def __init__(self, runner: ProcessRunner, locks: PathLockRegistry | None = None):
        self.runner = runner
        self.locks = locks or PathLockRegistry()

    def commit(
        self, config_path: str, content: str, rollback: bool = True
    ) -> MutationResult:
        """Back up ``config_path``, write ``content`` and validate it.

        Each step only runs if the previous one succeeded. When validation
        fails and ``rollback`` is set, the backup is copied back so the file
        is byte-identical to its state before the call. Without ``rollback``
        a failed validation is logged and reported in the result.

        Args:
            config_path: Config file to replace
            content: New full file content
            rollback: Restore the backup when validation fails

        Returns:
            Paths involved and the validation outcome

        Raises:
            BackupError: If the backup cannot be taken (nothing was changed)
            ConfigWriteError: If the new content cannot be written
            ConfigValidationError: If validation fails and ``rollback`` is set
        """
        with self.locks.hold(config_path):
            backup_path = backup_file(config_path)

            try:
                atomic_write_text(config_path, content)
            except (OSError, UnicodeError) as e:
                logger.error("Failed to write config", config_path=config_path, error=str(e))
                reason = getattr(e, "strerror", None) or e
                raise ConfigWriteError(f"{config_path}: {reason}") from e

            validation = check_config(self.runner, config_path)

            if not validation.valid:
                if rollback:
                    logger.warning(
                        "Config rejected, restoring backup",
                        config_path=config_path,
                        diagnostic=validation.diagnostic,
                    )
                    restore_backup(backup_path, config_path)
                    raise ConfigValidationError(validation.diagnostic)

                logger.warning(
                    "Config validation failed (stunnel may not be installed)",
                    config_path=config_path,
                    diagnostic=validation.diagnostic,
                )

        logger.info("Config written", config_path=config_path, valid=validation.valid)
        return MutationResult(
            config_path=config_path, backup_path=backup_path, validation=validation
        )

    def replace(self, config_path: str, content: str) -> MutationResult:
        """Replace the whole config, rolling back if stunnel rejects it."""
        return self.commit(config_path, content, rollback=True)
