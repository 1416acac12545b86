"""Backup and restore of config files ("last one wins")."""

import os
import shutil

from ..common.exceptions import BackupError
from ..common.logging import get_logger
from .models import BACKUP_SUFFIX

logger = get_logger(__name__)


def backup_path_for(path: str) -> str:
    """Return the backup path derived from a config path."""
    return f"{path}{BACKUP_SUFFIX}"


def backup_file(path: str) -> str:
    """Snapshot the current content of ``path``, replacing any older backup.

    Args:
        path: Config file to back up

    Returns:
        Path of the backup copy

    Raises:
        BackupError: If the file cannot be read or the copy cannot be written
    """
    backup_path = backup_path_for(path)
    try:
        shutil.copyfile(path, backup_path)
    except OSError as e:
        raise BackupError(f"{path}: {e.strerror or e}") from e

    logger.debug("Config backed up", config_path=path, backup_path=backup_path)
    return backup_path


def restore_backup(backup_path: str, path: str) -> bool:
    """Copy a backup back over ``path``.

    A missing backup is skipped without touching ``path``. Copy errors are
    logged and reported as ``False``.

    Returns:
        True if the backup content was restored
    """
    if not os.path.exists(backup_path):
        logger.warning(
            "Backup missing, config left as written",
            config_path=path,
            backup_path=backup_path,
        )
        return False

    try:
        shutil.copyfile(backup_path, path)
    except OSError as e:
        logger.error(
            "Failed to restore config from backup",
            config_path=path,
            backup_path=backup_path,
            error=str(e),
        )
        return False

    logger.info("Config restored from backup", config_path=path)
    return True
