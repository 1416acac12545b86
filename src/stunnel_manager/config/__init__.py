"""Generation and transactional mutation of stunnel config files."""

from .backup import backup_file, backup_path_for, restore_backup
from .editor import ProviderEditor
from .generator import ConfigGenerator
from .locks import PathLockRegistry
from .models import (
    BACKUP_SUFFIX,
    GlobalSettings,
    MutationResult,
    Provider,
    ValidationResult,
)
from .mutator import ConfigMutator
from .validation import check_config

__all__ = [
    "ConfigGenerator",
    "ConfigMutator",
    "ProviderEditor",
    "PathLockRegistry",
    "GlobalSettings",
    "Provider",
    "ValidationResult",
    "MutationResult",
    "BACKUP_SUFFIX",
    "backup_file",
    "backup_path_for",
    "restore_backup",
    "check_config",
]
