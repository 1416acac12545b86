"""Tests for config backup and restore."""

import pytest

from stunnel_manager.common.exceptions import BackupError
from stunnel_manager.config.backup import backup_file, backup_path_for, restore_backup


class TestBackup:
    """Test backup_file and restore_backup."""

    def test_backup_path(self):
        assert backup_path_for("/etc/stunnel/stunnel.conf") == "/etc/stunnel/stunnel.conf.bak"

    def test_backup_copies_content(self, config_file, sample_config):
        backup_path = backup_file(str(config_file))

        assert backup_path == f"{config_file}.bak"
        assert open(backup_path).read() == sample_config

    def test_last_backup_wins(self, config_file):
        backup_file(str(config_file))
        config_file.write_text("second\n")
        backup_path = backup_file(str(config_file))

        assert open(backup_path).read() == "second\n"

    def test_backup_missing_file(self, tmp_path):
        with pytest.raises(BackupError):
            backup_file(str(tmp_path / "absent.conf"))

    def test_restore(self, config_file, sample_config):
        backup_path = backup_file(str(config_file))
        config_file.write_text("changed\n")

        assert restore_backup(backup_path, str(config_file)) is True
        assert config_file.read_text() == sample_config

    def test_restore_without_backup_leaves_file(self, config_file, sample_config):
        assert restore_backup(str(config_file) + ".none", str(config_file)) is False
        assert config_file.read_text() == sample_config

    def test_restore_copy_error(self, config_file, tmp_path):
        backup_path = backup_file(str(config_file))
        target = tmp_path / "no-such-dir" / "stunnel.conf"

        assert restore_backup(backup_path, str(target)) is False
