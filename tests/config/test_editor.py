"""Tests for appending provider sections."""

from unittest.mock import patch

import pytest

from stunnel_manager.common.exceptions import (
    BackupError,
    ConfigReadError,
    DuplicateProviderError,
)
from stunnel_manager.config.editor import ProviderEditor
from stunnel_manager.config.models import Provider
from stunnel_manager.config.mutator import ConfigMutator

WEB = Provider(name="web", accept_port=8443, connect_host="10.0.0.5", connect_port=443)


@pytest.fixture
def editor(runner):
    return ProviderEditor(ConfigMutator(runner))


class TestProviderEditor:
    """Test ProviderEditor.add_provider."""

    def test_appends_section(self, editor, config_file, sample_config):
        updated, result = editor.add_provider(str(config_file), WEB)

        assert updated == (
            sample_config
            + "\n; web service\n[web]\naccept = 127.0.0.1:8443\nconnect = 10.0.0.5:443\n"
        )
        assert config_file.read_text() == updated
        assert result.validation.valid is True

    def test_existing_sections_untouched(self, editor, config_file, sample_config, section_names):
        updated, _ = editor.add_provider(str(config_file), WEB)

        assert updated.startswith(sample_config)
        assert section_names(updated) == ["api", "web"]

    def test_client_flag(self, editor, config_file):
        provider = Provider(name="out", is_client=True, accept_port=1234, connect_host="h", connect_port=443)

        updated, _ = editor.add_provider(str(config_file), provider)

        assert "[out]\nclient = yes\naccept = 127.0.0.1:1234\n" in updated

    def test_duplicate_rejected_without_write(self, editor, config_file, file_checksum, runner):
        before = file_checksum(config_file)

        with pytest.raises(DuplicateProviderError, match="Provider api already exists"):
            editor.add_provider(str(config_file), Provider(name="api", accept_port=1))

        assert file_checksum(config_file) == before
        assert not (config_file.parent / "stunnel.conf.bak").exists()
        assert runner.called("validate_config") == []

    def test_second_add_of_same_name_is_duplicate(self, editor, config_file):
        editor.add_provider(str(config_file), WEB)

        with pytest.raises(DuplicateProviderError):
            editor.add_provider(str(config_file), WEB)

    def test_unreadable_config(self, editor, tmp_path):
        with pytest.raises(ConfigReadError):
            editor.add_provider(str(tmp_path / "missing.conf"), WEB)

    def test_config_not_utf8(self, editor, config_file, runner):
        config_file.write_bytes(b"; caf\xe9\n[api]\naccept = 9443\n")

        with pytest.raises(ConfigReadError, match="not valid UTF-8"):
            editor.add_provider(str(config_file), WEB)

        assert config_file.read_bytes() == b"; caf\xe9\n[api]\naccept = 9443\n"
        assert runner.called("validate_config") == []

    def test_invalid_result_is_kept(self, editor, runner, config_file):
        """Validation failures only warn; the appended section stays."""
        runner.validator = lambda content: "bad section"

        with patch("stunnel_manager.config.mutator.logger") as mock_logger:
            updated, result = editor.add_provider(str(config_file), WEB)

        assert config_file.read_text() == updated
        assert "[web]" in config_file.read_text()
        assert result.validation.valid is False
        mock_logger.warning.assert_called_once()

    def test_backup_taken_before_write(self, editor, config_file, sample_config):
        editor.add_provider(str(config_file), WEB)

        assert (config_file.parent / "stunnel.conf.bak").read_text() == sample_config

    def test_backup_failure(self, editor, config_file, sample_config):
        with patch(
            "stunnel_manager.config.mutator.backup_file",
            side_effect=BackupError("disk full"),
        ):
            with pytest.raises(BackupError):
                editor.add_provider(str(config_file), WEB)

        assert config_file.read_text() == sample_config
