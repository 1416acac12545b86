"""Tests for utility functions."""

import os

import pytest

from stunnel_manager.common.utils import (
    atomic_write_text,
    validate_non_empty_string,
    validate_port,
    validate_section_name,
)


class TestValidatePort:
    """Test port validation."""

    @pytest.mark.parametrize("port", [1, 443, 65535])
    def test_valid(self, port):
        validate_port(port)

    @pytest.mark.parametrize("port", [0, -1, 65536])
    def test_invalid(self, port):
        with pytest.raises(ValueError, match="Port must be between 1 and 65535"):
            validate_port(port)

    def test_zero_allowed(self):
        validate_port(0, allow_zero=True)

    def test_custom_name(self):
        with pytest.raises(ValueError, match="Accept port"):
            validate_port(70000, "Accept port")


class TestStrings:
    """Test string validation."""

    def test_non_empty_strips(self):
        assert validate_non_empty_string("  web  ", "Name") == "web"

    def test_empty(self):
        with pytest.raises(ValueError, match="Name cannot be empty"):
            validate_non_empty_string("   ", "Name")

    def test_section_name(self):
        assert validate_section_name("web-1") == "web-1"

    @pytest.mark.parametrize("name", ["a]b", "[x", "a\nb"])
    def test_section_name_forbidden(self, name):
        with pytest.raises(ValueError, match="forbidden"):
            validate_section_name(name)


class TestAtomicWrite:
    """Test atomic_write_text."""

    def test_creates_file(self, tmp_path):
        path = tmp_path / "new.conf"
        atomic_write_text(str(path), "content\n")
        assert path.read_text() == "content\n"

    def test_replaces_and_keeps_mode(self, tmp_path):
        path = tmp_path / "old.conf"
        path.write_text("old\n")
        os.chmod(path, 0o640)

        atomic_write_text(str(path), "new\n")

        assert path.read_text() == "new\n"
        assert os.stat(path).st_mode & 0o777 == 0o640

    def test_no_temp_files_left(self, tmp_path):
        path = tmp_path / "a.conf"
        atomic_write_text(str(path), "x")
        assert [p.name for p in tmp_path.iterdir()] == ["a.conf"]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(OSError):
            atomic_write_text(str(tmp_path / "nope" / "a.conf"), "x")
