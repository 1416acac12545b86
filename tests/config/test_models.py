"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from stunnel_manager.config.models import GlobalSettings, Provider


class TestProvider:
    """Test Provider validation."""

    def test_minimal(self):
        provider = Provider(name="web")

        assert provider.accept_host == "127.0.0.1"
        assert provider.accept_port == 0
        assert provider.connect_port == 0
        assert provider.header == "[web]"

    def test_name_is_stripped(self):
        assert Provider(name="  web  ").name == "web"

    @pytest.mark.parametrize("name", ["", "   ", "we]b", "[web", "web\nfoo"])
    def test_invalid_name(self, name):
        with pytest.raises(ValidationError):
            Provider(name=name)

    @pytest.mark.parametrize("port", [0, 1, 443, 65535])
    def test_valid_ports(self, port):
        provider = Provider(name="web", accept_port=port, connect_port=port)
        assert provider.accept_port == port
        assert provider.connect_port == port

    @pytest.mark.parametrize("port", [-1, 65536])
    def test_accept_port_out_of_range(self, port):
        with pytest.raises(ValidationError, match="Accept port must be between 1 and 65535"):
            Provider(name="web", accept_port=port)

    def test_connect_port_out_of_range(self):
        with pytest.raises(ValidationError, match="Connect port must be between 1 and 65535"):
            Provider(name="web", connect_port=70000)

    def test_frozen(self):
        provider = Provider(name="web")
        with pytest.raises(ValidationError):
            provider.accept_port = 443

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            Provider(name="web", protocol="tcp")


class TestGlobalSettings:
    """Test GlobalSettings defaults and bounds."""

    def test_defaults(self):
        settings = GlobalSettings()

        assert settings.foreground is False
        assert settings.debug_level == 7
        assert settings.pid_file_path == ""

    def test_debug_level_can_be_none(self):
        assert GlobalSettings(debug_level=None).debug_level is None

    def test_debug_level_out_of_range(self):
        with pytest.raises(ValidationError):
            GlobalSettings(debug_level=8)
