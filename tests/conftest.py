"""Shared pytest fixtures for stunnel manager tests."""

import hashlib
import re
from pathlib import Path

import pytest

from stunnel_manager.process.fake import InMemoryProcessRunner
from stunnel_manager.service import StunnelService
from stunnel_manager.settings import ServiceSettings

SAMPLE_CONFIG = """; existing config
pid = /tmp/stunnel.pid
cert = /etc/stunnel/server.pem

; api service
[api]
accept = 127.0.0.1:9443
connect = 10.0.0.9:443
"""

SECTION_HEADER_RE = re.compile(r"^\s*\[([^\]\r\n]+)\]\s*$", re.MULTILINE)

# Marker that the fake validator rejects
INVALID_MARKER = "this is not stunnel syntax"


def reject_marker(content: str) -> str | None:
    """Validator for InMemoryProcessRunner rejecting INVALID_MARKER."""
    if INVALID_MARKER in content:
        return "line 1: Specified option name is not valid here"
    return None


def parse_sections(content: str) -> list[str]:
    """Section names in the order they appear in a config text."""
    return [match.strip() for match in SECTION_HEADER_RE.findall(content)]


def checksum(path: Path) -> str:
    """SHA-256 of a file, for before/after comparisons."""
    return hashlib.sha256(path.read_bytes()).hexdigest()


@pytest.fixture
def config_file(tmp_path):
    """Create a config file holding SAMPLE_CONFIG.

    Returns:
        Path: Path of the config file
    """
    path = tmp_path / "stunnel.conf"
    path.write_text(SAMPLE_CONFIG)
    return path


@pytest.fixture
def pid_file(tmp_path):
    """Path of a PID file that does not exist yet."""
    return tmp_path / "stunnel.pid"


@pytest.fixture
def runner(pid_file):
    """In-memory runner that rejects configs containing INVALID_MARKER."""
    fake = InMemoryProcessRunner(pid_file=str(pid_file))
    fake.validator = reject_marker
    return fake


@pytest.fixture
def running(runner, pid_file):
    """Mark pid 1234 as a running stunnel recorded in the PID file.

    Returns:
        int: The running pid
    """
    pid_file.write_text("1234\n")
    runner.alive_pids.add(1234)
    return 1234


@pytest.fixture
def settings(config_file, pid_file):
    """Service settings pointing at the temporary config and PID file."""
    return ServiceSettings(config_path=str(config_file), pid_file=str(pid_file))


@pytest.fixture
def service(settings, runner):
    """StunnelService wired to the in-memory runner."""
    return StunnelService(settings=settings, runner=runner)


@pytest.fixture
def sample_config():
    """Content written by the config_file fixture."""
    return SAMPLE_CONFIG


@pytest.fixture
def invalid_content():
    """Config content the fake validator rejects."""
    return f"{INVALID_MARKER}\n[broken\n"


@pytest.fixture
def file_checksum():
    """Function computing the SHA-256 of a file."""
    return checksum


@pytest.fixture
def section_names():
    """Function listing the section names of a config text."""
    return parse_sections
