"""Utility functions for the stunnel manager."""

import os
import tempfile

# Port range constants
MIN_PORT = 1
MAX_PORT = 65535

# Characters that would break a "[name]" section header
FORBIDDEN_SECTION_CHARS = frozenset("[]\r\n")


def validate_port(port: int, port_name: str = "Port", allow_zero: bool = False) -> None:
    """Validate port number range.

    Args:
        port: Port number to validate
        port_name: Name of the port for error messages
        allow_zero: Accept 0 as "not set"

    Raises:
        ValueError: If port is not in valid range (1-65535)
    """
    if allow_zero and port == 0:
        return
    if not isinstance(port, int) or not (MIN_PORT <= port <= MAX_PORT):
        raise ValueError(f"{port_name} must be between {MIN_PORT} and {MAX_PORT}")


def validate_non_empty_string(value: str, field_name: str) -> str:
    """Validate that a string is not empty or only whitespace.

    Args:
        value: String value to validate
        field_name: Name of the field for error messages

    Returns:
        Stripped string value

    Raises:
        ValueError: If string is empty or only whitespace
    """
    if not value or not value.strip():
        raise ValueError(f"{field_name} cannot be empty")
    return value.strip()


def validate_section_name(name: str) -> str:
    """Validate a name that will be rendered as a ``[name]`` section header.

    Raises:
        ValueError: If the name is empty or contains brackets or line breaks
    """
    name = validate_non_empty_string(name, "Section name")
    bad = sorted(FORBIDDEN_SECTION_CHARS.intersection(name))
    if bad:
        raise ValueError(f"Section name contains forbidden characters: {bad!r}")
    return name


def atomic_write_text(path: str, content: str) -> None:
    """Write text so readers see either the old or the new file, never a mix.

    The content goes to a temporary file in the destination directory which
    then replaces the target with ``os.replace``.

    Raises:
        OSError: If the temporary file cannot be written or moved into place
        UnicodeEncodeError: If ``content`` cannot be encoded as UTF-8
    """
    directory = os.path.dirname(os.path.abspath(path))
    tmp_path = ""
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="utf-8", delete=False, dir=directory, prefix=".tmp-"
        ) as f:
            tmp_path = f.name
            f.write(content)
        if os.path.exists(path):
            os.chmod(tmp_path, os.stat(path).st_mode & 0o7777)
        os.replace(tmp_path, path)
        tmp_path = ""
    finally:
        if tmp_path and os.path.exists(tmp_path):
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
