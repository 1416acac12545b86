"""Configuration models for stunnel config generation and mutation."""

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from ..common.utils import validate_port, validate_section_name

# Appended to a config path to name its most recent backup
BACKUP_SUFFIX = ".bak"

# Log level stunnel runs with unless told otherwise (7 = debug)
DEFAULT_DEBUG_LEVEL = 7


class Provider(BaseModel):
    """A named tunnel endpoint, rendered as one ``[name]`` service section."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Service section name")
    is_client: bool = Field(default=False, description="Emit client = yes")
    accept_host: str = Field(default="127.0.0.1", description="Accept address")
    accept_port: int = Field(default=0, description="0 = omit")
    connect_host: str = Field(default="", description="Connect host")
    connect_port: int = Field(default=0, description="0 = omit")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that the name can be used as a section header."""
        return validate_section_name(v)

    @field_validator("accept_port", "connect_port")
    @classmethod
    def validate_ports(cls, v: int, info: ValidationInfo) -> int:
        """Validate port range; 0 leaves the line out."""
        port_name = (info.field_name or "port").replace("_", " ").capitalize()
        validate_port(v, port_name, allow_zero=True)
        return v

    @property
    def header(self) -> str:
        """Bracketed section header for this provider."""
        return f"[{self.name}]"


class GlobalSettings(BaseModel):
    """Global (pre-section) stunnel settings used at generation time."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    foreground: bool = Field(default=False, description="Emit foreground = yes")
    pid_file_path: str = Field(default="", description="pid = ... (service default if empty)")
    cert_path: str = Field(default="", description="Certificate chain file")
    key_path: str = Field(default="", description="Private key file")
    ca_path: str = Field(default="", description="CA file; forces verify = 2")
    debug_level: int | None = Field(
        default=DEFAULT_DEBUG_LEVEL, ge=0, le=7, description="debug = N (None = omit)"
    )


class ValidationResult(BaseModel):
    """Outcome of running stunnel's config check."""

    valid: bool
    diagnostic: str = ""


class MutationResult(BaseModel):
    """Outcome of a committed config mutation."""

    config_path: str
    backup_path: str
    validation: ValidationResult
