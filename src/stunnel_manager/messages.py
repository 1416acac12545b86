"""Request and response records for the service operations.

An RPC layer marshals its wire messages into and out of these models.
"""

from pydantic import BaseModel, ConfigDict, Field

from .config.models import GlobalSettings, Provider


class ReloadRequest(BaseModel):
    """Reload (or start) stunnel, or only validate a config."""

    config_path: str = Field(default="", description="Override path (empty = default)")
    validate_only: bool = Field(default=False, description="Only run the config check")


class ReloadResponse(BaseModel):
    success: bool
    message: str
    pid: int = 0


class StatusRequest(BaseModel):
    pass


class StatusResponse(BaseModel):
    is_running: bool
    pid: int = 0
    config_path: str
    active_connections: list[str] = Field(default_factory=list)


class UpdateConfigRequest(BaseModel):
    """Replace the full content of a config file."""

    config_path: str = Field(default="", description="Override path (empty = default)")
    config_content: str


class UpdateConfigResponse(BaseModel):
    success: bool
    message: str


class GenerateConfigRequest(BaseModel):
    """Render a fresh config from global settings and providers."""

    model_config = ConfigDict(str_strip_whitespace=True)

    foreground: bool = False
    pid_file: str = ""
    cert_path: str = ""
    key_path: str = ""
    ca_path: str = ""
    providers: list[Provider] = Field(default_factory=list)

    def global_settings(self) -> GlobalSettings:
        """Global part of the request as GlobalSettings."""
        return GlobalSettings(
            foreground=self.foreground,
            pid_file_path=self.pid_file,
            cert_path=self.cert_path,
            key_path=self.key_path,
            ca_path=self.ca_path,
        )


class GenerateConfigResponse(BaseModel):
    success: bool
    message: str
    config_content: str = ""
    config_path: str = ""


class AddProviderRequest(BaseModel):
    """Append one provider section to the service config."""

    provider: Provider | None = None
    apply_immediately: bool = False


class AddProviderResponse(BaseModel):
    success: bool
    message: str
    updated_config: str = ""
