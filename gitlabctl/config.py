"""Settings for gitlabctl.

Values are resolved, highest precedence first, from explicit overrides
(CLI options), ``GITLABCTL_*`` environment variables, a ``.env`` file and
finally the TOML config file (``~/.config/gitlab.toml`` by default)::

    server = "https://gitlab.example.com"
    access_token = "glpat-..."
"""
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from gitlabctl.errors import ConfigurationError

DEFAULT_CONFIG_FILE = Path("~/.config/gitlab.toml")
CONFIG_FILE_ENV = "GITLABCTL_CONFIG_FILE"


class Settings(BaseSettings):
    server: Optional[str] = Field(None, description="Base URL of the GitLab instance")
    access_token: Optional[SecretStr] = Field(None, description="Personal access token")
    api_prefix: str = "/api/v4"

    page_size: int = Field(100, ge=1, le=100)
    # Fan-out limits for the environment and deployment stages
    environment_concurrency: int = Field(8, ge=1)
    deployment_concurrency: int = Field(16, ge=1)

    request_timeout: float = Field(30.0, gt=0)
    connect_retries: int = Field(2, ge=0)
    verify_ssl: bool = True
    membership_only: bool = False
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="GITLABCTL_",
        env_file=".env",
        extra="ignore",
        toml_file=DEFAULT_CONFIG_FILE.expanduser(),
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @field_validator("server")
    @classmethod
    def _strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        return value.rstrip("/") if value else value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def api_url(self) -> str:
        """Root URL every API path is resolved against."""
        return f"{self.server}{self.api_prefix}"

    @property
    def token(self) -> str:
        return self.access_token.get_secret_value() if self.access_token else ""


def resolve_config_file(config_file: Optional[Path] = None) -> Path:
    """Return the TOML file to read: explicit path, env override, then default."""
    if config_file is not None:
        return Path(config_file).expanduser()
    env_path = os.environ.get(CONFIG_FILE_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE.expanduser()


def load_settings(config_file: Optional[Path] = None, **overrides: Any) -> Settings:
    """
    Build settings for one invocation.

    Args:
        config_file: TOML file to read instead of the default location
        **overrides: explicit values (``None`` values are ignored)

    Raises:
        ConfigurationError: if a value is invalid or the credentials are missing
    """
    path = resolve_config_file(config_file)

    class _FileSettings(Settings):
        model_config = SettingsConfigDict(toml_file=path)

    explicit = {key: value for key, value in overrides.items() if value is not None}
    try:
        settings = _FileSettings(**explicit)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from e

    credentials = (("server", settings.server), ("access_token", settings.token))
    missing = [name for name, value in credentials if not value]
    if missing:
        raise ConfigurationError(
            f"Missing {', '.join(missing)}: set them in {path} "
            f"or via {', '.join('GITLABCTL_' + name.upper() for name in missing)}"
        )
    return settings
