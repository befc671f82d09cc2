"""Exporter configuration read from environment variables."""

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from commonstatus_exporter.core.errors import ConfigError

DEFAULT_CONNECTION_TIMEOUT = 8.0
DEFAULT_PORT = 9259


class ExporterSettings(BaseSettings):
    """Settings for the exporter process, read once at startup."""

    model_config = SettingsConfigDict(populate_by_name=True, frozen=True)

    connection_timeout: float = Field(
        default=DEFAULT_CONNECTION_TIMEOUT,
        gt=0,
        validation_alias="COMMONSTATUS_CONNECTION_TIMEOUT",
    )
    log_level: str = Field(
        default="INFO",
        validation_alias="COMMONSTATUS_EXPORTER_LOG_LEVEL",
    )
    port: int = Field(
        default=DEFAULT_PORT,
        ge=1,
        le=65535,
        validation_alias="COMMONSTATUS_EXPORTER_PORT",
    )
    host: str = Field(
        default="0.0.0.0",
        validation_alias="COMMONSTATUS_EXPORTER_HOST",
    )


def load_settings(**overrides: object) -> ExporterSettings:
    """Load settings from the environment.

    Raises:
        ConfigError: If any variable holds an invalid value.
    """
    try:
        return ExporterSettings(**overrides)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigError(f"invalid configuration: {problems}") from exc
