"""Runtime configuration for the data collector reporter."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="DATA_COLLECTOR_", env_file=".env", extra="ignore")

    app_name: str = "data-collector"
    log_level: str = "INFO"
    enabled: bool = True
    server_url: str | None = Field(
        default=None,
        description="Collector endpoint that receives run start/end documents.",
    )
    raise_on_failure: bool = Field(
        default=False,
        description="Re-raise transport faults into the run instead of only logging them.",
    )
    timeout_seconds: float = 30.0
    organization: str = "data_collector"
    entity_uuid: str | None = None


def should_register_reporter(config: Settings) -> bool:
    """Return whether a reporter should observe the run at all."""
    return bool(config.enabled and config.server_url)


settings = Settings()
