"""Runtime configuration for the Artifact Locator service."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration values mapped from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    app_name: str = Field("Artifact Locator API", validation_alias="APP_NAME")
    version: str = Field("0.3.0", validation_alias="APP_VERSION")

    # Secret store / data bag configuration
    artifact_data_bag: str = Field("artifact", validation_alias="ARTIFACT_DATA_BAG")
    artifact_environment: str = Field("_default", validation_alias="ARTIFACT_ENVIRONMENT")
    artifact_solo_mode: bool = Field(False, validation_alias="ARTIFACT_SOLO_MODE")
    secret_store_path: Optional[str] = Field(None, validation_alias="SECRET_STORE_PATH")

    # Nexus transport
    nexus_timeout: float = Field(30.0, validation_alias="NEXUS_TIMEOUT")

    # Logging
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    log_format: str = Field(
        "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        validation_alias="LOG_FORMAT",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance for dependency injection."""
    return Settings()
