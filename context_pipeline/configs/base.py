"""
Shared settings base for the context pipeline.

Every settings class reads the process environment and an optional .env
file; unknown keys are ignored so one .env can serve all components.

Dependencies: pydantic_settings
System role: Common parent of the per-component settings classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Environment-backed settings with the pipeline's log level."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level applied by configure_logging at startup",
    )
