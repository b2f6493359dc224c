# src/iam_certs/settings.py
import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Configuration for the certificate CLI.

    Configuration precedence:
    1. Command-line flags (applied by the CLI on top of these values)
    2. Environment variables
    3. .env file (if exists)
    4. Default values in this class (lowest priority)

    Usage:
        from iam_certs.settings import get_settings
        settings = get_settings()
        region = settings.aws_region
    """

    # AWS Core Settings
    aws_region: str = Field(
        default="us-east-1",
        alias="AWS_DEFAULT_REGION"
    )

    aws_profile: Optional[str] = Field(
        default=None,
        alias="AWS_PROFILE",
        description="Named profile from the shared AWS config files"
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        alias="AWS_ACCESS_KEY_ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        alias="AWS_SECRET_ACCESS_KEY"
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        alias="AWS_ENDPOINT_URL",
        description="Alternate IAM endpoint, e.g. a local moto server"
    )

    # IAM Configuration
    certificate_path: str = Field(
        default="/",
        description="IAM path for uploaded server certificates"
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Logging level"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Accept any standard logging level name, case-insensitively."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log_level: {v}")
        return level

    @field_validator('certificate_path')
    @classmethod
    def validate_certificate_path(cls, v):
        """IAM paths must begin and end with a slash."""
        if not (v.startswith('/') and v.endswith('/')):
            raise ValueError(f"Invalid certificate_path: {v}. Must begin and end with '/'")
        return v

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
