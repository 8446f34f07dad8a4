"""
Module: settings.py
Description: Application configuration using pydantic-settings.

Configures all application settings from environment variables with
validation and defaults. Supports .env files for local development.
"""

from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="Spree Webhooks", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    log_level: str = Field(default="INFO", description="Logging level")

    # AWS settings
    aws_region: str = Field(default="us-east-1", description="AWS region")
    stage: str = Field(default="dev", description="Deployment stage")

    # Queue settings
    webhooks_queue_name: str = Field(
        default="spree_webhooks",
        description="Logical queue name webhook delivery jobs are bound to"
    )
    webhooks_queue_url: str = Field(
        ...,
        description="URL of the SQS queue backing the webhooks queue"
    )

    # Delivery settings
    delivery_timeout: int = Field(
        default=10,
        ge=1,
        le=30,
        description="HTTP timeout in seconds for delivery requests"
    )
    delivery_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="In-process attempts for connection-level failures"
    )
    delivery_retry_wait: float = Field(
        default=1.0,
        ge=0,
        le=30,
        description="Base wait in seconds for exponential connection retry backoff"
    )
    max_attempts: int = Field(
        default=5,
        ge=1,
        le=25,
        description="Queue executions before a failing job is discarded"
    )

    # Security settings
    auth_enabled: bool = Field(
        default=True,
        description="Require an API key on the dispatch endpoint"
    )
    api_key_hash: Optional[str] = Field(
        default=None,
        description="PBKDF2 hash of the API key allowed to dispatch webhooks"
    )

    # Metrics settings
    metrics_namespace: str = Field(
        default="SpreeWebhooks",
        description="CloudWatch metrics namespace"
    )

    @field_validator('webhooks_queue_name')
    @classmethod
    def validate_queue_name(cls, v: str) -> str:
        """Validate logical queue names."""
        import re
        if not re.match(r'^[a-z0-9_]+$', v):
            raise ValueError(
                "Queue name must contain only lowercase letters, numbers, and underscores"
            )
        return v

    @field_validator('webhooks_queue_url')
    @classmethod
    def validate_queue_url(cls, v: str) -> str:
        """Validate the SQS queue URL."""
        if not v or not v.startswith(('http://', 'https://')):
            raise ValueError("webhooks_queue_url must be an HTTP/HTTPS URL")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @property
    def queue_urls(self) -> Dict[str, str]:
        """Mapping of logical queue names to SQS queue URLs."""
        return {self.webhooks_queue_name: self.webhooks_queue_url}


# Global settings instance
settings = Settings()
