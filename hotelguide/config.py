"""Application configuration loading and validation."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

StatsResolverMode = Literal["local", "remote"]


class Settings(BaseSettings):
    """Strongly typed settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HOTELGUIDE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Record store
    mongodb_uri: str
    mongodb_database: str = "hotelguide"

    # Queue transport (SQS)
    aws_region: str = "us-east-1"
    sqs_endpoint_url: str | None = None
    report_queue_name: str = "reportQueue"
    report_queue_url: str | None = None
    report_queue_visibility_timeout_seconds: int = 300

    # Report consumer
    consumer_enabled: bool = True
    consumer_max_messages: int = 1
    consumer_wait_time_seconds: int = 20
    consumer_receive_error_backoff_seconds: float = 5.0

    # Stats resolver
    stats_resolver: StatsResolverMode = "local"
    hotel_service_url: str | None = None
    stats_timeout_seconds: int = 10
    stats_retry_attempts: int = 2
    stats_circuit_breaker_failure_threshold: int = 3
    stats_circuit_breaker_recovery_seconds: int = 60

    # Logging
    log_config_path: Path = Path("config/logging.yaml")

    @model_validator(mode="after")
    def validate_runtime_configuration(self) -> "Settings":
        """Validate cross-field configuration constraints."""
        if not self.report_queue_name.strip():
            raise ValueError("HOTELGUIDE_REPORT_QUEUE_NAME must not be empty")

        if self.report_queue_visibility_timeout_seconds < 0:
            raise ValueError("HOTELGUIDE_REPORT_QUEUE_VISIBILITY_TIMEOUT_SECONDS must be >= 0")

        if not 1 <= self.consumer_max_messages <= 10:
            raise ValueError("HOTELGUIDE_CONSUMER_MAX_MESSAGES must be between 1 and 10")

        if not 0 <= self.consumer_wait_time_seconds <= 20:
            raise ValueError("HOTELGUIDE_CONSUMER_WAIT_TIME_SECONDS must be between 0 and 20")

        if self.consumer_receive_error_backoff_seconds <= 0:
            raise ValueError("HOTELGUIDE_CONSUMER_RECEIVE_ERROR_BACKOFF_SECONDS must be > 0")

        if self.stats_timeout_seconds <= 0:
            raise ValueError("HOTELGUIDE_STATS_TIMEOUT_SECONDS must be > 0")

        if self.stats_retry_attempts <= 0:
            raise ValueError("HOTELGUIDE_STATS_RETRY_ATTEMPTS must be > 0")

        if self.stats_circuit_breaker_failure_threshold <= 0:
            raise ValueError("HOTELGUIDE_STATS_CIRCUIT_BREAKER_FAILURE_THRESHOLD must be > 0")

        if self.stats_circuit_breaker_recovery_seconds <= 0:
            raise ValueError("HOTELGUIDE_STATS_CIRCUIT_BREAKER_RECOVERY_SECONDS must be > 0")

        if self.stats_resolver == "remote" and not self.hotel_service_url:
            raise ValueError("HOTELGUIDE_HOTEL_SERVICE_URL is required when HOTELGUIDE_STATS_RESOLVER=remote")

        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()
