from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class PaginationMode(str, Enum):
    """Where pagination directives are read from."""

    HEADERS = "headers"
    PARAMETERS = "parameters"
    BOTH = "both"  # headers first, query parameters as fallback


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Range Pagination Service"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: Environment = Environment.DEVELOPMENT
    DEBUG: bool = Field(default=True)

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # Logging
    LOG_LEVEL: LogLevel = LogLevel.INFO
    LOG_FORMAT: str = Field(default="json")  # json or text

    # OpenTelemetry
    OTEL_SERVICE_NAME: str = Field(default="range-pagination")
    OTEL_SERVICE_VERSION: str = Field(default="0.1.0")
    TRACING_ENABLED: bool = Field(default=False)
    TRACE_SAMPLING_RATE: float = Field(default=1.0, ge=0.0, le=1.0)
    OTLP_ENDPOINT: Optional[str] = Field(default=None)

    # Prometheus
    ENABLE_METRICS: bool = Field(default=True)

    # Pagination defaults, overridable per route
    PAGINATION_AJAX_ONLY: bool = Field(default=True)
    PAGINATION_MODE: PaginationMode = PaginationMode.HEADERS
    PAGINATION_STRICT_RANGE: bool = Field(default=False)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore")


settings = Settings()
