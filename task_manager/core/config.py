"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Loaded once per process and not re-read.
"""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_TELEMETRY_EXPORTERS = ("console", "otlp", "none")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Database connection is either the individual POSTGRES_* parameters or a
    full DATABASE_URL, which wins when set.
    """

    # App
    app_name: str = "task-manager"
    app_version: str = "1.0.0"
    debug: bool = False
    app_host: str = "0.0.0.0"
    app_port: int = 9090
    log_level: str = "INFO"

    # Database
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: SecretStr = SecretStr("")
    postgres_db: str = "tasks"
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int = 10
    db_max_overflow: int = 10
    db_pool_timeout: int = 10  # seconds waiting for a pooled connection
    db_command_timeout: int = 10  # asyncpg per-statement timeout
    db_operation_timeout_seconds: float = 10.0

    # Schema bootstrap
    db_init_file_path: str = "scripts/init_db.sql"
    db_init_on_startup: bool = False

    # Request / middleware
    request_timeout_seconds: int = 30
    request_id_header: str = "X-Request-ID"
    correlation_id_header: str = "X-Correlation-ID"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Reject non-positive timeouts and pool sizes, and unknown exporters."""
        for name in (
            "db_pool_size",
            "db_pool_timeout",
            "db_command_timeout",
            "db_operation_timeout_seconds",
            "request_timeout_seconds",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")
        if self.db_max_overflow < 0:
            raise ValueError("db_max_overflow must be >= 0")
        if self.telemetry_exporter not in _TELEMETRY_EXPORTERS:
            raise ValueError(
                f"telemetry_exporter must be one of {', '.join(_TELEMETRY_EXPORTERS)}, "
                f"got: {self.telemetry_exporter!r}"
            )
        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError("telemetry_sample_rate must be between 0.0 and 1.0")
        return self

    @property
    def sqlalchemy_url(self) -> str:
        """Async SQLAlchemy URL: DATABASE_URL if set, else built from POSTGRES_*."""
        if self.database_url:
            return self.database_url
        password = quote_plus(self.postgres_password.get_secret_value())
        user = quote_plus(self.postgres_user)
        credentials = f"{user}:{password}" if password else user
        return (
            f"postgresql+asyncpg://{credentials}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
