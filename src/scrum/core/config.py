from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Scrum Tracker API"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Security
    log_user_emails: bool = False  # GDPR: keep emails out of logs by default

    # Database
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_echo: bool = False

    # Auth
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 30
    refresh_token_expire_days: int = 7
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "JWT_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    # Temporal
    temporal_host: str = "localhost:7233"
    temporal_namespace: str = "default"
    temporal_task_queue: str = "scrum-maintenance"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    # Maintenance schedules (cron syntax, UTC). None disables the schedule.
    due_date_reminder_schedule: str | None = "0 9 * * *"
    overdue_reminder_schedule: str | None = "0 10 * * *"
    sprint_ending_reminder_schedule: str | None = "0 9 * * *"
    sprint_auto_complete_schedule: str | None = "0 * * * *"
    notification_cleanup_schedule: str | None = "0 0 * * 0"
    idle_user_schedule: str | None = "*/30 * * * *"
    token_cleanup_schedule: str | None = "0 3 * * *"

    # Maintenance thresholds
    due_date_reminder_window_hours: int = 48
    sprint_ending_window_hours: int = 24
    notification_retention_days: int = 30
    idle_user_minutes: int = 30
    token_retention_days: int = 30  # Expired or revoked refresh tokens are kept this long


@lru_cache
def get_settings() -> Settings:
    return Settings()
