"""Application settings and configuration.

This module defines all configuration options for the AMA Board application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="AMA Board", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Host session signing
    secret_key: str = Field(default="dev-only-secret-change-me", alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    host_session_expire_minutes: int = Field(
        default=60 * 12,
        alias="HOST_SESSION_EXPIRE_MINUTES",
    )
    admin_password: str | None = Field(default=None, alias="ADMIN_PASSWORD")
    host_cookie_name: str = Field(default="ama_admin_session", alias="HOST_COOKIE_NAME")

    # Database configuration
    database_url: str = Field(default="sqlite:///./ama_board.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Anonymous voter identity cookie
    voter_cookie_name: str = Field(default="ama_voter_id", alias="VOTER_COOKIE_NAME")
    voter_cookie_max_age_seconds: int = Field(
        default=60 * 60 * 24 * 365,
        alias="VOTER_COOKIE_MAX_AGE_SECONDS",
    )

    # Question rules
    edit_window_seconds: int = Field(default=120, alias="EDIT_WINDOW_SECONDS")
    question_max_length: int = Field(default=280, alias="QUESTION_MAX_LENGTH")

    # Client polling
    participant_poll_interval_seconds: float = Field(
        default=3.0,
        alias="PARTICIPANT_POLL_INTERVAL_SECONDS",
    )
    presenter_poll_intervals: list[int] = Field(
        default=[3, 5, 10],
        alias="PRESENTER_POLL_INTERVALS",
    )
    presenter_undo_seconds: float = Field(default=10.0, alias="PRESENTER_UNDO_SECONDS")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()
