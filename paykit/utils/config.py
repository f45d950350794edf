"""Configuration for the Pubky reference adapter.

Pydantic-based settings, overridable through environment variables.

Environment Variables:
- PAYKIT_HOMESERVER_URL: Homeserver base URL (default: https://homeserver.pubky.app)
- PAYKIT_REQUEST_TIMEOUT_SECONDS: Total request timeout (default: 30)
- PAYKIT_CONNECT_TIMEOUT_SECONDS: Connect timeout (default: 5)
- PAYKIT_SESSION_COOKIE: Session cookie for authenticated writes (optional)
- PAYKIT_MAX_CONCURRENT_FETCHES: Parallel document fetches while listing (default: 8)

Only the adapter factories read settings. The resolution and facade layers
take everything they need as arguments.
"""

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaykitSettings(BaseSettings):
    """Paykit adapter configuration.

    Example:
        >>> settings = PaykitSettings(homeserver_url="http://localhost:6286")
        >>> settings.homeserver_url
        'http://localhost:6286'
    """

    model_config = SettingsConfigDict(
        env_prefix="PAYKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Homeserver
    homeserver_url: str = Field(
        default="https://homeserver.pubky.app",
        description="Base URL of the Pubky homeserver hosting the storage roots",
    )

    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=300,
        description="Total timeout for a single storage request",
    )

    connect_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        le=60,
        description="Timeout for establishing a connection",
    )

    user_agent: str = Field(
        default="paykit-python/0.1.0",
        description="User-Agent header sent to the homeserver",
    )

    # Authentication (session establishment happens elsewhere)
    session_cookie: SecretStr | None = Field(
        default=None,
        description="Cookie of an already established homeserver session",
    )

    # Resolution
    max_concurrent_fetches: int = Field(
        default=8,
        ge=1,
        le=64,
        description="Maximum endpoint documents fetched in parallel while listing",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level for configure_logging")
    json_logs: bool = Field(default=False, description="Emit JSON log lines")

    @field_validator("homeserver_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"homeserver_url must be an http(s) URL, got {value!r}")
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level {value!r}")
        return level
