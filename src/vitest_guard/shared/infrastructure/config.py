"""
Application configuration using Pydantic Settings.

Loads configuration from VITEST_GUARD_* environment variables and .env file.
Validation limits and pattern tables are deliberately not configurable here.
"""

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vitest_guard.shared.domain.exceptions import ConfigurationError

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="VITEST_GUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="vitest-guard", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/production)")
    log_level: str = Field(default="INFO", description="Logging level")

    # Logging / Privacy
    log_redaction_enabled: bool = Field(default=True, description="Enable PII redaction in logs")

    # Project
    project_root: str = Field(default=".", description="Trusted project root all paths must stay inside")

    # Test runner
    npx_command: str = Field(default="npx", description="Launcher used to invoke vitest")
    test_timeout_seconds: int = Field(default=300, description="Timeout for a vitest run")

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env.lower() == "production"

    @model_validator(mode="after")
    def _validate_settings(self) -> "Settings":
        """Fail fast on values that would break logging or the runner."""
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {self.log_level!r}")
        if self.test_timeout_seconds <= 0:
            raise ValueError("test_timeout_seconds must be positive")
        return self


def get_settings(**overrides) -> Settings:
    """
    Load a fresh Settings instance.

    Raises:
        ConfigurationError: If the environment holds invalid values
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", {"errors": e.errors()}) from e


# Global settings instance
settings = get_settings()
