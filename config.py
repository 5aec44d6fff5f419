"""
Configuration Management for ConsultScribe
==========================================

This module handles all application configuration using the Settings pattern
with Pydantic. This approach provides:

1. **Environment Variable Support**: Easy deployment configuration
2. **Validation**: Catches configuration errors at startup
3. **Defaults**: Sensible defaults for development

Settings are loaded once through a cached function, and tests can build
isolated instances with get_settings_for_testing().
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables are prefixed with CONSULTSCRIBE_ to avoid conflicts.
    Example: CONSULTSCRIBE_TRANSLATION_TIMEOUT_SECONDS=3

    Priority order (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values defined here
    """

    model_config = SettingsConfigDict(
        env_prefix="CONSULTSCRIBE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # =================================================================
    # Translation Configuration
    # =================================================================
    enable_translation: bool = Field(
        default=True,
        description="""
        Translate Hindi transcripts to English before field extraction.

        When disabled, Hindi transcripts are processed untranslated, exactly
        as if the translation service had failed.
        """
    )

    translation_endpoint: str = Field(
        default="https://translate.googleapis.com/translate_a/single",
        description="Free-form translation endpoint (Google gtx client format)"
    )

    translation_target_language: str = Field(
        default="en",
        description="Target language code sent to the translation endpoint"
    )

    translation_timeout_seconds: float = Field(
        default=5.0,
        gt=0.0,
        le=60.0,
        description="""
        Upper bound on a single translation call. On timeout the original
        transcript is used unchanged.
        """
    )

    # =================================================================
    # Output Configuration
    # =================================================================
    output_dir: str = Field(
        default="./output",
        description="Directory for saved notes"
    )

    save_notes: bool = Field(
        default=True,
        description="Whether the CLI saves assembled notes to output_dir"
    )

    # =================================================================
    # API Configuration
    # =================================================================
    api_host: str = Field(default="127.0.0.1", description="API bind host")
    api_port: int = Field(default=8000, description="API bind port")
    api_debug: bool = Field(
        default=False,
        description="Expose unexpected error details in API responses"
    )

    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Origins allowed to call the API (the browser front-end)"
    )

    cors_allow_credentials: bool = Field(default=True)

    submission_rate_limit: str = Field(
        default="30/minute",
        description="slowapi rate limit applied to consultation submission"
    )

    # =================================================================
    # Logging Configuration
    # =================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )

    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Python logging format string"
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached singleton).

    For testing, you can clear the cache:
        get_settings.cache_clear()

    Returns:
        Settings: Application settings instance
    """
    return Settings()


def get_settings_for_testing(**overrides) -> Settings:
    """
    Create a Settings instance with custom values for testing.

    Example:
        settings = get_settings_for_testing(enable_translation=False)

    Args:
        **overrides: Setting values to override

    Returns:
        Settings: New Settings instance with overrides applied
    """
    return Settings(**overrides)
