"""
Type-safe configuration for the schema validator using Pydantic Settings.

Values are loaded from environment variables prefixed with
``SCHEMA_VALIDATOR_`` or from a ``.env`` file.

Usage:
    from schema_validator.config import settings

    if settings.enable_caching:
        ...
"""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ValidatorSettings(BaseSettings):
    """
    Process-wide defaults for new ``Validator`` instances.
    """
    model_config = SettingsConfigDict(
        env_prefix="SCHEMA_VALIDATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # ============================================================================
    # Validation behaviour
    # ============================================================================

    tag_name: str = Field(default="validate", description="Record field metadata key holding tag directives")
    validation_mode: str = Field(default="strict", description="strict, loose or warn")
    error_format: str = Field(default="detailed", description="simple, detailed or json")
    stop_on_first_error: bool = Field(default=False, description="Truncate results to the first error")
    recursive_validation: bool = Field(default=False, description="Descend into nested records")
    allow_unknown_fields: bool = Field(default=False, description="Let additionalProperties=false pass")

    # ============================================================================
    # Caching & logging
    # ============================================================================

    enable_caching: bool = Field(default=False, description="Cache compiled schemas by raw schema text")
    log_level: str = Field(default="INFO", description="Level for schema_validator loggers")

    @field_validator("validation_mode", "error_format", "log_level", mode="before")
    @classmethod
    def _normalize(cls, value):
        return value.strip() if isinstance(value, str) else value


settings = ValidatorSettings()
