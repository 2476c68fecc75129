"""Configuration management for spellpipe."""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging_utils import configure_logging

Program = Literal["ispell", "aspell", "hunspell"]
OffsetUnit = Literal["chars", "bytes"]


class Settings(BaseSettings):
    """Launch and session settings."""

    model_config = SettingsConfigDict(
        env_prefix="SPELLPIPE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Launch Configuration
    program: Program = Field(default="ispell", description="Pipe-protocol speller to run")
    command: Optional[str] = Field(None, description="Binary name or path overriding the program default")
    dictionary: Optional[str] = Field(None, description="Dictionary passed with -d")
    language: Optional[str] = Field(None, description="Language passed with -l (aspell only)")

    # Session Configuration
    timeout_seconds: float = Field(default=5.0, gt=0, description="How long to wait for each response")
    offset_unit: OffsetUnit = Field(default="chars", description="Unit the speller reports offsets in")

    # Logging Configuration
    log_level: str = Field(default="WARNING", description="Log level")


def get_settings(**overrides: object) -> Settings:
    """Get settings.

    Args:
        **overrides: Field values taking precedence over the environment

    Returns:
        Settings instance
    """
    # pydantic-settings reads SPELLPIPE_* variables and the .env file
    settings = Settings(**{key: value for key, value in overrides.items() if value is not None})

    configure_logging(settings.log_level)

    return settings
