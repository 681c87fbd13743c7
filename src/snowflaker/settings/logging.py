from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from .base import SnowflakerBaseSettings


class LoggingSettings(SnowflakerBaseSettings):
    """Log configuration read from ``SNOWFLAKER_LOG_*`` variables."""
    
    model_config = SettingsConfigDict(
        env_prefix="SNOWFLAKER_LOG_",
        case_sensitive=False
    )
    
    level: str = Field(default="INFO", description="Base log level")
    
    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level '{v}'")
        return level
