from typing import Optional

from pydantic import Field, PrivateAttr
from pydantic_settings import SettingsConfigDict

from .base import SnowflakerBaseSettings
from .connection import SnowflakeSettings
from .logging import LoggingSettings
from .sql_api import SQLAPISettings


class _Settings(SnowflakerBaseSettings):
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )
    
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Structured logging configuration"
    )
    
    _snowflake: Optional[SnowflakeSettings] = PrivateAttr(default=None)
    _sql_api: Optional[SQLAPISettings] = PrivateAttr(default=None)
    
    @property
    def snowflake(self) -> SnowflakeSettings:
        """Get or create ODBC connection settings.
        
        Created lazily so that processes which only use the SQL API do not
        need ``SNOWFLAKE_DSN`` to be set.
        """
        if self._snowflake is None:
            self._snowflake = SnowflakeSettings()
        return self._snowflake
    
    @property
    def sql_api(self) -> SQLAPISettings:
        """Get or create SQL API settings."""
        if self._sql_api is None:
            self._sql_api = SQLAPISettings()
        return self._sql_api


_settings: Optional[_Settings] = None


def get_settings(force_reload: bool = False) -> _Settings:
    """Get the process-wide settings instance.
    
    Args:
        force_reload: Discard the cached instance and read the environment again
        
    Returns:
        The cached settings object
    
    Example:
        ```python
        settings = get_settings()
        settings2 = get_settings()
        assert settings is settings2
        ```
    """
    global _settings
    
    if _settings is None or force_reload:
        _settings = _Settings()
    
    return _settings


def reload_settings() -> _Settings:
    """Force a reload of settings from the environment."""
    global _settings
    _settings = None
    return get_settings(force_reload=True)
