"""ODBC connection settings for the Snowflake driver.

Credentials are expected to come from the DSN itself, the environment, or
explicit constructor arguments. Nothing here is written back to disk.
"""

from typing import Any, Dict, Optional

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import SettingsConfigDict

from .base import SnowflakerBaseSettings


def _odbc_value(value: str) -> str:
    """Brace-quote a connection string value when it contains separators."""
    if any(ch in value for ch in ";{}=") or value != value.strip():
        return "{" + value.replace("}", "}}") + "}"
    return value


class SnowflakeSettings(SnowflakerBaseSettings):
    """Connection parameters for a Snowflake ODBC DSN.
    
    Environment variables use the ``SNOWFLAKE_`` prefix, e.g.
    ``SNOWFLAKE_DSN``, ``SNOWFLAKE_ROLE``, ``SNOWFLAKE_SCHEMA``.
    """
    
    model_config = SettingsConfigDict(
        env_prefix="SNOWFLAKE_",
        case_sensitive=False,
        populate_by_name=True,
    )
    
    dsn: str = Field(
        ...,
        description="ODBC data source name configured for the Snowflake driver"
    )
    uid: Optional[str] = Field(
        default=None,
        description="User id, when not resolved by the DSN"
    )
    pwd: Optional[SecretStr] = Field(
        default=None,
        description="Password, when not resolved by the DSN"
    )
    database: Optional[str] = Field(default=None, description="Default database")
    schema_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("schema_name", "snowflake_schema"),
        description="Default schema"
    )
    role: Optional[str] = Field(default=None, description="Default role")
    warehouse: Optional[str] = Field(default=None, description="Default warehouse")
    timezone: Optional[str] = Field(
        default=None,
        description="Session time zone sent to the server (e.g. 'Europe/Zurich')"
    )
    timezone_out: Optional[str] = Field(
        default=None,
        description="Time zone that tz-aware datetime columns are converted to in results"
    )
    autocommit: bool = Field(
        default=True,
        description="Open the connection in autocommit mode"
    )
    login_timeout: int = Field(
        default=0,
        ge=0,
        description="Driver login timeout in seconds (0 leaves the driver default)"
    )
    odbc_extra: Dict[str, str] = Field(
        default_factory=dict,
        description="Additional ODBC connection attributes appended verbatim"
    )
    
    @field_validator("dsn")
    @classmethod
    def validate_dsn(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("dsn must be a non-empty data source name")
        return v.strip()
    
    def connection_attributes(self) -> Dict[str, str]:
        """Return the ODBC attributes for this configuration, omitting unset ones."""
        attributes: Dict[str, Optional[str]] = {
            "DSN": self.dsn,
            "UID": self.uid,
            "PWD": self.pwd.get_secret_value() if self.pwd else None,
            "DATABASE": self.database,
            "SCHEMA": self.schema_name,
            "ROLE": self.role,
            "WAREHOUSE": self.warehouse,
            "TIMEZONE": self.timezone,
        }
        attributes.update(self.odbc_extra)
        return {key: value for key, value in attributes.items() if value is not None}
    
    def odbc_connection_string(self) -> str:
        """Build the ``KEY=value;...`` string handed to the driver manager."""
        return ";".join(
            f"{key}={_odbc_value(str(value))}"
            for key, value in self.connection_attributes().items()
        )
    
    def connection_args(self) -> Dict[str, Any]:
        """Keyword arguments for ``pyodbc.connect``."""
        args: Dict[str, Any] = {"autocommit": self.autocommit}
        if self.login_timeout:
            args["timeout"] = self.login_timeout
        return args
    
    def safe_repr(self) -> Dict[str, Any]:
        """Connection details suitable for logging (no secrets)."""
        return {
            "dsn": self.dsn,
            "database": self.database,
            "schema": self.schema_name,
            "role": self.role,
            "warehouse": self.warehouse,
        }
