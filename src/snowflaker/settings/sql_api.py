"""Snowflake SQL REST API settings.

Bearer tokens are deliberately not part of these settings: they are set or
refreshed on the client at runtime and never read from or persisted to disk.
"""

from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import SettingsConfigDict

from .base import SnowflakerBaseSettings


class SQLAPISettings(SnowflakerBaseSettings):
    
    model_config = SettingsConfigDict(
        env_prefix="SNOWFLAKE_API_",
        case_sensitive=False,
        populate_by_name=True,
    )
    
    account: str = Field(
        ...,
        description="Snowflake account identifier (e.g. 'xy12345' or 'xy12345.eu-central-1')"
    )
    region: Optional[str] = Field(
        default=None,
        description="Optional region appended to the account in the host name"
    )
    warehouse: Optional[str] = Field(default=None)
    database: Optional[str] = Field(default=None)
    schema_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("schema_name", "snowflake_api_schema"),
    )
    role: Optional[str] = Field(default=None)
    timeout_seconds: int = Field(
        default=60,
        ge=1,
        description="Default statement timeout in seconds"
    )
    
    @field_validator("account")
    @classmethod
    def validate_account(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("account must be a non-empty Snowflake account identifier")
        return v.strip()
