"""Snowflake SQL REST API access."""

from snowflaker.sql_api.client import STATEMENTS_PATH, SnowflakeSQLAPIClient

__all__ = [
    "STATEMENTS_PATH",
    "SnowflakeSQLAPIClient",
]
