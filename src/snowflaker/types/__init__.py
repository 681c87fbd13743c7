"""Pydantic models shared across snowflaker."""

from snowflaker.types.base import SnowflakerBaseModel
from snowflaker.types.history import QueryRecord

__all__ = [
    "SnowflakerBaseModel",
    "QueryRecord",
]
