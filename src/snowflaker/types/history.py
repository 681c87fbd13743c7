"""Query history record model."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import ConfigDict, Field

from snowflaker.constants.sql import QueryStatus
from snowflaker.types.base import SnowflakerBaseModel


class QueryRecord(SnowflakerBaseModel):
    """One statement outcome in a connector's query history.
    
    Records are frozen: the history only ever grows by appending new ones.
    
    Attributes:
        timestamp: UTC time the outcome was recorded
        query: Statement text as submitted by the caller (before binding)
        status: ``passed`` or ``failed``
        message: Driver error message for failures, ``None`` otherwise
    """
    
    model_config = ConfigDict(frozen=True)
    
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    query: str
    status: QueryStatus
    message: Optional[str] = None
