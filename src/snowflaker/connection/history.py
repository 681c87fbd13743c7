"""In-memory query history."""

import threading
from typing import List, Optional, Tuple

import pandas as pd

from snowflaker.constants.sql import QueryStatus
from snowflaker.types.history import QueryRecord

HISTORY_COLUMNS = ["timestamp", "query", "status", "message"]


class QueryHistory:
    """Append-only record of statement outcomes, oldest first.
    
    Records can only be added through ``log_success`` and ``log_failure``.
    Accessors return snapshots; changing a snapshot never changes the history.
    """
    
    def __init__(self):
        self._records: List[QueryRecord] = []
        self._lock = threading.Lock()
    
    def log_success(self, query: str) -> QueryRecord:
        return self._append(QueryRecord(query=query, status=QueryStatus.PASSED))
    
    def log_failure(self, query: str, message: Optional[str]) -> QueryRecord:
        return self._append(
            QueryRecord(query=query, status=QueryStatus.FAILED, message=message)
        )
    
    @property
    def records(self) -> Tuple[QueryRecord, ...]:
        """Immutable snapshot of all records."""
        with self._lock:
            return tuple(self._records)
    
    def to_frame(self) -> pd.DataFrame:
        """Snapshot of the history as a DataFrame.
        
        Columns are ``timestamp`` (UTC), ``query``, ``status`` (categorical
        with categories ``passed``/``failed``) and ``message``.
        """
        frame = pd.DataFrame(
            [record.model_dump() for record in self.records],
            columns=HISTORY_COLUMNS,
        )
        frame["timestamp"] = pd.to_datetime(frame["timestamp"], utc=True)
        frame["status"] = pd.Categorical(
            frame["status"],
            categories=[status.value for status in QueryStatus],
        )
        return frame
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
    
    def _append(self, record: QueryRecord) -> QueryRecord:
        with self._lock:
            self._records.append(record)
        return record
