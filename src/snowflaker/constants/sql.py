"""SQL and query-related constants."""

from enum import Enum


class QueryStatus(str, Enum):
    """Outcome of a statement recorded in the query history.
    
    Values:
        PASSED: The driver accepted the statement and returned a result.
        FAILED: The driver rejected the statement; the history record
            carries the driver's error message.
    """
    
    PASSED = "passed"
    FAILED = "failed"
