from snowflaker.__version__ import __version__

from snowflaker.lineage import (
    SourceLineageExtractor,
    LineageTracker,
    extract_sources,
    format_sources,
    get_lineage,
)
from snowflaker.connection import (
    SnowflakeConnector,
    OdbcConnectionManager,
    QueryExecutor,
    QueryHistory,
    get_query_dsn,
)
from snowflaker.sql_api import SnowflakeSQLAPIClient

from snowflaker.common.exceptions import SnowflakerError, ErrorCode
from snowflaker.constants import LINEAGE_ATTRIBUTE, NO_SOURCES_SENTINEL, QueryStatus
from snowflaker.logging import setup_logging


__all__ = [
    "__version__",
    
    # Lineage
    "SourceLineageExtractor",
    "LineageTracker",
    "extract_sources",
    "format_sources",
    "get_lineage",
    "LINEAGE_ATTRIBUTE",
    "NO_SOURCES_SENTINEL",
    
    # ODBC
    "SnowflakeConnector",
    "OdbcConnectionManager",
    "QueryExecutor",
    "QueryHistory",
    "QueryStatus",
    "get_query_dsn",
    
    # SQL API
    "SnowflakeSQLAPIClient",
    
    # Exceptions (public API)
    "SnowflakerError",
    "ErrorCode",
    
    "setup_logging",
]
