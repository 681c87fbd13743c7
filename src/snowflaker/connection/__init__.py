"""ODBC connection management, execution and the connector facade."""

from snowflaker.connection.connector import SnowflakeConnector, get_query_dsn
from snowflaker.connection.executor import QueryExecutor
from snowflaker.connection.history import QueryHistory
from snowflaker.connection.manager import OdbcConnectionManager, odbc_connect

__all__ = [
    "SnowflakeConnector",
    "get_query_dsn",
    "QueryExecutor",
    "QueryHistory",
    "OdbcConnectionManager",
    "odbc_connect",
]
