"""SnowflakeConnector: session-style access to Snowflake over ODBC.

The connector composes a connection manager, a query history, a lineage
tracker and an executor:

    - ``run_query()`` returns a ``pandas.DataFrame`` tagged with
      ``attrs["snowflake-sources"]``
    - ``run_query_history`` exposes every outcome as a read-only snapshot
    - ``write_data()`` bulk-inserts a frame into a table
    - ``transaction_begin/commit/rollback`` wrap the driver's transactions

Credentials are expected to come from the DSN, the environment or the
constructor arguments.

Example:
    >>> with SnowflakeConnector(dsn="snowflake-bi", role="ANALYST", warehouse="BI_WH") as con:
    ...     con.run_query("select 1 as x")
    ...     con.run_query_history
"""

from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union

import pandas as pd
from pydantic import ValidationError

from snowflaker.common.exceptions import (
    configuration_error,
    read_only_violation_error,
    statement_failed_error,
)
from snowflaker.connection.executor import QueryExecutor, driver_error_message
from snowflaker.connection.history import QueryHistory
from snowflaker.connection.manager import OdbcConnectionManager
from snowflaker.lineage.tracker import LineageTracker
from snowflaker.logging import get_logger
from snowflaker.settings import SnowflakeSettings
from snowflaker.types.history import QueryRecord

logger = get_logger(__name__)

TableName = Union[str, Sequence[str]]


def _resolve_settings(
    settings: Optional[SnowflakeSettings],
    overrides: Dict[str, Any],
) -> SnowflakeSettings:
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if "schema" in overrides:
        overrides["schema_name"] = overrides.pop("schema")
    if settings is not None and not overrides:
        return settings
    try:
        if settings is None:
            return SnowflakeSettings(**overrides)
        return SnowflakeSettings(**{**settings.model_dump(), **overrides})
    except ValidationError as exc:
        fields = sorted({str(error["loc"][0]) for error in exc.errors() if error.get("loc")})
        raise configuration_error(
            f"Invalid Snowflake connection settings: {', '.join(fields)}",
            config_key=fields[0] if fields else None,
            cause=exc,
        ) from exc


def quote_table_name(table: TableName) -> str:
    """Render a table reference for generated SQL.
    
    A string is used verbatim. A sequence such as ``("DB", "SCH", "TBL")`` is
    treated as identifier parts and double-quoted.
    """
    if isinstance(table, str):
        return table
    parts = [str(part) for part in table]
    return ".".join('"' + part.replace('"', '""') + '"' for part in parts)


class SnowflakeConnector:
    """Snowflake ODBC session with query history and lineage tagging."""
    
    def __init__(
        self,
        settings: Optional[SnowflakeSettings] = None,
        *,
        connect: Optional[Callable[..., Any]] = None,
        **overrides: Any,
    ):
        """Construct a connector and open its connection.
        
        Args:
            settings: Connection settings; read from ``SNOWFLAKE_*`` variables
                when omitted
            connect: Driver connect callable (defaults to pyodbc)
            **overrides: Setting overrides such as ``dsn``, ``uid``, ``pwd``,
                ``database``, ``schema``, ``role``, ``warehouse``,
                ``timezone``, ``timezone_out``
        """
        self.settings = _resolve_settings(settings, overrides)
        self._history = QueryHistory()
        self._lineage_tracker = LineageTracker()
        self._connection_manager = OdbcConnectionManager(self.settings, connect=connect)
        self._executor = QueryExecutor(
            self._connection_manager,
            self._history,
            self._lineage_tracker,
            timezone=self.settings.timezone,
            timezone_out=self.settings.timezone_out,
        )
        self._in_transaction = False
    
    @property
    def connection(self) -> Any:
        """The live driver connection."""
        return self._connection_manager.get_connection()
    
    @connection.setter
    def connection(self, value: Any) -> None:
        raise read_only_violation_error("connection")
    
    @property
    def run_query_history(self) -> pd.DataFrame:
        """Snapshot of the query history as a DataFrame."""
        return self._history.to_frame()
    
    @run_query_history.setter
    def run_query_history(self, value: Any) -> None:
        raise read_only_violation_error("run_query_history")
    
    @property
    def history_records(self) -> Tuple[QueryRecord, ...]:
        return self._history.records
    
    @property
    def in_transaction(self) -> bool:
        return self._in_transaction
    
    def is_valid(self) -> bool:
        return self._connection_manager.is_valid()
    
    def run_query(self, sql: str, params: Optional[Sequence[Any]] = None) -> pd.DataFrame:
        """Execute a statement and return a DataFrame with lineage attached.
        
        Args:
            sql: Statement text; ``?`` placeholders are bound from ``params``
            params: Optional positional bind values
        """
        return self._executor.run(sql, params)
    
    def write_data(
        self,
        table: TableName,
        value: pd.DataFrame,
        *,
        overwrite: bool = False,
    ) -> int:
        """Insert the rows of ``value`` into an existing table.
        
        Columns are matched by name. Missing values are sent as NULL.
        
        Args:
            table: Target table, as SQL text or a sequence of identifier parts
            value: Rows to write
            overwrite: Delete the table's existing rows first
            
        Returns:
            Number of rows written
        """
        if not isinstance(value, pd.DataFrame):
            value = pd.DataFrame(value)
        
        target = quote_table_name(table)
        columns = ", ".join('"' + str(column).replace('"', '""') + '"' for column in value.columns)
        placeholders = ", ".join("?" for _ in value.columns)
        insert_sql = f"INSERT INTO {target} ({columns}) VALUES ({placeholders})"
        rows = [
            tuple(row)
            for row in value.astype(object).where(value.notna(), None).itertuples(index=False, name=None)
        ]
        
        with self._connection_manager.lock:
            connection = self._connection_manager.get_connection()
            cursor = connection.cursor()
            statement = insert_sql
            try:
                if overwrite:
                    statement = f"DELETE FROM {target}"
                    cursor.execute(statement)
                    statement = insert_sql
                if rows:
                    cursor.executemany(insert_sql, rows)
            except Exception as exc:
                raise statement_failed_error(
                    statement, exc, message=driver_error_message(exc)
                ) from exc
            finally:
                cursor.close()
        
        logger.info(
            "Data written",
            extra={"db.platform": "snowflake", "db.sql.table": target, "rows": str(len(rows))},
        )
        return len(rows)
    
    def transaction_begin(self) -> None:
        """Begin a transaction by switching the connection out of autocommit."""
        with self._connection_manager.lock:
            self.connection.autocommit = False
            self._in_transaction = True
    
    def transaction_commit(self) -> None:
        """Commit the current transaction and return to autocommit."""
        with self._connection_manager.lock:
            connection = self.connection
            try:
                connection.commit()
            finally:
                self._end_transaction(connection)
    
    def transaction_rollback(self) -> None:
        """Roll back the current transaction and return to autocommit."""
        with self._connection_manager.lock:
            connection = self.connection
            try:
                connection.rollback()
            finally:
                self._end_transaction(connection)
    
    def _end_transaction(self, connection: Any) -> None:
        connection.autocommit = self.settings.autocommit
        self._in_transaction = False
    
    def get_connection_info(self) -> Dict[str, Any]:
        return self._connection_manager.get_connection_info()
    
    def close(self) -> None:
        """Close the connection. Safe to call any number of times."""
        self._in_transaction = False
        self._connection_manager.close()
    
    def __enter__(self) -> "SnowflakeConnector":
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def get_query_dsn(
    sql: str,
    dsn: str,
    params: Optional[Sequence[Any]] = None,
    *,
    connect: Optional[Callable[..., Any]] = None,
    **overrides: Any,
) -> pd.DataFrame:
    """Run one statement against ``dsn`` and return a lineage-tagged frame.
    
    Opens a connection, runs the statement, and always closes the connection
    again. Use :class:`SnowflakeConnector` for multi-statement sessions,
    transactions and writes.
    
    Args:
        sql: Statement text
        dsn: ODBC data source name
        params: Optional positional bind values
        connect: Driver connect callable (defaults to pyodbc)
        **overrides: Additional connection settings (``uid``, ``role``, ...)
    """
    settings = _resolve_settings(None, {**overrides, "dsn": dsn})
    with OdbcConnectionManager(settings, connect=connect) as manager:
        executor = QueryExecutor(
            manager,
            QueryHistory(),
            LineageTracker(),
            timezone=settings.timezone,
            timezone_out=settings.timezone_out,
        )
        return executor.run(sql, params)
