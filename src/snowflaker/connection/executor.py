"""Statement execution with history and lineage."""

import time
from typing import Any, Dict, Optional, Sequence

import pandas as pd
from pandas.api.types import is_datetime64_any_dtype

from snowflaker.common.exceptions import statement_failed_error
from snowflaker.connection.history import QueryHistory
from snowflaker.connection.manager import OdbcConnectionManager
from snowflaker.lineage.tracker import LineageTracker
from snowflaker.logging import get_logger, query_context
from snowflaker.utils.decorators import traced

logger = get_logger(__name__)


def driver_error_message(exc: Exception) -> str:
    """Return the human-readable part of a driver error.
    
    pyodbc errors carry ``(sqlstate, message)`` in ``args``; anything else
    falls back to ``str(exc)``.
    """
    args = getattr(exc, "args", ())
    if len(args) == 2 and all(isinstance(arg, str) for arg in args):
        return args[1]
    return str(exc)


def fetch_frame(cursor: Any) -> pd.DataFrame:
    """Drain ``cursor`` into a DataFrame.
    
    Statements without a result set (DDL, DML, ``USE ...``) yield an empty
    frame.
    """
    if cursor.description is None:
        return pd.DataFrame()
    columns = [column[0] for column in cursor.description]
    rows = [tuple(row) for row in cursor.fetchall()]
    return pd.DataFrame.from_records(rows, columns=columns)


class QueryExecutor:
    """Execute statements on a managed connection.
    
    Every statement that reaches the driver leaves exactly one history
    record: ``failed`` with the driver message before the error is raised, or
    ``passed`` before lineage is attached and the frame returned.
    """
    
    def __init__(
        self,
        connection_manager: OdbcConnectionManager,
        history: QueryHistory,
        lineage_tracker: LineageTracker,
        *,
        timezone: Optional[str] = None,
        timezone_out: Optional[str] = None,
    ):
        self._connection_manager = connection_manager
        self._history = history
        self._lineage_tracker = lineage_tracker
        self.timezone = timezone
        self.timezone_out = timezone_out
    
    def _span_attributes(self, sql: str, params: Optional[Sequence[Any]] = None) -> Dict[str, Any]:
        statement = (sql or "").strip()
        if len(statement) > 4096:
            statement = f"{statement[:4093]}..."
        return {
            "db.system": "snowflake",
            "db.operation": "run_query",
            "db.statement": statement,
            "db.statement.length": len(statement),
            "db.statement.parameters": 0 if params is None else len(params),
        }
    
    @traced(
        span_name="snowflaker.query.run",
        attribute_getter=lambda self, sql, params=None: self._span_attributes(sql, params),
    )
    def run(self, sql: str, params: Optional[Sequence[Any]] = None) -> pd.DataFrame:
        """Execute ``sql`` and return its result with lineage attached.
        
        Args:
            sql: Statement text; ``?`` placeholders are bound from ``params``
            params: Optional positional bind values
            
        Returns:
            Result frame with ``attrs["snowflake-sources"]`` set
            
        Raises:
            SnowflakerError: NOT_CONNECTED without a live connection (nothing
                is recorded), STATEMENT_FAILED when the driver rejects the
                statement
        """
        with query_context():
            return self._run(sql, params)
    
    def _run(self, sql: str, params: Optional[Sequence[Any]]) -> pd.DataFrame:
        start_time = time.time()
        payload: Dict[str, str] = {"db.platform": "snowflake"}
        
        with self._connection_manager.lock:
            connection = self._connection_manager.get_connection()
            try:
                cursor = connection.cursor()
                try:
                    if params is None:
                        cursor.execute(sql)
                    else:
                        cursor.execute(sql, params)
                    frame = fetch_frame(cursor)
                finally:
                    cursor.close()
            except Exception as exc:
                message = driver_error_message(exc)
                self._history.log_failure(sql, message)
                duration = time.time() - start_time
                # The error logs itself on construction
                raise statement_failed_error(
                    sql,
                    exc,
                    message=message,
                    details={**payload, "duration.seconds": f"{duration:.6f}"},
                ) from exc
        
        self._history.log_success(sql)
        duration = time.time() - start_time
        logger.info(
            "SQL query executed",
            extra={**payload, "duration.seconds": f"{duration:.6f}", "rows": str(len(frame))},
        )
        
        frame = self._convert_timezones(frame)
        return self._lineage_tracker.add_lineage(frame, sql)
    
    def _convert_timezones(self, frame: pd.DataFrame) -> pd.DataFrame:
        """Express datetime columns in ``timezone_out``.
        
        Naive timestamps are read as server session time (``timezone``) and
        left untouched when no session time zone is configured. Wall-clock times
        that are ambiguous or skipped at a DST transition become ``NaT``.
        """
        if not self.timezone_out:
            return frame
        for position in range(frame.shape[1]):
            series = frame.iloc[:, position]
            if not is_datetime64_any_dtype(series):
                continue
            if series.dt.tz is None:
                if not self.timezone:
                    continue
                # Ambiguous or skipped wall-clock times (DST transitions) become NaT
                series = series.dt.tz_localize(
                    self.timezone, ambiguous="NaT", nonexistent="NaT"
                )
            frame.isetitem(position, series.dt.tz_convert(self.timezone_out))
        return frame
