"""ODBC connection lifecycle management.

A manager owns exactly one driver connection. It is opened on construction
and released by ``close()`` or by leaving a ``with`` block. Release does not
depend on garbage collection: a manager that is never closed keeps its
driver connection until the process exits.
"""

import threading
from typing import Any, Callable, Dict, Optional

from snowflaker.common.exceptions import connection_error, not_connected_error
from snowflaker.logging import get_logger
from snowflaker.settings import SnowflakeSettings

logger = get_logger(__name__)


def odbc_connect(connection_string: str, **kwargs: Any) -> Any:
    """Open a connection through the pyodbc driver manager."""
    # pyodbc needs the unixODBC shared library at import time
    import pyodbc

    # One handle per manager; the driver manager must not hand out pooled ones
    pyodbc.pooling = False
    return pyodbc.connect(connection_string, **kwargs)


class OdbcConnectionManager:
    """Manage the lifecycle of a single Snowflake ODBC connection.
    
    Access to the handle is serialized with a re-entrant lock so a manager
    can be shared between threads; statements on one connection still run
    one at a time.
    
    Example:
        >>> with OdbcConnectionManager(SnowflakeSettings(dsn="snowflake-bi")) as manager:
        ...     cursor = manager.get_connection().cursor()
    """
    
    def __init__(
        self,
        settings: SnowflakeSettings,
        *,
        connect: Optional[Callable[..., Any]] = None,
    ):
        """Open a connection for ``settings``.
        
        Args:
            settings: Connection parameters
            connect: Driver connect callable, ``odbc_connect`` by default
        """
        self.settings = settings
        self._connect = connect or odbc_connect
        self._connection: Optional[Any] = None
        self.lock = threading.RLock()
        self.open()
    
    def open(self) -> Any:
        """Open the driver connection unless a valid one is already held.
        
        Returns:
            The live driver connection
            
        Raises:
            SnowflakerError: CONNECTION_ERROR if the driver refuses to connect
        """
        with self.lock:
            if self.is_valid():
                return self._connection
            
            try:
                self._connection = self._connect(
                    self.settings.odbc_connection_string(),
                    **self.settings.connection_args(),
                )
            except Exception as exc:
                raise connection_error(
                    f"Failed to connect to Snowflake DSN '{self.settings.dsn}'",
                    service="snowflake-odbc",
                    host=self.settings.dsn,
                    cause=exc,
                ) from exc
            
            logger.info(
                "Snowflake ODBC connection opened",
                extra={"db.platform": "snowflake", **self._log_details()},
            )
            return self._connection
    
    def get_connection(self) -> Any:
        """Return the live connection.
        
        Raises:
            SnowflakerError: NOT_CONNECTED if the connection was closed or is
                no longer usable. The manager never reconnects on its own.
        """
        with self.lock:
            if not self.is_valid():
                raise not_connected_error(details={"dsn": self.settings.dsn})
            return self._connection
    
    def is_valid(self) -> bool:
        """Check whether a usable connection is held."""
        connection = self._connection
        if connection is None:
            return False
        try:
            return not bool(getattr(connection, "closed", False))
        except Exception:
            return False
    
    def close(self) -> None:
        """Close the connection. Safe to call any number of times."""
        with self.lock:
            connection, self._connection = self._connection, None
            if connection is None:
                return
            try:
                connection.close()
            except Exception as exc:
                # Secondary errors while releasing are not actionable
                logger.debug(
                    "Ignoring error while closing Snowflake ODBC connection",
                    extra={"error": str(exc)},
                )
            logger.info("Snowflake ODBC connection closed", extra=self._log_details())
    
    def get_connection_info(self) -> Dict[str, Any]:
        """Connection details for debugging/logging (no credentials)."""
        return {**self.settings.safe_repr(), "connected": self.is_valid()}
    
    def _log_details(self) -> Dict[str, str]:
        return {
            f"db.{key}": str(value)
            for key, value in self.settings.safe_repr().items()
            if value is not None
        }
    
    def __enter__(self) -> "OdbcConnectionManager":
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
