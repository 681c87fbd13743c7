"""Snowflake SQL REST API client.

An alternative to ODBC connectivity built on the Snowflake SQL API
(``/api/v2/statements``). The client submits statements and returns the
parsed response; credential issuance (OAuth, key pair, external browser) is
left to the caller, who hands the resulting bearer token to ``set_token()``.
Tokens live only in memory.

Example:
    >>> client = SnowflakeSQLAPIClient("xy12345", warehouse="BI_WH", role="ANALYST")
    >>> client.set_token(oauth_token)
    >>> body = client.submit_statement(
    ...     "select * from orders where id = ?",
    ...     parameters={"1": {"type": "FIXED", "value": "42"}},
    ... )
"""

import time
from typing import Any, Dict, List, Mapping, Optional

import requests

from snowflaker.common.exceptions import (
    connection_error,
    missing_token_error,
    statement_failed_error,
)
from snowflaker.logging import get_logger
from snowflaker.settings import SQLAPISettings
from snowflaker.utils.decorators import traced

logger = get_logger(__name__)

STATEMENTS_PATH = "/api/v2/statements"


class SnowflakeSQLAPIClient:
    """Submit statements to the Snowflake SQL API.
    
    Attributes:
        account: Snowflake account identifier (e.g. ``xy12345``)
        region: Optional region used to build the host name
        warehouse, database, schema, role: Session defaults merged into every
            request body
        timeout: Default statement timeout in seconds
    """
    
    def __init__(
        self,
        account: str,
        token: Optional[str] = None,
        warehouse: Optional[str] = None,
        database: Optional[str] = None,
        schema: Optional[str] = None,
        role: Optional[str] = None,
        region: Optional[str] = None,
        *,
        timeout: float = 60,
        session: Optional[requests.Session] = None,
    ):
        """Create a client.
        
        Args:
            account: Snowflake account identifier
            token: Optional bearer token; can be supplied later with ``set_token()``
            warehouse: Default warehouse
            database: Default database
            schema: Default schema
            role: Default role
            region: Optional region, giving ``{account}.{region}.snowflakecomputing.com``
            timeout: Default statement timeout in seconds, used when a call passes none
            session: HTTP session to send requests with (a new one by default)
        """
        if not account:
            raise ValueError("account is required")
        self.account = account
        self.token = token
        self.warehouse = warehouse
        self.database = database
        self.schema = schema
        self.role = role
        self.region = region
        self.timeout = timeout
        self._session = session or requests.Session()
    
    @classmethod
    def from_settings(
        cls,
        settings: SQLAPISettings,
        token: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> "SnowflakeSQLAPIClient":
        return cls(
            account=settings.account,
            token=token,
            warehouse=settings.warehouse,
            database=settings.database,
            schema=settings.schema_name,
            role=settings.role,
            region=settings.region,
            timeout=settings.timeout_seconds,
            session=session,
        )
    
    def set_token(self, token: str) -> "SnowflakeSQLAPIClient":
        """Set or refresh the OAuth/session token."""
        self.token = token
        return self
    
    def endpoint(self, path: str) -> str:
        """Return the fully-qualified URL for an API path such as ``/api/v2/statements``."""
        if self.region is None:
            host = f"https://{self.account}.snowflakecomputing.com"
        else:
            host = f"https://{self.account}.{self.region}.snowflakecomputing.com"
        return f"{host}{path}"
    
    def build_request_body(
        self,
        sql: str,
        parameters: Optional[Mapping[str, Any]] = None,
        async_: bool = False,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Build the JSON body for a statement submission.
        
        Session defaults that are ``None`` are left out. Each parameter that is
        a mapping with both ``type`` and ``value`` keys is sent with its type;
        any other value is sent as ``value`` only and typed by the service.
        
        Args:
            sql: Statement text
            parameters: Optional named bind parameters
            async_: Return immediately instead of waiting for completion
            timeout: Statement timeout in seconds; the client default when ``None``
        """
        if timeout is None:
            timeout = self.timeout
        body: Dict[str, Any] = {
            "statement": sql,
            "resultSetMetaData": {"format": "json"},
            "warehouse": self.warehouse,
            "database": self.database,
            "schema": self.schema,
            "role": self.role,
            "timeout": int(timeout * 1000),
            "asynchronous": bool(async_),
        }
        body = {key: value for key, value in body.items() if value is not None}
        
        if parameters is not None:
            if not isinstance(parameters, Mapping):
                raise TypeError("parameters must be a mapping of name to value")
            binds: List[Dict[str, Any]] = []
            for name, value in parameters.items():
                if isinstance(value, Mapping) and "type" in value and "value" in value:
                    binds.append({"name": name, "type": value["type"], "value": value["value"]})
                else:
                    binds.append({"name": name, "value": value})
            body["binds"] = binds
        
        return body
    
    def _span_attributes(self, sql: str, parameters=None, async_=False, timeout=None) -> Dict[str, Any]:
        return {
            "db.system": "snowflake",
            "db.operation": "submit_statement",
            "db.statement.length": len(sql or ""),
            "http.url": self.endpoint(STATEMENTS_PATH),
            "snowflaker.sql_api.asynchronous": bool(async_),
        }
    
    @traced(
        span_name="snowflaker.sql_api.submit_statement",
        attribute_getter=lambda self, sql, parameters=None, async_=False, timeout=None: self._span_attributes(
            sql, parameters, async_, timeout
        ),
    )
    def submit_statement(
        self,
        sql: str,
        parameters: Optional[Mapping[str, Any]] = None,
        async_: bool = False,
        timeout: Optional[float] = None,
    ) -> Any:
        """Execute a statement through the SQL API.
        
        Args:
            sql: Statement text
            parameters: Optional named bind parameters (see ``build_request_body``)
            async_: If True, return the submission response without waiting
            timeout: Request and statement timeout in seconds; the client
                default when ``None``
            
        Returns:
            The parsed JSON response body
            
        Raises:
            SnowflakerError: MISSING_TOKEN before any request when no token is
                set, STATEMENT_FAILED when the service rejects the statement,
                CONNECTION_ERROR when the request cannot be completed
        """
        if not self.token:
            raise missing_token_error(details={"account": self.account})
        
        if timeout is None:
            timeout = self.timeout
        url = self.endpoint(STATEMENTS_PATH)
        body = self.build_request_body(sql, parameters, async_, timeout)
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        
        start_time = time.time()
        try:
            response = self._session.post(url, json=body, headers=headers, timeout=timeout)
        except requests.RequestException as exc:
            raise connection_error(
                f"Snowflake SQL API request failed: {exc}",
                service="snowflake-sql-api",
                host=url,
                cause=exc,
            ) from exc
        
        if response.status_code >= 400:
            message = _error_message(response)
            raise statement_failed_error(
                sql,
                requests.HTTPError(message, response=response),
                message=message,
                details={"status_code": response.status_code},
            )
        
        logger.info(
            "SQL API statement submitted",
            extra={
                "db.platform": "snowflake",
                "http.status_code": str(response.status_code),
                "asynchronous": str(bool(async_)),
                "duration.seconds": f"{time.time() - start_time:.6f}",
            },
        )
        return response.json()


def _error_message(response: requests.Response) -> str:
    """Extract the service's error message from a failed response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, Mapping) and payload.get("message"):
        return str(payload["message"])
    return f"HTTP {response.status_code}: {response.text or response.reason}"
