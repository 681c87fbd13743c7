from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for snowflaker operations.
    
    Errors are categorised by code rather than by a deep hierarchy of
    exception classes. Each category has a specific number range for easy
    identification.
    
    Attributes:
        CONFIG_*: Configuration-related errors (1xxx)
        CONNECTION_*: Connection lifecycle and transport errors (3xxx)
        EXECUTION_*: Statement execution errors (4xxx)
        ACCESS_*: Access rule violations (5xxx)
    """
    # Configuration errors (1xxx)
    CONFIG_ERROR = "CONFIG_001"
    
    # Connection errors (3xxx)
    CONNECTION_ERROR = "CONNECTION_001"
    NOT_CONNECTED = "CONNECTION_002"
    MISSING_TOKEN = "CONNECTION_003"
    
    # Execution errors (4xxx)
    EXECUTION_ERROR = "EXECUTION_001"
    STATEMENT_FAILED = "EXECUTION_002"
    
    # Access errors (5xxx)
    READ_ONLY_VIOLATION = "ACCESS_001"


class SnowflakerError(Exception):
    """Base exception for all snowflaker errors.
    
    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
    """
    
    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.EXECUTION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause
        
        # Lazy import to avoid circular dependency
        from snowflaker.logging import get_logger
        get_logger(__name__).error(
            message,
            extra={
                "error_code": error_code.value,
                "details": self.details,
            },
            exc_info=cause,
        )
        
    def __str__(self) -> str:
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
        }


def _truncate(query: str) -> str:
    # First 500 chars carry the statement head (SELECT, CALL, ...)
    return query[:500] + "..." if len(query) > 500 else query


def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> SnowflakerError:
    """Create a configuration error.
    
    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details
        
    Returns:
        SnowflakerError with CONFIG_ERROR code
    """
    details = kwargs.get('details', {})
    if config_key:
        details["config_key"] = config_key
    
    return SnowflakerError(
        message=message,
        error_code=ErrorCode.CONFIG_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def connection_error(
    message: str,
    service: Optional[str] = None,
    host: Optional[str] = None,
    **kwargs
) -> SnowflakerError:
    """Create a connection error.
    
    Args:
        message: Error message
        service: Service that failed to connect
        host: Host/endpoint that failed
        **kwargs: Additional error details
        
    Returns:
        SnowflakerError with CONNECTION_ERROR code
    """
    details = kwargs.get('details', {})
    if service:
        details["service"] = service
    if host:
        details["host"] = host
    
    return SnowflakerError(
        message=message,
        error_code=ErrorCode.CONNECTION_ERROR,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def not_connected_error(
    message: str = "Snowflake ODBC connection is not available",
    **kwargs
) -> SnowflakerError:
    """Create an error for operations attempted without a live connection."""
    return SnowflakerError(
        message=message,
        error_code=ErrorCode.NOT_CONNECTED,
        **kwargs
    )


def statement_failed_error(
    query: str,
    original_error: Exception,
    message: Optional[str] = None,
    **kwargs
) -> SnowflakerError:
    """Create an error for a statement rejected by the driver or remote service.
    
    Args:
        query: SQL statement that failed
        original_error: The underlying exception
        message: Message to surface; defaults to ``str(original_error)`` and
            should match the message recorded in the query history
        **kwargs: Additional error details
        
    Returns:
        SnowflakerError with STATEMENT_FAILED code
    """
    details = kwargs.get('details', {})
    details["query"] = _truncate(query)
    
    return SnowflakerError(
        message=message if message is not None else str(original_error),
        error_code=ErrorCode.STATEMENT_FAILED,
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'cause']}
    )


def missing_token_error(**kwargs) -> SnowflakerError:
    """Create an error for SQL API calls made before a token was set."""
    return SnowflakerError(
        message="Set a Snowflake SQL API token with `set_token()` before making requests",
        error_code=ErrorCode.MISSING_TOKEN,
        **kwargs
    )


def read_only_violation_error(
    attribute: str,
    **kwargs
) -> SnowflakerError:
    """Create an error for an attempt to replace a read-only attribute.
    
    Args:
        attribute: Name of the attribute that was assigned
        **kwargs: Additional error details
        
    Returns:
        SnowflakerError with READ_ONLY_VIOLATION code
    """
    details = kwargs.get('details', {})
    details["attribute"] = attribute
    
    return SnowflakerError(
        message=f"`{attribute}` is read-only",
        error_code=ErrorCode.READ_ONLY_VIOLATION,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )
