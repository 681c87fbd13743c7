"""Common exceptions for snowflaker.

The exception system uses error codes for categorization rather than
numerous specific exception classes. All errors are ``SnowflakerError``
instances carrying an ``ErrorCode`` and structured details.
"""

from snowflaker.common.exceptions import (
    SnowflakerError,
    ErrorCode,
    # Helper functions
    configuration_error,
    connection_error,
    not_connected_error,
    statement_failed_error,
    missing_token_error,
    read_only_violation_error,
)

__all__ = [
    # Base Exception and Error Codes
    "SnowflakerError",
    "ErrorCode",
    # Helper functions
    "configuration_error",
    "connection_error",
    "not_connected_error",
    "statement_failed_error",
    "missing_token_error",
    "read_only_violation_error",
]
