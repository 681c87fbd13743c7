"""Logging infrastructure for snowflaker.

This module provides structured logging with JSON output and context
tracking through ``contextvars``.
"""

from snowflaker.logging.filters import ContextFilter, query_context
from snowflaker.logging.logger import (
    CustomJsonFormatter,
    get_logger,
    redact_secrets,
    setup_logging,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
    "redact_secrets",
    "query_context",
]
