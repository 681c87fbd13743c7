"""Structured logging for snowflaker.

Records are rendered as one JSON object per line, carrying the ``extra=``
payload of the call site, the active OpenTelemetry trace/span ids and the
request context from :mod:`snowflaker.logging.filters`. ODBC passwords and
bearer tokens are masked before anything is written.
"""

from __future__ import annotations

import json
import logging
import logging.config
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from opentelemetry import trace


def _build_reserved_keys() -> Set[str]:
    """Collect standard ``LogRecord`` attributes to avoid duplicating them."""
    probe = logging.LogRecord(
        name="snowflaker.probe",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg="",
        args=(),
        exc_info=None,
    )
    reserved = set(probe.__dict__.keys())
    reserved.update({"asctime", "message"})
    return reserved


_RESERVED_LOG_RECORD_KEYS = _build_reserved_keys()


# ODBC connection string passwords (plain or brace-quoted) and HTTP bearer tokens
_SECRET_PATTERNS = (
    re.compile(r"(?i)(\bPWD=)(\{(?:[^}]|\}\})*\}|[^;]*)"),
    re.compile(r"(?i)(\bBearer\s+)([^\s\"',;]+)"),
)


def redact_secrets(text: str) -> str:
    """Mask passwords and bearer tokens embedded in ``text``."""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(lambda match: f"{match.group(1)}***", text)
    return text


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class CustomJsonFormatter(logging.Formatter):
    """JSON formatter that enriches log entries with context and trace data.

    String values are passed through :func:`redact_secrets`, so a failing
    connect that echoes its connection string does not leak the password.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_record: Dict[str, Any] = {}

        for key, value in record.__dict__.items():
            if key not in _RESERVED_LOG_RECORD_KEYS:
                log_record[key] = redact_secrets(value) if isinstance(value, str) else value

        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["message"] = redact_secrets(record.getMessage())

        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            log_record["trace_id"] = format(span_context.trace_id, "032x")
            log_record["span_id"] = format(span_context.span_id, "016x")

        if record.exc_info:
            log_record["exception"] = redact_secrets(self.formatException(record.exc_info))

        return json.dumps(log_record, default=str)


def setup_logging(level: Optional[str] = None) -> None:
    """Configure structured logging backed by ``logging.config.dictConfig``.

    Args:
        level: Base log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to ``SNOWFLAKER_LOG_LEVEL`` via the logging settings.
    """
    if level is None:
        from snowflaker.settings import get_settings
        level = get_settings().logging.level

    config_dict: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "snowflaker_json": {
                "()": "snowflaker.logging.logger.CustomJsonFormatter",
            }
        },
        "filters": {
            "snowflaker_context": {
                "()": "snowflaker.logging.filters.ContextFilter",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level.upper(),
                "formatter": "snowflaker_json",
                "filters": ["snowflaker_context"],
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": {
            "snowflaker": {
                "level": level.upper(),
                "handlers": ["console"],
                "propagate": False,
            }
        },
    }

    logging.config.dictConfig(config_dict)
