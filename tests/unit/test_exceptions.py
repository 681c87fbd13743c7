"""Tests for error codes and error factories."""

import logging

from snowflaker.common.exceptions import (
    ErrorCode,
    SnowflakerError,
    configuration_error,
    connection_error,
    missing_token_error,
    not_connected_error,
    read_only_violation_error,
    statement_failed_error,
)


class TestSnowflakerError:
    """Test the base error."""
    
    def test_str_includes_code(self):
        error = SnowflakerError("boom", ErrorCode.CONFIG_ERROR)
        
        assert str(error) == "[CONFIG_001] boom"
    
    def test_str_includes_cause(self):
        error = SnowflakerError("boom", cause=ValueError("bad"))
        
        assert str(error) == "[EXECUTION_001] boom (caused by: ValueError: bad)"
    
    def test_to_dict(self):
        error = SnowflakerError("boom", ErrorCode.NOT_CONNECTED, details={"dsn": "x"})
        
        assert error.to_dict() == {
            "type": "SnowflakerError",
            "message": "boom",
            "error_code": "CONNECTION_002",
            "error_name": "NOT_CONNECTED",
            "details": {"dsn": "x"},
        }
    
    def test_logs_cause_traceback(self, caplog):
        cause = ValueError("bad")
        
        with caplog.at_level(logging.ERROR, logger="snowflaker"):
            SnowflakerError("wrapped failure", cause=cause)
        
        assert caplog.records[-1].exc_info[1] is cause
    
    def test_no_traceback_without_cause(self, caplog):
        with caplog.at_level(logging.ERROR, logger="snowflaker"):
            SnowflakerError("plain failure")
        
        assert not caplog.records[-1].exc_info
        assert "NoneType" not in caplog.text
    
    def test_logs_on_creation(self, caplog):
        with caplog.at_level(logging.ERROR, logger="snowflaker"):
            SnowflakerError("logged failure", ErrorCode.EXECUTION_ERROR)
        
        assert any(record.getMessage() == "logged failure" for record in caplog.records)
        assert caplog.records[-1].error_code == "EXECUTION_001"


class TestFactories:
    """Test error factory functions."""
    
    def test_configuration_error(self):
        error = configuration_error("missing dsn", config_key="SNOWFLAKE_DSN")
        
        assert error.error_code == ErrorCode.CONFIG_ERROR
        assert error.details == {"config_key": "SNOWFLAKE_DSN"}
    
    def test_connection_error(self):
        cause = RuntimeError("refused")
        error = connection_error("cannot connect", service="snowflake-odbc", host="bi", cause=cause)
        
        assert error.error_code == ErrorCode.CONNECTION_ERROR
        assert error.details == {"service": "snowflake-odbc", "host": "bi"}
        assert error.cause is cause
    
    def test_not_connected_error(self):
        error = not_connected_error()
        
        assert error.error_code == ErrorCode.NOT_CONNECTED
        assert "not available" in error.message
    
    def test_statement_failed_error(self):
        cause = RuntimeError("driver said no")
        error = statement_failed_error("select 1", cause)
        
        assert error.error_code == ErrorCode.STATEMENT_FAILED
        assert error.message == "driver said no"
        assert error.details["query"] == "select 1"
        assert error.cause is cause
    
    def test_statement_failed_error_truncates_query(self):
        error = statement_failed_error("x" * 600, RuntimeError("no"), message="custom")
        
        assert error.message == "custom"
        assert error.details["query"] == "x" * 500 + "..."
    
    def test_missing_token_error(self):
        error = missing_token_error()
        
        assert error.error_code == ErrorCode.MISSING_TOKEN
        assert "set_token()" in error.message
    
    def test_read_only_violation_error(self):
        error = read_only_violation_error("connection")
        
        assert error.error_code == ErrorCode.READ_ONLY_VIOLATION
        assert error.message == "`connection` is read-only"
        assert error.details == {"attribute": "connection"}
