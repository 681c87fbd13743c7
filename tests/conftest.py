"""Shared fixtures: in-memory stand-ins for the ODBC driver."""

from typing import Any, List, Optional, Sequence

import pytest


class FakeDriverError(Exception):
    """Mimics ``pyodbc.Error``: ``args`` is ``(sqlstate, message)``."""

    def __init__(self, message: str, sqlstate: str = "42000"):
        super().__init__(sqlstate, message)


class FakeCursor:
    def __init__(
        self,
        columns: Optional[Sequence[str]] = None,
        rows: Optional[List[tuple]] = None,
        error: Optional[Exception] = None,
    ):
        self.description = None if columns is None else [(name, None) for name in columns]
        self._rows = rows or []
        self._error = error
        self.executed: List[tuple] = []
        self.executed_many: List[tuple] = []
        self.closed = False

    def execute(self, sql: str, *params: Any) -> "FakeCursor":
        self.executed.append((sql, *params))
        if self._error is not None:
            raise self._error
        return self

    def executemany(self, sql: str, rows: Sequence[tuple]) -> None:
        self.executed_many.append((sql, list(rows)))
        if self._error is not None:
            raise self._error

    def fetchall(self) -> List[tuple]:
        return list(self._rows)

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    def __init__(self, cursors: Optional[List[FakeCursor]] = None):
        self._cursors = list(cursors or [])
        self.issued: List[FakeCursor] = []
        self.closed = False
        self.autocommit = True
        self.commits = 0
        self.rollbacks = 0
        self.close_error: Optional[Exception] = None

    def queue(self, cursor: FakeCursor) -> FakeCursor:
        self._cursors.append(cursor)
        return cursor

    def cursor(self) -> FakeCursor:
        cursor = self._cursors.pop(0) if self._cursors else FakeCursor()
        self.issued.append(cursor)
        return cursor

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    def close(self) -> None:
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


class FakeConnect:
    """Callable replacing ``pyodbc.connect``; records its arguments."""

    def __init__(self, connection: Optional[FakeConnection] = None):
        self.connection = connection or FakeConnection()
        self.calls: List[tuple] = []

    def __call__(self, connection_string: str, **kwargs: Any) -> FakeConnection:
        self.calls.append((connection_string, kwargs))
        return self.connection


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Keep developer SNOWFLAKE_* variables and .env files out of the tests."""
    import os

    for name in list(os.environ):
        if name.upper().startswith(("SNOWFLAKE_", "SNOWFLAKER_")):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def fake_connect(fake_connection) -> FakeConnect:
    return FakeConnect(fake_connection)


@pytest.fixture
def cursor_factory():
    return FakeCursor


@pytest.fixture
def driver_error():
    return FakeDriverError
