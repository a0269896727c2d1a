"""
Pytest configuration for tablepeek.

Provides fixtures for:
- PyMySQL-shaped fake connections/cursors for unit tests
- Database connection management for integration tests
- Demo data seeding
"""

from __future__ import annotations

import os
from typing import Any, Callable, Dict, Generator, Iterator, List, Optional, Sequence, Union

import pymysql
import pytest

from tablepeek.config import Settings


def description(*names: str) -> tuple:
    """Build a DB-API `cursor.description` for the given column names."""
    return tuple((name, 253, None, None, None, None, True) for name in names)


class FakeResult:
    """Canned result for one statement; `fail_at` raises while fetching that row."""

    def __init__(
        self,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]] = (),
        fail_at: Optional[int] = None,
    ) -> None:
        self.description = description(*columns) if columns else None
        self.rows = [tuple(row) for row in rows]
        self.fail_at = fail_at


class FakeCursor:
    def __init__(self, connection: "FakeConnection") -> None:
        self.connection = connection
        self.description: Optional[tuple] = None
        self.closed = False
        self._result: Optional[FakeResult] = None

    def execute(self, sql: str, args: Any = None) -> int:
        del args
        self.connection.statements.append(sql)
        if self.connection.closed:
            raise pymysql.err.InterfaceError(0, "connection is closed")
        outcome = self.connection.results.get(sql)
        if outcome is None:
            raise pymysql.err.ProgrammingError(1146, f"no canned result for {sql!r}")
        if isinstance(outcome, Exception):
            raise outcome
        self._result = outcome
        self.description = outcome.description
        return len(outcome.rows)

    def __iter__(self) -> Iterator[tuple]:
        assert self._result is not None
        for position, row in enumerate(self._result.rows):
            if self._result.fail_at == position:
                raise pymysql.err.OperationalError(2013, "Lost connection to MySQL server")
            yield row

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "FakeCursor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        del exc_type, exc, tb
        self.close()


class FakeConnection:
    def __init__(self, results: Optional[Dict[str, Union[FakeResult, Exception]]] = None) -> None:
        self.results: Dict[str, Union[FakeResult, Exception]] = dict(results or {})
        self.statements: List[str] = []
        self.cursors: List[FakeCursor] = []
        self.closed = False
        self.close_calls = 0

    def cursor(self) -> FakeCursor:
        cur = FakeCursor(self)
        self.cursors.append(cur)
        return cur

    def close(self) -> None:
        self.close_calls += 1
        self.closed = True


@pytest.fixture
def make_connection() -> Callable[..., FakeConnection]:
    """Factory for fake connections keyed by exact SQL text."""
    return FakeConnection


@pytest.fixture
def make_result() -> Callable[..., FakeResult]:
    return FakeResult


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "127.0.0.1"),
        db_port=int(os.getenv("DB_PORT", "3306")),
        db_user=os.getenv("DB_USER", "root"),
        db_password=os.getenv("DB_PASSWORD", ""),
        db_name=os.getenv("DB_NAME", "tablepeek_test"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def db_connection_available(test_settings: Settings) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        conn = pymysql.connect(
            host=test_settings.db_host,
            port=test_settings.db_port,
            user=test_settings.db_user,
            password=test_settings.db_password,
            database=test_settings.db_name,
            connect_timeout=5,
        )
    except pymysql.MySQLError:
        return False
    conn.close()
    return True


@pytest.fixture(scope="session")
def db_connection(
    test_settings: Settings, db_connection_available: bool
) -> Generator[Any, None, None]:
    """
    Provide a session-scoped database connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    from tablepeek.infrastructure.db_factory import get_connection

    conn = get_connection(test_settings)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def seeded_demo(db_connection: Any) -> int:
    """
    Recreate and seed the demo tables (6 languages, 12 notes).

    Returns the number of Notes rows seeded.
    """
    from scripts.seed_data import seed_demo_tables

    notes = 12
    seed_demo_tables(db_connection, notes=notes, seed=42)
    return notes
