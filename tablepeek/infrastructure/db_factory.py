"""
Database connection factory for tablepeek.

Builds the connection target from explicit settings and opens a single
PyMySQL connection for the lifetime of a run. Connection attempts are driven
by tenacity: the default of one attempt means a failed connect aborts
immediately, while raising `DB_CONNECT_ATTEMPTS` enables exponential backoff
for transient operational errors.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

import pymysql
from pymysql.connections import Connection
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from tablepeek.config import Settings
from tablepeek.domain.errors import QueryError
from tablepeek.utils.logging import get_logger

log = get_logger(__name__)

_TRANSIENT_ERRORS = (pymysql.err.OperationalError, pymysql.err.InterfaceError)


def connection_target(settings: Settings, mask_password: bool = False) -> str:
    """
    Compose the `<user>:<password>@tcp(<host>:<port>)/<database>` target string.

    Parameters
    ----------
    settings : Settings
        Effective configuration.
    mask_password : bool
        Replace a non-empty password with `***` (for logs and `info`).
    """
    password = settings.db_password
    if mask_password and password:
        password = "***"
    return (
        f"{settings.db_user}:{password}"
        f"@tcp({settings.db_host}:{settings.db_port})/{settings.db_name}"
    )


def _connect(settings: Settings) -> Connection:
    return pymysql.connect(
        host=settings.db_host,
        port=settings.db_port,
        user=settings.db_user,
        password=settings.db_password,
        database=settings.db_name or None,
        charset="utf8mb4",
        autocommit=True,
        connect_timeout=settings.db_connect_timeout,
    )


def get_connection(settings: Settings) -> Connection:
    """
    Open a connection, retrying transient failures up to `db_connect_attempts`.

    Returns
    -------
    Connection
        A new PyMySQL connection; the caller owns it and must close it.

    Raises
    ------
    QueryError
        If the connection cannot be established.
    """
    target = connection_target(settings, mask_password=True)
    retrying = Retrying(
        stop=stop_after_attempt(settings.db_connect_attempts),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(_TRANSIENT_ERRORS),
        reraise=True,
    )
    try:
        conn = retrying(_connect, settings)
    except pymysql.MySQLError as exc:
        raise QueryError(f"cannot connect to {target}: {exc}") from exc
    log.debug("Connected", extra={"target": target})
    return conn


@contextmanager
def open_connection(settings: Settings) -> Generator[Connection, None, None]:
    """
    Context manager yielding a connection that is closed on exit.

    Example
    -------
        with open_connection(settings) as conn:
            tables = list_tables(conn)
    """
    conn = get_connection(settings)
    try:
        yield conn
    finally:
        conn.close()


__all__ = ["connection_target", "get_connection", "open_connection"]
