"""
Table enumeration and row materialization.

`materialize` runs a full-table scan and turns every row into an ordered
column-name -> value mapping ready for JSON encoding. The whole result set is
held in memory; tables dumped by this tool are expected to be small.

Usage:
    with open_connection(settings) as conn:
        names = list_tables(conn)
        records = materialize(conn, "Notes", database=settings.db_name)
"""

from __future__ import annotations

import time
from typing import Any, List

import pymysql

from tablepeek.domain.errors import QueryError
from tablepeek.domain.models import Record, describe_columns, to_column_value, to_text
from tablepeek.utils.logging import get_logger

log = get_logger(__name__)

SHOW_TABLES_SQL = "SHOW TABLES"


def quote_identifier(name: str) -> str:
    """Backtick-quote a MySQL identifier, doubling embedded backticks."""
    return "`" + name.replace("`", "``") + "`"


def select_all_sql(table: str, database: str = "") -> str:
    """
    Build the full-scan statement for `table`, qualified by `database` if given.
    """
    target = quote_identifier(table)
    if database:
        target = f"{quote_identifier(database)}.{target}"
    return f"SELECT * FROM {target}"


def list_tables(connection: Any) -> List[str]:
    """
    Return the table names of the connection's current database.

    Names come back in whatever order the server reports them.

    Raises
    ------
    QueryError
        If the metadata query fails.
    """
    try:
        with connection.cursor() as cur:
            cur.execute(SHOW_TABLES_SQL)
            tables = [to_text(row[0]) for row in cur]
    except pymysql.MySQLError as exc:
        raise QueryError(f"listing tables failed: {exc}", statement=SHOW_TABLES_SQL) from exc

    log.debug("Enumerated tables", extra={"tables": len(tables)})
    return tables


def materialize(connection: Any, table: str, database: str = "") -> List[Record]:
    """
    Fetch every row of `table` as a list of records.

    Each record maps column name to value in result-set column order. Byte
    sequences are decoded to text and other driver values are normalized by
    `to_column_value`; NULL columns are kept with a `None` value.

    Parameters
    ----------
    connection
        An open DB-API connection (PyMySQL in production).
    table : str
        Table to scan.
    database : str
        Optional schema qualifier; empty means the connection's default.

    Returns
    -------
    List[Record]
        One record per row, in cursor order. Empty for an empty table.

    Raises
    ------
    QueryError
        If the statement fails, returns no result metadata, or a row cannot
        be fetched.
    """
    sql = select_all_sql(table, database)
    start_time = time.perf_counter()
    records: List[Record] = []

    try:
        with connection.cursor() as cur:
            cur.execute(sql)
            columns = describe_columns(cur.description)
            if not columns:
                raise QueryError(f"{table}: statement returned no result columns", statement=sql)
            names = [column.name for column in columns]

            for row in cur:
                if len(row) != len(names):
                    raise QueryError(
                        f"{table}: row has {len(row)} values, expected {len(names)}",
                        statement=sql,
                    )
                records.append(
                    {name: to_column_value(value) for name, value in zip(names, row)}
                )
    except pymysql.MySQLError as exc:
        raise QueryError(f"{table}: {exc}", statement=sql) from exc

    log.info(
        f"Materialized {table}",
        extra={
            "table": table,
            "rows": len(records),
            "duration_seconds": round(time.perf_counter() - start_time, 4),
        },
    )
    return records


__all__ = ["list_tables", "materialize", "quote_identifier", "select_all_sql"]
