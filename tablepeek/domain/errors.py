"""
Error types for tablepeek.

Every database-facing failure (connecting, executing a statement, reading
result metadata, fetching rows, encoding the result) is reported as a single
`QueryError`. Callers are not expected to recover: the CLI logs the first one
and exits.
"""

from __future__ import annotations

from typing import Optional


class QueryError(Exception):
    """
    A database operation failed.

    Parameters
    ----------
    message : str
        Human-readable description, usually including the driver's message.
    statement : str, optional
        The SQL statement that was being executed, when there is one.
    """

    def __init__(self, message: str, statement: Optional[str] = None) -> None:
        super().__init__(message)
        self.statement = statement


__all__ = ["QueryError"]
