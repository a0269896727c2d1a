"""
Infrastructure package for tablepeek.

Centralizes database connectivity (target string, connect with retry policy,
scoped connection lifetime). Keep this layer focused on I/O and resource
management, decoupled from row materialization and presentation.
"""

from tablepeek.infrastructure.db_factory import (
    connection_target,
    get_connection,
    open_connection,
)

__all__ = [
    "connection_target",
    "get_connection",
    "open_connection",
]
