"""
tablepeek - dump MySQL tables as JSON and browse them from the terminal.

This package provides:

- Table enumeration via `SHOW TABLES`
- Full-table row materialization into ordered, JSON-ready records
- Compact JSON serialization of the materialized rows
- An interactive terminal list for picking a table

Every database failure surfaces as a single `QueryError`.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from tablepeek.config import Settings, get_settings
from tablepeek.domain import ColumnDescriptor, ColumnValue, QueryError, Record, to_column_value
from tablepeek.infrastructure import connection_target, get_connection, open_connection
from tablepeek.materializer import list_tables, materialize
from tablepeek.picker import TablePicker, run_picker
from tablepeek.serialization import serialize
from tablepeek.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "ColumnDescriptor",
    "ColumnValue",
    "QueryError",
    "Record",
    "to_column_value",
    # Database access
    "connection_target",
    "get_connection",
    "open_connection",
    "list_tables",
    "materialize",
    "serialize",
    # Presentation
    "TablePicker",
    "run_picker",
    # Logging
    "configure_logging",
    "get_logger",
]
