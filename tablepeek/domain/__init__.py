"""
Domain package for tablepeek.

Exports the record/column types, the value conversion rule and the error type
shared by the materializer, serializer and CLI.
"""

from tablepeek.domain.errors import QueryError
from tablepeek.domain.models import (
    ColumnDescriptor,
    ColumnValue,
    Record,
    describe_columns,
    to_column_value,
    to_text,
)

__all__ = [
    "ColumnDescriptor",
    "ColumnValue",
    "QueryError",
    "Record",
    "describe_columns",
    "to_column_value",
    "to_text",
]
