"""
Domain models for tablepeek.

A materialized row is a plain ordered mapping from column name to a JSON-ready
scalar (`ColumnValue`). `to_column_value` is the single construction rule that
turns whatever the driver hands back into one of those scalars; most notably,
raw byte sequences (BLOB/BINARY/BIT columns) become text.
"""
from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, Field

ColumnValue = Union[None, bool, int, float, str]
Record = Dict[str, ColumnValue]


class ColumnDescriptor(BaseModel):
    """
    Name and position of one result column, shared by every row of a query.
    """

    name: str = Field(..., description="Column label as reported by the driver.")
    position: int = Field(..., ge=0, description="Zero-based position in the row.")

    model_config = {
        "frozen": True,
    }


def describe_columns(description: Optional[Sequence[Sequence[Any]]]) -> List[ColumnDescriptor]:
    """
    Build column descriptors from a DB-API `cursor.description`.

    Returns an empty list when the statement produced no result set.
    """
    if not description:
        return []
    return [
        ColumnDescriptor(name=to_text(column[0]), position=position)
        for position, column in enumerate(description)
    ]


def to_text(value: Union[bytes, bytearray, memoryview, str]) -> str:
    """Decode a raw byte sequence as UTF-8 text; strings are returned as-is."""
    if isinstance(value, str):
        return value
    return bytes(value).decode("utf-8", errors="replace")


def _format_time_of_day(hours: int, minutes: int, seconds: int, microseconds: int) -> str:
    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if microseconds:
        text += f".{microseconds:06d}"
    return text


def _format_duration(value: dt.timedelta) -> str:
    # MySQL TIME spans -838:59:59..838:59:59, so hours are not wrapped at 24.
    total_us = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    sign = "-" if total_us < 0 else ""
    total_us = abs(total_us)
    total_seconds, microseconds = divmod(total_us, 1_000_000)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return sign + _format_time_of_day(hours, minutes, seconds, microseconds)


def to_column_value(value: Any) -> ColumnValue:
    """
    Convert a driver value into a JSON-compatible column value.

    Byte sequences are decoded to text. JSON scalars (None, bool, int, float,
    str) pass through untouched. Decimals and temporal types are rendered in
    the textual form the server itself uses, so no precision is lost.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return to_text(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dt.datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, dt.time):
        return _format_time_of_day(value.hour, value.minute, value.second, value.microsecond)
    if isinstance(value, dt.timedelta):
        return _format_duration(value)
    if isinstance(value, (set, frozenset)):
        return ",".join(sorted(to_text(member) for member in value))
    return str(value)


__all__ = [
    "ColumnDescriptor",
    "ColumnValue",
    "Record",
    "describe_columns",
    "to_column_value",
    "to_text",
]
