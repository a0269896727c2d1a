"""
JSON encoding of materialized records.

Output is compact (no whitespace between tokens), UTF-8, and keeps each
record's key order so dumps are reproducible for a given row order.
"""

from __future__ import annotations

import json
from typing import Iterable

from tablepeek.domain.errors import QueryError
from tablepeek.domain.models import Record


def serialize(records: Iterable[Record]) -> bytes:
    """
    Encode records as a JSON array of objects.

    Raises
    ------
    QueryError
        If a value has no JSON representation (e.g. NaN or an unconverted type).
    """
    try:
        text = json.dumps(
            list(records),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise QueryError(f"cannot encode records as JSON: {exc}") from exc
    return text.encode("utf-8")


__all__ = ["serialize"]
