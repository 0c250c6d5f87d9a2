# src/dbviewer/database/values.py
"""Normalization of driver values into the four cell kinds.

Cells handed to the tabular engine are null, boolean, number or string.
Drivers return richer types (Decimal, datetime, bytes, JSON documents),
which are mapped here once, at the adapter boundary.
"""

import datetime
import json
import uuid
from decimal import Decimal
from typing import Any, Iterable, Tuple, Union

CellValue = Union[None, bool, int, float, str]


def normalize_value(value: Any) -> CellValue:
    """Map a driver value onto null, boolean, number or string."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Decimal):
        if not value.is_finite():
            return str(value)
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, datetime.datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, datetime.timedelta):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


def normalize_row(row: Iterable[Any]) -> Tuple[CellValue, ...]:
    return tuple(normalize_value(value) for value in row)
