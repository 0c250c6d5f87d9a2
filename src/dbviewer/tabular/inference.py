"""Column type inference for result sets."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Sequence

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}(\s\d{2}:\d{2}:\d{2})?", re.ASCII)


class ColumnType(str, Enum):
    """Display type of a column."""
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    DATE = "date"
    STRING = "string"


@dataclass(frozen=True)
class ColumnMetadata:
    name: str
    type: ColumnType
    nullable: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type.value, "nullable": self.nullable}


def classify_value(value: Any) -> ColumnType:
    """Classify one cell value.

    Strings shaped like ``YYYY-MM-DD`` or ``YYYY-MM-DD HH:MM:SS`` are dates;
    no calendar validation is done.
    """
    if value is None:
        return ColumnType.NULL
    # bool is an int subclass
    if isinstance(value, bool):
        return ColumnType.BOOLEAN
    if isinstance(value, (int, float)):
        return ColumnType.NUMBER
    if isinstance(value, str) and DATE_PATTERN.fullmatch(value):
        return ColumnType.DATE
    return ColumnType.STRING


def infer_column_types(columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> List[ColumnMetadata]:
    """Infer the display type of every column.

    A column takes the type of its first non-null value in row order, not
    the most common one. It is nullable if any value is null; a column with
    only nulls, or no rows, has type ``null``.

    Args:
        columns: Column names
        rows: Row values, positionally aligned with ``columns``

    Returns:
        One ``ColumnMetadata`` per column, in column order
    """
    metadata: List[ColumnMetadata] = []
    for index, name in enumerate(columns):
        column_type = ColumnType.NULL
        nullable = False
        for row in rows:
            value_type = classify_value(row[index] if index < len(row) else None)
            if value_type is ColumnType.NULL:
                nullable = True
            elif column_type is ColumnType.NULL:
                column_type = value_type
        metadata.append(ColumnMetadata(name=name, type=column_type, nullable=nullable))
    return metadata
