# src/dbviewer/database/models.py
"""Result models shared by all database adapters."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from dbviewer.database.values import CellValue, normalize_row

Row = Tuple[CellValue, ...]


@dataclass
class QueryResult:
    """Normalized query result across all backends.

    Column names are not required to be unique. Column order and row order
    are exactly as the backend returned them.
    """
    columns: List[str]
    rows: List[Row]
    row_count: int = 0

    @classmethod
    def empty(cls) -> "QueryResult":
        return cls(columns=[], rows=[], row_count=0)

    def to_dict(self) -> Dict[str, Any]:
        """Payload shape returned by the query endpoint."""
        return {
            "columns": list(self.columns),
            "values": [list(row) for row in self.rows],
            "rowCount": self.row_count,
        }


@dataclass
class TableInfo:
    """Database table information.

    ``row_count`` is best effort and may be a statistics estimate.
    """
    name: str
    columns: List[str] = field(default_factory=list)
    row_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "columns": list(self.columns), "rowCount": self.row_count}


@dataclass
class SmartQueryResult:
    """Outcome of an identifier-corrected query."""
    original_query: str
    fixed_query: str
    result: QueryResult

    @property
    def was_rewritten(self) -> bool:
        return self.original_query != self.fixed_query

    def to_dict(self) -> Dict[str, Any]:
        payload = self.result.to_dict()
        payload["originalQuery"] = self.original_query
        payload["fixedQuery"] = self.fixed_query
        return payload


@dataclass(frozen=True)
class RowSet:
    """A statement that produced a result set."""
    columns: Tuple[str, ...]
    values: Tuple[Row, ...]


@dataclass(frozen=True)
class MutationSummary:
    """A statement that changed rows without producing a result set."""
    affected_rows: int


RawResult = Union[RowSet, MutationSummary]


def decode_cursor_result(
    description: Optional[Sequence[Sequence[Any]]],
    rows: Optional[Sequence[Sequence[Any]]],
    rowcount: Optional[int],
) -> RawResult:
    """Decode a DB-API cursor outcome into a tagged result.

    A cursor without ``description`` executed a statement that returns no
    rows, so only its affected-row count is meaningful.
    """
    if description is None:
        return MutationSummary(affected_rows=max(rowcount or 0, 0))
    columns = tuple(str(column[0]) for column in description)
    return RowSet(columns=columns, values=tuple(normalize_row(row) for row in rows or ()))


def to_query_result(raw: RawResult) -> QueryResult:
    """Normalize a tagged result into the common QueryResult shape."""
    if isinstance(raw, MutationSummary):
        return QueryResult(
            columns=["affected_rows"],
            rows=[(raw.affected_rows,)],
            row_count=raw.affected_rows,
        )
    return QueryResult(columns=list(raw.columns), rows=list(raw.values), row_count=len(raw.values))
