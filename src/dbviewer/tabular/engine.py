"""Tabular Data Engine.

Recomputes the displayed rows from a result set and a ``ViewState`` on
every call: global search, then per-column filters, then sort. The engine
is pure and synchronous and never raises for well-formed input.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from icu import Collator, Locale, UCollAttribute, UCollAttributeValue

from dbviewer.tabular.inference import ColumnMetadata, infer_column_types
from dbviewer.tabular.state import SortDirection, ViewState

# root locale with numeric collation
_COLLATOR = Collator.createInstance(Locale.getRoot())
_COLLATOR.setAttribute(UCollAttribute.NUMERIC_COLLATION, UCollAttributeValue.ON)


def cell_to_text(value: Any) -> str:
    """String form of a cell used for search, filters, sort and CSV.

    Null becomes the empty string, booleans become ``true``/``false`` and
    integral floats lose their ``.0``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def natural_sort_key(text: str) -> bytes:
    """Collation key for ``text``: locale-aware, with digit runs compared by value.

    ``"file9"`` sorts before ``"file10"``, accented letters sort beside
    their base letters and case only breaks ties, lower case first.
    """
    return _COLLATOR.getSortKey(text)


@dataclass
class ProcessedView:
    """Rows after search, filters and sort.

    ``total_rows`` counts the filtered rows; pagination is left to the UI.
    """
    columns: List[str]
    rows: List[Tuple[Any, ...]]
    total_rows: int

    def selected(self, indices: Optional[Sequence[int]] = None) -> List[Tuple[Any, ...]]:
        """Rows at ``indices`` in view order, or all rows when none are given.

        Out-of-range indices are ignored.
        """
        if not indices:
            return list(self.rows)
        return [self.rows[i] for i in sorted(set(indices)) if 0 <= i < len(self.rows)]


class TabularDataEngine:
    """Search, filter and sort pipeline over one result set.

    Args:
        columns: Column names (not necessarily unique)
        rows: Row values in backend order
    """

    def __init__(self, columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
        self.columns = list(columns)
        self.rows = [tuple(row) for row in rows]
        self._metadata: Optional[List[ColumnMetadata]] = None
        self._column_index: Dict[str, int] = {}
        for index, name in enumerate(self.columns):
            self._column_index.setdefault(name, index)

    @classmethod
    def from_result(cls, result: Any) -> "TabularDataEngine":
        """Build an engine from anything with ``columns`` and ``rows``."""
        return cls(result.columns, result.rows)

    @property
    def column_metadata(self) -> List[ColumnMetadata]:
        if self._metadata is None:
            self._metadata = infer_column_types(self.columns, self.rows)
        return self._metadata

    def column_index(self, name: str) -> Optional[int]:
        """Position of the first column called ``name``."""
        return self._column_index.get(name)

    def process(self, state: Optional[ViewState] = None) -> ProcessedView:
        state = state or ViewState()
        rows = self._search(self.rows, state.search)
        rows = self._filter(rows, state.column_filters)
        if state.is_sorted:
            rows = self._sort(rows, state.sort_column, state.sort_direction)
        return ProcessedView(columns=list(self.columns), rows=rows, total_rows=len(rows))

    @staticmethod
    def _search(rows: List[Tuple[Any, ...]], search: str) -> List[Tuple[Any, ...]]:
        if not search:
            return list(rows)
        needle = search.casefold()
        return [
            row for row in rows
            if any(needle in cell_to_text(value).casefold() for value in row)
        ]

    def _filter(self, rows: List[Tuple[Any, ...]], filters: Dict[str, str]) -> List[Tuple[Any, ...]]:
        active = []
        for name, text in filters.items():
            index = self.column_index(name)
            # filters on columns missing from this result are no-ops
            if text and index is not None:
                active.append((index, text.casefold()))

        if not active:
            return rows
        return [
            row for row in rows
            if all(needle in cell_to_text(_cell(row, index)).casefold() for index, needle in active)
        ]

    def _sort(
        self,
        rows: List[Tuple[Any, ...]],
        column: Optional[str],
        direction: SortDirection,
    ) -> List[Tuple[Any, ...]]:
        index = self.column_index(column) if column is not None else None
        if index is None:
            return rows

        def key(row: Tuple[Any, ...]) -> Tuple[Any, ...]:
            value = _cell(row, index)
            if value is None:
                return (0,)
            return (1, natural_sort_key(cell_to_text(value)))

        # Nulls lead ascending; reversing moves them to the end.
        return sorted(rows, key=key, reverse=direction is SortDirection.DESCENDING)


def _cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else None
