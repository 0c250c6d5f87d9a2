"""Client-side view state: search, filters, sort and selection."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Set


class SortDirection(str, Enum):
    NONE = "none"
    ASCENDING = "asc"
    DESCENDING = "desc"


_NEXT_DIRECTION = {
    SortDirection.NONE: SortDirection.ASCENDING,
    SortDirection.ASCENDING: SortDirection.DESCENDING,
    SortDirection.DESCENDING: SortDirection.NONE,
}


@dataclass
class ViewState:
    """Mutable view state applied to one result set.

    Selected rows are indices into the processed (filtered and sorted) rows,
    so any change to search, filters or sort clears the selection.
    """
    search: str = ""
    column_filters: Dict[str, str] = field(default_factory=dict)
    sort_column: Optional[str] = None
    sort_direction: SortDirection = SortDirection.NONE
    selected_rows: Set[int] = field(default_factory=set)

    @property
    def is_sorted(self) -> bool:
        return self.sort_column is not None and self.sort_direction is not SortDirection.NONE

    def set_search(self, text: str) -> None:
        self.search = text or ""
        self.selected_rows.clear()

    def set_column_filter(self, column: str, text: str) -> None:
        """Set the filter text for ``column``; empty text removes it."""
        if text:
            self.column_filters[column] = text
        else:
            self.column_filters.pop(column, None)
        self.selected_rows.clear()

    def clear_filters(self) -> None:
        self.search = ""
        self.column_filters.clear()
        self.selected_rows.clear()

    def toggle_sort(self, column: str) -> SortDirection:
        """Advance the sort for a header click.

        The same column cycles none, ascending, descending, none. A different
        column starts at ascending.

        Returns:
            The new sort direction
        """
        if column == self.sort_column:
            self.sort_direction = _NEXT_DIRECTION[self.sort_direction]
        else:
            self.sort_column = column
            self.sort_direction = SortDirection.ASCENDING
        if self.sort_direction is SortDirection.NONE:
            self.sort_column = None
        self.selected_rows.clear()
        return self.sort_direction

    def select_row(self, index: int) -> bool:
        """Toggle selection of one processed row. Returns True if now selected."""
        if index in self.selected_rows:
            self.selected_rows.discard(index)
            return False
        self.selected_rows.add(index)
        return True

    def select_all(self, total: int) -> None:
        """Select every processed row, or clear if all are already selected."""
        if total > 0 and len(self.selected_rows) == total:
            self.selected_rows.clear()
        else:
            self.selected_rows = set(range(total))

    def clear_selection(self) -> None:
        self.selected_rows.clear()

    def reset(self) -> None:
        self.search = ""
        self.column_filters.clear()
        self.sort_column = None
        self.sort_direction = SortDirection.NONE
        self.selected_rows.clear()
