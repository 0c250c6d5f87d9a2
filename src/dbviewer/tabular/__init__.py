"""Client-side processing of query results.

Type inference, search, per-column filters, sorting, selection and export
over a result set already held in memory.

Example:
    >>> from dbviewer.tabular import TabularDataEngine, ViewState
    >>> engine = TabularDataEngine(["name", "age"], [("Alice", 30), ("Bob", 25)])
    >>> state = ViewState()
    >>> state.toggle_sort("age")
    <SortDirection.ASCENDING: 'asc'>
    >>> [row[0] for row in engine.process(state).rows]
    ['Bob', 'Alice']
"""

from .engine import ProcessedView, TabularDataEngine, cell_to_text, natural_sort_key
from .export import ExportArtifact, ExportFormat, export_view, to_csv, to_json
from .inference import ColumnMetadata, ColumnType, classify_value, infer_column_types
from .state import SortDirection, ViewState

__all__ = [
    "TabularDataEngine",
    "ProcessedView",
    "ViewState",
    "SortDirection",
    "ColumnType",
    "ColumnMetadata",
    "classify_value",
    "infer_column_types",
    "cell_to_text",
    "natural_sort_key",
    "ExportFormat",
    "ExportArtifact",
    "export_view",
    "to_csv",
    "to_json",
]
