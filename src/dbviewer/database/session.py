# src/dbviewer/database/session.py
"""Viewer session: the single active adapter plus the UI-facing state.

The session owns its adapter explicitly. Switching connections disconnects
the current adapter before the next one is created, so at most one pool or
embedded engine is open per session.
"""

import math
from typing import Any, Dict, List, Optional, Union

from dbviewer.config.models import ConnectionConfig, ViewerConfig, infer_database_type
from dbviewer.core.exceptions import DBViewerException, UnsupportedDatabaseError
from dbviewer.core.protocols import DatabaseAdapter
from dbviewer.database.connectors.sqlite import SQLiteAdapter
from dbviewer.database.factory import create_adapter
from dbviewer.database.models import QueryResult, TableInfo
from dbviewer.logging import get_logger
from dbviewer.tabular import (
    ColumnMetadata,
    ExportArtifact,
    ExportFormat,
    ProcessedView,
    TabularDataEngine,
    ViewState,
    export_view,
)


class DatabaseSession:
    """Orchestrates one viewer session.

    Args:
        config: Viewer configuration; defaults apply when omitted

    Attributes:
        adapter: The connected adapter, or None
        tables: Tables of the connected database
        selected_table: Table whose pages are browsed
        current_page: 1-based page of ``selected_table``
        result: Result currently displayed
        view_state: Search, filters, sort and selection over ``result``
        error: Message of the last failed operation
    """

    def __init__(self, config: Optional[ViewerConfig] = None) -> None:
        self.config = config or ViewerConfig()
        self.logger = get_logger("database.session")
        self.adapter: Optional[DatabaseAdapter] = None
        self.tables: List[TableInfo] = []
        self.selected_table: Optional[str] = None
        self.current_page = 1
        self.result: Optional[QueryResult] = None
        self.view_state = ViewState()
        self.error: Optional[str] = None
        self._engine: Optional[TabularDataEngine] = None

    @property
    def is_connected(self) -> bool:
        return self.adapter is not None and self.adapter.is_connected

    @property
    def database_type(self) -> Optional[str]:
        return self.adapter.database_type if self.adapter is not None else None

    @property
    def page_size(self) -> int:
        return self.config.page_size

    @property
    def total_pages(self) -> int:
        """Page count of the selected table (at least 1)."""
        table = self._find_table(self.selected_table)
        if table is None or table.row_count <= 0:
            return 1
        return math.ceil(table.row_count / self.page_size)

    async def connect(self, connection_string: str, db_type: Optional[str] = None) -> Dict[str, Any]:
        """Switch to a new database.

        Args:
            connection_string: Backend locator
            db_type: Database type; inferred from the locator when omitted

        Returns:
            ``{success, message, type}``
        """
        await self.disconnect()
        db_type = db_type or infer_database_type(connection_string)
        try:
            adapter = create_adapter(db_type, connection_string, pool_config=self.config.pool)
        except UnsupportedDatabaseError as e:
            self.error = e.message
            return {"success": False, "message": e.message, "type": db_type}

        return await self._activate(adapter, await adapter.connect())

    async def open_sqlite_image(self, data: bytes) -> Dict[str, Any]:
        """Switch to an uploaded SQLite database image."""
        await self.disconnect()
        adapter = SQLiteAdapter(ConnectionConfig(type="sqlite", connection_string="sqlite://"))
        return await self._activate(adapter, await adapter.load_from_bytes(data))

    async def _activate(self, adapter: DatabaseAdapter, connected: bool) -> Dict[str, Any]:
        db_type = adapter.database_type
        if not connected:
            self.error = f"Connection failed: {adapter.last_error or 'unknown error'}"
            return {"success": False, "message": self.error, "type": db_type}

        self.adapter = adapter
        self.error = None
        self.logger.info("Session connected", database_type=db_type)

        await self.refresh_tables()
        if self.tables:
            await self.select_table(self.tables[0].name)
        return {"success": True, "message": "Connected successfully", "type": db_type}

    async def disconnect(self) -> None:
        """Release the adapter and clear all database state."""
        adapter, self.adapter = self.adapter, None
        if adapter is not None:
            await adapter.disconnect()
            self.logger.info("Session disconnected", database_type=adapter.database_type)
        self.tables = []
        self.selected_table = None
        self.current_page = 1
        self._set_result(None)

    async def refresh_tables(self) -> List[TableInfo]:
        """Reload the table list. On failure the list is emptied and ``error`` set."""
        if self.adapter is None:
            self.tables = []
            return self.tables
        try:
            self.tables = await self.adapter.get_tables()
        except DBViewerException as e:
            self.logger.warning("Table listing failed", error=e.message)
            self.error = e.message
            self.tables = []
        return self.tables

    async def select_table(self, name: str) -> Optional[QueryResult]:
        """Browse ``name`` from its first page."""
        self.selected_table = name
        self.current_page = 1
        return await self._load_page()

    async def change_page(self, page: int) -> Optional[QueryResult]:
        """Load another page of the selected table, clamped to the valid range."""
        self.current_page = min(max(page, 1), self.total_pages)
        return await self._load_page()

    def page_query(self, table: str, page: int) -> str:
        return f"SELECT * FROM {table} LIMIT {self.page_size} OFFSET {(page - 1) * self.page_size}"

    async def _load_page(self) -> Optional[QueryResult]:
        if self.selected_table is None:
            return None
        return await self.run_query(self.page_query(self.selected_table, self.current_page))

    async def run_query(self, query: str) -> Optional[QueryResult]:
        """Execute a statement and display its result.

        Returns:
            The result, or None when the query failed; the message is then
            in ``error`` and the previous result is cleared.
        """
        if self.adapter is None:
            self.error = "Please connect to a database first"
            return None
        if not query or not query.strip():
            self.error = "Please enter a SQL query"
            return None

        try:
            result = await self.adapter.execute_query(query)
        except DBViewerException as e:
            self.error = e.message
            self._set_result(None)
            return None

        self.error = None
        self._set_result(result)
        return result

    def _set_result(self, result: Optional[QueryResult]) -> None:
        self.result = result
        self._engine = TabularDataEngine.from_result(result) if result is not None else None
        self.view_state.reset()

    @property
    def column_metadata(self) -> List[ColumnMetadata]:
        return self._engine.column_metadata if self._engine is not None else []

    def view(self) -> ProcessedView:
        """Apply the view state to the current result."""
        if self._engine is None:
            return ProcessedView(columns=[], rows=[], total_rows=0)
        return self._engine.process(self.view_state)

    def export(self, fmt: Union[str, ExportFormat]) -> ExportArtifact:
        """Export the selected rows, or the whole view when nothing is selected."""
        return export_view(self.view(), fmt, self.view_state.selected_rows)

    def _find_table(self, name: Optional[str]) -> Optional[TableInfo]:
        for table in self.tables:
            if table.name == name:
                return table
        return None
