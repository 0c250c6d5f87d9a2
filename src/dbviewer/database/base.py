# src/dbviewer/database/base.py
"""Shared behaviour of the database adapters.

Every adapter owns exactly one backend resource (a pool or an embedded
engine connection) between ``connect()`` and ``disconnect()``.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, List, Optional

from dbviewer.config.models import ConnectionConfig
from dbviewer.core import AsyncComponent
from dbviewer.core.exceptions import (
    DBViewerException,
    ErrorCodes,
    MetadataError,
    NotConnectedError,
    QueryError,
)
from dbviewer.database.models import QueryResult, TableInfo
from dbviewer.logging import get_logger, get_performance_logger


class BaseDatabaseAdapter(AsyncComponent[ConnectionConfig], ABC):
    """Abstract base class for all database adapters.

    Subclasses implement resource setup and teardown through
    ``_async_initialize``/``_async_cleanup`` and the backend work through
    ``_list_tables`` and ``_execute``. This class turns connection failures
    into ``False`` and backend errors into ``QueryError``/``MetadataError``.
    """

    component_name = "BaseDatabaseAdapter"
    database_type: ClassVar[str] = "unknown"

    def __init__(self, config: ConnectionConfig) -> None:
        super().__init__(config)
        self.logger = get_logger(f"adapter.{self.database_type}")
        self.perf_logger = get_performance_logger(f"adapter.{self.database_type}")
        self.last_error: Optional[str] = None

    @property
    def connection_string(self) -> str:
        return self.config.url

    @property
    def is_connected(self) -> bool:
        """Check if the adapter holds a live backend resource."""
        return self.is_initialized and self._has_resource()

    @abstractmethod
    def _has_resource(self) -> bool:
        """Return True while the backend pool or engine is open."""

    async def connect(self) -> bool:
        """Open the backend resource, replacing any existing one.

        Returns:
            True on success. Ordinary failures (unreachable host, bad
            credentials, malformed locator) return False and leave the
            adapter disconnected; the message is kept in ``last_error``.
        """
        if self.is_initialized:
            await self.disconnect()

        self.logger.info(
            "Connecting",
            database_type=self.database_type,
            connection=self.config.masked_connection_string,
        )
        try:
            with self.perf_logger.measure("connect"):
                await self.initialize()
        except DBViewerException as e:
            self.last_error = (e.cause.message if isinstance(e.cause, DBViewerException)
                               else str(e.cause or e.message))
            self.logger.error(
                "Connection failed",
                database_type=self.database_type,
                error=self.last_error,
            )
            return False

        self.last_error = None
        self.logger.info("Connected", database_type=self.database_type)
        return True

    async def disconnect(self) -> None:
        """Release the backend resource. Never raises."""
        if not self.is_initialized:
            return
        await self.cleanup()
        self.logger.info("Disconnected", database_type=self.database_type)

    async def test_connection(self) -> bool:
        """Check connectivity by connecting again.

        Pooled backends re-establish their pool as a side effect.
        """
        return await self.connect()

    async def get_tables(self) -> List[TableInfo]:
        """List tables with their columns and best-effort row counts.

        Raises:
            NotConnectedError: If the adapter is not connected
            MetadataError: If the catalog cannot be read
        """
        self._ensure_connected()
        with self.perf_logger.measure("get_tables") as timer:
            try:
                tables = await self._list_tables()
            except DBViewerException:
                raise
            except Exception as e:
                raise MetadataError(
                    f"Failed to get tables: {e}",
                    code=ErrorCodes.METADATA_EXTRACTION_FAILED,
                    context={"database_type": self.database_type},
                    cause=e,
                ) from e
        self.logger.info(
            "Tables listed",
            table_count=len(tables),
            duration_ms=timer.duration_ms,
        )
        return tables

    async def execute_query(self, query: str) -> QueryResult:
        """Execute one statement.

        Raises:
            NotConnectedError: If the adapter is not connected
            QueryError: If the backend rejects the statement
        """
        self._ensure_connected()
        with self.perf_logger.measure("execute_query"):
            try:
                return await self._execute(query)
            except DBViewerException:
                raise
            except Exception as e:
                raise self._query_error(e) from e

    def _ensure_connected(self) -> None:
        if not self.is_connected:
            raise NotConnectedError(
                "Database not connected",
                code=ErrorCodes.NOT_CONNECTED,
                context={"database_type": self.database_type},
            )

    def _query_error(self, error: Exception) -> QueryError:
        self.logger.warning("Query failed", database_type=self.database_type, error=str(error))
        return QueryError(
            f"Query execution failed: {error}",
            code=ErrorCodes.QUERY_EXECUTION_FAILED,
            context={"database_type": self.database_type},
            cause=error,
        )

    @abstractmethod
    async def _list_tables(self) -> List[TableInfo]:
        """Read tables from the backend catalog."""

    @abstractmethod
    async def _execute(self, query: str) -> QueryResult:
        """Run one statement and normalize its result."""
