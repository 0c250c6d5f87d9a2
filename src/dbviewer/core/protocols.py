"""Protocol definitions for dbviewer components.

This module defines the typing protocol that every database adapter
satisfies, so that orchestration code can drive PostgreSQL, MySQL and the
embedded SQLite engine without knowing which one is active.

Protocols:
    DatabaseAdapter: The five-operation adapter contract

Example:
    >>> async def list_names(adapter: DatabaseAdapter) -> List[str]:
    ...     return [table.name for table in await adapter.get_tables()]
"""

from typing import TYPE_CHECKING, List, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..database.models import QueryResult, TableInfo


@runtime_checkable
class DatabaseAdapter(Protocol):
    """Protocol for database adapter implementations.

    ``connect`` and ``test_connection`` report ordinary connection failures
    as ``False``. ``disconnect`` always succeeds from the caller's point of
    view. ``get_tables`` and ``execute_query`` raise when not connected or
    when the backend rejects the statement.
    """

    last_error: Optional[str]

    @property
    def database_type(self) -> str:
        """Get database type identifier."""
        ...

    @property
    def is_connected(self) -> bool:
        """Check if the adapter currently holds a connection."""
        ...

    async def connect(self) -> bool:
        """Establish the connection, closing any prior one first."""
        ...

    async def disconnect(self) -> None:
        """Release the connection. Safe on a disconnected adapter."""
        ...

    async def test_connection(self) -> bool:
        """Check that the backend is reachable."""
        ...

    async def get_tables(self) -> List["TableInfo"]:
        """List tables with their columns and row counts."""
        ...

    async def execute_query(self, query: str) -> "QueryResult":
        """Execute one statement and return its normalized result."""
        ...
