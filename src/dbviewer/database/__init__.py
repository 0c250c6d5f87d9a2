"""dbviewer database layer.

Adapters for PostgreSQL (asyncpg), MySQL/MariaDB (aiomysql) and embedded
SQLite (aiosqlite) behind one contract: ``connect``, ``disconnect``,
``test_connection``, ``get_tables`` and ``execute_query``.

Example:
    >>> from dbviewer.database import create_adapter
    >>> adapter = create_adapter("sqlite", "sqlite://")
    >>> await adapter.connect()
    True
    >>> (await adapter.execute_query("SELECT 1 AS one")).rows
    [(1,)]
"""

from .base import BaseDatabaseAdapter
from .connectors import MySQLAdapter, PostgreSQLAdapter, SQLiteAdapter
from .factory import (
    create_adapter,
    create_adapter_for,
    get_supported_types,
    infer_database_type,
    is_type_supported,
)
from .models import (
    MutationSummary,
    QueryResult,
    RawResult,
    RowSet,
    SmartQueryResult,
    TableInfo,
    decode_cursor_result,
    to_query_result,
)
from .resolver import IdentifierResolver, extract_table_candidates, rewrite_query
from .session import DatabaseSession
from .statements import split_statements
from .values import normalize_row, normalize_value

__all__ = [
    # Models
    "QueryResult",
    "TableInfo",
    "SmartQueryResult",
    "RowSet",
    "MutationSummary",
    "RawResult",
    "decode_cursor_result",
    "to_query_result",
    "normalize_value",
    "normalize_row",

    # Adapters
    "BaseDatabaseAdapter",
    "PostgreSQLAdapter",
    "MySQLAdapter",
    "SQLiteAdapter",

    # Identifier resolution
    "IdentifierResolver",
    "extract_table_candidates",
    "rewrite_query",
    "split_statements",

    # Factory and session
    "create_adapter",
    "create_adapter_for",
    "infer_database_type",
    "get_supported_types",
    "is_type_supported",
    "DatabaseSession",
]
