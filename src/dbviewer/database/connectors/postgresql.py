# src/dbviewer/database/connectors/postgresql.py
"""PostgreSQL adapter built on an asyncpg connection pool."""

import asyncio
import re
from typing import Any, List, Optional

import asyncpg

from dbviewer.config.models import ConnectionConfig
from dbviewer.core.exceptions import (
    DatabaseConnectionError,
    DBViewerException,
    ErrorCodes,
    QueryError,
)
from dbviewer.database.base import BaseDatabaseAdapter
from dbviewer.database.models import QueryResult, SmartQueryResult, TableInfo
from dbviewer.database.resolver import IdentifierResolver, quote_identifier
from dbviewer.database.statements import split_statements
from dbviewer.database.values import normalize_row

_STATUS_COUNT = re.compile(r"(\d+)\s*$")


class PostgreSQLAdapter(BaseDatabaseAdapter):
    """PostgreSQL adapter.

    Queries go through the identifier-correcting smart path first and fall
    back to the untouched statement when that path fails.
    """

    component_name = "PostgreSQLAdapter"
    version = "1.0.0"
    database_type = "postgresql"

    LIVENESS_QUERY = "SELECT NOW()"

    TABLES_QUERY = """
        SELECT
            c.relname AS table_name,
            COALESCE(s.n_tup_ins - s.n_tup_del, s.n_live_tup, 0) AS row_count
        FROM pg_class c
        JOIN pg_namespace n ON n.oid = c.relnamespace
        LEFT JOIN pg_stat_user_tables s ON c.relname = s.relname
        WHERE n.nspname = 'public'
            AND c.relkind = 'r'
        ORDER BY c.relname
    """

    COLUMNS_QUERY = """
        SELECT a.attname
        FROM pg_attribute a
        JOIN pg_class c ON c.oid = a.attrelid
        JOIN pg_namespace n ON n.oid = c.relnamespace
        WHERE n.nspname = 'public'
            AND c.relname = $1
            AND a.attnum > 0
            AND NOT a.attisdropped
        ORDER BY a.attnum
    """

    def __init__(self, config: ConnectionConfig) -> None:
        super().__init__(config)
        self._pool: Optional[asyncpg.Pool] = None

    def _has_resource(self) -> bool:
        return self._pool is not None

    async def _async_initialize(self) -> None:
        """Create the pool and verify it with a round trip."""
        pool_config = self.config.pool
        context = {"connection": self.config.masked_connection_string}

        try:
            pool = await asyncpg.create_pool(
                dsn=self.connection_string,
                min_size=pool_config.min_size,
                max_size=pool_config.max_size,
                timeout=pool_config.connection_timeout,
                max_inactive_connection_lifetime=pool_config.idle_timeout,
                command_timeout=pool_config.command_timeout,
            )
        except asyncpg.InvalidAuthorizationSpecificationError as e:
            raise DatabaseConnectionError(
                f"PostgreSQL authentication failed: {e}",
                code=ErrorCodes.AUTH_FAILED,
                context=context,
            ) from e
        except (asyncio.TimeoutError, TimeoutError) as e:
            raise DatabaseConnectionError(
                f"PostgreSQL connection timeout: {e}",
                code=ErrorCodes.CONNECTION_TIMEOUT,
                context=context,
            ) from e
        except Exception as e:
            raise DatabaseConnectionError(
                f"PostgreSQL connection failed: {e}",
                code=ErrorCodes.CONNECTION_REFUSED,
                context=context,
            ) from e

        try:
            async with pool.acquire() as conn:
                await conn.fetchval(self.LIVENESS_QUERY)
        except Exception as e:
            pool.terminate()
            raise DatabaseConnectionError(
                f"PostgreSQL liveness check failed: {e}",
                code=ErrorCodes.CONNECTION_REFUSED,
                context=context,
            ) from e

        self._pool = pool

    async def _async_cleanup(self) -> None:
        """Drain and close the pool."""
        pool, self._pool = self._pool, None
        if pool is not None:
            await pool.close()
            self.logger.debug("PostgreSQL connection pool closed")

    async def execute_query(self, query: str) -> QueryResult:
        """Execute a statement, correcting table identifier case when possible."""
        self._ensure_connected()
        try:
            smart = await self.smart_query(query)
        except QueryError as e:
            self.logger.warning("Smart query failed, running original query", error=e.message)
            return await super().execute_query(query)
        return smart.result

    async def smart_query(self, query: str) -> SmartQueryResult:
        """Resolve table identifiers, rewrite the query and run it.

        Raises:
            QueryError: If resolution, rewriting or execution fails
        """
        self._ensure_connected()
        with self.perf_logger.measure("smart_query"):
            try:
                async with self._pool.acquire() as conn:
                    fixed_query = await IdentifierResolver(conn).fix_query(query)
                async with self._pool.acquire() as conn:
                    result = await self._run(conn, fixed_query)
            except DBViewerException:
                raise
            except Exception as e:
                raise self._query_error(e) from e

        if fixed_query != query:
            self.logger.info("Table identifiers corrected", fixed_query=fixed_query)
        return SmartQueryResult(original_query=query, fixed_query=fixed_query, result=result)

    async def _execute(self, query: str) -> QueryResult:
        async with self._pool.acquire() as conn:
            return await self._run(conn, query)

    @staticmethod
    async def _run(conn: Any, query: str) -> QueryResult:
        if len(split_statements(query)) > 1:
            # prepared statements hold one command; scripts use the simple protocol
            status = await conn.execute(query)
            return QueryResult(columns=[], rows=[], row_count=_status_row_count(status, 0))

        statement = await conn.prepare(query)
        records = await statement.fetch()
        columns = [attribute.name for attribute in statement.get_attributes()]
        rows = [normalize_row(record) for record in records]
        return QueryResult(
            columns=columns,
            rows=rows,
            row_count=_status_row_count(statement.get_statusmsg(), len(rows)),
        )

    async def _list_tables(self) -> List[TableInfo]:
        tables: List[TableInfo] = []
        async with self._pool.acquire() as conn:
            records = await conn.fetch(self.TABLES_QUERY)
            for record in records:
                name = record["table_name"]
                columns = [column["attname"] for column in await conn.fetch(self.COLUMNS_QUERY, name)]
                row_count = record["row_count"]
                if not row_count:
                    row_count = await self._count_rows(conn, name)
                tables.append(TableInfo(name=name, columns=columns, row_count=max(int(row_count), 0)))
        return tables

    async def _count_rows(self, conn: Any, table: str) -> int:
        """Exact row count, trying the quoted name before the bare one.

        Returns 0 when both attempts fail.
        """
        for statement in (
            f"SELECT COUNT(*) AS count FROM {quote_identifier(table)}",
            f"SELECT COUNT(*) AS count FROM {table}",
        ):
            try:
                return int(await conn.fetchval(statement) or 0)
            except Exception as e:
                self.logger.debug("Row count attempt failed", table=table, error=str(e))
        self.logger.warning("Row count unavailable, reporting 0", table=table)
        return 0


def _status_row_count(status: Optional[str], fallback: int) -> int:
    """Extract the row count from a command tag such as ``INSERT 0 3``."""
    if isinstance(status, str):
        match = _STATUS_COUNT.search(status)
        if match:
            return int(match.group(1))
    return fallback
