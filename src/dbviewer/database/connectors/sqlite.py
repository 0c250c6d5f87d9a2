# src/dbviewer/database/connectors/sqlite.py
"""Embedded SQLite adapter built on aiosqlite.

The adapter works on a private copy of the database image: the bytes are
fetched (URL) or read (local path) once, written to an adapter-owned
temporary file and opened from there. The source is never modified, and
the copy is removed on disconnect.
"""

import asyncio
import os
import sqlite3
import tempfile
from pathlib import Path
from typing import List, Optional, Union

import aiosqlite
import httpx

from dbviewer.config.models import ConnectionConfig
from dbviewer.core.exceptions import DatabaseConnectionError, DBViewerException, ErrorCodes
from dbviewer.database.base import BaseDatabaseAdapter
from dbviewer.database.models import QueryResult, TableInfo
from dbviewer.database.resolver import quote_identifier
from dbviewer.database.statements import split_statements
from dbviewer.database.values import normalize_row

LOCATOR_PREFIX = "sqlite://"


class SQLiteAdapter(BaseDatabaseAdapter):
    """Embedded SQLite adapter.

    ``sqlite://<path-or-url>`` loads a database image; an empty suffix, or a
    locator without the ``sqlite://`` scheme, opens a fresh in-memory
    database. Uploaded images are loaded with ``load_from_bytes`` or
    ``load_from_file``.
    """

    component_name = "SQLiteAdapter"
    version = "1.0.0"
    database_type = "sqlite"

    FETCH_TIMEOUT = 30.0

    def __init__(
        self,
        config: ConnectionConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(config)
        self._connection: Optional[aiosqlite.Connection] = None
        self._image_path: Optional[Path] = None
        self._uploaded_image: Optional[bytes] = None
        self._transport = transport

    def _has_resource(self) -> bool:
        return self._connection is not None

    @property
    def locator(self) -> Optional[str]:
        """Image location after ``sqlite://``, or None for a fresh database."""
        connection_string = self.connection_string.strip()
        if not connection_string.startswith(LOCATOR_PREFIX):
            return None
        return connection_string[len(LOCATOR_PREFIX):] or None

    async def _async_initialize(self) -> None:
        image = self._uploaded_image
        if image is None and self.locator:
            image = await self._read_image(self.locator)
        await self._open(image)

    async def _async_cleanup(self) -> None:
        connection, self._connection = self._connection, None
        image_path, self._image_path = self._image_path, None
        try:
            if connection is not None:
                await connection.close()
        finally:
            if image_path is not None:
                image_path.unlink(missing_ok=True)

    async def _read_image(self, locator: str) -> bytes:
        if locator.lower().startswith(("http://", "https://")):
            return await self._fetch_image(locator)

        path = Path(locator).expanduser()
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise DatabaseConnectionError(
                f"Cannot read SQLite image {path}: {e}",
                code=ErrorCodes.IMAGE_LOAD_FAILED,
                context={"path": str(path)},
            ) from e

    async def _fetch_image(self, url: str) -> bytes:
        self.logger.info("Fetching SQLite image", url=url)
        try:
            async with httpx.AsyncClient(
                follow_redirects=True,
                timeout=self.FETCH_TIMEOUT,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise DatabaseConnectionError(
                f"Timed out fetching SQLite image: {url}",
                code=ErrorCodes.CONNECTION_TIMEOUT,
                context={"url": url},
            ) from e
        except httpx.HTTPStatusError as e:
            raise DatabaseConnectionError(
                f"HTTP {e.response.status_code} fetching SQLite image: {url}",
                code=ErrorCodes.IMAGE_LOAD_FAILED,
                context={"url": url, "status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            raise DatabaseConnectionError(
                f"Cannot fetch SQLite image {url}: {e}",
                code=ErrorCodes.CONNECTION_REFUSED,
                context={"url": url},
            ) from e
        return response.content

    async def _open(self, image: Optional[bytes]) -> None:
        if image is None:
            self._connection = await aiosqlite.connect(":memory:")
            return

        fd, name = tempfile.mkstemp(prefix="dbviewer-", suffix=".sqlite3")
        image_path = Path(name)
        connection: Optional[aiosqlite.Connection] = None
        try:
            with os.fdopen(fd, "wb") as image_file:
                image_file.write(image)
            connection = await aiosqlite.connect(str(image_path))
            # SQLite reads the header lazily; touch the catalog to reject junk now.
            async with connection.execute("SELECT COUNT(*) FROM sqlite_master") as cursor:
                await cursor.fetchone()
        except (OSError, sqlite3.Error) as e:
            if connection is not None:
                await connection.close()
            image_path.unlink(missing_ok=True)
            raise DatabaseConnectionError(
                f"Invalid SQLite image: {e}",
                code=ErrorCodes.IMAGE_LOAD_FAILED,
                context={"size_bytes": len(image)},
            ) from e

        self._connection = connection
        self._image_path = image_path
        self.logger.debug("SQLite image opened", size_bytes=len(image))

    async def load_from_bytes(self, data: bytes) -> bool:
        """Replace the current database with an uploaded image.

        Later reconnects reopen the same image.

        Returns:
            True on success, False if the image cannot be opened
        """
        await self.disconnect()
        self._uploaded_image = bytes(data)
        return await self.connect()

    async def load_from_file(self, path: Union[str, Path]) -> bool:
        """Replace the current database with the image stored at ``path``."""
        try:
            data = await asyncio.to_thread(Path(path).read_bytes)
        except OSError as e:
            self.last_error = f"Cannot read SQLite image {path}: {e}"
            self.logger.error("Loading SQLite image failed", path=str(path), error=str(e))
            return False
        return await self.load_from_bytes(data)

    async def test_connection(self) -> bool:
        """Connect if needed, otherwise run ``SELECT 1``."""
        if not self.is_connected:
            return await self.connect()
        try:
            await self.execute_query("SELECT 1")
        except DBViewerException:
            return False
        return True

    async def _execute(self, query: str) -> QueryResult:
        # every statement runs; the first one that yields columns is returned
        result: Optional[QueryResult] = None
        for statement in split_statements(query):
            async with self._connection.execute(statement) as cursor:
                description = cursor.description
                rows = await cursor.fetchall() if description is not None else []
            if result is None and description is not None:
                result = QueryResult(
                    columns=[column[0] for column in description],
                    rows=[normalize_row(row) for row in rows],
                    row_count=len(rows),
                )
        if self._connection.in_transaction:
            await self._connection.commit()

        return result if result is not None else QueryResult.empty()

    async def _list_tables(self) -> List[TableInfo]:
        async with self._connection.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
        ) as cursor:
            names = [row[0] for row in await cursor.fetchall()]

        tables: List[TableInfo] = []
        for name in names:
            async with self._connection.execute(f"PRAGMA table_info({quote_identifier(name)})") as cursor:
                columns = [row[1] for row in await cursor.fetchall()]
            tables.append(TableInfo(name=name, columns=columns, row_count=await self._count_rows(name)))
        return tables

    async def _count_rows(self, table: str) -> int:
        """Exact row count, trying the quoted name before the bare one.

        Returns 0 when both attempts fail.
        """
        for statement in (
            f"SELECT COUNT(*) FROM {quote_identifier(table)}",
            f"SELECT COUNT(*) FROM {table}",
        ):
            try:
                async with self._connection.execute(statement) as cursor:
                    row = await cursor.fetchone()
                return int(row[0]) if row else 0
            except sqlite3.Error as e:
                self.logger.debug("Row count attempt failed", table=table, error=str(e))
        self.logger.warning("Row count unavailable, reporting 0", table=table)
        return 0
