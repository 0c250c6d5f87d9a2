# src/dbviewer/database/factory.py
"""Adapter factory.

Maps a database type tag to its adapter class. The mapping is fixed; there
is no runtime registration.
"""

from typing import Dict, List, Optional, Type

from dbviewer.config.models import ConnectionConfig, PoolConfig, infer_database_type
from dbviewer.core.exceptions import ErrorCodes, UnsupportedDatabaseError
from dbviewer.database.base import BaseDatabaseAdapter
from dbviewer.database.connectors import MySQLAdapter, PostgreSQLAdapter, SQLiteAdapter
from dbviewer.logging import get_logger

logger = get_logger("database.factory")

_ADAPTERS: Dict[str, Type[BaseDatabaseAdapter]] = {
    "postgresql": PostgreSQLAdapter,
    "mysql": MySQLAdapter,
    "sqlite": SQLiteAdapter,
}


def create_adapter(
    db_type: str,
    connection_string: str,
    *,
    pool_config: Optional[PoolConfig] = None,
) -> BaseDatabaseAdapter:
    """Create an unconnected adapter for ``db_type``.

    Args:
        db_type: ``postgresql``, ``mysql`` or ``sqlite`` (case-insensitive)
        connection_string: Backend locator
        pool_config: Pool settings; the ad-hoc defaults when omitted

    Returns:
        A new adapter; call ``connect()`` before use

    Raises:
        UnsupportedDatabaseError: If ``db_type`` is not supported
    """
    normalized = (db_type or "").strip().lower()
    adapter_class = _ADAPTERS.get(normalized)
    if adapter_class is None:
        raise UnsupportedDatabaseError(
            f"Unsupported database type: {db_type}",
            code=ErrorCodes.UNSUPPORTED_DATABASE_TYPE,
            context={"database_type": db_type, "supported_types": get_supported_types()},
        )

    # locators typed by the user are taken literally, ${...} included
    config = ConnectionConfig.model_validate(
        {
            "type": normalized,
            "connection_string": connection_string,
            "pool": pool_config or PoolConfig(),
        },
        context={"resolve_env": False},
    )
    logger.debug(
        "Creating adapter",
        database_type=normalized,
        adapter_class=adapter_class.__name__,
    )
    return adapter_class(config)


def create_adapter_for(
    connection_string: str,
    *,
    pool_config: Optional[PoolConfig] = None,
) -> BaseDatabaseAdapter:
    """Create an adapter whose type is inferred from the connection string."""
    return create_adapter(
        infer_database_type(connection_string),
        connection_string,
        pool_config=pool_config,
    )


def get_supported_types() -> List[str]:
    return list(_ADAPTERS)


def is_type_supported(db_type: str) -> bool:
    return isinstance(db_type, str) and db_type.strip().lower() in _ADAPTERS
