"""dbviewer configuration management.

Classes:
    BaseConfig: Base configuration class
    PoolConfig: Connection pool configuration
    ConnectionConfig: Connection descriptor
    LoggingConfig: Logging configuration
    ViewerConfig: Session-wide configuration

Example:
    >>> from dbviewer.config import ViewerConfig
    >>> config = ViewerConfig.from_file("viewer.yaml")
    >>> primary = config.get_connection("primary")
"""

from .models import (
    SUPPORTED_DATABASE_TYPES,
    BaseConfig,
    ConnectionConfig,
    LoggingConfig,
    PoolConfig,
    ViewerConfig,
    infer_database_type,
    mask_connection_string,
)

__all__ = [
    "BaseConfig",
    "ConnectionConfig",
    "LoggingConfig",
    "PoolConfig",
    "ViewerConfig",
    "SUPPORTED_DATABASE_TYPES",
    "infer_database_type",
    "mask_connection_string",
]
