"""Core infrastructure for dbviewer.

Exports the exception hierarchy, the lifecycle base classes and the adapter
protocol.
"""

from .base import AsyncComponent, BaseComponent
from .exceptions import (
    ConfigurationError,
    ConnectionError,
    DatabaseConnectionError,
    DBViewerException,
    ErrorCodes,
    ExportError,
    MetadataError,
    NotConnectedError,
    QueryError,
    UnsupportedDatabaseError,
    ValidationError,
)
from .protocols import DatabaseAdapter

__all__ = [
    # Base classes
    "BaseComponent",
    "AsyncComponent",

    # Protocols
    "DatabaseAdapter",

    # Exceptions
    "DBViewerException",
    "ConfigurationError",
    "ValidationError",
    "UnsupportedDatabaseError",
    "ConnectionError",
    "DatabaseConnectionError",
    "NotConnectedError",
    "QueryError",
    "MetadataError",
    "ExportError",
    "ErrorCodes",
]
