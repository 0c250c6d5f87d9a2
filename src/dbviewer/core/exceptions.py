"""dbviewer exception hierarchy.

This module defines the exception hierarchy used across the adapter layer,
providing structured error handling with error codes and context so that
failures can be logged and displayed consistently.

Classes:
    DBViewerException: Base exception for all dbviewer operations
    ConfigurationError: Configuration related errors
    ConnectionError: Database connection errors
    QueryError: Statement rejected by a backend
    MetadataError: Table listing errors
    ExportError: Tabular export errors

Example:
    >>> try:
    ...     await adapter.execute_query("SELEC 1")
    ... except QueryError as e:
    ...     logger.error("Query failed", error_code=e.code, context=e.context)
"""

from typing import Any, Dict, Optional


class DBViewerException(Exception):
    """Base exception for all dbviewer operations.

    Attributes:
        code: Unique error code for categorization
        context: Additional context information about the error
        cause: Original exception that caused this error (if any)

    Example:
        >>> raise DBViewerException(
        ...     "Operation failed",
        ...     code="OPERATION_FAILED",
        ...     context={"database_type": "postgresql"}
        ... )
    """

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """Initialize dbviewer exception.

        Args:
            message: Human-readable error description
            code: Unique error code for categorization (defaults to class name)
            context: Additional context information
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.code: str = code or self.__class__.__name__
        self.context: Dict[str, Any] = context or {}
        self.cause: Optional[Exception] = cause

    @property
    def message(self) -> str:
        """Human-readable message without the error code prefix."""
        return super().__str__()

    def __str__(self) -> str:
        """Return formatted error message with code."""
        return f"{self.code}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"context={self.context!r}, "
            f"cause={self.cause!r})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization.

        Returns:
            Dictionary representation of the exception
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
        }


class ConfigurationError(DBViewerException):
    """Configuration related errors.

    Raised when configuration is invalid, missing, or cannot be processed.
    """
    pass


class ValidationError(ConfigurationError):
    """Data validation errors."""
    pass


class UnsupportedDatabaseError(ConfigurationError):
    """Raised by the adapter factory for an unknown database type."""
    pass


class ConnectionError(DBViewerException):
    """Database connection related errors.

    Base class for connection issues including authentication, network
    connectivity and image loading for the embedded engine.
    """
    pass


class DatabaseConnectionError(ConnectionError):
    """Database connection establishment errors.

    Raised while an adapter is initializing. ``connect()`` turns it into a
    ``False`` return value.
    """
    pass


class NotConnectedError(ConnectionError):
    """Raised when an operation needs a connection the adapter does not hold."""
    pass


class QueryError(DBViewerException):
    """SQL query execution errors.

    Every backend rejection (syntax, missing table, permissions) surfaces as
    this class, carrying the backend's message.
    """
    pass


class MetadataError(DBViewerException):
    """Table listing errors.

    Raised when the catalog itself cannot be read. Failures for a single
    table's row count never raise this.
    """
    pass


class ExportError(DBViewerException):
    """Tabular export errors."""
    pass


# Error code constants for common scenarios
class ErrorCodes:
    """Common error codes for dbviewer exceptions."""

    # Configuration errors
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    UNSUPPORTED_DATABASE_TYPE = "UNSUPPORTED_DATABASE_TYPE"

    # Connection errors
    CONNECTION_TIMEOUT = "CONNECTION_TIMEOUT"
    CONNECTION_REFUSED = "CONNECTION_REFUSED"
    AUTH_FAILED = "AUTH_FAILED"
    NOT_CONNECTED = "NOT_CONNECTED"
    IMAGE_LOAD_FAILED = "IMAGE_LOAD_FAILED"

    # Query errors
    QUERY_EXECUTION_FAILED = "QUERY_EXECUTION_FAILED"
    METADATA_EXTRACTION_FAILED = "METADATA_EXTRACTION_FAILED"

    # Export errors
    UNSUPPORTED_EXPORT_FORMAT = "UNSUPPORTED_EXPORT_FORMAT"

    # Lifecycle errors
    INIT_FAILED = "INIT_FAILED"
