"""Unit tests for the dbviewer exception hierarchy."""

import pytest

from dbviewer.core import exceptions
from dbviewer.core.exceptions import (
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


class TestDBViewerException:
    """Test cases for the base exception."""

    def test_message_and_code(self):
        error = DBViewerException("Something broke", code="BROKEN")

        assert error.message == "Something broke"
        assert error.code == "BROKEN"
        assert str(error) == "BROKEN: Something broke"

    def test_default_code_is_class_name(self):
        error = QueryError("bad sql")

        assert error.code == "QueryError"
        assert error.context == {}
        assert error.cause is None

    def test_context_and_cause(self):
        cause = ValueError("root cause")
        error = DBViewerException(
            "Wrapped",
            code=ErrorCodes.INIT_FAILED,
            context={"component": "SQLiteAdapter"},
            cause=cause,
        )

        assert error.context == {"component": "SQLiteAdapter"}
        assert error.cause is cause

    def test_to_dict(self):
        error = QueryError(
            "Query execution failed: no such table: users",
            code=ErrorCodes.QUERY_EXECUTION_FAILED,
            context={"database_type": "sqlite"},
            cause=RuntimeError("no such table: users"),
        )

        assert error.to_dict() == {
            "error_type": "QueryError",
            "message": "Query execution failed: no such table: users",
            "code": "QUERY_EXECUTION_FAILED",
            "context": {"database_type": "sqlite"},
            "cause": "no such table: users",
        }

    def test_repr_contains_fields(self):
        error = ExportError("Unsupported export format: xml", code=ErrorCodes.UNSUPPORTED_EXPORT_FORMAT)

        text = repr(error)

        assert text.startswith("ExportError(")
        assert "UNSUPPORTED_EXPORT_FORMAT" in text


class TestExceptionHierarchy:
    """Test cases for class relationships."""

    @pytest.mark.parametrize("exc_class, parent", [
        (ConfigurationError, DBViewerException),
        (ValidationError, ConfigurationError),
        (UnsupportedDatabaseError, ConfigurationError),
        (ConnectionError, DBViewerException),
        (DatabaseConnectionError, ConnectionError),
        (NotConnectedError, ConnectionError),
        (QueryError, DBViewerException),
        (MetadataError, DBViewerException),
        (ExportError, DBViewerException),
    ])
    def test_subclass(self, exc_class, parent):
        assert issubclass(exc_class, parent)

    def test_connection_error_does_not_shadow_builtin_hierarchy(self):
        assert not issubclass(exceptions.ConnectionError, OSError)

    def test_catch_by_base(self):
        with pytest.raises(DBViewerException):
            raise NotConnectedError("Database not connected", code=ErrorCodes.NOT_CONNECTED)


class TestErrorCodes:
    """Error code constants are their own names."""

    def test_codes_are_self_named(self):
        codes = {k: v for k, v in vars(ErrorCodes).items() if k.isupper()}

        assert codes
        assert all(key == value for key, value in codes.items())
        assert "IMAGE_LOAD_FAILED" in codes
