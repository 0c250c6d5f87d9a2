"""Unit tests for driver value normalization."""

import datetime
import uuid
from decimal import Decimal

import pytest

from dbviewer.database.values import normalize_row, normalize_value


class TestNormalizeValue:
    @pytest.mark.parametrize("value", [None, True, False, 0, 42, -1.5, "text", ""])
    def test_cell_kinds_pass_through(self, value):
        assert normalize_value(value) is value

    @pytest.mark.parametrize("value, expected", [
        (Decimal("12"), 12),
        (Decimal("12.00"), 12),
        (Decimal("12.50"), 12.5),
        (Decimal("NaN"), "NaN"),
    ])
    def test_decimal(self, value, expected):
        result = normalize_value(value)

        assert result == expected
        assert type(result) is type(expected)

    def test_temporal_values(self):
        assert normalize_value(datetime.datetime(2024, 1, 2, 10, 0, 5)) == "2024-01-02 10:00:05"
        assert normalize_value(datetime.date(2024, 1, 2)) == "2024-01-02"
        assert normalize_value(datetime.time(9, 30)) == "09:30:00"
        assert normalize_value(datetime.timedelta(hours=1, minutes=2)) == "1:02:00"

    def test_binary_and_uuid(self):
        identifier = uuid.UUID("12345678-1234-5678-1234-567812345678")

        assert normalize_value(b"\x00\xff") == "00ff"
        assert normalize_value(identifier) == "12345678-1234-5678-1234-567812345678"

    def test_containers_become_json(self):
        assert normalize_value({"a": [1, 2]}) == '{"a": [1, 2]}'
        assert normalize_value([1, "x"]) == '[1, "x"]'

    def test_normalize_row(self):
        assert normalize_row([1, Decimal("2.5"), None, b"\x01"]) == (1, 2.5, None, "01")
