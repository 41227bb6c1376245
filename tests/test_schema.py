"""
Tests for tabular header validation (ygo_prices/ingest/schema.py).

The first violation wins, in the order:
total absence → missing required → duplicate → illegal.
"""

from __future__ import annotations

import pytest

from ygo_prices.errors import (
    DuplicateHeaderError,
    IllegalHeaderError,
    MissingHeaderError,
    MissingHeadersError,
    SchemaError,
)
from ygo_prices.ingest.schema import validate_headers


class TestValidHeaders:

    def test_name_only(self) -> None:
        validate_headers(["name"])

    def test_all_columns_any_order(self) -> None:
        validate_headers(["price", "rarity", "count", "tag", "name"])


class TestViolations:

    def test_empty_header_row(self) -> None:
        with pytest.raises(MissingHeadersError):
            validate_headers([])

    def test_no_recognised_headers(self) -> None:
        with pytest.raises(MissingHeadersError):
            validate_headers(["foo", "bar"])

    def test_missing_name(self) -> None:
        with pytest.raises(MissingHeaderError) as exc_info:
            validate_headers(["tag", "count"])
        assert exc_info.value.header == "name"

    def test_duplicate_name(self) -> None:
        with pytest.raises(DuplicateHeaderError) as exc_info:
            validate_headers(["name", "name", "tag"])
        assert exc_info.value.header == "name"

    def test_illegal_header(self) -> None:
        with pytest.raises(IllegalHeaderError) as exc_info:
            validate_headers(["name", "foo"])
        assert exc_info.value.header == "foo"

    def test_all_are_schema_errors(self) -> None:
        for headers in ([], ["tag"], ["name", "name"], ["name", "foo"]):
            with pytest.raises(SchemaError):
                validate_headers(headers)


class TestOrdering:
    """When several violations coexist, the earliest check reports."""

    def test_missing_required_before_duplicate(self) -> None:
        with pytest.raises(MissingHeaderError):
            validate_headers(["tag", "tag"])

    def test_missing_required_before_illegal(self) -> None:
        with pytest.raises(MissingHeaderError):
            validate_headers(["tag", "foo"])

    def test_duplicate_before_illegal(self) -> None:
        with pytest.raises(DuplicateHeaderError) as exc_info:
            validate_headers(["name", "foo", "tag", "tag"])
        assert exc_info.value.header == "tag"

    def test_first_illegal_header_reported(self) -> None:
        with pytest.raises(IllegalHeaderError) as exc_info:
            validate_headers(["name", "qty", "set"])
        assert exc_info.value.header == "qty"

    def test_custom_vocabulary(self) -> None:
        with pytest.raises(MissingHeaderError) as exc_info:
            validate_headers(["a"], allowed={"a", "b"}, required=("b",))
        assert exc_info.value.header == "b"
