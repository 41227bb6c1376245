"""
Tests for CSV record reading and writing
(ygo_prices/ingest/tabular.py, ygo_prices/output.py).
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from ygo_prices.errors import (
    IllegalHeaderError,
    MalformedRecordError,
    MissingHeadersError,
    OutputExistsError,
)
from ygo_prices.ingest.tabular import read_records
from ygo_prices.models.record import Record
from ygo_prices.output import open_output, write_records


class TestReadRecords:

    def test_full_columns(self) -> None:
        text = (
            "name,tag,count,rarity,price\n"
            "I:P Masquerena,CHIM-EN049,2,Ultra Rare,\n"
        )
        records = read_records(io.StringIO(text))

        assert records == [
            Record(name="I:P Masquerena", tag="CHIM-EN049", count=2, rarity="Ultra Rare")
        ]

    def test_fields_are_trimmed(self) -> None:
        text = " name , count \n  Kuriboh ,  3 \n"
        records = read_records(io.StringIO(text))

        assert records[0].name == "Kuriboh"
        assert records[0].count == 3

    def test_absent_columns_are_none(self) -> None:
        records = read_records(io.StringIO("name\nSangan\n"))

        record = records[0]
        assert record.tag is None
        assert record.count is None
        assert record.rarity is None
        assert record.price is None

    def test_empty_cells_are_none_not_empty_string(self) -> None:
        records = read_records(io.StringIO("name,tag,rarity\nSangan,,\n"))
        assert records[0].tag is None
        assert records[0].rarity is None

    def test_short_row_padded(self) -> None:
        records = read_records(io.StringIO("name,tag,count\nSangan\n"))
        assert records[0] == Record(name="Sangan")

    def test_blank_rows_skipped(self) -> None:
        records = read_records(io.StringIO("name\nKuriboh\n\n,\nSangan\n"))
        assert [r.name for r in records] == ["Kuriboh", "Sangan"]

    def test_input_order_preserved(self) -> None:
        names = ["Raigeki", "Kuriboh", "Sangan", "Kuriboh"]
        text = "name\n" + "\n".join(names) + "\n"
        assert [r.name for r in read_records(io.StringIO(text))] == names

    def test_input_price_parsed(self) -> None:
        records = read_records(io.StringIO("name,price\nKuriboh,1.5\n"))
        assert records[0].price == 1.5

    def test_empty_stream(self) -> None:
        with pytest.raises(MissingHeadersError):
            read_records(io.StringIO(""))

    def test_schema_checked_before_rows(self) -> None:
        with pytest.raises(IllegalHeaderError):
            read_records(io.StringIO("name,qty\nKuriboh,abc\n"))

    def test_bad_count(self) -> None:
        with pytest.raises(MalformedRecordError) as exc_info:
            read_records(io.StringIO("name,count\nKuriboh,two\n"))

        assert exc_info.value.row == 2
        assert exc_info.value.column == "count"
        assert exc_info.value.value == "two"

    def test_bad_price(self) -> None:
        with pytest.raises(MalformedRecordError) as exc_info:
            read_records(io.StringIO("name,price\nKuriboh,$1\n"))
        assert exc_info.value.column == "price"

    @pytest.mark.parametrize("raw", ["nan", "inf", "-Infinity"])
    def test_non_finite_price_rejected(self, raw: str) -> None:
        with pytest.raises(MalformedRecordError) as exc_info:
            read_records(io.StringIO(f"name,price\nKuriboh,{raw}\n"))
        assert exc_info.value.column == "price"
        assert exc_info.value.value == raw

    def test_byte_order_mark_on_header(self) -> None:
        """Excel CSV exports start with a UTF-8 BOM."""
        records = read_records(io.StringIO("\ufeffname,count\nKuriboh,3\n"))
        assert records == [Record(name="Kuriboh", count=3)]

    def test_missing_name_cell(self) -> None:
        with pytest.raises(MalformedRecordError) as exc_info:
            read_records(io.StringIO("name,count\nKuriboh,1\n,2\n"))
        assert exc_info.value.row == 3
        assert exc_info.value.column == "name"


class TestWriteRecords:

    def test_always_five_columns(self) -> None:
        out = io.StringIO()
        rows = write_records(
            [
                Record(name="Kuriboh", tag="SDY-016", count=2, rarity="Common", price=1.25),
                Record(name="Sangan"),
            ],
            out,
        )

        assert rows == 2
        assert out.getvalue() == (
            "name,tag,count,rarity,price\n"
            "Kuriboh,SDY-016,2,Common,1.25\n"
            "Sangan,,,,\n"
        )

    def test_names_with_commas_are_quoted(self) -> None:
        out = io.StringIO()
        write_records([Record(name="Hello, World")], out)
        assert '"Hello, World"' in out.getvalue()

    def test_round_trip_through_reader(self) -> None:
        original = [Record(name="Kuriboh", tag="SDY-016", count=3, rarity="Common", price=1.25)]
        out = io.StringIO()
        write_records(original, out)

        assert read_records(io.StringIO(out.getvalue())) == original


class TestOpenOutput:

    def test_creates_new_file(self, tmp_path: Path) -> None:
        target = tmp_path / "priced.csv"
        with open_output(str(target)) as stream:
            write_records([Record(name="Kuriboh")], stream)

        assert target.read_text().startswith("name,tag,count,rarity,price")

    def test_refuses_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "priced.csv"
        target.write_text("keep me")

        with pytest.raises(OutputExistsError):
            open_output(str(target))

        assert target.read_text() == "keep me"
