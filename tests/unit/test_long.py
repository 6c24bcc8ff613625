"""Tests for the long-format table."""

from __future__ import annotations

import io

from nls.config import Config, OutputFormat
from nls.entry import Entry, EntryCells
from nls.output.cell import Cell
from nls.output.long import LONG_FORMAT_COLUMNS, LongFormatGrid, long_format


def _entry(name: str, size: int, owner: str = "root") -> Entry:
    cells = EntryCells(
        name=Cell.from_str(name),
        mode=Cell.from_ascii_str("-rw-r--r--"),
        nlink=Cell.from_num(1),
        owner=Cell.from_str(owner),
        group=Cell.from_str("staff"),
        size=Cell.from_num(size),
        timestamp=Cell.from_ascii_str("Jan  1  2020"),
    )
    return Entry(name=name, size=size, cells=cells)


class TestLongFormatGrid:
    def test_column_uses_widest_cell(self) -> None:
        table = LongFormatGrid(2)
        for text in ("abc", "x", "abcdefghij", "y"):
            table.add(Cell.from_str(text))
        assert table.column_widths == [10, 1]
        assert table.render() == "abc        x\nabcdefghij y\n"

    def test_right_aligned_column(self) -> None:
        table = LongFormatGrid(3)
        for cell in (
            Cell.from_num(1),
            Cell.from_str("a"),
            Cell.from_str("n1"),
            Cell.from_num(100),
            Cell.from_str("bb"),
            Cell.from_str("n2"),
        ):
            table.add(cell)
        assert table.render() == "  1 a  n1\n100 bb n2\n"

    def test_last_column_is_never_padded(self) -> None:
        table = LongFormatGrid(2)
        for text in ("a", "short", "b", "much-longer-name"):
            table.add(Cell.from_str(text))
        assert table.render().splitlines() == ["a short", "b much-longer-name"]

    def test_num_entries(self) -> None:
        table = LongFormatGrid()
        assert table.num_columns == LONG_FORMAT_COLUMNS
        for _ in range(14):
            table.add(Cell.from_str("x"))
        assert table.num_entries == 2

    def test_empty_table_renders_nothing(self) -> None:
        assert LongFormatGrid().render() == ""


class TestLongFormat:
    def test_default_columns(self) -> None:
        out = io.StringIO()
        entries = [_entry("a", 5), _entry("bb", 12345, owner="nobody")]
        long_format(entries, Config(output_format=OutputFormat.LONG), out)
        assert out.getvalue() == (
            "-rw-r--r-- 1 root   staff     5 Jan  1  2020 a\n"
            "-rw-r--r-- 1 nobody staff 12345 Jan  1  2020 bb\n"
        )

    def test_without_owner_and_group(self) -> None:
        out = io.StringIO()
        config = Config(output_format=OutputFormat.LONG, list_owner=False, list_group=False)
        long_format([_entry("a", 5)], config, out)
        assert out.getvalue() == "-rw-r--r-- 1 5 Jan  1  2020 a\n"

    def test_missing_metadata_uses_placeholders(self) -> None:
        out = io.StringIO()
        long_format([Entry.from_name("ghost")], Config(output_format=OutputFormat.LONG), out)
        assert out.getvalue() == "?????????? ? ? ? ? ? ghost\n"

    def test_inode_and_allocated_size_prepended(self) -> None:
        entry = _entry("a", 5)
        entry.cells.inode = Cell.from_num(42)
        entry.cells.allocated_size = Cell.from_num(8)
        config = Config(output_format=OutputFormat.LONG, list_inode=True, list_allocated_size=True)
        out = io.StringIO()
        long_format([entry], config, out)
        assert out.getvalue() == "42 8 -rw-r--r-- 1 root staff 5 Jan  1  2020 a\n"
