"""Long-format table: one row of metadata columns per entry."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, TextIO

from nls.output.cell import Cell

if TYPE_CHECKING:
    from nls.config import Config
    from nls.entry import Entry

log = logging.getLogger(__name__)

LONG_FORMAT_COLUMNS = 7


class LongFormatGrid:
    """Fixed-column table; cells are added row by row, column by column."""

    def __init__(self, num_columns: int = LONG_FORMAT_COLUMNS) -> None:
        self.num_columns = num_columns
        self.cells: list[Cell] = []
        self.column_widths = [0] * num_columns

    @property
    def num_entries(self) -> int:
        return -(-len(self.cells) // self.num_columns)

    def add(self, cell: Cell) -> None:
        column = len(self.cells) % self.num_columns
        self.column_widths[column] = max(self.column_widths[column], cell.width)
        self.cells.append(cell)

    def render(self) -> str:
        last_column = self.num_columns - 1
        parts: list[str] = []
        for index, cell in enumerate(self.cells):
            column = index % self.num_columns
            if column == last_column:
                parts.append(cell.contents)
                parts.append("\n")
            else:
                parts.append(cell.render(self.column_widths[column]))
                parts.append(" ")
        return "".join(parts)

    def write(self, out: TextIO) -> None:
        out.write(self.render())


def long_format(entries: Sequence[Entry], config: Config, out: TextIO) -> None:
    num_columns = (
        5
        + int(config.list_inode)
        + int(config.list_allocated_size)
        + int(config.list_owner)
        + int(config.list_group)
    )
    table = LongFormatGrid(num_columns)
    log.debug("long format with %d columns", num_columns)

    for entry in entries:
        cells = entry.cells
        if config.list_inode:
            table.add(cells.inode_or_error())
        if config.list_allocated_size:
            table.add(cells.allocated_size_or_error())
        table.add(cells.mode_or_error())
        table.add(cells.nlink_or_error())
        if config.list_owner:
            table.add(cells.owner_or_error())
        if config.list_group:
            table.add(cells.group_or_error())
        table.add(cells.size_or_error())
        table.add(cells.timestamp_or_error())
        table.add(cells.name)

    table.write(out)
