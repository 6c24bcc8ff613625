"""Single-column and multi-column (grid) output formats."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, TextIO

from nls.config import GRID_SPACING
from nls.output.cell import Cell
from nls.output.grid import Direction, Grid

if TYPE_CHECKING:
    from nls.config import Config
    from nls.entry import Entry

log = logging.getLogger(__name__)


def _num_columns(config: Config) -> int:
    return 1 + int(config.list_inode) + int(config.list_allocated_size)


def single_column_format(entries: Sequence[Entry], config: Config, out: TextIO) -> None:
    """One entry per line; inode and allocated size get their own columns."""
    num_columns = _num_columns(config)
    if num_columns == 1:
        for entry in entries:
            out.write(entry.cells.name.contents)
            out.write("\n")
        return

    grid = Grid(spacing=1, direction=Direction.LEFT_TO_RIGHT)
    for entry in entries:
        if config.list_inode:
            grid.add(entry.cells.inode_or_error())
        if config.list_allocated_size:
            grid.add(entry.cells.allocated_size_or_error())
        grid.add(entry.cells.name)
    grid.fit_into_columns(num_columns).write(out)


def vertical_format(entries: Sequence[Entry], config: Config, out: TextIO) -> None:
    multi_column_format(Direction.TOP_TO_BOTTOM, entries, config, out)


def across_format(entries: Sequence[Entry], config: Config, out: TextIO) -> None:
    multi_column_format(Direction.LEFT_TO_RIGHT, entries, config, out)


def multi_column_format(
    direction: Direction, entries: Sequence[Entry], config: Config, out: TextIO
) -> None:
    grid = Grid(spacing=GRID_SPACING, direction=direction)
    if config.list_inode or config.list_allocated_size:
        for cell in prefixed_name_cells(entries, config):
            grid.add(cell)
    else:
        for entry in entries:
            grid.add(entry.cells.name)

    display = grid.fit_into_width(config.display_width)
    if display is None:
        log.debug("no grid fits into %d columns, using a single column", config.display_width)
        single_column_format(entries, config, out)
        return
    display.write(out)


def prefixed_name_cells(entries: Sequence[Entry], config: Config) -> list[Cell]:
    """Return name cells prefixed by right-aligned inode and allocated-size cells.

    Each prefix is padded to the widest value in *entries* so the names line
    up within a grid column.
    """
    inode_cells = [entry.cells.inode_or_error() for entry in entries] if config.list_inode else []
    alloc_cells = (
        [entry.cells.allocated_size_or_error() for entry in entries]
        if config.list_allocated_size
        else []
    )
    inode_width = max((cell.width for cell in inode_cells), default=0)
    alloc_width = max((cell.width for cell in alloc_cells), default=0)

    cells: list[Cell] = []
    for index, entry in enumerate(entries):
        cell = Cell()
        if inode_cells:
            _append_right_aligned(cell, inode_cells[index], inode_width)
            cell.push_char(" ")
        if alloc_cells:
            _append_right_aligned(cell, alloc_cells[index], alloc_width)
            cell.push_char(" ")
        cell.append(entry.cells.name)
        cells.append(cell)
    return cells


def _append_right_aligned(cell: Cell, other: Cell, width: int) -> None:
    padding = max(width - other.width, 0)
    cell.push_str_with_width(" " * padding + other.contents, padding + other.width)
