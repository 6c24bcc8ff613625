"""Output dispatch: sort entries, then render them in the configured format."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from nls.config import OutputFormat
from nls.output.column import across_format, single_column_format, vertical_format
from nls.output.format_size import format_total
from nls.output.long import long_format
from nls.output.sort import sort_entries

if TYPE_CHECKING:
    from nls.config import Config
    from nls.entry import Entry


def output(entries: list[Entry], config: Config, out: TextIO) -> None:
    if not entries:
        return

    sort_entries(entries, config.sorting_order, config.reverse)

    match config.output_format:
        case OutputFormat.SINGLE_COLUMN:
            single_column_format(entries, config, out)
        case OutputFormat.VERTICAL:
            vertical_format(entries, config, out)
        case OutputFormat.ACROSS:
            across_format(entries, config, out)
        case OutputFormat.LONG:
            long_format(entries, config, out)


def print_total(entries: list[Entry], config: Config, out: TextIO) -> None:
    out.write(format_total(entries, config.size_format))
    out.write("\n")
