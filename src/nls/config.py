"""Runtime configuration for one nls invocation.

The CLI builds a single :class:`Config` from command-line options and the
environment; every other module reads it and never mutates it.
"""

from __future__ import annotations

import shutil
import sys
from dataclasses import dataclass, field
from enum import Enum

from nls.ls_colors import LsColors
from nls.theme import IconTheme, ThemeConfig

DEFAULT_DISPLAY_WIDTH = 80
GRID_SPACING = 2


class OutputFormat(Enum):
    SINGLE_COLUMN = "single-column"
    VERTICAL = "vertical"
    ACROSS = "across"
    LONG = "long"

    @property
    def is_long(self) -> bool:
        return self is OutputFormat.LONG


class SortingOrder(Enum):
    FILE_NAME = "name"
    SIZE = "size"
    TIMESTAMP = "time"


class SizeFormat(Enum):
    RAW = "raw"
    HUMAN_READABLE = "human-readable"
    SI = "si"
    IEC = "iec"


class AllocatedSizeBlocks(Enum):
    POSIX = "posix"
    KIBIBYTES = "kibibytes"
    RAW = "raw"


class TimestampUsed(Enum):
    ACCESSED = "accessed"
    CHANGED = "changed"
    CREATED = "created"
    MODIFIED = "modified"


TIME_WORDS: dict[str, TimestampUsed] = {
    "accessed": TimestampUsed.ACCESSED,
    "atime": TimestampUsed.ACCESSED,
    "changed": TimestampUsed.CHANGED,
    "ctime": TimestampUsed.CHANGED,
    "created": TimestampUsed.CREATED,
    "btime": TimestampUsed.CREATED,
    "modified": TimestampUsed.MODIFIED,
    "mtime": TimestampUsed.MODIFIED,
}


INDICATOR_DIR = "/"
INDICATOR_SYMLINK = "@"
INDICATOR_EXEC = "*"
INDICATOR_SOCKET = "="
INDICATOR_FIFO = "|"


class IndicatorStyle(Enum):
    NEVER = "never"
    SLASH = "slash"
    CLASSIFY = "classify"

    @property
    def marks_dirs(self) -> bool:
        return self in (IndicatorStyle.SLASH, IndicatorStyle.CLASSIFY)

    @property
    def marks_others(self) -> bool:
        return self is IndicatorStyle.CLASSIFY


@dataclass
class Config:
    is_atty: bool = False
    color: bool = False
    dereference: bool = False
    dereference_cmdline_symlink: bool = False
    git_ignore: bool = False
    ignore_file: bool = False
    ignore_globs: list[str] = field(default_factory=list)
    ignore_hidden: bool = True
    list_current_and_parent_dirs: bool = False
    list_dir: bool = True
    recursive: bool = False
    max_depth: int | None = None
    indicator_style: IndicatorStyle = IndicatorStyle.NEVER
    numeric_uid_gid: bool = False
    output_format: OutputFormat = OutputFormat.SINGLE_COLUMN
    reverse: bool = False
    list_inode: bool = False
    list_allocated_size: bool = False
    allocated_size_blocks: AllocatedSizeBlocks = AllocatedSizeBlocks.POSIX
    list_owner: bool = True
    list_group: bool = True
    size_format: SizeFormat = SizeFormat.RAW
    sorting_order: SortingOrder = SortingOrder.FILE_NAME
    timestamp_used: TimestampUsed = TimestampUsed.MODIFIED
    display_width: int = DEFAULT_DISPLAY_WIDTH
    ls_colors: LsColors = field(default_factory=LsColors)
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    icons: IconTheme = field(default_factory=IconTheme)


def stdout_is_tty() -> bool:
    return sys.stdout.isatty()


def terminal_width() -> int:
    """Return the terminal width, honouring $COLUMNS, or the default."""
    return shutil.get_terminal_size((DEFAULT_DISPLAY_WIDTH, 24)).columns or DEFAULT_DISPLAY_WIDTH
