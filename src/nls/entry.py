"""Entry model and the resolver that builds entries from the filesystem."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Any

import click

from nls.accounts import AccountCache
from nls.config import AllocatedSizeBlocks, Config, TimestampUsed
from nls.mode import rwx_mode_cell, unknown_mode_cell
from nls.output.cell import Alignment, Cell
from nls.output.format_filename import format_filename
from nls.output.format_size import format_size
from nls.output.format_timestamp import format_timestamp


@dataclass
class EntryCells:
    """Pre-rendered cells for one entry.

    Only the slots the active output format needs are filled; the
    ``*_or_error`` accessors substitute a placeholder for a missing one.
    """

    name: Cell
    mode: Cell | None = None
    nlink: Cell | None = None
    owner: Cell | None = None
    group: Cell | None = None
    size: Cell | None = None
    timestamp: Cell | None = None
    inode: Cell | None = None
    allocated_size: Cell | None = None

    def mode_or_error(self) -> Cell:
        return self.mode if self.mode is not None else unknown_mode_cell()

    def nlink_or_error(self) -> Cell:
        return self.nlink if self.nlink is not None else Cell.error_cell(Alignment.RIGHT)

    def owner_or_error(self) -> Cell:
        return self.owner if self.owner is not None else Cell.error_cell(Alignment.LEFT)

    def group_or_error(self) -> Cell:
        return self.group if self.group is not None else Cell.error_cell(Alignment.LEFT)

    def size_or_error(self) -> Cell:
        return self.size if self.size is not None else Cell.error_cell(Alignment.RIGHT)

    def timestamp_or_error(self) -> Cell:
        if self.timestamp is not None:
            return self.timestamp
        return Cell.error_cell(Alignment.LEFT)

    def inode_or_error(self) -> Cell:
        return self.inode if self.inode is not None else Cell.error_cell(Alignment.RIGHT)

    def allocated_size_or_error(self) -> Cell:
        if self.allocated_size is not None:
            return self.allocated_size
        return Cell.error_cell(Alignment.RIGHT)


@dataclass
class Entry:
    name: str
    cells: EntryCells
    path: str = ""
    size: int | None = None
    allocated_size: int | None = None
    timestamp: int | None = None
    ino: int | None = None
    sort_key: str = ""

    def __post_init__(self) -> None:
        if not self.sort_key:
            self.sort_key = self.name.casefold()
        if not self.path:
            self.path = self.name

    @classmethod
    def from_name(cls, name: str, **fields: Any) -> Entry:
        """An entry whose only cell is its unstyled name."""
        return cls(name=name, cells=EntryCells(name=Cell.from_str(name)), **fields)


def allocated_size(st: os.stat_result, blocks: AllocatedSizeBlocks) -> int | None:
    """Return the allocated size from ``st_blocks`` (512-byte units)."""
    st_blocks = getattr(st, "st_blocks", None)
    if st_blocks is None:
        return None
    match blocks:
        case AllocatedSizeBlocks.POSIX:
            return st_blocks
        case AllocatedSizeBlocks.KIBIBYTES:
            return math.ceil(st_blocks * 512 / 1024)
        case AllocatedSizeBlocks.RAW:
            return st_blocks * 512


def timestamp_of(st: os.stat_result, used: TimestampUsed) -> int | None:
    match used:
        case TimestampUsed.ACCESSED:
            return int(st.st_atime)
        case TimestampUsed.CHANGED:
            return int(st.st_ctime)
        case TimestampUsed.MODIFIED:
            return int(st.st_mtime)
        case TimestampUsed.CREATED:
            birthtime = getattr(st, "st_birthtime", None)
            return None if birthtime is None else int(birthtime)


class MetadataResolver:
    """Builds :class:`Entry` objects for one invocation.

    Owns the account cache, so owner and group names are looked up at most
    once per id for the lifetime of the resolver.
    """

    def __init__(self, config: Config, accounts: AccountCache | None = None) -> None:
        self.config = config
        if accounts is None:
            accounts = AccountCache(
                numeric=config.numeric_uid_gid,
                owner_style=config.theme.owner,
                group_style=config.theme.group,
            )
        self.accounts = accounts

    def from_dir_entry(self, dent: os.DirEntry[str]) -> Entry:
        try:
            st = dent.stat(follow_symlinks=self.config.dereference)
        except OSError as exc:
            click.echo(f"nls: unable to get metadata of '{dent.name}': {exc}", err=True)
            st = None
        return self.build(dent.name, dent.path, st)

    def from_path(
        self,
        path: str,
        name: str | None = None,
        *,
        follow_symlinks: bool | None = None,
    ) -> Entry:
        """Resolve *path*, displaying it as *name* (the path itself by default)."""
        name = path if name is None else name
        if follow_symlinks is None:
            follow_symlinks = self.config.dereference
        try:
            st = os.stat(path, follow_symlinks=follow_symlinks)
        except OSError as exc:
            click.echo(f"nls: unable to get metadata of '{name}': {exc}", err=True)
            st = None
        return self.build(name, path, st)

    def build(self, name: str, path: str, st: os.stat_result | None) -> Entry:
        if st is None:
            return Entry.from_name(name, path=path)

        config = self.config
        theme = config.theme
        alloc = allocated_size(st, config.allocated_size_blocks)
        timestamp = timestamp_of(st, config.timestamp_used)

        cells = EntryCells(name=format_filename(name, st, config, path=path))
        if config.list_inode:
            cells.inode = Cell.from_num(st.st_ino, theme.inode)
        if config.list_allocated_size and alloc is not None:
            cells.allocated_size = format_size(alloc, config.size_format)
        if config.output_format.is_long:
            cells.mode = rwx_mode_cell(st.st_mode, config.ls_colors, theme)
            cells.nlink = Cell.from_num(st.st_nlink, theme.nlink)
            if config.list_owner:
                cells.owner = self.accounts.owner_cell(st.st_uid)
            if config.list_group:
                cells.group = self.accounts.group_cell(st.st_gid)
            cells.size = format_size(st.st_size, config.size_format, theme.size)
            if timestamp is not None:
                cells.timestamp = format_timestamp(timestamp, theme.time)

        return Entry(
            name=name,
            path=path,
            size=st.st_size,
            allocated_size=alloc,
            timestamp=timestamp,
            ino=st.st_ino,
            cells=cells,
        )
