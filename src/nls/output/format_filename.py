"""File name cells: LS_COLORS style, optional icon, indicator and link target."""

from __future__ import annotations

import os
import stat
from typing import TYPE_CHECKING

import click

from nls.config import (
    INDICATOR_DIR,
    INDICATOR_EXEC,
    INDICATOR_FIFO,
    INDICATOR_SOCKET,
    INDICATOR_SYMLINK,
)
from nls.ls_colors import file_extension
from nls.output.cell import RESET, Alignment, Cell, display_width

if TYPE_CHECKING:
    from nls.config import Config

_EXEC_MASK = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def create_filename_cell(file_name: str, style: str | None, icon: str | None) -> Cell:
    """Build ``<style><icon> <name><reset>``; the icon and its space count as 2."""
    cell = Cell(alignment=Alignment.LEFT)
    if style is not None:
        cell.push_str_with_width(f"\x1b[{style}m", 0)
    if icon is not None:
        cell.push_str_with_width(f"{icon} ", 2)
    cell.push_str_with_width(file_name, display_width(file_name))
    if style is not None:
        cell.push_str_with_width(RESET, 0)
    return cell


def format_filename(
    file_name: str,
    st: os.stat_result,
    config: Config,
    *,
    path: str | os.PathLike[str] | None = None,
) -> Cell:
    """Format *file_name* according to the type and mode bits in *st*.

    *path* is needed only to resolve symlink targets in long format.
    """
    mode = st.st_mode
    if stat.S_ISREG(mode):
        return _format_regular_file(file_name, st, config)
    if stat.S_ISDIR(mode):
        return _format_dir(file_name, mode, config)
    if stat.S_ISLNK(mode):
        return _format_symlink(file_name, path, config)
    return _format_special_file(file_name, mode, config)


def _format_regular_file(file_name: str, st: os.stat_result, config: Config) -> Cell:
    ls_colors = config.ls_colors
    mode = st.st_mode
    extension = file_extension(file_name)
    icon = config.icons.file_icon(file_name, extension)

    if mode & stat.S_ISUID:
        style = ls_colors.setuid
    elif mode & stat.S_ISGID:
        style = ls_colors.setgid
    elif mode & _EXEC_MASK:
        style = ls_colors.exec
    elif st.st_nlink > 1:
        style = ls_colors.multiple_hard_links
    elif not extension:
        style = ls_colors.file
    else:
        style = ls_colors.extension_style(extension)

    cell = create_filename_cell(file_name, style, icon)
    if config.indicator_style.marks_others and mode & _EXEC_MASK:
        cell.push_char(INDICATOR_EXEC)
    return cell


def _format_dir(file_name: str, mode: int, config: Config) -> Cell:
    ls_colors = config.ls_colors
    match (bool(mode & stat.S_ISVTX), bool(mode & stat.S_IWOTH)):
        case (False, False):
            style = ls_colors.dir
        case (True, False):
            style = ls_colors.dir_sticky
        case (False, True):
            style = ls_colors.dir_other_writable
        case (True, True):
            style = ls_colors.dir_sticky_and_other_writable

    cell = create_filename_cell(file_name, style, config.icons.dir_icon(file_name))
    if config.indicator_style.marks_dirs:
        cell.push_char(INDICATOR_DIR)
    return cell


def _format_symlink(
    file_name: str, path: str | os.PathLike[str] | None, config: Config
) -> Cell:
    is_long = config.output_format.is_long
    cell = create_filename_cell(file_name, config.ls_colors.symlink, config.icons.symlink)

    if config.indicator_style.marks_others and not is_long:
        cell.push_char(INDICATOR_SYMLINK)

    if is_long and path is not None:
        cell.push_str_with_width(" -> ", 4)
        try:
            target = os.readlink(path)
        except OSError as exc:
            cell.push_char("?")
            click.echo(f"nls: unable to readlink '{os.fspath(path)}': {exc}", err=True)
            return cell
        try:
            target_st = os.stat(path)
        except OSError as exc:
            cell.push_str(target)
            click.echo(
                f"nls: unable to get link metadata of '{os.fspath(path)}': {exc}", err=True
            )
            return cell
        cell.append(format_filename(target, target_st, config, path=path))

    return cell


def _format_special_file(file_name: str, mode: int, config: Config) -> Cell:
    ls_colors = config.ls_colors
    icons = config.icons
    marks_others = config.indicator_style.marks_others

    if stat.S_ISBLK(mode):
        return create_filename_cell(file_name, ls_colors.block_device, icons.block_device)
    if stat.S_ISCHR(mode):
        return create_filename_cell(file_name, ls_colors.char_device, icons.char_device)
    if stat.S_ISFIFO(mode):
        cell = create_filename_cell(file_name, ls_colors.fifo, icons.fifo)
        if marks_others:
            cell.push_char(INDICATOR_FIFO)
        return cell
    if stat.S_ISSOCK(mode):
        cell = create_filename_cell(file_name, ls_colors.socket, icons.socket)
        if marks_others:
            cell.push_char(INDICATOR_SOCKET)
        return cell
    return Cell.from_str(file_name)
