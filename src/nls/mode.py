"""Permission string (``drwxr-xr-x``) cells."""

from __future__ import annotations

import stat

from nls.ls_colors import LsColors
from nls.output.cell import Cell
from nls.theme import ThemeConfig


def _file_type_char(st_mode: int, ls_colors: LsColors) -> tuple[str, str | None]:
    match stat.S_IFMT(st_mode):
        case stat.S_IFREG:
            return "-", ls_colors.file
        case stat.S_IFDIR:
            return "d", ls_colors.dir
        case stat.S_IFLNK:
            return "l", ls_colors.symlink
        case stat.S_IFBLK:
            return "b", ls_colors.block_device
        case stat.S_IFCHR:
            return "c", ls_colors.char_device
        case stat.S_IFIFO:
            return "p", ls_colors.file
        case stat.S_IFSOCK:
            return "s", ls_colors.socket
        case _:
            return "?", None


def _push_special(
    cell: Cell,
    executable: bool,
    special: bool,
    lower: str,
    upper: str,
    special_style: str | None,
    theme: ThemeConfig,
) -> None:
    match (executable, special):
        case (False, False):
            cell.push_char_with_style("-", theme.no_permission)
        case (True, False):
            cell.push_char_with_style("x", theme.execute)
        case (False, True):
            cell.push_char_with_style(upper, special_style)
        case (True, True):
            cell.push_char_with_style(lower, special_style)


def rwx_mode_cell(st_mode: int, ls_colors: LsColors, theme: ThemeConfig) -> Cell:
    cell = Cell()
    ch, style = _file_type_char(st_mode, ls_colors)
    cell.push_char_with_style(ch, style)

    triads = (
        (stat.S_IRUSR, stat.S_IWUSR, stat.S_IXUSR, stat.S_ISUID, "s", "S", theme.setuid),
        (stat.S_IRGRP, stat.S_IWGRP, stat.S_IXGRP, stat.S_ISGID, "s", "S", theme.setgid),
        (stat.S_IROTH, stat.S_IWOTH, stat.S_IXOTH, stat.S_ISVTX, "t", "T", theme.sticky),
    )
    for read, write, execute, special, lower, upper, special_style in triads:
        if st_mode & read:
            cell.push_char_with_style("r", theme.read)
        else:
            cell.push_char_with_style("-", theme.no_permission)
        if st_mode & write:
            cell.push_char_with_style("w", theme.write)
        else:
            cell.push_char_with_style("-", theme.no_permission)
        _push_special(
            cell,
            bool(st_mode & execute),
            bool(st_mode & special),
            lower,
            upper,
            special_style,
            theme,
        )

    return cell


def unknown_mode_cell() -> Cell:
    return Cell.from_ascii_str("??????????")
