"""Owner and group name lookup, memoised per invocation."""

from __future__ import annotations

import logging
import sys

from nls.output.cell import Cell

_WIN: bool = sys.platform == "win32"

if not _WIN:
    import grp
    import pwd

log = logging.getLogger(__name__)


class AccountCache:
    """Name cells keyed by uid/gid.

    Every lookup hands out a copy, so callers may pad or paint the cell
    without touching the cached one.
    """

    def __init__(
        self,
        *,
        numeric: bool = False,
        owner_style: str | None = None,
        group_style: str | None = None,
    ) -> None:
        self.numeric = numeric
        self.owner_style = owner_style
        self.group_style = group_style
        self._users: dict[int, Cell] = {}
        self._groups: dict[int, Cell] = {}

    def owner_cell(self, uid: int) -> Cell:
        cell = self._users.get(uid)
        if cell is None:
            log.debug("uid %d is not cached", uid)
            cell = self._lookup_user(uid)
            self._users[uid] = cell
        return cell.copy()

    def group_cell(self, gid: int) -> Cell:
        cell = self._groups.get(gid)
        if cell is None:
            log.debug("gid %d is not cached", gid)
            cell = self._lookup_group(gid)
            self._groups[gid] = cell
        return cell.copy()

    def _lookup_user(self, uid: int) -> Cell:
        if self.numeric or _WIN:
            return Cell.from_num(uid, self.owner_style)
        try:
            name = pwd.getpwuid(uid).pw_name
        except KeyError:
            return Cell.from_num(uid, self.owner_style)
        return Cell.from_str(name, self.owner_style)

    def _lookup_group(self, gid: int) -> Cell:
        if self.numeric or _WIN:
            return Cell.from_num(gid, self.group_style)
        try:
            name = grp.getgrgid(gid).gr_name
        except KeyError:
            return Cell.from_num(gid, self.group_style)
        return Cell.from_str(name, self.group_style)
