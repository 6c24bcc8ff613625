"""Entry ordering: by name, size or timestamp, then optional reversal."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nls.config import SortingOrder

if TYPE_CHECKING:
    from nls.entry import Entry

log = logging.getLogger(__name__)


def _file_name_key(entry: Entry) -> str:
    return entry.sort_key


def _size_key(entry: Entry) -> tuple[bool, int, str]:
    # Largest first; unknown sizes after every known one.
    return (entry.size is None, -(entry.size or 0), entry.sort_key)


def _timestamp_key(entry: Entry) -> tuple[bool, int, str]:
    return (entry.timestamp is None, -(entry.timestamp or 0), entry.sort_key)


def sort_entries(entries: list[Entry], sorting_order: SortingOrder, reverse: bool = False) -> None:
    """Sort *entries* in place.

    Size and timestamp orders break ties by ascending name. Reversal is
    applied to the finished order, so it flips tie groups as well.
    """
    if len(entries) < 2:
        return

    match sorting_order:
        case SortingOrder.FILE_NAME:
            entries.sort(key=_file_name_key)
            log.debug("sorted by file name")
        case SortingOrder.SIZE:
            entries.sort(key=_size_key)
            log.debug("sorted by size")
        case SortingOrder.TIMESTAMP:
            entries.sort(key=_timestamp_key)
            log.debug("sorted by time")

    if reverse:
        entries.reverse()
