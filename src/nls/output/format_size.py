"""Size formatting: raw byte counts and rounded-up scaled units."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from nls.config import SizeFormat
from nls.output.cell import Alignment, Cell

if TYPE_CHECKING:
    from nls.entry import Entry

_HUMAN_UNITS = ("K", "M", "G", "T", "P", "E", "Z", "Y")
_SI_UNITS = ("k", "M", "G", "T", "P", "E", "Z", "Y")
_IEC_UNITS = ("Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi")


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def scaled_size(size: int, base: int, units: tuple[str, ...]) -> str:
    """Format *size* in the largest unit it reaches, always rounding up.

    Values under 10 keep one decimal (``2.8G``); larger ones are whole
    numbers (``191M``). Values below *base* are printed as-is.
    """
    if size < base:
        return str(size)

    exponent = 1
    while exponent < len(units) and size >= base ** (exponent + 1):
        exponent += 1

    while True:
        divisor = base**exponent
        tenths = _ceil_div(size * 10, divisor)
        if tenths < 100:
            return f"{tenths // 10}.{tenths % 10}{units[exponent - 1]}"
        whole = _ceil_div(size, divisor)
        if whole < base or exponent == len(units):
            return f"{whole}{units[exponent - 1]}"
        # Rounding up reached the next unit, e.g. 1023.5K -> 1.0M.
        exponent += 1


def size_string(size: int, size_format: SizeFormat) -> str:
    match size_format:
        case SizeFormat.RAW:
            return str(size)
        case SizeFormat.HUMAN_READABLE:
            return scaled_size(size, 1024, _HUMAN_UNITS)
        case SizeFormat.SI:
            return scaled_size(size, 1000, _SI_UNITS)
        case SizeFormat.IEC:
            return scaled_size(size, 1024, _IEC_UNITS)


def format_size(size: int, size_format: SizeFormat, style: str | None = None) -> Cell:
    cell = Cell.from_ascii_str(size_string(size, size_format), style)
    cell.alignment = Alignment.RIGHT
    return cell


def format_total(entries: Iterable[Entry], size_format: SizeFormat) -> str:
    """Return the ``total <size>`` summary line for *entries*."""
    total = sum(entry.allocated_size for entry in entries if entry.allocated_size is not None)
    return f"total {size_string(total, size_format)}"
