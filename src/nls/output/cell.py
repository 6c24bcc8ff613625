"""Renderable cell with an explicit display width.

A cell's ``contents`` may carry ANSI style sequences, so its length in
characters can exceed ``width``, the number of terminal columns it occupies.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from wcwidth import wcswidth, wcwidth

RESET = "\x1b[0m"


class Alignment(Enum):
    LEFT = "left"
    RIGHT = "right"


def display_width(text: str) -> int:
    """Return the number of terminal columns *text* occupies.

    Non-printable characters count as zero instead of poisoning the total.
    """
    width = wcswidth(text)
    if width >= 0:
        return width
    return sum(max(wcwidth(ch), 0) for ch in text)


def styled(text: str, style: str | None) -> str:
    """Wrap *text* in an SGR sequence for *style*, or return it unchanged."""
    if style is None:
        return text
    return f"\x1b[{style}m{text}{RESET}"


@dataclass
class Cell:
    contents: str = ""
    width: int = 0
    alignment: Alignment = Alignment.LEFT

    @classmethod
    def from_str(cls, value: str, style: str | None = None) -> Cell:
        return cls(styled(value, style), display_width(value), Alignment.LEFT)

    @classmethod
    def from_ascii_str(cls, value: str, style: str | None = None) -> Cell:
        """Build a cell whose width is its length; *value* must be ASCII."""
        return cls(styled(value, style), len(value), Alignment.LEFT)

    @classmethod
    def from_num(cls, value: int, style: str | None = None) -> Cell:
        digits = str(value)
        return cls(styled(digits, style), len(digits), Alignment.RIGHT)

    @classmethod
    def error_cell(cls, alignment: Alignment) -> Cell:
        return cls("?", 1, alignment)

    def copy(self) -> Cell:
        return replace(self)

    def append(self, other: Cell) -> None:
        self.contents += other.contents
        self.width += other.width

    def push_str(self, value: str) -> None:
        self.contents += value
        self.width += display_width(value)

    def push_str_with_width(self, value: str, width: int) -> None:
        """Append *value* counting it as *width* columns.

        Used when the caller already knows the width, e.g. an icon followed
        by a space, or a bare style sequence (width 0).
        """
        self.contents += value
        self.width += width

    def push_char(self, ch: str) -> None:
        self.contents += ch
        self.width += 1

    def push_char_with_style(self, ch: str, style: str | None) -> None:
        self.contents += styled(ch, style)
        self.width += 1

    def pad_to_width(self, width: int) -> None:
        if width > self.width:
            self.contents += " " * (width - self.width)
            self.width = width

    def paint(self, style: str) -> None:
        self.contents = f"\x1b[{style}m{self.contents}{RESET}"

    def render(self, width: int) -> str:
        """Return the contents padded to *width* according to the alignment."""
        if width <= self.width:
            return self.contents
        padding = " " * (width - self.width)
        match self.alignment:
            case Alignment.LEFT:
                return self.contents + padding
            case Alignment.RIGHT:
                return padding + self.contents
