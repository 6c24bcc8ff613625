"""LS_COLORS parsing.

Maps entry kinds and file extensions to SGR style strings such as ``01;34``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

log = logging.getLogger(__name__)

# GNU dircolors defaults, used when $LS_COLORS is unset.
DEFAULT_LS_COLORS = (
    "di=01;34:ln=01;36:pi=40;33:so=01;35:bd=40;33;01:cd=40;33;01:"
    "su=37;41:sg=30;43:tw=30;42:ow=34;42:st=37;44:ex=01;32"
)

_KEYS: dict[str, str] = {
    "fi": "file",
    "di": "dir",
    "ln": "symlink",
    "bd": "block_device",
    "cd": "char_device",
    "pi": "fifo",
    "so": "socket",
    "su": "setuid",
    "sg": "setgid",
    "mh": "multiple_hard_links",
    "mg": "multiple_hard_links",
    "tw": "dir_sticky_and_other_writable",
    "ow": "dir_other_writable",
    "st": "dir_sticky",
    "ex": "exec",
}


@dataclass
class LsColors:
    file: str | None = None
    dir: str | None = None
    symlink: str | None = None
    block_device: str | None = None
    char_device: str | None = None
    fifo: str | None = None
    socket: str | None = None
    setuid: str | None = None
    setgid: str | None = None
    multiple_hard_links: str | None = None
    dir_sticky_and_other_writable: str | None = None
    dir_other_writable: str | None = None
    dir_sticky: str | None = None
    exec: str | None = None
    extension: dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, text: str) -> LsColors:
        colors = cls()
        for item in text.split(":"):
            key, sep, value = item.partition("=")
            if not sep:
                continue
            attr = _KEYS.get(key)
            if attr is not None:
                setattr(colors, attr, value)
            elif key.startswith("*."):
                colors.extension[key[2:]] = value
            else:
                log.debug("ignoring LS_COLORS key %r", key)
        return colors

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> LsColors:
        env = os.environ if environ is None else environ
        return cls.parse(env.get("LS_COLORS") or DEFAULT_LS_COLORS)

    def extension_style(self, extension: str) -> str | None:
        return self.extension.get(extension, self.file)


def file_extension(file_name: str) -> str:
    """Return the text after the last dot, ignoring a leading dot."""
    stem, sep, extension = file_name.rpartition(".")
    if not sep or not stem:
        return ""
    return extension
