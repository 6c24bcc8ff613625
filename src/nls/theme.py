"""Styles for metadata columns and icons for file names."""

from __future__ import annotations

from dataclasses import dataclass

_COMPRESSED = "\uf410"
_FONT = "\ue659"
_GIT = "\ue702"
_IMAGE = "\uf1c5"
_PYTHON = "\ue73c"
_RUST = "\ue7a8"
_SHELL = "\uebca"
_VIM = "\ue7c5"

_FILE_NAME_ICONS: dict[str, str] = {
    ".bash_aliases": _SHELL,
    ".bash_history": _SHELL,
    ".bash_login": _SHELL,
    ".bash_logout": _SHELL,
    ".bash_profile": _SHELL,
    ".bashrc": _SHELL,
    "Cargo.lock": _RUST,
    "Cargo.toml": _RUST,
    ".gitattributes": _GIT,
    ".gitconfig": _GIT,
    ".gitignore": _GIT,
    ".gitmodules": _GIT,
    ".login": _SHELL,
    ".logout": _SHELL,
    "profile": _SHELL,
    ".profile": _SHELL,
    "pyproject.toml": _PYTHON,
    "requirements.txt": _PYTHON,
    ".vimrc": _VIM,
    "_vimrc": _VIM,
    ".zlogin": _SHELL,
    ".zlogout": _SHELL,
    ".zprofile": _SHELL,
    ".zshenv": _SHELL,
    ".zshrc": _SHELL,
    ".zsh_history": _SHELL,
}

_EXTENSION_ICONS: dict[str, str] = {
    "7z": _COMPRESSED,
    "bash": _SHELL,
    "bz2": _COMPRESSED,
    "c": "\ue649",
    "cpp": "\ue646",
    "css": "\ue749",
    "gz": _COMPRESSED,
    "html": "\ue736",
    "json": "\ue60b",
    "jpeg": _IMAGE,
    "jpg": _IMAGE,
    "js": "\ue74e",
    "lock": "\ue672",
    "lua": "\ue620",
    "md": "\ue73e",
    "mp3": "\uf001",
    "mp4": "\uf03d",
    "otf": _FONT,
    "pdf": "\uf1c1",
    "png": _IMAGE,
    "py": _PYTHON,
    "rs": _RUST,
    "sh": _SHELL,
    "ttf": _FONT,
    "vim": _VIM,
    "xz": _COMPRESSED,
    "zip": _COMPRESSED,
    "zsh": _SHELL,
}

_DIR_ICONS: dict[str, str] = {
    "bash-completion": _SHELL,
    ".cargo": _RUST,
    "fonts": _FONT,
    ".git": "\ue5fb",
    ".github": "\ue65b",
    "__pycache__": _PYTHON,
    ".rustup": _RUST,
    ".venv": _PYTHON,
    "vim": _VIM,
    ".vim": _VIM,
    "zsh": _SHELL,
}


@dataclass
class ThemeConfig:
    inode: str | None = None
    nlink: str | None = None
    owner: str | None = None
    group: str | None = None
    size: str | None = None
    time: str | None = None
    read: str | None = None
    write: str | None = None
    execute: str | None = None
    no_permission: str | None = None
    setuid: str | None = None
    setgid: str | None = None
    sticky: str | None = None

    @classmethod
    def with_default_colors(cls) -> ThemeConfig:
        return cls(
            inode="32;1",
            nlink="36;1",
            owner="31",
            group="35",
            size="36",
            time="33",
            read="33;1",
            write="31;1",
            execute="32;1",
            no_permission="37;1;2",
            setuid="35;1",
            setgid="35;1",
            sticky="35;1",
        )


@dataclass
class IconTheme:
    """Icon per entry kind; a theme with no file icon shows no icons at all.

    Icons assume a Nerd Font and are counted as one column wide.
    """

    file: str | None = None
    dir: str | None = None
    symlink: str | None = None
    block_device: str | None = None
    char_device: str | None = None
    fifo: str | None = None
    socket: str | None = None

    @classmethod
    def with_default_icons(cls) -> IconTheme:
        return cls(
            file="\uf4a5",
            dir="\uf4d3",
            symlink="\uf481",
            block_device="\U000f129f",
            char_device="\U000f065c",
            fifo="|",
            socket="=",
        )

    def file_icon(self, file_name: str, extension: str) -> str | None:
        if self.file is None:
            return None
        icon = _FILE_NAME_ICONS.get(file_name)
        if icon is not None:
            return icon
        if not extension:
            return self.file
        return _EXTENSION_ICONS.get(extension, self.file)

    def dir_icon(self, file_name: str) -> str | None:
        if self.dir is None:
            return None
        return _DIR_ICONS.get(file_name, self.dir)
