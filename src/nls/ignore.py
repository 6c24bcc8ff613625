"""Ignore-file rules (``.ignore``, ``.gitignore``) for one directory listing."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pathspec

from nls.config import Config

log = logging.getLogger(__name__)


class IgnoreRules:
    """Ordered gitignore-style pattern files that apply to one directory.

    ``sources`` holds ``(base_dir, matcher)`` pairs, highest precedence first:
    ``.ignore`` files from the deepest directory up, then ``.gitignore`` files
    the same way, then ``.git/info/exclude`` and the global excludes file.
    Within one file the last matching pattern decides; across files the
    first one with a match decides.
    """

    def __init__(self, sources: list[tuple[Path, pathspec.PathSpec]]) -> None:
        self.sources = sources

    @classmethod
    def for_directory(cls, path: str, config: Config) -> IgnoreRules | None:
        """Collect the rules for *path*, or None when no ignore option is on."""
        if not (config.git_ignore or config.ignore_file):
            return None

        directory = Path(os.path.abspath(path))
        # Parent directories are only consulted together with --gitignore.
        dirs = [directory, *directory.parents] if config.git_ignore else [directory]
        repo_root = _find_repo_root(directory)

        sources: list[tuple[Path, pathspec.PathSpec]] = []
        if config.ignore_file:
            sources.extend(_load_each(dirs, ".ignore"))
        if config.git_ignore and repo_root is not None:
            in_repo = [d for d in dirs if d == repo_root or repo_root in d.parents]
            sources.extend(_load_each(in_repo, ".gitignore"))
            for extra in (repo_root / ".git" / "info" / "exclude", _global_excludes_file()):
                matcher = _load(extra)
                if matcher is not None:
                    sources.append((repo_root, matcher))
        return cls(sources)

    def is_ignored(self, path: str, is_dir: bool) -> bool:
        target = Path(os.path.abspath(path))
        for base, matcher in self.sources:
            relative = target.relative_to(base).as_posix()
            if is_dir:
                relative += "/"
            verdict = _last_match(matcher, relative)
            if verdict is not None:
                return verdict
        return False


def _last_match(matcher: pathspec.PathSpec, relative: str) -> bool | None:
    verdict = None
    for pattern in matcher.patterns:
        if pattern.include is not None and pattern.match_file(relative) is not None:
            verdict = pattern.include
    return verdict


def _find_repo_root(directory: Path) -> Path | None:
    for candidate in (directory, *directory.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


def _global_excludes_file() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "git" / "ignore"


def _load(path: Path) -> pathspec.PathSpec | None:
    try:
        with path.open(encoding="utf-8", errors="replace") as f:
            matcher = pathspec.GitIgnoreSpec.from_lines(f)
    except OSError:
        return None
    log.debug("loaded %d ignore patterns from %s", len(matcher.patterns), path)
    return matcher


def _load_each(dirs: list[Path], file_name: str) -> Iterator[tuple[Path, pathspec.PathSpec]]:
    for directory in dirs:
        matcher = _load(directory / file_name)
        if matcher is not None:
            yield directory, matcher
