"""Directory listing pass: read, filter, resolve, then hand off to output."""

from __future__ import annotations

import fnmatch
import logging
import os
from typing import TextIO

import click

from nls.config import Config
from nls.entry import Entry, MetadataResolver
from nls.ignore import IgnoreRules
from nls.output import output, print_total

log = logging.getLogger(__name__)


def is_listed(file_name: str, config: Config) -> bool:
    """Return False for hidden names (unless shown) and ``-I`` matches."""
    if config.ignore_hidden and file_name.startswith("."):
        return False
    return not any(fnmatch.fnmatchcase(file_name, glob) for glob in config.ignore_globs)


def _shown(dent: os.DirEntry[str], config: Config, rules: IgnoreRules | None) -> bool:
    if not is_listed(dent.name, config):
        return False
    return rules is None or not rules.is_ignored(dent.path, dent.is_dir(follow_symlinks=False))


def read_dir(path: str, config: Config, resolver: MetadataResolver) -> list[Entry] | None:
    """Return the entries of *path*, or None if it cannot be read."""
    rules = IgnoreRules.for_directory(path, config)
    try:
        with os.scandir(path) as it:
            entries = [resolver.from_dir_entry(dent) for dent in it if _shown(dent, config, rules)]
    except OSError as exc:
        click.echo(f"nls: unable to read directory '{path}': {exc}", err=True)
        return None

    if config.list_current_and_parent_dirs:
        parent = os.path.join(path, "..")
        entries.insert(0, resolver.from_path(path, ".", follow_symlinks=True))
        entries.insert(1, resolver.from_path(parent, "..", follow_symlinks=True))
    log.debug("read %d entries from %s", len(entries), path)
    return entries


def write_entries(entries: list[Entry], config: Config, out: TextIO) -> None:
    if config.list_allocated_size or config.output_format.is_long:
        print_total(entries, config, out)
    output(entries, config, out)


def list_dir(path: str, config: Config, resolver: MetadataResolver, out: TextIO) -> bool:
    """List the direct children of *path*; returns False on a read error."""
    entries = read_dir(path, config, resolver)
    if entries is None:
        return False
    write_entries(entries, config, out)
    return True


def recursive_list_dir(
    path: str,
    config: Config,
    resolver: MetadataResolver,
    out: TextIO,
    *,
    depth: int = 1,
) -> bool:
    """List *path*, then every subdirectory under a ``<path>:`` header.

    Symlinked directories are not descended into. With ``max_depth`` set,
    directories deeper than that many levels are not listed.
    """
    entries = read_dir(path, config, resolver)
    if entries is None:
        return False
    write_entries(entries, config, out)

    if config.max_depth is not None and depth >= config.max_depth:
        return True

    ok = True
    for entry in entries:
        if entry.name in (".", ".."):
            continue
        if os.path.islink(entry.path) or not os.path.isdir(entry.path):
            continue
        out.write(f"\n{entry.path}:\n")
        ok = recursive_list_dir(entry.path, config, resolver, out, depth=depth + 1) and ok
    return ok
