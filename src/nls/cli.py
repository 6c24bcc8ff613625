from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping, Sequence
from typing import TextIO

import click

from nls import __version__
from nls.config import (
    TIME_WORDS,
    AllocatedSizeBlocks,
    Config,
    IndicatorStyle,
    OutputFormat,
    SizeFormat,
    SortingOrder,
    TimestampUsed,
    stdout_is_tty,
    terminal_width,
)
from nls.entry import MetadataResolver
from nls.list_dir import list_dir, recursive_list_dir
from nls.ls_colors import LsColors
from nls.output import output, print_total
from nls.theme import IconTheme, ThemeConfig

log = logging.getLogger(__name__)

_LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}

_WHEN = ["always", "auto", "never"]

# Options whose WHEN value is only taken from the `--opt=WHEN` form.
_OPTIONAL_WHEN = ("--color", "--icons")


def configure_logging(environ: Mapping[str, str] | None = None) -> None:
    """Send ``nls`` log records to stderr at the level named by $NLS_LOG."""
    env = os.environ if environ is None else environ
    level = _LOG_LEVELS.get(env.get("NLS_LOG", "").lower())
    if level is None:
        return
    logger = logging.getLogger("nls")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("[%(levelname)s %(name)s] %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)


def _resolve_when(when: str, is_atty: bool) -> bool:
    match when:
        case "always":
            return True
        case "never":
            return False
        case _:
            return is_atty


def _output_format(
    is_atty: bool, one: bool, vertical: bool, across: bool, long_: bool
) -> OutputFormat:
    if long_:
        return OutputFormat.LONG
    if one:
        return OutputFormat.SINGLE_COLUMN
    if across:
        return OutputFormat.ACROSS
    if vertical:
        return OutputFormat.VERTICAL
    return OutputFormat.VERTICAL if is_atty else OutputFormat.SINGLE_COLUMN


def _sorting_order(by_size: bool, by_time: bool, sort_word: str | None) -> SortingOrder:
    if by_size:
        return SortingOrder.SIZE
    if by_time:
        return SortingOrder.TIMESTAMP
    if sort_word is not None:
        return SortingOrder(sort_word)
    return SortingOrder.FILE_NAME


def _timestamp_used(time_word: str | None, ctime: bool, atime: bool) -> TimestampUsed:
    if time_word is not None:
        return TIME_WORDS[time_word]
    if ctime:
        return TimestampUsed.CHANGED
    if atime:
        return TimestampUsed.ACCESSED
    return TimestampUsed.MODIFIED


def _size_format(human: bool, si: bool, iec: bool) -> SizeFormat:
    if iec:
        return SizeFormat.IEC
    if si:
        return SizeFormat.SI
    if human:
        return SizeFormat.HUMAN_READABLE
    return SizeFormat.RAW


def _list_paths(paths: Sequence[str], config: Config, out: TextIO) -> bool:
    """List command-line *paths*; returns False if any could not be listed."""
    resolver = MetadataResolver(config)
    follow = config.dereference or config.dereference_cmdline_symlink
    ok = True
    files: list[str] = []
    dirs: list[str] = []

    for path in sorted(paths):
        try:
            os.stat(path, follow_symlinks=follow)
        except OSError as exc:
            click.echo(f"nls: unable to access '{path}': {exc}", err=True)
            ok = False
            continue
        is_dir = os.path.isdir(path) if follow else _is_real_dir(path)
        if is_dir and config.list_dir:
            dirs.append(path)
        else:
            files.append(path)

    if files:
        entries = [resolver.from_path(path, follow_symlinks=follow) for path in files]
        if config.list_allocated_size and not config.output_format.is_long:
            print_total(entries, config, out)
        output(entries, config, out)

    show_headers = len(paths) > 1 or config.recursive
    lister = recursive_list_dir if config.recursive else list_dir
    for index, path in enumerate(dirs):
        if show_headers:
            if index > 0 or files:
                out.write("\n")
            out.write(f"{path}:\n")
        ok = lister(path, config, resolver, out) and ok

    return ok


def _is_real_dir(path: str) -> bool:
    return not os.path.islink(path) and os.path.isdir(path)


class NlsCommand(click.Command):
    """Command that reads a bare ``--color`` / ``--icons`` as ``=always``.

    A WHEN value must be attached with ``=``, so ``nls --color DIR`` lists
    DIR instead of rejecting it as a color choice.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        rewritten: list[str] = []
        for index, arg in enumerate(args):
            if arg == "--":
                rewritten.extend(args[index:])
                break
            rewritten.append(f"{arg}=always" if arg in _OPTIONAL_WHEN else arg)
        return super().parse_args(ctx, rewritten)


@click.command(cls=NlsCommand, context_settings={"help_option_names": ["--help"]})
@click.version_option(version=__version__, prog_name="nls")
@click.argument("paths", nargs=-1, type=click.Path())
@click.option("-1", "one", is_flag=True, help="List one file per line.")
@click.option("-C", "vertical", is_flag=True, help="List entries by columns.")
@click.option("-x", "across", is_flag=True, help="List entries by lines instead of by columns.")
@click.option("-l", "long_", is_flag=True, help="Use a long listing format.")
@click.option("-g", "no_owner", is_flag=True, help="Like -l, but do not list owner.")
@click.option("-o", "no_group", is_flag=True, help="Like -l, but do not list group.")
@click.option(
    "-n", "--numeric-uid-gid", "numeric", is_flag=True, help="Like -l, but list numeric ids."
)
@click.option("-a", "--all", "show_all", is_flag=True, help="Do not ignore entries starting with .")
@click.option("-A", "--almost-all", is_flag=True, help="Like -a, but omit . and ..")
@click.option("-d", "--directory", is_flag=True, help="List directories themselves.")
@click.option("-R", "--recursive", is_flag=True, help="List subdirectories recursively.")
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=None,
    metavar="N",
    help="Recurse at most N levels (implies -R).",
)
@click.option(
    "-I",
    "--ignore-glob",
    "ignore_globs",
    multiple=True,
    metavar="PATTERN",
    help="Do not list entries matching PATTERN.",
)
@click.option("--gitignore", "git_ignore", is_flag=True, help="Respect .gitignore files.")
@click.option("--ignore-file", is_flag=True, help="Respect .ignore files.")
@click.option("-F", "--classify", is_flag=True, help="Append indicator (one of */=@|).")
@click.option("-p", "slash", is_flag=True, help="Append / indicator to directories.")
@click.option("-i", "--inode", is_flag=True, help="Print the index number of each file.")
@click.option("-s", "--size", "alloc", is_flag=True, help="Print the allocated size of each file.")
@click.option("-k", "--kibibytes", is_flag=True, help="Use 1024-byte blocks for -s.")
@click.option("--allocated-bytes", is_flag=True, help="Print allocated sizes in bytes.")
@click.option("-h", "--human-readable", "human", is_flag=True, help="Print sizes like 1K 234M.")
@click.option("--si", is_flag=True, help="Like -h, but use powers of 1000.")
@click.option("--iec", is_flag=True, help="Like -h, but use Ki, Mi, ... suffixes.")
@click.option("-S", "by_size", is_flag=True, help="Sort by file size, largest first.")
@click.option("-t", "by_time", is_flag=True, help="Sort by time, newest first.")
@click.option(
    "--sort",
    "sort_word",
    type=click.Choice([order.value for order in SortingOrder]),
    default=None,
    help="Sort by WORD instead of name.",
)
@click.option("-r", "--reverse", is_flag=True, help="Reverse order while sorting.")
@click.option(
    "--time",
    "time_word",
    type=click.Choice(sorted(TIME_WORDS)),
    default=None,
    help="Timestamp to show and sort by.",
)
@click.option("-c", "ctime", is_flag=True, help="Use the status change time.")
@click.option("-u", "atime", is_flag=True, help="Use the access time.")
@click.option("-L", "--dereference", is_flag=True, help="Follow symbolic links.")
@click.option(
    "-H",
    "--dereference-command-line",
    "deref_cmdline",
    is_flag=True,
    help="Follow symbolic links listed on the command line.",
)
@click.option(
    "--color",
    type=click.Choice(_WHEN),
    default="auto",
    metavar="[=WHEN]",
    help="Colorize the output (bare --color means always).",
)
@click.option(
    "--icons",
    type=click.Choice(_WHEN),
    default="auto",
    metavar="[=WHEN]",
    help="Show icons, requires a Nerd Font (bare --icons means always).",
)
@click.option(
    "-w", "--width", type=click.IntRange(min=1), default=None, help="Assume screen width COLS."
)
def main(
    paths: tuple[str, ...],
    one: bool,
    vertical: bool,
    across: bool,
    long_: bool,
    no_owner: bool,
    no_group: bool,
    numeric: bool,
    show_all: bool,
    almost_all: bool,
    directory: bool,
    recursive: bool,
    max_depth: int | None,
    ignore_globs: tuple[str, ...],
    git_ignore: bool,
    ignore_file: bool,
    classify: bool,
    slash: bool,
    inode: bool,
    alloc: bool,
    kibibytes: bool,
    allocated_bytes: bool,
    human: bool,
    si: bool,
    iec: bool,
    by_size: bool,
    by_time: bool,
    sort_word: str | None,
    reverse: bool,
    time_word: str | None,
    ctime: bool,
    atime: bool,
    dereference: bool,
    deref_cmdline: bool,
    color: str,
    icons: str,
    width: int | None,
) -> None:
    """nls: list directory contents."""
    configure_logging()
    is_atty = stdout_is_tty()

    config = Config(is_atty=is_atty)
    config.output_format = _output_format(
        is_atty, one, vertical, across, long_ or no_owner or no_group or numeric
    )
    config.list_owner = not no_owner
    config.list_group = not no_group
    config.numeric_uid_gid = numeric
    config.ignore_hidden = not (show_all or almost_all)
    config.list_current_and_parent_dirs = show_all and not almost_all
    config.list_dir = not directory
    config.recursive = recursive or max_depth is not None
    config.max_depth = max_depth
    config.ignore_globs = list(ignore_globs)
    config.git_ignore = git_ignore
    config.ignore_file = ignore_file
    if classify:
        config.indicator_style = IndicatorStyle.CLASSIFY
    elif slash:
        config.indicator_style = IndicatorStyle.SLASH
    config.list_inode = inode
    config.list_allocated_size = alloc
    config.size_format = _size_format(human, si, iec)
    if allocated_bytes or config.size_format is not SizeFormat.RAW:
        config.allocated_size_blocks = AllocatedSizeBlocks.RAW
    elif kibibytes:
        config.allocated_size_blocks = AllocatedSizeBlocks.KIBIBYTES
    config.sorting_order = _sorting_order(by_size, by_time, sort_word)
    config.reverse = reverse
    config.timestamp_used = _timestamp_used(time_word, ctime, atime)
    config.dereference = dereference
    # Symlinks to directories named on the command line are followed unless
    # the link itself is what is being shown.
    config.dereference_cmdline_symlink = deref_cmdline or not (
        directory or classify or config.output_format.is_long
    )
    config.display_width = width if width is not None else terminal_width()
    config.color = _resolve_when(color, is_atty)
    if config.color:
        config.ls_colors = LsColors.from_env()
        config.theme = ThemeConfig.with_default_colors()
    if _resolve_when(icons, is_atty):
        config.icons = IconTheme.with_default_icons()
    log.debug("%s", config)

    if not _list_paths(paths or (".",), config, sys.stdout):
        raise SystemExit(1)
