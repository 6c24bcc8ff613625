from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from nls.cli import configure_logging, main


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    (tmp_path / "b.txt").write_text("bb")
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / ".hidden").write_text("")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "inner.txt").write_text("")
    return tmp_path


@pytest.fixture
def sized(tmp_path: Path) -> Path:
    (tmp_path / "small").write_text("x")
    (tmp_path / "big").write_text("x" * 100)
    (tmp_path / "Mid").write_text("x" * 10)
    return tmp_path


@pytest.fixture
def nls_logger() -> Generator[logging.Logger, None, None]:
    logger = logging.getLogger("nls")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


def _run(*args: str, env: dict[str, str] | None = None) -> tuple[int, str]:
    result = CliRunner().invoke(main, list(args), env=env)
    return result.exit_code, result.output


def test_version_flag_exits_zero() -> None:
    code, output = _run("--version")
    assert code == 0
    assert "nls" in output


def test_help_lists_options() -> None:
    code, output = _run("--help")
    assert code == 0
    assert "--max-depth" in output
    assert "--ignore-glob" in output


class TestFormats:
    def test_default_is_single_column_when_piped(self, tree: Path) -> None:
        assert _run(str(tree)) == (0, "a.txt\nb.txt\nsub\n")

    def test_across_with_width(self, tree: Path) -> None:
        assert _run("-x", "-w", "20", str(tree)) == (0, "a.txt  b.txt  sub\n")

    def test_vertical_narrow_width(self, tree: Path) -> None:
        assert _run("-C", "-w", "12", str(tree)) == (0, "a.txt  sub\nb.txt\n")

    def test_long_wins_over_single_column(self, tree: Path) -> None:
        code, output = _run("-1", "-l", str(tree))
        lines = output.splitlines()
        assert code == 0
        assert lines[0].startswith("total ")
        assert [line.split()[-1] for line in lines[1:]] == ["a.txt", "b.txt", "sub"]

    def test_no_owner_no_group(self, tree: Path) -> None:
        _, with_both = _run("-l", str(tree))
        _, without = _run("-g", "-o", str(tree))
        assert len(without.splitlines()[1].split()) == len(with_both.splitlines()[1].split()) - 2

    def test_inode_column(self, tree: Path) -> None:
        code, output = _run("-i", str(tree))
        assert code == 0
        first = output.splitlines()[0].split()
        assert first[0] == str((tree / "a.txt").stat().st_ino)
        assert first[1] == "a.txt"

    def test_classify(self, tree: Path) -> None:
        (tree / "run.sh").write_text("")
        (tree / "run.sh").chmod(0o755)
        assert _run("-F", str(tree))[1] == "a.txt\nb.txt\nrun.sh*\nsub/\n"


class TestFiltering:
    def test_all(self, tree: Path) -> None:
        assert _run("-a", str(tree))[1] == ".\n..\n.hidden\na.txt\nb.txt\nsub\n"

    def test_almost_all(self, tree: Path) -> None:
        assert _run("-A", str(tree))[1] == ".hidden\na.txt\nb.txt\nsub\n"

    def test_ignore_glob(self, tree: Path) -> None:
        assert _run("-I", "*.txt", str(tree))[1] == "sub\n"

    def test_directory_itself(self, tree: Path) -> None:
        assert _run("-d", str(tree)) == (0, f"{tree}\n")


class TestSorting:
    def test_by_size(self, sized: Path) -> None:
        assert _run("-S", str(sized))[1] == "big\nMid\nsmall\n"

    def test_by_size_reversed(self, sized: Path) -> None:
        assert _run("-S", "-r", str(sized))[1] == "small\nMid\nbig\n"

    def test_sort_word(self, sized: Path) -> None:
        assert _run("--sort", "size", str(sized))[1] == "big\nMid\nsmall\n"

    def test_by_name_case_insensitive(self, sized: Path) -> None:
        assert _run(str(sized))[1] == "big\nMid\nsmall\n"

    def test_invalid_sort_word(self, sized: Path) -> None:
        assert _run("--sort", "color", str(sized))[0] == 2


class TestPaths:
    def test_files_then_directories(self, tree: Path) -> None:
        code, output = _run(str(tree / "sub"), str(tree / "a.txt"))
        assert code == 0
        assert output == f"{tree / 'a.txt'}\n\n{tree / 'sub'}:\ninner.txt\n"

    def test_directories_in_sorted_order(self, tmp_path: Path) -> None:
        for name in ("b", "a"):
            (tmp_path / name).mkdir()
            (tmp_path / name / "x").write_text("")
        a, b = tmp_path / "a", tmp_path / "b"
        assert _run(str(b), str(a)) == (0, f"{a}:\nx\n\n{b}:\nx\n")

    def test_several_directories(self, tree: Path) -> None:
        (tree / "sub2").mkdir()
        code, output = _run(str(tree / "sub"), str(tree / "sub2"))
        assert code == 0
        assert output == f"{tree / 'sub'}:\ninner.txt\n\n{tree / 'sub2'}:\n"

    def test_missing_path_exits_one(self, tree: Path) -> None:
        code, output = _run(str(tree / "nope"), str(tree / "a.txt"))
        assert code == 1
        assert "nls: unable to access" in output
        assert f"{tree / 'a.txt'}\n" in output

    def test_recursive(self, tree: Path) -> None:
        code, output = _run("-R", str(tree))
        assert code == 0
        assert output == f"{tree}:\na.txt\nb.txt\nsub\n\n{tree / 'sub'}:\ninner.txt\n"

    def test_max_depth_must_be_positive(self, tree: Path) -> None:
        assert _run("--max-depth", "0", str(tree))[0] == 2


class TestColor:
    def test_always(self, tree: Path) -> None:
        output = _run("--color=always", "-p", str(tree), env={"LS_COLORS": "di=01;34"})[1]
        assert "\x1b[01;34msub\x1b[0m/" in output

    def test_auto_is_off_when_piped(self, tree: Path) -> None:
        output = _run("--color=auto", str(tree), env={"LS_COLORS": "di=01;34"})[1]
        assert "\x1b[" not in output

    def test_never(self, tree: Path) -> None:
        assert "\x1b[" not in _run("--color=never", "-l", str(tree))[1]

    def test_icons_always(self, tree: Path) -> None:
        output = _run("--icons=always", str(tree))[1]
        assert all(" " in line for line in output.splitlines())


class TestLogging:
    def test_configured_from_env(self, nls_logger: logging.Logger) -> None:
        configure_logging({"NLS_LOG": "debug"})
        assert nls_logger.level == logging.DEBUG
        assert nls_logger.handlers

    def test_unset_is_silent(self, nls_logger: logging.Logger) -> None:
        configure_logging({})
        assert nls_logger.level == logging.NOTSET


class TestOptionalWhen:
    def test_bare_color_does_not_take_the_path(self, tree: Path) -> None:
        code, output = _run("--color", str(tree), env={"LS_COLORS": "di=01;34"})
        assert code == 0
        assert "\x1b[01;34msub\x1b[0m" in output

    def test_bare_icons_does_not_take_the_path(self, tree: Path) -> None:
        code, output = _run("--icons", str(tree))
        assert code == 0
        assert len(output.splitlines()) == 3
        assert all(" " in line for line in output.splitlines())

    def test_value_after_equals(self, tree: Path) -> None:
        assert _run("--color=never", "--icons=never", str(tree)) == (0, "a.txt\nb.txt\nsub\n")

    def test_separate_word_is_a_path(self, tree: Path) -> None:
        code, output = _run("--color", "never")
        assert code == 1
        assert "nls: unable to access 'never'" in output

    def test_after_double_dash_is_a_path(self) -> None:
        code, output = _run("--", "--color")
        assert code == 1
        assert "nls: unable to access '--color'" in output


class TestIgnoreFiles:
    @pytest.fixture
    def env(self, tmp_path: Path) -> dict[str, str]:
        return {"XDG_CONFIG_HOME": str(tmp_path / "xdg-missing")}

    def test_gitignore(self, tree: Path, env: dict[str, str]) -> None:
        (tree / ".git").mkdir()
        (tree / ".gitignore").write_text("*.txt\n!b.txt\n")
        assert _run("--gitignore", str(tree), env=env)[1] == "b.txt\nsub\n"
        assert _run(str(tree), env=env)[1] == "a.txt\nb.txt\nsub\n"

    def test_ignore_file(self, tree: Path, env: dict[str, str]) -> None:
        (tree / ".ignore").write_text("sub/\n")
        assert _run("--ignore-file", str(tree), env=env)[1] == "a.txt\nb.txt\n"

    def test_recursion_skips_ignored_directories(self, tree: Path, env: dict[str, str]) -> None:
        (tree / ".ignore").write_text("sub\n")
        assert _run("-R", "--ignore-file", str(tree), env=env)[1] == f"{tree}:\na.txt\nb.txt\n"
