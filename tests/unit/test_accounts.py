"""Tests for the owner/group name cache."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

import nls.accounts as accounts_mod
from nls.accounts import AccountCache
from nls.output.cell import Alignment


class _FakeDb:
    def __init__(self, names: dict[int, str]) -> None:
        self.names = names
        self.calls: list[int] = []

    def getpwuid(self, uid: int) -> SimpleNamespace:
        self.calls.append(uid)
        return SimpleNamespace(pw_name=self.names[uid])

    def getgrgid(self, gid: int) -> SimpleNamespace:
        self.calls.append(gid)
        return SimpleNamespace(gr_name=self.names[gid])


@pytest.fixture
def fake_db(monkeypatch: pytest.MonkeyPatch) -> _FakeDb:
    db = _FakeDb({0: "root", 1000: "alice"})
    monkeypatch.setattr(accounts_mod, "pwd", db)
    monkeypatch.setattr(accounts_mod, "grp", db)
    return db


class TestAccountCache:
    def test_owner_name(self, fake_db: _FakeDb) -> None:
        cell = AccountCache().owner_cell(1000)
        assert cell.contents == "alice"
        assert cell.alignment is Alignment.LEFT

    def test_group_name(self, fake_db: _FakeDb) -> None:
        assert AccountCache().group_cell(0).contents == "root"

    def test_lookup_is_cached(self, fake_db: _FakeDb) -> None:
        cache = AccountCache()
        cache.owner_cell(1000)
        cache.owner_cell(1000)
        cache.group_cell(1000)
        assert fake_db.calls == [1000, 1000]

    def test_unknown_id_falls_back_to_number(self, fake_db: _FakeDb) -> None:
        cell = AccountCache().owner_cell(4242)
        assert cell.contents == "4242"
        assert cell.alignment is Alignment.RIGHT

    def test_windows_uses_numbers(
        self, fake_db: _FakeDb, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(accounts_mod, "_WIN", True)
        assert AccountCache().owner_cell(1000).contents == "1000"
        assert AccountCache().group_cell(0).contents == "0"
        assert fake_db.calls == []

    def test_numeric_mode_skips_lookup(self, fake_db: _FakeDb) -> None:
        cell = AccountCache(numeric=True).group_cell(1000)
        assert cell.contents == "1000"
        assert fake_db.calls == []

    def test_styles(self, fake_db: _FakeDb) -> None:
        cache = AccountCache(owner_style="31", group_style="35")
        assert cache.owner_cell(0).contents == "\x1b[31mroot\x1b[0m"
        assert cache.group_cell(0).contents == "\x1b[35mroot\x1b[0m"

    def test_hands_out_copies(self, fake_db: _FakeDb) -> None:
        cache = AccountCache()
        first = cache.owner_cell(0)
        first.pad_to_width(10)
        assert cache.owner_cell(0).contents == "root"

    def test_separate_caches_are_independent(self, fake_db: _FakeDb) -> None:
        AccountCache().owner_cell(0)
        AccountCache().owner_cell(0)
        assert fake_db.calls == [0, 0]
