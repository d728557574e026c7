from __future__ import annotations

import pytest

from dirconf.utils.fs import ensure_dir, read_if_exists, write_text_atomic


def test_write_text_atomic(tmp_path):
    path = tmp_path / "out.txt"
    write_text_atomic(path, "one")
    write_text_atomic(path, "two")
    assert path.read_text() == "two"
    assert [p.name for p in tmp_path.iterdir()] == ["out.txt"]


def test_failed_write_leaves_no_temp_file(tmp_path):
    path = tmp_path / "taken"
    path.mkdir()
    with pytest.raises(OSError):
        write_text_atomic(path, "x")
    assert sorted(p.name for p in tmp_path.iterdir()) == ["taken"]


def test_read_if_exists(tmp_path):
    assert read_if_exists(tmp_path / "missing") is None
    (tmp_path / "blocker").write_text("")
    assert read_if_exists(tmp_path / "blocker" / "child") is None
    with pytest.raises(IsADirectoryError):
        read_if_exists(tmp_path)


def test_ensure_dir_leaves_existing_mode(tmp_path):
    target = tmp_path / "d"
    target.mkdir(mode=0o700)
    before = target.stat().st_mode
    ensure_dir(target)
    assert target.stat().st_mode == before
