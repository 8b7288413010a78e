# tests/services/test_filesystem_facade.py
import os
import stat
from pathlib import Path

import pytest

from filekit.domain.errors import (
    AlreadyExists,
    ConfigurationError,
    IOFailure,
    NotFound,
)
from filekit.services import Filesystem


def _mode(p: Path) -> int:
    return stat.S_IMODE(os.stat(p).st_mode)


def test_has_never_raises(tmp_path: Path):
    fs = Filesystem()
    assert fs.has(tmp_path)
    assert not fs.has(tmp_path / "missing")
    assert not fs.has(tmp_path / "missing" / "deeper")


def test_write_then_read(tmp_path: Path):
    fs = Filesystem()
    p = tmp_path / "hello.txt"
    fs.write(p, "héllo")
    assert fs.read(p) == "héllo".encode("utf-8")
    assert fs.read_text(p) == "héllo"
    assert _mode(p) == 0o644


def test_write_bytes_private(tmp_path: Path):
    fs = Filesystem()
    p = tmp_path / "secret.bin"
    fs.write(p, b"\x00\x01", visibility="private")
    assert fs.read(p) == b"\x00\x01"
    assert fs.get_visibility(p) == "private"


def test_write_rejects_unknown_visibility_before_writing(tmp_path: Path):
    p = tmp_path / "x.txt"
    with pytest.raises(ConfigurationError):
        Filesystem().write(p, "x", visibility="everyone")
    assert not p.exists()


def test_read_missing_file(tmp_path: Path):
    with pytest.raises(NotFound):
        Filesystem().read(tmp_path / "missing.txt")


def test_create_dir_is_idempotent(tmp_path: Path):
    fs = Filesystem()
    d = tmp_path / "a" / "b"
    fs.create_dir(d)
    fs.create_dir(d)
    assert d.is_dir()
    assert _mode(d) == 0o755


def test_create_private_dir(tmp_path: Path):
    d = tmp_path / "private"
    Filesystem().create_dir(d, visibility="private")
    assert _mode(d) == 0o700


def test_create_dir_over_a_file(tmp_path: Path):
    f = tmp_path / "taken"
    f.write_text("x")
    with pytest.raises(AlreadyExists):
        Filesystem().create_dir(f)


def test_delete_file(tmp_path: Path):
    fs = Filesystem()
    p = tmp_path / "gone.txt"
    p.write_text("x")
    fs.delete(p)
    assert not fs.has(p)
    with pytest.raises(NotFound):
        fs.delete(p)


def test_delete_refuses_directories(tmp_path: Path):
    with pytest.raises(IOFailure):
        Filesystem().delete(tmp_path)
    assert tmp_path.exists()


def test_delete_dir(tmp_path: Path):
    fs = Filesystem()
    d = tmp_path / "tree"
    (d / "x" / "y").mkdir(parents=True)
    (d / "x" / "y" / "z.txt").write_text("z")
    assert fs.delete_dir(d).ok
    assert not fs.has(d)


def test_rename(tmp_path: Path):
    fs = Filesystem()
    a, b = tmp_path / "a.txt", tmp_path / "b.txt"
    a.write_text("content")
    fs.rename(a, b)
    assert not fs.has(a)
    assert b.read_text() == "content"
    with pytest.raises(NotFound):
        fs.rename(a, tmp_path / "c.txt")


def test_copy_single_file(tmp_path: Path):
    fs = Filesystem()
    a = tmp_path / "a.txt"
    a.write_text("content")
    assert fs.copy(a, tmp_path / "copy.txt") is None
    assert (tmp_path / "copy.txt").read_text() == "content"


def test_copy_recursive(tmp_path: Path):
    fs = Filesystem()
    src = tmp_path / "src"
    (src / "inner").mkdir(parents=True)
    (src / "inner" / "f.txt").write_text("f")
    result = fs.copy(src, tmp_path / "dst", recursive=True)
    assert result is not None and result.files == 1
    assert (tmp_path / "dst" / "inner" / "f.txt").read_text() == "f"


def test_metadata_getters(tmp_path: Path):
    fs = Filesystem()
    p = tmp_path / "data.csv"
    p.write_bytes(b"a,b\n1,2\n")
    entry = fs.get_metadata(p)
    assert entry.is_file
    assert entry.extension == "csv"
    assert fs.get_size(p) == 8
    assert fs.get_timestamp(p) == int(os.stat(p).st_mtime)


def test_metadata_of_directory(tmp_path: Path):
    fs = Filesystem()
    entry = fs.get_metadata(tmp_path)
    assert entry.is_dir
    assert entry.dir_name == tmp_path.name
    with pytest.raises(IOFailure):
        fs.get_size(tmp_path)


def test_metadata_of_current_directory(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    entry = Filesystem().get_metadata(".")
    assert entry.is_dir
    assert entry.dir_name == tmp_path.name


def test_metadata_of_missing_path(tmp_path: Path):
    with pytest.raises(NotFound):
        Filesystem().get_metadata(tmp_path / "missing")


def test_list_contents_and_directory_size(tmp_path: Path):
    fs = Filesystem()
    fs.create_dir(tmp_path / "sub")
    fs.write(tmp_path / "a.txt", b"a" * 10)
    fs.write(tmp_path / "sub" / "b.txt", b"b" * 20)
    names = sorted(Path(e.path).name for e in fs.list_contents(tmp_path, recursive=True))
    assert names == ["a.txt", "b.txt", "sub"]
    assert fs.directory_size(tmp_path) == 30
    assert fs.list_contents(tmp_path / "nonexistent", recursive=True) == []


def test_mime_type_through_facade(tmp_path: Path):
    p = tmp_path / "page.html"
    p.write_text("<p>hi</p>")
    assert Filesystem().get_mime_type(p) == "text/html"
    assert Filesystem(sniffers=[]).get_mime_type(p, guess=False) == "unknown"


def test_write_append_keeps_earlier_content(tmp_path: Path):
    fs = Filesystem()
    p = tmp_path / "log.txt"
    fs.write(p, "first\n")
    fs.write(p, b"second\n", append=True)
    assert fs.read_text(p) == "first\nsecond\n"
    fs.write(p, "replaced\n")
    assert fs.read_text(p) == "replaced\n"


def test_write_append_creates_missing_file(tmp_path: Path):
    p = tmp_path / "new.txt"
    Filesystem().write(p, "only", append=True)
    assert p.read_text() == "only"


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_delete_removes_symlink_to_directory_not_target(tmp_path: Path):
    target = tmp_path / "target"
    target.mkdir()
    (target / "keep.txt").write_text("k")
    link = tmp_path / "link"
    os.symlink(target, link)

    Filesystem().delete(link)

    assert not os.path.lexists(link)
    assert (target / "keep.txt").read_text() == "k"


def test_create_dir_applies_visibility_to_every_new_level(tmp_path: Path):
    existing = tmp_path / "existing"
    existing.mkdir()
    os.chmod(existing, 0o755)

    Filesystem().create_dir(existing / "a" / "b" / "c", visibility="private")

    assert _mode(existing) == 0o755
    for level in (existing / "a", existing / "a" / "b", existing / "a" / "b" / "c"):
        assert _mode(level) == 0o700
