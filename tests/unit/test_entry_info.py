# tests/unit/test_entry_info.py
import os

import pytest

from filekit.domain.entry import EntryInfo, EntryKind, normalize_path


def test_normalize_path_forward_slashes_and_no_dot_segments():
    assert normalize_path(os.path.join("a", "b", "c")) == "a/b/c"
    assert normalize_path("a/./b/../c/") == "a/c"
    assert normalize_path("/srv/data/") == "/srv/data"


@pytest.mark.skipif(os.sep == "\\", reason="backslash is a separator on Windows")
def test_normalize_path_keeps_backslashes_in_names():
    assert normalize_path("d/a\\b") == "d/a\\b"
    assert normalize_path("d/x\\..") == "d/x\\.."


def test_normalize_path_current_dir_is_empty():
    assert normalize_path(".") == ""
    assert normalize_path("") == ""
    assert normalize_path("./") == ""


def test_normalize_path_never_keeps_parent_segments():
    out = normalize_path("../x")
    assert ".." not in out.split("/")
    assert out == os.path.abspath("../x").replace("\\", "/")


def test_file_entry_fields():
    e = EntryInfo.for_file("root/archive.tar.gz", 1700000000, 42)
    assert e.kind is EntryKind.FILE
    assert e.is_file and not e.is_dir
    assert e.name == "archive.tar.gz"
    assert e.stem == "archive.tar"
    assert e.extension == "gz"
    assert e.size == 42
    assert e.dir_name is None


def test_file_without_extension():
    e = EntryInfo.for_file("root/Makefile", 0, 0)
    assert e.extension == ""
    assert e.stem == "Makefile"


def test_directory_entry_fields():
    e = EntryInfo.for_directory("root/sub", 5)
    assert e.is_dir
    assert e.dir_name == "sub"
    assert e.size is None and e.name is None and e.stem is None and e.extension is None


def test_entry_invariants_enforced():
    with pytest.raises(ValueError):
        EntryInfo(kind=EntryKind.FILE, path="x", modified_at=0)
    with pytest.raises(ValueError):
        EntryInfo(kind=EntryKind.DIRECTORY, path="x", modified_at=0, size=3, dir_name="x")
    with pytest.raises(ValueError):
        EntryInfo(kind=EntryKind.DIRECTORY, path="x", modified_at=0)


def test_entry_is_immutable():
    e = EntryInfo.for_directory("root", 0)
    with pytest.raises(Exception):
        e.path = "other"  # type: ignore[misc]


def test_as_dict_keys_depend_on_kind():
    f = EntryInfo.for_file("d/a.txt", 7, 3).as_dict()
    assert f == {
        "type": "file",
        "path": "d/a.txt",
        "timestamp": 7,
        "size": 3,
        "filename": "a.txt",
        "basename": "a",
        "extension": "txt",
    }
    d = EntryInfo.for_directory("d/sub", 9).as_dict()
    assert d == {"type": "dir", "path": "d/sub", "timestamp": 9, "dirname": "sub"}
