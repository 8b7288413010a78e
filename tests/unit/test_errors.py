# tests/unit/test_errors.py
import errno

import pytest

from filekit.domain.errors import (
    AlreadyExists,
    FilesystemError,
    IOFailure,
    NotADirectory,
    NotFound,
    PermissionDenied,
    SourceNotFound,
    translate_os_error,
)


@pytest.mark.parametrize(
    "code, expected",
    [
        (errno.ENOENT, NotFound),
        (errno.ENOTDIR, NotADirectory),
        (errno.EACCES, PermissionDenied),
        (errno.EPERM, PermissionDenied),
        (errno.EEXIST, AlreadyExists),
        (errno.ENOTEMPTY, IOFailure),
        (errno.EIO, IOFailure),
    ],
)
def test_translate_os_error_maps_errno(code, expected):
    err = translate_os_error(OSError(code, "boom"), "/tmp/x")
    assert type(err) is expected
    assert err.path == "/tmp/x"


def test_translate_uses_exception_filename_when_no_path_given():
    err = translate_os_error(FileNotFoundError(errno.ENOENT, "No such file", "/a/b"))
    assert isinstance(err, NotFound)
    assert err.path == "/a/b"
    assert "/a/b" in str(err)


def test_translate_without_errno_is_io_failure():
    err = translate_os_error(OSError("weird"), "p", action="copy")
    assert isinstance(err, IOFailure)
    assert str(err).startswith("copy failed for p")


def test_taxonomy_hierarchy():
    assert issubclass(SourceNotFound, NotFound)
    for cls in (NotFound, NotADirectory, PermissionDenied, AlreadyExists, IOFailure):
        assert issubclass(cls, FilesystemError)
