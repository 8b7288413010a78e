# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from .errors import FilesystemError


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "dir"


def normalize_path(path: Union[str, Path]) -> str:
    """
    Forward-slash form of `path` with no `.`/`..` segments and no trailing slash.

    Returns "" for the current directory. A path that still climbs above its
    starting point after normalization is made absolute.
    """
    text = _to_slashes(str(path))
    if not text:
        return ""
    norm = posixpath.normpath(text)
    if norm == ".":
        return ""
    if norm == ".." or norm.startswith("../"):
        norm = posixpath.normpath(_to_slashes(os.path.abspath(text)))
    return norm


def _to_slashes(text: str) -> str:
    # Only real separators; a backslash is an ordinary name character on POSIX.
    for sep in (os.sep, os.altsep):
        if sep and sep != "/":
            text = text.replace(sep, "/")
    return text


@dataclass(frozen=True)
class EntryInfo:
    """
    Immutable snapshot of one filesystem entry at query time.

    File-only fields (size/name/stem/extension) are None for directories and
    `dir_name` is None for files.
    """

    kind: EntryKind
    path: str
    modified_at: int
    size: Optional[int] = None
    name: Optional[str] = None
    stem: Optional[str] = None
    extension: Optional[str] = None
    dir_name: Optional[str] = None

    def __post_init__(self) -> None:
        is_file = self.kind is EntryKind.FILE
        file_fields = (self.size, self.name, self.stem, self.extension)
        if is_file and any(v is None for v in file_fields):
            raise ValueError(f"file entry {self.path!r} needs size/name/stem/extension")
        if not is_file and any(v is not None for v in file_fields):
            raise ValueError(f"directory entry {self.path!r} cannot carry file fields")
        if is_file == (self.dir_name is not None):
            raise ValueError(f"dir_name is set iff kind is directory ({self.path!r})")

    @classmethod
    def for_file(cls, path: str, modified_at: int, size: int) -> EntryInfo:
        p = Path(path)
        ext = p.suffix[1:] if p.suffix else ""
        return cls(
            kind=EntryKind.FILE,
            path=path,
            modified_at=modified_at,
            size=size,
            name=p.name,
            stem=p.stem,
            extension=ext,
        )

    @classmethod
    def for_directory(cls, path: str, modified_at: int) -> EntryInfo:
        return cls(
            kind=EntryKind.DIRECTORY,
            path=path,
            modified_at=modified_at,
            dir_name=posixpath.basename(path) or path,
        )

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "type": self.kind.value,
            "path": self.path,
            "timestamp": self.modified_at,
        }
        if self.is_file:
            out["size"] = self.size
            out["filename"] = self.name
            out["basename"] = self.stem
            out["extension"] = self.extension
        else:
            out["dirname"] = self.dir_name
        return out


@dataclass
class DeleteResult:
    """Outcome of a best-effort recursive delete."""

    root: str
    removed: list[str] = field(default_factory=list)
    failures: list[tuple[str, FilesystemError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class CopyResult:
    source: str
    destination: str
    directories: int = 0
    files: int = 0
