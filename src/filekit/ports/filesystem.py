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

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator


class FilesystemPort(ABC):
    """
    Abstract interface for filesystem access.

    Implementations raise plain OSError on failure; services translate those
    into the domain error taxonomy.
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """True if anything (file, dir, link) exists at path. Never raises."""
        raise NotImplementedError

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        """True if path is a directory (symlinks followed). Never raises."""
        raise NotImplementedError

    @abstractmethod
    def list_dir(self, path: Path) -> Iterator[str]:
        """Yield the names of the immediate children of a directory."""
        raise NotImplementedError

    @abstractmethod
    def stat(self, path: Path, follow_symlinks: bool = True) -> dict:
        """
        Return metadata for a given path:
        type ("file", "dir", "link" or "other"), size, mtime (int seconds), mode.
        """
        raise NotImplementedError

    @abstractmethod
    def read_bytes(self, path: Path) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def write_bytes(self, path: Path, data: bytes, append: bool = False) -> None:
        """Replace the file contents, or add to the end when `append` is set."""
        raise NotImplementedError

    @abstractmethod
    def unlink(self, path: Path) -> None:
        raise NotImplementedError

    @abstractmethod
    def rmdir(self, path: Path) -> None:
        """Remove an empty directory."""
        raise NotImplementedError

    @abstractmethod
    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        raise NotImplementedError

    @abstractmethod
    def rename(self, src: Path, dst: Path) -> None:
        raise NotImplementedError

    @abstractmethod
    def copy_file(self, src: Path, dst: Path) -> None:
        """Copy file bytes only; permission bits and timestamps are not carried."""
        raise NotImplementedError

    @abstractmethod
    def chmod(self, path: Path, mode: int) -> None:
        raise NotImplementedError
