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

import os
import shutil
import stat as stat_mod
from pathlib import Path
from typing import Iterator

from ..ports.filesystem import FilesystemPort

DOT_ENTRIES = (".", "..")


def _kind(mode: int) -> str:
    if stat_mod.S_ISLNK(mode):
        return "link"
    if stat_mod.S_ISDIR(mode):
        return "dir"
    if stat_mod.S_ISREG(mode):
        return "file"
    return "other"


class LocalFS(FilesystemPort):
    """Local filesystem adapter backed by os/shutil."""

    def exists(self, path: Path) -> bool:
        # lexists: a dangling symlink still occupies the name
        return os.path.lexists(path)

    def is_dir(self, path: Path) -> bool:
        return os.path.isdir(path)

    def list_dir(self, path: Path) -> Iterator[str]:
        with os.scandir(path) as it:
            for entry in it:
                if entry.name in DOT_ENTRIES:
                    continue
                yield entry.name

    def stat(self, path: Path, follow_symlinks: bool = True) -> dict:
        st = os.stat(path, follow_symlinks=follow_symlinks)
        return {
            "path": str(path),
            "type": _kind(st.st_mode),
            "size": st.st_size,
            "mtime": int(st.st_mtime),
            "mode": stat_mod.S_IMODE(st.st_mode),
        }

    def read_bytes(self, path: Path) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def write_bytes(self, path: Path, data: bytes, append: bool = False) -> None:
        with open(path, "ab" if append else "wb") as f:
            f.write(data)

    def unlink(self, path: Path) -> None:
        os.unlink(path)

    def rmdir(self, path: Path) -> None:
        os.rmdir(path)

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        Path(path).mkdir(parents=parents, exist_ok=exist_ok)

    def rename(self, src: Path, dst: Path) -> None:
        os.rename(src, dst)

    def copy_file(self, src: Path, dst: Path) -> None:
        shutil.copyfile(src, dst)

    def chmod(self, path: Path, mode: int) -> None:
        os.chmod(path, mode)
