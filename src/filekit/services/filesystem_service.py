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

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..adapters.local_fs import LocalFS
from ..adapters.sniffing.image_sniffer import ImageSniffer
from ..domain.entry import CopyResult, DeleteResult, EntryInfo, normalize_path
from ..domain.errors import AlreadyExists, IOFailure, NotFound, translate_os_error
from ..ports.filesystem import FilesystemPort
from ..ports.sniffer import MimeSnifferPort
from .mime_service import MimeService
from .tree_service import TreeService
from .visibility_service import PUBLIC, VisibilityService, permissions_for
from .walker import DirectoryWalker

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Filesystem:
    """
    Stateless facade over the filesystem services.

    Errors are raised from the domain taxonomy (NotFound, PermissionDenied,
    ...). `has` is the only check that answers with a boolean instead.
    """

    def __init__(
        self,
        fs: Optional[FilesystemPort] = None,
        sniffers: Optional[Iterable[MimeSnifferPort]] = None,
    ) -> None:
        self._fs = fs or LocalFS()
        if sniffers is None:
            sniffers = [ImageSniffer()]
        self._walker = DirectoryWalker(self._fs)
        self._tree = TreeService(self._fs)
        self._mime = MimeService(self._fs, sniffers)
        self._visibility = VisibilityService(self._fs)

    # --- queries ------------------------------------------------------------

    def has(self, path: PathLike) -> bool:
        return self._fs.exists(Path(path))

    def read(self, path: PathLike) -> bytes:
        p = Path(path)
        try:
            return self._fs.read_bytes(p)
        except OSError as e:
            raise translate_os_error(e, p, action="read") from e

    def read_text(self, path: PathLike, encoding: str = "utf-8") -> str:
        return self.read(path).decode(encoding)

    def list_contents(self, path: PathLike, recursive: bool = False) -> List[EntryInfo]:
        return self._walker.list_entries(path, recursive=recursive)

    def get_metadata(self, path: PathLike) -> EntryInfo:
        p = Path(path)
        if not self._fs.exists(p):
            raise NotFound(f"{p} does not exist", p)
        # "." normalizes to an empty path; report the directory by its absolute name.
        target: PathLike = p if normalize_path(p) else os.path.abspath(p)
        entry = self._walker.normalize_entry(target)
        if entry is None:
            raise IOFailure(f"cannot read metadata for {p}", p)
        return entry

    def get_timestamp(self, path: PathLike) -> int:
        return self.get_metadata(path).modified_at

    def get_size(self, path: PathLike) -> int:
        entry = self.get_metadata(path)
        if entry.size is None:
            raise IOFailure(f"{path} is not a file", path)
        return entry.size

    def directory_size(self, path: PathLike) -> int:
        return self._walker.directory_size(path)

    def get_mime_type(self, path: PathLike, guess: bool = True) -> str:
        return self._mime.get_mime_type(path, guess=guess)

    def get_visibility(self, path: PathLike) -> str:
        return self._visibility.get_visibility(path)

    # --- mutations ----------------------------------------------------------

    def set_visibility(self, path: PathLike, visibility: str) -> None:
        self._visibility.set_visibility(path, visibility)

    def write(
        self,
        path: PathLike,
        contents: Union[str, bytes],
        visibility: str = PUBLIC,
        append: bool = False,
    ) -> None:
        """
        Write `contents` (str is utf-8 encoded), then apply `visibility`.

        With append=True the bytes go after any existing content instead of
        replacing it.
        """
        p = Path(path)
        permissions_for("file", visibility)  # reject bad labels before touching disk
        data = contents.encode("utf-8") if isinstance(contents, str) else contents
        try:
            self._fs.write_bytes(p, data, append=append)
        except OSError as e:
            raise translate_os_error(e, p, action="write") from e
        self._visibility.set_visibility(p, visibility)

    def delete(self, path: PathLike) -> None:
        """
        Delete a single file or symlink. A link to a directory removes the link
        only. Use delete_dir for real directories.
        """
        p = Path(path)
        if self._walker.is_real_dir(p):
            raise IOFailure(f"{p} is a directory", p)
        try:
            self._fs.unlink(p)
        except OSError as e:
            raise translate_os_error(e, p, action="delete") from e

    def delete_dir(self, path: PathLike) -> DeleteResult:
        return self._tree.delete_tree(path)

    def create_dir(self, path: PathLike, visibility: str = PUBLIC) -> None:
        """
        Create a directory (and any missing parents). Succeeds if it already exists.

        Every directory this call creates gets the visibility mode; existing
        parents are left alone.
        """
        p = Path(path)
        mode = permissions_for("dir", visibility)
        if self._fs.is_dir(p):
            return
        if self._fs.exists(p):
            raise AlreadyExists(f"{p} exists and is not a directory", p)

        missing = []
        current = p
        while not self._fs.exists(current) and current.parent != current:
            missing.append(current)
            current = current.parent
        try:
            self._fs.mkdir(p, parents=True, exist_ok=True)
            for created in reversed(missing):
                self._fs.chmod(created, mode)
        except OSError as e:
            raise translate_os_error(e, p, action="mkdir") from e

    def rename(self, path: PathLike, new_path: PathLike) -> None:
        src, dst = Path(path), Path(new_path)
        try:
            self._fs.rename(src, dst)
        except OSError as e:
            raise translate_os_error(e, src, action=f"rename to {dst}") from e

    def copy(
        self, path: PathLike, new_path: PathLike, recursive: bool = False
    ) -> Optional[CopyResult]:
        """Copy one file, or a whole tree when `recursive` is set."""
        if recursive:
            return self._tree.copy_tree(path, new_path)
        src, dst = Path(path), Path(new_path)
        try:
            self._fs.copy_file(src, dst)
        except OSError as e:
            raise translate_os_error(e, src, action=f"copy to {dst}") from e
        return None
