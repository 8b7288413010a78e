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
from pathlib import Path
from typing import Iterator, List, Optional, Union

from ..adapters.local_fs import DOT_ENTRIES, LocalFS
from ..domain.entry import EntryInfo, normalize_path
from ..domain.errors import NotADirectory, translate_os_error
from ..ports.filesystem import FilesystemPort

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class DirectoryWalker:
    """
    Read-only traversal of directory trees:
      - lists entries (flat or recursive, pre-order) as EntryInfo snapshots
      - computes total file size under a directory

    Notes:
      * Symlinked directories are reported but never descended into, so a
        link cycle cannot make the walk revisit entries.
      * Entries that vanish or cannot be stat'd between listing and use are
        dropped from listings rather than failing the whole walk.
    """

    def __init__(self, fs: Optional[FilesystemPort] = None) -> None:
        self._fs = fs or LocalFS()

    # --- traversal ----------------------------------------------------------

    def walk(self, root: PathLike, *, recursive: bool = True, strict: bool = False) -> Iterator[Path]:
        """
        Yield paths under `root` with every directory before its children.

        With strict=False an unlistable subdirectory is logged and skipped;
        with strict=True the translated error is raised. A directory that
        disappeared before it could be listed is skipped in both modes.
        """
        stack: List[Path] = [Path(root)]
        while stack:
            directory = stack.pop()
            try:
                # Materialize so no directory handle stays open while we descend.
                names = list(self._fs.list_dir(directory))
            except FileNotFoundError:
                logger.debug("DirectoryWalker.walk: %s vanished before listing", directory)
                continue
            except OSError as e:
                if strict:
                    raise translate_os_error(e, directory, action="list") from e
                logger.warning("DirectoryWalker.walk: cannot list %s: %s", directory, e)
                continue

            for name in names:
                if name in DOT_ENTRIES:
                    continue
                child = directory / name
                yield child
                if recursive and self.is_real_dir(child):
                    stack.append(child)

    def is_real_dir(self, path: Path) -> bool:
        """True for a directory that is not a symlink."""
        try:
            return self._fs.stat(path, follow_symlinks=False)["type"] == "dir"
        except OSError:
            return False

    # --- public API ---------------------------------------------------------

    def normalize_entry(self, path: PathLike) -> Optional[EntryInfo]:
        """
        Stat `path` once and build its EntryInfo.

        Returns None if the path cannot be stat'd, is neither a regular file
        nor a directory, or normalizes to an empty path.
        """
        norm = normalize_path(path)
        if not norm:
            return None
        try:
            meta = self._fs.stat(Path(path))
        except OSError as e:
            logger.debug("DirectoryWalker.normalize_entry: stat failed for %s: %s", path, e)
            return None

        kind = meta.get("type")
        mtime = int(meta.get("mtime") or 0)
        if kind == "file":
            return EntryInfo.for_file(norm, mtime, int(meta.get("size") or 0))
        if kind == "dir":
            return EntryInfo.for_directory(norm, mtime)
        logger.debug("DirectoryWalker.normalize_entry: skipping %s (type=%s)", path, kind)
        return None

    def list_entries(self, root: PathLike, recursive: bool = False) -> List[EntryInfo]:
        """
        List the entries under `root`.

        Returns an empty list when `root` is not a directory. Order is
        parent-before-children only; sort by `path` for anything stricter.
        """
        if not self._fs.is_dir(Path(root)):
            return []

        result: List[EntryInfo] = []
        for p in self.walk(root, recursive=recursive):
            entry = self.normalize_entry(p)
            if entry:
                result.append(entry)
        return result

    def directory_size(self, root: PathLike) -> int:
        """
        Sum of the sizes of all regular files under `root`, recursively.

        Raises:
            NotADirectory: if `root` is not a directory.
            PermissionDenied / IOFailure: if any subdirectory cannot be read.
        """
        root = Path(root)
        if not self._fs.is_dir(root):
            raise NotADirectory(f"{root} is not a directory", root)

        total = 0
        for p in self.walk(root, strict=True):
            try:
                meta = self._fs.stat(p)
            except FileNotFoundError:
                logger.debug("DirectoryWalker.directory_size: %s vanished", p)
                continue
            except OSError as e:
                raise translate_os_error(e, p, action="stat") from e
            if meta.get("type") == "file":
                total += int(meta.get("size") or 0)
        return total
