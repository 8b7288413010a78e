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
from typing import List, Optional, Tuple, Union

from ..adapters.local_fs import DOT_ENTRIES, LocalFS
from ..domain.entry import CopyResult, DeleteResult
from ..domain.errors import (
    IOFailure,
    NotADirectory,
    NotFound,
    SourceNotFound,
    translate_os_error,
)
from ..ports.filesystem import FilesystemPort
from .walker import DirectoryWalker

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class TreeService:
    """
    Recursive mutation of directory trees.

    The two operations deliberately use opposite failure policies:
      * delete_tree is best-effort: a failed unlink/rmdir is recorded in the
        DeleteResult and the walk carries on with the remaining siblings.
      * copy_tree aborts on the first failure and raises, so a caller never
        mistakes a half-populated destination for a finished copy.
    """

    def __init__(self, fs: Optional[FilesystemPort] = None) -> None:
        self._fs = fs or LocalFS()
        self._walker = DirectoryWalker(self._fs)

    # --- delete -------------------------------------------------------------

    def delete_tree(self, root: PathLike) -> DeleteResult:
        """
        Remove `root` and everything below it, children before parents.

        Raises:
            NotFound: if `root` is not a directory (or is a symlink to one).
        """
        root = Path(root)
        if not self._fs.is_dir(root):
            raise NotFound(f"{root} is not a directory", root)
        if not self._walker.is_real_dir(root):
            # Never clear a directory reached through a link.
            raise NotFound(f"{root} is a symlink, not a directory", root)

        result = DeleteResult(root=str(root))
        self._delete_dir(root, result)
        if result.ok:
            logger.info("Deleted tree %s (%d entries)", root, len(result.removed))
        else:
            logger.warning(
                "Deleted tree %s partially: %d removed, %d failed",
                root,
                len(result.removed),
                len(result.failures),
            )
        return result

    def _delete_dir(self, root: Path, result: DeleteResult) -> None:
        # (directory, emptied) pairs; a directory is pushed back under its
        # subdirectories so it is only removed after all of them.
        stack: List[Tuple[Path, bool]] = [(root, False)]
        while stack:
            directory, emptied = stack.pop()
            if emptied:
                self._remove_dir(directory, result)
            else:
                self._clear_dir(directory, result, stack)

    def _clear_dir(
        self, directory: Path, result: DeleteResult, stack: List[Tuple[Path, bool]]
    ) -> None:
        try:
            names = list(self._fs.list_dir(directory))
        except FileNotFoundError:
            return
        except OSError as e:
            # Can't see the children; rmdir will tell us if any remain.
            self._record(result, directory, e, "list")
            names = []

        stack.append((directory, True))
        for name in names:
            if name in DOT_ENTRIES:
                continue
            child = directory / name
            try:
                kind = self._fs.stat(child, follow_symlinks=False)["type"]
            except FileNotFoundError:
                continue
            except OSError as e:
                self._record(result, child, e, "stat")
                continue

            if kind == "dir":
                stack.append((child, False))
                continue
            # Files, symlinks (even to directories) and anything else are unlinked.
            try:
                self._fs.unlink(child)
            except FileNotFoundError:
                pass
            except OSError as e:
                self._record(result, child, e, "unlink")
                continue
            result.removed.append(str(child))

    def _remove_dir(self, directory: Path, result: DeleteResult) -> None:
        try:
            self._fs.rmdir(directory)
        except FileNotFoundError:
            pass
        except OSError as e:
            self._record(result, directory, e, "rmdir")
            return
        result.removed.append(str(directory))

    def _record(self, result: DeleteResult, path: Path, exc: OSError, action: str) -> None:
        err = translate_os_error(exc, path, action=action)
        logger.warning("TreeService.delete_tree: %s", err)
        result.failures.append((str(path), err))

    # --- copy ---------------------------------------------------------------

    def copy_tree(self, src: PathLike, dst: PathLike) -> CopyResult:
        """
        Copy the tree at `src` into `dst`, creating `dst` if needed.

        Existing destination files are overwritten and existing directories
        reused. Permission bits and timestamps are not preserved.

        Raises:
            SourceNotFound: if `src` does not exist.
            NotADirectory: if `src` is not a directory.
            IOFailure: if `dst` lies inside `src`, or on any copy failure.
            PermissionDenied: on the first access failure.
        """
        src, dst = Path(src), Path(dst)
        if not self._fs.exists(src):
            raise SourceNotFound(f"copy source {src} does not exist", src)
        if not self._fs.is_dir(src):
            raise NotADirectory(f"copy source {src} is not a directory", src)
        if _is_within(dst, src):
            raise IOFailure(f"cannot copy {src} into its own subtree {dst}", dst)

        result = CopyResult(source=str(src), destination=str(dst))
        try:
            self._fs.mkdir(dst, parents=True, exist_ok=True)
        except OSError as e:
            raise translate_os_error(e, dst, action="mkdir") from e

        for path in self._walker.walk(src, strict=True):
            target = dst / path.relative_to(src)
            try:
                if self._fs.is_dir(path):
                    self._fs.mkdir(target, exist_ok=True)
                    result.directories += 1
                else:
                    self._fs.copy_file(path, target)
                    result.files += 1
            except OSError as e:
                raise translate_os_error(e, path, action=f"copy to {target}") from e

        logger.info(
            "Copied %s -> %s (%d dirs, %d files)",
            src,
            dst,
            result.directories,
            result.files,
        )
        return result


def _is_within(candidate: Path, root: Path) -> bool:
    c = os.path.realpath(candidate)
    r = os.path.realpath(root)
    return c == r or c.startswith(r.rstrip(os.sep) + os.sep)
