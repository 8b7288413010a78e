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

import errno
from pathlib import Path
from typing import Optional, Union


class FilekitError(Exception):
    """Base exception for domain-specific errors."""


class ConfigurationError(FilekitError):
    """Bad CLI args or unusable settings (e.g., unknown visibility label)."""


class FilesystemError(FilekitError):
    """A filesystem operation failed for a specific path."""

    def __init__(self, message: str, path: Union[str, Path, None] = None) -> None:
        super().__init__(message)
        self.path = None if path is None else str(path)


class NotFound(FilesystemError):
    """Path (or operation root) does not exist."""


class SourceNotFound(NotFound):
    """Copy source does not exist."""


class NotADirectory(FilesystemError):
    """Operation requires a directory."""


class PermissionDenied(FilesystemError):
    """OS-level access failure."""


class AlreadyExists(FilesystemError):
    """Destination collision."""


class IOFailure(FilesystemError):
    """Generic unlink/copy/write failure."""


_ERRNO_MAP = {
    errno.ENOENT: NotFound,
    errno.ENOTDIR: NotADirectory,
    errno.EACCES: PermissionDenied,
    errno.EPERM: PermissionDenied,
    errno.EEXIST: AlreadyExists,
}


def translate_os_error(
    exc: OSError, path: Union[str, Path, None] = None, *, action: Optional[str] = None
) -> FilesystemError:
    """
    Map an OSError onto the domain taxonomy.

    The caller is expected to `raise translate_os_error(e, p) from e` so the
    original error stays available as `__cause__`.
    """
    target = path if path is not None else exc.filename
    cls = _ERRNO_MAP.get(exc.errno or 0, IOFailure)
    reason = exc.strerror or str(exc)
    message = f"{action} failed for {target}: {reason}" if action else f"{target}: {reason}"
    return cls(message, target)
