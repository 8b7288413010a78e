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
from typing import Optional, Union

from ..adapters.local_fs import LocalFS
from ..domain.errors import ConfigurationError, translate_os_error
from ..ports.filesystem import FilesystemPort

logger = logging.getLogger(__name__)

PUBLIC = "public"
PRIVATE = "private"
VISIBILITIES = (PUBLIC, PRIVATE)

PERMISSIONS: dict[str, dict[str, int]] = {
    "file": {PUBLIC: 0o644, PRIVATE: 0o600},
    "dir": {PUBLIC: 0o755, PRIVATE: 0o700},
}

# group-read | other-read
_READABLE_BY_OTHERS = 0o044


def permissions_for(kind: str, visibility: str) -> int:
    """Permission bits for a "file"/"dir" with the given visibility label."""
    try:
        return PERMISSIONS[kind][visibility]
    except KeyError:
        raise ConfigurationError(
            f"Unknown visibility {visibility!r} for {kind}. "
            f"Valid options: {', '.join(VISIBILITIES)}"
        ) from None


class VisibilityService:
    """Maps public/private labels to permission bits and back."""

    def __init__(self, fs: Optional[FilesystemPort] = None) -> None:
        self._fs = fs or LocalFS()

    def get_visibility(self, path: Union[str, Path]) -> str:
        p = Path(path)
        try:
            mode = int(self._fs.stat(p)["mode"])
        except OSError as e:
            raise translate_os_error(e, p, action="stat") from e
        return PUBLIC if mode & _READABLE_BY_OTHERS else PRIVATE

    def set_visibility(self, path: Union[str, Path], visibility: str) -> None:
        p = Path(path)
        kind = "dir" if self._fs.is_dir(p) else "file"
        mode = permissions_for(kind, visibility)
        try:
            self._fs.chmod(p, mode)
        except OSError as e:
            raise translate_os_error(e, p, action="chmod") from e
        logger.debug("VisibilityService: %s -> %s (%o)", p, visibility, mode)
