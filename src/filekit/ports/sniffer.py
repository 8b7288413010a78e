# Licensed under the Apache License, Version 2.0
from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol


class MimeSnifferPort(Protocol):
    """
    Content-aware MIME detection.
    Implementers return None when they cannot identify the content.
    """

    def name(self) -> str: ...

    def sniff(self, path: Path) -> Optional[str]:
        """Return a content type such as "image/png", or None."""
        ...
