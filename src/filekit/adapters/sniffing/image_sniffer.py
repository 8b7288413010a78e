# Licensed under the Apache License, Version 2.0
from __future__ import annotations
import logging
from typing import Optional
from pathlib import Path

from ...ports.sniffer import MimeSnifferPort
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class ImageSniffer(MimeSnifferPort):
    """
    Identifies image content by its header via Pillow. Returns None for anything Pillow does not recognise.
    """

    def name(self) -> str:
        return "pillow"

    def sniff(self, path: Path) -> Optional[str]:
        try:
            with Image.open(path) as im:
                fmt = im.format
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            logger.debug("ImageSniffer: not an image %s (%s)", path, e)
            return None
        if not fmt:
            return None
        return Image.MIME.get(fmt.upper())
