# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from ..adapters.local_fs import LocalFS
from ..domain.errors import NotFound
from ..ports.filesystem import FilesystemPort
from ..ports.sniffer import MimeSnifferPort

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"

MIME_TYPES: dict[str, str] = {
    "aac": "audio/aac",
    "atom": "application/atom+xml",
    "avi": "video/avi",
    "bmp": "image/x-ms-bmp",
    "c": "text/x-c",
    "class": "application/octet-stream",
    "css": "text/css",
    "csv": "text/csv",
    "deb": "application/x-deb",
    "dll": "application/x-msdownload",
    "dmg": "application/x-apple-diskimage",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "exe": "application/octet-stream",
    "flv": "video/x-flv",
    "gif": "image/gif",
    "gz": "application/x-gzip",
    "h": "text/x-c",
    "htm": "text/html",
    "html": "text/html",
    "ini": "text/plain",
    "jar": "application/java-archive",
    "java": "text/x-java",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "js": "text/javascript",
    "json": "application/json",
    "mid": "audio/midi",
    "midi": "audio/midi",
    "mka": "audio/x-matroska",
    "mkv": "video/x-matroska",
    "mp3": "audio/mpeg",
    "mp4": "application/mp4",
    "mpeg": "video/mpeg",
    "mpg": "video/mpeg",
    "odt": "application/vnd.oasis.opendocument.text",
    "ogg": "audio/ogg",
    "pdf": "application/pdf",
    "php": "text/x-php",
    "png": "image/png",
    "psd": "image/vnd.adobe.photoshop",
    "py": "application/x-python",
    "ra": "audio/vnd.rn-realaudio",
    "ram": "audio/vnd.rn-realaudio",
    "rar": "application/x-rar-compressed",
    "rss": "application/rss+xml",
    "safariextz": "application/x-safari-extension",
    "sh": "text/x-shellscript",
    "shtml": "text/html",
    "swf": "application/x-shockwave-flash",
    "tar": "application/x-tar",
    "tif": "image/tiff",
    "tiff": "image/tiff",
    "torrent": "application/x-bittorrent",
    "txt": "text/plain",
    "wav": "audio/wav",
    "webp": "image/webp",
    "wma": "audio/x-ms-wma",
    "xls": "application/vnd.ms-excel",
    "xml": "text/xml",
    "zip": "application/zip",
}


def guess_from_extension(path: Union[str, Path]) -> Optional[str]:
    suffix = Path(path).suffix
    if not suffix:
        return None
    return MIME_TYPES.get(suffix[1:].lower())


class MimeService:
    """
    Content type lookup: ask each sniffer in order, then fall back to the
    extension table. Sniffer failures are non-fatal.
    """

    def __init__(
        self,
        fs: Optional[FilesystemPort] = None,
        sniffers: Optional[Iterable[MimeSnifferPort]] = None,
    ) -> None:
        self._fs = fs or LocalFS()
        self._sniffers = tuple(sniffers or ())

    def get_mime_type(self, path: Union[str, Path], guess: bool = True) -> str:
        p = Path(path)
        if not self._fs.exists(p) or self._fs.is_dir(p):
            raise NotFound(f"{p} is not a file", p)

        for sniffer in self._sniffers:
            try:
                mime = sniffer.sniff(p)
            except Exception as e:
                logger.warning("MimeService: sniffer %s failed for %s: %s", sniffer.name(), p, e)
                continue
            if mime:
                logger.debug("MimeService: %s sniffed %s as %s", sniffer.name(), p, mime)
                return mime

        if guess:
            mime = guess_from_extension(p)
            if mime:
                return mime
        return UNKNOWN
