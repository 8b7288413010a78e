from .filesystem import FilesystemPort
from .sniffer import MimeSnifferPort

__all__ = ["FilesystemPort", "MimeSnifferPort"]
