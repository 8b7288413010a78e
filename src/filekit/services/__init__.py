from .walker import DirectoryWalker
from .tree_service import TreeService
from .mime_service import MimeService
from .visibility_service import VisibilityService
from .filesystem_service import Filesystem


__all__ = [
    'DirectoryWalker',
    'TreeService',
    'MimeService',
    'VisibilityService',
    'Filesystem',
]
