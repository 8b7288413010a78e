from .entry import CopyResult, DeleteResult, EntryInfo, EntryKind
from .errors import (
    AlreadyExists,
    ConfigurationError,
    FilekitError,
    FilesystemError,
    IOFailure,
    NotADirectory,
    NotFound,
    PermissionDenied,
    SourceNotFound,
    translate_os_error,
)

__all__ = [
    "AlreadyExists",
    "ConfigurationError",
    "CopyResult",
    "DeleteResult",
    "EntryInfo",
    "EntryKind",
    "FilekitError",
    "FilesystemError",
    "IOFailure",
    "NotADirectory",
    "NotFound",
    "PermissionDenied",
    "SourceNotFound",
    "translate_os_error",
]
