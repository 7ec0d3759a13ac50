"""storagefs - one file/directory API over local folders, GitHub and HTTP servers."""

__version__ = "0.1.0"

from .cache import DirectoryCache
from .config import Config
from .errors import (
    AmbiguousMatchError,
    AuthenticationError,
    DecompressionError,
    DirectoryListingError,
    FileMissingError,
    FolderNotFoundError,
    InvalidPathError,
    NoMatchError,
    NotFoundError,
    PermissionTimeoutError,
    RootNotFoundError,
    StorageError,
)
from .filesystem import StorageFileSystem
from .gunzip import gunzip
from .models import AuthToken, BackendKind, DirectoryEntry, StorageRoot, YamlConfigSet

__all__ = [
    "Config",
    "DirectoryCache",
    "StorageFileSystem",
    "gunzip",
    "AuthToken",
    "BackendKind",
    "DirectoryEntry",
    "StorageRoot",
    "YamlConfigSet",
    "StorageError",
    "NotFoundError",
    "FolderNotFoundError",
    "FileMissingError",
    "NoMatchError",
    "AmbiguousMatchError",
    "AuthenticationError",
    "PermissionTimeoutError",
    "InvalidPathError",
    "DecompressionError",
    "DirectoryListingError",
    "RootNotFoundError",
]
