"""Exception hierarchy for storagefs.

Transport failures are not wrapped: adapters let ``httpx.HTTPStatusError``
(with the response attached) and ``httpx.TransportError`` propagate so callers
can branch on status codes.
"""


class StorageError(Exception):
    """Base error for storage operations."""


class NotFoundError(StorageError):
    """A folder, file or pattern could not be resolved."""


class FolderNotFoundError(NotFoundError):
    """A path segment does not exist below its parent folder."""

    def __init__(self, segment: str):
        self.segment = segment
        super().__init__(f'Could not find folder "{segment}"')


class FileMissingError(NotFoundError):
    """A file is absent from an otherwise resolved folder."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"File {filename} missing")


class NoMatchError(NotFoundError):
    """A wildcard pattern matched no files."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(f'No files matched "{pattern}"')


class AmbiguousMatchError(StorageError):
    """A wildcard pattern matched more than one file."""

    def __init__(self, pattern: str, candidates: list[str]):
        self.pattern = pattern
        self.candidates = list(candidates)
        super().__init__(
            f'More than one file matched "{pattern}": {", ".join(self.candidates)}'
        )


class AuthenticationError(StorageError):
    """The token exchange failed. Not retried; callers should prompt a re-login."""


class PermissionTimeoutError(StorageError):
    """Nobody answered the folder permission prompt in time."""


class InvalidPathError(StorageError):
    """A path does not have the shape its backend requires."""


class DecompressionError(StorageError):
    """A payload is nested in more gzip layers than allowed."""


class DirectoryListingError(StorageError):
    """Listing a directory failed. ``cause`` holds the underlying error."""

    def __init__(self, path: str, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"Could not list {path}: {cause}")


class RootNotFoundError(StorageError, KeyError):
    """No storage root is registered under a slug."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"No storage root named '{slug}'")

    def __str__(self) -> str:
        return self.args[0]
