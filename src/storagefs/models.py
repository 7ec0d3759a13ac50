"""Core data models for storagefs."""

from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .paths import natural_sorted


class BackendKind(str, Enum):
    """Storage backend kinds, in dispatch precedence order."""

    LOCAL_HANDLE = "local-handle"
    GITHUB = "github"
    AUTHENTICATED_PROXY = "authenticated-proxy"
    GENERIC_HTTP = "generic-http"


class StorageRoot(BaseModel):
    """One configured backend endpoint. Immutable once built."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    slug: str
    name: str = ""
    description: str = ""
    base_url: str = ""
    kind: BackendKind = BackendKind.GENERIC_HTTP
    handle: Optional[Any] = Field(default=None, exclude=True)  # host folder handle
    hidden: bool = False
    example: bool = False

    @field_validator("base_url")
    @classmethod
    def _trailing_slash(cls, value: str) -> str:
        if value and not value.endswith("/"):
            value += "/"
        return value

    @classmethod
    def from_flags(
        cls,
        slug: str,
        base_url: str = "",
        handle: Any = None,
        is_github: bool = False,
        need_password: bool = False,
        **extra: Any,
    ) -> "StorageRoot":
        """Build a root from legacy boolean flags.

        Precedence: local-handle > github > authenticated-proxy > generic-http.
        """
        if handle is not None:
            kind = BackendKind.LOCAL_HANDLE
        elif is_github:
            kind = BackendKind.GITHUB
        elif need_password:
            kind = BackendKind.AUTHENTICATED_PROXY
        else:
            kind = BackendKind.GENERIC_HTTP
        return cls(slug=slug, base_url=base_url, kind=kind, handle=handle, **extra)


class DirectoryEntry(BaseModel):
    """Normalized listing of one directory.

    Directory names never carry a trailing separator and no name contains one.
    Both lists are natural-sorted on construction.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    dirs: List[str] = Field(default_factory=list)
    files: List[str] = Field(default_factory=list)
    handles: Dict[str, Any] = Field(default_factory=dict, exclude=True)

    @field_validator("dirs")
    @classmethod
    def _strip_dir_slash(cls, value: List[str]) -> List[str]:
        return [name.rstrip("/") for name in value]

    @model_validator(mode="after")
    def _check_and_sort(self) -> "DirectoryEntry":
        for name in [*self.dirs, *self.files]:
            if "/" in name:
                raise ValueError(f"Entry name contains a path separator: {name!r}")
        self.dirs = natural_sorted(self.dirs)
        self.files = natural_sorted(self.files)
        return self

    @property
    def is_empty(self) -> bool:
        """True for an empty listing, which may also mean "unparseable"."""
        return not self.dirs and not self.files


class YamlConfigSet(BaseModel):
    """YAML files found by config discovery, keyed by filename."""

    dashboards: Dict[str, str] = Field(default_factory=dict)
    topsheets: Dict[str, str] = Field(default_factory=dict)
    vizes: Dict[str, str] = Field(default_factory=dict)
    configs: Dict[str, str] = Field(default_factory=dict)


class AuthToken(BaseModel):
    """Bearer token plus the identity it was issued to."""

    access_token: str
    username: str
