"""Registry of configured storage roots."""

import logging
import re
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml

from .errors import RootNotFoundError
from .models import BackendKind, StorageRoot

logger = logging.getLogger(__name__)

LOCALHOST_PORTS = range(8000, 8049)
LIVE_PORTS = range(8050, 8099)

_LOCAL_SLUG = re.compile(r"^fs(\d+)-")


def builtin_roots(live_host: str = "http://localhost") -> list[StorageRoot]:
    """Hidden roots every installation has.

    Args:
        live_host: Scheme and host of the machine serving live folders

    Returns:
        The GitHub root, the live-folder root and one root per local port
    """
    roots = [
        StorageRoot(
            slug="github",
            name="github",
            description="GitHub repo file access",
            kind=BackendKind.GITHUB,
            hidden=True,
        ),
        StorageRoot(
            slug="live",
            name="live folders",
            description="Files served by a live folder server",
            base_url=f"{live_host}:8050/_f_",
            hidden=True,
        ),
    ]
    for port in LOCALHOST_PORTS:
        roots.append(
            StorageRoot(
                slug=str(port),
                name=f"Localhost {port}",
                description=f"Localhost {port}",
                base_url=f"http://localhost:{port}",
                hidden=True,
            )
        )
    for port in LIVE_PORTS:
        roots.append(
            StorageRoot(
                slug=str(port),
                name=f"{live_host}:{port}",
                description=f"{live_host}:{port}",
                base_url=f"{live_host}:{port}/_f_",
                hidden=True,
            )
        )
    return roots


def root_from_mapping(data: dict[str, Any]) -> StorageRoot:
    """Build a root from a config mapping.

    Accepts either an explicit ``kind`` or the legacy ``isGithub`` /
    ``needPassword`` flags, plus ``baseURL`` as an alias of ``base_url``.
    """
    data = dict(data)
    base_url = data.pop("base_url", "") or data.pop("baseURL", "")
    data.pop("baseURL", None)
    if "kind" in data:
        return StorageRoot(base_url=base_url, **data)

    is_github = bool(data.pop("isGithub", data.pop("is_github", False)))
    need_password = bool(data.pop("needPassword", data.pop("need_password", False)))
    return StorageRoot.from_flags(
        base_url=base_url, is_github=is_github, need_password=need_password, **data
    )


def load_roots(path: str | Path) -> list[StorageRoot]:
    """Load roots from a YAML file holding a list of root mappings.

    Raises:
        yaml.YAMLError: If the file is not valid YAML
        pydantic.ValidationError: If an entry is not a valid root
    """
    with open(path, encoding="utf-8") as f:
        entries = yaml.safe_load(f) or []
    if not isinstance(entries, list):
        raise ValueError(f"{path} must contain a list of storage roots")

    roots = [root_from_mapping(entry) for entry in entries]
    logger.info("Loaded %d storage root(s) from %s", len(roots), path)
    return roots


def merge_shortcuts(
    roots: list[StorageRoot], shortcuts: Iterable[StorageRoot]
) -> list[StorageRoot]:
    """Place user shortcuts first; drop registry roots they shadow by slug."""
    shortcuts = list(shortcuts)
    shadowed = {shortcut.slug for shortcut in shortcuts}
    return shortcuts + [root for root in roots if root.slug not in shadowed]


def next_local_slug(roots: Iterable[StorageRoot], name: str) -> str:
    """Slug ``fs{n}-{name}`` numbered after the highest existing ``fsN``."""
    highest = 0
    for root in roots:
        match = _LOCAL_SLUG.match(root.slug)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"fs{highest + 1}-{name}"


def add_local_root(
    roots: list[StorageRoot], handle: Any, key: Optional[str] = None
) -> list[StorageRoot]:
    """Register a local folder handle in front of the existing roots.

    Args:
        roots: Current registry
        handle: Host folder handle (anything with a ``name``)
        key: Slug to reuse, e.g. one restored from a previous session

    Returns:
        New registry list with the local root first
    """
    slug = key or next_local_slug(roots, handle.name)
    root = StorageRoot(
        slug=slug,
        name=handle.name,
        description="Local folder",
        kind=BackendKind.LOCAL_HANDLE,
        handle=handle,
    )
    return [root] + [existing for existing in roots if existing.slug != slug]


def proxy_root_for_user(root: StorageRoot, username: str, template: str) -> StorageRoot:
    """Point an authenticated root at the user's folder.

    ``template`` contains ``{username}``, e.g.
    ``https://cdn.example.org/user-scenarios/{username}/``.
    """
    base_url = template.format(username=username)
    if not base_url.endswith("/"):
        base_url += "/"
    return root.model_copy(update={"base_url": base_url})


def find_root(roots: Iterable[StorageRoot], slug: str) -> StorageRoot:
    """Look up a root by slug.

    Raises:
        RootNotFoundError: If no root has that slug
    """
    for root in roots:
        if root.slug == slug:
            return root
    raise RootNotFoundError(slug)
