"""Storage backends, one per backend kind.

This module provides pluggable backends for listing and reading files:
- Local folder handles (host-granted capability)
- GitHub repositories via the REST content API
- Authenticated object stores behind a bearer-token proxy
- Generic HTTP servers with HTML directory listings
"""

from typing import Optional

import httpx

from ..auth import TokenProvider
from ..config import Config
from ..models import BackendKind, StorageRoot
from .github import GitHubBackend
from .http import HttpBackend
from .local import DirectoryLister, LocalHandleBackend, PathFolderHandle, PermissionPrompt
from .protocol import FileResponse, FolderHandle, StorageBackend
from .proxy import AuthenticatedProxyBackend


def create_backend(
    root: StorageRoot,
    client: Optional[httpx.AsyncClient],
    config: Config,
    token_provider: Optional[TokenProvider] = None,
    permission_prompt: Optional[PermissionPrompt] = None,
    parent_lister: Optional[DirectoryLister] = None,
) -> StorageBackend:
    """Select the backend for a storage root.

    Args:
        root: The storage root to serve
        client: Shared async HTTP client for network backends (None for local-handle roots)
        config: Runtime configuration (tokens, timeouts)
        token_provider: Auth channel for authenticated-proxy roots
        permission_prompt: Permission callback for local-handle roots
        parent_lister: Cached directory lister for local-handle file reads

    Returns:
        A backend satisfying the StorageBackend protocol

    Raises:
        ValueError: If a local-handle root carries no handle
    """
    if root.kind == BackendKind.LOCAL_HANDLE:
        if root.handle is None:
            raise ValueError(f"Storage root '{root.slug}' has no folder handle")
        return LocalHandleBackend(
            root.handle,
            permission_prompt=permission_prompt,
            permission_timeout=config.permission_timeout,
            parent_lister=parent_lister,
        )
    if root.kind == BackendKind.GITHUB:
        return GitHubBackend(client, token=config.github_token, api_url=config.github_api_url)
    if root.kind == BackendKind.AUTHENTICATED_PROXY:
        return AuthenticatedProxyBackend(
            client,
            root.base_url,
            token_provider=token_provider,
            auth_timeout=config.auth_timeout,
        )
    return HttpBackend(client, root.base_url)


__all__ = [
    "create_backend",
    "StorageBackend",
    "FileResponse",
    "FolderHandle",
    "LocalHandleBackend",
    "PathFolderHandle",
    "GitHubBackend",
    "AuthenticatedProxyBackend",
    "HttpBackend",
]
