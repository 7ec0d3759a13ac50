"""Bearer-token exchange with a trusted parent context.

The host supplies an async ``token_provider``: it receives the request sentinel
and resolves to the parent's reply message. Exactly one reply is awaited per
exchange; a reply lacking a field fails immediately instead of waiting for
another message.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping

from .errors import AuthenticationError
from .models import AuthToken

logger = logging.getLogger(__name__)

TOKEN_REQUEST = "requestAuthToken"

TokenProvider = Callable[[str], Awaitable[Mapping[str, Any]]]


def static_token_provider(access_token: str, username: str) -> TokenProvider:
    """Token channel answering every request with fixed credentials (CLI, tests)."""

    async def provider(request: str) -> Mapping[str, Any]:
        return {"accessToken": access_token, "username": username}

    return provider


async def exchange_token(provider: TokenProvider, timeout: float) -> AuthToken:
    """Request a token from the parent context.

    Args:
        provider: Host channel that answers one token request
        timeout: Seconds to wait for the reply

    Returns:
        The access token and username

    Raises:
        AuthenticationError: On timeout, or if the reply lacks ``accessToken``
            or ``username``
    """
    try:
        reply = await asyncio.wait_for(provider(TOKEN_REQUEST), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise AuthenticationError(
            f"No authentication reply from parent within {timeout:g}s. Please log in."
        ) from e

    token = reply.get("accessToken") if isinstance(reply, Mapping) else None
    username = reply.get("username") if isinstance(reply, Mapping) else None
    if not token or not username:
        raise AuthenticationError("No token or username received from parent. Please log in.")

    logger.debug("Received access token for %s", username)
    return AuthToken(access_token=token, username=username)
