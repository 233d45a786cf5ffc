"""Shared-secret API key check for mutating and file routes."""

import secrets
from typing import Optional

from fastapi import Header, Query

from storage_api import config
from storage_api.exceptions import InvalidAPIKeyError


def is_valid_api_key(candidate: Optional[str]) -> bool:
    """
    Compare a supplied key with the configured one in constant time.

    Args:
        candidate: Key supplied by the caller

    Returns:
        False if no key is configured or the keys differ
    """
    expected = config.API_KEY
    if not expected or not candidate:
        return False
    return secrets.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


async def require_api_key(
    x_api_key: Optional[str] = Header(default=None),
    api_key: Optional[str] = Query(default=None, alias="apiKey"),
) -> None:
    """
    FastAPI dependency guarding routes with the shared API key.

    Args:
        x_api_key: X-API-Key header value
        api_key: apiKey query parameter value

    Raises:
        InvalidAPIKeyError: If the key is missing or does not match
    """
    if not is_valid_api_key(x_api_key or api_key):
        raise InvalidAPIKeyError("Invalid or missing API key")
