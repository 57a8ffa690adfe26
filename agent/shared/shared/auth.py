"""Request authentication for module services.

Two credentials travel on a request to a module:

* ``Authorization: Bearer <SERVICE_AUTH_TOKEN>`` authenticates the calling
  service against the module's protected endpoints.
* ``X-API-Key: <key>`` optionally carries the caller's own upstream API key,
  which then takes precedence over the key configured for the module.

Usage in a module FastAPI app::

    from shared.auth import get_upstream_api_key, require_service_auth

    @app.post("/execute")
    async def execute(
        call: ToolCall,
        _=Depends(require_service_auth),
        api_key: str = Depends(get_upstream_api_key),
    ):
        ...
"""

from __future__ import annotations

import structlog
from fastapi import HTTPException, Request

from shared.config import get_settings

logger = structlog.get_logger()

UPSTREAM_KEY_HEADER = "x-api-key"


def extract_bearer_token(auth_header: str | None) -> str | None:
    """Return the token from a ``Bearer`` authorization header, if any."""
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    token = auth_header[7:].strip()
    return token or None


async def require_service_auth(request: Request) -> None:
    """FastAPI dependency that validates the inter-service auth token.

    Raises 401 if the token is missing or incorrect.
    Skips validation when ``service_auth_token`` is empty (dev mode).
    """
    expected = get_settings().service_auth_token
    if not expected:
        logger.warning(
            "service_auth_disabled",
            path=request.url.path,
            hint="Set SERVICE_AUTH_TOKEN in .env for production",
        )
        return

    token = extract_bearer_token(request.headers.get("authorization"))
    if token is None:
        raise HTTPException(status_code=401, detail="Missing service auth token")

    if token != expected:
        logger.warning(
            "service_auth_failed",
            path=request.url.path,
            remote=request.client.host if request.client else "unknown",
        )
        raise HTTPException(status_code=401, detail="Invalid service auth token")


async def get_upstream_api_key(request: Request) -> str:
    """FastAPI dependency resolving the upstream API key for this request.

    A non-empty ``X-API-Key`` header wins; otherwise the configured key is
    used. An empty string means no key is available, which the tool itself
    reports. The key is never logged.
    """
    header_key = request.headers.get(UPSTREAM_KEY_HEADER, "").strip()
    if header_key:
        return header_key
    return get_settings().ydc_api_key
