"""HTTP transport for You.com API calls."""

from __future__ import annotations

import httpx
import structlog

from modules.youdotcom.builders import OutboundRequest
from modules.youdotcom.errors import ErrorKind, ToolError

logger = structlog.get_logger()


class YouComClient:
    """Sends one upstream request per call; never retries or caches."""

    def __init__(self, timeout: float = 60.0):
        self.timeout = timeout

    async def send(self, request: OutboundRequest) -> httpx.Response:
        """Perform the round-trip and return the raw response, whatever its status.

        Raises:
            ToolError: If the request could not be completed at all.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await client.request(
                    request.method,
                    request.url,
                    headers=request.headers,
                    params=request.params,
                    json=request.json,
                )
        except httpx.TimeoutException as e:
            logger.error("youdotcom_request_timeout", capability=request.capability.value, url=request.url)
            raise ToolError(
                ErrorKind.UNKNOWN,
                f"Timed out waiting for the You.com {request.capability.label} API",
            ) from e
        except httpx.RequestError as e:
            logger.error(
                "youdotcom_request_error",
                capability=request.capability.value,
                url=request.url,
                error=str(e),
            )
            raise ToolError(
                ErrorKind.UNKNOWN,
                f"Failed to connect to the You.com {request.capability.label} API: {e}",
            ) from e
