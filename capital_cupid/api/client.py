"""HTTP client for the application backend."""

import logging
import time
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

# Standard timeout for backend calls: 30s connect, 60s read
API_TIMEOUT = httpx.Timeout(connect=30.0, read=60.0, write=30.0, pool=30.0)


class ApiError(Exception):
    """Raised for transport failures and non-2xx responses."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ApiClient:
    """JSON-over-HTTP wrapper around httpx.AsyncClient.

    Calls are not retried; the caller decides whether to re-trigger.
    """

    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    async def request(self, method: str, path: str, body: Optional[dict] = None) -> Any:
        """Send a request and return the decoded JSON body (None when empty).

        Raises:
            ApiError: On connection failure, timeout, or non-2xx status.
        """
        url = f"{self.base_url}{path}"
        start = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=API_TIMEOUT, transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    json=body,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as exc:
            duration_ms = (time.monotonic() - start) * 1000
            logger.error(
                "api_call method=%s url=%s result=failure error=%s duration_ms=%.0f",
                method, url, exc, duration_ms,
            )
            raise ApiError(f"API Error: {exc}") from exc

        duration_ms = (time.monotonic() - start) * 1000
        if not response.is_success:
            logger.error(
                "api_call method=%s url=%s status=%d result=failure duration_ms=%.0f",
                method, url, response.status_code, duration_ms,
            )
            raise ApiError(
                f"API Error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        logger.info(
            "api_call method=%s url=%s status=%d result=success duration_ms=%.0f",
            method, url, response.status_code, duration_ms,
        )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"API Error: invalid JSON from {url}", status_code=response.status_code) from exc
