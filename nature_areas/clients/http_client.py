import logging
from typing import Any, Dict, Optional

import httpx

from ..exceptions import UpstreamNotFoundError, UpstreamTimeoutError, UpstreamTransportError

logger = logging.getLogger(__name__)


class UpstreamHttpClient:
    """Thin async HTTP client for one upstream REST API

    Parses JSON responses and returns anything else (WKT endpoints answer
    text/plain) as a string. Every transport or HTTP failure is raised as an
    UpstreamTransportError subclass.
    """

    def __init__(self, api_name: str, base_url: str, timeout: float = 30.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_name = api_name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy initialization of HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={"Accept": "application/json, text/plain"},
            )
        return self._client

    async def request(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET ``path`` and return the decoded body"""
        query = {key: value for key, value in (params or {}).items() if value is not None}

        try:
            response = await self.client.get(path, params=query)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning(f"{self.api_name} timeout for {path}: {e}")
            raise UpstreamTimeoutError(self.api_name, self.timeout) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                logger.info(f"{self.api_name} returned 404 for {path}")
                raise UpstreamNotFoundError(self.api_name, path) from e
            logger.warning(f"{self.api_name} HTTP {status} for {path}")
            raise UpstreamTransportError(self.api_name, "HTTP error", upstream_status=status) from e
        except httpx.RequestError as e:
            logger.warning(f"{self.api_name} request error for {path}: {e}")
            raise UpstreamTransportError(self.api_name, str(e) or type(e).__name__) from e

        content_type = response.headers.get("content-type", "")
        if "json" in content_type:
            try:
                return response.json()
            except ValueError as e:
                raise UpstreamTransportError(self.api_name, f"invalid JSON body: {e}") from e
        return response.text

    async def close(self):
        """Close the HTTP client"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
