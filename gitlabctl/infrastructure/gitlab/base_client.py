"""Base GitLab client with common functionality."""
import logging
from typing import Any, Dict, Optional

import httpx

from gitlabctl.config import Settings
from gitlabctl.errors import DecodeError, TransportError

logger = logging.getLogger(__name__)


class BaseGitLabClient:
    """Owns the HTTP client and maps transport and decoding failures to gitlabctl errors."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize the HTTP client.

        Args:
            settings: resolved settings for this run
            transport: optional httpx transport, used to stub the API in tests
        """
        self.settings = settings
        if transport is None:
            # Retries only cover failed connection attempts
            transport = httpx.AsyncHTTPTransport(
                retries=settings.connect_retries, verify=settings.verify_ssl
            )
        self.client = httpx.AsyncClient(
            base_url=settings.api_url,
            headers=self._get_headers(),
            timeout=settings.request_timeout,
            transport=transport,
        )

    def _get_headers(self) -> Dict[str, str]:
        # GitLab reads personal access tokens from PRIVATE-TOKEN
        return {"PRIVATE-TOKEN": self.settings.token, "Accept": "application/json"}

    async def _make_request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Make HTTP request, raising TransportError on network failures and error statuses."""
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.debug(f"{method} {path} failed: {e!r}")
            raise TransportError(f"{method} {path} failed: {e}", url=path) from e

        logger.debug(f"{method} {response.request.url} -> {response.status_code}")
        if response.is_error:
            raise TransportError(
                f"{method} {path} returned HTTP {response.status_code}",
                url=str(response.request.url),
                status_code=response.status_code,
            )
        return response

    def _decode_json(self, response: httpx.Response) -> Any:
        """Parse a JSON body, raising DecodeError when it is not JSON."""
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(
                f"Response from {response.request.url} is not valid JSON: {e}",
                url=str(response.request.url),
            ) from e

    async def close(self) -> None:
        """Release pooled connections; the client cannot be reused afterwards."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
