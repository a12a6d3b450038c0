# src/fipcontroller/clients/hcloud_client.py
"""
Minimal asynchronous client for the floating IP endpoints of the Hetzner Cloud API.
"""

import logging
from typing import List, Optional

import httpx

from ..core.config import Config
from ..core.exceptions import HcloudAPIError
from ..models.floating_ip import FloatingIP
from ..utils.http_client import get_async_http_client

logger = logging.getLogger(__name__)


class HcloudClient:
    """
    Lists floating IPs and assigns them to servers.

    Every error is raised to the caller; there is no retry or backoff.
    """

    def __init__(self, config: Config, http_client: Optional[httpx.AsyncClient] = None):
        self._page_size = config.page_size
        self._http = http_client or get_async_http_client(config)

    async def list_floating_ips(self) -> List[FloatingIP]:
        """Returns every floating IP of the project, following pagination."""
        floating_ips = []
        page = 1
        while page:
            data = await self._request(
                "GET",
                "/floating_ips",
                params={"page": page, "per_page": self._page_size},
            )
            floating_ips.extend(FloatingIP.model_validate(item) for item in data.get("floating_ips", []))
            pagination = (data.get("meta") or {}).get("pagination") or {}
            page = pagination.get("next_page")

        logger.debug("Fetched %d floating IPs", len(floating_ips))
        return floating_ips

    async def assign(self, floating_ip_id: int, server_id: int) -> dict:
        """
        Assigns a floating IP to a server.

        The call is always issued, even when the IP already points at the server;
        the API treats that as a no-op.
        """
        logger.info("assigning floating IP %s to server %s", floating_ip_id, server_id)
        data = await self._request(
            "POST",
            f"/floating_ips/{floating_ip_id}/actions/assign",
            json={"server": server_id},
        )
        return data.get("action", {})

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        response = await self._http.request(method, path, **kwargs)
        if response.is_error:
            raise _api_error(response)
        return response.json()

    async def close(self):
        await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()


def _api_error(response: httpx.Response) -> HcloudAPIError:
    """Build an HcloudAPIError from the API's {"error": {"code", "message"}} envelope."""
    try:
        body = response.json()
    except ValueError:
        body = None
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        error = {}
    return HcloudAPIError(
        response.status_code,
        code=error.get("code"),
        message=error.get("message") or response.reason_phrase,
    )
