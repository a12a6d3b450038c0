import logging

import httpx

from .. import __version__
from ..core.config import Config

logger = logging.getLogger(__name__)

USER_AGENT = f"hcloud-fip-controller/{__version__}"


def get_async_http_client(config: Config) -> httpx.AsyncClient:
    """
    Returns an httpx.AsyncClient for the Hetzner Cloud API with:
    - The API base URL and bearer token from the given config.
    - The configured timeout; none at all when HCLOUD_TIMEOUT is unset.
    - Standard User-Agent header.
    """
    headers = {
        "User-Agent": USER_AGENT,
        "Authorization": f"Bearer {config.HCLOUD_TOKEN}",
    }

    # No retries: a failed call aborts the reconciliation and the process.
    return httpx.AsyncClient(
        base_url=config.HCLOUD_API_URL,
        timeout=httpx.Timeout(config.timeout),
        headers=headers,
    )
