"""
Upstream data fetcher.
Fetches raw JSON from the iptv-org API endpoints.
"""
import httpx
import logging
from typing import Optional

from iptv_addon.config import get_settings
from iptv_addon.exceptions import UpstreamFetchError

logger = logging.getLogger(__name__)


class UpstreamClient:
    """Fetches the iptv-org datasets used by the addon."""

    ENDPOINTS = {
        "channels": "/channels.json",
        "streams": "/streams.json",
        "guides": "/guides.json",
        "logos": "/logos.json",
    }

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if base_url is None or timeout is None:
            settings = get_settings()
            base_url = base_url or settings.iptv_api_base
            timeout = timeout if timeout is not None else settings.upstream_timeout_seconds
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def fetch(self, name: str) -> list:
        """Fetch one dataset by name (``channels``, ``streams``, ``guides``, ``logos``).

        Raises UpstreamFetchError on HTTP errors, timeouts and payloads that
        are not a JSON list.
        """
        url = f"{self.base_url}{self.ENDPOINTS[name]}"
        logger.info(f"Fetching data from {url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch {name}: {e}")
            raise UpstreamFetchError(name, str(e) or type(e).__name__) from e
        except ValueError as e:
            logger.error(f"Invalid JSON from {name}: {e}")
            raise UpstreamFetchError(name, "invalid JSON") from e

        if not isinstance(data, list):
            raise UpstreamFetchError(name, f"expected a list, got {type(data).__name__}")

        logger.info(f"Fetched {len(data)} items from {name}")
        return data
