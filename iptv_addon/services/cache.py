"""
In-memory caching layer for iptv-org API data.
Provides TTL-based invalidation with lazy, single-flight refreshes.
"""
import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Protocol

from pydantic import BaseModel, ValidationError

from iptv_addon.models.channel import Channel, Guide, Logo, Stream

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    async def fetch(self, name: str) -> list: ...


@dataclass
class CatalogData:
    """Channels, streams and guides from a single refresh.

    The lookup maps are built once per refresh. When several streams or
    guides reference the same channel, the first one in upstream order wins.
    """
    channels: list[Channel]
    streams: list[Stream]
    guides: list[Guide]
    channels_by_id: dict[str, Channel] = field(default_factory=dict)
    stream_by_channel: dict[str, Stream] = field(default_factory=dict)
    guide_by_channel: dict[str, Guide] = field(default_factory=dict)

    @classmethod
    def build(cls, channels: list[Channel], streams: list[Stream], guides: list[Guide]) -> "CatalogData":
        data = cls(channels=channels, streams=streams, guides=guides)
        for channel in channels:
            data.channels_by_id.setdefault(channel.id, channel)
        for stream in streams:
            if stream.channel:
                data.stream_by_channel.setdefault(stream.channel, stream)
        for guide in guides:
            if guide.channel:
                data.guide_by_channel.setdefault(guide.channel, guide)
        return data

    def genres(self) -> list[str]:
        """All distinct categories across channels, sorted."""
        return sorted({category for channel in self.channels for category in channel.categories})


@dataclass
class LogoData:
    """Logo list plus a per-channel index in upstream order."""
    logos: list[Logo]
    by_channel: dict[str, list[Logo]] = field(default_factory=dict)

    @classmethod
    def build(cls, logos: list[Logo]) -> "LogoData":
        data = cls(logos=logos)
        for logo in logos:
            data.by_channel.setdefault(logo.channel, []).append(logo)
        return data


class CacheEntry:
    """A cached value with its fetch timestamp and TTL."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float]):
        self.ttl_seconds = ttl_seconds
        self.value: Optional[Any] = None
        self.fetched_at: Optional[float] = None
        self._clock = clock
        self._lock = asyncio.Lock()

    def is_fresh(self) -> bool:
        if self.value is None or self.fetched_at is None:
            return False
        return self._clock() - self.fetched_at < self.ttl_seconds

    async def get_or_refresh(self, loader: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value, calling ``loader`` if it is missing or stale.

        Only one refresh runs at a time; callers that arrive during a
        refresh wait for it and receive its result. A failing loader leaves
        the entry untouched.
        """
        if self.is_fresh():
            return self.value
        async with self._lock:
            if self.is_fresh():
                return self.value
            value = await loader()
            self.value = value
            self.fetched_at = self._clock()
            return value

    def clear(self):
        self.value = None
        self.fetched_at = None


def _parse(name: str, model: type[BaseModel], raw: list) -> list:
    """Validate records one by one, skipping the ones that do not fit the model."""
    records = []
    skipped = 0
    for item in raw:
        try:
            records.append(model.model_validate(item))
        except ValidationError:
            skipped += 1
    if skipped:
        logger.warning(f"Skipped {skipped} malformed {name} records out of {len(raw)}")
    return records


class CatalogCache:
    """Async in-memory cache for the iptv-org datasets.

    Channels, streams and guides share one entry and are always refreshed
    together; logos have their own entry with a longer TTL.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        catalog_ttl_seconds: float = 3600,
        logos_ttl_seconds: float = 86400,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.fetcher = fetcher
        self._catalog = CacheEntry(catalog_ttl_seconds, clock)
        self._logos = CacheEntry(logos_ttl_seconds, clock)

    async def _load_catalog(self) -> CatalogData:
        logger.info("Refreshing channels, streams and guides")
        raw_channels, raw_streams, raw_guides = await asyncio.gather(
            self.fetcher.fetch("channels"),
            self.fetcher.fetch("streams"),
            self.fetcher.fetch("guides"),
        )
        data = CatalogData.build(
            _parse("channels", Channel, raw_channels),
            _parse("streams", Stream, raw_streams),
            _parse("guides", Guide, raw_guides),
        )
        logger.info(
            f"Cached {len(data.channels)} channels, {len(data.streams)} streams, "
            f"{len(data.guides)} guides ({len(data.stream_by_channel)} playable)"
        )
        return data

    async def _load_logos(self) -> LogoData:
        logger.info("Refreshing logos")
        raw_logos = await self.fetcher.fetch("logos")
        data = LogoData.build(_parse("logos", Logo, raw_logos))
        logger.info(f"Cached {len(data.logos)} logos")
        return data

    async def get_catalog_data(self) -> CatalogData:
        """Get channels, streams and guides, refreshing all three if stale."""
        return await self._catalog.get_or_refresh(self._load_catalog)

    async def get_logo_data(self) -> LogoData:
        return await self._logos.get_or_refresh(self._load_logos)

    async def get_logos(self) -> list[Logo]:
        """Get the full logo list, refreshing it if stale."""
        return (await self.get_logo_data()).logos

    async def get_logos_by_channel(self) -> dict[str, list[Logo]]:
        return (await self.get_logo_data()).by_channel

    def invalidate(self):
        """Drop both cache entries so the next call re-fetches."""
        self._catalog.clear()
        self._logos.clear()
