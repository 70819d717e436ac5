"""
Addon context: owns the cache and the settings store for one application.
"""
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from iptv_addon.config import Settings, get_settings
from iptv_addon.services.cache import CatalogCache, Fetcher
from iptv_addon.services.preferences import SettingsStore
from iptv_addon.services.upstream import UpstreamClient


@dataclass
class AddonContext:
    """Shared state handed to request handlers."""
    settings: Settings
    cache: CatalogCache
    store: SettingsStore

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, fetcher: Optional[Fetcher] = None) -> "AddonContext":
        """Build a context and load the persisted user settings."""
        settings = settings or get_settings()
        fetcher = fetcher or UpstreamClient(
            base_url=settings.iptv_api_base,
            timeout=settings.upstream_timeout_seconds,
        )
        cache = CatalogCache(
            fetcher,
            catalog_ttl_seconds=settings.catalog_ttl_seconds,
            logos_ttl_seconds=settings.logos_ttl_seconds,
        )
        store = SettingsStore(settings.settings_path)
        store.load()
        return cls(settings=settings, cache=cache, store=store)


def get_context(request: Request) -> AddonContext:
    """FastAPI dependency returning the application's context."""
    return request.app.state.context
