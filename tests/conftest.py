"""
Pytest configuration and fixtures for IPTV addon tests.
"""
import asyncio
from collections import Counter

import pytest

from iptv_addon.exceptions import UpstreamFetchError


class FakeUpstream:
    """In-memory stand-in for the iptv-org API."""

    def __init__(self, datasets):
        self.datasets = datasets
        self.calls = Counter()
        self.failing = set()

    async def fetch(self, name):
        self.calls[name] += 1
        await asyncio.sleep(0)
        if name in self.failing:
            raise UpstreamFetchError(name, "simulated outage")
        return self.datasets[name]


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def sample_datasets():
    """Raw iptv-org payloads covering the filtering and poster rules."""
    return {
        "channels": [
            {"id": "CNN.us", "name": "CNN", "country": "US", "categories": ["news"]},
            {"id": "ESPN.us", "name": "ESPN", "country": "US", "categories": ["sports"]},
            {
                "id": "BBCNews.uk",
                "name": "BBC News",
                "country": "UK",
                "categories": ["news", "general"],
                "logo": "https://example.com/bbc.svg",
            },
            {"id": "NoStream.fr", "name": "Sans Flux", "country": "FR", "categories": ["news"]},
            {
                "id": "Arte.fr",
                "name": "Arte",
                "country": "FR",
                "categories": None,
                "logo": "https://example.com/arte.png",
            },
        ],
        "streams": [
            {"channel": "CNN.us", "url": "https://example.com/cnn-primary.m3u8"},
            {"channel": "CNN.us", "url": "https://example.com/cnn-backup.m3u8"},
            {"channel": "ESPN.us", "url": "https://example.com/espn.m3u8"},
            {"channel": "BBCNews.uk", "url": "https://example.com/bbc.m3u8"},
            {"channel": "Arte.fr", "url": "https://example.com/arte.m3u8"},
            {"channel": None, "url": "https://example.com/orphan.m3u8"},
        ],
        "guides": [
            {
                "channel": "CNN.us",
                "now": "Newsroom",
                "next": "Anderson Cooper 360",
                "image": "https://example.com/newsroom.jpg",
            },
            {"channel": "CNN.us", "now": "Ignored Duplicate"},
            {"channel": "ESPN.us"},
        ],
        "logos": [
            {"channel": "CNN.us", "url": "https://example.com/cnn-512.png", "width": 512, "format": "PNG", "tags": ["horizontal"]},
            {"channel": "CNN.us", "url": "https://example.com/cnn-1024.png", "width": 1024, "format": "PNG", "tags": ["horizontal"]},
            {"channel": "CNN.us", "url": "https://example.com/cnn.svg", "width": 2048, "format": "SVG", "tags": ["horizontal"]},
            {"channel": "ESPN.us", "url": "https://example.com/espn-square.png", "width": 4000, "format": "PNG", "tags": ["square"]},
            {"channel": "ESPN.us", "url": "https://example.com/espn.png", "width": 300, "format": "PNG", "tags": ["horizontal"]},
            {"channel": "BBCNews.uk", "url": "https://example.com/bbc-wide.svg", "width": 900, "format": "SVG", "tags": ["horizontal"]},
        ],
    }


@pytest.fixture
def fake_upstream(sample_datasets):
    return FakeUpstream(sample_datasets)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def addon_settings(tmp_path):
    from iptv_addon.config import Settings

    return Settings(settings_path=str(tmp_path / "config.json"))


@pytest.fixture
def context(addon_settings, fake_upstream, fake_clock):
    """Addon context wired to the fake upstream and clock."""
    from iptv_addon.services.cache import CatalogCache
    from iptv_addon.services.context import AddonContext
    from iptv_addon.services.preferences import SettingsStore

    cache = CatalogCache(
        fake_upstream,
        catalog_ttl_seconds=addon_settings.catalog_ttl_seconds,
        logos_ttl_seconds=addon_settings.logos_ttl_seconds,
        clock=fake_clock,
    )
    store = SettingsStore(addon_settings.settings_path)
    store.load()
    return AddonContext(settings=addon_settings, cache=cache, store=store)


@pytest.fixture
def client(context):
    """TestClient for an app built around the test context."""
    from fastapi.testclient import TestClient
    from iptv_addon.main import create_app

    with TestClient(create_app(context)) as test_client:
        yield test_client
