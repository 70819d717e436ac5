"""
Tests for the iptv-org fetcher.
"""
import httpx
import pytest

from iptv_addon.exceptions import UpstreamFetchError
from iptv_addon.services.upstream import UpstreamClient


def client_for(handler):
    return UpstreamClient(base_url="https://api.test/", timeout=5.0, transport=httpx.MockTransport(handler))


class TestUpstreamClient:

    @pytest.mark.asyncio
    async def test_fetch_returns_parsed_list(self):
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, json=[{"id": "CNN.us", "name": "CNN"}])

        data = await client_for(handler).fetch("channels")

        assert data == [{"id": "CNN.us", "name": "CNN"}]
        assert requested == ["https://api.test/channels.json"]

    @pytest.mark.asyncio
    async def test_http_error_raises_fetch_error(self):
        def handler(request):
            return httpx.Response(503, text="unavailable")

        with pytest.raises(UpstreamFetchError) as exc_info:
            await client_for(handler).fetch("streams")

        assert exc_info.value.endpoint == "streams"

    @pytest.mark.asyncio
    async def test_timeout_raises_fetch_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(UpstreamFetchError):
            await client_for(handler).fetch("guides")

    @pytest.mark.asyncio
    async def test_invalid_json_raises_fetch_error(self):
        def handler(request):
            return httpx.Response(200, text="<html>not json</html>")

        with pytest.raises(UpstreamFetchError):
            await client_for(handler).fetch("logos")

    @pytest.mark.asyncio
    async def test_non_list_payload_raises_fetch_error(self):
        def handler(request):
            return httpx.Response(200, json={"error": "rate limited"})

        with pytest.raises(UpstreamFetchError) as exc_info:
            await client_for(handler).fetch("channels")

        assert "expected a list" in str(exc_info.value)

    def test_explicit_arguments_skip_settings(self, monkeypatch):
        def fail():
            raise AssertionError("settings should not be read")

        monkeypatch.setattr("iptv_addon.services.upstream.get_settings", fail)

        client = UpstreamClient(base_url="https://api.test/", timeout=0.0)

        assert client.base_url == "https://api.test"
        assert client.timeout == 0.0

    def test_missing_arguments_come_from_settings(self):
        client = UpstreamClient(timeout=2.5)

        assert client.base_url == "https://iptv-org.github.io/api"
        assert client.timeout == 2.5
