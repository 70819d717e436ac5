"""
Catalog, meta, stream and manifest handlers.
Filter the cached iptv-org data and shape it into Stremio documents.
"""
import logging
from typing import Iterable, Optional
from urllib.parse import parse_qsl

from iptv_addon.countries import COUNTRIES, country_name
from iptv_addon.models.channel import Channel, GuideDetails, Logo
from iptv_addon.models.settings import UserSettings
from iptv_addon.models.stremio import ExtraProperty, Manifest, ManifestCatalog, Meta, StreamLink
from iptv_addon.services.context import AddonContext
from iptv_addon.services.meta import ID_PREFIX, extract_guide_details, strip_meta_id, to_meta

logger = logging.getLogger(__name__)

ALL_CATALOG_ID = "iptv-all"
COUNTRY_CATALOG_PREFIX = "iptv-country-"


def parse_extra(extra: Optional[str]) -> dict[str, str]:
    """Parse a catalog extra segment such as ``search=news&genre=Sports``."""
    if not extra:
        return {}
    return dict(parse_qsl(extra, keep_blank_values=False))


def catalog_country(catalog_id: str) -> Optional[str]:
    """Upper-cased country code for a country catalog id, else None."""
    if catalog_id.startswith(COUNTRY_CATALOG_PREFIX):
        return catalog_id[len(COUNTRY_CATALOG_PREFIX):].upper()
    return None


def country_catalog_id(code: str) -> str:
    return f"{COUNTRY_CATALOG_PREFIX}{code.lower()}"


def filter_channels(
    channels: list[Channel],
    playable: set[str],
    user_settings: UserSettings,
    country: Optional[str] = None,
    genre: Optional[str] = None,
    search: Optional[str] = None,
) -> list[Channel]:
    """Apply the catalog filters in order, keeping upstream order.

    Args:
        channels: All cached channels
        playable: Ids of channels that have at least one stream
        user_settings: Saved allow-list; its genres restrict every catalog
        country: Upper-cased country code for country catalogs
        genre: Exact category requested by the client
        search: Case-insensitive substring of the channel name
    """
    results = [c for c in channels if c.id in playable]

    if country:
        results = [c for c in results if c.country == country]

    if user_settings.genres:
        allowed = set(user_settings.genres)
        results = [c for c in results if any(g in allowed for g in c.categories)]

    if genre:
        results = [c for c in results if genre in c.categories]

    if search:
        query = search.lower()
        results = [c for c in results if query in c.name.lower()]

    return results


async def _logos_if_needed(
    ctx: AddonContext, details: Iterable[Optional[GuideDetails]]
) -> dict[str, list[Logo]]:
    """Logo index, fetched only when some poster cannot come from the guide."""
    if all(d is not None and d.currentShowImage for d in details):
        return {}
    return await ctx.cache.get_logos_by_channel()


async def build_catalog(ctx: AddonContext, catalog_id: str, extra: Optional[str] = None) -> list[Meta]:
    """Metas for a catalog request."""
    params = parse_extra(extra)
    data = await ctx.cache.get_catalog_data()

    channels = filter_channels(
        data.channels,
        playable=set(data.stream_by_channel),
        user_settings=ctx.store.current,
        country=catalog_country(catalog_id),
        genre=params.get("genre"),
        search=params.get("search"),
    )

    details = {channel.id: extract_guide_details(data.guide_by_channel.get(channel.id)) for channel in channels}
    logos = await _logos_if_needed(ctx, details.values())

    metas = [to_meta(channel, details[channel.id], logos.get(channel.id, [])) for channel in channels]

    logger.debug(f"Catalog {catalog_id} {params}: {len(metas)} metas")
    return metas


async def build_meta(ctx: AddonContext, meta_id: str) -> Optional[Meta]:
    """Meta for a single channel, or None if the channel is unknown."""
    channel_id = strip_meta_id(meta_id)
    data = await ctx.cache.get_catalog_data()
    channel = data.channels_by_id.get(channel_id)
    if channel is None:
        return None

    details = extract_guide_details(data.guide_by_channel.get(channel_id))
    logos = await _logos_if_needed(ctx, [details])
    return to_meta(channel, details, logos.get(channel_id, []))


async def build_streams(ctx: AddonContext, meta_id: str) -> list[StreamLink]:
    """The first known stream for a channel, if any."""
    channel_id = strip_meta_id(meta_id)
    data = await ctx.cache.get_catalog_data()
    stream = data.stream_by_channel.get(channel_id)
    if stream is None:
        return []
    return [StreamLink(url=stream.url, title="Live")]


async def build_manifest(ctx: AddonContext) -> Manifest:
    """Manifest with one catalog for all channels plus one per allowed country."""
    data = await ctx.cache.get_catalog_data()
    genres = data.genres()
    allowed_countries = ctx.store.current.countries or list(COUNTRIES)

    def extras() -> list[ExtraProperty]:
        return [ExtraProperty(name="search"), ExtraProperty(name="genre", options=genres)]

    catalogs = [ManifestCatalog(type="tv", id=ALL_CATALOG_ID, name="All Channels", extra=extras())]
    for code in allowed_countries:
        catalogs.append(ManifestCatalog(
            type="tv",
            id=country_catalog_id(code),
            name=f"{country_name(code)} TV",
            extra=extras(),
        ))

    return Manifest(
        version=ctx.settings.app_version,
        name=ctx.settings.app_name,
        idPrefixes=[ID_PREFIX],
        catalogs=catalogs,
    )
