"""
Metadata transformer.
Turns iptv-org channel records into Stremio meta objects.
"""
from typing import Optional, Sequence

from iptv_addon.countries import country_name
from iptv_addon.models.channel import Channel, Guide, GuideDetails, Logo
from iptv_addon.models.stremio import Meta

ID_PREFIX = "iptv-"
LOGO_URL_TEMPLATE = "https://iptv-org.github.io/logo/{channel_id}.png"
PLACEHOLDER_POSTER = "https://dl.strem.io/addon-background-landscape.jpg"
DESCRIPTION_SEPARATOR = " • "


def to_meta_id(channel_id: str) -> str:
    return f"{ID_PREFIX}{channel_id}"


def strip_meta_id(meta_id: str) -> str:
    """Recover the upstream channel id from a meta id.

    Only a leading prefix is removed; ids without it are returned unchanged.
    """
    if meta_id.startswith(ID_PREFIX):
        return meta_id[len(ID_PREFIX):]
    return meta_id


def extract_guide_details(guide: Optional[Guide]) -> Optional[GuideDetails]:
    """Now/next details for a guide entry, or None when there is no entry."""
    if guide is None:
        return None
    return GuideDetails(
        nowPlaying=guide.now or "Unknown",
        next=guide.next or "Unknown",
        currentShowImage=guide.image or None,
    )


def best_horizontal_logo(logos: Sequence[Logo]) -> Optional[Logo]:
    """Widest non-SVG logo tagged ``horizontal``; ties go to the earliest."""
    candidates = [logo for logo in logos if "horizontal" in logo.tags and not logo.is_svg]
    if not candidates:
        return None
    return max(candidates, key=lambda logo: logo.width)


def resolve_poster(
    channel: Channel,
    guide_details: Optional[GuideDetails] = None,
    logos: Sequence[Logo] = (),
) -> str:
    """Pick a poster image; the first available source wins.

    1. Image of the show currently airing
    2. Widest horizontal, non-SVG logo for the channel
    3. The channel's own logo unless it is an SVG
    4. iptv-org logo URL built from the channel id
    5. Generic placeholder
    """
    if guide_details and guide_details.currentShowImage:
        return guide_details.currentShowImage

    logo = best_horizontal_logo(logos)
    if logo:
        return logo.url

    if channel.logo and not channel.logo.endswith(".svg"):
        return channel.logo
    if channel.id:
        return LOGO_URL_TEMPLATE.format(channel_id=channel.id)
    return PLACEHOLDER_POSTER


def build_description(channel: Channel, guide_details: Optional[GuideDetails] = None) -> str:
    parts = [
        country_name(channel.country),
        ", ".join(channel.categories),
    ]
    if guide_details:
        parts.append(f"Now: {guide_details.nowPlaying}{DESCRIPTION_SEPARATOR}Next: {guide_details.next}")
    return DESCRIPTION_SEPARATOR.join(part for part in parts if part)


def to_meta(
    channel: Channel,
    guide_details: Optional[GuideDetails] = None,
    logos: Sequence[Logo] = (),
) -> Meta:
    """Build the meta object for a channel.

    ``logos`` are the logos belonging to this channel.
    """
    poster = resolve_poster(channel, guide_details, logos)
    return Meta(
        id=to_meta_id(channel.id),
        type="tv",
        name=channel.name,
        poster=poster,
        posterShape="landscape",
        background=poster,
        logo=poster,
        description=build_description(channel, guide_details),
    )
