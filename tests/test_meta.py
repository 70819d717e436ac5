"""
Tests for the channel -> meta transformer.
"""
from iptv_addon.models.channel import Channel, Guide, GuideDetails, Logo
from iptv_addon.services.meta import (
    PLACEHOLDER_POSTER,
    build_description,
    extract_guide_details,
    resolve_poster,
    strip_meta_id,
    to_meta,
)


def horizontal(url, width, fmt="PNG"):
    return Logo(channel="X.us", url=url, width=width, format=fmt, tags=["horizontal"])


class TestExtractGuideDetails:

    def test_missing_guide_returns_none(self):
        assert extract_guide_details(None) is None

    def test_empty_guide_uses_unknown(self):
        details = extract_guide_details(Guide())
        assert details.model_dump() == {
            "nowPlaying": "Unknown",
            "next": "Unknown",
            "currentShowImage": None,
        }

    def test_guide_fields_are_copied(self):
        details = extract_guide_details(Guide(channel="X.us", now="News", next="Sports", image="https://img/now.jpg"))
        assert details.nowPlaying == "News"
        assert details.next == "Sports"
        assert details.currentShowImage == "https://img/now.jpg"


class TestPosterPriority:
    """Poster sources are tried strictly in order."""

    def test_guide_image_beats_high_resolution_logos(self):
        channel = Channel(id="X.us", name="X", logo="https://example.com/x.png")
        details = GuideDetails(currentShowImage="https://example.com/show.jpg")
        logos = [horizontal("https://example.com/huge.png", 8000)]

        assert resolve_poster(channel, details, logos) == "https://example.com/show.jpg"

    def test_widest_horizontal_non_svg_logo(self):
        channel = Channel(id="X.us", name="X", logo="https://example.com/x.png")
        logos = [
            horizontal("https://example.com/small.png", 200),
            horizontal("https://example.com/vector.svg", 5000, fmt="svg"),
            Logo(channel="X.us", url="https://example.com/square.png", width=9000, tags=["square"]),
            horizontal("https://example.com/large.png", 1200),
        ]

        assert resolve_poster(channel, GuideDetails(), logos) == "https://example.com/large.png"

    def test_equal_widths_keep_first_logo(self):
        channel = Channel(id="X.us", name="X")
        logos = [horizontal("https://example.com/a.png", 500), horizontal("https://example.com/b.png", 500)]

        assert resolve_poster(channel, None, logos) == "https://example.com/a.png"

    def test_channel_logo_when_no_usable_logo(self):
        channel = Channel(id="X.us", name="X", logo="https://example.com/x.png")
        logos = [horizontal("https://example.com/only.svg", 900, fmt="SVG")]

        assert resolve_poster(channel, None, logos) == "https://example.com/x.png"

    def test_svg_channel_logo_falls_back_to_id_template(self):
        channel = Channel(id="X.us", name="X", logo="https://example.com/x.svg")

        assert resolve_poster(channel) == "https://iptv-org.github.io/logo/X.us.png"

    def test_placeholder_without_id(self):
        channel = Channel(id="", name="Nameless")

        assert resolve_poster(channel) == PLACEHOLDER_POSTER


class TestDescription:

    def test_country_categories_and_guide(self):
        channel = Channel(id="X.us", name="X", country="US", categories=["news", "general"])
        details = GuideDetails(nowPlaying="Morning Show")

        assert build_description(channel, details) == (
            "United States • news, general • Now: Morning Show • Next: Unknown"
        )

    def test_unknown_country_code_and_empty_parts_skipped(self):
        channel = Channel(id="X.zz", name="X", country="ZZ")

        assert build_description(channel) == "ZZ"

    def test_no_guide_part_without_details(self):
        channel = Channel(id="X.fr", name="X", country="FR", categories=["music"])

        assert build_description(channel, None) == "France • music"


class TestToMeta:

    def test_meta_fields(self):
        channel = Channel(id="CNN.us", name="CNN", country="US", categories=["news"])
        meta = to_meta(channel, None, [horizontal("https://example.com/cnn.png", 640)])

        assert meta.id == "iptv-CNN.us"
        assert meta.type == "tv"
        assert meta.name == "CNN"
        assert meta.posterShape == "landscape"
        assert meta.poster == meta.background == meta.logo == "https://example.com/cnn.png"
        assert meta.description == "United States • news"


class TestMetaIds:

    def test_strip_leading_prefix_only(self):
        assert strip_meta_id("iptv-CNN.us") == "CNN.us"
        assert strip_meta_id("iptv-iptv-odd.us") == "iptv-odd.us"
        assert strip_meta_id("Foo-iptv-bar") == "Foo-iptv-bar"
