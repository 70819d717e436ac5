"""
Stremio addon protocol models.
"""
from pydantic import BaseModel, Field
from typing import Optional


class Meta(BaseModel):
    """Meta object describing a single channel."""
    id: str
    type: str = "tv"
    name: str
    poster: str
    posterShape: str = "landscape"
    background: Optional[str] = None
    logo: Optional[str] = None
    description: str = ""


class StreamLink(BaseModel):
    """Playable stream entry."""
    url: str
    title: str = "Live"


class ExtraProperty(BaseModel):
    """Extra catalog property (search, genre, ...)."""
    name: str
    options: Optional[list[str]] = None


class ManifestCatalog(BaseModel):
    """Catalog definition in manifest."""
    type: str = "tv"
    id: str
    name: str
    extra: list[ExtraProperty] = Field(default_factory=list)


class Manifest(BaseModel):
    """Stremio addon manifest."""
    id: str = "org.iptv.configurable"
    version: str = "1.1.0"
    name: str = "IPTV"
    description: str = "Live IPTV filtered by selected countries and genres"
    resources: list[str] = ["catalog", "meta", "stream"]
    types: list[str] = ["tv"]
    idPrefixes: list[str] = ["iptv-"]
    catalogs: list[ManifestCatalog]
    behaviorHints: dict = {
        "configurable": True,
        "configurationRequired": False,
    }
