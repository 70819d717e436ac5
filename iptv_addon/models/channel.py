"""
Channel, Stream, Guide and Logo data models.
Maps to iptv-org API schema.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional


class Channel(BaseModel):
    """TV Channel model matching iptv-org channels.json schema."""
    id: str
    name: str = ""
    country: str = ""
    categories: list[str] = Field(default_factory=list)
    logo: Optional[str] = None

    @field_validator("name", "country", mode="before")
    @classmethod
    def _none_to_blank(cls, value):
        return value if value is not None else ""

    @field_validator("categories", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return value if value is not None else []


class Stream(BaseModel):
    """Stream URL model matching iptv-org streams.json schema."""
    channel: Optional[str] = None
    url: str
    title: Optional[str] = None
    quality: Optional[str] = None
    referrer: Optional[str] = None
    user_agent: Optional[str] = None


class Guide(BaseModel):
    """EPG guide entry for a channel."""
    channel: Optional[str] = None
    now: Optional[str] = None
    next: Optional[str] = None
    image: Optional[str] = None

    # Guide source fields (iptv-org guides.json)
    site: Optional[str] = None
    site_id: Optional[str] = None
    site_name: Optional[str] = None
    lang: Optional[str] = None


class Logo(BaseModel):
    """Channel logo model."""
    channel: str
    url: str
    width: float = 0
    format: Optional[str] = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("width", mode="before")
    @classmethod
    def _width_default(cls, value):
        return value if value is not None else 0

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_default(cls, value):
        return value if value is not None else []

    @property
    def is_svg(self) -> bool:
        return (self.format or "").lower() == "svg"


class GuideDetails(BaseModel):
    """Now/next information extracted from a guide entry."""
    nowPlaying: str = "Unknown"
    next: str = "Unknown"
    currentShowImage: Optional[str] = None
