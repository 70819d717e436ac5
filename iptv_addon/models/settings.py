"""
User selection of countries and genres.
"""
from pydantic import BaseModel, Field


class UserSettings(BaseModel):
    """Allow-list chosen on the configuration page.

    An empty ``countries`` list means every country; an empty ``genres``
    list disables genre filtering.
    """
    countries: list[str] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)
