"""
Exceptions raised by the IPTV addon.
"""


class IPTVAddonError(Exception):
    """Base class for addon errors."""


class UpstreamFetchError(IPTVAddonError):
    """An iptv-org endpoint could not be fetched or returned unusable data."""

    def __init__(self, endpoint: str, message: str):
        self.endpoint = endpoint
        super().__init__(f"Failed to fetch {endpoint}: {message}")


class SettingsFileError(IPTVAddonError):
    """The persisted settings file is unreadable or malformed."""
