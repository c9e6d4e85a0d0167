"""
brawlstars - Async client for the Brawl Stars API.

Authenticates with a bearer token and caches responses for as long as the
server's Cache-Control header allows.
"""

__version__ = "0.1.0"

from .api import (
    APIError,
    BrawlStarsClient,
    BrawlStarsError,
    MalformedResponseError,
    SyncBrawlStarsClient,
    TransportFailure,
)
from .config import CacheOptions, ClientOptions, Settings, get_settings

__all__ = [
    "BrawlStarsClient",
    "SyncBrawlStarsClient",
    "ClientOptions",
    "CacheOptions",
    "Settings",
    "get_settings",
    "BrawlStarsError",
    "APIError",
    "TransportFailure",
    "MalformedResponseError",
    "__version__",
]
