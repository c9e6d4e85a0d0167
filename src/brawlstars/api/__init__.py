"""
Brawl Stars API Integration Module.

Provides the cached async client, its synchronous wrapper and the errors
they raise.
"""

from .cache import CacheEntry, CacheLookup, TTLCache
from .client import (
    APIError,
    AuthenticationError,
    BrawlStarsClient,
    BrawlStarsError,
    MalformedResponseError,
    NotFoundError,
    PageQuery,
    RateLimitError,
    ServerError,
    SyncBrawlStarsClient,
    TransportFailure,
    build_request_key,
    parse_max_age,
)
from .endpoints import BRAWLSTARS_BASE_URL, clean_tag

__all__ = [
    # Client
    "BrawlStarsClient",
    "SyncBrawlStarsClient",
    "PageQuery",
    "build_request_key",
    "parse_max_age",
    "clean_tag",
    "BRAWLSTARS_BASE_URL",
    # Cache
    "CacheEntry",
    "CacheLookup",
    "TTLCache",
    # Errors
    "BrawlStarsError",
    "APIError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "TransportFailure",
    "MalformedResponseError",
]
