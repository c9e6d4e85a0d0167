"""
Brawl Stars API Client.

Async HTTP client for the Brawl Stars API. Every resource goes through
fetch_resource(), which consults the response cache, performs the request,
maps HTTP failures to typed errors and caches successful responses for as
long as the server's Cache-Control header allows.
"""

import asyncio
import logging
import re
import threading
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, ConfigDict, Field

from ..config import ClientOptions
from ..data.models import (
    Brawler,
    Club,
    ClubMember,
    EventSlot,
    Player,
    PlayerBattlelog,
    RankingsClub,
    RankingsPlayer,
)
from .cache import CacheLookup, TTLCache
from .endpoints import (
    BRAWLERS,
    EVENT_ROTATION,
    get_brawler_path,
    get_brawler_rankings_path,
    get_club_members_path,
    get_club_path,
    get_club_rankings_path,
    get_player_battlelog_path,
    get_player_path,
    get_player_rankings_path,
)

logger = logging.getLogger(__name__)

MAX_AGE_PREFIX = "max-age="
_ASCII_DIGITS = re.compile(r"[0-9]+")


class BrawlStarsError(Exception):
    """Base exception for Brawl Stars client errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class APIError(BrawlStarsError):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, message: str, status: int):
        self.status = status
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status}, message={self.message!r})"


class AuthenticationError(APIError):
    """Raised on 401/403 - bad token or IP not whitelisted."""

    pass


class NotFoundError(APIError):
    """Raised when resource not found."""

    pass


class RateLimitError(APIError):
    """Raised when rate limited by the API."""

    pass


class ServerError(APIError):
    """Raised on 5xx responses."""

    pass


class TransportFailure(BrawlStarsError):
    """Raised when the request never got a response (DNS, TLS, timeout...)."""

    pass


class MalformedResponseError(BrawlStarsError):
    """Raised when a successful response body is not valid JSON."""

    def __init__(self, message: str, status: int):
        self.status = status
        super().__init__(message)


def error_for_status(status: int, message: str) -> APIError:
    """Pick the APIError subclass matching an HTTP status."""
    if status in (401, 403):
        return AuthenticationError(message, status)
    if status == 404:
        return NotFoundError(message, status)
    if status == 429:
        return RateLimitError(message, status)
    if status >= 500:
        return ServerError(message, status)
    return APIError(message, status)


class PageQuery(BaseModel):
    """Cursor paging parameters accepted by list endpoints."""

    before: str | None = None
    after: str | None = None
    limit: int | None = Field(default=None, ge=1)

    model_config = ConfigDict(frozen=True)

    def to_params(self) -> dict[str, Any]:
        """Parameters with unset fields omitted."""
        return self.model_dump(exclude_none=True)


def parse_max_age(header: str | None) -> int:
    """
    Derive a TTL in seconds from a Cache-Control header value.

    Only a header that starts with "max-age=" counts; the ASCII digits right
    after it are the TTL. Anything else, including a missing header, yields 0.
    """
    if not header or not header.startswith(MAX_AGE_PREFIX):
        return 0

    match = _ASCII_DIGITS.match(header, len(MAX_AGE_PREFIX))
    return int(match.group()) if match else 0


def build_request_key(
    base_url: str,
    path: str,
    query: Mapping[str, Any] | PageQuery | None = None,
) -> str:
    """
    Build the request URL, which doubles as the cache key.

    None-valued parameters are dropped and the rest sorted by name, so the
    same logical query always produces the same key.
    """
    if isinstance(query, PageQuery):
        query = query.to_params()

    url = base_url + path
    params = sorted((k, v) for k, v in (query or {}).items() if v is not None)
    if params:
        url += "?" + urlencode(params)
    return url


class BrawlStarsClient:
    """
    Async client for the Brawl Stars API.

    Handles bearer auth, response caching and error mapping. No retries:
    failures propagate to the caller immediately.
    """

    def __init__(
        self,
        token: str,
        options: ClientOptions | None = None,
        *,
        cache: TTLCache | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the client.

        Args:
            token: API bearer token (may be rotated later via .token)
            options: Caching, base URL and transport options
            cache: Cache to use instead of a private one (ignored if caching
                is disabled in options)
            http_client: Pre-configured httpx client, left open on close()
        """
        self.token = token
        self.options = options or ClientOptions()
        self.base_url = self.options.base_url
        self.cache: TTLCache | None = None
        if self.options.cache:
            self.cache = cache if cache is not None else TTLCache(
                self.options.cache_options
            )

        self.ttl_parser: Callable[[str | None], int] = parse_max_age

        self._client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> "BrawlStarsClient":
        """Async context manager entry."""
        self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    @property
    def authorization(self) -> str:
        """Value for the Authorization header."""
        return f"Bearer {self.token}"

    def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.options.timeout),
                follow_redirects=True,
            )
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": self.authorization,
            "User-Agent": self.options.user_agent,
            "Accept": "application/json",
        }

    async def fetch_resource(
        self,
        path: str,
        query: Mapping[str, Any] | PageQuery | None = None,
    ) -> Any:
        """
        Fetch a resource, serving it from cache when possible.

        Args:
            path: Resource path relative to the base URL, already
                percent-encoded (e.g. "/players/%232Q0VVCJ2")
            query: Optional query parameters; None values are omitted

        Returns:
            Decoded JSON body, unmodified

        Raises:
            APIError: On a non-2xx response (a subclass per status family)
            TransportFailure: When no response was received
            MalformedResponseError: When the body is not valid JSON
        """
        url = build_request_key(self.base_url, path, query)

        if self.cache is not None:
            state, cached = self.cache.lookup(url)
            if state is CacheLookup.PRESENT:
                logger.debug(f"Cache hit: {url}")
                return cached

        client = self._ensure_client()
        logger.debug(f"GET {url}")

        try:
            response = await client.get(url, headers=self._headers())
        except httpx.TransportError as e:
            logger.warning(f"Request error for {url}: {e}")
            raise TransportFailure(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            logger.warning(f"HTTP {response.status_code} for {url}")
            raise error_for_status(response.status_code, response.reason_phrase)

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Invalid JSON in response from {url}: {e}",
                status=response.status_code,
            ) from e

        ttl = self.ttl_parser(response.headers.get("cache-control"))
        if ttl > 0 and self.cache is not None:
            self.cache.set(url, data, ttl)

        return data

    # =========================================================================
    # Public API Methods
    # =========================================================================

    async def get_player(self, tag: str) -> Player:
        """
        Get a player's profile.

        The API names one field "3vs3Victories", which is not a valid
        identifier; its value is also exposed as "x3vs3Victories".
        """
        data = await self.fetch_resource(get_player_path(tag))
        player = dict(data)
        if "3vs3Victories" in player:
            player["x3vs3Victories"] = player["3vs3Victories"]
        return player  # type: ignore

    async def get_player_battlelog(self, tag: str) -> list[PlayerBattlelog]:
        """Get a player's most recent battles."""
        return await self.fetch_resource(get_player_battlelog_path(tag))

    async def get_club(self, tag: str) -> Club:
        """Get club information."""
        return await self.fetch_resource(get_club_path(tag))

    async def get_club_members(
        self,
        tag: str,
        *,
        before: str | None = None,
        after: str | None = None,
        limit: int | None = None,
    ) -> list[ClubMember]:
        """Get a club's members."""
        page = PageQuery(before=before, after=after, limit=limit)
        return await self.fetch_resource(get_club_members_path(tag), page)

    async def get_player_rankings(
        self,
        country: str,
        *,
        before: str | None = None,
        after: str | None = None,
        limit: int | None = None,
    ) -> list[RankingsPlayer]:
        """
        Get player rankings.

        Args:
            country: Two letter country code, or "global"
            before/after: Opaque paging cursors from a previous response
            limit: Maximum number of items
        """
        page = PageQuery(before=before, after=after, limit=limit)
        return await self.fetch_resource(get_player_rankings_path(country), page)

    async def get_club_rankings(
        self,
        country: str,
        *,
        before: str | None = None,
        after: str | None = None,
        limit: int | None = None,
    ) -> list[RankingsClub]:
        """Get club rankings for a country (or "global")."""
        page = PageQuery(before=before, after=after, limit=limit)
        return await self.fetch_resource(get_club_rankings_path(country), page)

    async def get_brawler_rankings(
        self,
        country: str,
        brawler_id: int | str,
        *,
        before: str | None = None,
        after: str | None = None,
        limit: int | None = None,
    ) -> list[RankingsPlayer]:
        """Get player rankings for one brawler."""
        page = PageQuery(before=before, after=after, limit=limit)
        path = get_brawler_rankings_path(country, brawler_id)
        return await self.fetch_resource(path, page)

    async def get_brawlers(
        self,
        *,
        before: str | None = None,
        after: str | None = None,
        limit: int | None = None,
    ) -> list[Brawler]:
        """Get every brawler in the game."""
        page = PageQuery(before=before, after=after, limit=limit)
        return await self.fetch_resource(BRAWLERS, page)

    async def get_brawler(self, brawler_id: int | str) -> Brawler:
        """Get a single brawler."""
        return await self.fetch_resource(get_brawler_path(brawler_id))

    async def get_event_rotation(self) -> list[EventSlot]:
        """Get the currently active event slots."""
        return await self.fetch_resource(EVENT_ROTATION)


# =============================================================================
# Synchronous Wrapper
# =============================================================================


class SyncBrawlStarsClient:
    """
    Synchronous wrapper for BrawlStarsClient.

    Runs the async client on a private event loop. Useful for the CLI and
    simple scripts; do not call it from inside a running event loop. Calls
    from several threads are serialized, one request at a time.
    """

    def __init__(self, token: str, options: ClientOptions | None = None, **kwargs: Any):
        """Initialize with same args as BrawlStarsClient."""
        self._async_client = BrawlStarsClient(token, options, **kwargs)
        self._loop: asyncio.AbstractEventLoop | None = None
        self._loop_lock = threading.RLock()

    def __enter__(self) -> "SyncBrawlStarsClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def token(self) -> str:
        return self._async_client.token

    @token.setter
    def token(self, value: str) -> None:
        self._async_client.token = value

    @property
    def cache(self) -> TTLCache | None:
        return self._async_client.cache

    def _run(self, coro):
        """Run a coroutine synchronously."""
        with self._loop_lock:
            if self._loop is None:
                self._loop = asyncio.new_event_loop()
            return self._loop.run_until_complete(coro)

    def close(self) -> None:
        """Close the client."""
        with self._loop_lock:
            if self._loop is None:
                return
            self._run(self._async_client.close())
            self._loop.close()
            self._loop = None

    def fetch_resource(
        self,
        path: str,
        query: Mapping[str, Any] | PageQuery | None = None,
    ) -> Any:
        """Fetch a resource (see BrawlStarsClient.fetch_resource)."""
        return self._run(self._async_client.fetch_resource(path, query))

    def get_player(self, tag: str) -> Player:
        """Get a player's profile."""
        return self._run(self._async_client.get_player(tag))

    def get_player_battlelog(self, tag: str) -> list[PlayerBattlelog]:
        """Get a player's battle log."""
        return self._run(self._async_client.get_player_battlelog(tag))

    def get_club(self, tag: str) -> Club:
        """Get club information."""
        return self._run(self._async_client.get_club(tag))

    def get_club_members(self, tag: str, **page: Any) -> list[ClubMember]:
        """Get a club's members."""
        return self._run(self._async_client.get_club_members(tag, **page))

    def get_player_rankings(self, country: str, **page: Any) -> list[RankingsPlayer]:
        """Get player rankings."""
        return self._run(self._async_client.get_player_rankings(country, **page))

    def get_club_rankings(self, country: str, **page: Any) -> list[RankingsClub]:
        """Get club rankings."""
        return self._run(self._async_client.get_club_rankings(country, **page))

    def get_brawler_rankings(
        self, country: str, brawler_id: int | str, **page: Any
    ) -> list[RankingsPlayer]:
        """Get brawler rankings."""
        return self._run(
            self._async_client.get_brawler_rankings(country, brawler_id, **page)
        )

    def get_brawlers(self, **page: Any) -> list[Brawler]:
        """Get every brawler."""
        return self._run(self._async_client.get_brawlers(**page))

    def get_brawler(self, brawler_id: int | str) -> Brawler:
        """Get a single brawler."""
        return self._run(self._async_client.get_brawler(brawler_id))

    def get_event_rotation(self) -> list[EventSlot]:
        """Get the event rotation."""
        return self._run(self._async_client.get_event_rotation())
