"""Shared fixtures for the Brawl Stars client tests."""

from collections.abc import Callable

import httpx
import pytest

from brawlstars.api import BrawlStarsClient, TTLCache
from brawlstars.config import CacheOptions, ClientOptions, get_settings

BASE_URL = "https://api.brawlstars.com/v1"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


def json_response(
    data, status_code: int = 200, cache_control: str | None = "max-age=60"
) -> httpx.Response:
    headers = {"cache-control": cache_control} if cache_control else {}
    return httpx.Response(status_code, json=data, headers=headers)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def make_client(clock):
    """Build a client whose HTTP traffic is served by `handler`."""

    def _make(
        handler: Callable[[httpx.Request], httpx.Response],
        *,
        token: str = "test-token",
        options: ClientOptions | None = None,
    ) -> tuple[BrawlStarsClient, RecordingTransport]:
        options = options or ClientOptions(
            cache_options=CacheOptions(check_period=0)
        )
        transport = RecordingTransport(handler)
        cache = TTLCache(options.cache_options, clock=clock)
        client = BrawlStarsClient(
            token,
            options,
            cache=cache,
            http_client=httpx.AsyncClient(transport=transport),
        )
        return client, transport

    return _make


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Keep environment-derived settings from leaking between tests."""
    for name in ("BRAWLSTARS_TOKEN", "BRAWLSTARS_BASE_URL", "CACHE_ENABLED", "CACHE_MAX_TTL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
