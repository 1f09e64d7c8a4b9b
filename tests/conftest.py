from contextlib import asynccontextmanager
from typing import Any, Callable, Dict, List, Tuple, Union

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from reelreveal.ai.generators import build_generator
from reelreveal.clients.tmdb import TMDBClient
from reelreveal.config import Settings
from reelreveal.dependencies import get_film_catalog, get_settings, get_text_generator
from reelreveal.main import app

TMDB_BASE = "https://tmdb.test/3"
OPENAI_BASE = "https://openai.test/v1"
ANTHROPIC_BASE = "https://anthropic.test/v1"

Route = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class FakeUpstream:
    """
    Records outbound requests and answers them from a (method, path) table.
    """
    def __init__(self) -> None:
        self.calls: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Route] = {}

    def add(self, method: str, path: str, route: Route) -> None:
        self.routes[(method, path)] = route

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"status_message": "not mocked"})
        if callable(route):
            return route(request)
        return route

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def make_settings(**overrides: Any) -> Settings:
    values: Dict[str, Any] = {
        "tmdb_api_key": "tmdb-test-key",
        "movies_api_base": TMDB_BASE,
        "generation_provider": "openai",
        "openai_api_key": "sk-test",
        "openai_api_base": OPENAI_BASE,
        "anthropic_api_key": "ak-test",
        "anthropic_api_base": ANTHROPIC_BASE,
        "static_dir": "public",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def static_dir(tmp_path):
    root = tmp_path / "public"
    (root / "assets").mkdir(parents=True)
    (root / "index.html").write_text("<html><body>ReelReveal</body></html>")
    (root / "assets" / "app.js").write_text("console.log('reelreveal');")
    return root


@pytest.fixture
def settings(static_dir) -> Settings:
    return make_settings(static_dir=str(static_dir))


@pytest.fixture
def make_client(upstream):
    @asynccontextmanager
    async def _make(cfg: Settings):
        app.dependency_overrides[get_settings] = lambda: cfg
        app.dependency_overrides[get_film_catalog] = lambda: TMDBClient(cfg, transport=upstream.transport)
        app.dependency_overrides[get_text_generator] = lambda: build_generator(cfg, transport=upstream.transport)
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
        finally:
            app.dependency_overrides = {}
    return _make


@pytest_asyncio.fixture
async def client(make_client, settings):
    async with make_client(settings) as ac:
        yield ac


@pytest.fixture
def settings_factory():
    return make_settings
