"""Pytest configuration and fixtures for the research tools tests."""

from typing import Any, Callable

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from config import Config


@pytest.fixture
def config(tmp_path):
    """Configuration with a test API key and temp directories."""
    return Config(
        valyu_api_key="test-key",
        log_dir=tmp_path / "log",
        reports_dir=tmp_path / "reports",
    )


class FakeValyuAPI:
    """In-process stand-in for the Valyu answer and deepsearch endpoints.

    Records every request. Responses come from `respond`, a callable taking
    (endpoint, json_body) and returning (status, body); a dict body is sent
    as JSON, a str body as text.
    """

    def __init__(self):
        self.requests: list[dict[str, Any]] = []
        self.respond: Callable[[str, dict], tuple[int, Any]] = lambda endpoint, body: (
            200,
            {"success": True, "contents": "Some real content.", "search_results": []},
        )
        self.server: TestServer | None = None

    @property
    def base_url(self) -> str:
        return str(self.server.make_url("/v1"))

    async def _handle(self, request: web.Request) -> web.Response:
        endpoint = request.match_info["endpoint"]
        body = await request.json()
        self.requests.append({
            "endpoint": endpoint,
            "headers": dict(request.headers),
            "body": body,
        })
        status, payload = self.respond(endpoint, body)
        if isinstance(payload, str):
            return web.Response(status=status, text=payload)
        return web.json_response(payload, status=status)

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/v1/{endpoint}", self._handle)
        return app


@pytest_asyncio.fixture
async def valyu_api():
    """Running fake Valyu API server."""
    api = FakeValyuAPI()
    api.server = TestServer(api.app())
    await api.server.start_server()
    try:
        yield api
    finally:
        await api.server.close()


@pytest.fixture
def api_config(config, valyu_api):
    """Configuration pointing at the fake Valyu API server."""
    config.api_base_url = valyu_api.base_url
    return config
