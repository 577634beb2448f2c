"""Shared fixtures for honeycomb_flows tests."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from typing import Any, Union

import httpx
import pytest
from litestar.testing import TestClient

from honeycomb_flows.app import create_app
from honeycomb_flows.clients.honeycomb_client import HoneycombClient
from honeycomb_flows.config import Settings
from honeycomb_flows.plugins.contracts.key_value import KeyValuePlugin

Reply = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]

API_BASE = "https://api.honeycomb.test"


class FakeHoneycomb:
    """Scripted stand-in for the Honeycomb API behind an httpx.MockTransport.

    Each route holds a queue of replies; the last reply repeats once the
    queue is drained. Unscripted routes answer 404.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[Reply]] = {}

    def add(self, method: str, path: str, *replies: Reply) -> None:
        """Script the replies for one route."""
        self._routes[(method, path)] = list(replies)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        """Requests received on one route."""
        return [
            r for r in self.requests
            if r.method == method and r.url.path == path
        ]

    def json_body(self, request: httpx.Request) -> Any:
        """Decode a recorded request's JSON body."""
        return json.loads(request.content)

    @property
    def transport(self) -> httpx.MockTransport:
        """Transport to hand to HoneycombClient or create_app()."""
        return httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        replies = self._routes.get((request.method, request.url.path))
        if not replies:
            return httpx.Response(404, text="not found")
        reply = replies.pop(0) if len(replies) > 1 else replies[0]
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(request)
        # Fresh copy per request; a Response instance is bound to one request.
        return httpx.Response(
            reply.status_code, headers=reply.headers, content=reply.content,
        )


class InMemoryKeyValuePlugin(KeyValuePlugin):
    """Dict-backed key-value store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

    async def delete(self, keys: list[str]) -> None:
        for key in keys:
            self.data.pop(key, None)


@pytest.fixture()
def fake_honeycomb() -> FakeHoneycomb:
    """Empty fake upstream; tests script the routes they need."""
    return FakeHoneycomb()


@pytest.fixture()
def honeycomb_client(fake_honeycomb: FakeHoneycomb) -> HoneycombClient:
    """A HoneycombClient wired to the fake upstream."""
    return HoneycombClient(
        api_key="test-api-key",
        base_url=API_BASE,
        transport=fake_honeycomb.transport,
    )


@pytest.fixture()
def kv() -> InMemoryKeyValuePlugin:
    """Empty in-memory key-value store."""
    return InMemoryKeyValuePlugin()


@pytest.fixture()
def settings() -> Settings:
    """Test settings with in-memory SQLite and fast query polling."""
    return Settings(
        api_key="test-api-key",
        api_base_url=API_BASE,
        public_url="https://flows.test",
        database_url="sqlite+aiosqlite://",
        query_max_duration_seconds=0.2,
        query_poll_interval_seconds=0.01,
        webhook_name_prefix="flows-test",
    )


@pytest.fixture()
def client(
    settings: Settings, fake_honeycomb: FakeHoneycomb,
) -> Iterator[TestClient]:  # type: ignore[type-arg]
    """Litestar test client with lifespan managed and upstream faked."""
    app = create_app(settings, transport=fake_honeycomb.transport)
    with TestClient(app=app) as test_client:
        yield test_client


def script_install(fake_honeycomb: FakeHoneycomb, recipient_id: str = "rcp-1") -> None:
    """Script the upstream calls of a successful first install."""
    fake_honeycomb.add("GET", "/1/auth", httpx.Response(200, json={"team": {"slug": "t"}}))
    fake_honeycomb.add("POST", "/1/recipients", httpx.Response(201, json={"id": recipient_id}))


def issued_secret(fake_honeycomb: FakeHoneycomb) -> str:
    """The webhook secret sent upstream by the last recipient creation."""
    request = fake_honeycomb.calls("POST", "/1/recipients")[-1]
    secret: str = fake_honeycomb.json_body(request)["details"]["webhook_secret"]
    return secret
