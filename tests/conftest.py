"""Pytest fixtures for bundleresolver tests."""

import logging
from typing import Callable

import httpx
import pytest

from bundleresolver.config import Settings
from bundleresolver.resolvers import create_http_client

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def settings() -> Settings:
    """Settings with the default endpoints and a single fallback country."""
    return Settings(
        _env_file=None,
        http_timeout=10.0,
        ios_fallback_countries=["jp"],
        itunes_lookup_url="https://itunes.apple.com/lookup",
        play_base_url="https://play.google.com",
    )


@pytest.fixture
def make_client(settings):
    """Build an httpx.Client whose requests are answered by `handler`.

    Every request is recorded on the returned client's `requests` list.
    """
    clients: list[httpx.Client] = []

    def _make(handler: Handler) -> httpx.Client:
        requests: list[httpx.Request] = []

        def _recording(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client = create_http_client(settings, transport=httpx.MockTransport(_recording))
        client.requests = requests
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def no_network_client(make_client):
    """Client that fails the test if any request is made."""

    def _handler(request: httpx.Request) -> httpx.Response:
        pytest.fail(f"unexpected request to {request.url}")

    return make_client(_handler)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo setup_logging() calls made by CLI tests."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
