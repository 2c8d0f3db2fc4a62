"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from chainhook.actions import RecordingObserver
from chainhook.config import Settings
from chainhook.http import HttpClientFactory
from chainhook.models import ActionInfo, Event

# Add tests directory to path so helpers can be imported
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))

Handler = Callable[[httpx.Request], httpx.Response]


class MockEndpoint:
    """Webhook endpoint double backed by httpx.MockTransport.

    Records every request it receives and answers with the configured
    handler (200 "OK" by default).
    """

    def __init__(self, handler: Handler | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.clients: list[httpx.Client] = []
        self._handler = handler or (lambda request: httpx.Response(200, text="OK"))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def respond_with(self, handler: Handler) -> None:
        self._handler = handler

    def factory(self, mode: object = None) -> httpx.Client:
        """Client factory handing out clients wired to this endpoint."""
        client = HttpClientFactory(transport=httpx.MockTransport(self._handle)).create()
        self.clients.append(client)
        return client


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the environment and .env files."""
    return Settings(_env_file=None, env="test", header_prefix="X-Personium")


@pytest.fixture
def endpoint() -> MockEndpoint:
    return MockEndpoint()


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def action_info() -> ActionInfo:
    return ActionInfo(
        service="https://hooks.example.com/in",
        action="relay",
        event_id="evt_123",
        rule_chain="rule_a",
    )


@pytest.fixture
def sample_event() -> Event:
    return Event(
        external=True,
        schema_url="https://app.example.com/",
        subject="https://cell.example.com/#alice",
        type="odata.create",
        object="personium-localcell:/box/odata/Set",
        info="201",
        request_key="req_abc",
        event_id="evt_orig",
        rule_chain="rule_orig",
        via="https://origin.example.com/",
        roles="https://cell.example.com/__role/__/admin",
    )


@pytest.fixture
def minimal_event() -> Event:
    return Event(type="message", object="box/msg", info="sent")
