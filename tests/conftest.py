import importlib
import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List

import httpx  # type: ignore[import]
import pytest
from dotenv import load_dotenv  # type: ignore[import]


ROOT = Path(__file__).resolve().parent.parent
ROOT_STR = str(ROOT)

if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)


load_dotenv()

MODULE_NAME = "agentic_search_server"
TEST_API_URL = "https://search.example.test/v1/chat/completions"


@dataclass
class RecordingUpstream:
    """Mock upstream that records every request it receives."""

    handler: Callable[[httpx.Request], Any]
    requests: List[httpx.Request] = field(default_factory=list)

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.handler(request)
        if not isinstance(response, httpx.Response):
            response = await response
        return response

    @property
    def json_bodies(self) -> List[Any]:
        return [json.loads(request.content) for request in self.requests]

    def client_factory(self, **kwargs: Any) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self), **kwargs)


@pytest.fixture
def settings():
    from agentic_search_server_core import SearchSettings

    return SearchSettings(api_key="test-key", api_url=TEST_API_URL)


@pytest.fixture
def make_client(settings):
    """Build an ``AgenticSearchClient`` wired to a recording mock upstream."""

    from agentic_search_server_core import AgenticSearchClient

    def _make(handler, *, client_settings=None):
        upstream = RecordingUpstream(handler)
        client = AgenticSearchClient(client_settings or settings, client_factory=upstream.client_factory)
        return client, upstream

    return _make


@pytest.fixture
def server_module(monkeypatch):
    """Import the server entrypoint with a fake API key configured."""

    monkeypatch.setenv("AGENTIC_SEARCH_API_KEY", "fake-key")
    monkeypatch.setenv("AGENTIC_SEARCH_API_URL", "https://search.example.test")

    if MODULE_NAME in sys.modules:
        del sys.modules[MODULE_NAME]

    module = importlib.import_module(MODULE_NAME)

    yield module

    if MODULE_NAME in sys.modules:
        del sys.modules[MODULE_NAME]


@pytest.fixture(scope="module")
def live_module():
    load_dotenv()
    if os.getenv("ENABLE_INTEGRATION_TESTS", "false").lower() != "true":
        pytest.skip("Integration tests disabled. Set ENABLE_INTEGRATION_TESTS=true to enable.")

    if not os.getenv("AGENTIC_SEARCH_API_KEY"):
        pytest.skip("Missing Agentic Search configuration: AGENTIC_SEARCH_API_KEY")

    return importlib.import_module(MODULE_NAME)
