"""
Pytest configuration and fixtures
"""
import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from brandservice.services.backend_client import BackendClient
from brandservice.services.session import Session

BASE_URL = "http://backend.test"
API_KEY = "test-api-key"
DOMAIN = "brand.test"


class FakeBackend:
    """Scripted upstream for httpx.MockTransport. Records every request it sees."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}

    def route(
        self,
        method: str,
        path: str,
        status: int = 200,
        json_body: Any = None,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
        raises: Optional[type] = None
    ):
        def respond(request: httpx.Request) -> httpx.Response:
            if raises is not None:
                raise raises("simulated failure", request=request)
            if content is not None:
                return httpx.Response(status, content=content, headers=headers)
            if json_body is not None:
                return httpx.Response(status, json=json_body, headers=headers)
            return httpx.Response(status, headers=headers)

        self._routes[(method, path)] = respond

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self._routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(200, json={"ok": True})
        return handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def backend():
    """Fake brand backend"""
    return FakeBackend()


@pytest.fixture
def backend_client(backend):
    """BackendClient wired to the fake backend"""
    return BackendClient(
        base_url=BASE_URL,
        api_key=API_KEY,
        domain=DOMAIN,
        timeout_ms=15000,
        transport=httpx.MockTransport(backend)
    )


@pytest.fixture
def session():
    """Anonymous session"""
    return Session()


@pytest.fixture
def authed_session():
    """Session holding a token pair"""
    return Session(access_token="access-1", refresh_token="refresh-1")


def parse_raw_json(result: Dict[str, Any]) -> Dict[str, Any]:
    """Parse the RAW_JSON block of a rendered tool result"""
    text = result["content"][0]["text"]
    assert text.startswith("RAW_JSON_START\n")
    assert text.endswith("\nRAW_JSON_END")
    return json.loads(text[len("RAW_JSON_START\n"):-len("\nRAW_JSON_END")])


def joined_text(result: Dict[str, Any]) -> str:
    return "\n".join(block["text"] for block in result["content"])


@pytest.fixture
def raw_json():
    """Parser for the RAW_JSON block of a tool result"""
    return parse_raw_json


@pytest.fixture
def result_text():
    """All text blocks of a tool result joined by newlines"""
    return joined_text
