"""
Shared fixtures: a stub vendor behind httpx.MockTransport.
"""

import json
from typing import Callable, List, Optional

import httpx
import pytest

from provider_gateway.core.config import GatewayConfig
from provider_gateway.models.request import ChatCompletionRequest

API_KEY = "sk-test-0123456789abcdef"


class StubVendor:
    """Records outbound requests and answers them with ``handler``."""

    def __init__(self, handler: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.requests: List[httpx.Request] = []
        self.handler = handler or (lambda request: httpx.Response(200, json={}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport)

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


def make_request(**overrides) -> ChatCompletionRequest:
    payload = {
        "messages": [{"role": "user", "content": "hi"}],
        "apiKey": API_KEY,
    }
    payload.update(overrides)
    return ChatCompletionRequest.from_payload(payload)


@pytest.fixture
def vendor() -> StubVendor:
    return StubVendor()


@pytest.fixture
def config() -> GatewayConfig:
    return GatewayConfig()
